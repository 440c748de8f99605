"""Query classifier: assigns a SIMPLE / TECHNICAL / MIXED archetype."""

from __future__ import annotations

from dataclasses import dataclass

from catalog_resolver.core.types import Archetype
from catalog_resolver.matching.patterns import (
    ARTICLE_HINT,
    COMPILED_DIMENSION_PATTERNS,
    COMPILED_KNOWN_BRAND,
    COMPILED_QUOTED,
    NON_RUSSIAN_FILTER,
    RUSSIAN_ONLY,
    SPECIAL_CHARS,
    UPPERCASE_RUN,
)

SIMPLE_MAX_WORDS = 3


@dataclass(frozen=True)
class QueryFeatures:
    """Cheap boolean features computed over the original query text."""

    word_count: int
    has_articles: bool
    has_dimensions: bool
    has_brands: bool
    has_special_chars: bool
    russian_only: bool


def analyze(raw_text: str | None) -> QueryFeatures:
    text = raw_text or ""
    stripped = NON_RUSSIAN_FILTER.sub("", text)
    return QueryFeatures(
        word_count=len(text.split()),
        has_articles=bool(ARTICLE_HINT.search(text)),
        has_dimensions=any(p.search(text) for p in COMPILED_DIMENSION_PATTERNS),
        has_brands=bool(
            UPPERCASE_RUN.search(text)
            or COMPILED_QUOTED.search(text)
            or COMPILED_KNOWN_BRAND.search(text)
        ),
        has_special_chars=bool(SPECIAL_CHARS.search(text)),
        russian_only=bool(RUSSIAN_ONLY.fullmatch(stripped)),
    )


def classify(raw_text: str | None) -> Archetype:
    """Pick the archetype for a query.

    Precedence: SIMPLE (short, Russian-only, no article or brand), then
    TECHNICAL (any article, brand or dimension), else MIXED.
    """
    features = analyze(raw_text)
    if (
        features.word_count <= SIMPLE_MAX_WORDS
        and not features.has_articles
        and not features.has_brands
        and features.russian_only
    ):
        return Archetype.SIMPLE
    if features.has_articles or features.has_brands or features.has_dimensions:
        return Archetype.TECHNICAL
    return Archetype.MIXED
