"""Tokenizer/blocker: split a query into typed token blocks."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from catalog_resolver.core.types import Blocks
from catalog_resolver.matching.normalizer import normalize
from catalog_resolver.matching.patterns import (
    COMPILED_ARTICLE_PATTERNS,
    COMPILED_DIMENSION_PATTERNS,
    COMPILED_KNOWN_BRAND,
    COMPILED_QUOTED,
)

logger = logging.getLogger(__name__)

MIN_MATERIAL_TOKEN_LENGTH = 2


def _extract(
    text: str,
    patterns: list[re.Pattern[str]],
    transform: Callable[[re.Match[str]], str],
    out: list[str],
) -> str:
    """Pull every match of ``patterns`` out of ``text``.

    Matches are appended to ``out`` (deduplicated, first wins) and blanked
    in the returned residual so later patterns never see them.
    """

    def _take(m: re.Match[str]) -> str:
        token = transform(m).strip()
        if token and token not in out:
            out.append(token)
        return " "

    for pattern in patterns:
        text = pattern.sub(_take, text)
    return text


def tokenize(raw_text: str | None, min_token_length: int = MIN_MATERIAL_TOKEN_LENGTH) -> Blocks:
    """Decompose a raw query into dimension, article, brand and material blocks.

    Extraction runs in a fixed order (dimension, article, brand) on the
    original text; whatever survives is normalized into the material block.
    """
    blocks = Blocks()
    if not raw_text or not raw_text.strip():
        return blocks

    residual = _extract(
        raw_text, COMPILED_DIMENSION_PATTERNS, lambda m: m.group(0).lower(), blocks.dimension
    )
    residual = _extract(
        residual, COMPILED_ARTICLE_PATTERNS, lambda m: m.group(0).upper(), blocks.article
    )
    residual = _extract(
        residual,
        [COMPILED_QUOTED, COMPILED_KNOWN_BRAND],
        lambda m: m.group(0).replace('"', "").upper(),
        blocks.brand,
    )

    extracted = {t.lower() for t in blocks.dimension + blocks.article + blocks.brand}
    for word in normalize(residual).split():
        if len(word) < min_token_length or word in extracted or word in blocks.material:
            continue
        blocks.material.append(word)

    logger.debug("Tokenized %r into %s", raw_text, blocks.as_dict())
    return blocks
