"""Candidate generators: independent strategies that query the catalog.

Each generator turns query blocks into scored ``Candidate`` rows. They
share nothing but the read-only store, so the engine may run them
concurrently. Store errors propagate; the engine decides whether a
failure degrades the result or fails the call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalog_resolver.core.protocols import CatalogStore
from catalog_resolver.core.types import Archetype, Blocks, Candidate, CatalogEntry

if TYPE_CHECKING:
    from catalog_resolver.dictionary.synonyms import SynonymDictionary

logger = logging.getLogger(__name__)

ARTICLE_BONUS = 1.0
DIMENSION_BONUS = 0.5
BRAND_BONUS = 0.3


class CandidateGenerator:
    """Base class: one strategy, one catalog table, a per-lookup cap."""

    id: str = ""
    default_weight: float = 1.0

    def __init__(self, store: CatalogStore, table: str, limit: int) -> None:
        self._store = store
        self._table = table
        self._limit = limit

    def has_lookups(self, blocks: Blocks) -> bool:
        """Whether ``generate`` would query the store for these blocks."""
        raise NotImplementedError

    async def generate(self, blocks: Blocks, weight: float | None = None) -> list[Candidate]:
        raise NotImplementedError

    async def _lookup(self, text: str, limit: int | None = None) -> list[CatalogEntry]:
        rows = await self._store.search_substring(self._table, text, limit or self._limit)
        return [CatalogEntry.from_row(row) for row in rows]

    def _weight(self, weight: float | None) -> float:
        return self.default_weight if weight is None else weight


class ExactGenerator(CandidateGenerator):
    """Whole material phrase as a single substring lookup."""

    id = "exact"
    default_weight = 3.0

    def has_lookups(self, blocks: Blocks) -> bool:
        return bool(blocks.material)

    async def generate(self, blocks: Blocks, weight: float | None = None) -> list[Candidate]:
        if not blocks.material:
            return []
        phrase = " ".join(blocks.material)
        score = self._weight(weight)
        return [
            Candidate(
                entry_id=entry.id,
                display_name=entry.display_name,
                strategy="exact",
                base_score=score,
                reasons=[f"exact material match: {phrase}"],
            )
            for entry in await self._lookup(phrase)
        ]


class BlockGenerator(CandidateGenerator):
    """One lookup per article, dimension and brand token."""

    id = "block"
    default_weight = 2.5

    def has_lookups(self, blocks: Blocks) -> bool:
        return bool(blocks.article or blocks.dimension or blocks.brand)

    async def generate(self, blocks: Blocks, weight: float | None = None) -> list[Candidate]:
        base = self._weight(weight)
        plan = (
            ("block_article", "article", blocks.article, base + ARTICLE_BONUS),
            ("block_dimension", "dimension", blocks.dimension, base + DIMENSION_BONUS),
            ("block_brand", "brand", blocks.brand, base + BRAND_BONUS),
        )
        candidates: list[Candidate] = []
        for strategy, label, block_tokens, score in plan:
            for token in block_tokens:
                for entry in await self._lookup(token):
                    candidates.append(Candidate(
                        entry_id=entry.id,
                        display_name=entry.display_name,
                        strategy=strategy,
                        base_score=score,
                        reasons=[f"{label} match: {token}"],
                    ))
        return candidates


class SynonymGenerator(CandidateGenerator):
    """Expand material words through the synonym dictionary."""

    id = "synonym"
    default_weight = 1.5

    def __init__(
        self,
        store: CatalogStore,
        table: str,
        limit: int,
        dictionary: SynonymDictionary,
    ) -> None:
        super().__init__(store, table, limit)
        self._dictionary = dictionary

    def has_lookups(self, blocks: Blocks) -> bool:
        return any(self._dictionary.aliases_for(word) for word in blocks.material)

    async def generate(self, blocks: Blocks, weight: float | None = None) -> list[Candidate]:
        score = self._weight(weight)
        candidates: list[Candidate] = []
        for word in blocks.material:
            for alias in self._dictionary.aliases_for(word):
                for entry in await self._lookup(alias):
                    candidates.append(Candidate(
                        entry_id=entry.id,
                        display_name=entry.display_name,
                        strategy="semantic",
                        base_score=score,
                        reasons=[f"synonym match: {word} → {alias}"],
                    ))
        return candidates


class FuzzyGenerator(CandidateGenerator):
    """Last-resort broad net: each long material word as a substring.

    Not an edit-distance search; true edit distance only exists in the
    unit matcher.
    """

    id = "fuzzy"
    default_weight = 1.0

    def __init__(
        self,
        store: CatalogStore,
        table: str,
        limit: int,
        min_word_length: int = 4,
    ) -> None:
        super().__init__(store, table, limit)
        self._min_word_length = min_word_length

    def has_lookups(self, blocks: Blocks) -> bool:
        return any(len(word) >= self._min_word_length for word in blocks.material)

    async def generate(self, blocks: Blocks, weight: float | None = None) -> list[Candidate]:
        score = self._weight(weight)
        candidates: list[Candidate] = []
        for word in blocks.material:
            if len(word) < self._min_word_length:
                continue
            for entry in await self._lookup(word):
                candidates.append(Candidate(
                    entry_id=entry.id,
                    display_name=entry.display_name,
                    strategy="fuzzy",
                    base_score=score,
                    reasons=[f"partial word match: {word}"],
                ))
        return candidates


# Archetype → ordered (generator id, weight). Order fixes merge-discovery
# order, which is the only tie-break between equal final scores.
GENERATOR_PLAN: dict[Archetype, tuple[tuple[str, float], ...]] = {
    Archetype.SIMPLE: (("exact", 3.0), ("synonym", 2.0), ("fuzzy", 1.5)),
    Archetype.TECHNICAL: (("block", 3.0), ("exact", 2.0), ("synonym", 1.5)),
    Archetype.MIXED: (("exact", 2.5), ("block", 2.5), ("synonym", 1.5), ("fuzzy", 1.0)),
}


def plan_for(archetype: Archetype) -> tuple[tuple[str, float], ...]:
    """Ordered generator ids and weights for an archetype."""
    return GENERATOR_PLAN[archetype]
