"""Unit-of-measure matcher: exact → synonym → fuzzy resolution.

Loads all units and their synonym rows once, then resolves free-text
unit strings from imports ("м2", "кв.м", "шт.") to a canonical unit.
The fuzzy tier first tries notation/morphology variations, then falls
back to a guarded Levenshtein distance.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from rapidfuzz.distance import Levenshtein

from catalog_resolver.core.protocols import CatalogStore
from catalog_resolver.core.types import Unit, UnitConfidence, UnitMatch
from catalog_resolver.dictionary.base import DEFAULT_PAGE_SIZE, LazyDictionary, load_table, normalize_key

logger = logging.getLogger(__name__)

# Substring → replacements; only the first occurrence is replaced.
UNIT_VARIATIONS: dict[str, list[str]] = {
    "²": ["2", "^2", "кв"],
    "³": ["3", "^3", "куб"],
    "м2": ["м²", "кв.м", "квм"],
    "м3": ["м³", "куб.м", "кубм"],
    "кв.м": ["м²", "м2", "квм"],
    "куб.м": ["м³", "м3", "кубм"],
    "кг": ["килограмм", "килограммы"],
    "т": ["тонн", "тонна", "тонны"],
    "шт": ["штук", "штука", "штуки", "шт."],
    "м": ["метр", "метры", "метров"],
    "см": ["сантиметр", "сантиметры"],
    "мм": ["миллиметр", "миллиметры"],
}

MAX_LENGTH_DIFFERENCE = 2
DISTANCE_RATIO = 0.2


def generate_variations(text: str) -> list[str]:
    """Spelling and notation variants of a unit string, original first."""
    variations = [text]
    for key, replacements in UNIT_VARIATIONS.items():
        if key in text:
            for value in replacements:
                variant = text.replace(key, value, 1)
                if variant not in variations:
                    variations.append(variant)
    return variations


def is_close_match(a: str, b: str) -> bool:
    """Small-typo check for short unit strings.

    Both guards must hold: lengths within two characters, and edit
    distance within 20% of the shorter string (at least 1).
    """
    if abs(len(a) - len(b)) > MAX_LENGTH_DIFFERENCE:
        return False
    max_distance = max(1, int(min(len(a), len(b)) * DISTANCE_RATIO))
    return Levenshtein.distance(a, b) <= max_distance


def summarize(matches: list[UnitMatch]) -> dict[str, int]:
    """Count matches per confidence tier, every tier present."""
    counts = Counter(m.confidence.value for m in matches)
    return {tier.value: counts.get(tier.value, 0) for tier in UnitConfidence}


class UnitMatcher(LazyDictionary):
    """Resolve unit strings against the ``units`` / ``unit_synonyms`` tables."""

    name = "unit dictionary"

    def __init__(
        self,
        store: CatalogStore,
        units_table: str = "units",
        synonyms_table: str = "unit_synonyms",
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        super().__init__()
        self._store = store
        self._units_table = units_table
        self._synonyms_table = synonyms_table
        self._page_size = page_size
        self._units: list[Unit] = []
        self._synonyms: dict[str, Unit] = {}

    async def _load(self) -> None:
        unit_rows = await load_table(self._store, self._units_table, self._page_size)
        synonym_rows = await load_table(self._store, self._synonyms_table, self._page_size)

        units = [Unit.from_row(row) for row in unit_rows]
        by_id = {unit.id: unit for unit in units}
        synonyms: dict[str, Unit] = {}
        for row in synonym_rows:
            unit = by_id.get(row.get("unit_id"))
            synonym = row.get("synonym")
            if unit is not None and synonym:
                synonyms[normalize_key(synonym)] = unit

        self._units, self._synonyms = units, synonyms
        logger.info("Unit matcher initialized: %d units, %d synonyms", len(units), len(synonym_rows))

    def _clear(self) -> None:
        self._units = []
        self._synonyms = {}

    async def find_unit(self, text: str) -> UnitMatch:
        """Resolve one unit string. Unknown or empty input yields tier ``none``."""
        await self.initialize()

        if not text or not isinstance(text, str):
            return UnitMatch(unit=None, confidence=UnitConfidence.NONE, original_text=text or "")

        key = normalize_key(text)
        if not key:
            return UnitMatch(unit=None, confidence=UnitConfidence.NONE, original_text=text)

        for unit in self._units:
            if normalize_key(unit.name) == key:
                return UnitMatch(unit=unit, confidence=UnitConfidence.EXACT, original_text=text)

        synonym = self._synonyms.get(key)
        if synonym is not None:
            return UnitMatch(unit=synonym, confidence=UnitConfidence.SYNONYM, original_text=text)

        fuzzy = self._find_fuzzy(key)
        if fuzzy is not None:
            logger.debug("Fuzzy unit match: %r → %s", text, fuzzy.name)
            return UnitMatch(unit=fuzzy, confidence=UnitConfidence.FUZZY, original_text=text)

        return UnitMatch(unit=None, confidence=UnitConfidence.NONE, original_text=text)

    async def find_units(self, texts: list[str]) -> list[UnitMatch]:
        """Resolve a batch sequentially, preserving input order."""
        await self.initialize()
        return [await self.find_unit(text) for text in texts]

    def _candidates(self) -> list[tuple[str, Unit]]:
        """Canonical names first, then synonyms."""
        names = [(normalize_key(unit.name), unit) for unit in self._units]
        return names + list(self._synonyms.items())

    def _find_fuzzy(self, key: str) -> Unit | None:
        candidates = self._candidates()

        query_variations = set(generate_variations(key))
        for target, unit in candidates:
            if target in query_variations or key in generate_variations(target):
                return unit

        for target, unit in candidates:
            if is_close_match(key, target):
                return unit
        return None

    def stats(self) -> dict[str, Any]:
        return {
            "total_units": len(self._units),
            "total_synonyms": len(self._synonyms),
            "initialized": self.initialized,
        }
