"""Material synonym dictionary: canonical word → aliases, with a reverse index."""

from __future__ import annotations

import logging
from typing import Any

from catalog_resolver.core.protocols import CatalogStore
from catalog_resolver.dictionary.base import DEFAULT_PAGE_SIZE, LazyDictionary, load_table, normalize_key

logger = logging.getLogger(__name__)

DEFAULT_MATERIAL_SYNONYMS: dict[str, list[str]] = {
    "кран": ["вентиль", "затвор", "клапан"],
    "шаровой": ["шаровый", "ball", "сферический"],
    "резьбовой": ["резьбовый", "threaded"],
    "пеноплэкс": ["пенополистирол", "полистирол", "утеплитель"],
}


class SynonymDictionary(LazyDictionary):
    """Alias lists per canonical key plus an ``alias → canonical`` index.

    Seeded from a built-in table; when a store and table are given, rows
    with ``canonical`` and ``alias`` columns are merged in on load.
    """

    name = "synonym dictionary"

    def __init__(
        self,
        store: CatalogStore | None = None,
        table: str | None = None,
        seed: dict[str, list[str]] | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        super().__init__()
        self._store = store
        self._table = table
        self._seed = DEFAULT_MATERIAL_SYNONYMS if seed is None else seed
        self._page_size = page_size
        self._aliases: dict[str, list[str]] = {}
        self._alias_to_canonical: dict[str, str] = {}

    async def _load(self) -> None:
        entries: dict[str, list[str]] = {}
        for canonical, aliases in self._seed.items():
            _merge_entry(entries, canonical, aliases)

        if self._store is not None and self._table:
            rows = await load_table(self._store, self._table, self._page_size)
            for row in rows:
                canonical, alias = row.get("canonical"), row.get("alias")
                if canonical and alias:
                    _merge_entry(entries, canonical, [alias])

        self._aliases, self._alias_to_canonical = entries, _reverse(entries)
        logger.info(
            "Synonym dictionary loaded: %d keys, %d aliases",
            len(self._aliases),
            len(self._alias_to_canonical),
        )

    def _clear(self) -> None:
        self._aliases = {}
        self._alias_to_canonical = {}

    def aliases_for(self, word: str) -> list[str]:
        """Aliases of a canonical key, in load order. Empty if unknown."""
        return list(self._aliases.get(normalize_key(word), []))

    def canonical_for(self, alias: str) -> str | None:
        """Canonical key an alias belongs to."""
        return self._alias_to_canonical.get(normalize_key(alias))

    def add(self, canonical: str, aliases: list[str]) -> None:
        """Register aliases at runtime. Lost on ``reset()`` unless persisted."""
        entries = {key: list(values) for key, values in self._aliases.items()}
        _merge_entry(entries, canonical, aliases)
        self._aliases, self._alias_to_canonical = entries, _reverse(entries)

    def stats(self) -> dict[str, Any]:
        return {
            "total_keys": len(self._aliases),
            "total_aliases": len(self._alias_to_canonical),
            "initialized": self.initialized,
        }


def _merge_entry(entries: dict[str, list[str]], canonical: str, aliases: list[str]) -> None:
    key = normalize_key(canonical)
    bucket = entries.setdefault(key, [])
    for alias in aliases:
        norm = normalize_key(alias)
        if norm and norm != key and norm not in bucket:
            bucket.append(norm)


def _reverse(entries: dict[str, list[str]]) -> dict[str, str]:
    index: dict[str, str] = {}
    for canonical, aliases in entries.items():
        for alias in aliases:
            index.setdefault(alias, canonical)
    return index
