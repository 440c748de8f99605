"""Catalog data and store doubles shared by the test suite."""

from __future__ import annotations

import asyncio
from typing import Any

from catalog_resolver.core.exceptions import CatalogStoreError
from catalog_resolver.storage.memory import InMemoryCatalogStore

SUPPLIER_NAMES = [
    {"id": 1, "name": "Пеноплэкс Комфорт 50мм"},
    {"id": 2, "name": "Пенополистирол экструдированный 1200x600x50"},
    {"id": 7, "name": "Кран шаровой BVR-R DN32 065B8310R Ридан"},
    {"id": 8, "name": "Кран шаровой латунный DN20"},
    {"id": 9, "name": "Клапан обратный DN32"},
    {"id": 10, "name": "Вентиль запорный Ду15"},
]

UNITS = [
    {"id": "u-m2", "name": "м²"},
    {"id": "u-m3", "name": "м³"},
    {"id": "u-pcs", "name": "шт"},
    {"id": "u-kg", "name": "кг"},
]

UNIT_SYNONYMS = [
    {"unit_id": "u-m2", "synonym": "кв.м"},
    {"unit_id": "u-m3", "synonym": "куб.м"},
    {"unit_id": "u-pcs", "synonym": "штука"},
]


def catalog_tables() -> dict[str, list[dict[str, Any]]]:
    return {
        "supplier_names": [dict(r) for r in SUPPLIER_NAMES],
        "units": [dict(r) for r in UNITS],
        "unit_synonyms": [dict(r) for r in UNIT_SYNONYMS],
    }


class CountingStore(InMemoryCatalogStore):
    """Records every call; ``delay`` yields to the loop before answering."""

    def __init__(self, tables=None, delay: float = 0.0) -> None:
        super().__init__(tables)
        self.delay = delay
        self.searches: list[tuple[str, str, int]] = []
        self.counts: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def search_substring(self, table, query, limit):
        self.searches.append((table, query, limit))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            return await super().search_substring(table, query, limit)
        finally:
            self.in_flight -= 1

    async def count(self, table):
        self.counts.append(table)
        if self.delay:
            await asyncio.sleep(self.delay)
        return await super().count(table)


class FailingStore(InMemoryCatalogStore):
    """Fails substring searches whose query is in ``fail_on``.

    ``fail_on=None`` fails every search; ``fail_counts`` also fails counts.
    """

    def __init__(self, tables=None, fail_on: set[str] | None = None, fail_counts: bool = False) -> None:
        super().__init__(tables)
        self.fail_on = fail_on
        self.fail_counts = fail_counts

    async def search_substring(self, table, query, limit):
        if self.fail_on is None or query in self.fail_on:
            raise CatalogStoreError(table, f"timeout searching {query!r}")
        return await super().search_substring(table, query, limit)

    async def count(self, table):
        if self.fail_counts:
            raise CatalogStoreError(table, "connection refused")
        return await super().count(table)


def make_engine(store, **config_overrides):
    """MatchEngine over ``store`` with selected MatchConfig fields overridden."""
    from catalog_resolver.config import MatchConfig
    from catalog_resolver.dictionary.synonyms import SynonymDictionary
    from catalog_resolver.dictionary.units import UnitMatcher
    from catalog_resolver.matching.engine import MatchEngine

    return MatchEngine(
        store,
        synonyms=SynonymDictionary(),
        units=UnitMatcher(store),
        config=MatchConfig(**config_overrides),
    )
