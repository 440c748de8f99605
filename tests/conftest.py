"""Pytest fixtures for catalog-resolver tests.

Provides fixtures for:
- In-memory catalog stores over a small supplier catalog with units
- MatchEngine instances wired to those stores
"""

from __future__ import annotations

import pytest

from catalog_resolver.dictionary.synonyms import SynonymDictionary
from catalog_resolver.dictionary.units import UnitMatcher
from catalog_resolver.matching.engine import MatchEngine
from catalog_resolver.storage.memory import InMemoryCatalogStore

from tests.catalog_fixtures import CountingStore, catalog_tables


@pytest.fixture
def store() -> InMemoryCatalogStore:
    return InMemoryCatalogStore(catalog_tables())


@pytest.fixture
def counting_store() -> CountingStore:
    return CountingStore(catalog_tables())


@pytest.fixture
def units(store) -> UnitMatcher:
    return UnitMatcher(store)


@pytest.fixture
def engine(store) -> MatchEngine:
    return MatchEngine(store, synonyms=SynonymDictionary(), units=UnitMatcher(store))

