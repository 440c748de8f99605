"""Catalog Resolver - entity resolution of free-text material names.

Matches material and unit-of-measure names typed or imported by users
against a large reference catalog (supplier product names, internal
material names, unit synonyms), with explainable scores:

- Query classification (SIMPLE / TECHNICAL / MIXED)
- Typed tokenization into material, dimension, article and brand blocks
- Four candidate generators run concurrently against the catalog store
- Merging and weighted, archetype-aware ranking with match reasons
- Unit-of-measure matching with synonym and edit-distance fallback

Example:
    >>> from catalog_resolver import InMemoryCatalogStore, MatchEngine, UnitMatcher
    >>>
    >>> store = InMemoryCatalogStore({
    ...     "supplier_names": [{"id": 1, "name": "Пеноплэкс Комфорт 50мм"}],
    ...     "units": [{"id": "u1", "name": "м³"}],
    ...     "unit_synonyms": [{"unit_id": "u1", "synonym": "куб.м"}],
    ... })
    >>> engine = MatchEngine(store, units=UnitMatcher(store))
    >>> await engine.initialize()
    >>>
    >>> result = await engine.resolve("пеноплэкс")
    >>> result[0].entry_id, result[0].reasons
    (1, ['exact material match: пеноплэкс', ...])
    >>>
    >>> match = await engine.resolve_unit("кубм")
    >>> match.unit.name, match.confidence.value
    ('м³', 'fuzzy')
"""

from catalog_resolver.config import DictionaryConfig, MatchConfig, StoreConfig
from catalog_resolver.core.exceptions import (
    CatalogStoreError,
    ConfigurationError,
    PartialResultError,
    ResolverError,
)
from catalog_resolver.core.protocols import CatalogStore
from catalog_resolver.core.types import (
    Archetype,
    BlockKind,
    Blocks,
    Candidate,
    CatalogEntry,
    Query,
    RankedResult,
    ResolutionResult,
    Unit,
    UnitConfidence,
    UnitMatch,
)
from catalog_resolver.dictionary import SynonymDictionary, UnitMatcher
from catalog_resolver.matching import MatchEngine, classify, normalize, rank, tokenize
from catalog_resolver.metrics import ResolutionMetrics
from catalog_resolver.storage import InMemoryCatalogStore, PostgrestCatalogStore

__version__ = "0.1.0"

__all__ = [
    # Types
    "Archetype",
    "BlockKind",
    "Blocks",
    "Candidate",
    "CatalogEntry",
    "Query",
    "RankedResult",
    "ResolutionResult",
    "Unit",
    "UnitConfidence",
    "UnitMatch",
    # Errors
    "CatalogStoreError",
    "ConfigurationError",
    "PartialResultError",
    "ResolverError",
    # Components
    "CatalogStore",
    "InMemoryCatalogStore",
    "MatchEngine",
    "PostgrestCatalogStore",
    "ResolutionMetrics",
    "SynonymDictionary",
    "UnitMatcher",
    # Functions
    "classify",
    "normalize",
    "rank",
    "tokenize",
    # Config
    "DictionaryConfig",
    "MatchConfig",
    "StoreConfig",
]
