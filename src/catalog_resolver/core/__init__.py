"""Core types, protocols, and exceptions for the catalog resolver."""

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
    CatalogEntry,
    Candidate,
    Query,
    RankedResult,
    ResolutionResult,
    Unit,
    UnitConfidence,
    UnitMatch,
)

__all__ = [
    "Archetype",
    "BlockKind",
    "Blocks",
    "Candidate",
    "CatalogEntry",
    "CatalogStore",
    "CatalogStoreError",
    "ConfigurationError",
    "PartialResultError",
    "Query",
    "RankedResult",
    "ResolutionResult",
    "ResolverError",
    "Unit",
    "UnitConfidence",
    "UnitMatch",
]
