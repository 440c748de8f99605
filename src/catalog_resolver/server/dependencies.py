"""Dependency injection: catalog store construction and engine lookup."""

from __future__ import annotations

import logging

from fastapi import Request

from catalog_resolver.config import StoreConfig
from catalog_resolver.core.exceptions import ConfigurationError
from catalog_resolver.core.protocols import CatalogStore
from catalog_resolver.matching.engine import MatchEngine
from catalog_resolver.storage.memory import InMemoryCatalogStore
from catalog_resolver.storage.postgrest import PostgrestCatalogStore

logger = logging.getLogger(__name__)


def build_store(config: StoreConfig) -> CatalogStore:
    """Create the catalog store backend named in the config."""
    if config.backend == "memory":
        if config.seed_path is not None:
            return InMemoryCatalogStore.from_json(config.seed_path)
        logger.warning("In-memory catalog store started empty (no seed file)")
        return InMemoryCatalogStore()
    if config.backend == "postgrest":
        return PostgrestCatalogStore(
            base_url=config.base_url,
            api_key=config.api_key,
            timeout=config.timeout,
            schema=config.schema,
        )
    raise ConfigurationError(f"Unknown catalog store backend: {config.backend!r}")


def get_engine(request: Request) -> MatchEngine:
    """Get the MatchEngine from app state."""
    engine: MatchEngine | None = getattr(request.app.state, "engine", None)
    if engine is None:
        raise ConfigurationError("Match engine not initialized")
    return engine
