"""Catalog store backends."""

from catalog_resolver.storage.memory import InMemoryCatalogStore
from catalog_resolver.storage.postgrest import PostgrestCatalogStore

__all__ = ["InMemoryCatalogStore", "PostgrestCatalogStore"]
