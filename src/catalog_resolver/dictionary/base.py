"""Shared lifecycle for dictionaries loaded once from the catalog store."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any

from catalog_resolver.core.exceptions import ConfigurationError
from catalog_resolver.core.protocols import CatalogStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 1000


def normalize_key(text: str) -> str:
    """Lowercase, strip, collapse whitespace."""
    return re.sub(r"\s+", " ", text.strip().lower())


async def load_table(
    store: CatalogStore, table: str, page_size: int = DEFAULT_PAGE_SIZE
) -> list[dict[str, Any]]:
    """Fetch every row of a table page by page."""
    total = await store.count(table)
    rows: list[dict[str, Any]] = []
    offset = 0
    while offset < total:
        page = await store.fetch_page(table, offset, page_size)
        if not page:
            break
        rows.extend(page)
        offset += len(page)
    return rows


class LazyDictionary:
    """One-shot async initialization with an explicit reset.

    Concurrent ``initialize()`` callers share a single load: the first
    takes the lock and loads, the rest wait on the lock and find the
    dictionary ready. Subclasses build fresh state in ``_load`` and swap
    it in whole, so readers never see a half-built index.
    """

    name = "dictionary"

    def __init__(self) -> None:
        self._initialized = False
        self._lock = asyncio.Lock()
        self._load_count = 0

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def load_count(self) -> int:
        """How many loads actually ran (useful for spotting duplicate loads)."""
        return self._load_count

    async def initialize(self) -> None:
        if self._initialized:
            return
        async with self._lock:
            if self._initialized:
                return
            try:
                await self._load()
            except ConfigurationError:
                raise
            except Exception as e:
                logger.error("Failed to initialize %s: %s", self.name, e)
                raise ConfigurationError(f"Cannot load {self.name}: {e}") from e
            self._load_count += 1
            self._initialized = True

    def reset(self) -> None:
        """Drop loaded state; the next ``initialize()`` reloads."""
        self._initialized = False
        self._clear()

    async def _load(self) -> None:
        raise NotImplementedError

    def _clear(self) -> None:
        raise NotImplementedError
