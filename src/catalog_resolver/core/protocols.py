"""Protocols (interfaces) for external collaborators of the resolver."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CatalogStore(Protocol):
    """Read-only access to the reference catalog.

    Rows are plain dicts with at least ``id`` and ``name`` keys.
    Implementations raise ``CatalogStoreError`` on failure.
    """

    async def search_substring(
        self, table: str, query: str, limit: int
    ) -> list[dict[str, Any]]:
        """Rows whose name contains ``query`` (case-insensitive)."""
        ...

    async def count(self, table: str) -> int:
        """Total number of rows in a table."""
        ...

    async def fetch_page(
        self, table: str, offset: int, limit: int
    ) -> list[dict[str, Any]]:
        """A page of rows, ordered consistently between calls."""
        ...
