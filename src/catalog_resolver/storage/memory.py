"""In-memory catalog store for tests and local runs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryCatalogStore:
    """Tables of plain dict rows with case-insensitive substring search.

    Unknown tables read as empty. Rows keep insertion order, which is
    also the paging order.
    """

    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self._tables: dict[str, list[dict[str, Any]]] = {}
        for table, rows in (tables or {}).items():
            self.add(table, rows)

    @classmethod
    def from_json(cls, path: str | Path) -> InMemoryCatalogStore:
        """Load ``{"table": [rows, ...], ...}`` from a JSON file."""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        store = cls(data)
        logger.info(
            "Loaded in-memory catalog from %s (%s)",
            path,
            ", ".join(f"{t}={len(r)}" for t, r in store._tables.items()),
        )
        return store

    def add(self, table: str, rows: list[dict[str, Any]]) -> None:
        self._tables.setdefault(table, []).extend(dict(row) for row in rows)

    async def search_substring(
        self, table: str, query: str, limit: int
    ) -> list[dict[str, Any]]:
        needle = query.casefold()
        hits: list[dict[str, Any]] = []
        for row in self._tables.get(table, []):
            if needle in str(row.get("name") or "").casefold():
                hits.append({"id": row["id"], "name": row.get("name")})
                if len(hits) >= limit:
                    break
        return hits

    async def count(self, table: str) -> int:
        return len(self._tables.get(table, []))

    async def fetch_page(
        self, table: str, offset: int, limit: int
    ) -> list[dict[str, Any]]:
        rows = self._tables.get(table, [])
        return [dict(row) for row in rows[offset:offset + limit]]
