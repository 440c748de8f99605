"""Catalog store backed by a PostgREST (Supabase) HTTP endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from catalog_resolver.core.exceptions import CatalogStoreError

logger = logging.getLogger(__name__)

REST_PREFIX = "/rest/v1"


class PostgrestCatalogStore:
    """Read-only catalog access over PostgREST.

    Substring search maps to an ``ilike`` filter; counts come from the
    ``Content-Range`` header with ``Prefer: count=exact``. Every HTTP or
    transport failure is raised as ``CatalogStoreError``; no retries.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 10.0,
        schema: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        headers: dict[str, str] = {"Accept": "application/json"}
        if api_key:
            headers["apikey"] = api_key
            headers["Authorization"] = f"Bearer {api_key}"
        if schema:
            headers["Accept-Profile"] = schema
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/") + REST_PREFIX,
            headers=headers,
            timeout=timeout,
        )
        if client is not None:
            self._client.headers.update(headers)

    async def __aenter__(self) -> PostgrestCatalogStore:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get(
        self,
        table: str,
        params: dict[str, str],
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            response = await self._client.get(f"/{table}", params=params, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Catalog request on %s failed: %s", table, e)
            raise CatalogStoreError(table, f"Catalog request on '{table}' failed: {e}") from e
        return response

    async def search_substring(
        self, table: str, query: str, limit: int
    ) -> list[dict[str, Any]]:
        pattern = query.replace("*", " ").strip()
        response = await self._get(
            table,
            {"select": "id,name", "name": f"ilike.*{pattern}*", "limit": str(limit)},
        )
        return response.json()

    async def count(self, table: str) -> int:
        response = await self._get(
            table,
            {"select": "id", "limit": "1"},
            headers={"Prefer": "count=exact"},
        )
        content_range = response.headers.get("Content-Range", "")
        _, _, total = content_range.partition("/")
        if not total.isdigit():
            raise CatalogStoreError(table, f"Missing row count in Content-Range: {content_range!r}")
        return int(total)

    async def fetch_page(
        self, table: str, offset: int, limit: int
    ) -> list[dict[str, Any]]:
        response = await self._get(
            table,
            {"select": "*", "order": "id.asc", "offset": str(offset), "limit": str(limit)},
        )
        return response.json()
