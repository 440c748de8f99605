"""Exception-to-HTTP mapping for the server.

"No match" is an empty 200 response; a degraded result is a 200 with
``degraded: true``; only a fully failed or unconfigured engine is an error.
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from catalog_resolver.core.exceptions import (
    CatalogStoreError,
    ConfigurationError,
    PartialResultError,
)


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={"error": "configuration_error", "detail": str(exc)},
    )


async def partial_result_error_handler(request: Request, exc: PartialResultError) -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={
            "error": "degraded",
            "detail": str(exc),
            "failed_generators": sorted(exc.failures),
        },
    )


async def catalog_store_error_handler(request: Request, exc: CatalogStoreError) -> JSONResponse:
    return JSONResponse(
        status_code=502,
        content={"error": "catalog_unavailable", "detail": str(exc), "table": exc.table},
    )


EXCEPTION_HANDLERS = {
    ConfigurationError: configuration_error_handler,
    PartialResultError: partial_result_error_handler,
    CatalogStoreError: catalog_store_error_handler,
}
