"""FastAPI application factory."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog_resolver import __version__
from catalog_resolver.core.exceptions import ConfigurationError
from catalog_resolver.core.protocols import CatalogStore
from catalog_resolver.dictionary.synonyms import SynonymDictionary
from catalog_resolver.dictionary.units import UnitMatcher
from catalog_resolver.matching.engine import MatchEngine
from catalog_resolver.server.config import ServerConfig
from catalog_resolver.server.dependencies import build_store
from catalog_resolver.server.errors import EXCEPTION_HANDLERS
from catalog_resolver.server.rest.middleware import RequestTimingMiddleware
from catalog_resolver.server.rest.routers import health, resolve, units

logger = logging.getLogger(__name__)


def create_app(config: ServerConfig, store: CatalogStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``store`` overrides the backend named in ``config.store``.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Startup
        app.state.config = config
        app.state.start_time = time.monotonic()
        catalog = store if store is not None else build_store(config.store)
        app.state.store = catalog

        dictionary = config.dictionary
        app.state.engine = MatchEngine(
            catalog,
            synonyms=SynonymDictionary(
                catalog,
                table=dictionary.material_synonyms_table,
                page_size=dictionary.page_size,
            ),
            units=UnitMatcher(
                catalog,
                units_table=dictionary.units_table,
                synonyms_table=dictionary.unit_synonyms_table,
                page_size=dictionary.page_size,
            ),
            config=config.match,
        )

        # A failed load is retried on first use; until then requests get 503
        try:
            await app.state.engine.initialize()
            logger.info("Dictionaries loaded: %s", app.state.engine.stats())
        except ConfigurationError:
            logger.warning("Dictionary load failed; resolution unavailable until it succeeds", exc_info=True)

        logger.info("Catalog resolver started (store=%s)", type(catalog).__name__)
        yield

        # Shutdown
        close = getattr(catalog, "aclose", None)
        if store is None and close is not None:
            await close()
            logger.info("Catalog store closed")
        logger.info("Catalog resolver stopped")

    app = FastAPI(
        title="Catalog Resolver",
        description="Free-text material and unit-of-measure matching against a reference catalog",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestTimingMiddleware)

    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    prefix = "/api/v1"
    app.include_router(health.router, prefix=prefix, tags=["health"])
    app.include_router(resolve.router, prefix=prefix, tags=["materials"])
    app.include_router(units.router, prefix=prefix, tags=["units"])

    return app
