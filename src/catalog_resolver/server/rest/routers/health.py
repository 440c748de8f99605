"""Health and metrics endpoints."""

from __future__ import annotations

import time
from typing import Any

from fastapi import APIRouter, Depends, Request

from catalog_resolver import __version__
from catalog_resolver.matching.engine import MatchEngine
from catalog_resolver.server.dependencies import get_engine
from catalog_resolver.server.schemas import HealthResponse

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> HealthResponse:
    elapsed = time.monotonic() - request.app.state.start_time
    return HealthResponse(
        status="ok",
        version=__version__,
        uptime_seconds=round(elapsed, 1),
    )


@router.get("/metrics")
async def metrics(engine: MatchEngine = Depends(get_engine)) -> dict[str, Any]:
    """Usage metrics plus dictionary stats."""
    return engine.stats()
