"""Material resolution endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from catalog_resolver.matching.engine import MatchEngine
from catalog_resolver.server.dependencies import get_engine
from catalog_resolver.server.schemas import ResetResponse, ResolveRequest, ResolveResponse

router = APIRouter()


@router.post("/resolve")
async def resolve(
    body: ResolveRequest,
    engine: MatchEngine = Depends(get_engine),
) -> ResolveResponse:
    """Ranked catalog matches for a free-text material name.

    An empty ``results`` list means no match; ``degraded`` means some
    generators failed and the list is best-effort.
    """
    result = await engine.resolve(body.text, limit=body.limit)
    return ResolveResponse.from_result(body.text, result)


@router.post("/dictionary/reset")
async def reset_dictionary(engine: MatchEngine = Depends(get_engine)) -> ResetResponse:
    """Drop loaded dictionaries and reload them from the store."""
    engine.reset()
    await engine.initialize()
    return ResetResponse(stats=engine.stats())
