"""Unit-of-measure resolution endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from catalog_resolver.dictionary.units import summarize
from catalog_resolver.matching.engine import MatchEngine
from catalog_resolver.server.dependencies import get_engine
from catalog_resolver.server.schemas import (
    UnitBatchRequest,
    UnitBatchResponse,
    UnitMatchResponse,
    UnitResolveRequest,
)

router = APIRouter()


@router.post("/units/resolve")
async def resolve_unit(
    body: UnitResolveRequest,
    engine: MatchEngine = Depends(get_engine),
) -> UnitMatchResponse:
    match = await engine.resolve_unit(body.text)
    return UnitMatchResponse.from_match(match)


@router.post("/units/resolve-batch")
async def resolve_units(
    body: UnitBatchRequest,
    engine: MatchEngine = Depends(get_engine),
) -> UnitBatchResponse:
    """Resolve a column of unit strings, e.g. from an import, in order."""
    matches = await engine.resolve_units(body.texts)
    return UnitBatchResponse(
        matches=[UnitMatchResponse.from_match(m) for m in matches],
        summary=summarize(matches),
    )
