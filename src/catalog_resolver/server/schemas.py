"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from catalog_resolver.core.types import RankedResult, ResolutionResult, UnitMatch


# ========== Common ==========

class ErrorResponse(BaseModel):
    error: str
    detail: str


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


# ========== Materials ==========

class ResolveRequest(BaseModel):
    text: str
    limit: int | None = Field(default=None, ge=1, le=100)


class RankedItem(BaseModel):
    entry_id: Any
    display_name: str
    final_score: float
    strategies: list[str]
    reasons: list[str]

    @classmethod
    def from_result(cls, result: RankedResult) -> RankedItem:
        return cls(
            entry_id=result.entry_id,
            display_name=result.display_name,
            final_score=result.final_score,
            strategies=sorted(result.strategies),
            reasons=list(result.reasons),
        )


class ResolveResponse(BaseModel):
    query: str
    archetype: str | None = None
    blocks: dict[str, list[str]] = Field(default_factory=dict)
    results: list[RankedItem]
    degraded: bool = False
    failed_generators: list[str] = Field(default_factory=list)
    mode: str
    elapsed_ms: float

    @classmethod
    def from_result(cls, text: str, result: ResolutionResult) -> ResolveResponse:
        return cls(
            query=text,
            archetype=result.archetype.value if result.archetype else None,
            blocks=result.query.blocks.as_dict() if result.query else {},
            results=[RankedItem.from_result(r) for r in result],
            degraded=result.degraded,
            failed_generators=result.failed_generators,
            mode=result.mode,
            elapsed_ms=result.elapsed_ms,
        )


# ========== Units ==========

class UnitResolveRequest(BaseModel):
    text: str


class UnitBatchRequest(BaseModel):
    texts: list[str]


class UnitItem(BaseModel):
    id: Any
    name: str


class UnitMatchResponse(BaseModel):
    unit: UnitItem | None = None
    confidence: str
    original_text: str

    @classmethod
    def from_match(cls, match: UnitMatch) -> UnitMatchResponse:
        unit = UnitItem(id=match.unit.id, name=match.unit.name) if match.unit else None
        return cls(unit=unit, confidence=match.confidence.value, original_text=match.original_text)


class UnitBatchResponse(BaseModel):
    matches: list[UnitMatchResponse]
    summary: dict[str, int]


# ========== Dictionary ==========

class ResetResponse(BaseModel):
    reset: bool = True
    stats: dict[str, Any]
