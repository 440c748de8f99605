"""Data types for the catalog resolution pipeline."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Archetype(str, Enum):
    """Coarse query class that selects generators and ranking bonuses."""

    SIMPLE = "SIMPLE"
    TECHNICAL = "TECHNICAL"
    MIXED = "MIXED"


class BlockKind(str, Enum):
    """Kind of a typed token block extracted from a query."""

    MATERIAL = "material"
    DIMENSION = "dimension"
    ARTICLE = "article"
    BRAND = "brand"


class UnitConfidence(str, Enum):
    """Tier at which a unit-of-measure lookup succeeded."""

    EXACT = "exact"
    SYNONYM = "synonym"
    FUZZY = "fuzzy"
    NONE = "none"


@dataclass(frozen=True)
class CatalogEntry:
    """A canonical catalog row as seen by the engine."""

    id: Any
    display_name: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> CatalogEntry:
        return cls(id=row["id"], display_name=str(row.get("name") or ""))


@dataclass
class Blocks:
    """Typed token groups of a single query.

    Each token belongs to exactly one block; extraction order decides
    ownership when patterns overlap.
    """

    material: list[str] = field(default_factory=list)
    dimension: list[str] = field(default_factory=list)
    article: list[str] = field(default_factory=list)
    brand: list[str] = field(default_factory=list)

    def get(self, kind: BlockKind) -> list[str]:
        return getattr(self, kind.value)

    def tokens(self) -> list[tuple[BlockKind, str]]:
        """All tokens tagged with their block kind, in extraction order."""
        out: list[tuple[BlockKind, str]] = []
        for kind in (BlockKind.DIMENSION, BlockKind.ARTICLE, BlockKind.BRAND, BlockKind.MATERIAL):
            out.extend((kind, token) for token in self.get(kind))
        return out

    def is_empty(self) -> bool:
        return not (self.material or self.dimension or self.article or self.brand)

    def as_dict(self) -> dict[str, list[str]]:
        return {kind.value: list(self.get(kind)) for kind in BlockKind}


@dataclass
class Query:
    """A raw query plus its derived forms. Built once per resolution call."""

    raw_text: str
    normalized_text: str
    archetype: Archetype
    blocks: Blocks


@dataclass
class Candidate:
    """A single generator's proposed catalog match."""

    entry_id: Any
    display_name: str
    strategy: str
    base_score: float
    reasons: list[str] = field(default_factory=list)


@dataclass
class RankedResult:
    """Merged, scored catalog match with the evidence behind it."""

    entry_id: Any
    display_name: str
    final_score: float = 0.0
    base_score: float = 0.0
    strategies: set[str] = field(default_factory=set)
    reasons: list[str] = field(default_factory=list)


@dataclass
class ResolutionResult:
    """Ordered matches for one query.

    Behaves like a list of ``RankedResult``. An empty result means
    "no match"; ``degraded`` means some generators failed and the list
    is best-effort.
    """

    results: list[RankedResult] = field(default_factory=list)
    query: Query | None = None
    degraded: bool = False
    failed_generators: list[str] = field(default_factory=list)
    mode: str = "hybrid"
    elapsed_ms: float = 0.0

    def __iter__(self) -> Iterator[RankedResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def __getitem__(self, index: int) -> RankedResult:
        return self.results[index]

    @property
    def archetype(self) -> Archetype | None:
        return self.query.archetype if self.query else None

    @property
    def blocks(self) -> Blocks:
        return self.query.blocks if self.query else Blocks()

    @property
    def top_score(self) -> float:
        return self.results[0].final_score if self.results else 0.0


@dataclass(frozen=True)
class Unit:
    """A canonical unit of measure."""

    id: Any
    name: str
    description: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Unit:
        return cls(id=row["id"], name=str(row.get("name") or ""), description=row.get("description"))


@dataclass
class UnitMatch:
    """Outcome of a unit-of-measure lookup."""

    unit: Unit | None
    confidence: UnitConfidence
    original_text: str

    @property
    def matched(self) -> bool:
        return self.unit is not None
