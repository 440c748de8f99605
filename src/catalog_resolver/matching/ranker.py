"""Merger/ranker: deduplicate candidates and compute explainable scores."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from catalog_resolver.core.types import Archetype, Blocks, Candidate, RankedResult

CORROBORATION_WEIGHT = 0.5

MATERIAL_BONUS = 2.0
DIMENSION_BONUS = 3.0
ARTICLE_BONUS = 4.0
BRAND_BONUS = 2.0
MULTI_STRATEGY_BONUS = 1.0
LONG_NAME_PENALTY = 1.0
LONG_NAME_LENGTH = 100

SIMPLE_SHORT_NAME_BONUS = 0.5
SIMPLE_SHORT_NAME_LENGTH = 50
TECHNICAL_BLOCK_BONUS = 1.5
TECHNICAL_STRATEGIES = frozenset({"block_article", "block_dimension"})


def merge(candidates: Iterable[Candidate]) -> list[RankedResult]:
    """Group candidates by entry id, keeping first-discovery order.

    The first candidate seeds the score; each later one for the same id
    adds half its base score and appends its reasons and strategy.
    """
    merged: dict[Any, RankedResult] = {}
    for candidate in candidates:
        existing = merged.get(candidate.entry_id)
        if existing is None:
            merged[candidate.entry_id] = RankedResult(
                entry_id=candidate.entry_id,
                display_name=candidate.display_name,
                base_score=candidate.base_score,
                strategies={candidate.strategy},
                reasons=list(candidate.reasons),
            )
            continue
        existing.base_score += candidate.base_score * CORROBORATION_WEIGHT
        existing.strategies.add(candidate.strategy)
        existing.reasons.extend(candidate.reasons)
    return list(merged.values())


def score(result: RankedResult, blocks: Blocks, archetype: Archetype) -> float:
    """Final score for a merged result: base plus evidence and archetype bonuses."""
    name = result.display_name.lower()
    total = result.base_score

    if any(word.lower() in name for word in blocks.material):
        total += MATERIAL_BONUS
    total += DIMENSION_BONUS * sum(1 for dim in blocks.dimension if dim.lower() in name)
    total += ARTICLE_BONUS * sum(1 for art in blocks.article if art.lower() in name)
    total += BRAND_BONUS * sum(1 for brand in blocks.brand if brand.lower() in name)

    if len(result.strategies) > 1:
        total += MULTI_STRATEGY_BONUS
    if len(result.display_name) > LONG_NAME_LENGTH:
        total -= LONG_NAME_PENALTY

    if archetype is Archetype.SIMPLE:
        if len(result.display_name) < SIMPLE_SHORT_NAME_LENGTH:
            total += SIMPLE_SHORT_NAME_BONUS
    elif archetype is Archetype.TECHNICAL:
        if result.strategies & TECHNICAL_STRATEGIES:
            total += TECHNICAL_BLOCK_BONUS

    return round(total, 1)


def rank(
    candidates: Iterable[Candidate],
    blocks: Blocks,
    archetype: Archetype,
) -> list[RankedResult]:
    """Merge, score and order candidates by descending final score.

    The sort is stable, so equal scores keep merge-discovery order.
    No candidates in, empty list out.
    """
    results = merge(candidates)
    for result in results:
        result.final_score = score(result, blocks, archetype)
    results.sort(key=lambda r: r.final_score, reverse=True)
    return results
