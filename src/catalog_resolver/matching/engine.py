"""MatchEngine: orchestrates normalize → classify → tokenize → generate → rank.

The public resolution API. Generators selected for the query archetype
run concurrently against the catalog store; results are merged only
after all of them finish.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from catalog_resolver.config import MatchConfig
from catalog_resolver.core.exceptions import ConfigurationError, PartialResultError
from catalog_resolver.core.protocols import CatalogStore
from catalog_resolver.core.types import (
    Candidate,
    CatalogEntry,
    Query,
    RankedResult,
    ResolutionResult,
    UnitMatch,
)
from catalog_resolver.dictionary.synonyms import SynonymDictionary
from catalog_resolver.dictionary.units import UnitMatcher
from catalog_resolver.matching.classifier import classify
from catalog_resolver.matching.generators import (
    BlockGenerator,
    CandidateGenerator,
    ExactGenerator,
    FuzzyGenerator,
    SynonymGenerator,
    plan_for,
)
from catalog_resolver.matching.normalizer import normalize
from catalog_resolver.matching.ranker import rank
from catalog_resolver.matching.tokenizer import tokenize
from catalog_resolver.metrics import ResolutionMetrics

logger = logging.getLogger(__name__)

FALLBACK_SCORE = 0.5


class MatchEngine:
    """Resolve free-text material names to ranked catalog entries.

    Failure semantics:
      - one generator fails → logged, result flagged ``degraded``
      - every generator of the plan fails → ``PartialResultError``
      - dictionary cannot load → ``ConfigurationError`` on every call
        until a load succeeds
      - nothing found → empty result (not an error)
    """

    def __init__(
        self,
        store: CatalogStore,
        synonyms: SynonymDictionary | None = None,
        units: UnitMatcher | None = None,
        config: MatchConfig | None = None,
        metrics: ResolutionMetrics | None = None,
    ) -> None:
        self._store = store
        self._config = config or MatchConfig()
        self.synonyms = synonyms or SynonymDictionary()
        self.units = units
        self.metrics = metrics or ResolutionMetrics()

        cfg = self._config
        table = cfg.catalog_table
        generators: list[CandidateGenerator] = [
            ExactGenerator(store, table, cfg.exact_limit),
            BlockGenerator(store, table, cfg.block_limit),
            SynonymGenerator(store, table, cfg.synonym_limit, self.synonyms),
            FuzzyGenerator(store, table, cfg.fuzzy_limit, cfg.fuzzy_min_word_length),
        ]
        self._generators: dict[str, CandidateGenerator] = {g.id: g for g in generators}
        self._init_error: ConfigurationError | None = None

    @property
    def config(self) -> MatchConfig:
        return self._config

    @property
    def ready(self) -> bool:
        """True once every dictionary has loaded."""
        return self._init_error is None and self.synonyms.initialized and (
            self.units is None or self.units.initialized
        )

    async def initialize(self) -> None:
        """Load dictionaries. Raises ``ConfigurationError``.

        Safe to call repeatedly; loaded dictionaries are not reloaded. Every
        resolution call runs it first, so a failed load keeps failing calls
        until the store is reachable again.
        """
        try:
            await self.synonyms.initialize()
            if self.units is not None:
                await self.units.initialize()
        except ConfigurationError as e:
            self._init_error = e
            raise
        self._init_error = None

    def reset(self) -> None:
        """Force dictionaries to reload on next use."""
        self.synonyms.reset()
        if self.units is not None:
            self.units.reset()

    def build_query(self, raw_text: str) -> Query:
        """Derive normalized text, archetype and blocks for a raw query."""
        return Query(
            raw_text=raw_text,
            normalized_text=normalize(raw_text),
            archetype=classify(raw_text),
            blocks=tokenize(raw_text, self._config.min_material_token_length),
        )

    async def resolve(self, raw_text: str, limit: int | None = None) -> ResolutionResult:
        """Ranked catalog matches for ``raw_text``, best first."""
        start = time.monotonic()
        if limit is None:
            limit = self._config.max_suggestions
        mode = "hybrid" if self._config.enabled else "fallback"

        if not raw_text or not normalize(raw_text):
            return ResolutionResult(mode=mode)

        await self.initialize()
        query = self.build_query(raw_text)

        try:
            if not self._config.enabled:
                results, failures = await self._fallback(query)
            elif query.blocks.is_empty():
                results, failures = [], {}
            else:
                candidates, failures = await self._generate(query)
                results = rank(candidates, query.blocks, query.archetype)
        except PartialResultError as e:
            self.metrics.record(
                mode=mode,
                elapsed_ms=(time.monotonic() - start) * 1000,
                top_score=None,
                failed_generators=list(e.failures),
            )
            raise

        threshold = self._config.confidence_threshold
        results = [r for r in results if r.final_score >= threshold][:limit]
        elapsed_ms = (time.monotonic() - start) * 1000

        self.metrics.record(
            mode=mode,
            elapsed_ms=elapsed_ms,
            top_score=results[0].final_score if results else None,
            failed_generators=list(failures),
        )
        logger.debug(
            "Resolved %r (%s): %d results in %.1fms",
            raw_text,
            query.archetype.value,
            len(results),
            elapsed_ms,
        )
        return ResolutionResult(
            results=results,
            query=query,
            degraded=bool(failures),
            failed_generators=list(failures),
            mode=mode,
            elapsed_ms=round(elapsed_ms, 2),
        )

    async def _generate(self, query: Query) -> tuple[list[Candidate], dict[str, Exception]]:
        """Fan out to the archetype's generators, fan in once all finish.

        Generators with nothing to look up for these blocks are skipped, so
        "every generator failed" means every store lookup attempted failed.
        Candidates are concatenated in plan order regardless of which
        generator finished first.
        """
        plan = [
            (gid, weight)
            for gid, weight in plan_for(query.archetype)
            if self._generators[gid].has_lookups(query.blocks)
        ]
        if not plan:
            return [], {}
        outcomes = await asyncio.gather(
            *(self._run_generator(gid, weight, query) for gid, weight in plan),
            return_exceptions=True,
        )

        candidates: list[Candidate] = []
        failures: dict[str, Exception] = {}
        for (gid, _), outcome in zip(plan, outcomes):
            if isinstance(outcome, Exception):
                logger.warning("Generator %s failed for %r: %s", gid, query.raw_text, outcome)
                failures[gid] = outcome
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                candidates.extend(outcome)

        if failures and len(failures) == len(plan):
            raise PartialResultError(failures)
        return candidates, failures

    async def _run_generator(self, gid: str, weight: float, query: Query) -> list[Candidate]:
        call = self._generators[gid].generate(query.blocks, weight)
        timeout = self._config.generator_timeout
        if timeout is None:
            return await call
        return await asyncio.wait_for(call, timeout)

    async def _fallback(self, query: Query) -> tuple[list[RankedResult], dict[str, Exception]]:
        """Plain substring search used when the hybrid engine is disabled."""
        term = query.raw_text.strip().lower()
        try:
            rows = await self._store.search_substring(
                self._config.catalog_table, term, self._config.fallback_limit
            )
        except Exception as e:
            logger.warning("Fallback search failed for %r: %s", query.raw_text, e)
            raise PartialResultError({"fallback": e}) from e

        results = []
        for row in rows:
            entry = CatalogEntry.from_row(row)
            results.append(RankedResult(
                entry_id=entry.id,
                display_name=entry.display_name,
                final_score=FALLBACK_SCORE,
                base_score=FALLBACK_SCORE,
                strategies={"fallback"},
                reasons=["plain text search"],
            ))
        return results, {}

    async def resolve_unit(self, raw_text: str) -> UnitMatch:
        """Resolve a unit-of-measure string."""
        if self.units is None:
            raise ConfigurationError("No unit dictionary configured")
        await self.initialize()
        return await self.units.find_unit(raw_text)

    async def resolve_units(self, texts: list[str]) -> list[UnitMatch]:
        """Resolve unit strings in input order."""
        if self.units is None:
            raise ConfigurationError("No unit dictionary configured")
        await self.initialize()
        return await self.units.find_units(texts)

    def stats(self) -> dict[str, Any]:
        return {
            "ready": self.ready,
            "synonyms": self.synonyms.stats(),
            "units": self.units.stats() if self.units is not None else None,
            "metrics": self.metrics.snapshot(),
        }
