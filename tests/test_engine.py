"""Tests for MatchEngine: end-to-end resolution over an in-memory catalog.

Organized:
  1. Resolution scenarios
  2. Degradation and failure semantics
  3. Configuration (fallback mode, threshold, limits, timeouts)
  4. Concurrency and ordering
  5. Units and stats
"""

from __future__ import annotations

import asyncio

import pytest

from catalog_resolver.config import MatchConfig
from catalog_resolver.core.exceptions import ConfigurationError, PartialResultError
from catalog_resolver.core.types import Archetype, UnitConfidence
from catalog_resolver.dictionary.synonyms import SynonymDictionary
from catalog_resolver.dictionary.units import UnitMatcher
from catalog_resolver.matching.engine import MatchEngine

from tests.catalog_fixtures import CountingStore, FailingStore, catalog_tables, make_engine

SCENARIO_TECHNICAL = "Кран шаровой резьбовой BVR-R DN32 065B8310R Ридан"


# =====================================================================
# 1. Resolution scenarios
# =====================================================================


class TestResolve:
    @pytest.mark.asyncio
    async def test_simple_exact_match_ranks_first(self, engine):
        result = await engine.resolve("пеноплэкс")

        assert result.archetype is Archetype.SIMPLE
        assert result[0].entry_id == 1
        assert {"exact", "fuzzy"} <= result[0].strategies
        assert "exact material match: пеноплэкс" in result[0].reasons
        assert not result.degraded

    @pytest.mark.asyncio
    async def test_simple_synonym_hit_ranks_below_exact(self, engine):
        result = await engine.resolve("пеноплэкс")

        ids = [r.entry_id for r in result]
        assert ids == [1, 2]
        assert result[1].strategies == {"semantic"}
        assert result[1].reasons[0] == "synonym match: пеноплэкс → пенополистирол"
        assert result[0].final_score > result[1].final_score

    @pytest.mark.asyncio
    async def test_technical_query(self, engine):
        result = await engine.resolve(SCENARIO_TECHNICAL)

        assert result.archetype is Archetype.TECHNICAL
        top = result[0]
        assert top.entry_id == 7
        assert {"block_article", "block_dimension", "block_brand"} <= top.strategies
        assert "article match: BVR-R" in top.reasons
        assert "dimension match: dn32" in top.reasons
        assert top.final_score == pytest.approx(26.9)

    @pytest.mark.asyncio
    async def test_technical_query_blocks(self, engine):
        result = await engine.resolve(SCENARIO_TECHNICAL)
        blocks = result.blocks
        assert blocks.dimension == ["dn32"]
        assert blocks.article == ["BVR-R", "065B8310R"]
        assert blocks.brand == ["РИДАН"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "!!!", None])
    async def test_empty_query_skips_store(self, counting_store, text):
        engine = make_engine(counting_store)
        result = await engine.resolve(text)

        assert len(result) == 0
        assert not result.degraded
        assert counting_store.searches == []

    @pytest.mark.asyncio
    async def test_no_match_is_empty_not_error(self, engine):
        result = await engine.resolve("гвоздь")
        assert list(result) == []
        assert result.top_score == 0.0
        assert result.blocks.material == ["гвоздь"]

    @pytest.mark.asyncio
    async def test_results_sorted_descending(self, engine):
        result = await engine.resolve("кран шаровой")
        scores = [r.final_score for r in result]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.asyncio
    async def test_one_result_per_entry(self, engine):
        result = await engine.resolve(SCENARIO_TECHNICAL)
        ids = [r.entry_id for r in result]
        assert len(ids) == len(set(ids))


# =====================================================================
# 2. Degradation and failure semantics
# =====================================================================


class TestFailures:
    @pytest.mark.asyncio
    async def test_one_failing_generator_degrades(self):
        store = FailingStore(catalog_tables(), fail_on={"клапан"})
        engine = make_engine(store)

        result = await engine.resolve(SCENARIO_TECHNICAL)

        assert result.degraded
        assert result.failed_generators == ["synonym"]
        assert result[0].entry_id == 7
        assert engine.metrics.snapshot()["generator_failures"] == {"synonym": 1}

    @pytest.mark.asyncio
    async def test_all_generators_failing_raises(self):
        engine = make_engine(FailingStore(catalog_tables()))

        with pytest.raises(PartialResultError) as exc_info:
            await engine.resolve("пеноплэкс")

        assert set(exc_info.value.failures) == {"exact", "synonym", "fuzzy"}
        snapshot = engine.metrics.snapshot()
        assert snapshot["total_resolutions"] == 1
        assert snapshot["successful_resolutions"] == 0

    @pytest.mark.asyncio
    async def test_dictionary_load_failure_is_configuration_error(self):
        store = FailingStore(catalog_tables(), fail_on=set(), fail_counts=True)
        engine = MatchEngine(store, synonyms=SynonymDictionary(store, "material_synonyms"))

        with pytest.raises(ConfigurationError):
            await engine.resolve("пеноплэкс")

        store.fail_counts = False
        result = await engine.resolve("пеноплэкс")
        assert result[0].entry_id == 1

    @pytest.mark.asyncio
    async def test_failed_initialize_blocks_resolution(self):
        store = FailingStore(catalog_tables(), fail_on=set(), fail_counts=True)
        engine = MatchEngine(store, synonyms=SynonymDictionary(), units=UnitMatcher(store))

        with pytest.raises(ConfigurationError):
            await engine.initialize()
        assert not engine.ready

        with pytest.raises(ConfigurationError):
            await engine.resolve("пеноплэкс")
        with pytest.raises(ConfigurationError):
            await engine.resolve_units(["шт"])

        store.fail_counts = False
        result = await engine.resolve("пеноплэкс")
        assert result[0].entry_id == 1
        assert engine.ready

    @pytest.mark.asyncio
    async def test_every_attempted_lookup_failing_raises(self):
        engine = make_engine(FailingStore(catalog_tables()))

        with pytest.raises(PartialResultError) as exc_info:
            await engine.resolve("DN32 065B8310R")

        assert list(exc_info.value.failures) == ["block"]

    @pytest.mark.asyncio
    async def test_idle_generators_are_not_run(self, counting_store):
        engine = make_engine(counting_store)
        result = await engine.resolve("DN32 065B8310R")

        assert result.archetype is Archetype.TECHNICAL
        assert [q for _, q, _ in counting_store.searches] == ["065B8310R", "dn32"]
        assert not result.degraded

    @pytest.mark.asyncio
    async def test_fallback_failure_raises(self):
        engine = make_engine(FailingStore(catalog_tables()), enabled=False)
        with pytest.raises(PartialResultError) as exc_info:
            await engine.resolve("кран")
        assert list(exc_info.value.failures) == ["fallback"]


# =====================================================================
# 3. Configuration
# =====================================================================


class TestConfiguration:
    @pytest.mark.asyncio
    async def test_fallback_mode(self, counting_store):
        engine = make_engine(counting_store, enabled=False)

        result = await engine.resolve("  Кран шаровой ")

        assert result.mode == "fallback"
        assert [r.entry_id for r in result] == [7, 8]
        assert all(r.final_score == 0.5 and r.strategies == {"fallback"} for r in result)
        assert counting_store.searches == [("supplier_names", "кран шаровой", 5)]

    @pytest.mark.asyncio
    async def test_confidence_threshold(self, store):
        engine = make_engine(store, confidence_threshold=6.0)
        result = await engine.resolve("пеноплэкс")
        assert [r.entry_id for r in result] == [1]

    @pytest.mark.asyncio
    async def test_limit_argument(self, engine):
        result = await engine.resolve("кран шаровой", limit=1)
        assert len(result) == 1

    @pytest.mark.asyncio
    async def test_zero_limit(self, engine):
        result = await engine.resolve("кран шаровой", limit=0)
        assert len(result) == 0

    @pytest.mark.asyncio
    async def test_max_suggestions(self, store):
        engine = make_engine(store, max_suggestions=2)
        result = await engine.resolve(SCENARIO_TECHNICAL)
        assert len(result) == 2

    @pytest.mark.asyncio
    async def test_generator_timeout(self):
        store = CountingStore(catalog_tables(), delay=0.5)
        engine = MatchEngine(store, config=MatchConfig(generator_timeout=0.01))
        with pytest.raises(PartialResultError):
            await engine.resolve("пеноплэкс")

    @pytest.mark.asyncio
    async def test_custom_catalog_table(self):
        tables = {"products": [{"id": "p1", "name": "Кран латунный"}]}
        engine = make_engine(CountingStore(tables), catalog_table="products")
        result = await engine.resolve("кран")
        assert [r.entry_id for r in result] == ["p1"]


# =====================================================================
# 4. Concurrency and ordering
# =====================================================================


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_generators_run_concurrently(self):
        store = CountingStore(catalog_tables(), delay=0.01)
        engine = make_engine(store)

        result = await engine.resolve("труба стальная электросварная прямошовная")

        assert result.archetype is Archetype.MIXED
        assert store.max_in_flight >= 2

    @pytest.mark.asyncio
    async def test_equal_scores_keep_plan_order(self, engine):
        result = await engine.resolve("кран шаровой")

        assert [r.entry_id for r in result[:2]] == [7, 8]
        assert result[0].final_score == result[1].final_score

    @pytest.mark.asyncio
    async def test_concurrent_calls_share_dictionary_load(self):
        store = CountingStore(
            {**catalog_tables(), "material_synonyms": [{"canonical": "труба", "alias": "трубка"}]},
            delay=0.01,
        )
        synonyms = SynonymDictionary(store, "material_synonyms")
        engine = MatchEngine(store, synonyms=synonyms)

        results = await asyncio.gather(*(engine.resolve("кран шаровой") for _ in range(5)))

        assert synonyms.load_count == 1
        assert store.counts == ["material_synonyms"]
        assert all(r[0].entry_id == 7 for r in results)


# =====================================================================
# 5. Units and stats
# =====================================================================


class TestUnitsAndStats:
    @pytest.mark.asyncio
    async def test_resolve_unit(self, engine):
        match = await engine.resolve_unit("кв.м")
        assert match.unit.id == "u-m2"
        assert match.confidence is UnitConfidence.SYNONYM

    @pytest.mark.asyncio
    async def test_resolve_units_in_order(self, engine):
        matches = await engine.resolve_units(["шт", "кубм", "???"])
        assert [m.confidence for m in matches] == [
            UnitConfidence.EXACT,
            UnitConfidence.FUZZY,
            UnitConfidence.NONE,
        ]

    @pytest.mark.asyncio
    async def test_units_not_configured(self, store):
        engine = MatchEngine(store)
        with pytest.raises(ConfigurationError):
            await engine.resolve_unit("шт")

    @pytest.mark.asyncio
    async def test_metrics(self, engine):
        await engine.resolve("пеноплэкс")
        await engine.resolve("гвоздь")

        snapshot = engine.stats()["metrics"]
        assert snapshot["total_resolutions"] == 2
        assert snapshot["successful_resolutions"] == 1
        assert snapshot["mode_usage"] == {"hybrid": 2}
        assert snapshot["average_confidence"] == pytest.approx(7.2)

    @pytest.mark.asyncio
    async def test_reset_reloads_dictionaries(self, engine):
        await engine.initialize()
        assert engine.stats()["units"]["initialized"]

        engine.reset()
        assert not engine.stats()["synonyms"]["initialized"]
        assert not engine.stats()["units"]["initialized"]

        await engine.resolve("пеноплэкс")
        assert engine.synonyms.load_count == 2
