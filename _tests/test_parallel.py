"""
Unit tests for parallel point-chunk aggregation.

Tests:
1. should_use_parallel() decision reasons
2. Worker count capping
3. Chunking preserves order and coverage
4. Parallel result identical to the sequential scan
5. Sequential fallback when dispatch fails

Run with: python -m pytest _tests/test_parallel.py -v
"""

import random

import pytest

from area_point_count.aggregation.aggregator import aggregate, count_points
from area_point_count.aggregation.parallel import (
    chunk_points,
    count_points_parallel,
    get_effective_worker_count,
    should_use_parallel,
)
from area_point_count.config_types import AppConfig, ParallelConfig
from area_point_count.geometry.builder import build_region_definition
from area_point_count.models import Point

from helpers import multipolygon_feature


def parallel_config(**overrides) -> AppConfig:
    """Small-input parallel settings using the in-process threading backend."""
    settings = dict(
        enabled=True,
        max_workers=2,
        min_points_for_parallel=0,
        chunk_size=25,
        backend="threading",
    )
    settings.update(overrides)
    return AppConfig(parallel=ParallelConfig(**settings))


@pytest.fixture
def random_points():
    rng = random.Random(42)
    return [Point(rng.uniform(-20, 130), rng.uniform(-20, 130)) for _ in range(230)]


# ============================================================================
# DECISION LOGIC
# ============================================================================


class TestShouldUseParallel:
    """Decision and reason strings."""

    def test_disabled(self):
        use, reason = should_use_parallel(10**6, parallel_config(enabled=False))
        assert not use
        assert "disabled" in reason

    def test_single_worker(self):
        use, reason = should_use_parallel(10**6, parallel_config(max_workers=1))
        assert not use
        assert "Single worker" in reason

    def test_below_threshold(self):
        use, reason = should_use_parallel(100, parallel_config(min_points_for_parallel=1000))
        assert not use
        assert "threshold" in reason

    def test_fits_in_one_chunk(self):
        use, reason = should_use_parallel(25, parallel_config(chunk_size=25))
        assert not use
        assert "one chunk" in reason

    def test_enabled(self):
        use, reason = should_use_parallel(26, parallel_config(chunk_size=25))
        assert use
        assert reason.startswith("OK")

    def test_defaults_stay_sequential_for_small_inputs(self):
        use, _ = should_use_parallel(1000, AppConfig())
        assert not use


class TestWorkerCount:
    """Effective worker count."""

    def test_never_more_workers_than_chunks(self):
        assert get_effective_worker_count(3, parallel_config(max_workers=8)) == 3

    def test_explicit_workers(self):
        assert get_effective_worker_count(100, parallel_config(max_workers=4)) == 4

    def test_auto_is_capped_by_default(self):
        config = parallel_config(max_workers=-1, optimal_workers_default=2)
        assert 1 <= get_effective_worker_count(100, config) <= 2

    def test_at_least_one(self):
        assert get_effective_worker_count(0, parallel_config()) == 1


class TestChunkPoints:
    """Chunk boundaries."""

    def test_chunks_cover_all_points_in_order(self, random_points):
        chunks = chunk_points(random_points, 25)

        assert [len(c) for c in chunks] == [25] * 9 + [5]
        assert [p for chunk in chunks for p in chunk] == random_points

    def test_empty_input(self):
        assert chunk_points([], 10) == []

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            chunk_points([Point(0, 0)], 0)


# ============================================================================
# EQUIVALENCE
# ============================================================================


class TestParallelEquivalence:
    """Partition-then-merge gives the sequential counters."""

    @pytest.fixture
    def definition(self, square_area, holed_area, two_part_area):
        return build_region_definition(
            [square_area, holed_area, two_part_area, multipolygon_feature([])]
        )

    def test_counters_match_sequential(self, definition, random_points):
        sequential = count_points(definition, random_points)
        parallel = count_points_parallel(definition, random_points, parallel_config())

        assert parallel == sequential

    def test_total_is_full_point_count(self, definition, random_points):
        parallel = count_points_parallel(definition, random_points, parallel_config())

        for area_id, total in parallel.totals.items():
            assert total == len(random_points)
        assert 3 not in parallel.totals

    def test_without_bounds_filter(self, definition, random_points):
        config = parallel_config().with_overrides(
            aggregation={"use_bounds_filter": False},
            parallel={"max_workers": 2, "min_points_for_parallel": 0,
                      "chunk_size": 25, "backend": "threading"},
        )
        assert count_points_parallel(definition, random_points, config) == count_points(
            definition, random_points
        )

    def test_aggregate_takes_parallel_path(self, square_area, random_points, caplog):
        features = [square_area]
        definition = build_region_definition(features)

        with caplog.at_level("INFO", logger="area_point_count"):
            aggregate(definition, random_points, features, parallel_config())

        assert "Using parallel processing" in caplog.text
        expected = count_points(definition, random_points)
        assert square_area["properties"]["count"] == expected.count(0)


class TestFallback:
    """Dispatch failures fall back to an inline scan."""

    def test_runtime_error_falls_back(self, monkeypatch, square_area, random_points):
        import joblib

        class BrokenParallel:
            def __init__(self, *args, **kwargs):
                pass

            def __call__(self, tasks):
                raise RuntimeError("pool unavailable")

        monkeypatch.setattr(joblib, "Parallel", BrokenParallel)
        definition = build_region_definition([square_area])

        result = count_points_parallel(definition, random_points, parallel_config())
        assert result == count_points(definition, random_points)

    def test_no_fallback_reraises(self, monkeypatch, square_area, random_points):
        import joblib

        class BrokenParallel:
            def __init__(self, *args, **kwargs):
                pass

            def __call__(self, tasks):
                raise RuntimeError("pool unavailable")

        monkeypatch.setattr(joblib, "Parallel", BrokenParallel)
        definition = build_region_definition([square_area])

        with pytest.raises(RuntimeError):
            count_points_parallel(
                definition, random_points, parallel_config(fallback_on_error=False)
            )
