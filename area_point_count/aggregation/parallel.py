"""
Parallel point-chunk aggregation.

ARCHITECTURAL OVERVIEW:
=======================
Responsibility: Split the point list into chunks, scan each chunk in a
joblib worker, and merge the partial counters (partition-then-merge).

Why merging is exact:
- count: each point touches only its own chunk's counters, so per-area
  counts add up
- total: the fallback value is always the full input point count, so
  whichever chunk records it first writes the same number

Follows the project's parallel dispatch pattern:
- should_use_parallel() decides from config and input size
- Inputs are prepared ONCE before dispatch (plain dict, picklable)
- joblib Parallel with delayed for process-based parallelism
- Sequential fallback on dispatch errors when configured

For Navigation: Use VS Code outline (Ctrl+Shift+O)
"""

import logging
import os
import time
from typing import Dict, List, Optional, Sequence, Tuple

from area_point_count.aggregation.aggregator import count_points
from area_point_count.aggregation.counters import AreaCounters
from area_point_count.config_types import AppConfig
from area_point_count.geometry.builder import region_bounds
from area_point_count.models import Bounds, Point, PolygonPart, RegionDefinition

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# 🔍 PARALLEL DECISION LOGIC
# ═══════════════════════════════════════════════════════════════════════════


def should_use_parallel(n_points: int, config: AppConfig) -> Tuple[bool, str]:
    """
    Determine if parallel processing should be used.

    Args:
        n_points: Number of input points.
        config: AppConfig instance.

    Returns:
        Tuple of (should_use: bool, reason: str).
    """
    parallel_config = config.parallel

    if not parallel_config.enabled:
        return False, "Parallel disabled in config"

    if parallel_config.max_workers == 1:
        return False, "Single worker configured"

    if n_points < parallel_config.min_points_for_parallel:
        return False, (
            f"Only {n_points} points "
            f"(< {parallel_config.min_points_for_parallel} threshold)"
        )

    if n_points <= parallel_config.chunk_size:
        return False, f"All {n_points} points fit in one chunk"

    try:
        from joblib import Parallel, delayed  # noqa: F401
    except ImportError:
        return False, "joblib not installed"

    return True, f"OK ({n_points} points)"


def get_effective_worker_count(n_chunks: int, config: AppConfig) -> int:
    """
    Calculate worker count based on chunk count and config.

    Args:
        n_chunks: Number of chunks to process.
        config: AppConfig instance.

    Returns:
        Number of workers to use (at least 1).
    """
    max_workers = config.parallel.max_workers

    if max_workers == -1:
        cpu_count = os.cpu_count() or 4
        max_workers = min(cpu_count, config.parallel.optimal_workers_default)

    # Don't use more workers than chunks
    return max(1, min(max_workers, n_chunks))


# ═══════════════════════════════════════════════════════════════════════════
# 📦 CHUNKING
# ═══════════════════════════════════════════════════════════════════════════


def chunk_points(points: Sequence[Point], chunk_size: int) -> List[List[Point]]:
    """Split points into consecutive chunks of at most ``chunk_size``."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
    return [
        list(points[i : i + chunk_size]) for i in range(0, len(points), chunk_size)
    ]


def _worker_count_chunk(
    parts_by_area: Dict[int, Tuple[PolygonPart, ...]],
    chunk: List[Point],
    total_points: int,
    bounds: Optional[Dict[int, Bounds]],
) -> AreaCounters:
    """Thin worker: scan one chunk and return its partial counters."""
    return count_points(parts_by_area, chunk, total_points=total_points, bounds=bounds)


# ═══════════════════════════════════════════════════════════════════════════
# ⚡ PARALLEL DISPATCH
# ═══════════════════════════════════════════════════════════════════════════


def count_points_parallel(
    definition: RegionDefinition,
    points: Sequence[Point],
    config: AppConfig,
) -> AreaCounters:
    """
    Scan point chunks in parallel and merge the partial counters.

    Args:
        definition: Region definition
        points: All input points
        config: AppConfig instance

    Returns:
        Merged AreaCounters, identical to a sequential count_points run.
    """
    from joblib import Parallel, delayed

    parallel_config = config.parallel
    total_points = len(points)
    chunks = chunk_points(points, parallel_config.chunk_size)
    n_workers = get_effective_worker_count(len(chunks), config)

    bounds = (
        region_bounds(definition) if config.aggregation.use_bounds_filter else None
    )
    # MappingProxyType does not pickle; workers get a plain dict
    parts_by_area = dict(definition)

    logger.info(
        f"🚀 Dispatching {len(chunks)} chunks of <= {parallel_config.chunk_size} "
        f"points to {n_workers} workers..."
    )

    try:
        dispatch_start = time.time()
        partials = list(
            Parallel(
                n_jobs=n_workers,
                backend=parallel_config.backend,
                verbose=parallel_config.verbose,
            )(
                delayed(_worker_count_chunk)(parts_by_area, chunk, total_points, bounds)
                for chunk in chunks
            )
        )
        logger.info(
            f"   ⏱️ Parallel dispatch completed in {time.time() - dispatch_start:.1f}s"
        )
    except (ImportError, RuntimeError, OSError) as e:
        logger.warning(f"⚠️ Parallel dispatch failed: {e}")
        if not parallel_config.fallback_on_error:
            raise
        logger.info("📋 Falling back to inline sequential processing...")
        partials = [
            _worker_count_chunk(parts_by_area, chunk, total_points, bounds)
            for chunk in chunks
        ]

    merged = AreaCounters.for_areas(definition.keys())
    for partial in partials:
        merged.merge(partial)
    return merged
