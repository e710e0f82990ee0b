"""
Point-to-area aggregation.

ARCHITECTURAL OVERVIEW:
=======================
Responsibility: Scan every point against every area and accumulate the
per-area ``count``/``total`` counters, then write them to the area features.

Rule per point P, per area A, per part G of A (parts in input order):
    matched = crossing_count(P, G.rings) is odd
    matched     -> A.count += 1, skip the remaining parts of A for P
    not matched -> A.total = number of input points, if A.total is unset

Areas are independent; a match in one area never stops evaluation of the
others for the same point. Only the first matching part counts, so each
point adds at most one to any area.

With a bounds map, a point outside an area's bounding box cannot match any
part, so the ring scan is skipped and only the first part's failure is
recorded. The counters come out identical.

For Navigation: Use VS Code outline (Ctrl+Shift+O)
"""

import logging
import time
from typing import Any, Dict, MutableMapping, Optional, Sequence, Union

from area_point_count.aggregation.counters import AreaCounters
from area_point_count.config_types import AppConfig
from area_point_count.geometry.builder import region_bounds
from area_point_count.geometry.containment import part_contains
from area_point_count.models import Bounds, Point, RegionDefinition

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# 🎯 CORE SCAN
# ═══════════════════════════════════════════════════════════════════════════


def count_points(
    definition: RegionDefinition,
    points: Sequence[Point],
    total_points: Optional[int] = None,
    bounds: Optional[Dict[int, Bounds]] = None,
) -> AreaCounters:
    """
    Run the exhaustive point x area x part scan.

    Args:
        definition: Region definition from build_region_definition
        points: Points to attribute, in input order
        total_points: Fallback value for ``total`` (defaults to len(points));
            chunked callers pass the full input size
        bounds: Optional per-area bounding boxes for early rejection

    Returns:
        AreaCounters with a zero count for every area in ``definition``.
    """
    if total_points is None:
        total_points = len(points)

    counters = AreaCounters.for_areas(definition.keys())

    for point in points:
        for area_id, parts in definition.items():
            if not parts:
                continue

            if bounds is not None and not bounds[area_id].contains_point(point):
                counters.record_fallback(area_id, total_points)
                continue

            for part in parts:
                if part_contains(point, part):
                    counters.increment(area_id)
                    break
                counters.record_fallback(area_id, total_points)

    return counters


# ═══════════════════════════════════════════════════════════════════════════
# 🚀 AGGREGATION ENTRY POINT
# ═══════════════════════════════════════════════════════════════════════════


def _normalize_config(config: Union[Dict[str, Any], AppConfig, None]) -> AppConfig:
    """Accept a raw CONFIG dict, an AppConfig, or None (defaults)."""
    if config is None:
        return AppConfig()
    if isinstance(config, AppConfig):
        return config
    return AppConfig.from_dict(config)


def aggregate(
    definition: RegionDefinition,
    points: Sequence[Point],
    area_features: Sequence[MutableMapping[str, Any]],
    config: Union[Dict[str, Any], AppConfig, None] = None,
) -> AreaCounters:
    """
    Attribute points to areas and write the counters into the area features.

    Every area feature ends with an integer ``count`` property; ``total`` is
    added only where the one-shot fallback fired.

    Args:
        definition: Region definition built from ``area_features``
        points: Points to attribute
        area_features: Area Feature dictionaries, mutated in place
        config: CONFIG dict or AppConfig (None = defaults)

    Returns:
        The AreaCounters that were applied.
    """
    from area_point_count.aggregation.parallel import (
        count_points_parallel,
        should_use_parallel,
    )

    app_config = _normalize_config(config)
    start = time.perf_counter()
    logger.info(f"features count ({len(points)})")

    use_parallel, reason = should_use_parallel(len(points), app_config)
    if use_parallel:
        logger.info(f"   ⚡ Using parallel processing: {reason}")
        counters = count_points_parallel(definition, points, app_config)
    else:
        logger.debug(f"   📋 Sequential scan: {reason}")
        bounds = (
            region_bounds(definition)
            if app_config.aggregation.use_bounds_filter
            else None
        )
        counters = count_points(definition, points, bounds=bounds)

    counters.apply(area_features)

    elapsed = time.perf_counter() - start
    matched = sum(counters.counts.values())
    logger.info(
        f"   ✅ Attributed {matched} point-area matches across "
        f"{len(definition)} areas in {elapsed:.2f}s"
    )
    return counters
