"""
Geometry Layer

Pure region building and containment tests. No counters, no I/O.
"""

from area_point_count.geometry.builder import (
    build_region_definition,
    build_polygon_part,
    definition_stats,
    feature_polygon_parts,
    region_bounds,
)
from area_point_count.geometry.containment import (
    crossing_count,
    part_contains,
    ring_contains,
)

__all__ = [
    "build_region_definition",
    "build_polygon_part",
    "definition_stats",
    "feature_polygon_parts",
    "region_bounds",
    "crossing_count",
    "part_contains",
    "ring_contains",
]
