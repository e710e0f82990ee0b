"""
Region definition builder.

ARCHITECTURAL OVERVIEW:
=======================
Responsibility: Convert each area feature's raw ring coordinate arrays into
an immutable RegionDefinition, once per run.

For every area (identifier = input position), every polygon part and every
ring, in input order, coordinate pairs become Points. An area always gets
an entry, even with zero parts. No bounds checking or filtering is done:
empty or degenerate rings are carried through untouched and simply never
contain anything.

Accepted area geometries:
- MultiPolygon: one PolygonPart per polygon
- Polygon: a single PolygonPart
- anything else (or null): zero parts, logged as a warning

For Navigation: Use VS Code outline (Ctrl+Shift+O)
"""

import logging
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from area_point_count.models import (
    Bounds,
    PolygonPart,
    RegionDefinition,
    Ring,
    freeze_definition,
)

logger = logging.getLogger(__name__)

# Raw GeoJSON coordinate nesting for one area: parts -> rings -> positions
RawParts = Sequence[Sequence[Sequence[Sequence[float]]]]


# ═══════════════════════════════════════════════════════════════════════════
# 📐 COORDINATE EXTRACTION
# ═══════════════════════════════════════════════════════════════════════════


def feature_polygon_parts(feature: Mapping[str, Any], area_id: int = -1) -> RawParts:
    """
    Extract the nested part/ring/position arrays of an area feature.

    Args:
        feature: GeoJSON Feature dictionary
        area_id: Position of the feature, used for log messages only

    Returns:
        List of parts, each a list of rings, each a list of [x, y] pairs.
    """
    geometry = feature.get("geometry") or {}
    geom_type = geometry.get("type")
    coordinates = geometry.get("coordinates") or []

    if geom_type == "MultiPolygon":
        return coordinates
    if geom_type == "Polygon":
        return [coordinates]

    logger.warning(
        f"   ⚠️ Area {area_id}: unsupported geometry type {geom_type!r}, "
        "no parts built"
    )
    return []


# ═══════════════════════════════════════════════════════════════════════════
# 🏗️ DEFINITION BUILDING
# ═══════════════════════════════════════════════════════════════════════════


def build_polygon_part(rings: Sequence[Sequence[Sequence[float]]]) -> PolygonPart:
    """Convert one polygon's ring arrays into a PolygonPart."""
    return PolygonPart(tuple(Ring.from_coordinates(ring) for ring in rings))


def build_region_definition(
    area_features: Sequence[Mapping[str, Any]],
) -> RegionDefinition:
    """
    Build the RegionDefinition for a sequence of area features.

    Pure function of its input: calling it twice on the same features gives
    structurally equal definitions.

    Args:
        area_features: GeoJSON area Feature dictionaries, in input order

    Returns:
        Read-only mapping of area index -> tuple of PolygonParts
    """
    parts_by_area: Dict[int, Tuple[PolygonPart, ...]] = {}
    for area_id, feature in enumerate(area_features):
        raw_parts = feature_polygon_parts(feature, area_id)
        parts_by_area[area_id] = tuple(build_polygon_part(p) for p in raw_parts)

    n_parts = sum(len(parts) for parts in parts_by_area.values())
    logger.debug(f"   🔷 Built {len(parts_by_area)} area definitions ({n_parts} parts)")
    return freeze_definition(parts_by_area)


def region_bounds(definition: RegionDefinition) -> Dict[int, Bounds]:
    """
    Compute one bounding box per area.

    Areas with no coordinates get an empty box.
    """
    results: Dict[int, Bounds] = {}
    for area_id, parts in definition.items():
        bounds = Bounds()
        for part in parts:
            bounds = bounds.union(part.bounds)
        results[area_id] = bounds
    return results


def definition_stats(definition: RegionDefinition) -> Dict[str, int]:
    """Area, part, ring and vertex totals for logging."""
    parts: List[PolygonPart] = [p for ps in definition.values() for p in ps]
    rings = [r for p in parts for r in p.rings]
    return {
        "areas": len(definition),
        "parts": len(parts),
        "rings": len(rings),
        "vertices": sum(len(r) for r in rings),
    }
