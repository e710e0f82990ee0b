#!/usr/bin/env python3
"""
Report Assembly and Per-Area Summary

ARCHITECTURAL OVERVIEW:
=======================
Responsibility: Turn the enriched area collection into the output document,
and optionally into a per-area summary table.

Key Functions:
1. assemble_report(): enriched FeatureCollection -> JSON text
2. build_summary_frame(): one row per area (counts, parts, extent) as a
   GeoDataFrame whose geometry is the area's bounding box
3. export_summary_csv(): write the summary with pandas
4. log_summary(): compact per-area log lines

The summary never parses the area geometries themselves; it reads the
RegionDefinition so degenerate rings cannot break reporting.

For Navigation: Use VS Code outline (Ctrl+Shift+O)
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import geopandas as gpd
import pandas as pd
from shapely.geometry import box

from area_point_count.aggregation.counters import COUNT_PROPERTY, TOTAL_PROPERTY
from area_point_count.errors import SerializationError
from area_point_count.geojson_io import dump_feature_collection, feature_names
from area_point_count.geometry.builder import region_bounds
from area_point_count.models import RegionDefinition

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "area_id",
    "name",
    "parts",
    "rings",
    "count",
    "total",
    "min_x",
    "min_y",
    "max_x",
    "max_y",
]


# ═══════════════════════════════════════════════════════════════════════════
# 📤 OUTPUT DOCUMENT
# ═══════════════════════════════════════════════════════════════════════════


def assemble_report(collection: Dict[str, Any], indent: Optional[int] = None) -> str:
    """Serialize the enriched area collection (SerializationError on failure)."""
    return dump_feature_collection(collection, indent=indent)


# ═══════════════════════════════════════════════════════════════════════════
# 📊 SUMMARY TABLE
# ═══════════════════════════════════════════════════════════════════════════


def _total_column(values: pd.Series) -> pd.Series:
    """
    Normalise ``total`` for the summary.

    Input files may already carry a ``total`` of any JSON type. Non-numbers
    become NA; the column is a nullable integer when every number is whole,
    otherwise float.
    """
    numbers = [
        v if isinstance(v, (int, float)) and not isinstance(v, bool) else None
        for v in values
    ]
    column = pd.Series(numbers, index=values.index, dtype="float64")
    present = column.dropna()
    if ((present % 1 == 0) & (present.abs() < 2**53)).all():
        return column.astype("Int64")
    return column


def build_summary_frame(
    collection: Dict[str, Any],
    definition: RegionDefinition,
    name_property: str = "name",
) -> gpd.GeoDataFrame:
    """
    Build one summary row per area.

    Args:
        collection: Enriched area FeatureCollection
        definition: RegionDefinition built from the same collection
        name_property: Property used for the ``name`` column

    Returns:
        GeoDataFrame (no CRS, coordinates as given) with SUMMARY_COLUMNS and
        a bounding-box geometry; empty areas get a null geometry.
    """
    features = collection.get("features", [])
    names = feature_names(features, name_property)
    bounds_by_area = region_bounds(definition)

    rows = []
    geometries = []
    for area_id, feature in enumerate(features):
        properties = feature.get("properties") or {}
        parts = definition.get(area_id, ())
        bounds = bounds_by_area.get(area_id)
        empty = bounds is None or bounds.is_empty
        rows.append(
            {
                "area_id": area_id,
                "name": names[area_id],
                "parts": len(parts),
                "rings": sum(len(part) for part in parts),
                "count": properties.get(COUNT_PROPERTY, 0),
                "total": properties.get(TOTAL_PROPERTY),
                "min_x": None if empty else bounds.min_x,
                "min_y": None if empty else bounds.min_y,
                "max_x": None if empty else bounds.max_x,
                "max_y": None if empty else bounds.max_y,
            }
        )
        geometries.append(None if empty else box(*bounds.as_tuple()))

    frame = pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
    # Object dtype keeps missing names as None under the pandas string dtype
    frame["name"] = pd.Series(names, index=frame.index, dtype=object)
    frame["total"] = _total_column(frame["total"])
    return gpd.GeoDataFrame(frame, geometry=geometries)


def export_summary_csv(
    summary: gpd.GeoDataFrame, path: Union[str, Path]
) -> Path:
    """
    Write the summary table to CSV (geometry as WKT).

    Raises:
        SerializationError: If the file cannot be written
    """
    path = Path(path)
    frame = pd.DataFrame(summary.drop(columns="geometry"))
    frame["bbox_wkt"] = summary.geometry.to_wkt()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(path, index=False)
    except OSError as e:
        raise SerializationError(f"error writing {path}, error: {e}", str(path)) from e

    logger.info(f"📤 Summary CSV written: {path} ({len(frame)} areas)")
    return path


def log_summary(summary: gpd.GeoDataFrame, log: Optional[logging.Logger] = None) -> None:
    """Log one line per area plus the grand total."""
    log = log or logger
    log.info("=" * 60)
    log.info("AREA SUMMARY")
    log.info("=" * 60)
    for row in summary[SUMMARY_COLUMNS].to_dict("records"):
        label = row["name"] if isinstance(row["name"], str) else f"area {row['area_id']}"
        total = "-" if pd.isna(row["total"]) else row["total"]
        log.info(
            f"   • {label}: count={row['count']} total={total} parts={row['parts']}"
        )
    log.info(f"   📊 Areas: {len(summary)}, attributed points: {int(summary['count'].sum())}")
