#!/usr/bin/env python3
"""
GeoJSON Feature Collection Loading and Serialization

ARCHITECTURAL OVERVIEW:
=======================
Responsibility: Read the area and point collections from disk, check their
structure, and re-encode the enriched area collection. This is the only
place that raises InputReadError, ParseError or SerializationError.

Key Features:
1. Read + JSON-decode a FeatureCollection (read and parse errors kept apart)
2. Area features: coordinates must be numeric [x, y] pairs at the depth the
   geometry type implies; ring lengths are NOT checked (empty or degenerate
   rings are the geometry core's concern and silently match nothing)
3. Point features: position checked as numeric, then parsed through shapely
   and must be a Point
4. Coordinates are JSON numbers only; numeric strings and booleans fail
5. Strict JSON output (NaN/Infinity rejected)

Navigation Guide:
- read_feature_collection: Shared file + structure loader
- load_area_features / load_point_features: Per-kind validation
- dump_feature_collection: Output encoding

For Navigation: Use VS Code outline (Ctrl+Shift+O)
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from shapely.errors import ShapelyError
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import shape

from area_point_count.errors import InputReadError, ParseError, SerializationError
from area_point_count.models import Point

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Nesting depth of [x, y] positions below "coordinates" per area geometry type
_AREA_COORDINATE_DEPTH = {"MultiPolygon": 3, "Polygon": 2}


def _reject_constant(name: str) -> float:
    """JSON has no NaN or Infinity; refuse the non-standard literals."""
    raise ValueError(f"non-standard JSON constant {name}")


# ═══════════════════════════════════════════════════════════════════════════
# 📂 FILE LOADING
# ═══════════════════════════════════════════════════════════════════════════


def read_feature_collection(path: PathLike, kind: str = "input") -> Dict[str, Any]:
    """
    Read and decode a GeoJSON FeatureCollection.

    Args:
        path: File path
        kind: "areas" or "points", used in messages

    Returns:
        Decoded FeatureCollection dictionary

    Raises:
        InputReadError: File cannot be opened or read
        ParseError: Contents are not JSON or not a FeatureCollection
    """
    path = Path(path)
    logger.info(f"📂 Loading {kind}: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(f"error reading {path}, error: {e}", str(path)) from e

    try:
        collection = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise ParseError(
            f"error unmarshaling {kind} file {path}, error: {e}", str(path), kind
        ) from e

    if not isinstance(collection, dict) or collection.get("type") != "FeatureCollection":
        raise ParseError(
            f"{path}: expected a GeoJSON FeatureCollection", str(path), kind
        )

    features = collection.get("features")
    if not isinstance(features, list):
        raise ParseError(f"{path}: 'features' must be a list", str(path), kind)

    for i, feature in enumerate(features):
        if not isinstance(feature, dict) or feature.get("type") != "Feature":
            raise ParseError(f"{path}: feature {i} is not a Feature", str(path), kind)
        properties = feature.get("properties")
        if properties is not None and not isinstance(properties, dict):
            raise ParseError(
                f"{path}: feature {i} properties must be an object", str(path), kind
            )

    logger.info(f"   ✅ Loaded {len(features)} features")
    return collection


def _is_number(value: Any) -> bool:
    """JSON numbers only: numeric strings and booleans are rejected."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_positions(coordinates: Any, depth: int) -> None:
    """Raise ValueError unless ``coordinates`` nests numeric [x, y] pairs."""
    if depth == 0:
        if (
            not isinstance(coordinates, list)
            or len(coordinates) < 2
            or not all(_is_number(v) for v in coordinates)
        ):
            raise ValueError(f"invalid position {coordinates!r}")
        return
    if not isinstance(coordinates, list):
        raise ValueError(f"expected a list, got {type(coordinates).__name__}")
    for item in coordinates:
        _check_positions(item, depth - 1)


def load_area_features(path: PathLike) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
    """
    Load the area collection.

    Returns:
        Tuple of (collection, features); features are the collection's own
        list, so property updates show up when the collection is re-encoded.

    Raises:
        InputReadError, ParseError
    """
    collection = read_feature_collection(path, kind="areas")
    features = collection["features"]

    for i, feature in enumerate(features):
        geometry = feature.get("geometry")
        if geometry is None:
            continue
        if not isinstance(geometry, dict):
            raise ParseError(
                f"{path}: area {i} geometry must be an object", str(path), "areas"
            )
        depth = _AREA_COORDINATE_DEPTH.get(geometry.get("type"))
        if depth is None:
            # Unsupported types build zero parts downstream
            continue
        try:
            _check_positions(geometry.get("coordinates"), depth)
        except (TypeError, ValueError) as e:
            raise ParseError(
                f"{path}: area {i} has malformed coordinates: {e}", str(path), "areas"
            ) from e

    return collection, features


def load_point_features(
    path: PathLike,
) -> Tuple[Dict[str, Any], List[Dict[str, Any]], List[Point]]:
    """
    Load the point collection.

    Returns:
        Tuple of (collection, features, points), points in input order.

    Raises:
        InputReadError, ParseError
    """
    collection = read_feature_collection(path, kind="points")
    features = collection["features"]
    points: List[Point] = []

    for i, feature in enumerate(features):
        geometry = feature.get("geometry")
        try:
            if isinstance(geometry, dict) and geometry.get("type") == "Point":
                _check_positions(geometry.get("coordinates"), 0)
            geom = shape(geometry)
        except (ShapelyError, AttributeError, KeyError, TypeError,
                ValueError, IndexError) as e:
            raise ParseError(
                f"{path}: point {i} has invalid geometry: {e}", str(path), "points"
            ) from e
        if not isinstance(geom, ShapelyPoint) or geom.is_empty:
            raise ParseError(
                f"{path}: point {i} geometry must be a Point, got {geom.geom_type}",
                str(path),
                "points",
            )
        points.append(Point(float(geom.x), float(geom.y)))

    return collection, features, points


# ═══════════════════════════════════════════════════════════════════════════
# 📤 OUTPUT
# ═══════════════════════════════════════════════════════════════════════════


def dump_feature_collection(
    collection: Dict[str, Any], indent: Optional[int] = None
) -> str:
    """
    Encode a FeatureCollection as strict JSON.

    Raises:
        SerializationError: Values that JSON cannot represent (NaN, objects)
    """
    try:
        return json.dumps(collection, indent=indent, allow_nan=False, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(f"error producing geojson, error {e}") from e


def write_text(path: PathLike, text: str) -> Path:
    """Write ``text`` to ``path``, creating parent folders."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        raise SerializationError(f"error writing {path}, error: {e}", str(path)) from e
    return path


def feature_names(
    features: Sequence[Dict[str, Any]], name_property: str
) -> List[Optional[str]]:
    """Display names for features (None where the property is missing)."""
    names = []
    for feature in features:
        value = (feature.get("properties") or {}).get(name_property)
        names.append(None if value is None else str(value))
    return names
