"""GeoJSON builders shared by the test modules."""

from typing import Any, Dict, List, Sequence


def square_ring(x0: float, y0: float, size: float) -> List[List[float]]:
    """Closed square ring with lower-left corner (x0, y0)."""
    return [
        [x0, y0],
        [x0, y0 + size],
        [x0 + size, y0 + size],
        [x0 + size, y0],
        [x0, y0],
    ]


def multipolygon_feature(
    parts: Sequence[Sequence[Sequence[Sequence[float]]]], **properties: Any
) -> Dict[str, Any]:
    """Area feature with a MultiPolygon geometry."""
    return {
        "type": "Feature",
        "geometry": {"type": "MultiPolygon", "coordinates": [list(p) for p in parts]},
        "properties": dict(properties),
    }


def point_feature(x: float, y: float, **properties: Any) -> Dict[str, Any]:
    """Point feature."""
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [x, y]},
        "properties": dict(properties),
    }


def feature_collection(features: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": "FeatureCollection", "features": list(features)}

