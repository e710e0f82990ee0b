"""Data models package for typed region geometry."""

from .data_models import (
    Bounds,
    Point,
    PolygonPart,
    RegionDefinition,
    Ring,
    freeze_definition,
)

__all__ = [
    "Bounds",
    "Point",
    "PolygonPart",
    "RegionDefinition",
    "Ring",
    "freeze_definition",
]
