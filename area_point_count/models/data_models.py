"""
Typed geometry models for point-in-area aggregation.

Architectural Overview:
=======================
Immutable value types for the region definition built once per run:

    RegionDefinition  area_id -> (PolygonPart, ...)
    PolygonPart       (Ring, ...)   ring 0 outer by convention, rest holes
    Ring              (Point, ...)  closed by convention, never validated
    Point             (x, y)        x = longitude, y = latitude

Key Interactions:
-----------------
- Input: geometry.builder converts raw GeoJSON coordinate arrays into these
- Output: geometry.containment and aggregation read them, never mutate them
- Navigation: Use VS Code outline (Ctrl+Shift+O) for quick navigation

Rings precompute numpy coordinate arrays and a bounding box at construction
so the containment scan does not rebuild them per point. Those derived
values are not dataclass fields and take no part in equality.
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, NamedTuple, Sequence, Tuple

import numpy as np


# ═══════════════════════════════════════════════════════════════════════════
# 📍 POINT
# ═══════════════════════════════════════════════════════════════════════════


class Point(NamedTuple):
    """A 2-D coordinate pair (x = longitude, y = latitude)."""

    x: float
    y: float

    @classmethod
    def from_coordinates(cls, coords: Sequence[float]) -> "Point":
        """Create a Point from a GeoJSON ``[x, y, ...]`` position."""
        return cls(float(coords[0]), float(coords[1]))


# ═══════════════════════════════════════════════════════════════════════════
# 📦 BOUNDS
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box.

    A new box is empty (min = +inf, max = -inf) and grows with ``extend``.
    An empty box contains and overlaps nothing.
    """

    min_x: float = math.inf
    min_y: float = math.inf
    max_x: float = -math.inf
    max_y: float = -math.inf

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "Bounds":
        """Smallest box holding every point."""
        bounds = cls()
        for point in points:
            bounds = bounds.extend(point)
        return bounds

    @property
    def is_empty(self) -> bool:
        """True if no point has been added."""
        return self.min_x > self.max_x or self.min_y > self.max_y

    def extend(self, point: Point) -> "Bounds":
        """Return a box grown to include ``point``."""
        return Bounds(
            min(self.min_x, point.x),
            min(self.min_y, point.y),
            max(self.max_x, point.x),
            max(self.max_y, point.y),
        )

    def union(self, other: "Bounds") -> "Bounds":
        """Return the smallest box holding both boxes."""
        return Bounds(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def overlaps(self, other: "Bounds") -> bool:
        """True if the two boxes share at least one point (edges included)."""
        return (
            self.min_x <= other.max_x
            and self.min_y <= other.max_y
            and self.max_x >= other.min_x
            and self.max_y >= other.min_y
        )

    def contains_point(self, point: Point) -> bool:
        """True if ``point`` lies inside the closed box."""
        return (
            self.min_x <= point.x <= self.max_x
            and self.min_y <= point.y <= self.max_y
        )

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """(minx, miny, maxx, maxy) in shapely order."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)


# ═══════════════════════════════════════════════════════════════════════════
# 💍 RING
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Ring:
    """Ordered sequence of points forming one polygon boundary.

    Closure and orientation are not validated. Rings with fewer than three
    vertices are kept as-is and simply never contain a point.
    """

    points: Tuple[Point, ...]

    def __post_init__(self) -> None:
        """Precompute coordinate arrays and bounds for the containment scan."""
        coords = np.array(
            [(p.x, p.y) for p in self.points], dtype=float
        ).reshape(-1, 2)
        xs = coords[:, 0]
        ys = coords[:, 1]
        xs.flags.writeable = False
        ys.flags.writeable = False
        object.__setattr__(self, "_xs", xs)
        object.__setattr__(self, "_ys", ys)
        object.__setattr__(self, "_bounds", Bounds.from_points(self.points))

    @classmethod
    def from_coordinates(cls, coords: Iterable[Sequence[float]]) -> "Ring":
        """Create a Ring from GeoJSON ``[[x, y], ...]`` positions."""
        return cls(tuple(Point.from_coordinates(c) for c in coords))

    @property
    def xs(self) -> np.ndarray:
        """Read-only array of x coordinates."""
        return self._xs

    @property
    def ys(self) -> np.ndarray:
        """Read-only array of y coordinates."""
        return self._ys

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    def __len__(self) -> int:
        return len(self.points)


# ═══════════════════════════════════════════════════════════════════════════
# 🔷 POLYGON PART
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class PolygonPart:
    """One contiguous piece of an area: an outer ring plus optional holes.

    The containment rule only counts how many rings hold a point, so
    ``outer``/``holes`` are descriptive accessors and nothing more.
    """

    rings: Tuple[Ring, ...]

    @property
    def outer(self) -> Ring:
        return self.rings[0]

    @property
    def holes(self) -> Tuple[Ring, ...]:
        return self.rings[1:]

    @property
    def bounds(self) -> Bounds:
        """Bounds over every ring of the part."""
        bounds = Bounds()
        for ring in self.rings:
            bounds = bounds.union(ring.bounds)
        return bounds

    def __len__(self) -> int:
        return len(self.rings)


# ═══════════════════════════════════════════════════════════════════════════
# 🗺️ REGION DEFINITION
# ═══════════════════════════════════════════════════════════════════════════

# Read-only mapping of area identifier (input position) to its parts
RegionDefinition = Mapping[int, Tuple[PolygonPart, ...]]


def freeze_definition(
    parts_by_area: Dict[int, Tuple[PolygonPart, ...]],
) -> RegionDefinition:
    """Wrap a parts mapping so it cannot be mutated after construction."""
    return MappingProxyType(dict(parts_by_area))
