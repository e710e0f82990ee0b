"""
Unit tests for the containment evaluator.

Tests:
1. Ring containment for inside/outside points
2. Hole parity via crossing counts
3. Degenerate rings and non-finite points
4. Deterministic boundary results

Run with: python -m pytest _tests/test_containment.py -v
"""

import math

import pytest

from area_point_count.geometry.containment import (
    crossing_count,
    part_contains,
    ring_contains,
)
from area_point_count.models import Point, PolygonPart, Ring

from helpers import square_ring


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def square() -> Ring:
    return Ring.from_coordinates(square_ring(0, 0, 10))


@pytest.fixture
def holed_part() -> PolygonPart:
    return PolygonPart(
        (
            Ring.from_coordinates(square_ring(0, 0, 20)),
            Ring.from_coordinates(square_ring(5, 5, 10)),
        )
    )


# ============================================================================
# RING TESTS
# ============================================================================


class TestRingContains:
    """Crossing-number test against a single ring."""

    def test_point_inside_square(self, square):
        assert ring_contains(Point(5, 5), square)

    @pytest.mark.parametrize("x, y", [(15, 15), (-1, 5), (5, -1), (11, 5), (5, 11)])
    def test_point_outside_square(self, square, x, y):
        assert not ring_contains(Point(x, y), square)

    def test_concave_ring_notch_is_outside(self):
        """Point in the notch of a U shape is outside."""
        u_shape = Ring.from_coordinates(
            [[0, 0], [0, 10], [3, 10], [3, 3], [7, 3], [7, 10], [10, 10], [10, 0], [0, 0]]
        )
        assert not ring_contains(Point(5, 8), u_shape)
        assert ring_contains(Point(1, 8), u_shape)
        assert ring_contains(Point(5, 1), u_shape)

    def test_unclosed_ring_is_implicitly_closed(self):
        """Ring without a repeated closing vertex behaves like the closed one."""
        open_ring = Ring.from_coordinates([[0, 0], [0, 10], [10, 10], [10, 0]])
        assert ring_contains(Point(5, 5), open_ring)
        assert not ring_contains(Point(15, 5), open_ring)

    def test_orientation_does_not_matter(self, square):
        reversed_ring = Ring(tuple(reversed(square.points)))
        assert ring_contains(Point(5, 5), reversed_ring)

    @pytest.mark.parametrize(
        "coords",
        [[], [[1, 1]], [[0, 0], [10, 10]]],
        ids=["empty", "single", "segment"],
    )
    def test_degenerate_ring_contains_nothing(self, coords):
        ring = Ring.from_coordinates(coords)
        assert not ring_contains(Point(5, 5), ring)
        assert not ring_contains(Point(0, 0), ring)

    def test_non_finite_point_is_outside(self, square):
        assert not ring_contains(Point(math.nan, 5), square)
        assert not ring_contains(Point(5, math.nan), square)
        assert not ring_contains(Point(math.inf, 5), square)

    @pytest.mark.parametrize("x, y", [(0, 5), (10, 5), (5, 0), (5, 10), (0, 0), (10, 10)])
    def test_boundary_points_are_deterministic(self, square, x, y):
        """Same boundary point always yields the same answer."""
        first = ring_contains(Point(x, y), square)
        assert all(ring_contains(Point(x, y), square) is first for _ in range(5))

    def test_returns_python_bool(self, square):
        assert ring_contains(Point(5, 5), square) is True
        assert ring_contains(Point(50, 5), square) is False


# ============================================================================
# PART TESTS (EVEN/ODD RULE)
# ============================================================================


class TestHoleParity:
    """Crossing counts and the even/odd rule over a part's rings."""

    def test_point_in_hole_has_even_crossings(self, holed_part):
        assert crossing_count(Point(10, 10), holed_part.rings) == 2
        assert not part_contains(Point(10, 10), holed_part)

    def test_point_between_outer_and_hole_has_odd_crossings(self, holed_part):
        assert crossing_count(Point(2, 2), holed_part.rings) == 1
        assert part_contains(Point(2, 2), holed_part)

    def test_point_outside_everything(self, holed_part):
        assert crossing_count(Point(50, 50), holed_part.rings) == 0
        assert not part_contains(Point(50, 50), holed_part)

    def test_island_inside_hole_counts_as_inside(self, holed_part):
        """Three nested rings: inside all three is odd, so inside."""
        island = Ring.from_coordinates(square_ring(8, 8, 4))
        part = PolygonPart(holed_part.rings + (island,))
        assert crossing_count(Point(10, 10), part.rings) == 3
        assert part_contains(Point(10, 10), part)

    def test_empty_part_contains_nothing(self):
        part = PolygonPart(())
        assert crossing_count(Point(0, 0), part.rings) == 0
        assert not part_contains(Point(0, 0), part)
