"""
Unit tests for the region definition builder.

Tests:
1. One definition entry per area, in input order
2. Build idempotence (structural equality)
3. Polygon / unsupported / null geometries
4. Degenerate rings carried through untouched
5. Bounds helpers

Run with: python -m pytest _tests/test_builder.py -v
"""

import pytest

from area_point_count.geometry.builder import (
    build_region_definition,
    definition_stats,
    feature_polygon_parts,
    region_bounds,
)
from area_point_count.models import Bounds, Point

from helpers import multipolygon_feature, square_ring


class TestBuildRegionDefinition:
    """Structure of the built definition."""

    def test_one_entry_per_area_in_order(self, square_area, holed_area, two_part_area):
        definition = build_region_definition([square_area, holed_area, two_part_area])

        assert list(definition.keys()) == [0, 1, 2]
        assert [len(parts) for parts in definition.values()] == [1, 1, 2]
        assert len(definition[1][0].rings) == 2

    def test_points_preserve_coordinate_order(self, square_area):
        definition = build_region_definition([square_area])
        ring = definition[0][0].outer

        assert ring.points == tuple(Point(x, y) for x, y in square_ring(0, 0, 10))
        assert ring.points[0] == Point(0.0, 0.0)

    def test_build_is_idempotent(self, square_area, holed_area, two_part_area):
        features = [square_area, holed_area, two_part_area]
        assert build_region_definition(features) == build_region_definition(features)

    def test_definition_is_read_only(self, square_area):
        definition = build_region_definition([square_area])
        with pytest.raises(TypeError):
            definition[1] = ()

    def test_zero_parts_still_get_an_entry(self):
        empty = multipolygon_feature([])
        definition = build_region_definition([empty])
        assert definition[0] == ()

    def test_empty_and_degenerate_rings_are_kept(self):
        feature = multipolygon_feature([[[], [[1, 1]]], []])
        definition = build_region_definition([feature])

        parts = definition[0]
        assert len(parts) == 2
        assert [len(r) for r in parts[0].rings] == [0, 1]
        assert len(parts[1]) == 0

    def test_no_areas(self):
        assert dict(build_region_definition([])) == {}


class TestFeaturePolygonParts:
    """Geometry type handling."""

    def test_polygon_is_one_part(self):
        feature = {
            "type": "Feature",
            "geometry": {"type": "Polygon", "coordinates": [square_ring(0, 0, 10)]},
            "properties": {},
        }
        parts = feature_polygon_parts(feature)
        assert parts == [[square_ring(0, 0, 10)]]

    @pytest.mark.parametrize(
        "geometry",
        [None, {"type": "Point", "coordinates": [1, 2]}, {"type": "LineString", "coordinates": []}],
        ids=["null", "point", "linestring"],
    )
    def test_other_geometries_have_no_parts(self, geometry):
        feature = {"type": "Feature", "geometry": geometry, "properties": {}}
        assert feature_polygon_parts(feature) == []


class TestBounds:
    """Bounding-box helpers."""

    def test_region_bounds_cover_all_parts(self, two_part_area):
        definition = build_region_definition([two_part_area])
        assert region_bounds(definition)[0] == Bounds(0.0, 0.0, 110.0, 110.0)

    def test_empty_area_has_empty_bounds(self):
        definition = build_region_definition([multipolygon_feature([])])
        bounds = region_bounds(definition)[0]
        assert bounds.is_empty
        assert not bounds.contains_point(Point(0, 0))

    def test_overlaps(self):
        a = Bounds(0, 0, 10, 10)
        assert a.overlaps(Bounds(10, 10, 20, 20))
        assert not a.overlaps(Bounds(11, 0, 20, 10))
        assert not a.overlaps(Bounds())

    def test_definition_stats(self, holed_area, two_part_area):
        stats = definition_stats(build_region_definition([holed_area, two_part_area]))
        assert stats == {"areas": 2, "parts": 3, "rings": 4, "vertices": 20}
