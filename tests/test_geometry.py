"""Tests for tile pixel geometry."""

import math

import pytest

from py_terragen.core.geometry import TileGeometry, pixel_to_tile, tile_to_pixel
from py_terragen.core.hex_point import ORIGIN, Direction, HexPoint, hex_points_within


class TestTileGeometry:
    """Test hex sizes."""

    @pytest.mark.parametrize("radius,expected", [(5, 10), (10, 10), (50, 50), (500, 200)])
    def test_radius_is_coerced(self, radius, expected):
        assert TileGeometry(radius).radius == expected

    def test_dimensions(self):
        geometry = TileGeometry(40)
        assert geometry.width == 80
        assert geometry.height == pytest.approx(40 * math.sqrt(3))
        assert len(geometry.vertices) == 6
        for x, y in geometry.vertices:
            assert math.hypot(x, y) == pytest.approx(40)


class TestTilePixelConversion:
    """Test conversion between tile positions and screen pixels."""

    def test_origin_at_center(self):
        assert tile_to_pixel(ORIGIN, TileGeometry(30), (400, 300)) == (400, 300)

    def test_north_is_up(self):
        geometry = TileGeometry(30)
        _, y = tile_to_pixel(Direction.NORTH.shift(ORIGIN), geometry)
        assert y == pytest.approx(-geometry.height)

    def test_tile_centers_map_back(self):
        geometry = TileGeometry(25)
        center = (640.0, 360.0)
        for point in hex_points_within(4):
            assert pixel_to_tile(tile_to_pixel(point, geometry, center), geometry, center) == point

    def test_points_inside_a_tile(self):
        geometry = TileGeometry(25)
        point = HexPoint(2, -3, 1)
        x, y = tile_to_pixel(point, geometry)
        assert pixel_to_tile((x + 5, y - 5), geometry) == point
        assert pixel_to_tile((x - 10, y + 3), geometry) == point
