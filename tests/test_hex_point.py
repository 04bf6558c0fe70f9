"""Tests for cube coordinates and directions."""

import pytest

from py_terragen.core.errors import InvariantViolationError
from py_terragen.core.hex_point import (
    ORIGIN,
    Direction,
    HexPoint,
    distance,
    hex_points_within,
)


class TestHexPoint:
    """Test coordinate construction and arithmetic."""

    def test_components_must_sum_to_zero(self):
        with pytest.raises(InvariantViolationError):
            HexPoint(1, 1, 1)

    def test_from_axial_derives_z(self):
        point = HexPoint.from_axial(3, -5)
        assert point == HexPoint(3, -5, 2)
        assert point.x + point.y + point.z == 0

    def test_distance(self):
        a = HexPoint(1, -1, 0)
        b = HexPoint(-2, 1, 1)
        assert distance(a, b) == 3
        assert distance(b, a) == 3
        assert a.distance_to(a) == 0

    def test_arithmetic(self):
        a = HexPoint(1, -1, 0)
        b = HexPoint(2, 0, -2)
        assert a + b == HexPoint(3, -1, -2)
        assert b - a == HexPoint(1, 1, -2)

    def test_neighbors_are_adjacent(self):
        point = HexPoint(2, -3, 1)
        neighbors = point.neighbors()
        assert len(neighbors) == 6
        assert len(set(neighbors.values())) == 6
        for neighbor in neighbors.values():
            assert point.is_adjacent_to(neighbor)
            assert neighbor.x + neighbor.y + neighbor.z == 0

    def test_round_fixes_largest_error(self):
        assert HexPoint.round(0.9, -0.4, -0.5) == HexPoint(1, 0, -1)
        assert HexPoint.round(2.1, -1.0, -1.1) == HexPoint(2, -1, -1)

    def test_str(self):
        assert str(HexPoint(1, -2, 1)) == "(1, -2, 1)"


class TestHexPointsWithin:
    """Test enumeration of points around a center."""

    @pytest.mark.parametrize("radius,expected", [(0, 1), (1, 7), (2, 19), (5, 91)])
    def test_count(self, radius, expected):
        assert len(list(hex_points_within(radius))) == expected

    def test_all_within_radius(self):
        center = HexPoint(4, -1, -3)
        points = list(hex_points_within(3, center))
        assert all(center.distance_to(p) <= 3 for p in points)
        assert len(set(points)) == len(points)

    def test_sorted(self):
        points = list(hex_points_within(3))
        assert points == sorted(points)

    def test_negative_radius_rejected(self):
        with pytest.raises(ValueError):
            list(hex_points_within(-1))


class TestDirection:
    """Test the compass of neighbor directions."""

    def test_deltas_are_unit_offsets(self):
        for direction in Direction:
            assert ORIGIN.distance_to(direction.delta) == 1

    def test_clockwise_order(self):
        assert [d.index for d in Direction] == list(range(6))
        assert Direction.NORTH.shift(ORIGIN) == HexPoint(0, 1, -1)

    def test_opposite(self):
        assert Direction.NORTH.opposite() is Direction.SOUTH
        assert Direction.SOUTHWEST.opposite() is Direction.NORTHEAST
        for direction in Direction:
            assert direction.delta + direction.opposite().delta == ORIGIN

    def test_adjacency(self):
        assert Direction.NORTH.is_adjacent_to(Direction.NORTHEAST)
        assert Direction.NORTH.is_adjacent_to(Direction.NORTHWEST)
        assert not Direction.NORTH.is_adjacent_to(Direction.SOUTH)
        assert not Direction.NORTH.is_adjacent_to(Direction.SOUTHEAST)
        assert not Direction.NORTH.is_adjacent_to(Direction.NORTH)

    def test_adjacent_directions_point_to_adjacent_tiles(self):
        for a in Direction:
            for b in Direction:
                if a.is_adjacent_to(b):
                    assert a.shift(ORIGIN).is_adjacent_to(b.shift(ORIGIN))
