"""Shared fixtures for building small hand-made grids."""

import pytest

from py_terragen.core.chunk import chunk_pos_for
from py_terragen.core.hex_point import ORIGIN, hex_points_within
from py_terragen.core.tile import Tile
from py_terragen.core.tile_set import TileSet
from py_terragen.utils.random import stage_rng


def make_tiles(points, elevation=0):
    """A TileSet with one fresh tile per point."""
    tiles = TileSet()
    for point in points:
        tile = Tile(point, chunk_pos_for(point))
        tile.elevation = elevation
        tiles.add(tile)
    return tiles


def make_hex(radius, center=ORIGIN, elevation=0):
    """A TileSet covering every point within ``radius`` of ``center``."""
    return make_tiles(hex_points_within(radius, center), elevation)


@pytest.fixture
def hex7():
    """Center tile plus its six neighbors."""
    return make_hex(1)


@pytest.fixture
def hex19():
    """Every tile within two steps of the origin."""
    return make_hex(2)


@pytest.fixture
def rng():
    return stage_rng(1234, 0)


@pytest.fixture
def grid():
    """Factory for hex-shaped TileSets: ``grid(radius, center=ORIGIN, elevation=0)``."""
    return make_hex


@pytest.fixture
def tiles_at():
    """Factory for TileSets over arbitrary points: ``tiles_at(points, elevation=0)``."""
    return make_tiles
