"""
Core world generation functionality.
"""

from .errors import InvalidStateError, InvariantViolationError, TerragenError
from .hex_point import Direction, HexPoint, distance
from .tile import Biome, RiverConnection, Tile, TileColorMode
from .chunk import CHUNK_SIDE_LENGTH, Chunk
from .tile_set import TileSet
from .cluster import Cluster
from .world import Continent, ContinentCluster, World, WorldBuilder
from .geometry import TileGeometry, pixel_to_tile, tile_to_pixel
from .pipeline import WorldHandler, WorldRequest, default_generators, generate_world

__all__ = ['TerragenError', 'InvariantViolationError', 'InvalidStateError',
           'Direction', 'HexPoint', 'distance',
           'Biome', 'RiverConnection', 'Tile', 'TileColorMode',
           'CHUNK_SIDE_LENGTH', 'Chunk', 'TileSet', 'Cluster',
           'Continent', 'ContinentCluster', 'World', 'WorldBuilder',
           'TileGeometry', 'pixel_to_tile', 'tile_to_pixel',
           'WorldHandler', 'WorldRequest', 'default_generators', 'generate_world']
