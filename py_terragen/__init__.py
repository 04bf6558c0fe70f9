"""
py-terragen: procedural generation of hexagonal-grid worlds.
"""

__version__ = "0.1.0"

from .core import (
    Biome,
    HexPoint,
    Tile,
    World,
    WorldHandler,
    generate_world,
)

__all__ = ['Biome', 'HexPoint', 'Tile', 'World', 'WorldHandler', 'generate_world', '__version__']
