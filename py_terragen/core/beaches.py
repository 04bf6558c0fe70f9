"""Beaches along ocean coastlines."""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import structlog

from .tile import Biome, Tile
from .tile_set import TileSet
from .world import WorldBuilder

logger = structlog.get_logger()


@dataclass
class BeachOptions:
    """Beach generation parameters."""
    max_elevation: int = 5  # Coastal tiles above this stay as they are


class BeachGenerator:
    """Turns low land tiles next to the ocean into beach."""

    def __init__(self, options: Optional[BeachOptions] = None):
        self.options = options or BeachOptions()

    def generate(self, world: WorldBuilder, rng: np.random.Generator) -> None:
        beaches = self.paint_beaches(world.tiles)
        logger.info("Beaches painted", count=beaches)

    def paint_beaches(self, tiles: TileSet) -> int:
        """Paint qualifying tiles in ``tiles`` and return how many changed."""
        count = 0
        for tile in tiles:
            if self.is_beach(tiles, tile):
                tile.biome = Biome.BEACH
                count += 1
        return count

    def is_beach(self, tiles: TileSet, tile: Tile) -> bool:
        if tile.biome is Biome.BEACH:
            return False
        if not (tile.biome is Biome.NONE or tile.biome.is_land):
            return False
        if tile.elevation > self.options.max_elevation:
            return False
        return any(adj.biome is Biome.OCEAN for adj in tiles.adjacent_tiles(tile).values())
