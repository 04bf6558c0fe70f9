"""
Fresh water generation: rainfall runoff and lakes.

The simulation works continent by continent:

- Drop a fixed amount of rain on every land tile
- Visit tiles from highest to lowest, moving all of each tile's water onto
  its lower neighbors in proportion to how far below it they sit
- Any tile left holding more than the lake threshold becomes a lake

Every tile also keeps a running total of the water that has passed over it.
Turning that total into rivers is not implemented yet.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np
import structlog

from .tile import Biome, Tile
from .tile_set import TileSet
from .world import WorldBuilder

logger = structlog.get_logger()


@dataclass
class HydrologyOptions:
    """Fresh water simulation parameters."""
    rainfall: float = 0.5  # Water dropped on every land tile
    lake_threshold: float = 1.0  # Tiles holding more water than this become lakes
    fill_basins: bool = True  # Turn unclaimed sunken tiles outside continents into lakes


def spread_water_downhill(tiles: TileSet, tile: Tile) -> Dict[Tile, float]:
    """
    Move all of a tile's water onto its lower neighbors.

    Each lower neighbor gets a share proportional to its elevation deficit.
    If there are no lower neighbors the water stays put.

    Args:
        tiles: Collection used to find the neighbors
        tile: Tile to drain

    Returns:
        neighbor -> water sent to it. Water biomes accept nothing, so what is
        sent to them is lost.
    """
    lower = [adj for adj in tiles.adjacent_tiles(tile).values() if adj.elevation < tile.elevation]
    if not lower:
        return {}

    total_deficit = sum(tile.elevation - adj.elevation for adj in lower)
    water = tile.clear_water()
    shares = {}
    for adj in lower:
        share = water * (tile.elevation - adj.elevation) / total_deficit
        adj.add_water(share)
        shares[adj] = share
    return shares


class FreshWaterGenerator:
    """Simulates rainfall runoff on each continent and forms lakes."""

    def __init__(self, options: Optional[HydrologyOptions] = None):
        self.options = options or HydrologyOptions()

    def generate(self, world: WorldBuilder, rng: np.random.Generator) -> None:
        lakes = 0
        for continent in world.continents:
            lakes += len(self.simulate(continent))

        basins = 0
        if self.options.fill_basins:
            basins = self.fill_basins(world)

        logger.info("Fresh water generated", lake_tiles=lakes, basin_tiles=basins)

    def simulate(self, tiles: TileSet) -> List[Tile]:
        """
        Run the rainfall simulation over one group of tiles.

        Returns:
            Tiles that became lakes
        """
        land = sorted(
            (tile for tile in tiles if not tile.biome.is_water),
            key=lambda tile: tile.elevation,
            reverse=True,
        )

        for tile in land:
            tile.add_water(self.options.rainfall)
        for tile in land:
            spread_water_downhill(tiles, tile)

        lakes = [tile for tile in land if tile.water_level > self.options.lake_threshold]
        for tile in lakes:
            tile.biome = Biome.LAKE
        return lakes

    @staticmethod
    def fill_basins(world: WorldBuilder) -> int:
        """Flood every tile outside the continents that no earlier stage painted."""
        count = 0
        for tile in world.unassigned_tiles():
            if tile.biome is Biome.NONE:
                tile.biome = Biome.LAKE
                count += 1
        return count
