"""Paints large below-sea-level areas as ocean."""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import structlog

from .tile import Biome
from .world import WorldBuilder

logger = structlog.get_logger()

MIN_OCEAN_SIZE = 10


@dataclass
class WaterOptions:
    """Water painting parameters."""
    min_ocean_size: int = MIN_OCEAN_SIZE  # Smaller sunken clusters are left for lakes
    sea_level: int = 0  # Tiles below this elevation are under water


class WaterPainter:
    """Turns every big enough cluster of sunken tiles into ocean."""

    def __init__(self, options: Optional[WaterOptions] = None):
        self.options = options or WaterOptions()

    def generate(self, world: WorldBuilder, rng: np.random.Generator) -> None:
        sea_level = self.options.sea_level
        sunken = world.tiles.filter(lambda tile: tile.elevation < sea_level)
        clusters = sunken.cluster(world=world.tiles)

        oceans = 0
        for cluster in clusters:
            if len(cluster) < self.options.min_ocean_size:
                continue
            for tile in cluster:
                tile.biome = Biome.OCEAN
            oceans += 1

        logger.info("Oceans painted", oceans=oceans, clusters=len(clusters))
