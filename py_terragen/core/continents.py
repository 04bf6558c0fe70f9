"""
Continent generation.

Continents are grown from random seed tiles, merged where they touch,
cleaned of small enclosed holes and smoothed along their coastlines. The
tiles left over afterwards are pushed down to form the ocean floor.
"""

from collections import deque
from dataclasses import dataclass
from typing import Optional

import numpy as np
import structlog

from ..utils.random import random_from
from ..utils.ranges import Range
from .cluster import Cluster
from .tile import Tile
from .tile_set import TileSet
from .world import WorldBuilder

logger = structlog.get_logger()


@dataclass
class ContinentOptions:
    """Continent generation parameters."""
    count_range: Range = Range(10, 20)  # How many continents to aim for
    size_range: Range = Range(100, 1000)  # Target tile count per continent
    max_hole_size: int = 10  # Unassigned clusters smaller than this can be filled in
    ocean_floor_elevation: int = -20  # Elevation of open ocean
    coast_elevation: int = -6  # Elevation of ocean tiles touching a continent


class ContinentGenerator:
    """Partitions the world's tiles into continents."""

    def __init__(self, options: Optional[ContinentOptions] = None):
        self.options = options or ContinentOptions()

    def generate(self, world: WorldBuilder, rng: np.random.Generator) -> None:
        self.grow_continents(world, rng)
        self.merge_continents(world)
        filled = self.fill_holes(world)
        removed = self.smooth_coastlines(world)
        world.drop_empty_continents()
        world.validate()
        self.shape_ocean_floor(world)

        logger.info(
            "Continents generated",
            count=len(world.continents),
            assigned=len(world.assigned_tiles()),
            holes_filled=filled,
            coast_tiles_removed=removed,
        )

    def grow_continents(self, world: WorldBuilder, rng: np.random.Generator) -> None:
        """
        Grow continents one at a time from random unassigned seeds.

        Each continent grows by a random frontier tile at a time until it hits
        its randomly chosen target size or runs out of unassigned neighbors.
        """
        min_size = int(self.options.size_range.lower)
        target_count = self.options.count_range.random_int(rng)
        unassigned = world.unassigned_tiles()

        while len(world.continents) < target_count and len(unassigned) >= min_size:
            target_size = self.options.size_range.random_int(rng)
            continent = world.new_continent()

            seed = random_from(rng, unassigned)
            candidates = TileSet()
            self._claim(world, continent, seed, unassigned, candidates)

            while len(continent) < target_size and candidates:
                tile = random_from(rng, candidates)
                self._claim(world, continent, tile, unassigned, candidates)

            logger.debug("Continent grown", size=len(continent), target=target_size)

    @staticmethod
    def _claim(
        world: WorldBuilder,
        continent: Cluster,
        tile: Tile,
        unassigned: TileSet,
        candidates: TileSet,
    ) -> None:
        world.add_to_continent(tile, continent)
        unassigned.remove(tile)
        candidates.discard(tile)
        for neighbor in world.tiles.adjacent_tiles(tile).values():
            if neighbor in unassigned:
                candidates.add(neighbor)

    def merge_continents(self, world: WorldBuilder) -> None:
        """Replace the continents with the connected components of all assigned tiles."""
        before = len(world.continents)
        merged = world.assigned_tiles().cluster(world=world.tiles)
        world.replace_continents(merged)
        logger.debug("Continents merged", before=before, after=len(merged))

    def fill_holes(self, world: WorldBuilder) -> int:
        """
        Absorb small unassigned pockets that sit entirely inside one continent.

        Returns:
            Number of tiles added to continents
        """
        filled = 0
        for hole in world.unassigned_tiles().cluster(world=world.tiles):
            if len(hole) >= self.options.max_hole_size:
                continue
            owner = self._sole_owner(world, hole)
            if owner is None:
                continue
            for tile in hole:
                world.add_to_continent(tile, owner)
            filled += len(hole)
        return filled

    @staticmethod
    def _sole_owner(world: WorldBuilder, hole: Cluster) -> Optional[Cluster]:
        """The one continent bordering the hole, or None if there isn't exactly one."""
        owner = None
        for tile in hole.frontier():
            continent = world.continent_of(tile)
            if continent is None:
                return None
            if owner is None:
                owner = continent
            elif owner is not continent:
                return None
        return owner

    def smooth_coastlines(self, world: WorldBuilder) -> int:
        """
        Strip dangling and bridge tiles from every continent until none are left.

        Returns:
            Number of tiles removed
        """
        removed = 0
        for continent in world.continents:
            pending = deque(continent)
            while pending:
                tile = pending.popleft()
                if tile not in continent or not self.is_rough(continent, tile):
                    continue
                neighbors = list(continent.adjacent_tiles(tile).values())
                world.remove_from_continent(tile)
                removed += 1
                # Losing this tile may have made its neighbors rough
                pending.extend(neighbors)
        return removed

    @staticmethod
    def is_rough(continent: Cluster, tile: Tile) -> bool:
        """
        True if the tile hangs off the continent's edge.

        That's a tile with at most one neighbor in the continent, or with
        exactly two that aren't next to each other (a one-tile-wide bridge).
        """
        adjacents = continent.adjacent_tiles(tile)
        if len(adjacents) <= 1:
            return True
        if len(adjacents) == 2:
            first, second = adjacents.keys()
            return not first.is_adjacent_to(second)
        return False

    def shape_ocean_floor(self, world: WorldBuilder) -> None:
        """Sink every unassigned tile, less so right next to a continent."""
        for tile in world.unassigned_tiles():
            touches_land = any(
                world.is_assigned(neighbor)
                for neighbor in world.tiles.adjacent_tiles(tile).values()
            )
            tile.elevation = (
                self.options.coast_elevation if touches_land else self.options.ocean_floor_elevation
            )
