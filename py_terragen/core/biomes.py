"""
Biome painting.

Each continent is split into blotches grown outward from spaced-out seed
tiles, one random tile at a time. Once every tile is claimed, each blotch is
stamped with a biome drawn from a weighted table. Only tiles that no earlier
stage painted (no ocean, lake or beach) take part.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import structlog

from ..utils.random import random_from, random_weighted
from .cluster import Cluster
from .tile import Biome, Tile
from .tile_set import TileSet
from .world import WorldBuilder

logger = structlog.get_logger()


def _default_weights() -> Dict[Biome, float]:
    return {Biome.PLAINS: 10, Biome.FOREST: 10, Biome.DESERT: 2}


@dataclass
class BiomePaintOptions:
    """Biome painting parameters."""
    average_biome_size: int = 10  # Continent tiles per blotch
    seed_spacing: int = 1  # Blotch seeds are more than this many steps apart
    weights: Dict[Biome, float] = field(default_factory=_default_weights)

    def __post_init__(self):
        if self.average_biome_size < 1:
            raise ValueError(
                f"Average biome size must be positive, was [{self.average_biome_size}]"
            )
        for biome in self.weights:
            if not biome.is_land:
                raise ValueError(f"Only land biomes can be painted, got {biome.name}")


class _Blotch:
    """A growing biome region and the unclaimed tiles it could grow into."""

    def __init__(self, paintable: TileSet):
        self.tiles = Cluster(paintable)
        self.candidates = TileSet()


class BiomePainter:
    """Paints land biomes onto every continent."""

    def __init__(self, options: Optional[BiomePaintOptions] = None):
        self.options = options or BiomePaintOptions()

    def generate(self, world: WorldBuilder, rng: np.random.Generator) -> None:
        painted = 0
        blotches = 0
        for continent in world.continents:
            continent_blotches = self.paint_continent(continent, rng)
            blotches += len(continent_blotches)
            painted += sum(len(b) for b in continent_blotches)
        logger.info("Biomes painted", blotches=blotches, tiles=painted)

    def paint_continent(self, continent: TileSet, rng: np.random.Generator) -> List[Cluster]:
        """
        Grow blotches over the continent's unpainted tiles and stamp them.

        Returns:
            The blotches, each already painted with its biome
        """
        paintable = continent.filter(lambda tile: tile.biome is Biome.NONE)
        if not paintable:
            return []

        count = max(1, len(continent) // self.options.average_biome_size)
        seeds = paintable.select_tiles(rng, count, self.options.seed_spacing)
        blotches = self.grow_blotches(paintable, seeds, rng)

        for blotch in blotches:
            biome = random_weighted(rng, self.options.weights)
            for tile in blotch:
                tile.biome = biome
        return blotches

    def grow_blotches(
        self, paintable: TileSet, seeds: TileSet, rng: np.random.Generator
    ) -> List[Cluster]:
        """
        Grow one blotch per seed until every paintable tile is claimed.

        A blotch is complete once it has no unclaimed neighbors left. If every
        blotch completes while tiles are still unclaimed (the continent can
        be split into pieces by earlier stages), a random unclaimed tile
        starts a new blotch.
        """
        claimed = set()
        blotches: List[_Blotch] = []

        def claim(blotch: _Blotch, tile: Tile) -> None:
            blotch.tiles.add(tile)
            claimed.add(tile.pos)
            for adj in paintable.adjacent_tiles(tile).values():
                if adj.pos not in claimed:
                    blotch.candidates.add(adj)

        def start(seed: Tile) -> None:
            blotch = _Blotch(paintable)
            claim(blotch, seed)
            blotches.append(blotch)
            growable.append(blotch)

        growable: List[_Blotch] = []
        for seed in seeds:
            start(seed)

        while len(claimed) < len(paintable):
            if not growable:
                start(random_from(rng, [t for t in paintable if t.pos not in claimed]))
                continue

            blotch = random_from(rng, growable)
            tile = self._next_candidate(blotch, claimed, rng)
            if tile is None:
                growable.remove(blotch)
            else:
                claim(blotch, tile)

        return [blotch.tiles for blotch in blotches]

    @staticmethod
    def _next_candidate(blotch: _Blotch, claimed: set, rng: np.random.Generator) -> Optional[Tile]:
        """A random unclaimed tile next to the blotch, or None if there are none."""
        while blotch.candidates:
            tile = random_from(rng, blotch.candidates)
            if tile.pos not in claimed:
                return tile
            # Claimed by another blotch since it was queued
            blotch.candidates.discard(tile)
        return None
