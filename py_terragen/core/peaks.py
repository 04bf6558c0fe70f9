"""Mountain peak placement."""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import structlog

from ..utils.random import random_from
from ..utils.ranges import Range
from .tile import Tile
from .tile_set import TileSet
from .world import WorldBuilder

logger = structlog.get_logger()


@dataclass
class PeakOptions:
    """Peak generation parameters."""
    count_range: Range = Range(7, 10)  # Number of peaks per world
    elevation_gain_range: Range = Range(45, 60)  # Added to the peak tile's elevation
    min_separation: int = 2  # No two peaks within this many steps of each other
    smoothing_slop: int = 4  # Max random jitter applied to each neighbor


class PeakGenerator:
    """
    Raises a handful of continent tiles into peaks and slopes their neighbors.

    Each neighbor of a peak ends up halfway between the peak and the tile
    beyond it, which gives every peak a rough radial falloff.
    """

    def __init__(self, options: Optional[PeakOptions] = None):
        self.options = options or PeakOptions()

    def generate(self, world: WorldBuilder, rng: np.random.Generator) -> None:
        peaks = self.pick_peaks(world.assigned_tiles(), world.tiles, rng)
        for peak in peaks:
            self.raise_peak(world.tiles, peak, rng)
        logger.info("Peaks raised", count=len(peaks))

    def pick_peaks(
        self, candidates: TileSet, all_tiles: TileSet, rng: np.random.Generator
    ) -> TileSet:
        """Pick peak tiles from ``candidates``, keeping them at least the minimum separation apart."""
        count = self.options.count_range.random_int(rng)
        potential = candidates.copy()
        peaks = TileSet()
        while len(peaks) < count and potential:
            peak = random_from(rng, potential)
            peaks.add(peak)
            potential.remove_all(all_tiles.tiles_in_range(peak, self.options.min_separation))
        return peaks

    def raise_peak(self, all_tiles: TileSet, peak: Tile, rng: np.random.Generator) -> None:
        peak.elevation = peak.elevation + self.options.elevation_gain_range.random_int(rng)
        peak_elevation = peak.elevation

        slop = self.options.smoothing_slop
        for direction, adjacent in all_tiles.adjacent_tiles(peak).items():
            # The tile on the far side of the neighbor, seen from the peak
            opposite = all_tiles.get(direction.shift(adjacent.pos))
            opposite_elevation = opposite.elevation if opposite is not None else 0
            jitter = int(rng.integers(-slop, slop, endpoint=True))
            adjacent.elevation = int((peak_elevation + opposite_elevation) / 2) + jitter
