"""
Noise-based elevation and humidity generation.

Each tile gets a fractal OpenSimplex sample taken at the tile's planar
position. Sampling is split by chunk and run on a thread pool; once every
sample is in, the observed range of raw values is remapped onto the target
range (elevation or humidity) and written to the tiles.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
import structlog
from opensimplex import OpenSimplex

from ..config import settings
from ..utils.ranges import Range
from .geometry import TileGeometry, tile_to_pixel
from .hex_point import HexPoint
from .tile import ELEVATION_RANGE, HUMIDITY_RANGE, Tile
from .world import WorldBuilder

logger = structlog.get_logger()

_GEOMETRY = TileGeometry()
_SEED_MODULUS = 2 ** 63


@dataclass
class NoiseOptions:
    """Fractal noise parameters."""
    frequency: float = 1.0  # Frequency of the first octave
    lacunarity: float = 2.0  # Frequency multiplier between octaves
    persistence: float = 0.5  # Amplitude multiplier between octaves
    octaves: int = 6  # Number of octaves summed
    seed_offset: int = 0  # Added to the world seed so different fields don't line up
    workers: Optional[int] = None  # Sampling threads, defaults to settings.noise_workers

    def __post_init__(self):
        if self.octaves < 1:
            raise ValueError(f"Octave count must be positive, was [{self.octaves}]")


def fractal_noise(noise: OpenSimplex, x: float, y: float, options: NoiseOptions) -> float:
    """Sum ``options.octaves`` layers of noise at (x, y)."""
    total = 0.0
    frequency = options.frequency
    amplitude = 1.0
    for _ in range(options.octaves):
        total += noise.noise2(x * frequency, y * frequency) * amplitude
        frequency *= options.lacunarity
        amplitude *= options.persistence
    return total


class NoiseGenerator:
    """
    Base for stages that fill a tile attribute from a noise field.

    Subclasses supply the target range and write the remapped value.
    """

    target_range: Range = Range(0.0, 1.0)

    def __init__(self, options: Optional[NoiseOptions] = None):
        self.options = options or NoiseOptions()

    def _apply(self, tile: Tile, value: float) -> None:
        raise NotImplementedError

    def generate(self, world: WorldBuilder, rng: np.random.Generator) -> None:
        noise = OpenSimplex(seed=(world.seed + self.options.seed_offset) % _SEED_MODULUS)
        scale = self._planar_scale(world)

        samples = self.sample(world, noise, scale)
        noise_range = Range.of(value for _, value in samples)
        for tile, value in samples:
            self._apply(tile, noise_range.map_to(value, self.target_range))

        logger.debug(
            "Noise applied",
            stage=type(self).__name__,
            tiles=len(samples),
            noise_min=noise_range.lower,
            noise_max=noise_range.upper,
        )

    def sample(
        self, world: WorldBuilder, noise: OpenSimplex, scale: float
    ) -> List[Tuple[Tile, float]]:
        """
        Raw noise for every tile in the world, sampled one chunk per task.

        The result is in chunk order regardless of how the threads were
        scheduled.
        """
        workers = self.options.workers or settings.noise_workers

        def sample_chunk(chunk_pos: HexPoint) -> List[Tuple[Tile, float]]:
            result = []
            for tile in world.chunk_tiles(chunk_pos):
                px, py = tile_to_pixel(tile.pos, _GEOMETRY)
                result.append(
                    (tile, fractal_noise(noise, px / scale, py / scale, self.options))
                )
            return result

        with ThreadPoolExecutor(max_workers=workers) as executor:
            per_chunk = list(executor.map(sample_chunk, sorted(world.chunks)))
        return [sample for chunk_samples in per_chunk for sample in chunk_samples]

    @staticmethod
    def _planar_scale(world: WorldBuilder) -> float:
        """Distance that noise coordinates are normalized by, so worlds of any size get the same features."""
        extent = max(
            max(abs(c) for c in tile_to_pixel(tile.pos, _GEOMETRY)) for tile in world.tiles
        )
        return extent or 1.0


class NoiseElevationGenerator(NoiseGenerator):
    """Elevation from fractal noise."""

    target_range = ELEVATION_RANGE

    def __init__(self, options: Optional[NoiseOptions] = None):
        super().__init__(
            options
            or NoiseOptions(frequency=3.5, lacunarity=2.5, persistence=0.5, octaves=12)
        )

    def _apply(self, tile: Tile, value: float) -> None:
        tile.elevation = value


class NoiseHumidityGenerator(NoiseGenerator):
    """Humidity from a second, independent noise field."""

    target_range = HUMIDITY_RANGE

    def __init__(self, options: Optional[NoiseOptions] = None):
        super().__init__(
            options
            or NoiseOptions(
                frequency=2.0, lacunarity=2.0, persistence=0.5, octaves=6, seed_offset=7919
            )
        )

    def _apply(self, tile: Tile, value: float) -> None:
        tile.humidity = value
