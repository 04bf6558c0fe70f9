"""
The world generation pipeline.

A world is generated by running a fixed, ordered list of generator stages
over a single WorldBuilder. Stages only talk to each other through the
builder's tiles and continent registry. Each stage gets its own random
source derived from the world seed and its position in the list, so a seed
always produces the same world.
"""

import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional, Protocol, Sequence

import numpy as np
import structlog
from pydantic import BaseModel, Field, field_validator

from ..config import settings
from ..utils.random import stage_rng
from .beaches import BeachGenerator
from .biomes import BiomePainter
from .continents import ContinentGenerator
from .hydrology import FreshWaterGenerator
from .noise import NoiseElevationGenerator, NoiseHumidityGenerator
from .peaks import PeakGenerator
from .water_painter import WaterPainter
from .world import World, WorldBuilder

logger = structlog.get_logger()

SEED_MIN = -(2 ** 63)
SEED_MAX = 2 ** 64 - 1


class Generator(Protocol):
    """A single pipeline stage."""

    def generate(self, world: WorldBuilder, rng: np.random.Generator) -> None:
        ...


def default_generators() -> List[Generator]:
    """The standard stages, in the order they must run."""
    return [
        NoiseElevationGenerator(),
        NoiseHumidityGenerator(),
        ContinentGenerator(),
        WaterPainter(),
        PeakGenerator(),
        BeachGenerator(),
        FreshWaterGenerator(),
        BiomePainter(),
    ]


class WorldRequest(BaseModel):
    """Validated input for a generation run."""

    size: int = Field(
        default_factory=lambda: settings.default_world_size,
        ge=0,
        description="World radius in tiles",
    )
    seed: int = Field(
        ..., ge=SEED_MIN, le=SEED_MAX, description="64-bit world seed, signed or unsigned"
    )

    @field_validator("size")
    @classmethod
    def size_within_limit(cls, v: int) -> int:
        if v > settings.max_world_size:
            raise ValueError(f"World size {v} exceeds the maximum of {settings.max_world_size}")
        return v


def run_stages(
    builder: WorldBuilder, generators: Sequence[Generator]
) -> None:
    """
    Run every stage over the builder, in order.

    A failing stage is logged and its exception re-raised; the builder is
    left in whatever state the stage got it to.
    """
    for index, generator in enumerate(generators):
        name = type(generator).__name__
        rng = stage_rng(builder.seed, index)
        started = time.perf_counter()
        try:
            generator.generate(builder, rng)
        except Exception:
            logger.exception("Generator stage failed", stage=name, index=index)
            raise
        logger.info(
            "Generator stage complete",
            stage=name,
            index=index,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )


def generate_world(
    size: int, seed: int, generators: Optional[Sequence[Generator]] = None
) -> World:
    """
    Generate a complete world from scratch.

    Args:
        size: World radius in tiles
        seed: 64-bit seed; the same seed and size always give the same world
        generators: Stages to run, defaults to ``default_generators()``

    Returns:
        The finished, immutable world
    """
    request = WorldRequest(size=size, seed=seed)
    stages = list(generators) if generators is not None else default_generators()

    logger.info("Generating world", size=request.size, seed=request.seed, stages=len(stages))
    started = time.perf_counter()

    builder = WorldBuilder(request.size, request.seed)
    run_stages(builder, stages)
    world = builder.build()

    logger.info(
        "World generated",
        size=request.size,
        seed=request.seed,
        continents=len(world.continents),
        duration_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    return world


class WorldHandler:
    """
    Owns the current world and generates new ones, optionally in the background.

    The world is swapped in only once generation has fully finished, so
    readers of ``world`` always see either the previous world or the new
    one, never one that is still being built.
    """

    def __init__(self, seed: int, size: Optional[int] = None):
        self.seed = seed
        self.size = size if size is not None else settings.default_world_size
        self._world: Optional[World] = None
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="world-gen")

    @property
    def world(self) -> Optional[World]:
        with self._lock:
            return self._world

    def _publish(self, world: World) -> World:
        with self._lock:
            self._world = world
        return world

    def generate(self) -> World:
        """Generate a world on the calling thread and publish it."""
        return self._publish(generate_world(self.size, self.seed))

    def generate_async(self) -> "Future[World]":
        """
        Generate a world on a background thread.

        Returns:
            A future that resolves to the published world, or raises whatever
            the generation raised
        """
        return self._executor.submit(self.generate)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "WorldHandler":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
