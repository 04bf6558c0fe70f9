"""
Tile data model.

A tile is one hex of the world. Its position never changes; everything else
(biome, elevation, humidity, water) is filled in by the generator stages.
Elevation and humidity are always kept inside their global ranges: the
setters clamp out-of-range values instead of rejecting them.
"""

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .hex_point import Direction, HexPoint
from ..utils.ranges import Range

# Every tile's elevation must be in this range
ELEVATION_RANGE = Range(-50, 75)
HUMIDITY_RANGE = Range(0.0, 1.0)

# Only used for coloring, these values aren't enforced anywhere
WATER_LEVEL_RANGE = Range(0.0, 10.0)

Color = Tuple[int, int, int]

INFO_TEMPLATE = "Biome: {biome}\nElevation: {elevation}\nHumidity: {humidity}%"
DEBUG_INFO_TEMPLATE = "\nPos: {pos}\nChunk: {chunk}\nWater: {water:.2f}|{traversed:.2f}\n"


class Biome(IntEnum):
    """Biome types a tile can be painted with."""

    NONE = 0
    OCEAN = 1
    LAKE = 2
    BEACH = 3
    PLAINS = 4
    FOREST = 5
    DESERT = 6

    @property
    def display_name(self) -> str:
        return BIOME_NAMES[self]

    @property
    def color(self) -> Color:
        return BIOME_COLORS[self]

    @property
    def is_water(self) -> bool:
        return self in WATER_BIOMES

    @property
    def is_land(self) -> bool:
        return self in LAND_BIOMES


# Biome names for display
BIOME_NAMES = {
    Biome.NONE: "None",
    Biome.OCEAN: "Ocean",
    Biome.LAKE: "Lake",
    Biome.BEACH: "Beach",
    Biome.PLAINS: "Plains",
    Biome.FOREST: "Forest",
    Biome.DESERT: "Desert",
}

BIOME_COLORS = {
    Biome.NONE: (0, 0, 0),
    Biome.OCEAN: (20, 80, 180),
    Biome.LAKE: (60, 140, 230),
    Biome.BEACH: (235, 220, 150),
    Biome.PLAINS: (120, 190, 70),
    Biome.FOREST: (30, 110, 40),
    Biome.DESERT: (225, 195, 100),
}

WATER_BIOMES = frozenset({Biome.OCEAN, Biome.LAKE})
LAND_BIOMES = frozenset({Biome.BEACH, Biome.PLAINS, Biome.FOREST, Biome.DESERT})


class RiverConnection(Enum):
    """Whether a river enters or leaves a tile through one of its edges."""

    ENTRY = "entry"
    EXIT = "exit"


class TileColorMode(Enum):
    """Ways of coloring a tile for display."""

    ELEVATION = "elevation"
    HUMIDITY = "humidity"
    WATER_LEVEL = "water_level"
    BIOME = "biome"
    COMPOSITE = "composite"

    def interpolate(self, value: float, value_range: Range) -> Color:
        """Blend between this mode's low and high colors by where the value sits in the range."""
        if self not in COLOR_GRADIENTS:
            raise ValueError(f"Color mode {self.name} has no gradient")
        low, high = COLOR_GRADIENTS[self]
        fraction = value_range.normalize(value)
        return tuple(int(round(lo + (hi - lo) * fraction)) for lo, hi in zip(low, high))


# Colors for the low and high ends of each gradient mode
COLOR_GRADIENTS = {
    TileColorMode.ELEVATION: ((0, 0, 0), (255, 255, 255)),
    TileColorMode.HUMIDITY: ((255, 255, 255), (0, 90, 20)),
    TileColorMode.WATER_LEVEL: ((255, 255, 255), (0, 0, 255)),
}


class Tile:
    """A single hex in the world."""

    def __init__(self, pos: HexPoint, chunk_pos: HexPoint):
        """
        Args:
            pos: Position of the tile in the world (not chunk-relative)
            chunk_pos: Position of the chunk that owns the tile
        """
        self._pos = pos
        self._chunk_pos = chunk_pos
        self._biome = Biome.NONE
        self._elevation = 0
        self._humidity = 0.0
        self._water_level = 0.0
        self._total_water_traversed = 0.0
        self._river_connections: Dict[Direction, RiverConnection] = {}

    @property
    def pos(self) -> HexPoint:
        return self._pos

    @property
    def chunk_pos(self) -> HexPoint:
        return self._chunk_pos

    def is_adjacent_to(self, other: "Tile") -> bool:
        return self._pos.is_adjacent_to(other.pos)

    @property
    def biome(self) -> Biome:
        return self._biome

    @biome.setter
    def biome(self, biome: Biome) -> None:
        if not isinstance(biome, Biome):
            raise TypeError(f"biome must be a Biome, not {type(biome)}")
        self._biome = biome

    @property
    def elevation(self) -> int:
        return self._elevation

    @elevation.setter
    def elevation(self, elevation: float) -> None:
        self._elevation = int(ELEVATION_RANGE.coerce(int(round(elevation))))

    @property
    def humidity(self) -> float:
        return self._humidity

    @humidity.setter
    def humidity(self, humidity: float) -> None:
        self._humidity = float(HUMIDITY_RANGE.coerce(humidity))

    @property
    def water_level(self) -> float:
        return self._water_level

    @property
    def water_elevation(self) -> float:
        """Elevation of the top of the water on this tile."""
        return self._elevation + self._water_level

    @property
    def total_water_traversed(self) -> float:
        return self._total_water_traversed

    def add_water(self, water: float) -> float:
        """
        Add water to this tile.

        Water tiles don't hold extra water: the amount is dropped and 0 is
        returned.

        Returns:
            The amount of water actually added
        """
        if water < 0.0:
            raise ValueError(f"Water must be non-negative, was [{water}]")
        if self._biome.is_water:
            return 0.0
        self._water_level += water
        self._total_water_traversed += water
        return water

    def remove_water(self, water: float) -> float:
        """
        Remove up to ``water`` from this tile; never drops below zero.

        Returns:
            The amount of water actually removed
        """
        if water < 0.0:
            raise ValueError(f"Water must be non-negative, was [{water}]")
        removed = min(self._water_level, water)
        self._water_level -= removed
        return removed

    def clear_water(self) -> float:
        """Remove all water from this tile and return how much there was."""
        removed = self._water_level
        self._water_level = 0.0
        return removed

    @property
    def river_connections(self) -> Mapping[Direction, RiverConnection]:
        return MappingProxyType(dict(self._river_connections))

    def river_connection(self, direction: Direction) -> Optional[RiverConnection]:
        return self._river_connections.get(direction)

    def add_river_connection(self, direction: Direction, connection: RiverConnection) -> None:
        self._river_connections[direction] = connection

    def remove_river_connection(self, direction: Direction) -> None:
        self._river_connections.pop(direction, None)

    def color(self, mode: TileColorMode) -> Color:
        """Display color of this tile in the given mode."""
        if mode is TileColorMode.ELEVATION:
            return mode.interpolate(self._elevation, ELEVATION_RANGE)
        if mode is TileColorMode.HUMIDITY:
            # Water tiles are always blue
            if self._biome.is_water:
                return (0, 0, 255)
            return mode.interpolate(self._humidity, HUMIDITY_RANGE)
        if mode is TileColorMode.WATER_LEVEL:
            # Water tiles are always black
            if self._biome.is_water:
                return (0, 0, 0)
            return mode.interpolate(self._water_level, WATER_LEVEL_RANGE)
        if mode is TileColorMode.BIOME:
            return self._biome.color
        if mode is TileColorMode.COMPOSITE:
            # Scale the biome color by the (brightened) elevation brightness
            brightness = (max(self.color(TileColorMode.ELEVATION)) / 255) ** 0.75
            return tuple(int(channel * brightness) for channel in self._biome.color)
        raise ValueError(f"Unknown color mode: {mode}")

    def info(self, debug: bool = False) -> str:
        """Human-readable status text; ``debug`` appends internal fields."""
        text = INFO_TEMPLATE.format(
            biome=self._biome.display_name,
            elevation=self._elevation,
            humidity=int(self._humidity * 100),
        )
        if debug:
            text += DEBUG_INFO_TEMPLATE.format(
                pos=self._pos,
                chunk=self._chunk_pos,
                water=self._water_level,
                traversed=self._total_water_traversed,
            )
        return text

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, Tile):
            return NotImplemented
        return self._pos == other._pos

    def __hash__(self) -> int:
        return hash(self._pos)

    def __repr__(self) -> str:
        return f"Tile@{self._pos}"
