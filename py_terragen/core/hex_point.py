"""
Cube coordinates for a hexagonal grid.

Every hex is addressed by three integers (x, y, z) with x + y + z == 0. The
distance between two hexes is the largest absolute difference of any
component. Directions are listed clockwise starting from north, so two
directions are adjacent exactly when they are next to each other in that
order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Tuple

from .errors import InvariantViolationError


@dataclass(frozen=True, order=True)
class HexPoint:
    """Position of a hex in cube coordinates."""

    x: int
    y: int
    z: int

    def __post_init__(self):
        if self.x + self.y + self.z != 0:
            raise InvariantViolationError(
                f"Cube coordinates must sum to 0, got ({self.x}, {self.y}, {self.z})"
            )

    @classmethod
    def from_axial(cls, x: int, y: int) -> "HexPoint":
        """Build a point from its x and y components; z is derived."""
        return cls(x, y, -x - y)

    @classmethod
    def round(cls, frac_x: float, frac_y: float, frac_z: float) -> "HexPoint":
        """
        Round fractional cube coordinates to the hex that contains them.

        Rounding each component independently can break the zero-sum
        invariant, so the component that moved the most is recomputed from
        the other two.
        """
        round_x = int(round(frac_x))
        round_y = int(round(frac_y))
        round_z = int(round(frac_z))

        x_diff = abs(frac_x - round_x)
        y_diff = abs(frac_y - round_y)
        z_diff = abs(frac_z - round_z)

        if x_diff > y_diff and x_diff > z_diff:
            round_x = -round_y - round_z
        elif y_diff > z_diff:
            round_y = -round_x - round_z
        else:
            round_z = -round_x - round_y

        return cls(round_x, round_y, round_z)

    def __add__(self, other: "HexPoint") -> "HexPoint":
        return HexPoint(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "HexPoint") -> "HexPoint":
        return HexPoint(self.x - other.x, self.y - other.y, self.z - other.z)

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"

    def distance_to(self, other: "HexPoint") -> int:
        return max(abs(self.x - other.x), abs(self.y - other.y), abs(self.z - other.z))

    def is_adjacent_to(self, other: "HexPoint") -> bool:
        return self.distance_to(other) == 1

    def neighbor(self, direction: "Direction") -> "HexPoint":
        return self + direction.delta

    def neighbors(self) -> Dict["Direction", "HexPoint"]:
        return {direction: self.neighbor(direction) for direction in Direction}


ORIGIN = HexPoint(0, 0, 0)


def distance(a: HexPoint, b: HexPoint) -> int:
    """Number of steps between two hexes."""
    return a.distance_to(b)


def hex_points_within(radius: int, center: HexPoint = ORIGIN) -> Iterator[HexPoint]:
    """Yield every point within ``radius`` steps of ``center``, in sorted order."""
    if radius < 0:
        raise ValueError(f"Radius must be non-negative, was [{radius}]")
    for dx in range(-radius, radius + 1):
        for dy in range(max(-radius, -dx - radius), min(radius, -dx + radius) + 1):
            yield center + HexPoint.from_axial(dx, dy)


class Direction(Enum):
    """The six neighbor directions, clockwise from north."""

    NORTH = (0, 1, -1)
    NORTHEAST = (1, 0, -1)
    SOUTHEAST = (1, -1, 0)
    SOUTH = (0, -1, 1)
    SOUTHWEST = (-1, 0, 1)
    NORTHWEST = (-1, 1, 0)

    @property
    def delta(self) -> HexPoint:
        return HexPoint(*self.value)

    @property
    def index(self) -> int:
        return _DIRECTION_ORDER.index(self)

    def shift(self, point: HexPoint) -> HexPoint:
        """The point one step from ``point`` in this direction."""
        return point + self.delta

    def opposite(self) -> "Direction":
        return _DIRECTION_ORDER[(self.index + 3) % 6]

    def is_adjacent_to(self, other: "Direction") -> bool:
        """True if the two directions are next to each other on the compass."""
        return (self.index - other.index) % 6 in (1, 5)


_DIRECTION_ORDER: Tuple[Direction, ...] = tuple(Direction)
