"""
Pixel geometry for flat-topped hexes.

These helpers are stateless: a renderer picks a tile radius and a screen
position for the world origin, and can then convert in both directions
between tile positions and pixels. Screen y grows downward, so north is
toward negative y.
"""

import math
from dataclasses import dataclass, field
from typing import Tuple

from .hex_point import HexPoint
from ..utils.ranges import Range

Pixel = Tuple[float, float]

# Tile radii outside this range are coerced into it
TILE_RADIUS_RANGE = Range(10, 200)
DEFAULT_TILE_RADIUS = 20

SQRT_3 = math.sqrt(3)


@dataclass(frozen=True)
class TileGeometry:
    """Size and shape of one hex on screen."""

    radius: float = DEFAULT_TILE_RADIUS
    vertices: Tuple[Pixel, ...] = field(init=False, repr=False)

    def __post_init__(self):
        # frozen dataclass, so go through object.__setattr__
        object.__setattr__(self, "radius", TILE_RADIUS_RANGE.coerce(self.radius))
        object.__setattr__(
            self,
            "vertices",
            tuple(
                (
                    self.radius * math.cos(math.radians(60 * i)),
                    self.radius * math.sin(math.radians(60 * i)),
                )
                for i in range(6)
            ),
        )

    @property
    def width(self) -> float:
        """Vertex to opposite vertex."""
        return self.radius * 2

    @property
    def height(self) -> float:
        """Edge to opposite edge."""
        return self.radius * SQRT_3


def tile_to_pixel(
    point: HexPoint, geometry: TileGeometry = TileGeometry(), center: Pixel = (0.0, 0.0)
) -> Pixel:
    """Screen position of the middle of the tile at ``point``."""
    x = geometry.width * point.x * 0.75
    y = -geometry.height * (point.x / 2 + point.y)
    return center[0] + x, center[1] + y


def pixel_to_tile(
    pixel: Pixel, geometry: TileGeometry = TileGeometry(), center: Pixel = (0.0, 0.0)
) -> HexPoint:
    """
    Position of the tile that contains the given screen point.

    The returned tile doesn't necessarily exist in any world; it is just the
    hex that would cover that pixel.
    """
    x = pixel[0] - center[0]
    y = pixel[1] - center[1]
    frac_x = x * 2 / 3 / geometry.radius
    frac_y = -(x + SQRT_3 * y) / (geometry.radius * 3)
    return HexPoint.round(frac_x, frac_y, -frac_x - frac_y)
