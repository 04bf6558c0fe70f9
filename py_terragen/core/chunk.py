"""
Chunks: fixed-size partitions of the tile grid.

A chunk is a parallelogram of SIDE_LENGTH x SIDE_LENGTH tiles in (x, y)
space. A tile's chunk is found by floor-dividing its x and y components by
the side length. Chunks hold only tile positions; the tiles themselves live
in the world's TileSet, and each tile records the position of its chunk.
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, List, Set, Tuple

import structlog

from .errors import InvariantViolationError
from .hex_point import HexPoint, hex_points_within
from .tile import Tile

logger = structlog.get_logger()

CHUNK_SIDE_LENGTH = 10


def chunk_pos_for(tile_pos: HexPoint, side_length: int = CHUNK_SIDE_LENGTH) -> HexPoint:
    """Position of the chunk that owns the tile at ``tile_pos``."""
    return HexPoint.from_axial(tile_pos.x // side_length, tile_pos.y // side_length)


@dataclass(frozen=True)
class Chunk:
    """A frozen block of tile positions.

    Invariants:
      - exactly side_length ** 2 positions
      - every position maps back to this chunk through chunk_pos_for
    """

    pos: HexPoint
    tile_positions: FrozenSet[HexPoint]
    side_length: int = CHUNK_SIDE_LENGTH

    def __post_init__(self):
        expected = self.side_length ** 2
        if len(self.tile_positions) != expected:
            raise InvariantViolationError(
                f"Chunk {self.pos} has {len(self.tile_positions)} tiles, expected {expected}"
            )
        for tile_pos in self.tile_positions:
            if chunk_pos_for(tile_pos, self.side_length) != self.pos:
                raise InvariantViolationError(
                    f"Tile {tile_pos} does not belong in chunk {self.pos}"
                )

    @classmethod
    def create_with_tiles(
        cls, pos: HexPoint, side_length: int = CHUNK_SIDE_LENGTH
    ) -> Tuple["Chunk", List[Tile]]:
        """
        Build the chunk at ``pos`` and one tile for each of its positions.

        Returns:
            The chunk and its freshly created tiles
        """
        start_x = pos.x * side_length
        start_y = pos.y * side_length
        tiles = [
            Tile(HexPoint.from_axial(x, y), pos)
            for x in range(start_x, start_x + side_length)
            for y in range(start_y, start_y + side_length)
        ]
        chunk = cls(pos, frozenset(tile.pos for tile in tiles), side_length)
        return chunk, tiles

    @property
    def origin(self) -> HexPoint:
        """Tile position at the chunk's lowest x and y."""
        return HexPoint.from_axial(self.pos.x * self.side_length, self.pos.y * self.side_length)

    def __contains__(self, item) -> bool:
        pos = item.pos if isinstance(item, Tile) else item
        return pos in self.tile_positions

    def __len__(self) -> int:
        return len(self.tile_positions)

    def __iter__(self) -> Iterator[HexPoint]:
        return iter(sorted(self.tile_positions))


def chunks_covering(radius: int, side_length: int = CHUNK_SIDE_LENGTH) -> List[HexPoint]:
    """
    Positions of every chunk holding at least one tile within ``radius`` of the origin.

    Args:
        radius: World radius in tiles (non-negative)
        side_length: Chunk side length

    Returns:
        Sorted chunk positions
    """
    positions: Set[HexPoint] = {chunk_pos_for(p, side_length) for p in hex_points_within(radius)}
    return sorted(positions)


def build_chunks(
    chunk_positions: Iterable[HexPoint], side_length: int = CHUNK_SIDE_LENGTH
) -> Tuple[List[Chunk], List[Tile]]:
    """Create the given chunks and all of their tiles."""
    chunks = []
    tiles = []
    for pos in chunk_positions:
        chunk, chunk_tiles = Chunk.create_with_tiles(pos, side_length)
        chunks.append(chunk)
        tiles.extend(chunk_tiles)
    logger.debug("Chunks built", chunks=len(chunks), tiles=len(tiles))
    return chunks, tiles
