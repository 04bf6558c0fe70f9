"""
World model: the mutable builder used during generation and the frozen
snapshot handed to consumers once generation is done.

The builder owns three pieces of state that must always agree: the
continent list, each continent's tiles, and the tile -> continent index.
Continents handed out by the builder route their own membership changes
back through it, so the three always change together.
"""

from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

import structlog

from .chunk import CHUNK_SIDE_LENGTH, Chunk, build_chunks, chunks_covering
from .cluster import Cluster
from .errors import InvalidStateError, InvariantViolationError
from .hex_point import HexPoint
from .tile import Biome, Tile
from .tile_set import TileOrPoint, TileSet

logger = structlog.get_logger()


def _pos_of(item: TileOrPoint) -> HexPoint:
    return item.pos if isinstance(item, Tile) else item


def _validate_continents(
    tiles: TileSet, continents: Iterable[Cluster], index: Mapping[HexPoint, Cluster]
) -> None:
    """Check that every continent tile maps back to its continent and vice versa."""
    indexed = 0
    for continent in continents:
        for tile in continent:
            if tile not in tiles:
                raise InvariantViolationError(f"Continent tile {tile} is not in the world")
            if index.get(tile.pos) is not continent:
                raise InvariantViolationError(f"Continent index is out of sync at {tile}")
            indexed += 1
    if indexed != len(index):
        raise InvariantViolationError(
            f"Continent index has {len(index)} entries but continents hold {indexed} tiles"
        )


class ContinentCluster(Cluster):
    """
    A continent owned by a WorldBuilder.

    Adding or removing tiles goes through the owning builder, so the
    builder's tile -> continent index changes in the same step as the
    continent itself.
    """

    def __init__(self, builder: "WorldBuilder"):
        self._builder = builder
        super().__init__(builder.tiles)

    @property
    def builder(self) -> "WorldBuilder":
        return self._builder

    def add(self, tile: Tile) -> bool:
        self._builder._check_can_assign(tile, self)
        added = super().add(tile)
        self._builder._continent_index[tile.pos] = self
        return added

    def remove(self, item: TileOrPoint) -> None:
        self._builder._check_mutable()
        super().remove(item)
        del self._builder._continent_index[_pos_of(item)]


class WorldBuilder:
    """The world while it is being generated."""

    def __init__(self, size: int, seed: int, chunk_side_length: int = CHUNK_SIDE_LENGTH):
        """
        Args:
            size: World radius in tiles; every chunk holding a tile within
                this radius of the origin is created in full
            seed: World seed
            chunk_side_length: Side length of each chunk
        """
        if size < 0:
            raise ValueError(f"World size must be non-negative, was [{size}]")
        if chunk_side_length < 1:
            raise ValueError(f"Chunk side length must be positive, was [{chunk_side_length}]")

        self._size = size
        self._seed = seed
        self._chunk_side_length = chunk_side_length

        chunks, tiles = build_chunks(chunks_covering(size, chunk_side_length), chunk_side_length)
        self._chunks: Dict[HexPoint, Chunk] = {chunk.pos: chunk for chunk in chunks}
        self._tiles = TileSet(tiles)
        if len(self._tiles) != len(chunks) * chunk_side_length ** 2:
            raise InvariantViolationError("Chunks overlap; tile count does not match chunk count")

        self._continents: List[ContinentCluster] = []
        self._continent_index: Dict[HexPoint, ContinentCluster] = {}
        self._built = False

        logger.info("World initialized", size=size, chunks=len(chunks), tiles=len(self._tiles))

    @property
    def size(self) -> int:
        return self._size

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def tiles(self) -> TileSet:
        return self._tiles

    @property
    def chunks(self) -> Mapping[HexPoint, Chunk]:
        return MappingProxyType(self._chunks)

    def chunk_tiles(self, chunk_pos: HexPoint) -> TileSet:
        """The tiles owned by the chunk at ``chunk_pos``."""
        chunk = self._chunks[chunk_pos]
        return TileSet(self._tiles[pos] for pos in chunk)

    # ------------------------------------------------------------------
    # Continent registry
    # ------------------------------------------------------------------

    def _check_mutable(self) -> None:
        if self._built:
            raise InvalidStateError("World has already been built and can no longer change")

    @property
    def continents(self) -> Tuple[ContinentCluster, ...]:
        return tuple(self._continents)

    def _check_registered(self, continent: Cluster) -> None:
        if not any(c is continent for c in self._continents):
            raise InvalidStateError("Continent is not registered with this world")

    def _check_can_assign(self, tile: Tile, continent: Cluster) -> None:
        self._check_mutable()
        self._check_registered(continent)
        if tile.pos in self._continent_index:
            raise InvalidStateError(f"{tile} already belongs to a continent")

    def new_continent(self) -> ContinentCluster:
        """Register and return a new, empty continent."""
        self._check_mutable()
        continent = ContinentCluster(self)
        self._continents.append(continent)
        return continent

    def add_to_continent(self, tile: Tile, continent: Cluster) -> None:
        """
        Put an unassigned tile into a continent.

        Raises:
            InvalidStateError: if the tile already belongs to a continent or
                the continent is not registered
        """
        self._check_can_assign(tile, continent)
        continent.add(tile)

    def remove_from_continent(self, tile: Tile) -> ContinentCluster:
        """
        Return a tile to the unassigned pool.

        Returns:
            The continent the tile was removed from

        Raises:
            InvalidStateError: if the tile is not in any continent
        """
        self._check_mutable()
        continent = self._continent_index.get(tile.pos)
        if continent is None:
            raise InvalidStateError(f"{tile} is not in any continent")
        continent.remove(tile)
        return continent

    def replace_continents(self, continents: Iterable[Cluster]) -> List[ContinentCluster]:
        """
        Throw away the current continents and register new ones with the same tiles.

        Returns:
            The newly registered continents, in the order given
        """
        self._check_mutable()
        groups = list(continents)
        seen = set()
        for group in groups:
            if group.world is not self._tiles:
                raise ValueError("Continents must be bound to this world's tiles")
            for tile in group:
                if tile.pos in seen:
                    raise InvalidStateError(f"{tile} is in more than one continent")
                seen.add(tile.pos)

        self._continents = []
        self._continent_index = {}
        for group in groups:
            self.new_continent().add_all(group)
        return list(self._continents)

    def drop_empty_continents(self) -> int:
        """Unregister continents that have no tiles left; returns how many were dropped."""
        self._check_mutable()
        before = len(self._continents)
        self._continents = [c for c in self._continents if len(c) > 0]
        return before - len(self._continents)

    def continent_of(self, item: TileOrPoint) -> Optional[ContinentCluster]:
        return self._continent_index.get(_pos_of(item))

    def is_assigned(self, item: TileOrPoint) -> bool:
        return _pos_of(item) in self._continent_index

    def assigned_tiles(self) -> TileSet:
        return TileSet(tile for tile in self._tiles if tile.pos in self._continent_index)

    def unassigned_tiles(self) -> TileSet:
        return TileSet(tile for tile in self._tiles if tile.pos not in self._continent_index)

    def validate(self) -> None:
        """Raise InvariantViolationError if the continent state is inconsistent."""
        _validate_continents(self._tiles, self._continents, self._continent_index)

    # ------------------------------------------------------------------
    # Publication
    # ------------------------------------------------------------------

    def build(self) -> "World":
        """
        Freeze the builder into a World.

        Tiles are shared with the world rather than deep-copied; after this
        call the builder refuses further changes.
        """
        self._check_mutable()
        self.validate()
        self.drop_empty_continents()

        tiles = self._tiles.frozen_copy()
        continents = tuple(
            Continent(i, Cluster(tiles, c).frozen_copy()) for i, c in enumerate(self._continents)
        )
        index = {
            tile.pos: continent.id for continent in continents for tile in continent.tiles
        }
        self._built = True
        return World(
            size=self._size,
            seed=self._seed,
            tiles=tiles,
            chunks=dict(self._chunks),
            continents=continents,
            continent_index=index,
        )


@dataclass(frozen=True)
class Continent:
    """A committed continent in a finished world."""

    id: int
    tiles: Cluster

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles)

    def __contains__(self, item) -> bool:
        return item in self.tiles

    def positions(self) -> frozenset:
        return frozenset(self.tiles.positions())


class World:
    """An immutable, fully generated world."""

    def __init__(
        self,
        size: int,
        seed: int,
        tiles: TileSet,
        chunks: Mapping[HexPoint, Chunk],
        continents: Tuple[Continent, ...],
        continent_index: Mapping[HexPoint, int],
    ):
        if not tiles.is_frozen:
            raise ValueError("World tiles must be frozen")
        self._size = size
        self._seed = seed
        self._tiles = tiles
        self._chunks = MappingProxyType(dict(chunks))
        self._continents = tuple(continents)
        self._continent_index = MappingProxyType(dict(continent_index))

    @property
    def size(self) -> int:
        return self._size

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def tiles(self) -> TileSet:
        return self._tiles

    @property
    def chunks(self) -> Mapping[HexPoint, Chunk]:
        return self._chunks

    @property
    def continents(self) -> Tuple[Continent, ...]:
        return self._continents

    def tile(self, pos: HexPoint) -> Tile:
        return self._tiles[pos]

    def continent_of(self, item: TileOrPoint) -> Optional[Continent]:
        continent_id = self._continent_index.get(_pos_of(item))
        return None if continent_id is None else self._continents[continent_id]

    def biome_counts(self) -> Dict[Biome, int]:
        return dict(Counter(tile.biome for tile in self._tiles))

    def summary(self) -> Dict[str, object]:
        """Headline numbers about the world, for logs and sample output."""
        elevations = [tile.elevation for tile in self._tiles]
        return {
            "size": self._size,
            "seed": self._seed,
            "tiles": len(self._tiles),
            "chunks": len(self._chunks),
            "continents": len(self._continents),
            "continent_sizes": sorted((len(c) for c in self._continents), reverse=True),
            "biomes": {b.display_name: n for b, n in sorted(self.biome_counts().items())},
            "elevation_range": (min(elevations), max(elevations)) if elevations else None,
        }
