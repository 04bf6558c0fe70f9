"""Connected groups of tiles: continents, biome blotches and water bodies."""

from typing import Iterable

from .errors import InvalidStateError
from .tile import Tile
from .tile_set import TileOrPoint, TileSet


class Cluster(TileSet):
    """
    A group of tiles that lives inside a larger "world" collection.

    The world is used to look outward from the cluster (its frontier), while
    adjacency queries on the cluster itself only see member tiles. Unlike a
    plain TileSet, a cluster treats adding a tile it already holds, or
    removing one it doesn't, as an error.
    """

    def __init__(self, world: TileSet, tiles: Iterable[Tile] = ()):
        self._world = world
        super().__init__(tiles)

    @classmethod
    def from_world(cls, world: TileSet) -> "Cluster":
        """An empty cluster bound to ``world``."""
        return cls(world)

    @property
    def world(self) -> TileSet:
        return self._world

    def add(self, tile: Tile) -> bool:
        if tile in self:
            raise InvalidStateError(f"{tile} is already in the cluster")
        if tile not in self._world:
            raise ValueError(f"{tile} is not in the cluster's world")
        return super().add(tile)

    def remove(self, item: TileOrPoint) -> None:
        if item not in self:
            raise InvalidStateError(f"{item} is not in the cluster")
        super().remove(item)

    def discard(self, item: TileOrPoint) -> bool:
        """Same as ``remove``: a cluster never silently ignores a missing tile."""
        self.remove(item)
        return True

    def remove_all(self, items: Iterable[TileOrPoint]) -> None:
        for item in items:
            self.remove(item)

    def retain_all(self, items: Iterable[TileOrPoint]) -> None:
        keep = {item.pos if isinstance(item, Tile) else item for item in items}
        for tile in [t for t in self if t.pos not in keep]:
            self.remove(tile)

    def copy(self) -> "Cluster":
        return Cluster(self._world, self)

    def copy_to_world(self, world: TileSet) -> "Cluster":
        """The same tiles, bound to a different world."""
        return Cluster(world, (world[tile.pos] for tile in self))

    def frontier(self) -> TileSet:
        """All world tiles adjacent to the cluster but not in it."""
        result = TileSet()
        for tile in self:
            for neighbor in self._world.adjacent_tiles(tile).values():
                if neighbor not in self:
                    result.add(neighbor)
        return result
