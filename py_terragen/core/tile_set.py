"""
Tile collections keyed by position.

TileSet is the workhorse container of the generator: a set of tiles that can
be looked up by HexPoint, queried for adjacency and ranges, and split into
connected clusters. Iteration follows insertion order, which keeps every
random choice made over a TileSet reproducible for a given seed.
"""

from collections import deque
from typing import (
    TYPE_CHECKING,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Union,
)

import numpy as np

from ..utils.random import random_from
from .errors import InvalidStateError
from .hex_point import Direction, HexPoint
from .tile import Tile

if TYPE_CHECKING:
    from .cluster import Cluster

TileOrPoint = Union[Tile, HexPoint]
Similarity = Callable[[Tile, Tile], float]


def _pos_of(item: TileOrPoint) -> HexPoint:
    return item.pos if isinstance(item, Tile) else item


class TileSet:
    """A set of tiles, indexed by position."""

    def __init__(self, tiles: Iterable[Tile] = ()):
        self._tiles: Dict[HexPoint, Tile] = {}
        self._frozen = False
        for tile in tiles:
            self.add(tile)

    # ------------------------------------------------------------------
    # Set/mapping protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles.values())

    def __contains__(self, item) -> bool:
        if not isinstance(item, (Tile, HexPoint)):
            return False
        return _pos_of(item) in self._tiles

    def __getitem__(self, pos: HexPoint) -> Tile:
        return self._tiles[pos]

    def __bool__(self) -> bool:
        return bool(self._tiles)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={len(self)}, frozen={self._frozen})"

    def get(self, pos: HexPoint) -> Optional[Tile]:
        return self._tiles.get(pos)

    def positions(self) -> List[HexPoint]:
        return list(self._tiles.keys())

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _check_mutable(self) -> None:
        if self._frozen:
            raise InvalidStateError(f"{type(self).__name__} is frozen and cannot be modified")

    def add(self, tile: Tile) -> bool:
        """Add a tile; returns False if it was already present."""
        self._check_mutable()
        if tile.pos in self._tiles:
            return False
        self._tiles[tile.pos] = tile
        return True

    def add_all(self, tiles: Iterable[Tile]) -> None:
        for tile in tiles:
            self.add(tile)

    def discard(self, item: TileOrPoint) -> bool:
        """Remove a tile if present; returns True if something was removed."""
        self._check_mutable()
        return self._tiles.pop(_pos_of(item), None) is not None

    def remove(self, item: TileOrPoint) -> None:
        """Remove a tile, raising KeyError if it is absent."""
        self._check_mutable()
        del self._tiles[_pos_of(item)]

    def remove_all(self, items: Iterable[TileOrPoint]) -> None:
        for item in items:
            self.discard(item)

    def retain_all(self, items: Iterable[TileOrPoint]) -> None:
        """Keep only the tiles that are also in ``items``."""
        self._check_mutable()
        keep = {_pos_of(item) for item in items}
        for pos in [p for p in self._tiles if p not in keep]:
            del self._tiles[pos]

    def copy(self) -> "TileSet":
        return TileSet(self)

    def frozen_copy(self) -> "TileSet":
        """A copy that rejects any further structural change."""
        result = self.copy()
        result._frozen = True
        return result

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def filter(self, predicate: Callable[[Tile], bool]) -> "TileSet":
        return TileSet(tile for tile in self if predicate(tile))

    def _require_member(self, origin: TileOrPoint) -> HexPoint:
        if origin is None:
            raise ValueError("Origin must not be None")
        pos = _pos_of(origin)
        if pos not in self._tiles:
            raise ValueError(f"Origin {pos} is not in the collection")
        return pos

    def adjacent_tiles(self, origin: TileOrPoint) -> Dict[Direction, Tile]:
        """
        Get the tiles adjacent to ``origin`` that exist in this collection.

        Args:
            origin: A member tile (or its position)

        Returns:
            direction -> tile map with only the directions that exist here

        Raises:
            ValueError: if ``origin`` is not in this collection
        """
        pos = self._require_member(origin)
        result = {}
        for direction in Direction:
            neighbor = self._tiles.get(direction.shift(pos))
            if neighbor is not None:
                result[direction] = neighbor
        return result

    def tiles_in_range(self, origin: TileOrPoint, range_: int) -> "TileSet":
        """
        Get all tiles within ``range_`` steps of ``origin``.

        A range of 0 returns just the origin, 1 returns the origin and its
        neighbors, and so on. Steps only pass through tiles in this
        collection.

        Raises:
            ValueError: if ``origin`` is not a member or ``range_ < 0``
        """
        pos = self._require_member(origin)
        if range_ < 0:
            raise ValueError(f"Range must be non-negative, was [{range_}]")

        result = TileSet([self._tiles[pos]])
        frontier = [self._tiles[pos]]
        for _ in range(range_):
            next_frontier = []
            for tile in frontier:
                for neighbor in self.adjacent_tiles(tile).values():
                    if result.add(neighbor):
                        next_frontier.append(neighbor)
            if not next_frontier:
                break
            frontier = next_frontier
        return result

    def select_tiles(self, rng: np.random.Generator, count: int, spacing: int = 0) -> "TileSet":
        """
        Randomly select up to ``count`` tiles that are more than ``spacing`` steps apart.

        After each pick, every tile within ``spacing`` of it is taken out of
        the candidate pool, so fewer than ``count`` tiles may come back.
        """
        if count < 0 or spacing < 0:
            raise ValueError(f"Count and spacing must be non-negative, were [{count}, {spacing}]")

        candidates = TileSet(self)
        selected = TileSet()
        while len(selected) < count and candidates:
            tile = random_from(rng, candidates)
            selected.add(tile)
            candidates.remove_all(self.tiles_in_range(tile, spacing))
        return selected

    # ------------------------------------------------------------------
    # Clustering
    # ------------------------------------------------------------------

    def cluster(
        self,
        predicate: Optional[Callable[[Tile], bool]] = None,
        world: Optional["TileSet"] = None,
    ) -> List["Cluster"]:
        """
        Split this collection into connected clusters.

        Two adjacent tiles join the same cluster iff both pass ``predicate``
        (every tile passes when no predicate is given). Tiles that fail the
        predicate end up in clusters of their own.

        Args:
            predicate: Per-tile rule, or None to connect all adjacent tiles
            world: Collection the clusters are bound to (defaults to this one)
        """
        if predicate is None:
            return self.cluster_by_similarity(lambda a, b: 1.0, 0.5, world)
        return self.cluster_by_similarity(
            lambda a, b: 1.0 if predicate(a) and predicate(b) else 0.0, 0.5, world
        )

    def cluster_by_similarity(
        self,
        similarity: Similarity,
        threshold: float,
        world: Optional["TileSet"] = None,
    ) -> List["Cluster"]:
        """
        Split this collection into clusters of similar, connected tiles.

        A tile joins a cluster when it is adjacent to a tile already in that
        cluster and their similarity score is at least ``threshold``. The
        similarity function should be commutative. Every tile ends up in
        exactly one cluster, and each cluster is maximal.

        Args:
            similarity: Pairwise score between two adjacent tiles
            threshold: Minimum score for two tiles to be considered similar
            world: Collection the clusters are bound to (defaults to this one)

        Returns:
            The clusters, in no guaranteed order
        """
        from .cluster import Cluster

        bound_world = world if world is not None else self
        clusters = []
        clustered = set()

        for seed in self:
            if seed.pos in clustered:
                continue

            cluster = Cluster(bound_world)
            cluster.add(seed)
            clustered.add(seed.pos)
            queue = deque([seed])

            # Flood fill outward from the seed
            while queue:
                tile = queue.popleft()
                for neighbor in self.adjacent_tiles(tile).values():
                    if neighbor.pos in clustered:
                        continue
                    if similarity(tile, neighbor) >= threshold:
                        cluster.add(neighbor)
                        clustered.add(neighbor.pos)
                        queue.append(neighbor)

            clusters.append(cluster)

        return clusters
