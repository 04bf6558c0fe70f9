"""Tests for chunk partitioning."""

import pytest

from py_terragen.core.chunk import (
    CHUNK_SIDE_LENGTH,
    Chunk,
    build_chunks,
    chunk_pos_for,
    chunks_covering,
)
from py_terragen.core.errors import InvariantViolationError
from py_terragen.core.hex_point import ORIGIN, HexPoint


class TestChunk:
    """Test chunk construction and invariants."""

    def test_chunk_pos_for_floors(self):
        assert chunk_pos_for(HexPoint.from_axial(0, 0)) == ORIGIN
        assert chunk_pos_for(HexPoint.from_axial(9, 9)) == ORIGIN
        assert chunk_pos_for(HexPoint.from_axial(10, 0)) == HexPoint.from_axial(1, 0)
        assert chunk_pos_for(HexPoint.from_axial(-1, 5)) == HexPoint.from_axial(-1, 0)

    def test_create_with_tiles(self):
        pos = HexPoint.from_axial(1, -1)
        chunk, tiles = Chunk.create_with_tiles(pos)
        assert len(chunk) == CHUNK_SIDE_LENGTH ** 2
        assert len(tiles) == CHUNK_SIDE_LENGTH ** 2
        for tile in tiles:
            assert tile.chunk_pos == pos
            assert chunk_pos_for(tile.pos) == pos
            assert tile in chunk
        assert chunk.origin == HexPoint.from_axial(10, -10)

    def test_wrong_tile_count_rejected(self):
        _, tiles = Chunk.create_with_tiles(ORIGIN)
        positions = frozenset(t.pos for t in tiles[:-1])
        with pytest.raises(InvariantViolationError):
            Chunk(ORIGIN, positions)

    def test_foreign_tile_rejected(self):
        _, tiles = Chunk.create_with_tiles(ORIGIN)
        positions = {t.pos for t in tiles[:-1]}
        positions.add(HexPoint.from_axial(50, 50))
        with pytest.raises(InvariantViolationError):
            Chunk(ORIGIN, frozenset(positions))

    def test_membership_is_frozen(self):
        chunk, _ = Chunk.create_with_tiles(ORIGIN)
        with pytest.raises(AttributeError):
            chunk.tile_positions = frozenset()

    def test_small_side_length(self):
        chunk, tiles = Chunk.create_with_tiles(HexPoint.from_axial(-1, 2), side_length=3)
        assert len(chunk) == 9
        assert all(chunk_pos_for(t.pos, 3) == chunk.pos for t in tiles)


class TestChunkCoverage:
    """Test which chunks a world of a given radius needs."""

    def test_radius_zero(self):
        assert chunks_covering(0) == [ORIGIN]

    def test_radius_ten(self):
        positions = chunks_covering(10)
        assert len(positions) == 8
        assert positions == sorted(positions)

    def test_build_chunks_has_no_overlap(self):
        chunks, tiles = build_chunks(chunks_covering(10))
        assert len(tiles) == len(chunks) * CHUNK_SIDE_LENGTH ** 2
        assert len({t.pos for t in tiles}) == len(tiles)
