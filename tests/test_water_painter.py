"""Tests for ocean painting."""

from py_terragen.core.hex_point import ORIGIN, HexPoint
from py_terragen.core.tile import Biome
from py_terragen.core.water_painter import MIN_OCEAN_SIZE, WaterOptions, WaterPainter
from py_terragen.core.world import WorldBuilder
from py_terragen.utils.random import stage_rng


class TestWaterPainter:
    """Test cluster-size based ocean classification."""

    def _builder(self):
        builder = WorldBuilder(10, 0)
        for tile in builder.tiles:
            tile.elevation = 10
        return builder

    def test_large_sunken_area_becomes_ocean(self):
        builder = self._builder()
        basin = builder.tiles.tiles_in_range(ORIGIN, 2)
        pond = [builder.tiles[HexPoint(6, y, -6 - y)] for y in range(3)]
        for tile in list(basin) + pond:
            tile.elevation = -5

        WaterPainter().generate(builder, stage_rng(0, 3))

        assert all(tile.biome is Biome.OCEAN for tile in basin)
        assert all(tile.biome is Biome.NONE for tile in pond)
        others = [t for t in builder.tiles if t not in basin and t not in pond]
        assert all(tile.biome is Biome.NONE for tile in others)

    def test_threshold_is_inclusive(self):
        builder = self._builder()
        strip = [builder.tiles[HexPoint(x, 0, -x)] for x in range(-5, -5 + MIN_OCEAN_SIZE)]
        for tile in strip:
            tile.elevation = -1

        WaterPainter().generate(builder, stage_rng(0, 3))
        assert all(tile.biome is Biome.OCEAN for tile in strip)

    def test_sea_level_option(self):
        builder = self._builder()
        WaterPainter(WaterOptions(sea_level=11)).generate(builder, stage_rng(0, 3))
        assert all(tile.biome is Biome.OCEAN for tile in builder.tiles)
