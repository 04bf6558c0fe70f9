"""Tests for the noise elevation and humidity stages."""

import numpy as np
import pytest
from opensimplex import OpenSimplex

from py_terragen.core.noise import (
    NoiseElevationGenerator,
    NoiseHumidityGenerator,
    NoiseOptions,
    fractal_noise,
)
from py_terragen.core.tile import ELEVATION_RANGE, HUMIDITY_RANGE
from py_terragen.core.world import WorldBuilder
from py_terragen.utils.random import stage_rng


def _elevations(seed, size=10, options=None):
    builder = WorldBuilder(size, seed)
    NoiseElevationGenerator(options).generate(builder, stage_rng(seed, 0))
    return [tile.elevation for tile in builder.tiles]


class TestNoiseElevationGenerator:
    """Test sampling and range remapping."""

    def test_full_range_is_used(self):
        elevations = _elevations(42)
        assert min(elevations) == ELEVATION_RANGE.lower
        assert max(elevations) == ELEVATION_RANGE.upper

    def test_deterministic(self):
        assert _elevations(42) == _elevations(42)

    def test_seed_changes_result(self):
        assert _elevations(42) != _elevations(43)

    def test_worker_count_does_not_matter(self):
        single = NoiseOptions(frequency=3.5, lacunarity=2.5, octaves=12, workers=1)
        many = NoiseOptions(frequency=3.5, lacunarity=2.5, octaves=12, workers=8)
        assert _elevations(7, options=single) == _elevations(7, options=many)

    def test_negative_and_large_seeds(self):
        assert len(_elevations(-1, size=3)) == len(_elevations(2 ** 64 - 1, size=3))


class TestNoiseHumidityGenerator:
    """Test the humidity field."""

    def test_full_range_is_used(self):
        builder = WorldBuilder(10, 42)
        NoiseHumidityGenerator().generate(builder, stage_rng(42, 1))
        humidities = [tile.humidity for tile in builder.tiles]
        assert min(humidities) == pytest.approx(HUMIDITY_RANGE.lower)
        assert max(humidities) == pytest.approx(HUMIDITY_RANGE.upper)

    def test_independent_of_elevation_field(self):
        builder = WorldBuilder(10, 42)
        NoiseElevationGenerator().generate(builder, stage_rng(42, 0))
        NoiseHumidityGenerator().generate(builder, stage_rng(42, 1))
        elevations = np.array([t.elevation for t in builder.tiles], dtype=float)
        humidities = np.array([t.humidity for t in builder.tiles])
        assert abs(np.corrcoef(elevations, humidities)[0, 1]) < 0.9


class TestFractalNoise:
    """Test the octave sum."""

    def test_single_octave_is_plain_noise(self):
        noise = OpenSimplex(seed=5)
        options = NoiseOptions(frequency=2.0, octaves=1)
        assert fractal_noise(noise, 0.3, 0.7, options) == pytest.approx(noise.noise2(0.6, 1.4))

    def test_octaves_add_detail(self):
        noise = OpenSimplex(seed=5)
        one = NoiseOptions(octaves=1)
        two = NoiseOptions(octaves=2, lacunarity=2.0, persistence=0.5)
        expected = noise.noise2(0.3, 0.7) + 0.5 * noise.noise2(0.6, 1.4)
        assert fractal_noise(noise, 0.3, 0.7, two) == pytest.approx(expected)
        assert fractal_noise(noise, 0.3, 0.7, one) == pytest.approx(noise.noise2(0.3, 0.7))

    def test_octaves_must_be_positive(self):
        with pytest.raises(ValueError):
            NoiseOptions(octaves=0)
