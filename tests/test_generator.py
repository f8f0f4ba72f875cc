"""Tests for the generation pipeline."""

import logging

import numpy as np
import pytest

from heightfield.config import ErosionConfig, NoiseLayer, NoiseParams, TerrainConfig
from heightfield.generator import build_heightfield, generate_heightfield
from heightfield.store import Heightfield


@pytest.fixture
def config() -> TerrainConfig:
    """Small configuration with one extra layer and a short erosion run."""
    return TerrainConfig(
        width=24,
        depth=20,
        base=NoiseParams(octaves=3, frequency=0.1, amplitude=5.0),
        layers=[NoiseLayer(frequency=0.3, amplitude=0.5)],
        erosion=ErosionConfig(iterations=5, repose_angle=30.0, talus_factor=0.5),
    )


class TestBuildHeightfield:
    """Tests for build_heightfield."""

    def test_applies_config(self, config: TerrainConfig) -> None:
        """Dimensions, parameters and layers come from the config."""
        field = build_heightfield(config)
        assert (field.width, field.depth) == (24, 20)
        assert field.params == config.base
        assert field.layers == tuple(config.layers)
        assert not field.heights.any()


class TestGenerateHeightfield:
    """Tests for generate_heightfield."""

    def test_without_erosion_matches_regenerate(self, config: TerrainConfig) -> None:
        """Disabling erosion yields the plain synthesized surface."""
        config.erode = False
        result = generate_heightfield(config)

        expected = Heightfield(24, 20, params=config.base, layers=config.layers)
        expected.regenerate()
        np.testing.assert_array_equal(result.field.heights, expected.heights)

    def test_with_erosion_matches_manual_steps(self, config: TerrainConfig) -> None:
        """The pipeline is regenerate followed by erosion."""
        result = generate_heightfield(config)

        expected = Heightfield(24, 20, params=config.base, layers=config.layers)
        expected.regenerate()
        expected.apply_erosion(5, 30.0, 0.5, 1.0, 1.0)
        np.testing.assert_array_equal(result.field.heights, expected.heights)
        np.testing.assert_array_equal(result.field.slopes, expected.slopes)

    def test_height_range(self, config: TerrainConfig) -> None:
        """The result carries the final min/max heights."""
        result = generate_heightfield(config)
        assert result.height_range == result.field.compute_min_max()
        assert result.config is config

    def test_cancel_stops_erosion(self, config: TerrainConfig) -> None:
        """An immediate cancel leaves the synthesized surface."""
        result = generate_heightfield(config, should_cancel=lambda: True)

        expected = Heightfield(24, 20, params=config.base, layers=config.layers)
        expected.regenerate()
        np.testing.assert_array_equal(result.field.heights, expected.heights)

    def test_logs_stages(self, config: TerrainConfig, caplog: pytest.LogCaptureFixture) -> None:
        """Pipeline stages are logged at info level."""
        with caplog.at_level(logging.INFO, logger="heightfield"):
            generate_heightfield(config)
        messages = [record.getMessage() for record in caplog.records]
        assert any("Stage A" in message for message in messages)
        assert any("Stage B" in message for message in messages)
        assert any("height range" in message for message in messages)
