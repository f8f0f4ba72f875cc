"""Shared test fixtures for heightfield tests."""

import numpy as np
import pytest

from heightfield.store import Heightfield


@pytest.fixture
def small_field() -> Heightfield:
    """16x12 heightfield with a few octaves, regenerated."""
    field = Heightfield(width=16, depth=12)
    field.configure(octaves=3, frequency=0.15, amplitude=2.0, gain=0.5, lacunarity=2.0)
    field.regenerate()
    return field


@pytest.fixture
def flat_field() -> Heightfield:
    """5x5 heightfield with all heights at 0."""
    return Heightfield(width=5, depth=5)


@pytest.fixture
def spike_field() -> Heightfield:
    """5x5 heightfield with the center cell raised to 10.

        0  0  0  0  0
        0  0  0  0  0
        0  0 10  0  0
        0  0  0  0  0
        0  0  0  0  0
    """
    field = Heightfield(width=5, depth=5)
    heights = np.zeros((5, 5), dtype=np.float32)
    heights[2, 2] = 10.0
    field.set_heights(heights)
    return field
