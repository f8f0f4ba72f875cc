"""Field synthesis: base heights, auxiliary layers, and slope."""

from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from .config import NoiseLayer, NoiseParams
from .noise import fbm_grid

# Central difference: (h[i+1] - h[i-1]) / 2
_CENTRAL_DIFFERENCE = np.array([-0.5, 0.0, 0.5], dtype=np.float32)


def _sample_fbm(
    width: int,
    depth: int,
    frequency: float,
    params: NoiseParams,
) -> NDArray[np.float64]:
    """Sample fBm at every cell center scaled by ``frequency``."""
    xs = np.arange(width, dtype=np.float64) * frequency
    zs = np.arange(depth, dtype=np.float64) * frequency
    x_grid, z_grid = np.meshgrid(xs, zs)
    return fbm_grid(
        x_grid,
        z_grid,
        octaves=params.octaves,
        lacunarity=params.lacunarity,
        gain=params.gain,
    )


def make_heights(
    width: int,
    depth: int,
    params: NoiseParams,
    layers: Iterable[NoiseLayer] = (),
) -> NDArray[np.float32]:
    """Synthesize a height field from the base layer plus auxiliary layers.

    Every layer shares the base octave count, lacunarity and gain; layers
    differ only in frequency and amplitude.

    Args:
        width: Grid width in cells.
        depth: Grid depth in cells.
        params: Base layer parameters.
        layers: Auxiliary layers, applied in order.

    Returns:
        2D height array of shape (depth, width).
    """
    heights = _sample_fbm(width, depth, params.frequency, params) * params.amplitude

    for layer in layers:
        heights += _sample_fbm(width, depth, layer.frequency, params) * layer.amplitude

    return heights.astype(np.float32)


def compute_slope(heights: NDArray[np.float32]) -> NDArray[np.float32]:
    """Compute slope magnitude from heights.

    Uses central differences on both axes. Cells outside the grid read as
    0.0, so border slopes are biased toward the edge.

    Args:
        heights: 2D height array of shape (depth, width).

    Returns:
        2D slope magnitude array (|gradient|).
    """
    heights = np.asarray(heights, dtype=np.float32)
    grad_x = ndimage.correlate1d(heights, _CENTRAL_DIFFERENCE, axis=1, mode="constant", cval=0.0)
    grad_z = ndimage.correlate1d(heights, _CENTRAL_DIFFERENCE, axis=0, mode="constant", cval=0.0)

    return np.hypot(grad_x, grad_z).astype(np.float32)
