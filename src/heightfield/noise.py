"""Gradient noise functions for heightfield synthesis.

Provides hashed-lattice 2D gradient noise and its fBm (fractal Brownian
motion) sum, both as scalar functions and vectorized over numpy coordinate
grids. The two forms evaluate the same surface.
"""

import math

import numpy as np
from numpy.typing import NDArray

# Axis and diagonal directions indexed by the lattice hash.
_GRADIENTS: tuple[tuple[float, float], ...] = (
    (1.0, 0.0),
    (-1.0, 0.0),
    (0.0, 1.0),
    (0.0, -1.0),
    (1.0, 1.0),
    (-1.0, 1.0),
    (1.0, -1.0),
    (-1.0, -1.0),
)
_GRADIENT_TABLE = np.array(_GRADIENTS, dtype=np.float64)

_HASH_X = 374761393
_HASH_Z = 668265263
_HASH_MIX = 1274126177
_UINT32_MASK = 0xFFFFFFFF
_EXACT_INTEGER_LIMIT = 2.0**53


def _fade(t):
    """6t^5 - 15t^4 + 10t^3"""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a, b, t):
    return a + t * (b - a)


def _hash(ix: int, iz: int) -> int:
    """Mix two lattice coordinates into an unsigned 32-bit value."""
    h = (ix * _HASH_X + iz * _HASH_Z) & _UINT32_MASK
    h = ((h ^ (h >> 13)) * _HASH_MIX) & _UINT32_MASK
    return h ^ (h >> 16)


def gradient(ix: int, iz: int) -> tuple[float, float]:
    """Return the pseudo-random gradient direction at a lattice point.

    Args:
        ix: Integer lattice x coordinate.
        iz: Integer lattice z coordinate.

    Returns:
        One of eight axis or diagonal directions.
    """
    return _GRADIENTS[_hash(ix, iz) % len(_GRADIENTS)]


def noise(x: float, z: float) -> float:
    """Evaluate 2D gradient noise at a point.

    Args:
        x: Sample x coordinate.
        z: Sample z coordinate.

    Returns:
        Noise value, roughly in range [-1, 1]. Non-finite coordinates give 0.0.
    """
    if not (math.isfinite(x) and math.isfinite(z)):
        return 0.0

    x0 = math.floor(x)
    z0 = math.floor(z)
    x1 = x0 + 1
    z1 = z0 + 1

    fx = x - x0
    fz = z - z0

    g00 = gradient(x0, z0)
    g10 = gradient(x1, z0)
    g01 = gradient(x0, z1)
    g11 = gradient(x1, z1)

    dot00 = g00[0] * fx + g00[1] * fz
    dot10 = g10[0] * (fx - 1.0) + g10[1] * fz
    dot01 = g01[0] * fx + g01[1] * (fz - 1.0)
    dot11 = g11[0] * (fx - 1.0) + g11[1] * (fz - 1.0)

    u = _fade(fx)
    v = _fade(fz)

    return _lerp(_lerp(dot00, dot10, u), _lerp(dot01, dot11, u), v)


def fbm(
    x: float,
    z: float,
    octaves: int = 4,
    lacunarity: float = 2.0,
    gain: float = 0.5,
) -> float:
    """Sum octaves of gradient noise at a point.

    Starts at frequency 1 and amplitude 1; each octave multiplies the
    frequency by ``lacunarity`` and the amplitude by ``gain``. The sum is
    not normalized.

    Args:
        x: Sample x coordinate.
        z: Sample z coordinate.
        octaves: Number of noise layers to sum.
        lacunarity: Frequency multiplier between octaves.
        gain: Amplitude multiplier between octaves.

    Returns:
        Fractal noise value.
    """
    amplitude = 1.0
    frequency = 1.0
    total = 0.0

    for _ in range(octaves):
        total += noise(x * frequency, z * frequency) * amplitude
        amplitude *= gain
        frequency *= lacunarity

    return total


def _gradient_grid(ix: NDArray[np.int64], iz: NDArray[np.int64]) -> NDArray[np.float64]:
    """Vectorized gradient lookup; returns an array of shape ix.shape + (2,)."""
    h = (ix * _HASH_X + iz * _HASH_Z) & _UINT32_MASK
    h = ((h ^ (h >> 13)) * _HASH_MIX) & _UINT32_MASK
    h = h ^ (h >> 16)
    return _GRADIENT_TABLE[h % len(_GRADIENTS)]


def noise_grid(xs: NDArray[np.float64], zs: NDArray[np.float64]) -> NDArray[np.float64]:
    """Evaluate gradient noise elementwise over coordinate arrays.

    Args:
        xs: Sample x coordinates.
        zs: Sample z coordinates, same shape as ``xs``.

    Returns:
        Array of noise values with the shape of the inputs. Non-finite
        coordinates give 0.0.
    """
    xs = np.asarray(xs, dtype=np.float64)
    zs = np.asarray(zs, dtype=np.float64)

    # Coordinates at or past 2**53 are whole numbers and sample to 0.0, so
    # they are zeroed along with inf and nan before the integer cast.
    valid = (np.abs(xs) < _EXACT_INTEGER_LIMIT) & (np.abs(zs) < _EXACT_INTEGER_LIMIT)
    xs = np.where(valid, xs, 0.0)
    zs = np.where(valid, zs, 0.0)

    x0f = np.floor(xs)
    z0f = np.floor(zs)
    x0 = x0f.astype(np.int64)
    z0 = z0f.astype(np.int64)

    fx = xs - x0f
    fz = zs - z0f

    g00 = _gradient_grid(x0, z0)
    g10 = _gradient_grid(x0 + 1, z0)
    g01 = _gradient_grid(x0, z0 + 1)
    g11 = _gradient_grid(x0 + 1, z0 + 1)

    dot00 = g00[..., 0] * fx + g00[..., 1] * fz
    dot10 = g10[..., 0] * (fx - 1.0) + g10[..., 1] * fz
    dot01 = g01[..., 0] * fx + g01[..., 1] * (fz - 1.0)
    dot11 = g11[..., 0] * (fx - 1.0) + g11[..., 1] * (fz - 1.0)

    u = _fade(fx)
    v = _fade(fz)

    return np.where(valid, _lerp(_lerp(dot00, dot10, u), _lerp(dot01, dot11, u), v), 0.0)


def fbm_grid(
    xs: NDArray[np.float64],
    zs: NDArray[np.float64],
    octaves: int = 4,
    lacunarity: float = 2.0,
    gain: float = 0.5,
) -> NDArray[np.float64]:
    """Vectorized :func:`fbm` over coordinate arrays.

    Args:
        xs: Sample x coordinates.
        zs: Sample z coordinates, same shape as ``xs``.
        octaves: Number of noise layers to sum.
        lacunarity: Frequency multiplier between octaves.
        gain: Amplitude multiplier between octaves.

    Returns:
        Array of fractal noise values with the shape of the inputs.
    """
    xs = np.asarray(xs, dtype=np.float64)
    zs = np.asarray(zs, dtype=np.float64)
    result = np.zeros(xs.shape, dtype=np.float64)

    amplitude = 1.0
    frequency = 1.0

    # frequency can overflow to inf; 0 * inf is nan and samples to 0.0
    with np.errstate(invalid="ignore"):
        for _ in range(octaves):
            result += noise_grid(xs * frequency, zs * frequency) * amplitude
            amplitude *= gain
            frequency *= lacunarity

    return result
