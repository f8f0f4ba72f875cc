"""Thermal erosion: slope relaxation toward an angle of repose.

Each pass moves material from cells steeper than the repose angle onto
their lower Moore neighbors. Transfers for a pass are accumulated in a
separate delta buffer and committed at once, so every cell decides from
the same snapshot and the pass conserves total height.
"""

import logging
import math
from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

# D8 directions: N, NE, E, SE, S, SW, W, NW (clockwise from north, -z is north)
D8_DZ = np.array([-1, -1, 0, 1, 1, 1, 0, -1], dtype=np.int32)
D8_DX = np.array([0, 1, 1, 1, 0, -1, -1, -1], dtype=np.int32)

MAX_REPOSE_ANGLE = 89.0


def clamp_repose_angle(repose_angle: float) -> float:
    """Clamp a repose angle in degrees to [0, 89]."""
    return min(max(float(repose_angle), 0.0), MAX_REPOSE_ANGLE)


def clamp_talus_factor(talus_factor: float) -> float:
    """Clamp a talus factor to [0, 1]."""
    return min(max(float(talus_factor), 0.0), 1.0)


def neighbor_distances(cell_spacing_x: float, cell_spacing_z: float) -> NDArray[np.float64]:
    """Horizontal world distance to each D8 neighbor.

    Args:
        cell_spacing_x: Distance between adjacent columns.
        cell_spacing_z: Distance between adjacent rows.

    Returns:
        Array of 8 distances in D8 order.
    """
    sx = abs(cell_spacing_x)
    sz = abs(cell_spacing_z)
    diagonal = math.hypot(sx, sz)

    distances = np.empty(8, dtype=np.float64)
    for d in range(8):
        if D8_DX[d] != 0 and D8_DZ[d] != 0:
            distances[d] = diagonal
        elif D8_DX[d] != 0:
            distances[d] = sx
        else:
            distances[d] = sz
    return distances


def _overlap(offset: int, size: int) -> tuple[slice, slice]:
    """Slices selecting cells whose neighbor at ``offset`` is in-grid.

    Returns (source, neighbor) slices along one axis.
    """
    if offset > 0:
        return slice(0, size - offset), slice(offset, size)
    if offset < 0:
        return slice(-offset, size), slice(0, size + offset)
    return slice(0, size), slice(0, size)


def erosion_step(
    heights: NDArray[np.floating],
    tan_repose: float,
    talus_factor: float,
    distances: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Compute one erosion pass as a delta buffer.

    Neighbors outside the grid are skipped. For each in-grid neighbor lower
    than ``tan_repose * distance`` allows, the excess is recorded; a
    ``talus_factor`` fraction of the cell's total excess is split among
    those neighbors in proportion to their individual excess.

    Args:
        heights: 2D height array of shape (depth, width). Not modified.
        tan_repose: Tangent of the repose angle.
        talus_factor: Fraction of total excess moved, in [0, 1].
        distances: Horizontal distance to each D8 neighbor.

    Returns:
        Delta array with the heights' shape; it sums to zero.
    """
    h = np.asarray(heights, dtype=np.float64)
    depth, width = h.shape

    excess = np.zeros((8, depth, width), dtype=np.float64)
    windows: list[tuple[tuple[slice, slice], tuple[slice, slice]]] = []

    for d in range(8):
        src_z, dst_z = _overlap(int(D8_DZ[d]), depth)
        src_x, dst_x = _overlap(int(D8_DX[d]), width)
        src = (src_z, src_x)
        dst = (dst_z, dst_x)
        windows.append((src, dst))

        diff = h[src] - h[dst]
        allowed = tan_repose * distances[d]
        excess[d][src] = np.where(diff > allowed, diff - allowed, 0.0)

    total = excess.sum(axis=0)
    moved = talus_factor * total

    delta = np.zeros((depth, width), dtype=np.float64)
    unstable = total > 0.0

    for d, (src, dst) in enumerate(windows):
        transfer = np.zeros((depth, width), dtype=np.float64)
        np.divide(moved * excess[d], total, out=transfer, where=unstable)
        delta -= transfer
        delta[dst] += transfer[src]

    return delta


def thermal_erosion(
    heights: NDArray[np.floating],
    iterations: int,
    repose_angle: float,
    talus_factor: float,
    cell_spacing_x: float = 1.0,
    cell_spacing_z: float = 1.0,
    should_cancel: Callable[[], bool] | None = None,
) -> NDArray[np.float32]:
    """Relax a height field toward the angle of repose.

    Args:
        heights: 2D height array of shape (depth, width). Not modified.
        iterations: Number of passes; zero or negative returns a copy.
        repose_angle: Angle of repose in degrees, clamped to [0, 89].
        talus_factor: Fraction of excess moved per pass, clamped to [0, 1].
        cell_spacing_x: World distance between adjacent columns.
        cell_spacing_z: World distance between adjacent rows.
        should_cancel: Optional callable checked before each pass; when it
            returns True the passes already committed are kept.

    Returns:
        Eroded height array.
    """
    angle = clamp_repose_angle(repose_angle)
    talus = clamp_talus_factor(talus_factor)
    tan_repose = math.tan(math.radians(angle))
    distances = neighbor_distances(cell_spacing_x, cell_spacing_z)

    result = np.array(heights, dtype=np.float64)

    completed = 0
    for _ in range(max(iterations, 0)):
        if should_cancel is not None and should_cancel():
            logger.info(f"Erosion cancelled after {completed} of {iterations} iterations")
            break
        result += erosion_step(result, tan_repose, talus, distances)
        completed += 1

    logger.debug(
        f"Eroded {completed} iterations (repose={angle:.1f} deg, talus={talus:.2f})"
    )
    return result.astype(np.float32)
