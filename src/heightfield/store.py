"""Heightfield store: owns the height and slope buffers of one grid."""

import logging
from collections.abc import Callable, Iterable

import numpy as np
from numpy.typing import NDArray

from .config import ErosionConfig, NoiseLayer, NoiseParams
from .erosion import thermal_erosion
from .exceptions import InvalidDimensionsError
from .fields import compute_slope, make_heights

logger = logging.getLogger(__name__)


class Heightfield:
    """Fixed-size elevation grid with derived slopes and noise layers.

    Buffers have shape (depth, width) and are indexed ``[z, x]``; their
    row-major flattening puts cell (x, z) at ``z * width + x``.

    Coordinate queries outside the grid return 0.0 rather than failing,
    so callers can probe neighbors near the edges without special cases.
    """

    def __init__(
        self,
        width: int,
        depth: int,
        params: NoiseParams | None = None,
        layers: Iterable[NoiseLayer] = (),
    ):
        """Initialize a zeroed heightfield.

        Args:
            width: Grid width in cells (positive).
            depth: Grid depth in cells (positive).
            params: Base layer parameters; defaults if None.
            layers: Initial auxiliary layers.

        Raises:
            InvalidDimensionsError: If width or depth is not a positive integer.
        """
        for name, value in (("width", width), ("depth", depth)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
                raise InvalidDimensionsError(f"{name} must be a positive integer, got {value!r}")

        self._width = int(width)
        self._depth = int(depth)
        self.params = params.model_copy() if params is not None else NoiseParams()
        self._layers: list[NoiseLayer] = list(layers)

        self._heights = np.zeros((self._depth, self._width), dtype=np.float32)
        self._slopes = np.zeros((self._depth, self._width), dtype=np.float32)

    @property
    def width(self) -> int:
        return self._width

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def heights(self) -> NDArray[np.float32]:
        """Read-only view of the height buffer, shape (depth, width).

        The view tracks later regenerate and erosion calls; use
        :meth:`flat_heights` for a snapshot.
        """
        view = self._heights.view()
        view.flags.writeable = False
        return view

    @property
    def slopes(self) -> NDArray[np.float32]:
        """Read-only view of the slope buffer, shape (depth, width).

        The view tracks later regenerate and erosion calls; use
        :meth:`flat_slopes` for a snapshot.
        """
        view = self._slopes.view()
        view.flags.writeable = False
        return view

    @property
    def layers(self) -> tuple[NoiseLayer, ...]:
        """Snapshot of the auxiliary layers in application order."""
        return tuple(self._layers)

    def flat_heights(self) -> NDArray[np.float32]:
        """Row-major copy of the height buffer of length width * depth."""
        return self._heights.ravel().copy()

    def flat_slopes(self) -> NDArray[np.float32]:
        """Row-major copy of the slope buffer of length width * depth."""
        return self._slopes.ravel().copy()

    # --- Parameters ---

    def configure(
        self,
        octaves: int,
        frequency: float,
        amplitude: float,
        gain: float,
        lacunarity: float,
    ) -> None:
        """Overwrite the base layer parameters.

        Buffers are unchanged until the next :meth:`regenerate`.
        """
        self.params = NoiseParams(
            octaves=octaves,
            frequency=frequency,
            amplitude=amplitude,
            gain=gain,
            lacunarity=lacunarity,
        )

    def reset_parameters(self) -> None:
        """Restore the default base layer parameters."""
        self.params = NoiseParams()

    # --- Layers ---

    def add_layer(self, frequency: float, amplitude: float) -> None:
        """Append an auxiliary layer. Call :meth:`regenerate` to apply it."""
        self._layers.append(NoiseLayer(frequency=frequency, amplitude=amplitude))

    def set_layer(self, index: int, frequency: float, amplitude: float) -> None:
        """Replace the layer at ``index``; out-of-range indices are ignored."""
        if 0 <= index < len(self._layers):
            self._layers[index] = NoiseLayer(frequency=frequency, amplitude=amplitude)

    def remove_layer(self, index: int) -> None:
        """Remove the layer at ``index``; out-of-range indices are ignored."""
        if 0 <= index < len(self._layers):
            del self._layers[index]

    def clear_layers(self) -> None:
        """Remove all auxiliary layers."""
        self._layers.clear()

    # --- Synthesis ---

    def regenerate(self) -> None:
        """Rebuild heights from the base parameters and layers, then slopes."""
        self._heights[...] = make_heights(
            self._width, self._depth, self.params, self._layers
        )
        self._update_slopes()
        logger.debug(
            f"Regenerated {self._width}x{self._depth} heightfield "
            f"with {len(self._layers)} extra layers"
        )

    def apply_erosion(
        self,
        iterations: int,
        repose_angle: float,
        talus_factor: float = 0.125,
        cell_spacing_x: float = 1.0,
        cell_spacing_z: float = 1.0,
        should_cancel: Callable[[], bool] | None = None,
    ) -> None:
        """Run thermal erosion on the height buffer in place.

        Slopes are recomputed once at the end, even for zero iterations.

        Args:
            iterations: Number of erosion passes.
            repose_angle: Angle of repose in degrees, clamped to [0, 89].
            talus_factor: Fraction of excess moved per pass, clamped to [0, 1].
            cell_spacing_x: World distance between adjacent columns.
            cell_spacing_z: World distance between adjacent rows.
            should_cancel: Optional callable checked between passes.
        """
        self._heights[...] = thermal_erosion(
            self._heights,
            iterations,
            repose_angle,
            talus_factor,
            cell_spacing_x,
            cell_spacing_z,
            should_cancel=should_cancel,
        )
        self._update_slopes()

    def apply_erosion_config(
        self,
        config: ErosionConfig,
        should_cancel: Callable[[], bool] | None = None,
    ) -> None:
        """Run :meth:`apply_erosion` with parameters from an ErosionConfig."""
        self.apply_erosion(
            config.iterations,
            config.repose_angle,
            config.talus_factor,
            config.cell_spacing_x,
            config.cell_spacing_z,
            should_cancel=should_cancel,
        )

    def set_heights(self, values: NDArray[np.floating]) -> None:
        """Overwrite the height buffer and recompute slopes.

        Args:
            values: Array of shape (depth, width) or a flat row-major
                sequence of length width * depth.

        Raises:
            ValueError: If the values are not a flat sequence of width * depth
                heights or an array of shape (depth, width).
        """
        values = np.asarray(values, dtype=np.float32)
        expected = (self._depth, self._width)
        if values.ndim > 2 or (values.ndim == 2 and values.shape != expected):
            raise ValueError(f"Expected heights of shape {expected}, got {values.shape}")
        if values.size != self._heights.size:
            raise ValueError(
                f"Expected {self._heights.size} heights for a "
                f"{self._width}x{self._depth} grid, got {values.size}"
            )
        self._heights[...] = values.reshape(self._depth, self._width)
        self._update_slopes()

    def _update_slopes(self) -> None:
        self._slopes[...] = compute_slope(self._heights)

    # --- Queries ---

    def in_bounds(self, x: int, z: int) -> bool:
        return 0 <= x < self._width and 0 <= z < self._depth

    def height_at(self, x: int, z: int) -> float:
        """Height at (x, z), or 0.0 outside the grid."""
        if not self.in_bounds(x, z):
            return 0.0
        return float(self._heights[z, x])

    def slope_at(self, x: int, z: int) -> float:
        """Slope at (x, z), or 0.0 outside the grid."""
        if not self.in_bounds(x, z):
            return 0.0
        return float(self._slopes[z, x])

    def compute_min_max(self) -> tuple[float, float]:
        """Return (min, max) height; (0.0, 0.0) for an empty buffer."""
        if self._heights.size == 0:
            return 0.0, 0.0
        return float(self._heights.min()), float(self._heights.max())

    def __repr__(self) -> str:
        return (
            f"Heightfield(width={self._width}, depth={self._depth}, "
            f"layers={len(self._layers)})"
        )
