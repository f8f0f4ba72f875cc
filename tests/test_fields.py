"""Tests for field synthesis."""

import math

import numpy as np

from heightfield.config import NoiseLayer, NoiseParams
from heightfield.fields import compute_slope, make_heights
from heightfield.noise import fbm


class TestMakeHeights:
    """Tests for height synthesis."""

    def test_output_shape(self) -> None:
        """Output has shape (depth, width)."""
        result = make_heights(20, 8, NoiseParams())
        assert result.shape == (8, 20)

    def test_output_dtype(self) -> None:
        """Output is float32."""
        result = make_heights(8, 8, NoiseParams())
        assert result.dtype == np.float32

    def test_base_layer_matches_scalar_fbm(self) -> None:
        """Each cell is fbm at (x * freq, z * freq) scaled by amplitude."""
        params = NoiseParams(octaves=3, frequency=0.21, amplitude=4.0, gain=0.5, lacunarity=2.0)
        result = make_heights(6, 5, params)

        for z in range(5):
            for x in range(6):
                expected = fbm(x * 0.21, z * 0.21, 3, 2.0, 0.5) * 4.0
                assert math.isclose(result[z, x], expected, rel_tol=1e-5, abs_tol=1e-6)

    def test_layers_add_with_base_octaves(self) -> None:
        """Layers reuse the base octave, lacunarity and gain."""
        params = NoiseParams(octaves=2, frequency=0.1, amplitude=1.0, gain=0.4, lacunarity=2.5)
        layer = NoiseLayer(frequency=0.33, amplitude=0.25)
        base = make_heights(7, 4, params)
        layered = make_heights(7, 4, params, [layer])

        for z in range(4):
            for x in range(7):
                extra = fbm(x * 0.33, z * 0.33, 2, 2.5, 0.4) * 0.25
                assert math.isclose(
                    layered[z, x] - base[z, x], extra, rel_tol=1e-4, abs_tol=1e-5
                )

    def test_layer_order_irrelevant(self) -> None:
        """Contributions sum, so layer order does not matter."""
        params = NoiseParams(frequency=0.05)
        a = NoiseLayer(frequency=0.2, amplitude=0.5)
        b = NoiseLayer(frequency=0.03, amplitude=2.0)
        np.testing.assert_allclose(
            make_heights(10, 10, params, [a, b]),
            make_heights(10, 10, params, [b, a]),
            rtol=1e-5,
            atol=1e-6,
        )

    def test_origin_is_zero(self) -> None:
        """Cell (0, 0) samples the lattice origin, where noise is 0."""
        result = make_heights(4, 4, NoiseParams(amplitude=3.0), [NoiseLayer()])
        assert result[0, 0] == 0.0


class TestComputeSlope:
    """Tests for slope computation."""

    def test_flat_is_zero(self) -> None:
        """Flat zero surface has zero slope."""
        slope = compute_slope(np.zeros((6, 6), dtype=np.float32))
        np.testing.assert_array_equal(slope, np.zeros((6, 6)))

    def test_central_difference_interior(self) -> None:
        """Interior slope is the length of the central-difference gradient."""
        z, x = np.mgrid[0:5, 0:5].astype(np.float32)
        heights = 2.0 * x + 3.0 * z
        slope = compute_slope(heights)
        # dx = 2, dz = 3 away from the border
        assert math.isclose(slope[2, 2], math.hypot(2.0, 3.0), rel_tol=1e-6)

    def test_border_reads_zero_outside(self) -> None:
        """Missing neighbors read as 0.0 at the border."""
        heights = np.full((3, 3), 4.0, dtype=np.float32)
        slope = compute_slope(heights)
        # Corner (0, 0): dx = (4 - 0) / 2, dz = (4 - 0) / 2
        assert math.isclose(slope[0, 0], math.hypot(2.0, 2.0), rel_tol=1e-6)
        # Center has all neighbors present and equal
        assert slope[1, 1] == 0.0

    def test_single_spike(self) -> None:
        """A spike gives slope 0.5 * height at its axis neighbors."""
        heights = np.zeros((5, 5), dtype=np.float32)
        heights[2, 2] = 10.0
        slope = compute_slope(heights)
        assert slope[2, 2] == 0.0
        assert math.isclose(slope[2, 1], 5.0)
        assert math.isclose(slope[1, 2], 5.0)
        assert slope[1, 1] == 0.0

    def test_output_dtype_and_shape(self) -> None:
        """Slope has the input shape and is float32."""
        slope = compute_slope(np.ones((4, 7), dtype=np.float32))
        assert slope.shape == (4, 7)
        assert slope.dtype == np.float32
