"""Procedural heightfield synthesis and thermal erosion.

This package builds a terrain elevation grid from layered fractal gradient
noise and relaxes it toward an angle of repose with a mass-conserving
thermal erosion simulation.
"""

from .config import ErosionConfig, NoiseLayer, NoiseParams, TerrainConfig, load_config
from .erosion import erosion_step, thermal_erosion
from .exceptions import HeightfieldError, InvalidDimensionsError
from .fields import compute_slope, make_heights
from .generator import GenerationResult, build_heightfield, generate_heightfield
from .noise import fbm, fbm_grid, gradient, noise, noise_grid
from .store import Heightfield
from .validation import ValidationResult, validate_heightfield

__all__ = [
    # Config
    "ErosionConfig",
    "NoiseLayer",
    "NoiseParams",
    "TerrainConfig",
    "load_config",
    # Noise
    "gradient",
    "noise",
    "fbm",
    "noise_grid",
    "fbm_grid",
    # Fields
    "make_heights",
    "compute_slope",
    # Erosion
    "erosion_step",
    "thermal_erosion",
    # Store
    "Heightfield",
    # Generation
    "GenerationResult",
    "build_heightfield",
    "generate_heightfield",
    # Validation
    "ValidationResult",
    "validate_heightfield",
    # Exceptions
    "HeightfieldError",
    "InvalidDimensionsError",
]
