"""Heightfield generation configuration models."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field


class NoiseParams(BaseModel):
    """Base fractal layer parameters."""

    octaves: int = Field(default=5, description="Number of octaves for fBm")
    frequency: float = Field(default=0.01, description="Sample frequency per cell")
    amplitude: float = Field(default=1.0, description="Height multiplier")
    gain: float = Field(default=0.5, description="Amplitude multiplier per octave")
    lacunarity: float = Field(default=2.0, description="Frequency multiplier per octave")


class NoiseLayer(BaseModel, frozen=True):
    """Auxiliary noise contribution added on top of the base layer."""

    frequency: float = Field(default=0.005, description="Sample frequency per cell")
    amplitude: float = Field(default=0.5, description="Height multiplier")


class ErosionConfig(BaseModel):
    """Thermal erosion parameters."""

    iterations: int = Field(default=60, description="Number of relaxation passes")
    repose_angle: float = Field(
        default=50.0, description="Angle of repose in degrees (clamped to [0, 89])"
    )
    talus_factor: float = Field(
        default=0.125,
        description="Fraction of excess moved per pass (clamped to [0, 1]; stable up to 1/8)",
    )
    cell_spacing_x: float = Field(default=1.0, description="World distance between columns")
    cell_spacing_z: float = Field(default=1.0, description="World distance between rows")


class TerrainConfig(BaseModel):
    """Complete heightfield generation configuration."""

    width: int = Field(default=1000, description="Grid width in cells")
    depth: int = Field(default=1000, description="Grid depth in cells")

    base: NoiseParams = Field(default_factory=NoiseParams)
    layers: list[NoiseLayer] = Field(default_factory=list)
    erosion: ErosionConfig = Field(default_factory=ErosionConfig)
    erode: bool = Field(default=True, description="Run erosion after synthesis")


def load_config(config_path: Path) -> TerrainConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed TerrainConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return TerrainConfig.model_validate(data)
