"""Main heightfield generation orchestration."""

import logging
from collections.abc import Callable

import numpy as np

from .config import TerrainConfig
from .store import Heightfield

logger = logging.getLogger(__name__)


class GenerationResult:
    """Result of heightfield generation."""

    def __init__(
        self,
        field: Heightfield,
        config: TerrainConfig,
        height_range: tuple[float, float],
    ):
        self.field = field
        self.config = config
        self.height_range = height_range


def build_heightfield(config: TerrainConfig) -> Heightfield:
    """Create a Heightfield with the configured base parameters and layers."""
    field = Heightfield(config.width, config.depth, params=config.base)
    for layer in config.layers:
        field.add_layer(layer.frequency, layer.amplitude)
    return field


def generate_heightfield(
    config: TerrainConfig,
    should_cancel: Callable[[], bool] | None = None,
) -> GenerationResult:
    """Generate a heightfield from configuration.

    Args:
        config: Heightfield generation configuration.
        should_cancel: Optional callable checked between erosion passes.

    Returns:
        GenerationResult with the populated Heightfield.
    """
    logger.info(
        f"Generating heightfield {config.width}x{config.depth} "
        f"with {len(config.layers)} extra layers"
    )

    field = build_heightfield(config)

    # Stage A: Synthesis
    logger.info("Stage A: Synthesizing heights...")
    field.regenerate()

    # Stage B: Erosion
    if config.erode:
        erosion = config.erosion
        logger.info(
            f"Stage B: Applying {erosion.iterations} erosion iterations "
            f"(repose {erosion.repose_angle:.1f} deg)..."
        )
        field.apply_erosion_config(erosion, should_cancel=should_cancel)
    else:
        logger.info("Stage B: Erosion disabled, skipping")

    height_range = field.compute_min_max()
    _log_height_stats(field, height_range)

    return GenerationResult(field=field, config=config, height_range=height_range)


def _log_height_stats(field: Heightfield, height_range: tuple[float, float]) -> None:
    """Log heightfield statistics."""
    low, high = height_range
    heights = field.heights
    slopes = field.slopes

    logger.info(f"Heightfield stats ({heights.size:,} cells):")
    logger.info(f"  height range: [{low:.4f}, {high:.4f}]")
    logger.info(f"  mean height: {float(np.mean(heights)):.4f}")
    logger.info(f"  mean slope: {float(np.mean(slopes)):.4f}")
