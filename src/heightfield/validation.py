"""Post-generation validation of heightfield invariants."""

import logging

import numpy as np

from .fields import compute_slope
from .store import Heightfield

logger = logging.getLogger(__name__)


class ValidationResult:
    """Result of heightfield validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_heightfield(field: Heightfield) -> ValidationResult:
    """Validate a heightfield's buffers.

    Args:
        field: Heightfield to check.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    # Check 1: Buffer shapes match the grid
    _check_shapes(field, result)

    if result.passed:
        # Check 2: No NaN or infinite values
        _check_finite(field, result)

    if result.passed:
        # Check 3: Slopes are in sync with heights
        _check_slopes_current(field, result)

        # Check 4: Surface is not completely flat
        _check_relief(field, result)

    if result.passed:
        logger.info("Heightfield validation passed")
    else:
        logger.warning(f"Heightfield validation failed with {len(result.errors)} errors")
        for error in result.errors:
            logger.error(f"  - {error}")

    for warning in result.warnings:
        logger.warning(f"  - {warning}")

    return result


def _check_shapes(field: Heightfield, result: ValidationResult) -> None:
    """Check both buffers have shape (depth, width)."""
    expected = (field.depth, field.width)

    if field.heights.shape != expected:
        result.add_error(f"Height buffer shape {field.heights.shape} != {expected}")
    if field.slopes.shape != expected:
        result.add_error(f"Slope buffer shape {field.slopes.shape} != {expected}")


def _check_finite(field: Heightfield, result: ValidationResult) -> None:
    """Check all heights and slopes are finite."""
    bad_heights = int(np.count_nonzero(~np.isfinite(field.heights)))
    bad_slopes = int(np.count_nonzero(~np.isfinite(field.slopes)))

    if bad_heights > 0:
        result.add_error(f"{bad_heights} non-finite heights")
    if bad_slopes > 0:
        result.add_error(f"{bad_slopes} non-finite slopes")


def _check_slopes_current(field: Heightfield, result: ValidationResult) -> None:
    """Check the slope buffer matches a fresh slope computation."""
    expected = compute_slope(field.heights)
    if not np.allclose(field.slopes, expected, rtol=1e-5, atol=1e-6):
        stale = int(np.count_nonzero(~np.isclose(field.slopes, expected, rtol=1e-5, atol=1e-6)))
        result.add_error(f"{stale} slope cells are stale")


def _check_relief(field: Heightfield, result: ValidationResult) -> None:
    """Warn on a completely flat surface."""
    low, high = field.compute_min_max()
    if high == low:
        result.add_warning(f"Heightfield is flat at height {low:.4f}")
