"""Custom exceptions for heightfield synthesis."""


class HeightfieldError(Exception):
    """Base exception for heightfield errors."""

    pass


class InvalidDimensionsError(HeightfieldError, ValueError):
    """Raised when a grid is constructed with non-positive dimensions."""

    pass
