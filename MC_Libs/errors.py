"""
Error types raised by the crop engine.

All errors derive from CropperError so callers can catch the whole family.
Each also derives from the builtin exception it most resembles, so code that
already handles ValueError/RuntimeError keeps working.

Classes:
    CropperError: Base class for all crop engine errors
    BitmapCreationError: A bitmap buffer could not be allocated or resampled
    InvalidCustomGeometryError: Custom geometry violates containment rules
    DegenerateGeometryError: Zero-area mask or non-positive zoom
    ExtractionOutOfBoundsError: Rounded crop rect is empty after clamping
"""


class CropperError(Exception):
    """Base class for crop engine errors."""


class BitmapCreationError(CropperError, RuntimeError):
    """Raised when a new bitmap cannot be allocated or rendered."""


class InvalidCustomGeometryError(CropperError, ValueError):
    """Raised when custom mode has no provider or the provider returns bad geometry."""


class DegenerateGeometryError(CropperError, ValueError):
    """Raised for zero-area masks, non-positive zoom scales or empty content."""


class ExtractionOutOfBoundsError(CropperError, ValueError):
    """Raised when the rounded crop rect has no pixels inside the bitmap."""
