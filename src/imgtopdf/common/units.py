"""Unit conversion helpers.

Converts between millimetres, inches, PDF points (1/72 inch) and pixels
at a given resolution. Nothing here rounds; callers that need integral
pixel counts floor the result themselves.
"""

from __future__ import annotations

import math

from imgtopdf.core.errors import ConfigurationError

MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0

# Resolution assumed when sizing an "Original" page and neither a target
# dpi, embedded density nor a source dpi override is known.
PAGE_SIZING_FALLBACK_DPI = 300

# Resolution assumed when measuring an image's physical size without
# embedded density or a source dpi override.
MEASURE_FALLBACK_DPI = 72


def validate_dpi(dpi: float, name: str = "dpi") -> float:
    """Return *dpi* unchanged, raising ConfigurationError unless finite and > 0."""
    if isinstance(dpi, bool) or not isinstance(dpi, (int, float)):
        raise ConfigurationError(f"{name} must be a number: {dpi!r}")
    if not math.isfinite(dpi) or dpi <= 0:
        raise ConfigurationError(f"{name} must be a positive finite number: {dpi!r}")
    return dpi


def mm_to_inches(mm: float) -> float:
    return mm / MM_PER_INCH


def inches_to_mm(inches: float) -> float:
    return inches * MM_PER_INCH


def inches_to_points(inches: float) -> float:
    return inches * POINTS_PER_INCH


def points_to_inches(points: float) -> float:
    return points / POINTS_PER_INCH


def pixels_to_inches(pixels: float, dpi: float) -> float:
    """
    Convert a pixel count to inches at *dpi* pixels per inch.

    Raises:
        ConfigurationError: If dpi is non-finite or not positive
    """
    return pixels / validate_dpi(dpi)


def inches_to_pixels(inches: float, dpi: float) -> float:
    """Convert inches to a (fractional) pixel count at *dpi*."""
    return inches * validate_dpi(dpi)


def pixels_to_points(pixels: float, dpi: float) -> float:
    """
    Convert pixels to PDF points.

    Example:
        >>> pixels_to_points(300, 300)
        72.0
    """
    return inches_to_points(pixels_to_inches(pixels, dpi))
