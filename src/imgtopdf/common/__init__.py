"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .units import (
    MM_PER_INCH,
    POINTS_PER_INCH,
    PAGE_SIZING_FALLBACK_DPI,
    MEASURE_FALLBACK_DPI,
    mm_to_inches,
    inches_to_mm,
    inches_to_points,
    points_to_inches,
    pixels_to_inches,
    inches_to_pixels,
    pixels_to_points,
    validate_dpi,
)
from .path_utils import (
    SUPPORTED_EXTENSIONS,
    get_extension,
    is_supported_extension,
    is_supported_path,
    resolve_output_path,
)

__all__ = [
    # units
    "MM_PER_INCH",
    "POINTS_PER_INCH",
    "PAGE_SIZING_FALLBACK_DPI",
    "MEASURE_FALLBACK_DPI",
    "mm_to_inches",
    "inches_to_mm",
    "inches_to_points",
    "points_to_inches",
    "pixels_to_inches",
    "inches_to_pixels",
    "pixels_to_points",
    "validate_dpi",
    # paths
    "SUPPORTED_EXTENSIONS",
    "get_extension",
    "is_supported_extension",
    "is_supported_path",
    "resolve_output_path",
]
