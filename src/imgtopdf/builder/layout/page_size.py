"""
Module: builder.layout.page_size

Purpose:
    Map a page size preset to a concrete page size in points.
    "Original" pages are sized from the pixel dimensions of the image
    they hold, so the result is computed per page.

Key Functions:
    - resolve_page_size(): Preset (+ custom size or image size) to points
    - page_size_for(): Same, driven by ConversionOptions
    - effective_original_dpi(): Resolution used to size "Original" pages

Dependencies:
    - common.units: mm / inch / point conversion
    - core.models.options: PageSizePreset, ConversionOptions

Used By:
    - builder.layout.composer: Per-page sizes
    - builder.images.resample: Slot size in inches
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

from imgtopdf.common.units import (
    PAGE_SIZING_FALLBACK_DPI,
    inches_to_points,
    mm_to_inches,
    pixels_to_inches,
)
from imgtopdf.core.errors import ConfigurationError
from imgtopdf.core.models.options import ConversionOptions, PageSizePreset, coerce_enum

from .models import ResolvedPageSize

logger = logging.getLogger(__name__)

# Fixed preset sizes in inches (width, height)
PRESET_SIZES_INCHES: dict[PageSizePreset, Tuple[float, float]] = {
    PageSizePreset.A4: (8.27, 11.69),
    PageSizePreset.A3: (11.69, 16.54),
    PageSizePreset.LETTER: (8.5, 11.0),
    PageSizePreset.LEGAL: (8.5, 14.0),
}

# Custom pages fall back to A4 per missing axis
CUSTOM_FALLBACK_INCHES = PRESET_SIZES_INCHES[PageSizePreset.A4]


def resolve_page_size(
    preset: PageSizePreset | str,
    custom_width_mm: Optional[float] = None,
    custom_height_mm: Optional[float] = None,
    image_size: Optional[Tuple[int, int]] = None,
    effective_dpi: Optional[float] = None,
) -> ResolvedPageSize:
    """
    Resolve a page size preset to points.

    Args:
        preset: Page size preset (member or its string value)
        custom_width_mm: Width for Custom pages
        custom_height_mm: Height for Custom pages
        image_size: (width, height) in pixels; required for Original
        effective_dpi: Resolution for Original pages (300 when absent)

    Returns:
        ResolvedPageSize in points

    Raises:
        ConfigurationError: Non-positive custom size or resolution, or
            Original without an image size

    Example:
        >>> resolve_page_size("Original", image_size=(3000, 2000), effective_dpi=300)
        ResolvedPageSize(width_pt=720.0, height_pt=480.0)
    """
    width_in, height_in = page_size_inches(
        preset, custom_width_mm, custom_height_mm, image_size, effective_dpi
    )
    return ResolvedPageSize(
        width_pt=inches_to_points(width_in),
        height_pt=inches_to_points(height_in),
    )


def page_size_inches(
    preset: PageSizePreset | str,
    custom_width_mm: Optional[float] = None,
    custom_height_mm: Optional[float] = None,
    image_size: Optional[Tuple[int, int]] = None,
    effective_dpi: Optional[float] = None,
) -> Tuple[float, float]:
    """Resolve a page size preset to (width, height) in inches."""
    preset = coerce_enum(PageSizePreset, preset)

    if preset is PageSizePreset.ORIGINAL:
        if image_size is None:
            raise ConfigurationError("Original page size requires the image pixel size")
        dpi = effective_dpi if effective_dpi is not None else PAGE_SIZING_FALLBACK_DPI
        width_px, height_px = image_size
        return (pixels_to_inches(width_px, dpi), pixels_to_inches(height_px, dpi))

    if preset is PageSizePreset.CUSTOM:
        return (
            _custom_axis_inches("custom_width_mm", custom_width_mm, CUSTOM_FALLBACK_INCHES[0]),
            _custom_axis_inches("custom_height_mm", custom_height_mm, CUSTOM_FALLBACK_INCHES[1]),
        )

    return PRESET_SIZES_INCHES[preset]


def effective_original_dpi(image_dpi: Optional[float], options: ConversionOptions) -> float:
    """
    Resolution used to size an "Original" page.

    Order: target dpi, the image's own density, the source dpi override,
    then the 300 ppi page-sizing fallback.
    """
    for candidate in (options.target_dpi, image_dpi, options.source_dpi):
        if candidate:
            return candidate
    return PAGE_SIZING_FALLBACK_DPI


def page_size_for(
    options: ConversionOptions,
    image_size: Optional[Tuple[int, int]] = None,
    image_dpi: Optional[float] = None,
) -> ResolvedPageSize:
    """
    Resolve the page size selected in *options*.

    For Original pages *image_size* (and optionally *image_dpi*) describe
    the image on that page.
    """
    effective_dpi = None
    if options.is_original_page_size:
        effective_dpi = effective_original_dpi(image_dpi, options)
    return resolve_page_size(
        options.page_size,
        custom_width_mm=options.custom_width_mm,
        custom_height_mm=options.custom_height_mm,
        image_size=image_size,
        effective_dpi=effective_dpi,
    )


def _custom_axis_inches(name: str, value_mm: Optional[float], fallback_in: float) -> float:
    if value_mm is None:
        logger.debug(f"{name} not set, using {fallback_in}in")
        return fallback_in
    if not math.isfinite(value_mm) or value_mm <= 0:
        raise ConfigurationError(f"{name} must be a positive finite number: {value_mm}")
    return mm_to_inches(value_mm)
