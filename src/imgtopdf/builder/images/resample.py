"""
Module: builder.images.resample

Purpose:
    Decide whether an image should be downscaled before embedding so
    that oversized rasters do not bloat the PDF.

Key Classes:
    - ResamplePlan: Decision plus target pixel box

Key Functions:
    - plan_resample(): Main planning function
    - slot_size_inches(): Full-grid slot size for a set of options

Rules:
    - No resize for Original page size or when no target dpi is set.
    - Slot size comes from the full (untightened) grid; final page
      grouping is not known yet.
    - Resize only when the image, measured at its own resolution, is
      larger than the slot along either axis.
    - Target box is floor(slot inches * target dpi), at least 1 px.
    - Downscale only, aspect ratio preserved.

Dependencies:
    - builder.layout: Page size and grid resolution

Used By:
    - builder.images.processor: Resize step
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from imgtopdf.common.units import MEASURE_FALLBACK_DPI, pixels_to_inches, points_to_inches
from imgtopdf.core.models.options import ConversionOptions
from imgtopdf.builder.layout.grid import resolve_grid
from imgtopdf.builder.layout.page_size import page_size_for


@dataclass(frozen=True)
class ResamplePlan:
    """
    Resampling decision for one image (immutable).

    Attributes:
        should_resize: Whether the image must be downscaled
        target_width: Width of the bounding box in pixels (when resizing)
        target_height: Height of the bounding box in pixels (when resizing)
        effective_dpi: Resolution the box was computed at
        reason: Short human-readable explanation
    """

    should_resize: bool
    target_width: Optional[int] = None
    target_height: Optional[int] = None
    effective_dpi: Optional[float] = None
    reason: str = ""

    @property
    def target_size(self) -> Optional[Tuple[int, int]]:
        if not self.should_resize:
            return None
        return (self.target_width, self.target_height)

    def fitted_size(self, width: int, height: int) -> Tuple[int, int]:
        """
        Pixel size of a *width* x *height* image after resizing.

        Fits the image inside the target box preserving aspect ratio and
        never enlarging it. Returns the input unchanged when no resize is
        planned.

        Example:
            >>> ResamplePlan(True, 500, 500).fitted_size(2000, 1000)
            (500, 250)
        """
        if not self.should_resize:
            return (width, height)
        scale = min(self.target_width / width, self.target_height / height, 1.0)
        return (
            max(round(width * scale), 1),
            max(round(height * scale), 1),
        )


def slot_size_inches(options: ConversionOptions) -> Tuple[float, float]:
    """
    (width, height) in inches of one slot on the full grid.

    Not meaningful for Original page size, which has no fixed page.
    """
    page = page_size_for(options)
    grid = resolve_grid(options.page_layout, options.margin_inches)
    slot_w, slot_h = grid.slot_size(page)
    return (points_to_inches(slot_w), points_to_inches(slot_h))


def plan_resample(
    image_size: Tuple[int, int],
    native_dpi: Optional[float],
    options: ConversionOptions,
) -> ResamplePlan:
    """
    Plan downscaling for one image.

    Pure: identical inputs always give an identical plan.

    Args:
        image_size: (width, height) in pixels
        native_dpi: Embedded resolution of the image, if any
        options: Conversion options

    Returns:
        ResamplePlan

    Example:
        >>> opts = ConversionOptions(target_dpi=150, margin_inches=0)
        >>> plan_resample((6000, 4000), 300, opts).target_size
        (1240, 1753)
    """
    width, height = image_size
    if width <= 0 or height <= 0:
        return ResamplePlan(False, reason="image has no pixel size")
    if options.is_original_page_size:
        return ResamplePlan(False, reason="page size follows the image")
    if not options.target_dpi:
        return ResamplePlan(False, reason="no target dpi")

    effective_dpi = options.target_dpi
    measure_dpi = native_dpi or options.source_dpi or MEASURE_FALLBACK_DPI
    width_in = pixels_to_inches(width, measure_dpi)
    height_in = pixels_to_inches(height, measure_dpi)
    slot_w_in, slot_h_in = slot_size_inches(options)

    if width_in <= slot_w_in and height_in <= slot_h_in:
        return ResamplePlan(
            False,
            effective_dpi=effective_dpi,
            reason=f"{width_in:.2f}x{height_in:.2f}in fits {slot_w_in:.2f}x{slot_h_in:.2f}in slot",
        )

    return ResamplePlan(
        True,
        target_width=max(math.floor(slot_w_in * effective_dpi), 1),
        target_height=max(math.floor(slot_h_in * effective_dpi), 1),
        effective_dpi=effective_dpi,
        reason=f"{width_in:.2f}x{height_in:.2f}in exceeds {slot_w_in:.2f}x{slot_h_in:.2f}in slot",
    )
