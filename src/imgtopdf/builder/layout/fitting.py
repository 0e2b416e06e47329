"""
Module: builder.layout.fitting

Purpose:
    Scale an image into a slot according to the scaling mode and
    centre it. Aspect ratio is always preserved: one scale factor is
    applied to both axes.

Key Classes:
    - FitResult: Scale, drawn size and offset within the slot

Key Functions:
    - compute_scale(): Scale factor for one mode
    - fit_image(): Full placement within a slot

Scaling modes:
    - fit-page:  min(slot_w / img_w, slot_h / img_h)     may upscale
    - fit-width: min(slot_w / img_w, 1)                  may overflow height
    - original:  min(1, slot_w / img_w, slot_h / img_h)  shrink only

Used By:
    - builder.layout.composer: Per-image placement
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from imgtopdf.core.models.options import ScalingMode, coerce_enum


@dataclass(frozen=True)
class FitResult:
    """
    Image fitted into a slot (immutable).

    Offsets are measured from the slot's bottom-left corner and centre
    the drawn image; they are negative when the image overflows the slot.

    Attributes:
        scale: Points per pixel
        draw_width: Drawn width in points
        draw_height: Drawn height in points
        offset_x: Horizontal offset within the slot
        offset_y: Vertical offset within the slot
    """

    scale: float
    draw_width: float
    draw_height: float
    offset_x: float
    offset_y: float

    @property
    def draw_size(self) -> Tuple[float, float]:
        return (self.draw_width, self.draw_height)

    @property
    def draw_offset(self) -> Tuple[float, float]:
        return (self.offset_x, self.offset_y)


def compute_scale(
    image_width: float,
    image_height: float,
    slot_width: float,
    slot_height: float,
    mode: ScalingMode | str,
) -> float:
    """
    Scale factor for an image in a slot.

    Args:
        image_width: Image width in pixels
        image_height: Image height in pixels
        slot_width: Slot width in points
        slot_height: Slot height in points
        mode: Scaling mode

    Returns:
        Scale factor (points per pixel)

    Example:
        >>> compute_scale(800, 800, 400, 300, "original")
        0.375
    """
    mode = coerce_enum(ScalingMode, mode)
    width_ratio = slot_width / image_width
    height_ratio = slot_height / image_height

    if mode is ScalingMode.FIT_WIDTH:
        return min(width_ratio, 1.0)
    if mode is ScalingMode.ORIGINAL:
        return min(1.0, width_ratio, height_ratio)
    return min(width_ratio, height_ratio)


def fit_image(
    slot_size: Tuple[float, float],
    image_size: Tuple[int, int],
    mode: ScalingMode | str,
) -> FitResult:
    """
    Fit an image into a slot and centre it.

    Args:
        slot_size: (width, height) of the slot in points
        image_size: (width, height) of the image in pixels
        mode: Scaling mode

    Returns:
        FitResult with scale, drawn size and centring offset

    Raises:
        ValueError: If the image size is not positive or the slot size
            is negative

    Example:
        >>> fit_image((400, 300), (800, 300), "fit-page").scale
        0.5
    """
    slot_width, slot_height = slot_size
    image_width, image_height = image_size
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"image size must be positive: {image_width}x{image_height}")
    if slot_width < 0 or slot_height < 0:
        raise ValueError(f"slot size must be non-negative: {slot_width}x{slot_height}")

    scale = compute_scale(image_width, image_height, slot_width, slot_height, mode)
    draw_width = image_width * scale
    draw_height = image_height * scale

    return FitResult(
        scale=scale,
        draw_width=draw_width,
        draw_height=draw_height,
        offset_x=(slot_width - draw_width) / 2,
        offset_y=(slot_height - draw_height) / 2,
    )
