"""
Module: core.models.options

Purpose:
    Conversion options and the preset enums they are built from.
    Options are immutable and validated on construction so invalid
    settings fail before any image is touched.

Key Classes:
    - PageSizePreset: A4 / A3 / Letter / Legal / Custom / Original
    - PageLayoutPreset: one / two / four images per page
    - ScalingMode: fit-page / fit-width / original
    - ConversionOptions: Complete option set for one conversion

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - builder.layout: Page size and grid resolution
    - builder.images: Resample planning and encoding
    - builder.controller: Pipeline orchestration
    - cli: Flag parsing
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, Type, TypeVar

from imgtopdf.core.errors import ConfigurationError

DEFAULT_QUALITY = 85
DEFAULT_MARGIN_INCHES = 0.25

_E = TypeVar("_E", bound=Enum)


class PageSizePreset(Enum):
    """Page size selection."""

    A4 = "A4"
    A3 = "A3"
    LETTER = "Letter"
    LEGAL = "Legal"
    CUSTOM = "Custom"
    ORIGINAL = "Original"  # page sized from the image on it


class PageLayoutPreset(Enum):
    """Number of images per page."""

    ONE = "one"
    TWO = "two"
    FOUR = "four"


class ScalingMode(Enum):
    """
    How an image is scaled into its slot.

    Attributes:
        FIT_PAGE: Fill one slot dimension exactly; may upscale
        FIT_WIDTH: Constrain by width only; never upscale
        ORIGINAL: Keep pixel size unless it exceeds the slot
    """

    FIT_PAGE = "fit-page"
    FIT_WIDTH = "fit-width"
    ORIGINAL = "original"


def coerce_enum(enum_cls: Type[_E], value: Any) -> _E:
    """
    Convert *value* to a member of *enum_cls*.

    Accepts members, their values (case-insensitive) and member names.

    Raises:
        ConfigurationError: If value matches no member
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        for member in enum_cls:
            if member.value.lower() == lowered or member.name.lower() == lowered:
                return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise ConfigurationError(
        f"Unknown {enum_cls.__name__} {value!r} (expected one of: {allowed})"
    )


def _check_positive(name: str, value: Optional[float]) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number: {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive finite number: {value!r}")


@dataclass(frozen=True)
class ConversionOptions:
    """
    Options for one conversion (immutable).

    Attributes:
        source_dpi: Resolution to assume for images without embedded density
        target_dpi: Output resolution; enables downscaling and drives
            "Original" page sizing
        quality: JPEG quality 1..100
        page_size: Page size preset
        page_layout: Images-per-page preset
        custom_width_mm: Page width for the Custom preset
        custom_height_mm: Page height for the Custom preset
        margin_inches: Page margin; negative values are treated as 0
        scaling: Scaling mode for images inside their slot
        preserve_metadata: Keep EXIF data in re-encoded images
        output_path: Explicit PDF destination

    Invariants:
        - dpi values, custom dimensions: positive and finite when set
        - margin_inches finite
        - 1 <= quality <= 100

    Example:
        >>> opts = ConversionOptions(page_size=PageSizePreset.LETTER)
        >>> opts.page_layout
        <PageLayoutPreset.ONE: 'one'>
    """

    source_dpi: Optional[float] = None
    target_dpi: Optional[float] = None
    quality: int = DEFAULT_QUALITY
    page_size: PageSizePreset = PageSizePreset.A4
    page_layout: PageLayoutPreset = PageLayoutPreset.ONE
    custom_width_mm: Optional[float] = None
    custom_height_mm: Optional[float] = None
    margin_inches: float = DEFAULT_MARGIN_INCHES
    scaling: ScalingMode = ScalingMode.FIT_PAGE
    preserve_metadata: bool = True
    output_path: Optional[Path] = None

    def __post_init__(self) -> None:
        """Validate options on construction."""
        _check_positive("source_dpi", self.source_dpi)
        _check_positive("target_dpi", self.target_dpi)
        _check_positive("custom_width_mm", self.custom_width_mm)
        _check_positive("custom_height_mm", self.custom_height_mm)

        if isinstance(self.margin_inches, bool) or not isinstance(self.margin_inches, (int, float)):
            raise ConfigurationError(f"margin_inches must be a number: {self.margin_inches!r}")
        if not math.isfinite(self.margin_inches):
            raise ConfigurationError(f"margin_inches must be finite: {self.margin_inches!r}")

        if isinstance(self.quality, bool) or not isinstance(self.quality, int):
            raise ConfigurationError(f"quality must be an integer: {self.quality!r}")
        if not 1 <= self.quality <= 100:
            raise ConfigurationError(f"quality must be between 1 and 100: {self.quality}")

        for name, enum_cls in (
            ("page_size", PageSizePreset),
            ("page_layout", PageLayoutPreset),
            ("scaling", ScalingMode),
        ):
            if not isinstance(getattr(self, name), enum_cls):
                raise ConfigurationError(f"{name} must be a {enum_cls.__name__}")

    @property
    def is_original_page_size(self) -> bool:
        """True when every page is sized from its own image."""
        return self.page_size is PageSizePreset.ORIGINAL

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConversionOptions:
        """
        Build options from loosely typed user input.

        Missing keys and ``None`` values take defaults; enum fields
        accept their string values.

        Args:
            data: Mapping with any subset of the field names

        Returns:
            Validated ConversionOptions

        Raises:
            ConfigurationError: If any value is invalid

        Example:
            >>> ConversionOptions.from_dict({"page_size": "Letter", "margin_inches": None}).margin_inches
            0.25
        """
        def pick(key: str, default: Any) -> Any:
            value = data.get(key)
            return default if value is None else value

        output_path = data.get("output_path")
        return cls(
            source_dpi=data.get("source_dpi"),
            target_dpi=data.get("target_dpi"),
            quality=pick("quality", DEFAULT_QUALITY),
            page_size=coerce_enum(PageSizePreset, pick("page_size", PageSizePreset.A4)),
            page_layout=coerce_enum(PageLayoutPreset, pick("page_layout", PageLayoutPreset.ONE)),
            custom_width_mm=data.get("custom_width_mm"),
            custom_height_mm=data.get("custom_height_mm"),
            margin_inches=pick("margin_inches", DEFAULT_MARGIN_INCHES),
            scaling=coerce_enum(ScalingMode, pick("scaling", ScalingMode.FIT_PAGE)),
            preserve_metadata=bool(pick("preserve_metadata", True)),
            output_path=Path(output_path) if output_path else None,
        )
