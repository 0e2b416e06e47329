"""
Core Models Package

Immutable, validated data models shared by every stage of a conversion.
All models are frozen dataclasses: no stage mutates what an earlier
stage produced, so results can be recomputed deterministically.
"""

from .options import (
    ConversionOptions,
    PageSizePreset,
    PageLayoutPreset,
    ScalingMode,
    coerce_enum,
    DEFAULT_QUALITY,
    DEFAULT_MARGIN_INCHES,
)
from .images import SourceImage, ProcessedImage, ImageFileInfo

__all__ = [
    "ConversionOptions",
    "PageSizePreset",
    "PageLayoutPreset",
    "ScalingMode",
    "coerce_enum",
    "DEFAULT_QUALITY",
    "DEFAULT_MARGIN_INCHES",
    "SourceImage",
    "ProcessedImage",
    "ImageFileInfo",
]
