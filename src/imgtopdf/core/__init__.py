"""
imgtopdf Core Package

Shared data models and the error taxonomy. Everything else in the
package builds on these; this package imports nothing from the rest
of imgtopdf.
"""

from .errors import (
    ImgToPdfError,
    ConfigurationError,
    UnsupportedInputError,
    EmptyInputError,
    ConversionCancelled,
    ConversionError,
)
from .models import (
    ConversionOptions,
    PageSizePreset,
    PageLayoutPreset,
    ScalingMode,
    SourceImage,
    ProcessedImage,
    ImageFileInfo,
)

__all__ = [
    # errors
    "ImgToPdfError",
    "ConfigurationError",
    "UnsupportedInputError",
    "EmptyInputError",
    "ConversionCancelled",
    "ConversionError",
    # models
    "ConversionOptions",
    "PageSizePreset",
    "PageLayoutPreset",
    "ScalingMode",
    "SourceImage",
    "ProcessedImage",
    "ImageFileInfo",
]
