"""
Module: core.errors

Purpose:
    Exception taxonomy shared by the layout engine, image processing and
    the conversion controller.

Key Classes:
    - ImgToPdfError: Base class for all package errors
    - ConfigurationError: Invalid options, raised before any image work
    - UnsupportedInputError: A single image cannot be used (skipped)
    - EmptyInputError: Nothing left to convert
    - ConversionCancelled: Conversion stopped by its cancellation token
    - ConversionError: Document could not be written

Used By:
    - core.models.options: Option validation
    - builder.layout: Geometry validation
    - builder.images: Decode failures
    - builder.controller: Pipeline outcomes
"""

from __future__ import annotations


class ImgToPdfError(Exception):
    """Base class for imgtopdf errors."""
    pass


class ConfigurationError(ImgToPdfError, ValueError):
    """Invalid conversion options (margin, dimensions, resolution, quality)."""
    pass


class UnsupportedInputError(ImgToPdfError):
    """
    Image failed a format or decode precondition.

    Attributes:
        path: Offending file path (may be None when unknown)
    """

    def __init__(self, message: str, path: object = None) -> None:
        super().__init__(message)
        self.path = path


class EmptyInputError(ImgToPdfError):
    """No usable images remain after filtering."""
    pass


class ConversionCancelled(ImgToPdfError):
    """
    Conversion was cancelled.

    Not a failure: callers report it as a distinct terminal state.
    """
    pass


class ConversionError(ImgToPdfError):
    """Error while writing the output document."""
    pass
