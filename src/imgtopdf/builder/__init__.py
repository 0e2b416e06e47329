"""
Module: builder

Purpose:
    Conversion pipeline from selected image files to a single PDF.
    Inspects and re-encodes images, lays them out on pages and renders
    the result with ReportLab.

Key Functions:
    - convert_images(): Main entry point for conversion
    - inspect_files(): Pre-flight inspection of a selection
    - compose_pages(): Layout only (no I/O)

Key Classes:
    - ConversionController: Conversion runner with cancellation
    - ConversionSummary: Result of a conversion
    - ProgressUpdate: Progress event payload

Dependencies:
    - PIL, pillow_heif: Image decoding and encoding
    - reportlab: PDF writing
    - imgtopdf.core.models: Options and image value objects

Used By:
    - imgtopdf.cli: Command-line interface
"""

from .cancellation import CancellationToken
from .controller import (
    ConversionController,
    ConversionStage,
    ConversionSummary,
    ProgressUpdate,
    convert_images,
)
from .images import inspect_files, plan_resample, process_image
from .layout import (
    compose_pages,
    fit_image,
    paginate,
    resolve_grid,
    resolve_page_size,
    tighten_grid,
)
from .output import render_to_pdf

__all__ = [
    # Controller
    "ConversionController",
    "ConversionStage",
    "ConversionSummary",
    "ProgressUpdate",
    "CancellationToken",
    "convert_images",
    # Images
    "inspect_files",
    "plan_resample",
    "process_image",
    # Layout
    "resolve_page_size",
    "resolve_grid",
    "tighten_grid",
    "fit_image",
    "paginate",
    "compose_pages",
    # Output
    "render_to_pdf",
]
