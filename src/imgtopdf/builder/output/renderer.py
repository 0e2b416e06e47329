"""
Module: builder.output.renderer

Purpose:
    Render a LayoutResult to PDF using ReportLab.
    Each PagePlan becomes one PDF page with its images drawn at the
    planned rectangles.

Key Functions:
    - render_to_pdf(): Main rendering function

Dependencies:
    - reportlab: PDF generation
    - builder.layout.models: LayoutResult, PagePlan

Used By:
    - builder.controller: Pipeline orchestration
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from imgtopdf.builder.layout.models import LayoutResult, PagePlan, PlacedImage
from imgtopdf.core.errors import ConversionError

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Image Conversion"
PARTIAL_SUFFIX = ".part"


def _get_creator() -> str:
    """Creator string with the current version number."""
    from imgtopdf import __version__
    return f"imgtopdf {__version__}"


def render_to_pdf(
    layout: LayoutResult,
    output_path: Path,
    *,
    title: str = DEFAULT_TITLE,
) -> Path:
    """
    Render layout result to a PDF file.

    Pages are written to a temporary file next to *output_path* and
    moved into place only once the document is complete, so a failed
    render never leaves a truncated PDF behind.

    Args:
        layout: Layout result from the composer
        output_path: Path to write PDF
        title: Document title metadata

    Returns:
        The written path

    Raises:
        ConversionError: If the layout is empty or the PDF cannot be written

    Example:
        >>> render_to_pdf(layout, Path("out/holiday.pdf"))
        PosixPath('out/holiday.pdf')
    """
    if layout.page_count == 0:
        raise ConversionError("Nothing to render: layout has no pages")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    partial_path = output_path.with_name(output_path.name + PARTIAL_SUFFIX)

    first_size = layout.pages[0].page_size.as_tuple()
    try:
        c = canvas.Canvas(str(partial_path), pagesize=first_size)
        c.setTitle(title)
        c.setCreator(_get_creator())

        for page in layout.pages:
            _render_page(c, page)
            c.showPage()

        c.save()
        partial_path.replace(output_path)
    except (OSError, ValueError) as e:
        partial_path.unlink(missing_ok=True)
        raise ConversionError(f"Failed to write {output_path}: {e}") from e

    logger.info(f"Rendered {layout.page_count} pages to {output_path}")
    return output_path


def _render_page(c: canvas.Canvas, page: PagePlan) -> None:
    """
    Render a single page to the canvas.

    The page size is set per page because Original pages differ.
    """
    c.setPageSize(page.page_size.as_tuple())
    for placement in page.placements:
        _draw_image(c, placement)


def _draw_image(c: canvas.Canvas, placement: PlacedImage) -> None:
    """Draw one placement; coordinates are already bottom-left based."""
    reader = ImageReader(io.BytesIO(placement.image.data))
    c.drawImage(
        reader,
        placement.x,
        placement.y,
        width=placement.width,
        height=placement.height,
        mask="auto",
    )
