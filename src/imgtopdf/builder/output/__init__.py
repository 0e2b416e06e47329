"""
Module: builder.output

Purpose:
    Output generation for converted documents.

Key Functions:
    - render_to_pdf(): Render a LayoutResult with ReportLab

Used By:
    - builder.controller: Final pipeline step
"""

from .renderer import render_to_pdf

__all__ = [
    "render_to_pdf",
]
