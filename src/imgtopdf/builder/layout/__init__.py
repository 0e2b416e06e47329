"""
Module: builder.layout

Purpose:
    Page layout engine. Resolves page sizes and slot grids, groups
    images into pages and fits each image into its slot.

Key Functions:
    - compose_pages(): Main entry point for layout
    - resolve_page_size(): Preset to page size in points
    - resolve_grid(), tighten_grid(): Slot grids
    - fit_image(): Scale and centre an image in a slot
    - paginate(): Split images into page groups

Key Classes:
    - ResolvedPageSize, ResolvedGrid, FitResult
    - PlacedImage, PagePlan, LayoutResult

Used By:
    - builder.controller: Conversion pipeline
    - builder.images.resample: Slot size for downscaling
"""

from .models import ResolvedPageSize, PlacedImage, PagePlan, LayoutResult
from .page_size import resolve_page_size, page_size_for, effective_original_dpi
from .grid import ResolvedGrid, resolve_grid, tighten_grid
from .fitting import FitResult, fit_image, compute_scale
from .paginator import paginate, page_capacity
from .composer import compose_pages, compose_page, validate_layout

__all__ = [
    # Models
    "ResolvedPageSize",
    "PlacedImage",
    "PagePlan",
    "LayoutResult",
    "ResolvedGrid",
    "FitResult",
    # Functions
    "resolve_page_size",
    "page_size_for",
    "effective_original_dpi",
    "resolve_grid",
    "tighten_grid",
    "fit_image",
    "compute_scale",
    "paginate",
    "page_capacity",
    "compose_pages",
    "compose_page",
    "validate_layout",
]
