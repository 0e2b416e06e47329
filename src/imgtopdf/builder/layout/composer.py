"""
Module: builder.layout.composer

Purpose:
    Turn processed images into page plans. Groups images into pages,
    resolves each page's size and grid, and fits every image into its
    slot.

Key Functions:
    - compose_pages(): Main entry point for layout
    - compose_page(): Lay out a single group
    - validate_layout(): Fail fast when margins leave no room for slots

Algorithm:
    1. Capacity is 1 for Original page size, else the full grid's.
    2. Group images in input order (paginator).
    3. Per group:
       - Original: layout "one", page sized from that image; the
         margin is dropped on axes it would fill
       - Short final group: tightened grid
       - Otherwise: full grid
    4. Fit each image into its slot and shift by the slot origin.

Dependencies:
    - builder.layout.page_size, grid, fitting, paginator

Used By:
    - builder.controller: Conversion pipeline
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from imgtopdf.core.errors import ConfigurationError
from imgtopdf.core.models.images import ProcessedImage
from imgtopdf.core.models.options import ConversionOptions, PageLayoutPreset

from .fitting import fit_image
from .grid import ResolvedGrid, resolve_grid, tighten_grid
from .models import LayoutResult, PagePlan, PlacedImage, ResolvedPageSize
from .page_size import page_size_for
from .paginator import page_capacity, paginate

logger = logging.getLogger(__name__)

OVERFLOW_TOLERANCE_PT = 0.01


def compose_pages(
    images: Sequence[ProcessedImage],
    options: ConversionOptions,
) -> LayoutResult:
    """
    Lay out *images* onto pages.

    Original pages too small for the margin are laid out without it
    and reported in LayoutResult.warnings.

    Args:
        images: Processed images in output order
        options: Conversion options

    Returns:
        LayoutResult with one PagePlan per page

    Raises:
        ConfigurationError: If margins leave no room for a slot on a
            fixed page size

    Example:
        >>> result = compose_pages(images, ConversionOptions(page_layout=PageLayoutPreset.FOUR))
        >>> [p.placement_count for p in result.pages]
        [4, 1]
    """
    if not images:
        return LayoutResult(pages=())

    base_grid = _base_grid(options)
    groups = paginate(images, page_capacity(options))

    pages: List[PagePlan] = []
    warnings: List[str] = []
    for index, group in enumerate(groups):
        grid = base_grid if len(group) >= base_grid.capacity else tighten_grid(base_grid, len(group))
        if options.is_original_page_size:
            grid, warning = _fit_margins_to_image_page(index, group[0], grid, options)
            if warning:
                warnings.append(warning)
        page = compose_page(index, group, grid, options)
        warnings.extend(_overflow_warnings(page))
        pages.append(page)

    for warning in warnings:
        logger.warning(warning)
    logger.info(f"Laid out {len(images)} images on {len(pages)} pages")
    return LayoutResult(pages=tuple(pages), warnings=warnings)


def compose_page(
    index: int,
    images: Sequence[ProcessedImage],
    grid: ResolvedGrid,
    options: ConversionOptions,
) -> PagePlan:
    """
    Lay out one page.

    The page size comes from the first image on the page, which only
    matters for Original page size where pages hold a single image.
    """
    first = images[0]
    page = page_size_for(options, image_size=first.size, image_dpi=first.dpi)
    _check_slot_space(grid, page)
    slot_size = grid.slot_size(page)

    placements = []
    for slot_index, image in enumerate(images):
        slot_x, slot_y = grid.slot_origin(slot_index, page)
        fit = fit_image(slot_size, image.size, options.scaling)
        placements.append(PlacedImage(
            image=image,
            x=slot_x + fit.offset_x,
            y=slot_y + fit.offset_y,
            width=fit.draw_width,
            height=fit.draw_height,
            scale=fit.scale,
        ))
        logger.debug(
            f"Page {index} slot {slot_index}: {image.original_path.name} "
            f"scale={fit.scale:.4f} at ({slot_x + fit.offset_x:.1f}, {slot_y + fit.offset_y:.1f})"
        )

    return PagePlan(index=index, page_size=page, grid=grid, placements=tuple(placements))


def validate_layout(options: ConversionOptions) -> None:
    """
    Check that the selected page leaves room for every slot.

    Original pages depend on each image; layout drops the margin on
    any that are too small for it.

    Raises:
        ConfigurationError: If margins and gutters consume the page
    """
    if options.is_original_page_size:
        return
    _check_slot_space(_base_grid(options), page_size_for(options))


def _base_grid(options: ConversionOptions) -> ResolvedGrid:
    layout = PageLayoutPreset.ONE if options.is_original_page_size else options.page_layout
    return resolve_grid(layout, options.margin_inches)


def _overflow_warnings(page: PagePlan) -> List[str]:
    """fit-width only constrains width, so tall images can spill past their slot."""
    _, slot_h = page.grid.slot_size(page.page_size)
    return [
        f"{p.image.original_path.name} overflows its slot height on page {page.index + 1} "
        f"({p.height:.0f}pt > {slot_h:.0f}pt)"
        for p in page.placements
        if p.height > slot_h + OVERFLOW_TOLERANCE_PT
    ]


def _check_slot_space(grid: ResolvedGrid, page: ResolvedPageSize) -> None:
    slot_w, slot_h = grid.slot_size(page)
    if slot_w <= 0 or slot_h <= 0:
        raise ConfigurationError(
            f"Margins exceed page: {page.width_pt:.1f}x{page.height_pt:.1f}pt page "
            f"leaves {slot_w:.1f}x{slot_h:.1f}pt per slot"
        )


def _fit_margins_to_image_page(
    index: int,
    image: ProcessedImage,
    grid: ResolvedGrid,
    options: ConversionOptions,
) -> Tuple[ResolvedGrid, Optional[str]]:
    """Drop the margin on any axis an image-sized page cannot hold it on."""
    page = page_size_for(options, image_size=image.size, image_dpi=image.dpi)
    slot_w, slot_h = grid.slot_size(page)
    if slot_w > 0 and slot_h > 0:
        return grid, None

    fitted = replace(
        grid,
        margin_x=grid.margin_x if slot_w > 0 else 0.0,
        margin_y=grid.margin_y if slot_h > 0 else 0.0,
    )
    warning = (
        f"{image.original_path.name} on page {index + 1} is smaller than its margins "
        f"({page.width_pt:.1f}x{page.height_pt:.1f}pt); margin dropped"
    )
    return fitted, warning
