"""
Module: builder.layout.paginator

Purpose:
    Split the ordered image sequence into page-sized groups.

Key Functions:
    - paginate(): Slice items into groups of at most `capacity`
    - page_capacity(): Images per page for a set of options

Algorithm:
    Straight slicing in input order. No sorting, no reordering, and an
    image never spans two pages. Only the final group can be short.

Dependencies:
    - builder.layout.grid: resolve_grid for the full-grid capacity

Used By:
    - builder.layout.composer: Page grouping
"""

from __future__ import annotations

import logging
from typing import List, Sequence, TypeVar

from imgtopdf.core.models.options import ConversionOptions

from .grid import resolve_grid

logger = logging.getLogger(__name__)

T = TypeVar("T")


def paginate(items: Sequence[T], capacity: int) -> List[List[T]]:
    """
    Group *items* into pages of at most *capacity*.

    Args:
        items: Items in output order
        capacity: Maximum items per page

    Returns:
        List of groups, in order

    Raises:
        ValueError: If capacity < 1

    Example:
        >>> [len(g) for g in paginate(list("abcde"), 4)]
        [4, 1]
    """
    if capacity < 1:
        raise ValueError(f"capacity must be >= 1: {capacity}")

    groups = [list(items[i:i + capacity]) for i in range(0, len(items), capacity)]
    logger.debug(f"Paginated {len(items)} items into {len(groups)} groups of <= {capacity}")
    return groups


def page_capacity(options: ConversionOptions) -> int:
    """
    Images per page: 1 for Original page size, else the full grid's
    capacity.
    """
    if options.is_original_page_size:
        return 1
    return resolve_grid(options.page_layout, options.margin_inches).capacity
