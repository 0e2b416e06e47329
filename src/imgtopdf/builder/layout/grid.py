"""
Module: builder.layout.grid

Purpose:
    Resolve a page layout preset into a slot grid and compute slot
    geometry on a concrete page. Partial final pages get a "tightened"
    grid sized to the images they actually hold.

Key Classes:
    - ResolvedGrid: Immutable grid (counts, margins, gutters in points)

Key Functions:
    - resolve_grid(): Layout preset + margin to ResolvedGrid
    - tighten_grid(): Shrink a grid to a partial page's item count

Dependencies:
    - common.units: inch to point conversion
    - core.models.options: PageLayoutPreset

Used By:
    - builder.layout.composer: Slot rectangles per page
    - builder.layout.paginator: Page capacity
    - builder.images.resample: Slot size for downscale decisions
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Tuple

from imgtopdf.common.units import inches_to_points
from imgtopdf.core.errors import ConfigurationError
from imgtopdf.core.models.options import PageLayoutPreset, coerce_enum

from .models import ResolvedPageSize

# (columns, rows) per preset
GRID_PRESETS: dict[PageLayoutPreset, Tuple[int, int]] = {
    PageLayoutPreset.ONE: (1, 1),
    PageLayoutPreset.TWO: (1, 2),
    PageLayoutPreset.FOUR: (2, 2),
}

# Gutter used when the page has no margin
FALLBACK_GUTTER_PT = 12.0


@dataclass(frozen=True)
class ResolvedGrid:
    """
    Slot grid for a page (immutable).

    All lengths are PDF points. Slots fill row-major from the top-left.

    Attributes:
        columns: Slots per row
        rows: Slots per column
        capacity: Images the page holds; columns * rows, or fewer on a
            tightened grid
        margin_x: Left and right page margin
        margin_y: Top and bottom page margin
        gutter_x: Space between adjacent columns
        gutter_y: Space between adjacent rows

    Invariants:
        - columns >= 1, rows >= 1
        - 1 <= capacity <= columns * rows
        - margins and gutters >= 0

    Example:
        >>> grid = resolve_grid("four", 0.25)
        >>> grid.columns, grid.rows, grid.margin_x, grid.gutter_x
        (2, 2, 18.0, 9.0)
    """

    columns: int
    rows: int
    capacity: int
    margin_x: float
    margin_y: float
    gutter_x: float
    gutter_y: float

    def __post_init__(self) -> None:
        """Validate grid on construction."""
        if self.columns < 1 or self.rows < 1:
            raise ValueError(f"grid must have at least one cell: {self.columns}x{self.rows}")
        if not 1 <= self.capacity <= self.columns * self.rows:
            raise ValueError(
                f"capacity {self.capacity} outside 1..{self.columns * self.rows}"
            )
        if min(self.margin_x, self.margin_y, self.gutter_x, self.gutter_y) < 0:
            raise ValueError("margins and gutters must be non-negative")

    # ─────────────────────────────────────────────────────────────────────────
    # Geometry
    # ─────────────────────────────────────────────────────────────────────────

    def usable_width(self, page: ResolvedPageSize) -> float:
        """Width left for slots after margins and column gutters (>= 0)."""
        used = self.margin_x * 2 + self.gutter_x * (self.columns - 1)
        return max(page.width_pt - used, 0.0)

    def usable_height(self, page: ResolvedPageSize) -> float:
        """Height left for slots after margins and row gutters (>= 0)."""
        used = self.margin_y * 2 + self.gutter_y * (self.rows - 1)
        return max(page.height_pt - used, 0.0)

    def slot_size(self, page: ResolvedPageSize) -> Tuple[float, float]:
        """
        (width, height) of one slot on *page*.

        Example:
            >>> a4 = ResolvedPageSize(8.27 * 72, 11.69 * 72)
            >>> round(resolve_grid("four", 0.25).slot_size(a4)[0], 2)
            275.22
        """
        return (
            self.usable_width(page) / self.columns,
            self.usable_height(page) / self.rows,
        )

    def slot_origin(self, index: int, page: ResolvedPageSize) -> Tuple[float, float]:
        """
        Bottom-left corner of slot *index* on *page*.

        Slots are numbered row-major from the top-left; y grows upward.

        Raises:
            IndexError: If index is outside the grid's capacity
        """
        if not 0 <= index < self.capacity:
            raise IndexError(f"slot {index} outside grid capacity {self.capacity}")
        slot_w, slot_h = self.slot_size(page)
        column = index % self.columns
        row = index // self.columns
        x = self.margin_x + column * (slot_w + self.gutter_x)
        y = page.height_pt - self.margin_y - (row + 1) * slot_h - row * self.gutter_y
        return (x, y)

    @property
    def is_full(self) -> bool:
        """True when every cell of the grid holds an image."""
        return self.capacity == self.columns * self.rows


def resolve_grid(layout: PageLayoutPreset | str, margin_inches: float) -> ResolvedGrid:
    """
    Resolve a layout preset and margin into a grid.

    The margin is clamped at zero. Gutters are half the margin, or
    FALLBACK_GUTTER_PT when there is no margin, and only apply along
    axes with more than one cell.

    Args:
        layout: "one" (1x1), "two" (1 column x 2 rows) or "four" (2x2)
        margin_inches: Page margin in inches

    Returns:
        ResolvedGrid in points

    Raises:
        ConfigurationError: If margin is not a finite number or the
            preset is unknown
    """
    layout = coerce_enum(PageLayoutPreset, layout)
    if isinstance(margin_inches, bool) or not isinstance(margin_inches, (int, float)):
        raise ConfigurationError(f"margin must be a number: {margin_inches!r}")
    if not math.isfinite(margin_inches):
        raise ConfigurationError(f"margin must be finite: {margin_inches!r}")

    margin_pt = max(inches_to_points(margin_inches), 0.0)
    gutter_pt = margin_pt / 2 if margin_pt > 0 else FALLBACK_GUTTER_PT
    columns, rows = GRID_PRESETS[layout]

    return ResolvedGrid(
        columns=columns,
        rows=rows,
        capacity=columns * rows,
        margin_x=margin_pt,
        margin_y=margin_pt,
        gutter_x=gutter_pt if columns > 1 else 0.0,
        gutter_y=gutter_pt if rows > 1 else 0.0,
    )


def tighten_grid(grid: ResolvedGrid, item_count: int) -> ResolvedGrid:
    """
    Fit *grid* to a page holding only *item_count* images.

    Rules:
    1. item_count >= capacity: grid returned unchanged.
    2. Single-column grid: one image per row, rows = item_count.
    3. item_count <= columns: a single row of item_count columns.
    4. Otherwise columns stay, rows = ceil(item_count / columns).

    Margins carry over. Gutters are kept only along axes that still
    have more than one cell. Slot sizes follow from the new counts, so
    remaining images grow into the freed space.

    Raises:
        ValueError: If item_count < 1

    Example:
        >>> tighten_grid(resolve_grid("two", 0.25), 1).rows
        1
    """
    if item_count < 1:
        raise ValueError(f"item_count must be >= 1: {item_count}")
    if item_count >= grid.capacity:
        return grid

    if grid.columns == 1:
        tightened = replace(grid, rows=item_count, capacity=item_count)
    elif item_count <= grid.columns:
        tightened = replace(grid, columns=item_count, rows=1, capacity=item_count)
    else:
        rows = math.ceil(item_count / grid.columns)
        tightened = replace(grid, rows=rows, capacity=item_count)

    # Gutters only sit between cells
    return replace(
        tightened,
        gutter_x=tightened.gutter_x if tightened.columns > 1 else 0.0,
        gutter_y=tightened.gutter_y if tightened.rows > 1 else 0.0,
    )
