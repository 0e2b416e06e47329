"""
Module: builder.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses for page sizes, placements and page plans.

Key Classes:
    - ResolvedPageSize: Concrete page size in points
    - PlacedImage: Image positioned on a page
    - PagePlan: Complete page layout
    - LayoutResult: Final layout output

Dependencies:
    - dataclasses (std)
    - core.models.images: ProcessedImage

Used By:
    - builder.layout.composer: Creates PagePlans
    - builder.output.renderer: Draws PagePlans
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from imgtopdf.common.units import points_to_inches

if TYPE_CHECKING:
    from imgtopdf.core.models.images import ProcessedImage
    from .grid import ResolvedGrid


@dataclass(frozen=True)
class ResolvedPageSize:
    """
    Page size in PDF points (immutable).

    Attributes:
        width_pt: Page width in points
        height_pt: Page height in points

    Example:
        >>> ResolvedPageSize(612.0, 792.0).width_in
        8.5
    """

    width_pt: float
    height_pt: float

    def __post_init__(self) -> None:
        """Validate size on construction."""
        if self.width_pt <= 0 or self.height_pt <= 0:
            raise ValueError(f"page size must be positive: {self.width_pt}x{self.height_pt}")

    @property
    def width_in(self) -> float:
        return points_to_inches(self.width_pt)

    @property
    def height_in(self) -> float:
        return points_to_inches(self.height_pt)

    def as_tuple(self) -> tuple[float, float]:
        """(width, height) in points, as ReportLab expects for pagesize."""
        return (self.width_pt, self.height_pt)


@dataclass(frozen=True)
class PlacedImage:
    """
    An image drawn on a page.

    Coordinates are PDF points with the origin at the bottom-left corner
    of the page and y increasing upward.

    Attributes:
        image: The ProcessedImage to draw
        x: Left edge
        y: Bottom edge
        width: Drawn width
        height: Drawn height
        scale: Points per pixel applied to both axes

    Example:
        >>> placement.right
        300.0  # x + width
    """

    image: ProcessedImage
    x: float
    y: float
    width: float
    height: float
    scale: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class PagePlan:
    """
    Complete layout plan for a single page.

    Attributes:
        index: Page number (0-indexed)
        page_size: Size of this page
        grid: Grid the page was laid out on (tightened on partial pages)
        placements: PlacedImages in input order
    """

    index: int
    page_size: ResolvedPageSize
    grid: ResolvedGrid
    placements: tuple[PlacedImage, ...]

    @property
    def placement_count(self) -> int:
        """Number of images on this page."""
        return len(self.placements)

    @property
    def is_empty(self) -> bool:
        return len(self.placements) == 0


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output with diagnostics.

    Attributes:
        pages: Tuple of PagePlans
        warnings: Warning messages produced during layout

    Example:
        >>> result = LayoutResult(pages=(page1, page2))
        >>> result.page_count
        2
    """

    pages: tuple[PagePlan, ...]
    warnings: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        """Number of pages in layout."""
        return len(self.pages)

    @property
    def total_placements(self) -> int:
        """Total number of images placed across all pages."""
        return sum(p.placement_count for p in self.pages)
