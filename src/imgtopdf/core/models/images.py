"""
Module: core.models.images

Purpose:
    Value objects describing images as they move through the pipeline:
    inspected on disk, then re-encoded for embedding.

Key Classes:
    - SourceImage: Pixel size and resolution of an inspected image
    - ProcessedImage: Encoded raster ready for the PDF writer
    - ImageFileInfo: Inspection report for one selected file

Dependencies:
    - dataclasses (std)

Used By:
    - builder.images: Inspector and processor
    - builder.layout: Composer reads pixel size and dpi
    - builder.output.renderer: Embeds ProcessedImage data
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

EncodedFormat = Literal["jpeg", "png"]


@dataclass(frozen=True, slots=True)
class SourceImage:
    """
    An image as found on disk (immutable).

    Attributes:
        path: File path
        width: Width in pixels
        height: Height in pixels
        dpi: Embedded resolution in pixels per inch, if any

    Invariants:
        - width > 0 and height > 0
        - dpi is None or dpi > 0
    """

    path: Path
    width: int
    height: int
    dpi: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate dimensions on construction."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"image size must be positive: {self.width}x{self.height}")
        if self.dpi is not None and self.dpi <= 0:
            raise ValueError(f"dpi must be positive: {self.dpi}")

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) in pixels."""
        return (self.width, self.height)


@dataclass(frozen=True)
class ProcessedImage:
    """
    Encoded raster ready for embedding (immutable).

    Attributes:
        data: Encoded JPEG or PNG bytes
        format: "jpeg" or "png"
        width: Pixel width of the encoded image
        height: Pixel height of the encoded image
        dpi: Resolution carried over from the source, if any
        original_path: Path of the source file
    """

    data: bytes
    format: EncodedFormat
    width: int
    height: int
    original_path: Path
    dpi: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate dimensions on construction."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"image size must be positive: {self.width}x{self.height}")

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) in pixels."""
        return (self.width, self.height)

    def __repr__(self) -> str:
        return (
            f"ProcessedImage({self.original_path.name!r}, {self.format}, "
            f"{self.width}x{self.height}, {len(self.data)} bytes)"
        )


@dataclass(frozen=True)
class ImageFileInfo:
    """
    Inspection report for one selected file.

    Attributes:
        path: File path as given
        name: File name
        size: File size in bytes (0 when unreadable)
        format: Decoded format name, else the extension, else "unknown"
        supported: Whether the extension is convertible
        width: Pixel width, when decodable
        height: Pixel height, when decodable
        warning: Non-fatal problem (unsupported format, decode failure)
        error: Fatal problem (file missing or unreadable)
        preview: Thumbnail bytes (PNG or JPEG), when generated
        preview_mime: MIME type of preview
    """

    path: Path
    name: str
    size: int
    format: str
    supported: bool
    width: Optional[int] = None
    height: Optional[int] = None
    warning: Optional[str] = None
    error: Optional[str] = None
    preview: Optional[bytes] = None
    preview_mime: Optional[str] = None

    @property
    def usable(self) -> bool:
        """True when the file can be converted."""
        return self.supported and self.error is None and self.width is not None
