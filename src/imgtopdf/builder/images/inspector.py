"""
Module: builder.images.inspector

Purpose:
    Inspect user-selected files before conversion: size on disk,
    decoded format, pixel dimensions, resolution and a preview thumbnail.
    Also hosts the shared decode helpers used by the processor.

Key Functions:
    - inspect_files(): Inspect many paths
    - inspect_file(): Inspect one path
    - open_image(): Decode with format checks (raises UnsupportedInputError)
    - read_dpi(): Embedded resolution of a decoded image

Dependencies:
    - PIL: Decoding and thumbnails
    - pillow_heif: HEIC/HEIF decoding

Used By:
    - builder.images.processor: Decoding
    - builder.controller: Pre-flight inspection
    - cli: --inspect output
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from PIL import Image, ImageOps, UnidentifiedImageError
from pillow_heif import register_heif_opener

from imgtopdf.common.path_utils import get_extension, is_supported_extension
from imgtopdf.core.errors import UnsupportedInputError
from imgtopdf.core.models.images import ImageFileInfo

register_heif_opener()

logger = logging.getLogger(__name__)

PREVIEW_MAX_DIMENSION = 512
PREVIEW_JPEG_QUALITY = 92


def inspect_files(paths: Iterable[str | Path]) -> List[ImageFileInfo]:
    """
    Inspect each path in order.

    Never raises for a bad file; problems are reported on the
    returned ImageFileInfo.
    """
    return [inspect_file(path) for path in paths]


def inspect_file(path: str | Path, *, with_preview: bool = True) -> ImageFileInfo:
    """
    Inspect one file.

    Args:
        path: File to inspect
        with_preview: Generate a thumbnail (max 512 px)

    Returns:
        ImageFileInfo. Missing or unreadable files carry `error`;
        unsupported or undecodable files carry `warning`.

    Example:
        >>> info = inspect_file("photos/cat.png")
        >>> info.supported, info.width, info.height
        (True, 640, 480)
    """
    path = Path(path)
    extension = get_extension(path)
    fields = {
        "path": path,
        "name": path.name,
        "size": 0,
        "format": extension or "unknown",
        "supported": False,
    }

    try:
        fields["size"] = path.stat().st_size
    except OSError as e:
        logger.warning(f"Cannot stat {path}: {e}")
        return ImageFileInfo(**fields, error=str(e))

    if not is_supported_extension(extension):
        return ImageFileInfo(**fields, warning="Unsupported image format")
    fields["supported"] = True

    try:
        with open_image(path) as img:
            fields["width"], fields["height"] = _oriented_size(img)
            if img.format:
                fields["format"] = img.format.lower()
            if with_preview:
                fields.update(_make_preview(img, path))
    except UnsupportedInputError as e:
        return ImageFileInfo(**fields, warning=str(e))

    return ImageFileInfo(**fields)


def open_image(path: str | Path) -> Image.Image:
    """
    Open an image file, checking extension and decodability.

    The returned image is lazily loaded; use it as a context manager.

    Raises:
        UnsupportedInputError: If the extension is unsupported or Pillow
            refuses the data (including decompression bombs)
    """
    path = Path(path)
    if not is_supported_extension(get_extension(path)):
        raise UnsupportedInputError(f"Unsupported image format: {path.name}", path)
    try:
        return Image.open(path)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise UnsupportedInputError(f"Cannot decode {path.name}: {e}", path) from e


def read_dpi(img: Image.Image) -> Optional[float]:
    """
    Embedded horizontal resolution in pixels per inch, if present.

    Pillow reports JPEG/PNG/TIFF density as info["dpi"]; missing,
    zero or nonsense values yield None.
    """
    dpi = img.info.get("dpi")
    if not dpi:
        return None
    try:
        value = float(dpi[0])
    except (TypeError, ValueError, IndexError):
        return None
    return value if value > 0 else None


def _oriented_size(img: Image.Image) -> tuple[int, int]:
    width, height = img.size
    # EXIF orientations 5-8 swap width and height
    if img.getexif().get(0x0112, 1) in (5, 6, 7, 8):
        return (height, width)
    return (width, height)


def _make_preview(img: Image.Image, path: Path) -> dict:
    try:
        thumb = ImageOps.exif_transpose(img)
        thumb.thumbnail((PREVIEW_MAX_DIMENSION, PREVIEW_MAX_DIMENSION), Image.Resampling.LANCZOS)

        buf = io.BytesIO()
        if _has_alpha(thumb):
            thumb.save(buf, format="PNG", optimize=True)
            mime = "image/png"
        else:
            thumb.convert("RGB").save(buf, format="JPEG", quality=PREVIEW_JPEG_QUALITY, subsampling=0)
            mime = "image/jpeg"
        return {"preview": buf.getvalue(), "preview_mime": mime}
    except (OSError, ValueError) as e:
        # Preview failure must not fail inspection
        logger.warning(f"Failed to generate preview for {path}: {e}")
        return {}


def _has_alpha(img: Image.Image) -> bool:
    return img.mode in ("RGBA", "LA", "PA") or (img.mode == "P" and "transparency" in img.info)
