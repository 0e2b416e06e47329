"""
Module: builder.images.processor

Purpose:
    Prepare one image for embedding: decode, apply EXIF orientation,
    downscale when the resample planner asks for it, and re-encode as
    PNG (PNG sources) or JPEG (everything else).

Key Functions:
    - process_image(): Main entry point
    - target_format(): Output format for a source path

Dependencies:
    - PIL: Decode, resize, encode
    - builder.images.resample: Downscale decision
    - builder.images.inspector: Shared decode helpers

Used By:
    - builder.controller: Per-image processing step
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image, ImageOps

from imgtopdf.common.path_utils import get_extension
from imgtopdf.core.errors import UnsupportedInputError
from imgtopdf.core.models.images import EncodedFormat, ProcessedImage, SourceImage
from imgtopdf.core.models.options import ConversionOptions

from .inspector import open_image, read_dpi
from .resample import plan_resample

logger = logging.getLogger(__name__)

PNG_COMPRESS_LEVEL = 9
JPEG_BACKGROUND = (255, 255, 255)


def target_format(path: str | Path) -> EncodedFormat:
    """PNG sources stay PNG; every other format becomes JPEG."""
    return "png" if get_extension(path) == "png" else "jpeg"


def process_image(path: str | Path, options: ConversionOptions) -> ProcessedImage:
    """
    Decode, orient, optionally downscale and re-encode one image.

    Args:
        path: Source image
        options: Conversion options (target dpi, quality, metadata)

    Returns:
        ProcessedImage with encoded bytes and final pixel size

    Raises:
        UnsupportedInputError: If the file cannot be decoded

    Example:
        >>> processed = process_image("scan.tiff", ConversionOptions(target_dpi=150))
        >>> processed.format
        'jpeg'
    """
    path = Path(path)
    fmt = target_format(path)

    with open_image(path) as src:
        try:
            img = ImageOps.exif_transpose(src)
        except (OSError, ValueError) as e:
            raise UnsupportedInputError(f"Cannot decode {path.name}: {e}", path) from e

        source = SourceImage(path=path, width=img.width, height=img.height, dpi=read_dpi(src))
        exif = src.info.get("exif") if options.preserve_metadata else None

    dpi = source.dpi
    plan = plan_resample(source.size, source.dpi, options)
    if plan.should_resize:
        new_size = plan.fitted_size(*img.size)
        if new_size != img.size:
            logger.debug(f"Resizing {path.name} {img.size} -> {new_size} ({plan.reason})")
            img = img.resize(new_size, Image.Resampling.LANCZOS)
            if plan.effective_dpi:
                dpi = plan.effective_dpi

    data = _encode(img, fmt, options, dpi, exif)
    width, height = img.size
    logger.debug(f"Processed {path.name}: {width}x{height} {fmt}, {len(data)} bytes")

    return ProcessedImage(
        data=data,
        format=fmt,
        width=width,
        height=height,
        original_path=path,
        dpi=dpi,
    )


def _encode(
    img: Image.Image,
    fmt: EncodedFormat,
    options: ConversionOptions,
    dpi: float | None,
    exif: bytes | None,
) -> bytes:
    save_kwargs: dict = {}
    if dpi:
        save_kwargs["dpi"] = (dpi, dpi)
    if exif:
        save_kwargs["exif"] = _reset_orientation(exif)

    buf = io.BytesIO()
    if fmt == "png":
        img.save(buf, format="PNG", compress_level=PNG_COMPRESS_LEVEL, optimize=True, **save_kwargs)
    else:
        _to_rgb(img).save(
            buf,
            format="JPEG",
            quality=options.quality,
            subsampling=0,  # 4:4:4
            **save_kwargs,
        )
    return buf.getvalue()


def _to_rgb(img: Image.Image) -> Image.Image:
    """Flatten transparency onto white; JPEG has no alpha channel."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, JPEG_BACKGROUND)
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def _reset_orientation(exif_bytes: bytes) -> bytes:
    # Pixels are already upright; a stale orientation tag would rotate them again
    exif = Image.Exif()
    exif.load(exif_bytes)
    if 0x0112 in exif:
        exif[0x0112] = 1
    return exif.tobytes()
