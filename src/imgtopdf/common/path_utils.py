"""Path and filename utilities.

Provides the supported-extension table and output path resolution used
by the inspector and the conversion controller.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Optional, Sequence

SUPPORTED_EXTENSIONS: tuple[str, ...] = (
    "jpeg",
    "jpg",
    "png",
    "webp",
    "heic",
    "heif",
    "tiff",
    "tif",
    "bmp",
)

OUTPUT_FOLDER_NAME = "imgtopdf"


def get_extension(path: str | Path) -> str:
    """Return the lower-cased extension of *path* without the dot.

    Examples:
        >>> get_extension("holiday/IMG_0001.JPG")
        'jpg'
        >>> get_extension("README")
        ''
    """
    return Path(path).suffix.lstrip(".").lower()


def is_supported_extension(ext: str) -> bool:
    """Check whether *ext* (no dot, any case) is a supported image extension."""
    return ext.lower() in SUPPORTED_EXTENSIONS


def is_supported_path(path: str | Path) -> bool:
    return is_supported_extension(get_extension(path))


def default_output_root() -> Path:
    """Directory that holds generated PDFs when no output path is given."""
    return Path.home() / "Documents" / OUTPUT_FOLDER_NAME


def resolve_output_path(
    files: Sequence[str | Path],
    output_path: Optional[str | Path] = None,
    output_dir: Optional[str | Path] = None,
) -> Path:
    """Resolve where the PDF for *files* should be written.

    An explicit *output_path* wins; its parent directory is created.
    Otherwise the name is derived from the first file's stem plus a short
    SHA-1 digest of all input paths, inside *output_dir* (default
    ``~/Documents/imgtopdf``). Existing files are never overwritten: a
    ``-1``, ``-2``, ... suffix is appended until the name is free.

    Args:
        files: Input image paths (non-empty)
        output_path: Explicit destination, if the caller chose one
        output_dir: Directory for generated names

    Returns:
        Path for the output PDF

    Example:
        >>> resolve_output_path(["a/cat.png"], output_dir="/tmp/out").name  # doctest: +SKIP
        'cat-<8 hex digits>.pdf'
    """
    if output_path:
        target = Path(output_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        return target

    if not files:
        raise ValueError("files must not be empty when output_path is not set")

    digest = hashlib.sha1()
    for file in files:
        digest.update(str(file).encode("utf-8"))
    short = digest.hexdigest()[:8]

    base = Path(output_dir) if output_dir else default_output_root()
    base.mkdir(parents=True, exist_ok=True)

    stem = Path(files[0]).stem
    candidate = base / f"{stem}-{short}.pdf"
    counter = 1
    while candidate.exists():
        candidate = base / f"{stem}-{short}-{counter}.pdf"
        counter += 1

    return candidate
