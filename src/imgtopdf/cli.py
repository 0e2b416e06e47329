"""
Module: cli

Purpose:
    Command-line front end. Maps flags to ConversionOptions, runs a
    conversion (or an inspection with --inspect) and reports the result.

Key Functions:
    - main(): Console script entry point
    - build_parser(): Argument parser
    - options_from_args(): Parsed flags to ConversionOptions

Exit codes:
    0 success, 1 conversion error, 2 usage or configuration error,
    130 cancelled.

Dependencies:
    - argparse (std)
    - imgtopdf.builder: Conversion and inspection
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from imgtopdf import __version__
from imgtopdf.builder import ConversionStage, ProgressUpdate, convert_images
from imgtopdf.builder.images import inspect_file
from imgtopdf.core.errors import (
    ConfigurationError,
    ConversionCancelled,
    ImgToPdfError,
)
from imgtopdf.core.models.options import (
    ConversionOptions,
    PageLayoutPreset,
    PageSizePreset,
    ScalingMode,
)
from imgtopdf.utils.logging_utils import configure_cli_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_CANCELLED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imgtopdf",
        description="Combine images into a single PDF, one or more per page.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s scan1.jpg scan2.jpg -o scans.pdf
  %(prog)s photos/*.heic --page-size Letter --layout four --margin 0.5
  %(prog)s big.tif --page-size Original --source-dpi 300
  %(prog)s *.png --inspect
        """,
    )

    parser.add_argument("images", nargs="+", type=Path, help="Image files in page order")
    parser.add_argument("-o", "--output", type=Path, help="Output PDF (default: ~/Documents/imgtopdf/)")

    # Page setup
    parser.add_argument(
        "--page-size",
        default=PageSizePreset.A4.value,
        help="A4, A3, Letter, Legal, Custom or Original (default: A4)",
    )
    parser.add_argument(
        "--layout",
        default=PageLayoutPreset.ONE.value,
        help="Images per page: one, two or four (default: one)",
    )
    parser.add_argument(
        "--scaling",
        default=ScalingMode.FIT_PAGE.value,
        help="fit-page, fit-width or original (default: fit-page)",
    )
    parser.add_argument("--margin", type=float, help="Page margin in inches (default: 0.25)")
    parser.add_argument("--custom-width", type=float, help="Custom page width in mm")
    parser.add_argument("--custom-height", type=float, help="Custom page height in mm")

    # Resolution and encoding
    parser.add_argument("--source-dpi", type=float, help="Assumed resolution of images without one")
    parser.add_argument("--target-dpi", type=float, help="Downscale images above this resolution on the page")
    parser.add_argument("--quality", type=int, help="JPEG quality 1-100 (default: 85)")
    parser.add_argument("--no-metadata", action="store_true", help="Strip EXIF metadata")

    # Flags
    parser.add_argument("--inspect", action="store_true", help="Report on each file instead of converting")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def options_from_args(args: argparse.Namespace) -> ConversionOptions:
    """
    Build ConversionOptions from parsed flags.

    Raises:
        ConfigurationError: If any flag value is invalid
    """
    return ConversionOptions.from_dict({
        "page_size": args.page_size,
        "page_layout": args.layout,
        "scaling": args.scaling,
        "margin_inches": args.margin,
        "custom_width_mm": args.custom_width,
        "custom_height_mm": args.custom_height,
        "source_dpi": args.source_dpi,
        "target_dpi": args.target_dpi,
        "quality": args.quality,
        "preserve_metadata": not args.no_metadata,
        "output_path": args.output,
    })


def run_inspect(paths: Sequence[Path]) -> int:
    """Print one line per file. Returns 1 if any file is unusable."""
    all_usable = True
    for path in paths:
        info = inspect_file(path, with_preview=False)
        if info.usable:
            print(f"{info.name}: {info.format} {info.width}x{info.height}, {info.size} bytes")
        else:
            all_usable = False
            print(f"{info.name}: {info.error or info.warning}")
    return EXIT_OK if all_usable else EXIT_ERROR


def _log_progress(update: ProgressUpdate) -> None:
    if update.stage is ConversionStage.PROCESSING and update.message:
        logger.info(f"[{update.current}/{update.total}] {update.message}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_cli_logging(args.verbose)

    if args.inspect:
        return run_inspect(args.images)

    try:
        options = options_from_args(args)
        summary = convert_images(args.images, options, on_progress=_log_progress)
    except ConfigurationError as e:
        logger.error(str(e))
        return EXIT_USAGE
    except (ConversionCancelled, KeyboardInterrupt):
        logger.warning("Cancelled")
        return EXIT_CANCELLED
    except ImgToPdfError as e:
        logger.error(str(e))
        return EXIT_ERROR

    print(summary.output_path)
    logger.info(
        f"Wrote {summary.page_count} page(s) from {summary.image_count} image(s) "
        f"in {summary.duration_ms / 1000:.2f}s, {len(summary.warnings)} warning(s)"
    )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
