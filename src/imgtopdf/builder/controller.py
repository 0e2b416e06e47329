"""
Module: builder.controller

Purpose:
    Orchestrate a complete conversion.
    Filter → Process (per image) → Paginate/Compose → Render

Key Functions:
    - convert_images(): One-shot conversion with a private controller

Key Classes:
    - ConversionController: Runs conversions, one active at a time
    - ConversionStage: Progress stages
    - ProgressUpdate: Progress event payload
    - ConversionSummary: Result of a successful conversion

Dependencies:
    - builder.images: Processing
    - builder.layout: Composition
    - builder.output: PDF rendering
    - builder.cancellation: CancellationToken

Used By:
    - cli: Command-line conversion
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Sequence

from imgtopdf.common.path_utils import is_supported_path, resolve_output_path
from imgtopdf.core.errors import (
    ConversionCancelled,
    EmptyInputError,
    ImgToPdfError,
    UnsupportedInputError,
)
from imgtopdf.core.models.images import ProcessedImage
from imgtopdf.core.models.options import ConversionOptions

from .cancellation import CancellationToken
from .images import process_image
from .layout import compose_pages, validate_layout
from .output import render_to_pdf

logger = logging.getLogger(__name__)


class ConversionStage(Enum):
    """Stage reported in progress updates."""

    IDLE = "idle"
    PREPARING = "preparing"
    PROCESSING = "processing"
    WRITING = "writing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ERROR = "error"


@dataclass(frozen=True)
class ProgressUpdate:
    """
    Progress event (immutable).

    Attributes:
        stage: Current stage
        current: Images processed so far
        total: Images to process
        message: Human-readable status
        error: Error message (ERROR stage only)
        output_path: Written PDF (COMPLETED stage only)
    """

    stage: ConversionStage
    current: Optional[int] = None
    total: Optional[int] = None
    message: Optional[str] = None
    error: Optional[str] = None
    output_path: Optional[Path] = None


ProgressCallback = Callable[[ProgressUpdate], None]


@dataclass(frozen=True)
class ConversionSummary:
    """
    Result of a successful conversion (immutable).

    Attributes:
        output_path: Written PDF
        warnings: Skipped files and other non-fatal notes
        duration_ms: Wall-clock duration
        page_count: Pages in the PDF
        image_count: Images embedded

    Example:
        >>> summary = convert_images(["a.jpg", "b.png"])
        >>> print(f"Wrote {summary.page_count} pages to {summary.output_path}")
    """

    output_path: Path
    warnings: tuple[str, ...]
    duration_ms: float
    page_count: int
    image_count: int


class ConversionController:
    """
    Runs conversions with progress reporting and cancellation.

    Only one conversion is active at a time: starting a new one cancels
    the token of the one in flight, which stops at its next checkpoint
    (before each image and before writing) with ConversionCancelled.

    Example:
        >>> controller = ConversionController()
        >>> summary = controller.convert(paths, {"page_size": "Letter"})
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._active_token: Optional[CancellationToken] = None

    @property
    def is_active(self) -> bool:
        """True while a conversion is running."""
        with self._lock:
            return self._active_token is not None

    def cancel(self) -> None:
        """Cancel the active conversion, if any."""
        with self._lock:
            if self._active_token is not None:
                logger.info("Cancelling active conversion")
                self._active_token.cancel()

    def convert(
        self,
        files: Sequence[str | Path],
        options: ConversionOptions | Mapping[str, Any] | None = None,
        *,
        on_progress: Optional[ProgressCallback] = None,
        output_dir: Optional[Path] = None,
    ) -> ConversionSummary:
        """
        Convert *files* into one PDF.

        Pipeline:
        1. Validate options (fail fast)
        2. Drop unsupported extensions (warning)
        3. Process each image in order (decode failures become warnings)
        4. Compose pages
        5. Render the PDF

        Args:
            files: Image paths in page order
            options: ConversionOptions or a mapping for from_dict
            on_progress: Called with a ProgressUpdate at each step
            output_dir: Directory for generated file names

        Returns:
            ConversionSummary

        Raises:
            ConfigurationError: Invalid options
            EmptyInputError: No usable images
            ConversionCancelled: Cancelled or superseded
            ConversionError: PDF could not be written
        """
        token = self._begin()
        emit = _emitter(on_progress)
        start_time = time.perf_counter()

        try:
            if not isinstance(options, ConversionOptions):
                options = ConversionOptions.from_dict(options or {})
            emit(ProgressUpdate(ConversionStage.PREPARING, current=0, total=len(files)))
            return self._run(files, options, token, emit, output_dir, start_time)
        except ConversionCancelled:
            logger.info("Conversion cancelled")
            emit(ProgressUpdate(ConversionStage.CANCELLED, message="Conversion cancelled"))
            raise
        except ImgToPdfError as e:
            logger.error(f"Conversion failed: {e}")
            emit(ProgressUpdate(ConversionStage.ERROR, message=str(e), error=str(e)))
            raise
        except Exception as e:
            logger.exception(f"Unexpected error during conversion: {e}")
            emit(ProgressUpdate(ConversionStage.ERROR, message="Conversion failed", error=str(e)))
            raise
        finally:
            self._finish(token)

    def _run(
        self,
        files: Sequence[str | Path],
        options: ConversionOptions,
        token: CancellationToken,
        emit: ProgressCallback,
        output_dir: Optional[Path],
        start_time: float,
    ) -> ConversionSummary:
        warnings: List[str] = []

        validate_layout(options)

        valid_files = [Path(f) for f in files if is_supported_path(f)]
        skipped = len(files) - len(valid_files)
        if not valid_files:
            raise EmptyInputError(
                "No supported images found in selection." if skipped else "No input files provided."
            )
        if skipped:
            warnings.append(f"{skipped} file(s) skipped due to unsupported format.")
            logger.warning(warnings[-1])

        output_path = resolve_output_path(valid_files, options.output_path, output_dir)
        logger.info(f"Converting {len(valid_files)} images to {output_path}")

        processed: List[ProcessedImage] = []
        total = len(valid_files)
        emit(ProgressUpdate(ConversionStage.PROCESSING, current=0, total=total))

        for current, path in enumerate(valid_files, start=1):
            token.raise_if_cancelled()
            try:
                image = process_image(path, options)
            except UnsupportedInputError as e:
                warnings.append(str(e))
                logger.warning(f"Skipping {path.name}: {e}")
            else:
                processed.append(image)
            emit(ProgressUpdate(
                ConversionStage.PROCESSING,
                current=current,
                total=total,
                message=f"Processed {path.name}",
            ))

        if not processed:
            raise EmptyInputError("No supported images found in selection.")

        emit(ProgressUpdate(ConversionStage.WRITING, current=total, total=total))
        layout = compose_pages(processed, options)
        warnings.extend(layout.warnings)

        token.raise_if_cancelled()
        render_to_pdf(layout, output_path)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(f"Conversion completed in {elapsed_ms / 1000:.2f}s")
        emit(ProgressUpdate(
            ConversionStage.COMPLETED,
            current=total,
            total=total,
            output_path=output_path,
        ))

        return ConversionSummary(
            output_path=output_path,
            warnings=tuple(warnings),
            duration_ms=elapsed_ms,
            page_count=layout.page_count,
            image_count=len(processed),
        )

    def _begin(self) -> CancellationToken:
        token = CancellationToken()
        with self._lock:
            if self._active_token is not None:
                logger.info("Superseding active conversion")
                self._active_token.cancel()
            self._active_token = token
        return token

    def _finish(self, token: CancellationToken) -> None:
        with self._lock:
            if self._active_token is token:
                self._active_token = None


def convert_images(
    files: Sequence[str | Path],
    options: ConversionOptions | Mapping[str, Any] | None = None,
    *,
    on_progress: Optional[ProgressCallback] = None,
    output_dir: Optional[Path] = None,
) -> ConversionSummary:
    """
    Convert *files* into one PDF with a private controller.

    See ConversionController.convert for arguments and errors.
    """
    return ConversionController().convert(
        files, options, on_progress=on_progress, output_dir=output_dir
    )


def _emitter(callback: Optional[ProgressCallback]) -> ProgressCallback:
    def emit(update: ProgressUpdate) -> None:
        logger.debug(f"Progress: {update.stage.value} {update.current}/{update.total}")
        if callback is not None:
            callback(update)
    return emit
