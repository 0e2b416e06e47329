"""
Tests for builder.controller

Test Coverage:
- Full conversion to PDF
- Progress stages and counts
- Unsupported, undecodable and oversized files become warnings
- Original pages smaller than their margins
- Empty input errors and unexpected failures
- Cancellation before and after processing, and supersession
"""

import threading

import fitz  # PyMuPDF
import pytest
from PIL import Image

import imgtopdf.builder.controller as controller_module
from imgtopdf.builder import (
    CancellationToken,
    ConversionController,
    ConversionStage,
    convert_images,
)
from imgtopdf.core.errors import (
    ConfigurationError,
    ConversionCancelled,
    EmptyInputError,
)
from imgtopdf.core.models.options import ConversionOptions, PageLayoutPreset


@pytest.fixture
def three_images(make_image):
    return [
        make_image("a.png", size=(300, 200)),
        make_image("b.jpg", size=(200, 300)),
        make_image("c.png", size=(150, 150)),
    ]


class TestConvert:
    """Successful conversions."""

    def test_convert_when_valid_images_then_pdf_written(self, three_images, output_dir):
        # Act
        summary = convert_images(three_images, {"page_layout": "two"}, output_dir=output_dir)

        # Assert
        assert summary.output_path.parent == output_dir
        assert summary.output_path.name.startswith("a-")
        assert summary.page_count == 2
        assert summary.image_count == 3
        assert summary.warnings == ()
        assert summary.duration_ms >= 0
        with fitz.open(summary.output_path) as doc:
            assert doc.page_count == 2

    def test_convert_when_explicit_output_then_used(self, three_images, tmp_path):
        target = tmp_path / "custom" / "out.pdf"

        summary = convert_images(three_images, ConversionOptions(output_path=target))

        assert summary.output_path == target
        assert target.exists()

    def test_convert_when_progress_callback_then_stages_in_order(self, three_images, output_dir):
        # Arrange
        updates = []

        # Act
        convert_images(three_images, on_progress=updates.append, output_dir=output_dir)

        # Assert
        stages = [u.stage for u in updates]
        assert stages[0] is ConversionStage.PREPARING
        assert stages[-2] is ConversionStage.WRITING
        assert stages[-1] is ConversionStage.COMPLETED
        processing = [u for u in updates if u.stage is ConversionStage.PROCESSING]
        assert [u.current for u in processing] == [0, 1, 2, 3]
        assert all(u.total == 3 for u in processing)
        assert updates[-1].output_path is not None

    def test_convert_when_original_page_smaller_than_margins_then_page_kept_with_warning(
        self, make_image, output_dir
    ):
        # Arrange: 120 px with no density sizes a 28.8pt page, under the 36pt of margins
        photo = make_image("photo.jpg", size=(1500, 1000), dpi=300)
        icon = make_image("icon.png", size=(120, 120))

        # Act
        summary = convert_images([photo, icon], {"page_size": "Original"}, output_dir=output_dir)

        # Assert
        assert summary.page_count == 2
        assert summary.image_count == 2
        assert any("icon.png" in w and "margin dropped" in w for w in summary.warnings)
        with fitz.open(summary.output_path) as doc:
            assert doc[1].rect.width == pytest.approx(28.8, abs=0.01)


class TestInputFiltering:
    """Unsupported and broken files."""

    def test_convert_when_unsupported_extension_then_skipped_with_warning(
        self, three_images, tmp_path, output_dir
    ):
        text = tmp_path / "notes.txt"
        text.write_text("x")

        summary = convert_images([*three_images, text], output_dir=output_dir)

        assert summary.image_count == 3
        assert "1 file(s) skipped due to unsupported format." in summary.warnings

    def test_convert_when_undecodable_image_then_skipped_with_warning(
        self, three_images, tmp_path, output_dir
    ):
        broken = tmp_path / "broken.jpg"
        broken.write_bytes(b"nope")

        summary = convert_images([broken, *three_images], output_dir=output_dir)

        assert summary.image_count == 3
        assert any("broken.jpg" in w for w in summary.warnings)

    def test_convert_when_image_exceeds_pixel_limit_then_skipped_with_warning(
        self, make_image, output_dir, monkeypatch
    ):
        # Arrange
        small = make_image("small.png", size=(20, 20))
        huge = make_image("huge.png", size=(200, 200))
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
        updates = []

        # Act
        summary = convert_images([small, huge], on_progress=updates.append, output_dir=output_dir)

        # Assert
        assert summary.image_count == 1
        assert any("huge.png" in w for w in summary.warnings)
        assert updates[-1].stage is ConversionStage.COMPLETED

    def test_convert_when_no_files_then_no_input_files_error(self, output_dir):
        with pytest.raises(EmptyInputError, match="No input files provided."):
            convert_images([], output_dir=output_dir)

    def test_convert_when_only_unsupported_then_no_supported_images_error(self, tmp_path, output_dir):
        text = tmp_path / "notes.txt"
        text.write_text("x")

        with pytest.raises(EmptyInputError, match="No supported images found in selection."):
            convert_images([text], output_dir=output_dir)

    def test_convert_when_all_undecodable_then_no_supported_images_error(self, tmp_path, output_dir):
        broken = tmp_path / "broken.png"
        broken.write_bytes(b"nope")

        with pytest.raises(EmptyInputError, match="No supported images found in selection."):
            convert_images([broken], output_dir=output_dir)


class TestErrors:
    """Configuration errors and error progress."""

    def test_convert_when_margins_exceed_page_then_configuration_error(self, three_images, output_dir):
        updates = []

        with pytest.raises(ConfigurationError, match="Margins exceed page"):
            convert_images(
                three_images,
                {"margin_inches": 6},
                on_progress=updates.append,
                output_dir=output_dir,
            )

        assert updates[-1].stage is ConversionStage.ERROR
        assert "Margins exceed page" in updates[-1].error
        assert list(output_dir.iterdir()) == []

    def test_convert_when_bad_option_string_then_configuration_error(self, three_images, output_dir):
        with pytest.raises(ConfigurationError, match="Unknown PageLayoutPreset"):
            convert_images(three_images, {"page_layout": "nine"}, output_dir=output_dir)

    def test_convert_when_unexpected_error_then_error_stage_and_reraised(
        self, three_images, output_dir, monkeypatch
    ):
        # Arrange
        def failing_render(layout, output_path, **kwargs):
            raise RuntimeError("renderer crashed")

        monkeypatch.setattr(controller_module, "render_to_pdf", failing_render)
        controller = ConversionController()
        updates = []

        # Act
        with pytest.raises(RuntimeError, match="renderer crashed"):
            controller.convert(three_images, on_progress=updates.append, output_dir=output_dir)

        # Assert
        assert updates[-1].stage is ConversionStage.ERROR
        assert updates[-1].error == "renderer crashed"
        assert not controller.is_active


class TestCancellation:
    """Cancellation token behaviour."""

    def test_token_when_cancelled_then_raises(self):
        token = CancellationToken()
        token.raise_if_cancelled()

        token.cancel()

        assert token.cancelled
        with pytest.raises(ConversionCancelled):
            token.raise_if_cancelled()

    def test_cancel_when_during_processing_then_cancelled_stage_and_no_pdf(
        self, three_images, output_dir
    ):
        # Arrange: cancel as soon as the first image is processed
        controller = ConversionController()
        updates = []

        def on_progress(update):
            updates.append(update)
            if update.stage is ConversionStage.PROCESSING and update.current == 1:
                controller.cancel()

        # Act / Assert
        with pytest.raises(ConversionCancelled):
            controller.convert(three_images, on_progress=on_progress, output_dir=output_dir)

        assert updates[-1].stage is ConversionStage.CANCELLED
        assert ConversionStage.ERROR not in [u.stage for u in updates]
        assert list(output_dir.iterdir()) == []
        assert not controller.is_active

    def test_cancel_when_writing_then_no_pdf_and_no_partial_file(self, three_images, output_dir):
        # Arrange: cancel after every image is processed, before the document is written
        controller = ConversionController()
        updates = []

        def on_progress(update):
            updates.append(update)
            if update.stage is ConversionStage.WRITING:
                controller.cancel()

        # Act / Assert
        with pytest.raises(ConversionCancelled):
            controller.convert(three_images, on_progress=on_progress, output_dir=output_dir)

        stages = [u.stage for u in updates]
        assert ConversionStage.WRITING in stages
        assert stages[-1] is ConversionStage.CANCELLED
        assert ConversionStage.COMPLETED not in stages
        assert list(output_dir.iterdir()) == []

    def test_cancel_when_idle_then_no_op(self):
        controller = ConversionController()

        controller.cancel()

        assert not controller.is_active

    def test_convert_when_new_run_starts_then_previous_superseded(
        self, three_images, make_image, output_dir
    ):
        # Arrange: the first run blocks in its progress callback until the second run starts
        controller = ConversionController()
        first_waiting = threading.Event()
        second_started = threading.Event()
        outcome = {}

        def first_progress(update):
            if update.stage is ConversionStage.PROCESSING and update.current == 1:
                first_waiting.set()
                second_started.wait(timeout=10)

        def run_first():
            try:
                controller.convert(three_images, on_progress=first_progress, output_dir=output_dir)
                outcome["first"] = "completed"
            except ConversionCancelled:
                outcome["first"] = "cancelled"

        worker = threading.Thread(target=run_first)
        worker.start()
        assert first_waiting.wait(timeout=10)

        # Act
        def second_progress(update):
            if update.stage is ConversionStage.PREPARING:
                second_started.set()

        summary = controller.convert(
            [make_image("z.png")],
            {"page_layout": PageLayoutPreset.ONE},
            on_progress=second_progress,
            output_dir=output_dir,
        )
        worker.join(timeout=10)

        # Assert
        assert outcome["first"] == "cancelled"
        assert summary.output_path.exists()
        assert [p.name for p in output_dir.iterdir()] == [summary.output_path.name]
