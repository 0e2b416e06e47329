"""
Tests for the command-line interface.
"""

import logging
import fitz  # PyMuPDF
import pytest

from imgtopdf import cli
from imgtopdf.core.errors import ConversionCancelled
from imgtopdf.core.models.options import PageLayoutPreset, PageSizePreset, ScalingMode


class TestOptionsFromArgs:
    """Flag mapping."""

    def test_options_when_defaults_then_a4_one_fit_page(self):
        args = cli.build_parser().parse_args(["a.png"])

        opts = cli.options_from_args(args)

        assert opts.page_size is PageSizePreset.A4
        assert opts.page_layout is PageLayoutPreset.ONE
        assert opts.scaling is ScalingMode.FIT_PAGE
        assert opts.preserve_metadata is True
        assert opts.output_path is None

    def test_options_when_all_flags_then_mapped(self, tmp_path):
        # Arrange
        argv = [
            "a.png", "b.jpg",
            "-o", str(tmp_path / "out.pdf"),
            "--page-size", "custom",
            "--layout", "four",
            "--scaling", "fit-width",
            "--margin", "0.5",
            "--custom-width", "100",
            "--custom-height", "200",
            "--source-dpi", "96",
            "--target-dpi", "150",
            "--quality", "70",
            "--no-metadata",
        ]

        # Act
        opts = cli.options_from_args(cli.build_parser().parse_args(argv))

        # Assert
        assert opts.page_size is PageSizePreset.CUSTOM
        assert opts.page_layout is PageLayoutPreset.FOUR
        assert opts.scaling is ScalingMode.FIT_WIDTH
        assert opts.margin_inches == 0.5
        assert (opts.custom_width_mm, opts.custom_height_mm) == (100, 200)
        assert (opts.source_dpi, opts.target_dpi) == (96, 150)
        assert opts.quality == 70
        assert opts.preserve_metadata is False
        assert opts.output_path == tmp_path / "out.pdf"


class TestMain:
    """Exit codes and output."""

    def test_main_when_valid_images_then_writes_pdf_and_prints_path(self, make_image, tmp_path, capsys):
        # Arrange
        images = [make_image("a.png"), make_image("b.jpg"), make_image("c.png")]
        target = tmp_path / "result.pdf"

        # Act
        code = cli.main([*map(str, images), "-o", str(target), "--layout", "two"])

        # Assert
        assert code == cli.EXIT_OK
        assert capsys.readouterr().out.strip() == str(target)
        with fitz.open(target) as doc:
            assert doc.page_count == 2

    def test_main_when_bad_preset_then_exit_2(self, make_image):
        assert cli.main([str(make_image()), "--page-size", "B5"]) == cli.EXIT_USAGE

    def test_main_when_margins_exceed_page_then_exit_2(self, make_image):
        assert cli.main([str(make_image()), "--margin", "10"]) == cli.EXIT_USAGE

    def test_main_when_quality_out_of_range_then_exit_2(self, make_image):
        assert cli.main([str(make_image()), "--quality", "0"]) == cli.EXIT_USAGE

    def test_main_when_nothing_supported_then_exit_1(self, tmp_path):
        text = tmp_path / "notes.txt"
        text.write_text("x")

        assert cli.main([str(text)]) == cli.EXIT_ERROR

    def test_main_when_cancelled_then_exit_130(self, make_image, monkeypatch):
        def cancelled(*args, **kwargs):
            raise ConversionCancelled("Conversion cancelled")

        monkeypatch.setattr(cli, "convert_images", cancelled)

        assert cli.main([str(make_image())]) == cli.EXIT_CANCELLED

    def test_main_when_no_arguments_then_argparse_exits_2(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 2

    def test_main_when_verbose_then_debug_logging(self, make_image, tmp_path):
        cli.main([str(make_image()), "-o", str(tmp_path / "v.pdf"), "-v"])

        assert logging.getLogger().level == logging.DEBUG


class TestInspect:
    """--inspect mode."""

    def test_inspect_when_all_usable_then_exit_0_and_dimensions(self, make_image, capsys):
        path = make_image("photo.png", size=(64, 32))

        code = cli.main([str(path), "--inspect"])

        out = capsys.readouterr().out
        assert code == cli.EXIT_OK
        assert "photo.png: png 64x32" in out

    def test_inspect_when_unusable_file_then_exit_1_and_reason(self, make_image, tmp_path, capsys):
        missing = tmp_path / "gone.jpg"

        code = cli.main([str(make_image()), str(missing), "--inspect"])

        out = capsys.readouterr().out
        assert code == cli.EXIT_ERROR
        assert "gone.jpg:" in out
