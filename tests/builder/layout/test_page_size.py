"""
Tests for builder.layout.page_size

Test Coverage:
- Fixed presets in points
- Custom size with per-axis A4 fallback
- Original pages sized from pixels and resolution
- Resolution order for Original pages
"""

import pytest

from imgtopdf.builder.layout.page_size import (
    effective_original_dpi,
    page_size_for,
    page_size_inches,
    resolve_page_size,
)
from imgtopdf.core.errors import ConfigurationError
from imgtopdf.core.models.options import ConversionOptions, PageSizePreset


class TestPresets:
    """Fixed page sizes."""

    @pytest.mark.parametrize("preset, expected", [
        ("A4", (8.27 * 72, 11.69 * 72)),
        ("A3", (11.69 * 72, 16.54 * 72)),
        ("Letter", (612.0, 792.0)),
        ("Legal", (612.0, 1008.0)),
    ])
    def test_resolve_when_fixed_preset_then_points(self, preset, expected):
        size = resolve_page_size(preset)

        assert size.width_pt == pytest.approx(expected[0])
        assert size.height_pt == pytest.approx(expected[1])

    def test_resolve_when_enum_member_then_same_as_string(self):
        assert resolve_page_size(PageSizePreset.LETTER) == resolve_page_size("letter")

    def test_resolve_when_unknown_preset_then_raises(self):
        with pytest.raises(ConfigurationError):
            resolve_page_size("B5")


class TestCustom:
    """Custom page size in millimetres."""

    def test_resolve_when_custom_mm_then_converted(self):
        size = resolve_page_size("Custom", custom_width_mm=254, custom_height_mm=127)

        assert size.width_pt == pytest.approx(720.0)
        assert size.height_pt == pytest.approx(360.0)

    def test_resolve_when_custom_missing_axis_then_a4_inches(self):
        """A missing axis falls back to the A4 dimension in inches."""
        width_in, height_in = page_size_inches("Custom", custom_width_mm=254)

        assert width_in == pytest.approx(10.0)
        assert height_in == pytest.approx(11.69)

    def test_resolve_when_custom_nothing_set_then_a4(self):
        assert page_size_inches("Custom") == pytest.approx((8.27, 11.69))

    @pytest.mark.parametrize("bad", [0, -10, float("inf")])
    def test_resolve_when_custom_invalid_then_raises(self, bad):
        with pytest.raises(ConfigurationError, match="custom_height_mm"):
            resolve_page_size("Custom", custom_width_mm=100, custom_height_mm=bad)


class TestOriginal:
    """Page sized to the image."""

    def test_resolve_when_original_3000x2000_at_300_then_720x480(self):
        size = resolve_page_size("Original", image_size=(3000, 2000), effective_dpi=300)

        assert size.width_pt == pytest.approx(720.0)
        assert size.height_pt == pytest.approx(480.0)

    def test_resolve_when_original_no_dpi_then_300_fallback(self):
        size = resolve_page_size("Original", image_size=(600, 300))

        assert size.as_tuple() == pytest.approx((144.0, 72.0))

    def test_resolve_when_original_without_image_size_then_raises(self):
        with pytest.raises(ConfigurationError, match="requires the image pixel size"):
            resolve_page_size("Original")

    def test_resolve_when_original_zero_dpi_then_raises(self):
        with pytest.raises(ConfigurationError):
            resolve_page_size("Original", image_size=(100, 100), effective_dpi=0)


class TestEffectiveOriginalDpi:
    """Target dpi, then image dpi, then source dpi, then 300."""

    def test_effective_when_target_set_then_target_wins(self):
        opts = ConversionOptions(target_dpi=150, source_dpi=96)
        assert effective_original_dpi(72, opts) == 150

    def test_effective_when_no_target_then_image_dpi(self):
        opts = ConversionOptions(source_dpi=96)
        assert effective_original_dpi(72, opts) == 72

    def test_effective_when_no_image_dpi_then_source_dpi(self):
        opts = ConversionOptions(source_dpi=96)
        assert effective_original_dpi(None, opts) == 96

    def test_effective_when_nothing_known_then_300(self):
        assert effective_original_dpi(None, ConversionOptions()) == 300

    def test_page_size_for_when_original_then_uses_effective_dpi(self):
        opts = ConversionOptions(page_size=PageSizePreset.ORIGINAL, source_dpi=150)

        size = page_size_for(opts, image_size=(1500, 750))

        assert size.as_tuple() == pytest.approx((720.0, 360.0))

    def test_page_size_for_when_fixed_preset_then_ignores_image(self):
        opts = ConversionOptions(page_size=PageSizePreset.LETTER)

        assert page_size_for(opts, image_size=(10, 10), image_dpi=1).as_tuple() == (612.0, 792.0)
