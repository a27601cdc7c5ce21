"""
Tests for the colour filter chain.

Tests cover:
- Each adjustment stage on known pixel values
- Neutral values leave pixels untouched
- Tint blending, bounds and transparent pixels
- Alpha is never modified
"""

import numpy as np
import pytest
from PIL import Image

from AIG_Libs.ImageEditingLib.color_filters import (
    apply_adjustments,
    apply_filter_chain,
    apply_tint,
    hue_rotation_matrix,
)
from AIG_Libs.ImageEditingLib.image_models import EditParameters, TintSettings


def _pixel(color, size=(4, 4)):
    return Image.new("RGBA", size, color)


class TestAdjustments:
    """Test brightness, contrast, saturation and hue."""

    def test_all_neutral_is_identity(self, gradient_image):
        result = apply_adjustments(gradient_image)

        assert result.tobytes() == gradient_image.tobytes()
        assert result is not gradient_image

    def test_brightness_is_additive(self):
        result = apply_adjustments(_pixel((100, 100, 100, 255)), brightness=0.2)

        assert result.getpixel((0, 0)) == (151, 151, 151, 255)

    def test_brightness_clips_at_white(self):
        result = apply_adjustments(_pixel((250, 10, 0, 255)), brightness=0.2)

        r, g, b, _ = result.getpixel((0, 0))
        assert r == 255
        assert g == 61
        assert b == 51

    def test_contrast_scales_around_mid_grey(self):
        result = apply_adjustments(_pixel((200, 200, 200, 255)), contrast=0.5)

        assert result.getpixel((0, 0))[:3] == (236, 236, 236)

    def test_negative_contrast_moves_towards_grey(self):
        result = apply_adjustments(_pixel((0, 0, 0, 255)), contrast=-0.5)

        value = result.getpixel((0, 0))[0]
        assert 60 <= value <= 66

    def test_full_desaturation_gives_luma_grey(self):
        result = apply_adjustments(_pixel((255, 0, 0, 255)), saturation=-1.0)

        r, g, b, _ = result.getpixel((0, 0))
        assert r == g == b == 54

    def test_hue_leaves_grey_unchanged(self):
        result = apply_adjustments(_pixel((128, 128, 128, 255)), hue=0.3)

        assert result.getpixel((0, 0)) == (128, 128, 128, 255)

    def test_hue_rotates_colour(self):
        result = apply_adjustments(_pixel((255, 0, 0, 255)), hue=0.5)

        assert result.getpixel((0, 0))[:3] != (255, 0, 0)

    def test_hue_matrix_identity_at_zero(self):
        assert np.allclose(hue_rotation_matrix(0.0), np.eye(3))

    def test_alpha_untouched(self, gradient_image):
        result = apply_adjustments(
            gradient_image, brightness=0.3, contrast=-0.2, saturation=0.5, hue=0.1
        )

        assert result.getchannel("A").tobytes() == gradient_image.getchannel("A").tobytes()

    def test_zero_area_image(self):
        result = apply_adjustments(Image.new("RGBA", (0, 0)), brightness=0.2)

        assert result.size == (0, 0)


class TestTint:
    """Test the tint stage."""

    def test_half_intensity_blends_halfway(self):
        result = apply_tint(_pixel((100, 100, 100, 255)), (200, 0, 0, 255), 0.5)

        assert result.getpixel((0, 0)) == (150, 50, 50, 255)

    def test_full_intensity_replaces_colour(self):
        result = apply_tint(_pixel((12, 34, 56, 255)), (0, 122, 255, 255), 1.0)

        assert result.getpixel((0, 0)) == (0, 122, 255, 255)

    def test_zero_intensity_is_identity(self, gradient_image):
        result = apply_tint(gradient_image, (255, 0, 0, 255), 0.0)

        assert result.tobytes() == gradient_image.tobytes()

    def test_transparent_pixels_not_tinted(self):
        image = _pixel((10, 20, 30, 0))

        result = apply_tint(image, (255, 0, 0, 255), 1.0)

        assert result.getpixel((0, 0)) == (10, 20, 30, 0)

    def test_tint_alpha_scales_effect(self):
        result = apply_tint(_pixel((0, 0, 0, 255)), (255, 255, 255, 0), 1.0)

        assert result.getpixel((0, 0)) == (0, 0, 0, 255)

    def test_accepts_colour_string(self):
        result = apply_tint(_pixel((0, 0, 0, 255)), "#ff0000", 1.0)

        assert result.getpixel((0, 0)) == (255, 0, 0, 255)

    @pytest.mark.parametrize("intensity", [-0.1, 1.5])
    def test_intensity_out_of_range(self, intensity):
        with pytest.raises(ValueError):
            apply_tint(_pixel((0, 0, 0, 255)), (255, 0, 0, 255), intensity)


class TestFilterChain:
    def test_defaults_are_identity(self, gradient_image, default_params):
        result = apply_filter_chain(gradient_image, default_params)

        assert result.tobytes() == gradient_image.tobytes()

    def test_disabled_tint_is_skipped(self):
        params = EditParameters(tint=TintSettings(enabled=False, intensity=1.0))

        result = apply_filter_chain(_pixel((5, 5, 5, 255)), params)

        assert result.getpixel((0, 0)) == (5, 5, 5, 255)

    def test_tint_runs_after_adjustments(self):
        params = EditParameters(
            brightness=0.5,
            tint=TintSettings(enabled=True, color=(0, 0, 0, 255), intensity=1.0),
        )

        result = apply_filter_chain(_pixel((100, 100, 100, 255)), params)

        assert result.getpixel((0, 0)) == (0, 0, 0, 255)
