"""
Tests for the edit parameter models.
"""

import unittest

from AIG_Libs.ImageEditingLib.image_models import (
    BorderSettings,
    EditParameters,
    OverlaySettings,
    ShapeSettings,
    TintSettings,
    to_rgba,
)


class TestColours(unittest.TestCase):
    """Test colour normalisation."""

    def test_rgb_tuple_gets_opaque_alpha(self):
        self.assertEqual(to_rgba((1, 2, 3)), (1, 2, 3, 255))

    def test_hex_string(self):
        self.assertEqual(to_rgba("#ff8000"), (255, 128, 0, 255))

    def test_named_colour(self):
        self.assertEqual(to_rgba("white"), (255, 255, 255, 255))

    def test_invalid_string_rejected(self):
        with self.assertRaises(ValueError):
            to_rgba("not-a-colour")

    def test_out_of_range_channel_rejected(self):
        with self.assertRaises(ValueError):
            to_rgba((0, 0, 300, 255))

    def test_wrong_channel_count_rejected(self):
        with self.assertRaises(ValueError):
            to_rgba((0, 0))


class TestEditParameters(unittest.TestCase):
    """Test EditParameters defaults, validation and serialization."""

    def test_defaults(self):
        params = EditParameters.defaults()

        self.assertEqual(params.brightness, 0.0)
        self.assertEqual(params.shape.kind, "square")
        self.assertEqual(params.shape.corner_radius_percent, 20.0)
        self.assertEqual(params.tint.color, (0, 122, 255, 255))
        self.assertEqual(params.tint.intensity, 0.5)
        self.assertEqual(params.border.width_px, 4.0)
        self.assertEqual(params.overlay.kind, "none")
        self.assertEqual(params.overlay.rotation_degrees, -45.0)
        self.assertTrue(params.is_default())
        self.assertFalse(params.has_adjustments())

    def test_changed_value_is_not_default(self):
        params = EditParameters(saturation=0.1)

        self.assertFalse(params.is_default())
        self.assertTrue(params.has_adjustments())

    def test_out_of_range_values_rejected(self):
        for kwargs in (
            {"brightness": 0.6},
            {"contrast": -0.51},
            {"saturation": 1.5},
            {"hue": -0.7},
            {"padding_percent": 46.0},
        ):
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ValueError):
                    EditParameters(**kwargs)

    def test_nested_validation(self):
        with self.assertRaises(ValueError):
            TintSettings(intensity=1.2)
        with self.assertRaises(ValueError):
            ShapeSettings(kind="hexagon")
        with self.assertRaises(ValueError):
            ShapeSettings(corner_radius_percent=60.0)
        with self.assertRaises(ValueError):
            BorderSettings(width_px=-1.0)
        with self.assertRaises(ValueError):
            OverlaySettings(font_size=0)
        with self.assertRaises(ValueError):
            OverlaySettings(vertical_position=1.5)
        with self.assertRaises(ValueError):
            OverlaySettings(kind="gamma")

    def test_colour_strings_normalised(self):
        tint = TintSettings(enabled=True, color="red")

        self.assertEqual(tint.color, (255, 0, 0, 255))

    def test_overlay_text(self):
        self.assertEqual(OverlaySettings(kind="beta").resolve_text(), "BETA")
        self.assertEqual(OverlaySettings(kind="staging").resolve_text(), "STAGING")
        self.assertEqual(OverlaySettings(kind="custom", custom_text="v2").resolve_text(), "v2")
        self.assertEqual(OverlaySettings(kind="none", custom_text="x").resolve_text(), "")

    def test_dict_round_trip(self):
        params = EditParameters(
            brightness=0.1,
            shape=ShapeSettings(kind="circle"),
            overlay=OverlaySettings(kind="dev", opacity=0.5),
        )

        restored = EditParameters.from_dict(params.to_dict())

        self.assertEqual(restored, params)

    def test_from_partial_dict(self):
        params = EditParameters.from_dict({"hue": 0.25, "border": {"enabled": True}, "unknown": 1})

        self.assertEqual(params.hue, 0.25)
        self.assertTrue(params.border.enabled)
        self.assertEqual(params.border.width_px, 4.0)


if __name__ == "__main__":
    unittest.main()
