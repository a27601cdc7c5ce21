"""
ImageEditingLib - Core image editing functionality

This module provides exact-size rendering, colour filters, compositing,
the edit pipeline and its parameter models for the App Icon Generator.
"""

from AIG_Libs.ImageEditingLib.image_models import (
    RgbaColor,
    TintSettings,
    ShapeSettings,
    BackgroundSettings,
    BorderSettings,
    OverlaySettings,
    EditParameters,
    to_rgba,
)
from AIG_Libs.ImageEditingLib.pixel_renderer import render_exact
from AIG_Libs.ImageEditingLib.color_filters import (
    apply_adjustments,
    apply_tint,
    apply_filter_chain,
)
from AIG_Libs.ImageEditingLib.compositor import Compositor, compose
from AIG_Libs.ImageEditingLib.edit_pipeline import EditSession, apply_edits
from AIG_Libs.ImageEditingLib.debouncer import Debouncer

__all__ = [
    "RgbaColor",
    "TintSettings",
    "ShapeSettings",
    "BackgroundSettings",
    "BorderSettings",
    "OverlaySettings",
    "EditParameters",
    "to_rgba",
    "render_exact",
    "apply_adjustments",
    "apply_tint",
    "apply_filter_chain",
    "Compositor",
    "compose",
    "EditSession",
    "apply_edits",
    "Debouncer",
]
