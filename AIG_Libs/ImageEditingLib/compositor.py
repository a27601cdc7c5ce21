"""
Shape, border, background and text overlay compositing.

The compositor turns a colour-filtered image into the final icon artwork.
Stages always run in this order, each one optional:

1. geometry: padding and corner radius from percentages of the canvas
2. background fill over the whole canvas
3. padded drawing rectangle
4. shape clip (rounded rectangle or inscribed circle)
5. the image, scaled into the padded rectangle
6. border stroke along the inside of the shape outline
7. text overlay, never clipped

Shape and stroke masks are drawn supersampled and box-reduced, which
gives anti-aliased edges while keeping pixels well inside the shape at
their exact source values.

Example:
    >>> from PIL import Image
    >>> icon = Image.open("logo.png")
    >>> params = EditParameters(shape=ShapeSettings(kind="circle"))
    >>> round_icon = compose(icon, params)
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional, Tuple

from AIG_Libs.constants import (
    BOLD_FONT_CANDIDATES,
    COLOR_TRANSPARENT,
    MASK_MODE,
    OVERLAY_NONE,
    RGBA_MODE,
    SHAPE_CIRCLE,
    SHAPE_ROUNDED,
    SHAPE_SQUARE,
    SUPERSAMPLE_FACTOR,
)
from AIG_Libs.ImageEditingLib.image_models import (
    BackgroundSettings,
    BorderSettings,
    EditParameters,
    OverlaySettings,
    ShapeSettings,
)
from AIG_Libs.ImageEditingLib.pixel_renderer import ensure_rgba, render_exact, transparent_canvas
from AIG_Libs.pillow_compat import BICUBIC, Image, ImageChops, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

# Supersampled masks are capped at this edge length
MAX_SUPERSAMPLE_EDGE = 8192

Box = Tuple[float, float, float, float]


@dataclass(frozen=True)
class CanvasGeometry:
    """Pixel geometry derived from percentage parameters for one canvas.

    Attributes:
        width: Canvas width in pixels
        height: Canvas height in pixels
        padding_px: Inset applied on every side
        corner_radius_px: Rounded-rectangle radius, clamped to the padded box
        box: Padded drawing rectangle (left, top, right, bottom), right/bottom exclusive
    """
    width: int
    height: int
    padding_px: float
    corner_radius_px: float
    box: Tuple[int, int, int, int]

    @property
    def box_size(self) -> Tuple[int, int]:
        left, top, right, bottom = self.box
        return right - left, bottom - top


@lru_cache(maxsize=32)
def load_bold_font(size: int) -> Any:
    """
    Load a bold font at the given pixel size.

    Tries the faces in BOLD_FONT_CANDIDATES and falls back to Pillow's
    bundled scalable font when none of them is installed.
    """
    for candidate in BOLD_FONT_CANDIDATES:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    logger.debug(f"No bold TrueType font found, using Pillow default font at {size}px")
    return ImageFont.load_default(size=size)


class Compositor:
    """Applies the fixed compositing stages to an image."""

    def __init__(self, supersample: int = SUPERSAMPLE_FACTOR):
        if supersample < 1:
            raise ValueError(f"supersample must be >= 1, got {supersample}")
        self.supersample = supersample

    # ------------------------------------------------------------------
    # Geometry and masks
    # ------------------------------------------------------------------

    @staticmethod
    def compute_geometry(
        size: Tuple[int, int],
        padding_percent: float,
        corner_radius_percent: float,
    ) -> CanvasGeometry:
        """
        Convert percentage parameters into pixel geometry for a canvas.

        Both percentages refer to the shorter canvas side so the same
        parameters give the same proportions at every size.
        """
        width, height = size
        shorter = min(width, height)
        padding_px = padding_percent / 100.0 * shorter

        inset = int(round(padding_px))
        left = min(inset, max(0, (width - 1) // 2))
        top = min(inset, max(0, (height - 1) // 2))
        box = (left, top, width - left, height - top)

        box_shorter = min(box[2] - box[0], box[3] - box[1])
        corner_radius_px = corner_radius_percent / 100.0 * shorter
        corner_radius_px = max(0.0, min(corner_radius_px, box_shorter / 2.0))

        return CanvasGeometry(
            width=width,
            height=height,
            padding_px=padding_px,
            corner_radius_px=corner_radius_px,
            box=box,
        )

    def _supersample_for(self, size: Tuple[int, int]) -> int:
        longest = max(size)
        if longest * self.supersample <= MAX_SUPERSAMPLE_EDGE:
            return self.supersample
        return max(1, MAX_SUPERSAMPLE_EDGE // longest)

    def shape_mask(
        self,
        size: Tuple[int, int],
        box: Box,
        kind: str,
        radius: float = 0.0,
    ) -> Any:
        """
        Draw an anti-aliased L-mode mask of a shape.

        Args:
            size: Mask size (width, height)
            box: Shape bounds (left, top, right, bottom), right/bottom exclusive
            kind: "square", "rounded" or "circle"
            radius: Corner radius in pixels for "rounded"

        Returns:
            L-mode PIL Image, 255 inside the shape and 0 outside
        """
        factor = self._supersample_for(size)
        big_size = (size[0] * factor, size[1] * factor)
        mask = Image.new(MASK_MODE, big_size, 0)

        left, top, right, bottom = (value * factor for value in box)
        if right - left < 1 or bottom - top < 1:
            return mask.reduce(factor) if factor > 1 else mask

        # PIL shape boxes include their last pixel
        bounds = [left, top, right - 1, bottom - 1]
        draw = ImageDraw.Draw(mask)
        if kind == SHAPE_CIRCLE:
            draw.ellipse(bounds, fill=255)
        elif kind == SHAPE_ROUNDED and radius > 0:
            draw.rounded_rectangle(bounds, radius=radius * factor, fill=255)
        else:
            draw.rectangle(bounds, fill=255)

        if factor > 1:
            mask = mask.reduce(factor)
        return mask

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    @staticmethod
    def fill_background(size: Tuple[int, int], background: BackgroundSettings) -> Any:
        r, g, b, _ = background.color
        return Image.new(RGBA_MODE, size, (r, g, b, 255))

    def draw_image(
        self,
        image: Any,
        geometry: CanvasGeometry,
        shape: ShapeSettings,
    ) -> Any:
        """Return a canvas-sized layer holding the image in the padded, clipped box."""
        layer = transparent_canvas(geometry.width, geometry.height)
        box_width, box_height = geometry.box_size
        if (box_width, box_height) == image.size:
            fitted = image
        else:
            fitted = render_exact(image, box_width, box_height)
        layer.paste(fitted, geometry.box[:2])

        if shape.kind != SHAPE_SQUARE:
            mask = self.shape_mask(layer.size, geometry.box, shape.kind, geometry.corner_radius_px)
            clipped_alpha = ImageChops.multiply(layer.getchannel("A"), mask)
            layer.putalpha(clipped_alpha)
        return layer

    def draw_border(
        self,
        canvas: Any,
        geometry: CanvasGeometry,
        shape: ShapeSettings,
        border: BorderSettings,
    ) -> Any:
        """
        Stroke the shape outline on top of the canvas.

        The stroke covers the band between the shape outline and the same
        outline inset by the border width, i.e. a line of that width centred
        on the outline inset by half the width.
        """
        width = border.width_px
        if width <= 0:
            return canvas

        left, top, right, bottom = geometry.box
        outer = self.shape_mask(canvas.size, geometry.box, shape.kind, geometry.corner_radius_px)
        inner_box = (left + width, top + width, right - width, bottom - width)
        inner_radius = max(0.0, geometry.corner_radius_px - width)
        inner = self.shape_mask(canvas.size, inner_box, shape.kind, inner_radius)
        stroke_mask = ImageChops.subtract(outer, inner)

        r, g, b, a = border.color
        if a < 255:
            stroke_mask = ImageChops.multiply(stroke_mask, Image.new(MASK_MODE, canvas.size, a))

        stroke_layer = Image.new(RGBA_MODE, canvas.size, (r, g, b, 255))
        stroke_layer.putalpha(stroke_mask)
        return Image.alpha_composite(canvas, stroke_layer)

    @staticmethod
    def render_overlay_text(overlay: OverlaySettings) -> Optional[Any]:
        """
        Render the overlay text into its own rotated RGBA tile.

        Returns:
            RGBA PIL Image sized to the rotated text, or None when the
            resolved text is empty
        """
        text = overlay.resolve_text()
        if not text:
            return None

        font = load_bold_font(max(1, int(round(overlay.font_size))))
        measure = ImageDraw.Draw(Image.new(MASK_MODE, (1, 1)))
        text_left, text_top, text_right, text_bottom = measure.textbbox((0, 0), text, font=font)
        margin = 2
        tile_size = (
            max(1, text_right - text_left) + margin * 2,
            max(1, text_bottom - text_top) + margin * 2,
        )

        r, g, b, a = overlay.color
        fill = (r, g, b, int(round(a * overlay.opacity)))
        tile = Image.new(RGBA_MODE, tile_size, COLOR_TRANSPARENT)
        ImageDraw.Draw(tile).text((margin - text_left, margin - text_top), text, font=font, fill=fill)

        if overlay.rotation_degrees % 360 != 0:
            tile = tile.rotate(overlay.rotation_degrees, resample=BICUBIC, expand=True)
        return tile

    def draw_overlay(self, canvas: Any, overlay: OverlaySettings) -> Any:
        """Draw the text overlay centred horizontally at its vertical position."""
        tile = self.render_overlay_text(overlay)
        if tile is None:
            return canvas

        # Centre sits canvas_height * (1 - position) above the bottom edge
        center_x = canvas.width / 2.0
        center_y = canvas.height - canvas.height * (1.0 - overlay.vertical_position)
        offset = (
            int(round(center_x - tile.width / 2.0)),
            int(round(center_y - tile.height / 2.0)),
        )

        layer = transparent_canvas(canvas.width, canvas.height)
        layer.paste(tile, offset)
        return Image.alpha_composite(canvas, layer)

    # ------------------------------------------------------------------
    # Full composition
    # ------------------------------------------------------------------

    def compose(self, image: Any, params: EditParameters) -> Any:
        """
        Apply background, shape clip, border and overlay to an image.

        Args:
            image: PIL Image (converted to RGBA); its size is the canvas size
            params: EditParameters providing the compositing settings

        Returns:
            New RGBA PIL Image of the same size. With default parameters the
            pixels are identical to the input.
        """
        source = ensure_rgba(image)
        if source.width == 0 or source.height == 0:
            return source.copy()

        geometry = self.compute_geometry(
            source.size, params.padding_percent, params.shape.corner_radius_percent
        )

        image_layer = self.draw_image(source, geometry, params.shape)
        if params.background.enabled:
            canvas = self.fill_background(source.size, params.background)
            canvas = Image.alpha_composite(canvas, image_layer)
        else:
            canvas = image_layer

        if params.border.enabled:
            canvas = self.draw_border(canvas, geometry, params.shape, params.border)

        if params.overlay.kind != OVERLAY_NONE:
            canvas = self.draw_overlay(canvas, params.overlay)

        return canvas


_default_compositor = Compositor()


def compose(image: Any, params: EditParameters) -> Any:
    """Compose an image with the shared default Compositor."""
    return _default_compositor.compose(image, params)
