"""
Exact pixel-size rendering for the App Icon Generator.

Every exported icon goes through `render_exact`, which guarantees the
output has precisely the requested pixel dimensions regardless of the
source size, aspect ratio or DPI metadata.

Example:
    >>> from PIL import Image
    >>> source = Image.open("logo.png")
    >>> icon = render_exact(source, 180, 180)
    >>> icon.size
    (180, 180)
"""

from typing import Any, Literal

from AIG_Libs.constants import COLOR_TRANSPARENT, RGBA_MODE
from AIG_Libs.pillow_compat import Image, LANCZOS

FitMode = Literal["stretch", "contain"]


def ensure_rgba(image: Any) -> Any:
    """
    Return the image in RGBA mode.

    Raises:
        TypeError: If image is not a PIL Image
    """
    if not hasattr(image, "mode") or not hasattr(image, "convert"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")
    if image.mode != RGBA_MODE:
        return image.convert(RGBA_MODE)
    return image


def transparent_canvas(width: int, height: int) -> Any:
    return Image.new(RGBA_MODE, (width, height), COLOR_TRANSPARENT)


def render_exact(
    image: Any,
    width: int,
    height: int,
    fit: FitMode = "stretch",
) -> Any:
    """
    Render an image into a new RGBA buffer of exactly width x height pixels.

    The buffer starts fully transparent and the image is resampled with
    Lanczos filtering; alpha is kept throughout. "stretch" fills the whole
    buffer, "contain" keeps the aspect ratio and centres the result.

    Args:
        image: PIL Image (any mode, converted to RGBA)
        width: Target width in pixels (> 0)
        height: Target height in pixels (> 0)
        fit: "stretch" or "contain"

    Returns:
        New RGBA PIL Image of the requested size, with no DPI metadata

    Raises:
        ValueError: If a target dimension is not positive or fit is unknown
        TypeError: If image is not a PIL Image
    """
    width = int(width)
    height = int(height)
    if width <= 0 or height <= 0:
        raise ValueError(f"Target size must be positive, got {width}x{height}")
    if fit not in ("stretch", "contain"):
        raise ValueError(f"Unsupported fit mode: {fit}")

    source = ensure_rgba(image)
    canvas = transparent_canvas(width, height)

    src_width, src_height = source.size
    if src_width == 0 or src_height == 0:
        return canvas

    if fit == "contain":
        scale = min(width / src_width, height / src_height)
        draw_width = max(1, round(src_width * scale))
        draw_height = max(1, round(src_height * scale))
    else:
        draw_width, draw_height = width, height

    if (draw_width, draw_height) == (src_width, src_height):
        drawn = source
    else:
        drawn = source.resize((draw_width, draw_height), LANCZOS)

    offset = ((width - draw_width) // 2, (height - draw_height) // 2)
    # paste without a mask copies RGBA values as-is onto the cleared buffer
    canvas.paste(drawn, offset)
    return canvas
