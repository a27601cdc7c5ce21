"""
Colour adjustment filters for the App Icon Generator.

Provides the fixed filter chain applied before compositing:
- Brightness: additive offset on normalised RGB
- Contrast: scale around mid grey
- Saturation: scale away from Rec. 709 luma
- Hue: rotation of the chroma plane in YIQ space
- Tint: colour laid "atop" the visible pixels, blended by intensity

The adjustments run in that order on un-premultiplied RGB held as NumPy
float arrays; the alpha channel is never touched. A stage whose value is 0
is skipped, and the pixels are clipped and quantised once at the end.

Example:
    >>> from PIL import Image
    >>> img = Image.open("logo.png")
    >>> brighter = apply_adjustments(img, brightness=0.1)
    >>> tinted = apply_tint(img, (255, 0, 0, 255), intensity=0.5)
"""

import logging
import math
from typing import Any, Tuple

import numpy as np

from AIG_Libs.constants import LUMA_WEIGHTS
from AIG_Libs.ImageEditingLib.image_models import ColorLike, EditParameters, to_rgba
from AIG_Libs.ImageEditingLib.pixel_renderer import ensure_rgba
from AIG_Libs.pillow_compat import Image

logger = logging.getLogger(__name__)

_RGB_TO_YIQ = np.array(
    [
        [0.299, 0.587, 0.114],
        [0.596, -0.274, -0.322],
        [0.211, -0.523, 0.312],
    ],
    dtype=np.float64,
)
_YIQ_TO_RGB = np.linalg.inv(_RGB_TO_YIQ)


# ============================================================================
# Pixel buffer helpers
# ============================================================================

def _split_channels(image: Any) -> Tuple[np.ndarray, np.ndarray]:
    """Return (rgb float64 in 0-1, alpha uint8) arrays for an RGBA image."""
    pixels = np.asarray(image, dtype=np.uint8)
    rgb = pixels[..., :3].astype(np.float64) / 255.0
    alpha = pixels[..., 3].copy()
    return rgb, alpha


def _merge_channels(rgb: np.ndarray, alpha: np.ndarray) -> Any:
    """Clip, quantise and reassemble an RGBA PIL Image."""
    quantised = np.rint(np.clip(rgb, 0.0, 1.0) * 255.0).astype(np.uint8)
    pixels = np.dstack([quantised, alpha])
    return Image.fromarray(np.ascontiguousarray(pixels))


def hue_rotation_matrix(angle: float) -> np.ndarray:
    """
    Build the 3x3 RGB matrix that rotates hue by angle radians.

    The rotation happens in YIQ space, which leaves luma (Y) unchanged.
    """
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    rotation = np.array(
        [
            [1.0, 0.0, 0.0],
            [0.0, cos_a, -sin_a],
            [0.0, sin_a, cos_a],
        ],
        dtype=np.float64,
    )
    return _YIQ_TO_RGB @ rotation @ _RGB_TO_YIQ


# ============================================================================
# Individual stages (operate on float RGB arrays)
# ============================================================================

def adjust_brightness(rgb: np.ndarray, brightness: float) -> np.ndarray:
    return rgb + brightness


def adjust_contrast(rgb: np.ndarray, contrast: float) -> np.ndarray:
    factor = 1.0 + contrast
    return (rgb - 0.5) * factor + 0.5


def adjust_saturation(rgb: np.ndarray, saturation: float) -> np.ndarray:
    factor = 1.0 + saturation
    luma = rgb @ np.array(LUMA_WEIGHTS, dtype=np.float64)
    luma = luma[..., np.newaxis]
    return luma + (rgb - luma) * factor


def adjust_hue(rgb: np.ndarray, hue: float) -> np.ndarray:
    matrix = hue_rotation_matrix(hue * math.pi)
    return rgb @ matrix.T


# ============================================================================
# Filter chain
# ============================================================================

def apply_adjustments(
    image: Any,
    brightness: float = 0.0,
    contrast: float = 0.0,
    saturation: float = 0.0,
    hue: float = 0.0,
) -> Any:
    """
    Apply brightness, contrast, saturation and hue adjustments in that order.

    Args:
        image: PIL Image (converted to RGBA)
        brightness: Additive offset, -0.5 to 0.5
        contrast: Contrast delta, -0.5 to 0.5 (factor = 1 + contrast)
        saturation: Saturation delta, -1.0 to 1.0 (factor = 1 + saturation)
        hue: Hue delta, -0.5 to 0.5 (rotation = hue * pi radians)

    Returns:
        New RGBA PIL Image. With all values at 0 this is an exact copy.

    Raises:
        TypeError: If image is not a PIL Image
    """
    source = ensure_rgba(image)
    if brightness == 0 and contrast == 0 and saturation == 0 and hue == 0:
        return source.copy()
    if source.width == 0 or source.height == 0:
        return source.copy()

    rgb, alpha = _split_channels(source)

    if brightness != 0:
        rgb = adjust_brightness(rgb, brightness)
    if contrast != 0:
        rgb = adjust_contrast(rgb, contrast)
    if saturation != 0:
        rgb = adjust_saturation(rgb, saturation)
    if hue != 0:
        rgb = adjust_hue(rgb, hue)

    logger.debug(
        f"Adjusted {source.width}x{source.height} image "
        f"(brightness={brightness}, contrast={contrast}, saturation={saturation}, hue={hue})"
    )
    return _merge_channels(rgb, alpha)


def apply_tint(image: Any, tint_color: ColorLike, intensity: float) -> Any:
    """
    Tint the visible pixels of an image.

    A constant colour layer is composited "atop" the image (colour only
    where the image has alpha, the image's alpha is kept), and the tinted
    result is blended with the untinted image using intensity as a uniform
    mask. The tint colour's own alpha scales the effect.

    Args:
        image: PIL Image (converted to RGBA)
        tint_color: Tint colour (RGBA tuple or colour string)
        intensity: 0.0 = unchanged, 1.0 = fully tinted

    Returns:
        New RGBA PIL Image

    Raises:
        ValueError: If intensity is outside 0-1
        TypeError: If image is not a PIL Image
    """
    if not (0.0 <= intensity <= 1.0):
        raise ValueError(f"intensity must be 0.0-1.0, got {intensity}")

    source = ensure_rgba(image)
    r, g, b, a = to_rgba(tint_color)
    weight = intensity * (a / 255.0)
    if weight == 0 or source.width == 0 or source.height == 0:
        return source.copy()

    rgb, alpha = _split_channels(source)
    tint_rgb = np.array([r, g, b], dtype=np.float64) / 255.0

    tinted = rgb + (tint_rgb - rgb) * weight
    visible = (alpha > 0)[..., np.newaxis]
    rgb = np.where(visible, tinted, rgb)

    return _merge_channels(rgb, alpha)


def apply_filter_chain(image: Any, params: EditParameters) -> Any:
    """
    Run the colour stage of the edit pipeline: adjustments, then tint.

    Args:
        image: Source PIL Image
        params: EditParameters providing the adjustment and tint values

    Returns:
        New RGBA PIL Image
    """
    if params.has_adjustments():
        result = apply_adjustments(
            image,
            brightness=params.brightness,
            contrast=params.contrast,
            saturation=params.saturation,
            hue=params.hue,
        )
    else:
        result = ensure_rgba(image).copy()
    if params.tint.enabled:
        result = apply_tint(result, params.tint.color, params.tint.intensity)
    return result
