"""
Image editing data models for the App Icon Generator.

This module defines the value types that describe one set of cosmetic
edits. All of them are frozen dataclasses: the session replaces the whole
value on every change, and the pipeline never mutates them.

Classes:
    TintSettings: Optional colour tint
    ShapeSettings: Shape mask (square, rounded, circle)
    BackgroundSettings: Optional opaque background fill
    BorderSettings: Optional border stroke
    OverlaySettings: Optional text badge
    EditParameters: The complete parameter set

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
    ShapeKind: "square", "rounded" or "circle"
    OverlayKind: "none", "beta", "dev", "alpha", "staging", "test" or "custom"
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Literal, Sequence, Tuple, Union, get_args

from AIG_Libs.constants import (
    BRIGHTNESS_RANGE,
    CONTRAST_RANGE,
    SATURATION_RANGE,
    HUE_RANGE,
    CORNER_RADIUS_PERCENT_RANGE,
    PADDING_PERCENT_RANGE,
    DEFAULT_TINT_COLOR,
    DEFAULT_TINT_INTENSITY,
    DEFAULT_SHAPE,
    DEFAULT_CORNER_RADIUS_PERCENT,
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_BORDER_WIDTH_PX,
    DEFAULT_BORDER_COLOR,
    DEFAULT_OVERLAY_COLOR,
    DEFAULT_OVERLAY_FONT_SIZE,
    DEFAULT_OVERLAY_ROTATION,
    DEFAULT_OVERLAY_POSITION,
    DEFAULT_OVERLAY_OPACITY,
    OVERLAY_NONE,
    OVERLAY_CUSTOM,
    OVERLAY_TEXTS,
)
from AIG_Libs.pillow_compat import ImageColor

RgbaColor = Tuple[int, int, int, int]
ColorLike = Union[RgbaColor, Sequence[int], str]
ShapeKind = Literal["square", "rounded", "circle"]
OverlayKind = Literal["none", "beta", "dev", "alpha", "staging", "test", "custom"]

SHAPE_KINDS: Tuple[str, ...] = get_args(ShapeKind)
OVERLAY_KINDS: Tuple[str, ...] = get_args(OverlayKind)


def to_rgba(color: ColorLike) -> RgbaColor:
    """
    Normalize a colour value to an RGBA tuple.

    Args:
        color: RGB/RGBA sequence of 0-255 ints, or any colour string
               understood by Pillow ("#3366ff", "red", "rgb(1,2,3)")

    Returns:
        (r, g, b, a) tuple

    Raises:
        ValueError: If the colour cannot be parsed or is out of range
    """
    if isinstance(color, str):
        return tuple(ImageColor.getcolor(color, "RGBA"))

    values = [int(channel) for channel in color]
    if len(values) == 3:
        values.append(255)
    if len(values) != 4:
        raise ValueError(f"Colour must have 3 or 4 channels, got {len(values)}")
    if any(channel < 0 or channel > 255 for channel in values):
        raise ValueError(f"Colour channels must be 0-255, got {tuple(values)}")
    return tuple(values)


def _check_range(name: str, value: float, bounds: Tuple[float, float]) -> None:
    low, high = bounds
    if not (low <= value <= high):
        raise ValueError(f"{name} must be {low} to {high}, got {value}")


@dataclass(frozen=True)
class TintSettings:
    """Colour tint laid over the visible pixels.

    Attributes:
        enabled: Apply the tint at all
        color: Tint colour (its alpha scales the tint)
        intensity: 0.0 = no visible tint, 1.0 = fully tinted
    """
    enabled: bool = False
    color: RgbaColor = DEFAULT_TINT_COLOR
    intensity: float = DEFAULT_TINT_INTENSITY

    def __post_init__(self):
        object.__setattr__(self, "color", to_rgba(self.color))
        _check_range("tint intensity", self.intensity, (0.0, 1.0))


@dataclass(frozen=True)
class ShapeSettings:
    """Shape the icon is clipped to.

    Attributes:
        kind: "square" (no clip), "rounded" or "circle"
        corner_radius_percent: Corner radius as a percentage of the
            shorter canvas side (only used by "rounded")
    """
    kind: ShapeKind = DEFAULT_SHAPE
    corner_radius_percent: float = DEFAULT_CORNER_RADIUS_PERCENT

    def __post_init__(self):
        if self.kind not in SHAPE_KINDS:
            raise ValueError(f"Unsupported shape: {self.kind}")
        _check_range("corner_radius_percent", self.corner_radius_percent, CORNER_RADIUS_PERCENT_RANGE)


@dataclass(frozen=True)
class BackgroundSettings:
    enabled: bool = False
    color: RgbaColor = DEFAULT_BACKGROUND_COLOR

    def __post_init__(self):
        object.__setattr__(self, "color", to_rgba(self.color))


@dataclass(frozen=True)
class BorderSettings:
    enabled: bool = False
    width_px: float = DEFAULT_BORDER_WIDTH_PX
    color: RgbaColor = DEFAULT_BORDER_COLOR

    def __post_init__(self):
        object.__setattr__(self, "color", to_rgba(self.color))
        if self.width_px < 0:
            raise ValueError(f"border width must be >= 0, got {self.width_px}")


@dataclass(frozen=True)
class OverlaySettings:
    """Text badge drawn on top of the icon.

    Attributes:
        kind: Keyword selecting the text, "custom" uses custom_text
        custom_text: Text used when kind is "custom"
        color: Text colour
        font_size: Font size in pixels of the edited image
        rotation_degrees: Rotation around the text centre (counter-clockwise positive)
        vertical_position: 0.0 places the text centre at the top edge,
            1.0 at the bottom edge
        opacity: Multiplier applied to the text colour's alpha
    """
    kind: OverlayKind = OVERLAY_NONE
    custom_text: str = ""
    color: RgbaColor = DEFAULT_OVERLAY_COLOR
    font_size: float = DEFAULT_OVERLAY_FONT_SIZE
    rotation_degrees: float = DEFAULT_OVERLAY_ROTATION
    vertical_position: float = DEFAULT_OVERLAY_POSITION
    opacity: float = DEFAULT_OVERLAY_OPACITY

    def __post_init__(self):
        if self.kind not in OVERLAY_KINDS:
            raise ValueError(f"Unsupported overlay type: {self.kind}")
        object.__setattr__(self, "color", to_rgba(self.color))
        if self.font_size <= 0:
            raise ValueError(f"font_size must be > 0, got {self.font_size}")
        _check_range("vertical_position", self.vertical_position, (0.0, 1.0))
        _check_range("opacity", self.opacity, (0.0, 1.0))

    def resolve_text(self) -> str:
        """Return the text to draw, or an empty string when nothing is drawn."""
        if self.kind == OVERLAY_NONE:
            return ""
        if self.kind == OVERLAY_CUSTOM:
            return self.custom_text
        return OVERLAY_TEXTS[self.kind]


_NESTED_TYPES = {
    "tint": TintSettings,
    "shape": ShapeSettings,
    "background": BackgroundSettings,
    "border": BorderSettings,
    "overlay": OverlaySettings,
}


@dataclass(frozen=True)
class EditParameters:
    """Complete set of cosmetic edits applied to a source image.

    The basic adjustments are deltas around a neutral value of 0.

    Attributes:
        brightness: Additive offset, -0.5 to 0.5
        contrast: Contrast delta, -0.5 to 0.5 (factor 0.5 to 1.5)
        saturation: Saturation delta, -1.0 to 1.0 (factor 0.0 to 2.0)
        hue: Hue rotation, -0.5 to 0.5 (times pi radians)
        tint: Tint settings
        shape: Shape mask settings
        padding_percent: Inset on every side, percentage of the shorter side
        background: Background fill settings
        border: Border stroke settings
        overlay: Text overlay settings
    """
    brightness: float = 0.0
    contrast: float = 0.0
    saturation: float = 0.0
    hue: float = 0.0
    tint: TintSettings = field(default_factory=TintSettings)
    shape: ShapeSettings = field(default_factory=ShapeSettings)
    padding_percent: float = 0.0
    background: BackgroundSettings = field(default_factory=BackgroundSettings)
    border: BorderSettings = field(default_factory=BorderSettings)
    overlay: OverlaySettings = field(default_factory=OverlaySettings)

    def __post_init__(self):
        _check_range("brightness", self.brightness, BRIGHTNESS_RANGE)
        _check_range("contrast", self.contrast, CONTRAST_RANGE)
        _check_range("saturation", self.saturation, SATURATION_RANGE)
        _check_range("hue", self.hue, HUE_RANGE)
        _check_range("padding_percent", self.padding_percent, PADDING_PERCENT_RANGE)

    @classmethod
    def defaults(cls) -> "EditParameters":
        return cls()

    def is_default(self) -> bool:
        return self == EditParameters()

    def has_adjustments(self) -> bool:
        return any(value != 0 for value in (self.brightness, self.contrast, self.saturation, self.hue))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditParameters":
        """
        Create from dictionary.

        Unknown keys are ignored and missing keys take their defaults, so
        partial dictionaries (e.g. {"brightness": 0.2}) are accepted.
        """
        kwargs: Dict[str, Any] = {}
        known = {f.name for f in fields(cls)}
        for key, value in data.items():
            if key not in known:
                continue
            nested_type = _NESTED_TYPES.get(key)
            if nested_type is not None and isinstance(value, dict):
                nested_fields = nested_type.__dataclass_fields__
                value = nested_type(**{k: v for k, v in value.items() if k in nested_fields})
            kwargs[key] = value
        return cls(**kwargs)
