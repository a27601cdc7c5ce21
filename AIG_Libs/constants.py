"""
Constants and configuration values for the App Icon Generator.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Colour defaults (RGBA tuples)
COLOR_SYSTEM_BLUE = (0, 122, 255, 255)
COLOR_SYSTEM_RED = (255, 59, 48, 255)
COLOR_WHITE = (255, 255, 255, 255)
COLOR_TRANSPARENT = (0, 0, 0, 0)

# Basic adjustment ranges (min, max); 0 is neutral for all of them
BRIGHTNESS_RANGE = (-0.5, 0.5)
CONTRAST_RANGE = (-0.5, 0.5)
SATURATION_RANGE = (-1.0, 1.0)
HUE_RANGE = (-0.5, 0.5)

# Tint defaults
DEFAULT_TINT_COLOR = COLOR_SYSTEM_BLUE
DEFAULT_TINT_INTENSITY = 0.5

# Shape defaults
SHAPE_SQUARE = "square"
SHAPE_ROUNDED = "rounded"
SHAPE_CIRCLE = "circle"
DEFAULT_SHAPE = SHAPE_SQUARE
DEFAULT_CORNER_RADIUS_PERCENT = 20.0
CORNER_RADIUS_PERCENT_RANGE = (0.0, 50.0)
PADDING_PERCENT_RANGE = (0.0, 45.0)

# Background / border defaults
DEFAULT_BACKGROUND_COLOR = COLOR_WHITE
DEFAULT_BORDER_WIDTH_PX = 4.0
DEFAULT_BORDER_COLOR = COLOR_SYSTEM_BLUE

# Text overlay defaults
OVERLAY_NONE = "none"
OVERLAY_CUSTOM = "custom"
OVERLAY_TEXTS = {
    "beta": "BETA",
    "dev": "DEV",
    "alpha": "ALPHA",
    "staging": "STAGING",
    "test": "TEST",
}
DEFAULT_OVERLAY_COLOR = COLOR_SYSTEM_RED
DEFAULT_OVERLAY_FONT_SIZE = 18.0
DEFAULT_OVERLAY_ROTATION = -45.0
DEFAULT_OVERLAY_POSITION = 0.5
DEFAULT_OVERLAY_OPACITY = 0.8

# Bold faces tried in order before falling back to Pillow's bundled font
BOLD_FONT_CANDIDATES = (
    "DejaVuSans-Bold.ttf",
    "Arial Bold.ttf",
    "arialbd.ttf",
    "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
    "LiberationSans-Bold.ttf",
)

# Rendering
SUPERSAMPLE_FACTOR = 4
RGBA_MODE = "RGBA"
MASK_MODE = "L"

# Luma weights (Rec. 709) used by the saturation stage
LUMA_WEIGHTS = (0.2125, 0.7154, 0.0721)

# Slider debounce delay in seconds
DEFAULT_DEBOUNCE_DELAY = 0.3

# Platform names (also the per-platform output folder names)
PLATFORM_IOS = "iOS"
PLATFORM_MACOS = "macOS"
PLATFORM_WATCHOS = "watchOS"
PLATFORM_ANDROID = "Android"
PLATFORM_WEB = "Web"
UNIFIED_APPLE_FOLDER = "Apple"

# Output layout
OUTPUT_FOLDER_PREFIX = "AppIcons-"
DEFAULT_OUTPUT_FORMAT = "PNG"
PNG_MIME_TYPE = "image/png"

# Manifests
CONTENTS_JSON_FILENAME = "Contents.json"
WEB_MANIFEST_FILENAME = "manifest.json"
MANIFEST_AUTHOR = "AppIconGenerator"
MANIFEST_VERSION = 1
JSON_INDENT = 2
DEFAULT_APP_NAME = "My App"
DEFAULT_APP_SHORT_NAME = "App"
DEFAULT_THEME_COLOR = "#ffffff"
DEFAULT_MANIFEST_BACKGROUND_COLOR = "#ffffff"
DEFAULT_DISPLAY_MODE = "standalone"

# Preferences file field names
FIELD_IOS = "ios"
FIELD_MACOS = "macos"
FIELD_WATCHOS = "watchos"
FIELD_ANDROID = "android"
FIELD_WEB = "web"
FIELD_UNIFIED_APPLE = "unified_apple"
FIELD_OUTPUT_FOLDER = "output_folder"
FIELD_MANIFEST_NAME = "manifest_name"
FIELD_MANIFEST_SHORT_NAME = "manifest_short_name"
PREFERENCES_FILENAME = "preferences.json"
