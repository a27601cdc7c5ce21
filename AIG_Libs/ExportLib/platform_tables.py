"""
Static icon size tables for every supported platform.

Each table is an ordered tuple of PlatformSizeSpec entries; the order is
the order files are written and listed in manifests. Apple file names
carry platform-specific prefixes (iPhone_, iPad_, icon_, AppIcon) so the
three Apple tables can share one folder without overwriting each other.

Functions:
    get_platform_specs: Size table for a platform name
    platform_names: All platform names in export order
    normalize_platform: Canonical spelling of a platform name
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from AIG_Libs.constants import (
    PLATFORM_IOS,
    PLATFORM_MACOS,
    PLATFORM_WATCHOS,
    PLATFORM_ANDROID,
    PLATFORM_WEB,
)


@dataclass(frozen=True)
class PlatformSizeSpec:
    """One icon file a platform expects.

    Attributes:
        filename: File name relative to the platform folder (may contain a sub-folder)
        pixel_size: Width and height of the PNG in pixels
        idiom: Device family tag used in manifests ("iphone", "mac", ...)
        scale: Density tag ("1x", "2x", ...)
        size: Logical size tag ("20x20", "83.5x83.5", ...)
        manifest_icon: Listed in the web app manifest
    """
    filename: str
    pixel_size: int
    idiom: str
    scale: str
    size: str
    manifest_icon: bool = False


def _apple(name: str, pixel_size: int, idiom: str, scale: str, size: str) -> PlatformSizeSpec:
    return PlatformSizeSpec(f"{name}.png", pixel_size, idiom, scale, size)


IOS_SPECS: Tuple[PlatformSizeSpec, ...] = (
    _apple("iPhone_20pt@2x", 40, "iphone", "2x", "20x20"),
    _apple("iPhone_20pt@3x", 60, "iphone", "3x", "20x20"),
    _apple("iPhone_29pt@2x", 58, "iphone", "2x", "29x29"),
    _apple("iPhone_29pt@3x", 87, "iphone", "3x", "29x29"),
    _apple("iPhone_40pt@2x", 80, "iphone", "2x", "40x40"),
    _apple("iPhone_40pt@3x", 120, "iphone", "3x", "40x40"),
    _apple("iPhone_60pt@2x", 120, "iphone", "2x", "60x60"),
    _apple("iPhone_60pt@3x", 180, "iphone", "3x", "60x60"),
    _apple("iPad_20pt", 20, "ipad", "1x", "20x20"),
    _apple("iPad_20pt@2x", 40, "ipad", "2x", "20x20"),
    _apple("iPad_29pt", 29, "ipad", "1x", "29x29"),
    _apple("iPad_29pt@2x", 58, "ipad", "2x", "29x29"),
    _apple("iPad_40pt", 40, "ipad", "1x", "40x40"),
    _apple("iPad_40pt@2x", 80, "ipad", "2x", "40x40"),
    _apple("iPad_76pt", 76, "ipad", "1x", "76x76"),
    _apple("iPad_76pt@2x", 152, "ipad", "2x", "76x76"),
    _apple("iPad_83.5pt@2x", 167, "ipad", "2x", "83.5x83.5"),
    _apple("App_Store_1024pt", 1024, "ios-marketing", "1x", "1024x1024"),
)

MACOS_SPECS: Tuple[PlatformSizeSpec, ...] = (
    _apple("icon_16x16", 16, "mac", "1x", "16x16"),
    _apple("icon_16x16@2x", 32, "mac", "2x", "16x16"),
    _apple("icon_32x32", 32, "mac", "1x", "32x32"),
    _apple("icon_32x32@2x", 64, "mac", "2x", "32x32"),
    _apple("icon_128x128", 128, "mac", "1x", "128x128"),
    _apple("icon_128x128@2x", 256, "mac", "2x", "128x128"),
    _apple("icon_256x256", 256, "mac", "1x", "256x256"),
    _apple("icon_256x256@2x", 512, "mac", "2x", "256x256"),
    _apple("icon_512x512", 512, "mac", "1x", "512x512"),
    _apple("icon_512x512@2x", 1024, "mac", "2x", "512x512"),
)

WATCHOS_SPECS: Tuple[PlatformSizeSpec, ...] = (
    _apple("AppIcon24x24@2x", 48, "watch", "2x", "24x24"),
    _apple("AppIcon27.5x27.5@2x", 55, "watch", "2x", "27.5x27.5"),
    _apple("AppIcon29x29@2x", 58, "watch", "2x", "29x29"),
    _apple("AppIcon29x29@3x", 87, "watch", "3x", "29x29"),
    _apple("AppIcon40x40@2x", 80, "watch", "2x", "40x40"),
    _apple("AppIcon44x44@2x", 88, "watch", "2x", "44x44"),
    _apple("AppIcon50x50@2x", 100, "watch", "2x", "50x50"),
    _apple("AppIcon86x86@2x", 172, "watch", "2x", "86x86"),
    _apple("AppIcon98x98@2x", 196, "watch", "2x", "98x98"),
    _apple("AppIcon108x108@2x", 216, "watch", "2x", "108x108"),
)

# Launcher icons are 48dp; the density bucket sets the multiplier
_ANDROID_DENSITIES = (
    ("mdpi", 48, "1x"),
    ("hdpi", 72, "1.5x"),
    ("xhdpi", 96, "2x"),
    ("xxhdpi", 144, "3x"),
    ("xxxhdpi", 192, "4x"),
)

ANDROID_SPECS: Tuple[PlatformSizeSpec, ...] = tuple(
    PlatformSizeSpec(f"mipmap-{bucket}/ic_launcher.png", pixels, "android", scale, "48x48")
    for bucket, pixels, scale in _ANDROID_DENSITIES
) + (
    PlatformSizeSpec("ic_launcher-playstore.png", 512, "android-playstore", "1x", "512x512"),
)

WEB_SPECS: Tuple[PlatformSizeSpec, ...] = tuple(
    PlatformSizeSpec(f"favicon-{pixels}x{pixels}.png", pixels, "web", "1x", f"{pixels}x{pixels}")
    for pixels in (16, 32, 48, 64)
) + (
    PlatformSizeSpec("apple-touch-icon.png", 180, "web", "1x", "180x180"),
    PlatformSizeSpec("icon-192x192.png", 192, "web", "1x", "192x192", manifest_icon=True),
    PlatformSizeSpec("icon-512x512.png", 512, "web", "1x", "512x512", manifest_icon=True),
)

PLATFORM_TABLES: Dict[str, Tuple[PlatformSizeSpec, ...]] = {
    PLATFORM_IOS: IOS_SPECS,
    PLATFORM_MACOS: MACOS_SPECS,
    PLATFORM_WATCHOS: WATCHOS_SPECS,
    PLATFORM_ANDROID: ANDROID_SPECS,
    PLATFORM_WEB: WEB_SPECS,
}

APPLE_PLATFORMS: Tuple[str, ...] = (PLATFORM_IOS, PLATFORM_MACOS, PLATFORM_WATCHOS)

_CANONICAL_NAMES = {name.lower(): name for name in PLATFORM_TABLES}


def platform_names() -> List[str]:
    """Return all platform names in export order."""
    return list(PLATFORM_TABLES)


def normalize_platform(name: str) -> str:
    """
    Return the canonical spelling of a platform name.

    Raises:
        ValueError: If the name is not a known platform
    """
    canonical: Optional[str] = _CANONICAL_NAMES.get(str(name).strip().lower())
    if canonical is None:
        raise ValueError(
            f"Unknown platform: {name}. Expected one of: {', '.join(PLATFORM_TABLES)}"
        )
    return canonical


def get_platform_specs(name: str) -> Tuple[PlatformSizeSpec, ...]:
    """Return the ordered size table for a platform (case-insensitive)."""
    return PLATFORM_TABLES[normalize_platform(name)]


def is_apple_platform(name: str) -> bool:
    return normalize_platform(name) in APPLE_PLATFORMS
