"""
Manifest generation for exported icon sets.

Apple platforms get an asset catalog `Contents.json` listing every icon
written; the web export gets a `manifest.json` listing the icons a web app
manifest references. Android has no manifest.

Manifests are built from the list of files actually written in a run, so
a file whose write failed never appears in them.

Classes:
    ManifestOptions: App metadata used in the web manifest

Functions:
    build_contents_json: Asset catalog payload for Apple icons
    build_web_manifest: Web app manifest payload
    write_manifest: Write the manifest for a platform folder
"""

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from AIG_Libs.constants import (
    CONTENTS_JSON_FILENAME,
    DEFAULT_APP_NAME,
    DEFAULT_APP_SHORT_NAME,
    DEFAULT_DISPLAY_MODE,
    DEFAULT_MANIFEST_BACKGROUND_COLOR,
    DEFAULT_THEME_COLOR,
    JSON_INDENT,
    MANIFEST_AUTHOR,
    MANIFEST_VERSION,
    PLATFORM_ANDROID,
    PLATFORM_WEB,
    PNG_MIME_TYPE,
    UNIFIED_APPLE_FOLDER,
    WEB_MANIFEST_FILENAME,
)
from AIG_Libs.ExportLib.platform_tables import APPLE_PLATFORMS, PlatformSizeSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManifestOptions:
    """App metadata written into the web app manifest.

    Attributes:
        name: Full application name
        short_name: Name shown under the home screen icon
        theme_color: Browser UI colour
        background_color: Splash screen background colour
        display: Display mode ("standalone", "fullscreen", ...)
    """
    name: str = DEFAULT_APP_NAME
    short_name: str = DEFAULT_APP_SHORT_NAME
    theme_color: str = DEFAULT_THEME_COLOR
    background_color: str = DEFAULT_MANIFEST_BACKGROUND_COLOR
    display: str = DEFAULT_DISPLAY_MODE

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ManifestOptions":
        filtered = {k: str(v) for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)


def build_contents_json(specs: Iterable[PlatformSizeSpec]) -> Dict[str, Any]:
    """
    Build an asset catalog manifest for Apple icons.

    Args:
        specs: Icons that were written, in file order

    Returns:
        Dictionary with "images" (one record per icon) and "info"
    """
    images = [
        {
            "filename": spec.filename,
            "idiom": spec.idiom,
            "scale": spec.scale,
            "size": spec.size,
        }
        for spec in specs
    ]
    return {
        "images": images,
        "info": {"author": MANIFEST_AUTHOR, "version": MANIFEST_VERSION},
    }


def build_web_manifest(
    specs: Iterable[PlatformSizeSpec],
    options: Optional[ManifestOptions] = None,
) -> Dict[str, Any]:
    """
    Build a web app manifest.

    Only specs flagged as manifest icons are listed; favicons and the
    apple-touch-icon are linked from HTML instead.
    """
    options = options or ManifestOptions()
    icons = [
        {
            "src": spec.filename,
            "sizes": f"{spec.pixel_size}x{spec.pixel_size}",
            "type": PNG_MIME_TYPE,
        }
        for spec in specs
        if spec.manifest_icon
    ]
    return {
        "name": options.name,
        "short_name": options.short_name,
        "icons": icons,
        "theme_color": options.theme_color,
        "background_color": options.background_color,
        "display": options.display,
    }


def manifest_filename(platform: str) -> Optional[str]:
    """Return the manifest file name for a platform folder, or None."""
    if platform in APPLE_PLATFORMS or platform == UNIFIED_APPLE_FOLDER:
        return CONTENTS_JSON_FILENAME
    if platform == PLATFORM_WEB:
        return WEB_MANIFEST_FILENAME
    if platform == PLATFORM_ANDROID:
        return None
    raise ValueError(f"Unknown platform folder: {platform}")


def write_manifest(
    platform: str,
    written_specs: List[PlatformSizeSpec],
    folder: Path,
    options: Optional[ManifestOptions] = None,
) -> Optional[Path]:
    """
    Write the manifest for one platform folder.

    Args:
        platform: Canonical platform name, or the unified Apple folder name
        written_specs: Specs whose files were written, in order
        folder: Platform folder the icons were written into
        options: Web manifest metadata

    Returns:
        Path of the manifest, or None for platforms without one

    Raises:
        OSError: If the manifest cannot be written
    """
    filename = manifest_filename(platform)
    if filename is None:
        return None

    if filename == CONTENTS_JSON_FILENAME:
        payload = build_contents_json(written_specs)
        text = json.dumps(payload, indent=JSON_INDENT, sort_keys=True)
    else:
        payload = build_web_manifest(written_specs, options)
        text = json.dumps(payload, indent=JSON_INDENT)

    folder = Path(folder)
    folder.mkdir(parents=True, exist_ok=True)
    manifest_path = folder / filename
    manifest_path.write_text(text, encoding="utf-8")
    logger.debug(f"Wrote {filename} for {platform} with {len(written_specs)} entries")
    return manifest_path
