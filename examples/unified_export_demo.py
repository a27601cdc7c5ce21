"""
Icon Export Examples

Demonstrates editing a generated logo and exporting it, first per
platform and then as a unified Apple icon set.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from PIL import Image, ImageDraw
from AIG_Libs.ExportLib.icon_export import ExportJob, PlatformSelection, run_export_job
from AIG_Libs.ImageEditingLib.edit_pipeline import apply_edits
from AIG_Libs.ImageEditingLib.image_models import (
    BorderSettings,
    EditParameters,
    OverlaySettings,
    ShapeSettings,
)
import tempfile


def make_logo() -> Image.Image:
    """Draw a simple 512x512 logo with a transparent background."""
    logo = Image.new("RGBA", (512, 512), (0, 0, 0, 0))
    draw = ImageDraw.Draw(logo)
    draw.ellipse((64, 64, 448, 448), fill=(255, 149, 0, 255))
    draw.rectangle((200, 160, 312, 352), fill=(255, 255, 255, 255))
    return logo


def example_per_platform(output_root: Path):
    """Example: one folder per platform."""
    print("=" * 60)
    print("Example 1: Per-platform export")
    print("=" * 60)

    params = EditParameters(
        saturation=0.2,
        shape=ShapeSettings(kind="rounded", corner_radius_percent=22.0),
        padding_percent=8.0,
    )
    edited = apply_edits(make_logo(), params)

    result = run_export_job(ExportJob(image=edited, output_root=output_root))
    print(f"Output folder: {result.output_folder}")
    for platform in result.platforms:
        manifest = platform.manifest_path.name if platform.manifest_path else "no manifest"
        print(f"  {platform.platform:8} {len(platform.written):3} files, {manifest}")
    print()


def example_unified_apple(output_root: Path):
    """Example: iOS, macOS and watchOS sharing one Apple folder."""
    print("=" * 60)
    print("Example 2: Unified Apple export with a BETA badge")
    print("=" * 60)

    params = EditParameters(
        shape=ShapeSettings(kind="circle"),
        border=BorderSettings(enabled=True, width_px=6.0),
        overlay=OverlaySettings(kind="beta", font_size=72.0),
    )
    edited = apply_edits(make_logo(), params)

    selection = PlatformSelection(android=False, web=False, unified_apple=True)
    result = run_export_job(ExportJob(image=edited, output_root=output_root, selection=selection))

    apple = result.platforms[0]
    print(f"✓ {len(apple.written)} files in {apple.folder}")
    print(f"✓ Shared manifest: {apple.manifest_path}")
    if result.all_failed:
        for failure in result.all_failed:
            print(f"✗ {failure.path}: {failure.reason}")
    print()


if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as temp_dir:
        root = Path(temp_dir)
        example_per_platform(root)
        example_unified_apple(root)
