"""
App Icon Generator command line entry point.

Loads a source image, applies the requested edits and writes a complete
icon set for the selected platforms:

    python app_icon_generator.py logo.png --output ./out --platforms ios web \\
        --shape rounded --corner-radius 22 --overlay beta

Exit codes:
    0  every file was written
    1  the export did not run (bad arguments, unreadable image, output
       folder could not be created)
    2  the export ran but some files could not be written
"""

import argparse
import logging
import sys
import tempfile
from pathlib import Path
from typing import List, Optional

from AIG_Libs.constants import (
    DEFAULT_APP_NAME,
    DEFAULT_APP_SHORT_NAME,
    DEFAULT_BORDER_WIDTH_PX,
    DEFAULT_CORNER_RADIUS_PERCENT,
    DEFAULT_OVERLAY_FONT_SIZE,
    DEFAULT_OVERLAY_OPACITY,
    DEFAULT_OVERLAY_POSITION,
    DEFAULT_OVERLAY_ROTATION,
    DEFAULT_TINT_INTENSITY,
    OVERLAY_NONE,
)
from AIG_Libs.errors import IconGeneratorError, ImageDecodeError
from AIG_Libs.ExportLib.icon_export import ExportJob, PlatformSelection, run_export_job
from AIG_Libs.ExportLib.manifest_generator import ManifestOptions
from AIG_Libs.ExportLib.platform_tables import platform_names
from AIG_Libs.ImageEditingLib.edit_pipeline import apply_edits
from AIG_Libs.ImageEditingLib.image_models import (
    OVERLAY_KINDS,
    SHAPE_KINDS,
    BackgroundSettings,
    BorderSettings,
    EditParameters,
    OverlaySettings,
    ShapeSettings,
    TintSettings,
)
from AIG_Libs.SessionLib.icon_session import decode_image

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PARTIAL = 2

logger = logging.getLogger("app_icon_generator")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="app_icon_generator",
        description="Generate iOS, macOS, watchOS, Android and Web app icons from one image.",
    )
    parser.add_argument("source", type=Path, help="Source image file")
    parser.add_argument(
        "--output", "-o", type=Path, default=None,
        help="Folder to create the AppIcons-<timestamp> folder in (default: system temp folder)",
    )
    parser.add_argument(
        "--platforms", nargs="+", metavar="PLATFORM",
        default=[name.lower() for name in platform_names()],
        help="Platforms to export (default: all of %(default)s)",
    )
    parser.add_argument(
        "--unified-apple", action="store_true",
        help="Write all Apple platforms into one Apple folder with a shared Contents.json",
    )

    adjust = parser.add_argument_group("adjustments")
    adjust.add_argument("--brightness", type=float, default=0.0, help="-0.5 to 0.5")
    adjust.add_argument("--contrast", type=float, default=0.0, help="-0.5 to 0.5")
    adjust.add_argument("--saturation", type=float, default=0.0, help="-1.0 to 1.0")
    adjust.add_argument("--hue", type=float, default=0.0, help="-0.5 to 0.5")
    adjust.add_argument("--tint", metavar="COLOR", default=None, help="Tint colour, e.g. '#007aff'")
    adjust.add_argument("--tint-intensity", type=float, default=DEFAULT_TINT_INTENSITY, help="0.0 to 1.0")

    shape = parser.add_argument_group("shape")
    shape.add_argument("--shape", choices=SHAPE_KINDS, default="square")
    shape.add_argument(
        "--corner-radius", type=float, default=DEFAULT_CORNER_RADIUS_PERCENT,
        help="Corner radius in percent of the shorter side (rounded shape)",
    )
    shape.add_argument("--padding", type=float, default=0.0, help="Padding in percent, 0 to 45")
    shape.add_argument("--background", metavar="COLOR", default=None, help="Opaque background colour")
    shape.add_argument("--border", metavar="COLOR", default=None, help="Border colour")
    shape.add_argument("--border-width", type=float, default=DEFAULT_BORDER_WIDTH_PX, help="Border width in pixels")

    overlay = parser.add_argument_group("text overlay")
    overlay.add_argument("--overlay", choices=OVERLAY_KINDS, default=OVERLAY_NONE)
    overlay.add_argument("--overlay-text", default="", help="Text for --overlay custom")
    overlay.add_argument("--overlay-color", metavar="COLOR", default=None)
    overlay.add_argument("--overlay-size", type=float, default=DEFAULT_OVERLAY_FONT_SIZE)
    overlay.add_argument("--overlay-rotation", type=float, default=DEFAULT_OVERLAY_ROTATION)
    overlay.add_argument("--overlay-position", type=float, default=DEFAULT_OVERLAY_POSITION)
    overlay.add_argument("--overlay-opacity", type=float, default=DEFAULT_OVERLAY_OPACITY)

    manifest = parser.add_argument_group("web manifest")
    manifest.add_argument("--app-name", default=DEFAULT_APP_NAME)
    manifest.add_argument("--short-name", default=DEFAULT_APP_SHORT_NAME)

    parser.add_argument("--verbose", "-v", action="store_true", help="Log every file written")
    return parser


def parameters_from_args(args: argparse.Namespace) -> EditParameters:
    """
    Build EditParameters from parsed arguments.

    Raises:
        ValueError: If a value is out of range or a colour cannot be parsed
    """
    tint = TintSettings(enabled=False)
    if args.tint:
        tint = TintSettings(enabled=True, color=args.tint, intensity=args.tint_intensity)

    background = BackgroundSettings(enabled=False)
    if args.background:
        background = BackgroundSettings(enabled=True, color=args.background)

    border = BorderSettings(enabled=False)
    if args.border:
        border = BorderSettings(enabled=True, width_px=args.border_width, color=args.border)

    overlay_kwargs = dict(
        kind=args.overlay,
        custom_text=args.overlay_text,
        font_size=args.overlay_size,
        rotation_degrees=args.overlay_rotation,
        vertical_position=args.overlay_position,
        opacity=args.overlay_opacity,
    )
    if args.overlay_color:
        overlay_kwargs["color"] = args.overlay_color

    return EditParameters(
        brightness=args.brightness,
        contrast=args.contrast,
        saturation=args.saturation,
        hue=args.hue,
        tint=tint,
        shape=ShapeSettings(kind=args.shape, corner_radius_percent=args.corner_radius),
        padding_percent=args.padding,
        background=background,
        border=border,
        overlay=OverlaySettings(**overlay_kwargs),
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        params = parameters_from_args(args)
        selection = PlatformSelection.from_names(args.platforms, unified_apple=args.unified_apple)
        source = decode_image(args.source)
    except (ValueError, ImageDecodeError) as e:
        logger.error(str(e))
        return EXIT_ERROR

    edited = apply_edits(source, params)
    job = ExportJob(
        image=edited,
        output_root=args.output or Path(tempfile.gettempdir()),
        selection=selection,
        manifest_options=ManifestOptions(name=args.app_name, short_name=args.short_name),
    )

    try:
        result = run_export_job(job)
    except IconGeneratorError as e:
        logger.error(str(e))
        return EXIT_ERROR

    print(result.output_folder)
    if result.all_failed:
        for failure in result.all_failed:
            print(f"FAILED {failure.path}: {failure.reason}", file=sys.stderr)
        return EXIT_PARTIAL
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
