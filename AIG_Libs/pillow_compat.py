"""
Compatibility wrapper to import Pillow (which provides the `PIL` namespace)
from one place.

This module loads the Pillow-provided modules via importlib and re-exports the
symbols the library uses: `Image`, `ImageChops`, `ImageColor`, `ImageDraw`
and `ImageFont`. Importing from `pillow_compat` keeps the Pillow surface the
library depends on listed in a single module.
"""
from importlib import import_module
from types import ModuleType
from typing import Optional


def _import(name: str) -> Optional[ModuleType]:
    try:
        return import_module(name)
    except ImportError:
        return None


_pil_image = _import("PIL.Image")

if _pil_image is None:
    raise ImportError("pillow (PIL) is required: install with 'pip install Pillow'")

Image = _pil_image
ImageChops = import_module("PIL.ImageChops")
ImageColor = import_module("PIL.ImageColor")
ImageDraw = import_module("PIL.ImageDraw")
ImageFont = import_module("PIL.ImageFont")

LANCZOS = _pil_image.Resampling.LANCZOS
BICUBIC = _pil_image.Resampling.BICUBIC
