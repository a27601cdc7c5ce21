"""
Pytest configuration and shared fixtures for App Icon Generator tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest
from PIL import Image

from AIG_Libs.ImageEditingLib.image_models import EditParameters


@pytest.fixture
def output_root(tmp_path):
    """
    Provide a temporary directory to export icon sets into.

    Args:
        tmp_path: Pytest's built-in temporary directory fixture

    Returns:
        Path object pointing to an existing, empty directory
    """
    root = tmp_path / "exports"
    root.mkdir()
    return root


@pytest.fixture
def solid_image():
    """64x64 opaque mid-blue square."""
    return Image.new("RGBA", (64, 64), (40, 90, 200, 255))


@pytest.fixture
def gradient_image():
    """
    96x64 image with a horizontal red ramp, a vertical green ramp and a
    fully transparent left column.
    """
    image = Image.new("RGBA", (96, 64))
    pixels = image.load()
    for x in range(96):
        for y in range(64):
            alpha = 0 if x == 0 else 255
            pixels[x, y] = (x * 255 // 95, y * 255 // 63, 128, alpha)
    return image


@pytest.fixture
def source_png(tmp_path, solid_image):
    """Path to the solid image saved as a PNG file."""
    path = tmp_path / "source.png"
    solid_image.save(path, format="PNG")
    return path


@pytest.fixture
def default_params():
    return EditParameters.defaults()
