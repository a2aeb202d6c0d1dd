"""
Pytest configuration and shared fixtures for Mask Cropper tests.

This module provides shared test fixtures and helpers used across
multiple test modules.
"""

import io

import pytest
from PIL import Image

from MC_Libs.GeometryLib.outline_path import OutlinePath
from MC_Libs.GeometryLib.primitives import Rect


def make_pattern_image(width=40, height=30, mode="RGB"):
    """Image where (almost) every pixel has a distinct color."""
    img = Image.new("RGB", (width, height))
    img.putdata([
        ((x * 5) % 256, (y * 7) % 256, (x * 3 + y * 11) % 256)
        for y in range(height)
        for x in range(width)
    ])
    return img.convert(mode) if mode != "RGB" else img


def make_oriented_image(image, orientation):
    """Round-trip `image` through PNG with an EXIF orientation tag."""
    exif = Image.Exif()
    exif[0x0112] = orientation
    buffer = io.BytesIO()
    image.save(buffer, format="PNG", exif=exif.tobytes())
    buffer.seek(0)
    reopened = Image.open(buffer)
    reopened.load()
    return reopened


def pixels(image):
    return list(image.getdata())


class StaticGeometryProvider:
    """Custom geometry provider returning fixed geometry and counting queries."""

    def __init__(self, mask_rect, mask_path=None, movement_rect=None):
        self.mask_rect = mask_rect
        self.mask_path = mask_path if mask_path is not None else OutlinePath.rectangle(mask_rect)
        self.movement_rect = movement_rect if movement_rect is not None else mask_rect
        self.mask_queries = 0
        self.movement_queries = 0
        self.contexts = []

    def custom_mask(self, context):
        self.mask_queries += 1
        self.contexts.append(context)
        return self.mask_rect, self.mask_path

    def custom_movement_rect(self, context):
        self.movement_queries += 1
        self.contexts.append(context)
        return self.movement_rect


@pytest.fixture
def square_image():
    """A 400x400 RGB image with distinct-ish pixel colors."""
    return make_pattern_image(400, 400)


@pytest.fixture
def portrait_container():
    """The 400x700 portrait crop view used in the layout scenarios."""
    return Rect(0, 0, 400, 700)
