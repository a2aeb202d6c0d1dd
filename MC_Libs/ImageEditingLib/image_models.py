"""
Image editing data models for Mask Cropper.

This module defines the data structures handed back to callers after a crop.

Classes:
    CropResult: The cropped image together with the description that produced it

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
"""

from dataclasses import dataclass
from typing import Tuple

from PIL import Image

from MC_Libs.GeometryLib.crop_state import CropDescription

RgbaColor = Tuple[int, int, int, int]

TRANSPARENT: RgbaColor = (0, 0, 0, 0)


@dataclass(frozen=True)
class CropResult:
    image: 'Image.Image'
    description: CropDescription
