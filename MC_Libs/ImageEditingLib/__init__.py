"""
ImageEditingLib - Bitmap operations

This module provides orientation normalisation, rotation, cropping and
masking of bitmaps, plus file helpers, for the Mask Cropper project.
"""

from MC_Libs.ImageEditingLib.image_models import CropResult, RgbaColor
from MC_Libs.ImageEditingLib.orientation import get_orientation, normalize_orientation
from MC_Libs.ImageEditingLib.image_transformer import (
    rotate_image,
    remap_rect_for_rotation,
    round_rect,
    apply_mask,
    crop_image,
)
from MC_Libs.ImageEditingLib.image_editing_ops import load_image, save_image

__all__ = [
    "CropResult",
    "RgbaColor",
    "get_orientation",
    "normalize_orientation",
    "rotate_image",
    "remap_rect_for_rotation",
    "round_rect",
    "apply_mask",
    "crop_image",
    "load_image",
    "save_image",
]
