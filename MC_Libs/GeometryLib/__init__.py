"""
GeometryLib - Crop geometry for Mask Cropper

This package provides the geometry primitives, mask outline paths, crop
modes, the mask and movement resolvers and the crop state extractor.
"""

from MC_Libs.GeometryLib.primitives import Point, Size, Rect, rotate_point, bounding_rect
from MC_Libs.GeometryLib.outline_path import (
    LineSegment,
    QuadSegment,
    CubicSegment,
    SubPath,
    OutlinePath,
)
from MC_Libs.GeometryLib.crop_modes import (
    CropMode,
    LayoutContext,
    CustomGeometryProvider,
    CircleMode,
    SquareMode,
    CustomMode,
    crop_mode_from_name,
)
from MC_Libs.GeometryLib.mask_resolver import allowed_band, builtin_mask_rect, resolve_mask
from MC_Libs.GeometryLib.movement_resolver import resolve_movement_rect
from MC_Libs.GeometryLib.crop_state import (
    TransformState,
    CropDescription,
    normalize_angle,
    extract_crop_description,
    fitting_zoom_scale,
    zoom_range,
    centered_transform,
    constrain_transform,
    zoom_to_rect,
)

__all__ = [
    "Point",
    "Size",
    "Rect",
    "rotate_point",
    "bounding_rect",
    "LineSegment",
    "QuadSegment",
    "CubicSegment",
    "SubPath",
    "OutlinePath",
    "CropMode",
    "LayoutContext",
    "CustomGeometryProvider",
    "CircleMode",
    "SquareMode",
    "CustomMode",
    "crop_mode_from_name",
    "allowed_band",
    "builtin_mask_rect",
    "resolve_mask",
    "resolve_movement_rect",
    "TransformState",
    "CropDescription",
    "normalize_angle",
    "extract_crop_description",
    "fitting_zoom_scale",
    "zoom_range",
    "centered_transform",
    "constrain_transform",
    "zoom_to_rect",
]
