"""
Movement Bounds Resolver.

The movement rect is the frame of the pannable/zoomable surface. For the
built-in masks it is the whole band between the label and the buttons; a
custom provider may supply any rect that still contains the mask.
"""

import logging

from MC_Libs.config import MaskInsets
from MC_Libs.errors import InvalidCustomGeometryError
from MC_Libs.GeometryLib.crop_modes import CropMode, CropModeVariant, LayoutContext
from MC_Libs.GeometryLib.mask_resolver import allowed_band
from MC_Libs.GeometryLib.primitives import Rect

logger = logging.getLogger(__name__)


def resolve_movement_rect(
    mode: CropModeVariant,
    mask_rect: Rect,
    container_bounds: Rect,
    is_portrait: bool = True,
    insets: MaskInsets = MaskInsets(),
) -> Rect:
    """
    Resolve the rect within which the image content may be panned and zoomed.

    Args:
        mode: CircleMode, SquareMode or CustomMode
        mask_rect: The resolved mask rect
        container_bounds: Bounds of the crop view
        is_portrait: Orientation, selects the reserved bands
        insets: Layout constants

    Returns:
        Movement rect in container coordinates

    Raises:
        InvalidCustomGeometryError: If a custom movement rect does not contain the mask
    """
    if mode.kind is CropMode.CUSTOM:
        context = LayoutContext(container_bounds=container_bounds, is_portrait=is_portrait)
        movement_rect = mode.provider.custom_movement_rect(context)
        if not isinstance(movement_rect, Rect) or not movement_rect.contains_rect(mask_rect):
            shown = movement_rect.as_tuple() if isinstance(movement_rect, Rect) else movement_rect
            raise InvalidCustomGeometryError(
                f"Custom movement rect {shown} must contain mask rect {mask_rect.as_tuple()}"
            )
        logger.debug(f"Resolved custom movement rect: {movement_rect.as_tuple()}")
        return movement_rect

    movement_rect = allowed_band(container_bounds, is_portrait, insets)
    logger.debug(f"Resolved {mode.kind.value} movement rect: {movement_rect.as_tuple()}")
    return movement_rect
