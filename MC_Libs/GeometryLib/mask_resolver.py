"""
Mask Geometry Resolver.

Computes the mask rect and mask outline for the current crop mode and
layout. Circle and square masks share one rect derivation: the largest
square centred in the band left free by the "Move and Scale" label and
the buttons, shrunk by a per-orientation edge inset. Custom masks come
from the mode's provider and are validated against the container.

Functions:
    allowed_band: Container bounds minus the label and button bands
    builtin_mask_rect: Centred square mask rect for a given inset
    resolve_mask: Mask rect and outline path for any crop mode
"""

from typing import Optional, Tuple
import logging

from MC_Libs.config import MaskInsets
from MC_Libs.errors import DegenerateGeometryError, InvalidCustomGeometryError
from MC_Libs.GeometryLib.crop_modes import CropMode, CropModeVariant, LayoutContext
from MC_Libs.GeometryLib.outline_path import OutlinePath
from MC_Libs.GeometryLib.primitives import Rect

logger = logging.getLogger(__name__)

_DEFAULT_INSETS = MaskInsets()


def allowed_band(container_bounds: Rect, is_portrait: bool, insets: MaskInsets = _DEFAULT_INSETS) -> Rect:
    """
    Part of the container not reserved for the label (top) and buttons (bottom).

    Raises:
        DegenerateGeometryError: If the reserved bands leave no room
    """
    top = container_bounds.min_y + insets.reserved_top(is_portrait)
    bottom = container_bounds.max_y - insets.reserved_bottom(is_portrait)
    if bottom <= top or container_bounds.width <= 0:
        raise DegenerateGeometryError(
            f"Container {container_bounds.as_tuple()} leaves no room between the label and button bands"
        )
    return Rect.from_edges(container_bounds.min_x, top, container_bounds.max_x, bottom)


def builtin_mask_rect(band: Rect, edge_inset: float) -> Rect:
    """Largest square centred in `band`, inset by `edge_inset` on every side."""
    side = min(band.width, band.height) - edge_inset * 2
    if side <= 0:
        raise DegenerateGeometryError(
            f"Edge inset {edge_inset} leaves no mask area in band {band.as_tuple()}"
        )
    center = band.center
    return Rect(center.x - side * 0.5, center.y - side * 0.5, side, side)


def resolve_mask(
    mode: CropModeVariant,
    container_bounds: Rect,
    is_portrait: bool = True,
    insets: MaskInsets = _DEFAULT_INSETS,
    square_corner_radius: float = 0.0,
) -> Tuple[Rect, OutlinePath]:
    """
    Resolve the mask rect and outline for a crop mode.

    Args:
        mode: CircleMode, SquareMode or CustomMode
        container_bounds: Bounds of the crop view
        is_portrait: Orientation, selects which insets apply
        insets: Layout constants
        square_corner_radius: Corner radius for the square mask (0 = sharp)

    Returns:
        (mask_rect, mask_path) in container coordinates

    Raises:
        DegenerateGeometryError: If the built-in mask would have no area
        InvalidCustomGeometryError: If custom geometry is empty or leaves the container
    """
    kind = mode.kind

    if kind is CropMode.CUSTOM:
        context = LayoutContext(container_bounds=container_bounds, is_portrait=is_portrait)
        mask_rect, mask_path = mode.provider.custom_mask(context)
        _validate_custom_mask(mask_rect, mask_path, container_bounds)
        logger.debug(f"Resolved custom mask rect: {mask_rect.as_tuple()}")
        return mask_rect, mask_path

    band = allowed_band(container_bounds, is_portrait, insets)

    if kind is CropMode.CIRCLE:
        mask_rect = builtin_mask_rect(band, insets.circle_edge_inset(is_portrait))
        mask_path = OutlinePath.ellipse(mask_rect)
    elif kind is CropMode.SQUARE:
        mask_rect = builtin_mask_rect(band, insets.square_edge_inset(is_portrait))
        mask_path = OutlinePath.rounded_rectangle(mask_rect, square_corner_radius)
    else:
        raise ValueError(f"Unsupported crop mode: {kind}")

    logger.debug(f"Resolved {kind.value} mask rect: {mask_rect.as_tuple()}")
    return mask_rect, mask_path


def _validate_custom_mask(mask_rect: Optional[Rect], mask_path: Optional[OutlinePath], container_bounds: Rect) -> None:
    if not isinstance(mask_rect, Rect) or mask_rect.is_empty:
        raise InvalidCustomGeometryError(f"Custom mask rect must be non-empty, got {mask_rect}")

    if not container_bounds.contains_rect(mask_rect):
        raise InvalidCustomGeometryError(
            f"Custom mask rect {mask_rect.as_tuple()} is not contained in "
            f"container bounds {container_bounds.as_tuple()}"
        )

    if not isinstance(mask_path, OutlinePath) or not mask_path.subpaths:
        raise InvalidCustomGeometryError("Custom mask path must contain at least one sub-path")
