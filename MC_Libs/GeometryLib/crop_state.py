"""
Crop State Extractor.

Turns the live pan/zoom/rotate state of the image surface into a canonical
CropDescription: a rect in the original bitmap's pixel space plus the
rotation angle and zoom scale. Everything here is pure and cheap, so it can
be called on every frame while the user drags.

Coordinate model:
    The image surface is a scrollable view whose frame origin sits at
    `surface_origin` in container coordinates. A container point `p` shows
    the content point `p - surface_origin + content_offset`. Content is the
    bitmap drawn at `content_size` (bitmap size * zoom scale unless the
    caller says otherwise).

Classes:
    TransformState: Live offset / zoom / rotation of the image surface
    CropDescription: Crop rect in bitmap space + angle + zoom

Functions:
    normalize_angle: Wrap an angle into [0, 2*pi)
    extract_crop_description: Map the mask through the transform into bitmap space
    fitting_zoom_scale: Zoom at which the bitmap fits or fills the mask
    zoom_range: Effective [min, max] zoom for a bitmap, mask and config
    centered_transform: Transform that centres the bitmap under the mask
    constrain_transform: Clamp zoom, rotation and (optionally) offset
    zoom_to_rect: Transform that makes a container-space rect fill the mask
"""

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional, Tuple
import logging
import math

from MC_Libs.config import CropperConfig
from MC_Libs.constants import DEFAULT_MAXIMUM_ZOOM_MULTIPLIER
from MC_Libs.errors import DegenerateGeometryError
from MC_Libs.GeometryLib.primitives import Point, Rect, Size

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi

ZoomBounds = Tuple[float, float]


def normalize_angle(angle: float) -> float:
    """Wrap `angle` (radians) into [0, 2*pi)."""
    wrapped = float(angle) % TWO_PI
    if wrapped >= TWO_PI:
        return 0.0
    return wrapped


@dataclass(frozen=True)
class TransformState:
    """
    Live state of the pannable/zoomable image surface.

    Attributes:
        content_offset: Content point shown at the surface origin
        zoom_scale: Zoom scale (> 0 for usable states)
        rotation_angle: Rotation in radians, normalised to [0, 2*pi)
        content_size: Displayed content size (None = bitmap size * zoom_scale)
    """
    content_offset: Point = Point()
    zoom_scale: float = 1.0
    rotation_angle: float = 0.0
    content_size: Optional[Size] = None

    def __post_init__(self):
        object.__setattr__(self, "rotation_angle", normalize_angle(self.rotation_angle))

    def clamped(self, minimum: float, maximum: float) -> "TransformState":
        """Copy with the zoom scale clamped to [minimum, maximum]."""
        zoom = min(max(self.zoom_scale, minimum), maximum)
        if zoom == self.zoom_scale:
            return self
        content_size = self.content_size
        if content_size is not None and self.zoom_scale > 0:
            content_size = content_size.scaled(zoom / self.zoom_scale)
        return replace(self, zoom_scale=zoom, content_size=content_size)

    def without_rotation(self) -> "TransformState":
        if self.rotation_angle == 0.0:
            return self
        return replace(self, rotation_angle=0.0)

    def displayed_content_size(self, bitmap_size: Size) -> Size:
        if self.content_size is not None:
            return self.content_size
        return bitmap_size.scaled(self.zoom_scale)


@dataclass(frozen=True)
class CropDescription:
    """
    Canonical crop: what to cut from the original bitmap.

    Attributes:
        rect: Crop rect in original-bitmap pixels (not rounded)
        rotation_angle: Rotation in radians
        zoom_scale: Zoom scale the crop was framed at
    """
    rect: Rect
    rotation_angle: float = 0.0
    zoom_scale: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


def _require_positive_zoom(zoom_scale: float) -> None:
    if not math.isfinite(zoom_scale) or zoom_scale <= 0:
        raise DegenerateGeometryError(f"zoom_scale must be > 0, got {zoom_scale}")


def _content_ratio(transform: TransformState, bitmap_size: Size) -> Tuple[float, float]:
    """Displayed content pixels per bitmap pixel, per axis."""
    _require_positive_zoom(transform.zoom_scale)

    if bitmap_size.is_empty:
        raise DegenerateGeometryError(f"Bitmap size must be non-empty, got {bitmap_size.as_tuple()}")

    content_size = transform.displayed_content_size(bitmap_size)
    if content_size.is_empty:
        raise DegenerateGeometryError(f"Content size must be non-empty, got {content_size.as_tuple()}")

    return content_size.width / bitmap_size.width, content_size.height / bitmap_size.height


def extract_crop_description(
    transform: TransformState,
    mask_rect: Rect,
    bitmap_size: Size,
    avoid_empty_space: bool = False,
    surface_origin: Point = Point(),
) -> CropDescription:
    """
    Compute the crop description for what is currently visible under the mask.

    The mask rect is mapped into content coordinates through the pan offset,
    then divided by the content/bitmap ratio to land in bitmap pixels. The
    result is intersected with the bitmap bounds. When `avoid_empty_space`
    is on the movement constraints should already keep the mask covered;
    the intersection only guards against exposed canvas.

    Args:
        transform: Live state of the image surface
        mask_rect: Mask rect in container coordinates
        bitmap_size: Size of the (orientation-normalised) original bitmap
        avoid_empty_space: Whether empty space around the image is being avoided
        surface_origin: Origin of the surface frame in container coordinates

    Returns:
        CropDescription with an unrounded rect

    Raises:
        DegenerateGeometryError: If zoom <= 0, the mask has no area or the content is empty
    """
    if mask_rect.is_empty:
        raise DegenerateGeometryError(f"Mask rect must have a non-zero area, got {mask_rect.as_tuple()}")

    ratio_x, ratio_y = _content_ratio(transform, bitmap_size)

    content_x = mask_rect.min_x - surface_origin.x + transform.content_offset.x
    content_y = mask_rect.min_y - surface_origin.y + transform.content_offset.y
    visible = Rect(
        content_x / ratio_x,
        content_y / ratio_y,
        mask_rect.width / ratio_x,
        mask_rect.height / ratio_y,
    )

    rect = visible.intersection(Rect.from_size(bitmap_size))
    if avoid_empty_space and rect != visible:
        logger.debug(f"Mask exposes empty space; clamped {visible.as_tuple()} to {rect.as_tuple()}")

    return CropDescription(
        rect=rect,
        rotation_angle=transform.rotation_angle,
        zoom_scale=transform.zoom_scale,
    )


def fitting_zoom_scale(bitmap_size: Size, mask_rect: Rect, avoid_empty_space: bool = False) -> float:
    """
    Zoom scale at which the bitmap fills (avoid_empty_space) or fits the mask.

    Raises:
        DegenerateGeometryError: If the bitmap or mask is empty
    """
    if bitmap_size.is_empty or mask_rect.is_empty:
        raise DegenerateGeometryError("Bitmap and mask must both have a non-zero area")
    scale_x = mask_rect.width / bitmap_size.width
    scale_y = mask_rect.height / bitmap_size.height
    return max(scale_x, scale_y) if avoid_empty_space else min(scale_x, scale_y)


def zoom_range(bitmap_size: Size, mask_rect: Rect, config: CropperConfig) -> ZoomBounds:
    """Effective (minimum, maximum) zoom scale for a session."""
    fill_scale = fitting_zoom_scale(bitmap_size, mask_rect, avoid_empty_space=True)

    minimum = config.minimum_zoom_scale
    if minimum is None:
        minimum = fitting_zoom_scale(bitmap_size, mask_rect, config.avoid_empty_space)
    if config.avoid_empty_space:
        minimum = max(minimum, fill_scale)

    maximum = config.maximum_zoom_scale
    if maximum is None:
        maximum = minimum * DEFAULT_MAXIMUM_ZOOM_MULTIPLIER
    return minimum, max(maximum, minimum)


def centered_transform(
    bitmap_size: Size,
    mask_rect: Rect,
    zoom_scale: float,
    surface_origin: Point = Point(),
    rotation_angle: float = 0.0,
) -> TransformState:
    """Transform at `zoom_scale` that puts the bitmap centre under the mask centre."""
    content = bitmap_size.scaled(zoom_scale)
    mask_center = mask_rect.center
    offset = Point(
        content.width * 0.5 - (mask_center.x - surface_origin.x),
        content.height * 0.5 - (mask_center.y - surface_origin.y),
    )
    return TransformState(content_offset=offset, zoom_scale=zoom_scale, rotation_angle=rotation_angle)


def _clamp_axis(offset: float, lower: float, upper: float) -> float:
    if lower > upper:
        return (lower + upper) * 0.5
    return min(max(offset, lower), upper)


def constrain_transform(
    transform: TransformState,
    mask_rect: Rect,
    bitmap_size: Size,
    zoom_bounds: ZoomBounds,
    rotation_enabled: bool = False,
    avoid_empty_space: bool = False,
    surface_origin: Point = Point(),
) -> TransformState:
    """
    Apply the interaction invariants to a raw transform.

    - the zoom scale is clamped to `zoom_bounds`
    - the rotation angle is forced to 0 when rotation is disabled
    - with `avoid_empty_space`, the offset is clamped so the unrotated content
      covers the mask (centred on an axis where the content is too small)

    Raises:
        DegenerateGeometryError: If the incoming zoom scale is not finite or <= 0
    """
    _require_positive_zoom(transform.zoom_scale)
    state = transform.clamped(*zoom_bounds)
    if not rotation_enabled:
        state = state.without_rotation()

    if avoid_empty_space:
        content = state.displayed_content_size(bitmap_size)
        offset_x = _clamp_axis(
            state.content_offset.x,
            surface_origin.x - mask_rect.min_x,
            content.width - (mask_rect.max_x - surface_origin.x),
        )
        offset_y = _clamp_axis(
            state.content_offset.y,
            surface_origin.y - mask_rect.min_y,
            content.height - (mask_rect.max_y - surface_origin.y),
        )
        state = replace(state, content_offset=Point(offset_x, offset_y))

    return state


def zoom_to_rect(
    transform: TransformState,
    rect: Rect,
    mask_rect: Rect,
    bitmap_size: Size,
    zoom_bounds: ZoomBounds,
    surface_origin: Point = Point(),
) -> TransformState:
    """
    Transform that zooms so the image area under `rect` fills the mask.

    Args:
        transform: Current transform
        rect: Area to zoom to, in container coordinates
        mask_rect: Mask rect in container coordinates
        bitmap_size: Size of the original bitmap
        zoom_bounds: (minimum, maximum) zoom scale
        surface_origin: Origin of the surface frame in container coordinates

    Raises:
        DegenerateGeometryError: If `rect` does not cover any of the image
    """
    target = extract_crop_description(transform, rect, bitmap_size, surface_origin=surface_origin).rect
    if target.is_empty:
        raise DegenerateGeometryError(f"Rect {rect.as_tuple()} does not cover any part of the image")

    ratio_x, ratio_y = _content_ratio(transform, bitmap_size)
    base_x = ratio_x / transform.zoom_scale
    base_y = ratio_y / transform.zoom_scale

    zoom = min(mask_rect.width / (target.width * base_x), mask_rect.height / (target.height * base_y))
    zoom = min(max(zoom, zoom_bounds[0]), zoom_bounds[1])

    new_ratio_x = base_x * zoom
    new_ratio_y = base_y * zoom
    content_size = None
    if transform.content_size is not None:
        content_size = bitmap_size.scaled(new_ratio_x, new_ratio_y)

    target_center = target.center
    mask_center = mask_rect.center
    offset = Point(
        target_center.x * new_ratio_x - (mask_center.x - surface_origin.x),
        target_center.y * new_ratio_y - (mask_center.y - surface_origin.y),
    )
    return TransformState(
        content_offset=offset,
        zoom_scale=zoom,
        rotation_angle=transform.rotation_angle,
        content_size=content_size,
    )
