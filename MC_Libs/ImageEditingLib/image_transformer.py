"""
Image Transformer.

Applies a CropDescription to a bitmap: optional rotation onto an expanded
transparent canvas, extraction of the rounded crop rect, and optional
clipping of the result to the mask outline.

Rotation and extraction cost time proportional to the pixel count. They are
meant to run once per committed crop, never on every interaction frame.

Example:
    >>> from PIL import Image
    >>> img = Image.open("photo.jpg")
    >>> description = CropDescription(rect=Rect(10, 10, 200, 200))
    >>> cropped = crop_image(img, description)
    >>> cropped.size
    (200, 200)

Functions:
    rotate_image: Rotate around the centre onto a canvas fitting the rotated bounds
    remap_rect_for_rotation: Where a rect lands after rotate_image
    round_rect: Round a float rect to clamped integer pixel bounds
    apply_mask: Clip an image to an outline path fitted to its bounds
    crop_image: Rotate, extract and optionally mask in one call
"""

from typing import Any, Optional, Tuple
import logging
import math

from PIL import Image, ImageChops

from MC_Libs.constants import (
    ANGLE_EPSILON,
    DEFAULT_MASK_SUPERSAMPLING,
    DEFAULT_ROTATION_RESAMPLE,
)
from MC_Libs.errors import BitmapCreationError, ExtractionOutOfBoundsError
from MC_Libs.GeometryLib.crop_state import CropDescription, TWO_PI, normalize_angle
from MC_Libs.GeometryLib.outline_path import OutlinePath
from MC_Libs.GeometryLib.primitives import Rect, Size, bounding_rect, rotate_point

logger = logging.getLogger(__name__)

PixelBox = Tuple[int, int, int, int]

_RESAMPLE_FILTERS = {
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
}


def _is_zero_angle(angle: float) -> bool:
    angle = normalize_angle(angle)
    return angle < ANGLE_EPSILON or TWO_PI - angle < ANGLE_EPSILON


def _require_image(image: Any) -> None:
    if not isinstance(image, Image.Image):
        raise TypeError(f"Expected PIL Image, got {type(image)}")


def rotate_image(image: Any, angle: float, resample: str = DEFAULT_ROTATION_RESAMPLE) -> Any:
    """
    Rotate an image clockwise (on screen) around its centre.

    The output canvas is the axis-aligned bounding box of the rotated
    image. Pixels outside the rotated footprint are transparent, so images
    without alpha are converted to RGBA first.

    Args:
        image: PIL Image
        angle: Rotation in radians, positive = clockwise
        resample: "bilinear" or "bicubic"

    Returns:
        New PIL Image (an unchanged copy when angle is 0)

    Raises:
        TypeError: If image is not a PIL Image
        ValueError: If resample is unknown
        BitmapCreationError: If the rotated canvas cannot be allocated
    """
    _require_image(image)

    if resample not in _RESAMPLE_FILTERS:
        raise ValueError(f"Unsupported resample filter: {resample}")

    if _is_zero_angle(angle):
        return image.copy()

    # snap float noise so quarter turns hit Pillow's exact transpose path
    degrees = round(math.degrees(normalize_angle(angle)), 9)

    try:
        source = image if image.mode == "RGBA" else image.convert("RGBA")
        rotated = source.rotate(-degrees, resample=_RESAMPLE_FILTERS[resample], expand=True)
    except (MemoryError, OSError) as e:
        raise BitmapCreationError(f"Failed to rotate bitmap by {degrees} degrees: {e}") from e

    logger.debug(
        f"Rotated {image.size[0]}x{image.size[1]} by {degrees} degrees -> "
        f"{rotated.size[0]}x{rotated.size[1]}"
    )
    return rotated


def remap_rect_for_rotation(rect: Rect, source_size: Size, rotated_size: Size, angle: float) -> Rect:
    """
    Map a rect from source space into the canvas produced by rotate_image.

    The rect's corners are rotated around the source centre, moved to the
    rotated canvas centre, and re-bounded to an axis-aligned rect.
    """
    source_center = Rect.from_size(source_size).center
    rotated_center = Rect.from_size(rotated_size).center
    dx = rotated_center.x - source_center.x
    dy = rotated_center.y - source_center.y
    corners = [rotate_point(corner, source_center, angle).offset(dx, dy) for corner in rect.corners()]
    return bounding_rect(corners)


def round_rect(rect: Rect, bounds_size: Tuple[int, int]) -> PixelBox:
    """
    Round a rect to integer pixel edges clamped to the bitmap.

    Each edge is rounded half-up independently, so the result may differ
    from the float rect by up to one pixel per edge.

    Returns:
        (left, top, right, bottom) suitable for Image.crop
    """
    width, height = bounds_size

    def _round(value: float, upper: int) -> int:
        return min(max(int(math.floor(value + 0.5)), 0), upper)

    return (
        _round(rect.min_x, width),
        _round(rect.min_y, height),
        _round(rect.max_x, width),
        _round(rect.max_y, height),
    )


def apply_mask(image: Any, mask_path: OutlinePath, supersample: int = DEFAULT_MASK_SUPERSAMPLING) -> Any:
    """
    Clip an image to a mask outline.

    The outline is scaled and translated so its bounds match the image
    bounds, rasterised, and multiplied into the alpha channel.

    Args:
        image: PIL Image
        mask_path: Outline in any coordinate space
        supersample: Anti-aliasing factor for the mask

    Returns:
        New RGBA PIL Image, transparent outside the outline
    """
    _require_image(image)

    fitted = mask_path.fitted_to(Rect(0, 0, image.size[0], image.size[1]))
    try:
        mask = fitted.render_mask(image.size, supersample=supersample)
        masked = image.convert("RGBA")
        masked.putalpha(ImageChops.multiply(masked.getchannel("A"), mask))
    except (MemoryError, OSError) as e:
        raise BitmapCreationError(f"Failed to apply mask: {e}") from e
    return masked


def crop_image(
    image: Any,
    description: CropDescription,
    apply_mask_to_output: bool = False,
    mask_path: Optional[OutlinePath] = None,
    resample: str = DEFAULT_ROTATION_RESAMPLE,
    supersample: int = DEFAULT_MASK_SUPERSAMPLING,
) -> Any:
    """
    Produce the cropped bitmap for a crop description.

    Steps:
        1. Rotate the image when the description has an angle, and remap
           the crop rect into the rotated canvas.
        2. Round the rect to pixel bounds and extract it.
        3. Optionally clip the result to `mask_path`.

    A rotated crop keeps the axis-aligned bounding box of the rotated rect,
    so it can be larger than the framed area. When masking, the outline is
    fitted to that bounding box rather than to the framed area; a square
    mask rotated by pi/4 therefore clips nothing.

    Args:
        image: Orientation-normalised PIL Image
        description: Crop rect (bitmap space), angle and zoom
        apply_mask_to_output: Clip the result to the mask outline
        mask_path: Mask outline, required when masking
        resample: Rotation filter, "bilinear" or "bicubic"
        supersample: Anti-aliasing factor for the mask

    Returns:
        New PIL Image

    Raises:
        TypeError: If image is not a PIL Image
        ValueError: If masking is requested without a mask path
        ExtractionOutOfBoundsError: If the rounded rect is empty after clamping
        BitmapCreationError: If a new bitmap cannot be allocated
    """
    _require_image(image)

    if apply_mask_to_output and mask_path is None:
        raise ValueError("apply_mask_to_output requires a mask_path")

    source = image
    rect = description.rect
    if not _is_zero_angle(description.rotation_angle):
        source = rotate_image(image, description.rotation_angle, resample=resample)
        rect = remap_rect_for_rotation(
            rect,
            Size.of_image(image),
            Size.of_image(source),
            description.rotation_angle,
        )

    box = round_rect(rect, source.size)
    left, top, right, bottom = box
    if right <= left or bottom <= top:
        raise ExtractionOutOfBoundsError(
            f"Crop rect {rect.as_tuple()} rounds to an empty region {box} "
            f"in a {source.size[0]}x{source.size[1]} bitmap"
        )

    try:
        cropped = source.crop(box)
    except (MemoryError, OSError) as e:
        raise BitmapCreationError(f"Failed to extract {box}: {e}") from e

    if apply_mask_to_output:
        cropped = apply_mask(cropped, mask_path, supersample=supersample)

    logger.debug(f"Cropped {box} from {source.size[0]}x{source.size[1]} (masked={apply_mask_to_output})")
    return cropped
