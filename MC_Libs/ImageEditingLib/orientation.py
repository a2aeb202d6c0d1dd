"""
Orientation normalisation.

Bakes the rotation/mirroring implied by the EXIF Orientation tag into the
pixel buffer so later stages never need to look at metadata. Only axis
permutations and flips are applied, so pixel values are preserved exactly.

Functions:
    get_orientation: Read the EXIF orientation value (1 when absent)
    normalize_orientation: Return an upright copy of an image
"""

from typing import Any
import logging

from PIL import Image, ImageOps

from MC_Libs.constants import EXIF_ORIENTATION_TAG, EXIF_ORIENTATION_UPRIGHT
from MC_Libs.errors import BitmapCreationError

logger = logging.getLogger(__name__)


def get_orientation(image: Any) -> int:
    """
    Get the EXIF orientation of an image.

    Args:
        image: PIL Image

    Returns:
        Orientation value 1-8 (1 = upright, also used when the tag is missing)
    """
    orientation = image.getexif().get(EXIF_ORIENTATION_TAG, EXIF_ORIENTATION_UPRIGHT)
    try:
        orientation = int(orientation)
    except (TypeError, ValueError):
        return EXIF_ORIENTATION_UPRIGHT
    return orientation if 1 <= orientation <= 8 else EXIF_ORIENTATION_UPRIGHT


def normalize_orientation(image: Any) -> Any:
    """
    Return an upright copy of `image`.

    Args:
        image: PIL Image, possibly carrying an EXIF orientation tag

    Returns:
        New PIL Image whose pixels are stored upright, without an orientation tag

    Raises:
        TypeError: If image is not a PIL Image
        BitmapCreationError: If the new pixel buffer cannot be allocated
    """
    if not isinstance(image, Image.Image):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    orientation = get_orientation(image)

    try:
        if orientation == EXIF_ORIENTATION_UPRIGHT:
            return image.copy()

        normalized = ImageOps.exif_transpose(image)
    except (MemoryError, OSError) as e:
        raise BitmapCreationError(f"Failed to allocate normalised bitmap: {e}") from e

    logger.debug(
        f"Normalised orientation {orientation}: {image.size[0]}x{image.size[1]} -> "
        f"{normalized.size[0]}x{normalized.size[1]}"
    )
    return normalized
