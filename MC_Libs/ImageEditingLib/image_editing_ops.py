"""
File-level image operations for Mask Cropper.

This module loads images from disk in upright orientation and saves crop
results, for the command line tool and other file-based callers.

Functions:
    load_image: Open an image file and normalise its orientation
    save_image: Save an image to disk, PNG by default
"""

from pathlib import Path
from typing import Any, Optional

from PIL import Image, UnidentifiedImageError

from MC_Libs.constants import DEFAULT_OUTPUT_FORMAT
from MC_Libs.ImageEditingLib.orientation import normalize_orientation


def load_image(path: Path) -> Any:
    """
    Load an image and bake its EXIF orientation into the pixels.

    Args:
        path: Path to an image file

    Returns:
        Upright PIL Image

    Raises:
        FileNotFoundError: If the file does not exist
        IOError: If the file is not a readable image
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Image file not found: {path}")

    try:
        with Image.open(path) as img:
            img.load()
            return normalize_orientation(img)
    except UnidentifiedImageError as e:
        raise IOError(f"Failed to load image from {path}: {str(e)}") from e


def save_image(image: Any, output_path: Path, save_format: Optional[str] = None) -> Path:
    """
    Save an image to disk.

    Images with transparency can only be kept in formats that support
    alpha, so PNG is the default.

    Args:
        image: PIL Image to save
        output_path: Destination file path
        save_format: Image format (default: PNG)

    Returns:
        The path the image was written to

    Raises:
        OSError: If the output directory does not exist or is not a directory
    """
    output_path = Path(output_path)
    output_dir = output_path.parent

    if not output_dir.exists():
        raise OSError(f"Output directory does not exist: {output_dir}")

    if not output_dir.is_dir():
        raise OSError(f"Output path is not a directory: {output_dir}")

    image.save(output_path, format=(save_format or DEFAULT_OUTPUT_FORMAT).upper())
    return output_path
