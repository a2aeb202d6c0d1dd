"""
Mask Cropper command line tool.

Crops an image through a circle or square mask the same way the interactive
crop screen does, using either the initial centred framing or an explicit
zoom/offset/rotation.

Usage:
    python mask_cropper.py input.jpg output.png
    python mask_cropper.py input.jpg output.png --mode square --apply-mask
    python mask_cropper.py input.jpg output.png --zoom 0.5 --offset 120 40 --rotation 15
"""

from pathlib import Path
import argparse
import logging
import math
import sys

from MC_Libs.config import CropperConfig
from MC_Libs.constants import DEFAULT_CONTAINER_SIZE
from MC_Libs.errors import CropperError
from MC_Libs.CropSessionLib.crop_session import ImageCropSession
from MC_Libs.GeometryLib.crop_modes import crop_mode_from_name
from MC_Libs.GeometryLib.crop_state import TransformState
from MC_Libs.GeometryLib.primitives import Point, Rect
from MC_Libs.ImageEditingLib.image_editing_ops import load_image, save_image


def _parse_container(value: str):
    try:
        width, height = (float(part) for part in value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Container must look like 400x700, got {value!r}")
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"Container size must be positive, got {value!r}")
    return width, height


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Crop an image through a circle or square mask.")
    parser.add_argument("input", type=Path, help="Image to crop")
    parser.add_argument("output", type=Path, help="Where to write the cropped PNG")
    parser.add_argument("--mode", default="circle", choices=["circle", "square"], help="Mask shape")
    parser.add_argument("--landscape", action="store_true", help="Use landscape insets")
    parser.add_argument(
        "--container",
        type=_parse_container,
        default=DEFAULT_CONTAINER_SIZE,
        help="Crop view size as WIDTHxHEIGHT (default: 400x700)",
    )
    parser.add_argument("--zoom", type=float, help="Zoom scale (default: fill the mask)")
    parser.add_argument("--offset", type=float, nargs=2, metavar=("X", "Y"), help="Content offset")
    parser.add_argument("--rotation", type=float, default=0.0, help="Rotation in degrees, clockwise")
    parser.add_argument("--apply-mask", action="store_true", help="Make pixels outside the mask transparent")
    parser.add_argument("--avoid-empty-space", action="store_true", help="Keep the image covering the mask")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    return parser


def main(argv=None) -> int:
    """Main function to run the crop tool."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = CropperConfig(
        rotation_enabled=args.rotation != 0,
        avoid_empty_space=args.avoid_empty_space,
        apply_mask_to_cropped_image=args.apply_mask,
    )

    try:
        image = load_image(args.input)
        session = ImageCropSession(image, crop_mode_from_name(args.mode), config)

        width, height = args.container
        layout = session.layout(Rect(0, 0, width, height), is_portrait=not args.landscape)

        transform = session.initial_transform(layout)
        if args.zoom is not None or args.offset is not None or args.rotation:
            transform = TransformState(
                content_offset=Point(*args.offset) if args.offset else transform.content_offset,
                zoom_scale=args.zoom if args.zoom is not None else transform.zoom_scale,
                rotation_angle=math.radians(args.rotation),
            )

        result = session.commit(transform, layout)
        save_image(result.image, args.output)
    except (CropperError, OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    x, y, w, h = result.description.rect.as_tuple()
    print(f"Cropped rect ({x:.1f}, {y:.1f}, {w:.1f}, {h:.1f}) at zoom {result.description.zoom_scale:.3f}")
    print(f"Saved cropped image to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
