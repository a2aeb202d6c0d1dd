"""
Crop session.

ImageCropSession ties the engine together for a single image: it normalises
the image once when accepted, resolves layout geometry on demand, keeps the
live transform within the configured limits, reports the live crop
description and renders the final crop on commit.

The session never holds on to the presentation layer. Delegates are passed
to commit()/cancel() per call, and custom geometry providers are only
queried while resolving a layout.

Example:
    >>> session = ImageCropSession(Image.open("photo.jpg"), CircleMode())
    >>> layout = session.layout(Rect(0, 0, 400, 700), is_portrait=True)
    >>> transform = session.initial_transform(layout)
    >>> result = session.commit(transform, layout)
    >>> result.image.size, result.description.rect

Classes:
    CropLayout: Mask rect, mask path and movement rect for one layout pass
    CropDelegate: Protocol for commit/cancel notifications
    ImageCropSession: Session facade
"""

from dataclasses import dataclass
from typing import Any, Optional, Protocol
import logging

from PIL import Image

from MC_Libs.config import CropperConfig
from MC_Libs.GeometryLib.crop_modes import CircleMode, CropModeVariant
from MC_Libs.GeometryLib.crop_state import (
    CropDescription,
    TransformState,
    ZoomBounds,
    centered_transform,
    constrain_transform,
    extract_crop_description,
    zoom_range,
    zoom_to_rect,
)
from MC_Libs.GeometryLib.mask_resolver import resolve_mask
from MC_Libs.GeometryLib.movement_resolver import resolve_movement_rect
from MC_Libs.GeometryLib.outline_path import OutlinePath
from MC_Libs.GeometryLib.primitives import Rect, Size
from MC_Libs.ImageEditingLib.image_models import CropResult
from MC_Libs.ImageEditingLib.image_transformer import crop_image
from MC_Libs.ImageEditingLib.orientation import normalize_orientation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CropLayout:
    """
    Geometry for one layout pass, in container coordinates.

    The movement rect is the frame of the image surface; transform offsets
    are measured from its origin.
    """
    container_bounds: Rect
    is_portrait: bool
    mask_rect: Rect
    mask_path: OutlinePath
    movement_rect: Rect


class CropDelegate(Protocol):
    """Receives crop notifications. Every method is optional."""

    def will_crop_image(self, original: Any) -> None:
        ...

    def did_crop_image(self, cropped: Any, description: CropDescription) -> None:
        ...

    def did_cancel_crop(self) -> None:
        ...


def _notify(delegate: Optional[Any], method: str, *args: Any) -> None:
    callback = getattr(delegate, method, None) if delegate is not None else None
    if callable(callback):
        callback(*args)


class ImageCropSession:
    """
    Crop workflow for one image.

    Args:
        image: The image to crop (orientation is normalised on construction)
        crop_mode: CircleMode(), SquareMode() or CustomMode(provider)
        config: Engine configuration

    Raises:
        TypeError: If image is not a PIL Image
        BitmapCreationError: If the normalised image cannot be allocated
    """

    def __init__(
        self,
        image: Any,
        crop_mode: Optional[CropModeVariant] = None,
        config: Optional[CropperConfig] = None,
    ):
        self._original = normalize_orientation(image)
        self.crop_mode = crop_mode if crop_mode is not None else CircleMode()
        self.config = config if config is not None else CropperConfig()

    @property
    def original_image(self) -> Image.Image:
        """The orientation-normalised original. Treat as read-only."""
        return self._original

    @property
    def image_size(self) -> Size:
        return Size.of_image(self._original)

    # ------------------------------------------------------------------
    # Geometry (pure, safe to call every frame)
    # ------------------------------------------------------------------

    def layout(self, container_bounds: Rect, is_portrait: bool = True) -> CropLayout:
        """Resolve mask and movement geometry for the current mode and bounds."""
        mask_rect, mask_path = resolve_mask(
            self.crop_mode,
            container_bounds,
            is_portrait,
            self.config.insets,
            self.config.square_corner_radius,
        )
        movement_rect = resolve_movement_rect(
            self.crop_mode,
            mask_rect,
            container_bounds,
            is_portrait,
            self.config.insets,
        )
        return CropLayout(
            container_bounds=container_bounds,
            is_portrait=is_portrait,
            mask_rect=mask_rect,
            mask_path=mask_path,
            movement_rect=movement_rect,
        )

    def zoom_range(self, layout: CropLayout) -> ZoomBounds:
        return zoom_range(self.image_size, layout.mask_rect, self.config)

    def initial_transform(self, layout: CropLayout) -> TransformState:
        """Transform that shows the image filling the mask, centred."""
        minimum, maximum = self.zoom_range(layout)
        fill = max(
            layout.mask_rect.width / self.image_size.width,
            layout.mask_rect.height / self.image_size.height,
        )
        zoom = min(max(fill, minimum), maximum)
        return centered_transform(
            self.image_size,
            layout.mask_rect,
            zoom,
            surface_origin=layout.movement_rect.origin,
        )

    def constrain(self, transform: TransformState, layout: CropLayout) -> TransformState:
        """Apply zoom limits, the rotation switch and empty-space avoidance."""
        return constrain_transform(
            transform,
            layout.mask_rect,
            self.image_size,
            self.zoom_range(layout),
            rotation_enabled=self.config.rotation_enabled,
            avoid_empty_space=self.config.avoid_empty_space,
            surface_origin=layout.movement_rect.origin,
        )

    def zoom_to_rect(self, rect: Rect, transform: TransformState, layout: CropLayout) -> TransformState:
        """Transform that makes the image area under `rect` fill the mask."""
        zoomed = zoom_to_rect(
            transform,
            rect,
            layout.mask_rect,
            self.image_size,
            self.zoom_range(layout),
            surface_origin=layout.movement_rect.origin,
        )
        return self.constrain(zoomed, layout)

    def crop_description(self, transform: TransformState, layout: CropLayout) -> CropDescription:
        """Live crop description for a (constrained) transform."""
        return extract_crop_description(
            self.constrain(transform, layout),
            layout.mask_rect,
            self.image_size,
            avoid_empty_space=self.config.avoid_empty_space,
            surface_origin=layout.movement_rect.origin,
        )

    # ------------------------------------------------------------------
    # Commit / cancel
    # ------------------------------------------------------------------

    def commit(
        self,
        transform: TransformState,
        layout: CropLayout,
        delegate: Optional[CropDelegate] = None,
    ) -> CropResult:
        """
        Render the final crop.

        Args:
            transform: Live transform sampled from the image surface
            layout: Layout the transform was sampled in
            delegate: Optional receiver of will_crop_image/did_crop_image

        Returns:
            CropResult with the cropped image and its crop description

        Raises:
            DegenerateGeometryError: If the transform or mask is degenerate
            ExtractionOutOfBoundsError: If the mask does not cover any pixels
            BitmapCreationError: If an output bitmap cannot be allocated
        """
        description = self.crop_description(transform, layout)
        _notify(delegate, "will_crop_image", self._original)

        cropped = crop_image(
            self._original,
            description,
            apply_mask_to_output=self.config.apply_mask_to_cropped_image,
            mask_path=layout.mask_path,
            resample=self.config.rotation_resample,
            supersample=self.config.mask_supersampling,
        )
        logger.info(
            f"Cropped {self.crop_mode.kind.value} region {description.rect.as_tuple()} "
            f"-> {cropped.size[0]}x{cropped.size[1]}"
        )

        _notify(delegate, "did_crop_image", cropped, description)
        return CropResult(image=cropped, description=description)

    def cancel(self, delegate: Optional[CropDelegate] = None) -> None:
        _notify(delegate, "did_cancel_crop")
