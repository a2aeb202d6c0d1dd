"""
Unit tests for the crop session.

Tests the full flow from layout through the live crop description to the
committed crop, including delegate notifications and custom geometry.
"""

import math
from unittest.mock import Mock, patch

import pytest

from conftest import StaticGeometryProvider, make_oriented_image, make_pattern_image, pixels
from MC_Libs.config import CropperConfig
from MC_Libs.errors import DegenerateGeometryError, InvalidCustomGeometryError
from MC_Libs.CropSessionLib.crop_session import ImageCropSession
from MC_Libs.GeometryLib.crop_modes import CircleMode, CustomMode, SquareMode
from MC_Libs.GeometryLib.crop_state import TransformState
from MC_Libs.GeometryLib.outline_path import OutlinePath
from MC_Libs.GeometryLib.primitives import Point, Rect, Size


class TestSessionSetup:
    """Tests for session construction."""

    def test_defaults(self, square_image):
        """Should default to a circle mask and the default config."""
        session = ImageCropSession(square_image)

        assert session.crop_mode == CircleMode()
        assert session.config == CropperConfig()
        assert session.image_size == Size(400, 400)

    def test_orientation_normalised_once(self):
        """Should store an upright copy and leave the input untouched."""
        source = make_pattern_image(40, 30)
        oriented = make_oriented_image(source, 6)
        before = pixels(oriented)

        session = ImageCropSession(oriented)

        assert session.original_image.size == (30, 40)
        assert oriented.size == (40, 30)
        assert pixels(oriented) == before

    def test_rejects_non_image(self):
        """Should raise TypeError for non-image input."""
        with pytest.raises(TypeError):
            ImageCropSession("photo.jpg")


class TestSessionGeometry:
    """Tests for layout, framing and the live crop description."""

    def test_layout(self, square_image, portrait_container):
        """Should resolve mask and movement geometry for the container."""
        layout = ImageCropSession(square_image).layout(portrait_container)

        assert layout.mask_rect == Rect(15, 166.5, 370, 370)
        assert layout.movement_rect == Rect(0, 68, 400, 567)
        assert layout.mask_path == OutlinePath.ellipse(layout.mask_rect)
        assert layout.is_portrait

    def test_initial_transform_fills_mask(self, square_image, portrait_container):
        """Should centre the image under the mask at the fill scale."""
        session = ImageCropSession(square_image)
        layout = session.layout(portrait_container)

        transform = session.initial_transform(layout)
        description = session.crop_description(transform, layout)

        assert transform.zoom_scale == pytest.approx(0.925)
        assert transform.content_offset.x == pytest.approx(-15)
        assert transform.content_offset.y == pytest.approx(-98.5)
        assert description.rect.as_tuple() == pytest.approx((0, 0, 400, 400))

    def test_rotation_disabled_forces_zero_angle(self, square_image, portrait_container):
        """Should report angle 0 when rotation is disabled."""
        session = ImageCropSession(square_image)
        layout = session.layout(portrait_container)
        transform = TransformState(content_offset=Point(-15, -98.5), zoom_scale=0.925, rotation_angle=0.5)

        assert session.crop_description(transform, layout).rotation_angle == 0.0

    def test_rotation_enabled_keeps_angle(self, square_image, portrait_container):
        """Should report the live angle when rotation is enabled."""
        session = ImageCropSession(square_image, config=CropperConfig(rotation_enabled=True))
        layout = session.layout(portrait_container)
        transform = TransformState(content_offset=Point(-15, -98.5), zoom_scale=0.925, rotation_angle=0.5)

        assert session.crop_description(transform, layout).rotation_angle == pytest.approx(0.5)

    def test_zoom_clamped_to_range(self, square_image, portrait_container):
        """Should clamp the zoom scale into the session's zoom range."""
        session = ImageCropSession(square_image)
        layout = session.layout(portrait_container)

        constrained = session.constrain(TransformState(zoom_scale=100.0), layout)

        assert constrained.zoom_scale == pytest.approx(session.zoom_range(layout)[1])

    def test_avoid_empty_space_keeps_mask_covered(self, square_image, portrait_container):
        """Should keep the crop rect fully inside the image when avoiding empty space."""
        session = ImageCropSession(square_image, config=CropperConfig(avoid_empty_space=True))
        layout = session.layout(portrait_container)

        description = session.crop_description(TransformState(content_offset=Point(-500, 900)), layout)

        assert description.rect.as_tuple() == pytest.approx((0, 30, 370, 370))
        assert Rect(0, 0, 400, 400).contains_rect(description.rect, tolerance=1e-6)

    def test_zoom_to_rect(self, square_image, portrait_container):
        """Should zoom so the chosen area fills the mask."""
        session = ImageCropSession(square_image)
        layout = session.layout(portrait_container)
        initial = session.initial_transform(layout)

        # the middle half of the mask
        target = layout.mask_rect.inset(92.5)
        zoomed = session.zoom_to_rect(target, initial, layout)

        assert zoomed.zoom_scale == pytest.approx(1.85)
        description = session.crop_description(zoomed, layout)
        assert description.rect.as_tuple() == pytest.approx((100, 100, 200, 200))


class TestSessionCommit:
    """Tests for commit and cancel."""

    def test_commit_returns_crop(self, square_image, portrait_container):
        """Should return the cropped image and the description used."""
        session = ImageCropSession(square_image)
        layout = session.layout(portrait_container)

        result = session.commit(session.initial_transform(layout), layout)

        assert result.image.size == (400, 400)
        assert result.image.mode == "RGB"
        assert result.description.rect.as_tuple() == pytest.approx((0, 0, 400, 400))

    def test_commit_applies_mask(self, square_image, portrait_container):
        """Should clip the output to the mask when configured."""
        session = ImageCropSession(square_image, config=CropperConfig(apply_mask_to_cropped_image=True))
        layout = session.layout(portrait_container)

        result = session.commit(session.initial_transform(layout), layout)

        assert result.image.mode == "RGBA"
        assert result.image.getpixel((0, 0))[3] == 0
        assert result.image.getpixel((200, 200))[3] == 255

    def test_delegate_notified_in_order(self, square_image, portrait_container):
        """Should call will_crop_image before did_crop_image."""
        session = ImageCropSession(square_image, SquareMode())
        layout = session.layout(portrait_container)
        delegate = Mock()

        result = session.commit(session.initial_transform(layout), layout, delegate=delegate)

        assert [name for name, _, _ in delegate.mock_calls] == ["will_crop_image", "did_crop_image"]
        delegate.will_crop_image.assert_called_once_with(session.original_image)
        delegate.did_crop_image.assert_called_once_with(result.image, result.description)

    @pytest.mark.parametrize("zoom", [0.0, -0.5, float("nan")])
    def test_commit_rejects_non_positive_zoom(self, square_image, portrait_container, zoom):
        """Should raise instead of clamping a degenerate zoom up to the minimum."""
        session = ImageCropSession(square_image)
        layout = session.layout(portrait_container)
        delegate = Mock()

        with patch("MC_Libs.CropSessionLib.crop_session.crop_image") as mock_crop:
            with pytest.raises(DegenerateGeometryError):
                session.commit(TransformState(zoom_scale=zoom), layout, delegate=delegate)

            mock_crop.assert_not_called()
        delegate.will_crop_image.assert_not_called()

    def test_live_description_rejects_zero_zoom(self, square_image, portrait_container):
        """Should surface a zero zoom from the live readout as well."""
        session = ImageCropSession(square_image)
        layout = session.layout(portrait_container)

        with pytest.raises(DegenerateGeometryError):
            session.crop_description(TransformState(zoom_scale=0.0), layout)

    def test_delegate_methods_are_optional(self, square_image, portrait_container):
        """Should accept delegates that implement none of the callbacks."""
        session = ImageCropSession(square_image)
        layout = session.layout(portrait_container)

        session.commit(session.initial_transform(layout), layout, delegate=object())
        session.cancel(delegate=object())

    def test_cancel(self, square_image):
        """Should notify the delegate of cancellation."""
        delegate = Mock()

        ImageCropSession(square_image).cancel(delegate)

        delegate.did_cancel_crop.assert_called_once_with()

    def test_commit_does_not_modify_original(self, square_image, portrait_container):
        """Should leave both the input and the session original untouched."""
        before = pixels(square_image)
        session = ImageCropSession(square_image, config=CropperConfig(rotation_enabled=True))
        layout = session.layout(portrait_container)
        transform = TransformState(content_offset=Point(-15, -98.5), zoom_scale=0.925, rotation_angle=math.pi / 6)

        session.commit(transform, layout)

        assert pixels(square_image) == before
        assert pixels(session.original_image) == before

    def test_rotated_commit(self, square_image, portrait_container):
        """Should rotate the image before extracting the crop."""
        session = ImageCropSession(square_image, config=CropperConfig(rotation_enabled=True))
        layout = session.layout(portrait_container)
        transform = TransformState(content_offset=Point(-15, -98.5), zoom_scale=0.925, rotation_angle=math.pi / 2)

        result = session.commit(transform, layout)

        assert result.description.rotation_angle == pytest.approx(math.pi / 2)
        assert result.image.mode == "RGBA"
        assert result.image.size == (400, 400)


class TestCustomGeometrySession:
    """Tests for sessions in custom crop mode."""

    def test_custom_geometry_used(self, square_image, portrait_container):
        """Should use the provider's mask and movement rects."""
        mask_rect = Rect(50, 100, 300, 200)
        provider = StaticGeometryProvider(
            mask_rect,
            mask_path=OutlinePath.ellipse(mask_rect),
            movement_rect=Rect(0, 0, 400, 700),
        )
        session = ImageCropSession(square_image, CustomMode(provider))

        layout = session.layout(portrait_container)

        assert layout.mask_rect == mask_rect
        assert layout.movement_rect == Rect(0, 0, 400, 700)
        assert provider.mask_queries == 1
        assert provider.movement_queries == 1

    def test_custom_commit_masks_with_custom_path(self, square_image, portrait_container):
        """Should clip the output to the custom outline."""
        mask_rect = Rect(50, 100, 300, 200)
        provider = StaticGeometryProvider(
            mask_rect,
            mask_path=OutlinePath.ellipse(mask_rect),
            movement_rect=Rect(0, 0, 400, 700),
        )
        session = ImageCropSession(
            square_image,
            CustomMode(provider),
            CropperConfig(apply_mask_to_cropped_image=True),
        )
        layout = session.layout(portrait_container)

        result = session.commit(TransformState(), layout)

        assert result.image.size == (300, 200)
        assert result.image.getpixel((0, 0))[3] == 0
        assert result.image.getpixel((150, 100))[3] == 255

    def test_invalid_movement_rect_raises_before_cropping(self, square_image, portrait_container):
        """Should reject bad custom geometry without rendering anything."""
        mask_rect = Rect(50, 100, 300, 300)
        provider = StaticGeometryProvider(mask_rect, movement_rect=Rect(60, 100, 100, 100))
        session = ImageCropSession(square_image, CustomMode(provider))

        with patch("MC_Libs.CropSessionLib.crop_session.crop_image") as mock_crop:
            with pytest.raises(InvalidCustomGeometryError):
                layout = session.layout(portrait_container)
                session.commit(TransformState(), layout)

            mock_crop.assert_not_called()
