"""
Unit tests for crop modes and the mask geometry resolver.
"""

import pytest

from conftest import StaticGeometryProvider
from MC_Libs.config import MaskInsets
from MC_Libs.errors import DegenerateGeometryError, InvalidCustomGeometryError
from MC_Libs.GeometryLib.crop_modes import (
    CircleMode,
    CropMode,
    CustomMode,
    LayoutContext,
    SquareMode,
    crop_mode_from_name,
)
from MC_Libs.GeometryLib.mask_resolver import allowed_band, builtin_mask_rect, resolve_mask
from MC_Libs.GeometryLib.outline_path import CubicSegment, OutlinePath
from MC_Libs.GeometryLib.primitives import Rect


class TestCropModes:
    """Tests for the crop mode variants."""

    def test_kinds(self):
        assert CircleMode().kind is CropMode.CIRCLE
        assert SquareMode().kind is CropMode.SQUARE
        assert CustomMode(StaticGeometryProvider(Rect(0, 0, 10, 10))).kind is CropMode.CUSTOM

    def test_custom_mode_without_provider(self):
        with pytest.raises(InvalidCustomGeometryError):
            CustomMode(None)

    def test_custom_mode_with_incomplete_provider(self):
        class MaskOnly:
            def custom_mask(self, context):
                return Rect(0, 0, 10, 10), OutlinePath.rectangle(Rect(0, 0, 10, 10))

        with pytest.raises(InvalidCustomGeometryError):
            CustomMode(MaskOnly())

    @pytest.mark.parametrize("name,expected", [
        ("circle", CircleMode()),
        ("Square", SquareMode()),
        (" CIRCLE ", CircleMode()),
    ])
    def test_crop_mode_from_name(self, name, expected):
        assert crop_mode_from_name(name) == expected

    @pytest.mark.parametrize("name", ["custom", "triangle", ""])
    def test_crop_mode_from_bad_name(self, name):
        with pytest.raises(ValueError):
            crop_mode_from_name(name)


class TestBuiltinMasks:
    """Tests for circle and square mask rects."""

    def test_portrait_circle(self, portrait_container):
        mask_rect, mask_path = resolve_mask(CircleMode(), portrait_container, is_portrait=True)

        assert mask_rect == Rect(15, 166.5, 370, 370)
        assert mask_path == OutlinePath.ellipse(mask_rect)

    def test_portrait_square(self, portrait_container):
        mask_rect, mask_path = resolve_mask(SquareMode(), portrait_container, is_portrait=True)

        assert mask_rect == Rect(20, 171.5, 360, 360)
        assert mask_path == OutlinePath.rectangle(mask_rect)

    def test_landscape_circle(self):
        mask_rect, _ = resolve_mask(CircleMode(), Rect(0, 0, 700, 400), is_portrait=False)

        assert mask_rect == Rect(241, 81, 218, 218)

    def test_container_origin_is_respected(self):
        mask_rect, _ = resolve_mask(CircleMode(), Rect(10, 20, 400, 700), is_portrait=True)

        assert mask_rect == Rect(25, 186.5, 370, 370)

    def test_square_corner_radius(self, portrait_container):
        _, mask_path = resolve_mask(SquareMode(), portrait_container, square_corner_radius=30)

        assert any(isinstance(s, CubicSegment) for s in mask_path.subpaths[0].segments)

    @pytest.mark.parametrize("mode", [CircleMode(), SquareMode()])
    @pytest.mark.parametrize("size,is_portrait", [
        ((400, 700), True),
        ((320, 568), True),
        ((700, 400), False),
        ((1024, 768), False),
        ((500, 500), True),
    ])
    def test_builtin_mask_is_centred_square_inside_band(self, mode, size, is_portrait):
        container = Rect(0, 0, *size)
        band = allowed_band(container, is_portrait)

        mask_rect, _ = resolve_mask(mode, container, is_portrait=is_portrait)

        assert mask_rect.width == pytest.approx(mask_rect.height)
        assert mask_rect.center.x == pytest.approx(band.center.x)
        assert mask_rect.center.y == pytest.approx(band.center.y)
        assert band.contains_rect(mask_rect)
        assert container.contains_rect(mask_rect)

    def test_custom_insets(self, portrait_container):
        insets = MaskInsets(portrait_circle_inset=0, portrait_label_top_space=0, label_height=0,
                            portrait_button_bottom_space=0, button_height=0)

        mask_rect, _ = resolve_mask(CircleMode(), portrait_container, insets=insets)

        assert mask_rect == Rect(0, 150, 400, 400)

    def test_container_too_short(self):
        with pytest.raises(DegenerateGeometryError):
            resolve_mask(CircleMode(), Rect(0, 0, 400, 120), is_portrait=True)

    def test_inset_eats_whole_band(self):
        with pytest.raises(DegenerateGeometryError):
            builtin_mask_rect(Rect(0, 0, 20, 20), 10)


class TestCustomMask:
    """Tests for custom mask geometry."""

    def test_provider_geometry_is_returned(self, portrait_container):
        rect = Rect(50, 100, 300, 200)
        path = OutlinePath.ellipse(rect)
        provider = StaticGeometryProvider(rect, mask_path=path)

        mask_rect, mask_path = resolve_mask(CustomMode(provider), portrait_container, is_portrait=False)

        assert mask_rect == rect
        assert mask_path is path
        assert provider.contexts == [LayoutContext(portrait_container, False)]

    def test_provider_is_queried_each_time(self, portrait_container):
        provider = StaticGeometryProvider(Rect(50, 100, 300, 200))
        mode = CustomMode(provider)

        resolve_mask(mode, portrait_container)
        resolve_mask(mode, portrait_container)

        assert provider.mask_queries == 2

    def test_empty_custom_rect(self, portrait_container):
        provider = StaticGeometryProvider(Rect(50, 50, 0, 100))

        with pytest.raises(InvalidCustomGeometryError):
            resolve_mask(CustomMode(provider), portrait_container)

    def test_custom_rect_outside_container(self, portrait_container):
        provider = StaticGeometryProvider(Rect(300, 600, 200, 200))

        with pytest.raises(InvalidCustomGeometryError):
            resolve_mask(CustomMode(provider), portrait_container)

    def test_custom_path_without_subpaths(self, portrait_container):
        provider = StaticGeometryProvider(Rect(50, 50, 100, 100), mask_path=OutlinePath())

        with pytest.raises(InvalidCustomGeometryError):
            resolve_mask(CustomMode(provider), portrait_container)
