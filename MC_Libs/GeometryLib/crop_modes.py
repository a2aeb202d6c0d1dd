"""
Crop modes.

A crop mode is a small tagged variant: CircleMode and SquareMode are built
in, CustomMode carries the provider that supplies the mask and movement
geometry. A CustomMode without a provider cannot be constructed.

Classes:
    CropMode: Enumeration of mode kinds
    LayoutContext: What a custom provider is told about the current layout
    CustomGeometryProvider: Protocol for external mask/movement geometry
    CircleMode, SquareMode, CustomMode: The mode variants

Functions:
    crop_mode_from_name: Build a built-in mode from "circle" / "square"
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Tuple, Union, runtime_checkable

from MC_Libs.errors import InvalidCustomGeometryError
from MC_Libs.GeometryLib.outline_path import OutlinePath
from MC_Libs.GeometryLib.primitives import Rect


class CropMode(Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    CUSTOM = "custom"


@dataclass(frozen=True)
class LayoutContext:
    """
    Current layout, passed to custom geometry providers on every query.

    Attributes:
        container_bounds: Bounds of the crop view
        is_portrait: True in portrait orientation
    """
    container_bounds: Rect
    is_portrait: bool = True


@runtime_checkable
class CustomGeometryProvider(Protocol):
    """Supplies geometry for CropMode.CUSTOM."""

    def custom_mask(self, context: LayoutContext) -> Tuple[Rect, OutlinePath]:
        """Mask rect and mask outline, in container coordinates."""
        ...

    def custom_movement_rect(self, context: LayoutContext) -> Rect:
        """Rect within which the image may be moved, in container coordinates."""
        ...


@dataclass(frozen=True)
class CircleMode:
    @property
    def kind(self) -> CropMode:
        return CropMode.CIRCLE


@dataclass(frozen=True)
class SquareMode:
    @property
    def kind(self) -> CropMode:
        return CropMode.SQUARE


@dataclass(frozen=True)
class CustomMode:
    """
    Custom mask shape supplied by an external provider.

    The provider is only borrowed for queries; nothing else is kept about it.

    Raises:
        InvalidCustomGeometryError: If provider is missing or lacks the query methods
    """
    provider: CustomGeometryProvider

    def __post_init__(self):
        if self.provider is None:
            raise InvalidCustomGeometryError("Custom crop mode requires a geometry provider")
        if not isinstance(self.provider, CustomGeometryProvider):
            raise InvalidCustomGeometryError(
                f"Geometry provider must implement custom_mask() and custom_movement_rect(), "
                f"got {type(self.provider).__name__}"
            )

    @property
    def kind(self) -> CropMode:
        return CropMode.CUSTOM


CropModeVariant = Union[CircleMode, SquareMode, CustomMode]


def crop_mode_from_name(name: str) -> CropModeVariant:
    """
    Build a built-in crop mode from its name.

    Args:
        name: "circle" or "square" (case-insensitive)

    Raises:
        ValueError: For unknown names; custom mode needs a provider
    """
    normalized = str(name).strip().lower()
    if normalized == CropMode.CIRCLE.value:
        return CircleMode()
    if normalized == CropMode.SQUARE.value:
        return SquareMode()
    if normalized == CropMode.CUSTOM.value:
        raise ValueError("Custom crop mode must be constructed with CustomMode(provider)")
    raise ValueError(f"Unknown crop mode: {name}. Must be 'circle' or 'square'")
