"""
Configuration values for the crop engine.

The many individual tunables of a crop screen are grouped into two frozen
dataclasses that are built once and passed around. Defaults come from
MC_Libs.constants.

Classes:
    MaskInsets: Per-orientation insets and reserved label/button bands
    CropperConfig: Complete engine configuration
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from MC_Libs import constants


@dataclass(frozen=True)
class MaskInsets:
    """Layout constants used to derive the built-in mask rects.

    Attributes:
        portrait_circle_inset: Circle mask inset in portrait orientation
        portrait_square_inset: Square mask inset in portrait orientation
        landscape_circle_inset: Circle mask inset in landscape orientation
        landscape_square_inset: Square mask inset in landscape orientation
        portrait_label_top_space: Space above the "Move and Scale" label (portrait)
        landscape_label_top_space: Space above the "Move and Scale" label (landscape)
        portrait_button_bottom_space: Space below the buttons (portrait)
        landscape_button_bottom_space: Space below the buttons (landscape)
        label_height: Height of the "Move and Scale" label
        button_height: Height of the Cancel/Choose buttons
    """
    portrait_circle_inset: float = constants.PORTRAIT_CIRCLE_MASK_INSET
    portrait_square_inset: float = constants.PORTRAIT_SQUARE_MASK_INSET
    landscape_circle_inset: float = constants.LANDSCAPE_CIRCLE_MASK_INSET
    landscape_square_inset: float = constants.LANDSCAPE_SQUARE_MASK_INSET
    portrait_label_top_space: float = constants.PORTRAIT_LABEL_TOP_SPACE
    landscape_label_top_space: float = constants.LANDSCAPE_LABEL_TOP_SPACE
    portrait_button_bottom_space: float = constants.PORTRAIT_BUTTON_BOTTOM_SPACE
    landscape_button_bottom_space: float = constants.LANDSCAPE_BUTTON_BOTTOM_SPACE
    label_height: float = constants.MOVE_AND_SCALE_LABEL_HEIGHT
    button_height: float = constants.BUTTON_HEIGHT

    def __post_init__(self):
        for name, value in asdict(self).items():
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")

    def circle_edge_inset(self, is_portrait: bool) -> float:
        return self.portrait_circle_inset if is_portrait else self.landscape_circle_inset

    def square_edge_inset(self, is_portrait: bool) -> float:
        return self.portrait_square_inset if is_portrait else self.landscape_square_inset

    def reserved_top(self, is_portrait: bool) -> float:
        """Height of the band above the mask kept free for the label."""
        top_space = self.portrait_label_top_space if is_portrait else self.landscape_label_top_space
        return top_space + self.label_height

    def reserved_bottom(self, is_portrait: bool) -> float:
        """Height of the band below the mask kept free for the buttons."""
        bottom_space = (
            self.portrait_button_bottom_space if is_portrait else self.landscape_button_bottom_space
        )
        return bottom_space + self.button_height

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MaskInsets":
        """Create from dictionary, ignoring unknown keys."""
        filtered = {k: float(v) for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)


@dataclass(frozen=True)
class CropperConfig:
    """Immutable configuration for a crop session.

    Attributes:
        insets: Mask layout constants (see MaskInsets)
        minimum_zoom_scale: Lower zoom bound (None = fitting scale for the mask)
        maximum_zoom_scale: Upper zoom bound (None = minimum * DEFAULT_MAXIMUM_ZOOM_MULTIPLIER)
        rotation_enabled: Whether the rotation angle is honoured (default: False)
        avoid_empty_space: Keep the image covering the mask (default: False)
        apply_mask_to_cropped_image: Clip the output to the mask outline (default: False)
        square_corner_radius: Corner radius of the square mask (default: 0, no rounding)
        rotation_resample: Resampling filter for rotation, "bilinear" or "bicubic"
        mask_supersampling: Supersampling factor used when rendering mask alpha
    """
    insets: MaskInsets = field(default_factory=MaskInsets)
    minimum_zoom_scale: Optional[float] = constants.DEFAULT_MINIMUM_ZOOM_SCALE
    maximum_zoom_scale: Optional[float] = constants.DEFAULT_MAXIMUM_ZOOM_SCALE
    rotation_enabled: bool = constants.DEFAULT_ROTATION_ENABLED
    avoid_empty_space: bool = constants.DEFAULT_AVOID_EMPTY_SPACE
    apply_mask_to_cropped_image: bool = constants.DEFAULT_APPLY_MASK_TO_CROPPED_IMAGE
    square_corner_radius: float = constants.DEFAULT_SQUARE_CORNER_RADIUS
    rotation_resample: str = constants.DEFAULT_ROTATION_RESAMPLE
    mask_supersampling: int = constants.DEFAULT_MASK_SUPERSAMPLING

    def __post_init__(self):
        """Validate configuration values."""
        if self.minimum_zoom_scale is not None and self.minimum_zoom_scale <= 0:
            raise ValueError(f"minimum_zoom_scale must be > 0, got {self.minimum_zoom_scale}")

        if self.maximum_zoom_scale is not None and self.maximum_zoom_scale <= 0:
            raise ValueError(f"maximum_zoom_scale must be > 0, got {self.maximum_zoom_scale}")

        if (
            self.minimum_zoom_scale is not None
            and self.maximum_zoom_scale is not None
            and self.minimum_zoom_scale > self.maximum_zoom_scale
        ):
            raise ValueError(
                f"minimum_zoom_scale ({self.minimum_zoom_scale}) must not exceed "
                f"maximum_zoom_scale ({self.maximum_zoom_scale})"
            )

        if self.square_corner_radius < 0:
            raise ValueError(f"square_corner_radius must be >= 0, got {self.square_corner_radius}")

        if self.rotation_resample not in constants.SUPPORTED_RESAMPLE_FILTERS:
            raise ValueError(
                f"Unsupported rotation_resample: {self.rotation_resample}. "
                f"Use one of {', '.join(constants.SUPPORTED_RESAMPLE_FILTERS)}"
            )

        if not 1 <= self.mask_supersampling <= 16:
            raise ValueError(f"mask_supersampling must be 1-16, got {self.mask_supersampling}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CropperConfig":
        """Create from dictionary, ignoring unknown keys."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        insets = filtered.get("insets")
        if isinstance(insets, dict):
            filtered["insets"] = MaskInsets.from_dict(insets)
        return cls(**filtered)
