"""
Constants and configuration defaults for Mask Cropper.

This module centralizes all constant values, magic numbers, and
default settings used throughout the crop engine.
"""

# Mask edge insets (points inside the allowed band)
PORTRAIT_CIRCLE_MASK_INSET = 15.0
PORTRAIT_SQUARE_MASK_INSET = 20.0
LANDSCAPE_CIRCLE_MASK_INSET = 45.0
LANDSCAPE_SQUARE_MASK_INSET = 45.0

# Vertical bands reserved for the "Move and Scale" label and the buttons
PORTRAIT_LABEL_TOP_SPACE = 44.0
LANDSCAPE_LABEL_TOP_SPACE = 12.0
PORTRAIT_BUTTON_BOTTOM_SPACE = 21.0
LANDSCAPE_BUTTON_BOTTOM_SPACE = 12.0
MOVE_AND_SCALE_LABEL_HEIGHT = 24.0
BUTTON_HEIGHT = 44.0

# Zoom
DEFAULT_MINIMUM_ZOOM_SCALE = None  # None = fitting scale for the mask
DEFAULT_MAXIMUM_ZOOM_SCALE = None  # None = minimum * multiplier
DEFAULT_MAXIMUM_ZOOM_MULTIPLIER = 5.0

# Behaviour flags
DEFAULT_ROTATION_ENABLED = False
DEFAULT_AVOID_EMPTY_SPACE = False
DEFAULT_APPLY_MASK_TO_CROPPED_IMAGE = False

# Mask shape
DEFAULT_SQUARE_CORNER_RADIUS = 0.0
BEZIER_CIRCLE_KAPPA = 0.5522847498307936
DEFAULT_CURVE_SAMPLES = 24

# Resampling
DEFAULT_ROTATION_RESAMPLE = "bicubic"
SUPPORTED_RESAMPLE_FILTERS = ("bilinear", "bicubic")
DEFAULT_MASK_SUPERSAMPLING = 4

# EXIF
EXIF_ORIENTATION_TAG = 0x0112
EXIF_ORIENTATION_UPRIGHT = 1

# Output
DEFAULT_OUTPUT_FORMAT = "PNG"
DEFAULT_CONTAINER_SIZE = (400.0, 700.0)

# Numeric tolerance for angle comparisons
ANGLE_EPSILON = 1e-12
