"""
MC_Libs - Mask Cropper Library Modules

This package contains the crop engine for the Mask Cropper project,
organized into specialized sub-packages:

- GeometryLib: Geometry primitives, mask outlines, crop modes, resolvers and
  the crop state extractor
- ImageEditingLib: Orientation normalisation, rotation, cropping and masking
- CropSessionLib: Session facade tying layout, live state and commit together
"""

__version__ = "0.1.0"
