"""
CropSessionLib - Crop workflow facade

This module provides the ImageCropSession that connects the geometry
resolvers, the crop state extractor and the image transformer.
"""

from MC_Libs.CropSessionLib.crop_session import CropLayout, CropDelegate, ImageCropSession

__all__ = [
    "CropLayout",
    "CropDelegate",
    "ImageCropSession",
]
