"""
ColorKit — average and dominant color extraction for raster images.

Provides:
- Average color via median cut or an area-average filter (with fallback)
- Dominant colors via median cut (ordered) or perceptual k-means (8 swatches)
- A quality policy trading sampled area for speed
- Decoding of RGBA8 render buffers into normalized colors
"""

from colorkit.average import AverageColorAlgorithm, average_color
from colorkit.color import Color, decode_rgba8
from colorkit.dominant import DominantColorAlgorithm, dominant_colors
from colorkit.errors import (
    DecodeBufferTooSmallError,
    FilterUnsupportedError,
    ImageColorError,
    ImageConversionError,
    MedianCutError,
    OutputImageError,
)
from colorkit.extractor import ColorExtractor
from colorkit.quality import DominantColorQuality

__version__ = "0.1.0"

__all__ = [
    "AverageColorAlgorithm",
    "Color",
    "ColorExtractor",
    "DecodeBufferTooSmallError",
    "DominantColorAlgorithm",
    "DominantColorQuality",
    "FilterUnsupportedError",
    "ImageColorError",
    "ImageConversionError",
    "MedianCutError",
    "OutputImageError",
    "average_color",
    "decode_rgba8",
    "dominant_colors",
]
