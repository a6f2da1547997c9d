"""
Filter engine: named torch-backed image filters and an RGBA8 renderer.
"""

from colorkit.engine.filters import (
    AREA_AVERAGE,
    KMEANS,
    AreaAverageFilter,
    Filter,
    FilterEngine,
    KMeansFilter,
)
from colorkit.engine.image import ColorSpace, FilterImage, Rect
from colorkit.engine.render import PixelFormat, RenderContext

__all__ = [
    "AREA_AVERAGE",
    "KMEANS",
    "AreaAverageFilter",
    "ColorSpace",
    "Filter",
    "FilterEngine",
    "FilterImage",
    "KMeansFilter",
    "PixelFormat",
    "Rect",
    "RenderContext",
]
