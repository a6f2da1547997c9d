"""
Average color of an image.

Two strategies are available: a one-color median cut palette, or an
area-average filter run on the filter engine. The filter path falls back to
median cut when the engine does not support the filter.
"""

from __future__ import annotations

import logging
from enum import Enum

from PIL import Image

from colorkit.color import Color, decode_rgba8
from colorkit.engine import AREA_AVERAGE, ColorSpace, FilterEngine, Rect
from colorkit.errors import FilterUnsupportedError, MedianCutError, OutputImageError
from colorkit.quantizer import MedianCutQuantizer

logger = logging.getLogger(__name__)


class AverageColorAlgorithm(Enum):
    """Strategy used to compute the average color."""

    MEDIAN_CUT = "median_cut"
    AREA_AVERAGE = "area_average"


def average_color(
    image: Image.Image,
    algorithm: AverageColorAlgorithm = AverageColorAlgorithm.MEDIAN_CUT,
    engine: FilterEngine | None = None,
    quantizer: MedianCutQuantizer | None = None,
) -> Color:
    """Compute the average color of ``image``.

    With ``AREA_AVERAGE``, an engine that reports the filter as unsupported
    makes the call fall back to median cut; any other failure of the filter
    path is raised as is.

    Args:
        image: Source image. Not modified.
        algorithm: Strategy to use.
        engine: Filter engine for ``AREA_AVERAGE``. A default engine is
            created if None.
        quantizer: Quantizer for ``MEDIAN_CUT``. A default one is created
            if None.

    Returns:
        The average color.

    Raises:
        ImageConversionError: The image could not be converted for the engine.
        OutputImageError: The filter produced no output.
        MedianCutError: The quantizer returned no palette.
    """
    if algorithm is AverageColorAlgorithm.AREA_AVERAGE:
        try:
            return _average_color_by_filter(image, engine or FilterEngine())
        except FilterUnsupportedError as e:
            logger.info(
                "%s, falling back to median cut", e,
                extra={"algorithm": algorithm.value, "filter_name": e.filter_name},
            )

    return _average_color_by_median_cut(image, quantizer or MedianCutQuantizer())


def _average_color_by_median_cut(image: Image.Image, quantizer: MedianCutQuantizer) -> Color:
    palette = quantizer.get_palette(image, color_count=1, ignore_white=False)
    if not palette:
        raise MedianCutError()
    return palette[0]


def _average_color_by_filter(image: Image.Image, engine: FilterEngine) -> Color:
    input_image = engine.image_from_pil(image)

    area_average = engine.filter_named(AREA_AVERAGE)
    if area_average is None:
        raise FilterUnsupportedError(AREA_AVERAGE)

    area_average.set_value("input_image", input_image)
    area_average.set_value("input_extent", input_image.extent)

    output_image = area_average.output_image
    if output_image is None:
        raise OutputImageError()

    bitmap = bytearray(4)
    engine.context().render(
        output_image,
        bitmap,
        row_bytes=4,
        bounds=Rect(0, 0, 1, 1),
        color_space=ColorSpace.DEVICE_RGB,
    )
    return decode_rgba8(bitmap, record_count=1)[0]
