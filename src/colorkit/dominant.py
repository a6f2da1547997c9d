"""
Dominant colors of an image.

Similar colors are grouped together rather than counted exactly, which avoids
returning many shades of one color (frequent with JPEG compression artifacts).
"""

from __future__ import annotations

import logging
from enum import Enum

from PIL import Image

from colorkit.color import Color, decode_rgba8
from colorkit.engine import KMEANS, FilterEngine
from colorkit.errors import FilterUnsupportedError, MedianCutError, OutputImageError
from colorkit.quality import DominantColorQuality
from colorkit.quantizer import MedianCutQuantizer

logger = logging.getLogger(__name__)

MEDIAN_CUT_COLOR_COUNT = 5
KMEANS_CLUSTER_COUNT = 8


class DominantColorAlgorithm(Enum):
    """Strategy used to find the dominant colors."""

    # Ordered, most dominant color first.
    MEDIAN_CUT = "median_cut"
    # Fixed number of clusters, not ordered by dominance.
    KMEANS_CLUSTERING = "kmeans_clustering"


def dominant_colors(
    image: Image.Image,
    quality: DominantColorQuality = DominantColorQuality.FAIR,
    algorithm: DominantColorAlgorithm = DominantColorAlgorithm.MEDIAN_CUT,
    engine: FilterEngine | None = None,
    quantizer: MedianCutQuantizer | None = None,
) -> list[Color]:
    """Find the dominant colors of ``image``.

    These are not the exact most frequent colors: similar colors are grouped
    together first.

    Args:
        image: Source image. Not modified.
        quality: Higher qualities sample more of the image and are slower.
        algorithm: ``MEDIAN_CUT`` returns up to 5 colors, most dominant first.
            ``KMEANS_CLUSTERING`` returns exactly 8 opaque colors in no
            particular order.
        engine: Filter engine for k-means. A default engine is created if None.
        quantizer: Quantizer for median cut. A default one is created if None.

    Returns:
        The dominant colors.

    Raises:
        MedianCutError: The quantizer returned no palette.
        ImageConversionError: The image could not be converted for the engine.
        FilterUnsupportedError: The engine does not support k-means.
        OutputImageError: The k-means filter produced no output.
    """
    logger.debug(
        "Dominant colors with %s at %s quality", algorithm.value, quality.value,
        extra={"algorithm": algorithm.value, "quality": quality.value},
    )
    if algorithm is DominantColorAlgorithm.KMEANS_CLUSTERING:
        return _kmeans_clustering(image, quality, engine or FilterEngine())

    palette = (quantizer or MedianCutQuantizer()).get_palette(
        image,
        color_count=MEDIAN_CUT_COLOR_COUNT,
        quality=quality.quantizer_quality,
        ignore_white=False,
    )
    if not palette:
        raise MedianCutError()
    return list(palette)


def _kmeans_clustering(image: Image.Image, quality: DominantColorQuality, engine: FilterEngine) -> list[Color]:
    size = quality.target_size(image.size)
    if size != image.size:
        logger.debug("Downscaling %s to %s for clustering", image.size, size)
        image = image.resize(size, Image.Resampling.BILINEAR)

    input_image = engine.image_from_pil(image)

    kmeans = engine.filter_named(KMEANS)
    if kmeans is None:
        raise FilterUnsupportedError(KMEANS)

    kmeans.set_value("input_image", input_image)
    kmeans.set_value("input_extent", input_image.extent)
    kmeans.set_value("input_count", KMEANS_CLUSTER_COUNT)
    kmeans.set_value("input_passes", quality.kmeans_input_passes)
    kmeans.set_value("input_perceptual", True)

    output_image = kmeans.output_image
    if output_image is None:
        raise OutputImageError()

    # Cluster shares live in the alpha channel; render the swatches opaque.
    output_image = output_image.with_opaque_alpha(output_image.extent)

    bitmap = bytearray(4 * KMEANS_CLUSTER_COUNT)
    engine.context().render(
        output_image,
        bitmap,
        row_bytes=4 * KMEANS_CLUSTER_COUNT,
        bounds=output_image.extent,
        color_space=input_image.color_space,
    )
    return decode_rgba8(bitmap, record_count=KMEANS_CLUSTER_COUNT)
