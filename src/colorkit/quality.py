"""
Quality policy for dominant color extraction.

Maps a quality level to how much of the image is sampled: a target pixel
area for the clustering input, the number of k-means passes, and the
sampling step forwarded to the median cut quantizer.
"""

from __future__ import annotations

import math
from enum import Enum


class DominantColorQuality(Enum):
    """How precise the dominant color algorithm should be.

    The lower the quality, the faster the algorithm. ``BEST`` should only be
    used for very small images.
    """

    LOW = "low"
    FAIR = "fair"
    HIGH = "high"
    BEST = "best"

    @property
    def preferred_image_area(self) -> float | None:
        """Pixel area ceiling for the clustering input, ``None`` if unbounded."""
        return _PREFERRED_IMAGE_AREA[self]

    @property
    def kmeans_input_passes(self) -> int:
        """Number of Lloyd passes the k-means filter runs at this quality."""
        return _KMEANS_INPUT_PASSES[self]

    @property
    def quantizer_quality(self) -> int:
        """Median cut sampling step (1 samples every pixel)."""
        return _QUANTIZER_QUALITY[self]

    def target_size(self, original_size: tuple[int, int]) -> tuple[int, int]:
        """Return a size with the same aspect ratio that fits this quality's area.

        Sizes already within the ceiling are returned unchanged; images are
        never upscaled. ``BEST`` always returns the original size.

        Args:
            original_size: ``(width, height)`` of the source image.

        Returns:
            ``(width, height)`` to sample at.
        """
        width, height = original_size
        if width < 0 or height < 0:
            raise ValueError(f"Invalid image size: {original_size}")

        preferred_area = self.preferred_image_area
        if preferred_area is None:
            return original_size

        original_area = width * height
        if original_area <= preferred_area:
            return original_size

        scale = math.sqrt(preferred_area / original_area)
        new_width, new_height = round(width * scale), round(height * scale)
        if new_width * new_height > preferred_area:
            new_width, new_height = math.floor(width * scale), math.floor(height * scale)

        # A strip too thin to scale keeps one pixel across and gives up length instead.
        if new_width < 1:
            new_width, new_height = 1, min(height, math.floor(preferred_area))
        elif new_height < 1:
            new_width, new_height = min(width, math.floor(preferred_area)), 1
        return new_width, new_height


_PREFERRED_IMAGE_AREA: dict[DominantColorQuality, float | None] = {
    DominantColorQuality.LOW: 1_000,
    DominantColorQuality.FAIR: 10_000,
    DominantColorQuality.HIGH: 100_000,
    DominantColorQuality.BEST: None,
}

_KMEANS_INPUT_PASSES: dict[DominantColorQuality, int] = {
    DominantColorQuality.LOW: 1,
    DominantColorQuality.FAIR: 10,
    DominantColorQuality.HIGH: 15,
    DominantColorQuality.BEST: 20,
}

_QUANTIZER_QUALITY: dict[DominantColorQuality, int] = {
    DominantColorQuality.LOW: 20,
    DominantColorQuality.FAIR: 10,
    DominantColorQuality.HIGH: 5,
    DominantColorQuality.BEST: 1,
}


def target_size(original_size: tuple[int, int], quality: DominantColorQuality) -> tuple[int, int]:
    """Functional form of :meth:`DominantColorQuality.target_size`."""
    return quality.target_size(original_size)


def iteration_passes(quality: DominantColorQuality) -> int:
    """Number of k-means passes used for ``quality``."""
    return quality.kmeans_input_passes
