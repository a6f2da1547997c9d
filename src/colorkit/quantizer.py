"""
Median cut palette quantizer built on Pillow.

Samples every ``quality``-th pixel of an image, drops translucent (and,
optionally, near-white) pixels, and quantizes the rest with Pillow's median
cut. The palette is returned most populous color first.
"""

from __future__ import annotations

import logging

import numpy as np
from PIL import Image

from colorkit.color import Color
from colorkit.config import QuantizerConfig

logger = logging.getLogger(__name__)

DEFAULT_QUALITY = 10
MIN_ALPHA = 125
WHITE_THRESHOLD = 250


class MedianCutQuantizer:
    """Extracts ordered color palettes with median cut quantization.

    Args:
        config: Quantizer configuration. Uses defaults if None.
    """

    def __init__(self, config: QuantizerConfig | None = None) -> None:
        self.config = config or QuantizerConfig()

    def get_palette(
        self,
        image: Image.Image,
        color_count: int,
        quality: int | None = None,
        ignore_white: bool = True,
    ) -> list[Color] | None:
        """Compute a palette of at most ``color_count`` colors.

        Args:
            image: Source image. Not modified.
            color_count: Maximum number of colors to return.
            quality: Sampling step; 1 samples every pixel, higher values are
                faster but coarser. Defaults to the configured quality.
            ignore_white: Skip pixels whose red, green and blue are all
                above 250.

        Returns:
            Opaque colors ordered by pixel population, or ``None`` if no
            pixel survived sampling.
        """
        if color_count < 1:
            raise ValueError(f"color_count must be positive, got {color_count}")
        step = max(1, quality if quality is not None else self.config.quality)

        pixels = np.asarray(image.convert("RGBA"), dtype=np.uint8).reshape(-1, 4)[::step]
        keep = pixels[:, 3] >= MIN_ALPHA
        if ignore_white:
            keep &= ~(pixels[:, :3] > WHITE_THRESHOLD).all(axis=1)
        samples = pixels[keep, :3]

        if len(samples) == 0:
            logger.debug("No pixels left to quantize (step=%d, ignore_white=%s)", step, ignore_white)
            return None

        strip = Image.fromarray(np.ascontiguousarray(samples.reshape(1, -1, 3)))
        quantized = strip.quantize(colors=color_count, method=Image.Quantize.MEDIANCUT)
        palette = quantized.getpalette()

        # Stable sort keeps palette order between equally populous colors.
        populations = sorted(quantized.getcolors(), key=lambda entry: -entry[0])
        colors = [
            Color.from_rgba8(*palette[index * 3:index * 3 + 3])
            for _, index in populations[:color_count]
        ]
        logger.debug("Quantized %d samples into %d colors", len(samples), len(colors))
        return colors
