"""
Renders engine images into caller-supplied RGBA8 byte buffers.
"""

from __future__ import annotations

import logging
from enum import Enum

import numpy as np
import torch

from colorkit.engine.image import ColorSpace, FilterImage, Rect

logger = logging.getLogger(__name__)


class PixelFormat(Enum):
    RGBA8 = "RGBA8"


class RenderContext:
    """Writes image pixels into byte buffers, one byte per channel."""

    def render(
        self,
        image: FilterImage,
        buffer: bytearray,
        row_bytes: int,
        bounds: Rect,
        pixel_format: PixelFormat = PixelFormat.RGBA8,
        color_space: ColorSpace = ColorSpace.SRGB,
    ) -> None:
        """Render ``bounds`` of ``image`` into ``buffer`` in place.

        Rows are written top first, ``row_bytes`` apart. Pixels of ``bounds``
        that fall outside the image's extent are written as zeros.

        Args:
            image: Image to render.
            buffer: Writable target buffer.
            row_bytes: Stride between rows in bytes.
            bounds: Region of the image to render.
            pixel_format: Output pixel layout.
            color_space: Color space of the output samples.
        """
        if pixel_format is not PixelFormat.RGBA8:
            raise ValueError(f"Unsupported pixel format: {pixel_format}")
        if not isinstance(color_space, ColorSpace):
            raise ValueError(f"Unsupported color space: {color_space}")
        if bounds.is_empty:
            return

        row_length = bounds.width * 4
        if row_bytes < row_length:
            raise ValueError(f"row_bytes {row_bytes} is smaller than a row of {row_length} bytes")
        if len(buffer) < row_bytes * bounds.height:
            raise ValueError(f"Buffer of {len(buffer)} bytes is too small for {bounds}")

        # Both supported spaces share the sRGB gamut, so samples pass through.
        if color_space is not image.color_space:
            logger.debug("Rendering %s samples as %s", image.color_space.value, color_space.value)

        region = np.zeros((bounds.height, bounds.width, 4), dtype=np.uint8)
        overlap = bounds.intersection(image.extent)
        if not overlap.is_empty:
            pixels = image.crop(overlap).pixels
            samples = (pixels.clamp(0.0, 1.0) * 255.0).round().to(torch.uint8).cpu().numpy()
            top = overlap.y - bounds.y
            left = overlap.x - bounds.x
            region[top:top + overlap.height, left:left + overlap.width] = samples

        target = np.frombuffer(buffer, dtype=np.uint8)
        for row in range(bounds.height):
            start = row * row_bytes
            target[start:start + row_length] = region[row].reshape(-1)
