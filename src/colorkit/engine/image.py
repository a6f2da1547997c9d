"""
Engine-side image representation.

A ``FilterImage`` is the input and output type of every filter: a tensor of
straight RGBA samples in [0, 1] positioned at an integer extent.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np
import torch
from PIL import Image, ImageCms

from colorkit.errors import ImageConversionError

logger = logging.getLogger(__name__)


class ColorSpace(Enum):
    """Color spaces the renderer accepts. Both share the sRGB gamut."""

    SRGB = "sRGB"
    DEVICE_RGB = "DeviceRGB"


@dataclass(frozen=True)
class Rect:
    """Integer pixel rectangle, origin at the top-left corner."""

    x: int
    y: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def area(self) -> int:
        return 0 if self.is_empty else self.width * self.height

    def intersection(self, other: Rect) -> Rect:
        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.x + self.width, other.x + other.width)
        bottom = min(self.y + self.height, other.y + other.height)
        return Rect(left, top, max(0, right - left), max(0, bottom - top))


@dataclass(frozen=True, eq=False)
class FilterImage:
    """RGBA image owned by the filter engine.

    Attributes:
        pixels: ``(height, width, 4)`` float32 tensor, straight alpha.
        extent: Position and size of the image.
        color_space: Color space the samples are expressed in.
    """

    pixels: torch.Tensor
    extent: Rect
    color_space: ColorSpace = ColorSpace.SRGB

    @classmethod
    def from_pil(cls, image: Image.Image, device: str | torch.device = "cpu") -> FilterImage:
        """Convert a Pillow image into an engine image.

        Embedded RGB ICC profiles are converted to sRGB. The source image is
        left untouched.

        Raises:
            ImageConversionError: If the image is empty or cannot be
                converted to RGBA.
        """
        width, height = image.size
        if width == 0 or height == 0:
            raise ImageConversionError(f"Cannot convert an empty image ({width}x{height}).")

        try:
            rgba = _to_srgb_rgba(image)
        except (OSError, ValueError, ImageCms.PyCMSError) as e:
            raise ImageConversionError(f"Failed to convert {image.mode} image: {e}") from e

        array = np.asarray(rgba, dtype=np.uint8)
        pixels = torch.from_numpy(array.copy()).to(device=device, dtype=torch.float32) / 255.0
        return cls(pixels, Rect(0, 0, width, height), ColorSpace.SRGB)

    @property
    def device(self) -> torch.device:
        return self.pixels.device

    def crop(self, rect: Rect) -> FilterImage:
        """Return the part of the image covered by ``rect``."""
        region = rect.intersection(self.extent)
        top = region.y - self.extent.y
        left = region.x - self.extent.x
        pixels = self.pixels[top:top + region.height, left:left + region.width]
        return FilterImage(pixels, region, self.color_space)

    def with_opaque_alpha(self, rect: Rect) -> FilterImage:
        """Return a copy whose alpha is 1.0 everywhere inside ``rect``."""
        region = rect.intersection(self.extent)
        pixels = self.pixels.clone()
        top = region.y - self.extent.y
        left = region.x - self.extent.x
        pixels[top:top + region.height, left:left + region.width, 3] = 1.0
        return FilterImage(pixels, self.extent, self.color_space)


def _to_srgb_rgba(image: Image.Image) -> Image.Image:
    icc = image.info.get("icc_profile")
    rgba = image.convert("RGBA")
    if not icc:
        return rgba

    source = ImageCms.ImageCmsProfile(io.BytesIO(icc))
    if source.profile.xcolor_space.strip() != "RGB":
        return rgba

    logger.debug("Converting embedded ICC profile to sRGB")
    return ImageCms.profileToProfile(
        rgba, source, ImageCms.createProfile("sRGB"), outputMode="RGBA"
    )
