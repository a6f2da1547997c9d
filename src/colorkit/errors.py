"""
Error types raised while extracting colors from an image.
"""

from __future__ import annotations


class ImageColorError(Exception):
    """Base class for every color extraction failure."""

    default_message = "Color extraction failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ImageConversionError(ImageColorError):
    """The image could not be converted to a filter engine image."""

    default_message = "Failed to convert the image for the filter engine."


class FilterUnsupportedError(ImageColorError):
    """The named filter is not available in the current engine."""

    def __init__(self, filter_name: str) -> None:
        self.filter_name = filter_name
        super().__init__(f"Filter '{filter_name}' is not supported by the current engine.")


class OutputImageError(ImageColorError):
    """The filter did not produce an output image."""

    default_message = "Could not get the output image from the filter."


class DecodeBufferTooSmallError(ImageColorError):
    """A rendered pixel buffer is shorter than the records it should hold."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Pixel buffer holds {actual} bytes, {expected} required.")


class MedianCutError(ImageColorError):
    """The median cut quantizer returned no usable palette."""

    default_message = "Could not get the color palette from image."
