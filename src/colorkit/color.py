"""
Normalized RGBA color records and the RGBA8 pixel buffer decoder.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from colorkit.errors import DecodeBufferTooSmallError

RGBA8_CHANNELS = 4


@dataclass(frozen=True)
class Color:
    """An RGBA color with every channel normalized to [0, 1].

    Attributes:
        red: Red channel.
        green: Green channel.
        blue: Blue channel.
        alpha: Alpha channel (1.0 is fully opaque).
    """

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")

    @classmethod
    def from_rgba8(cls, red: int, green: int, blue: int, alpha: int = 255) -> Color:
        """Build a color from 8-bit channel samples (0-255)."""
        return cls(red / 255.0, green / 255.0, blue / 255.0, alpha / 255.0)

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#RRGGBB`` or ``#RRGGBBAA``."""
        digits = value.lstrip("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"Invalid hex color: {value!r}")
        channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        return cls.from_rgba8(*channels)

    @property
    def rgba8(self) -> tuple[int, int, int, int]:
        """Channels scaled back to rounded 8-bit samples."""
        return tuple(round(c * 255) for c in (self.red, self.green, self.blue, self.alpha))

    @property
    def hex(self) -> str:
        r, g, b, a = self.rgba8
        if a == 255:
            return f"#{r:02X}{g:02X}{b:02X}"
        return f"#{r:02X}{g:02X}{b:02X}{a:02X}"


def decode_rgba8(
    buffer: bytes | bytearray | memoryview,
    record_count: int,
    channel_count: int = RGBA8_CHANNELS,
) -> list[Color]:
    """Decode a row-major RGBA8 buffer into ``record_count`` colors.

    Record ``i`` is read from the four bytes at offset ``i * 4`` as red,
    green, blue and alpha. Bytes are taken as straight (non-premultiplied)
    samples; no gamma or alpha correction is applied.

    Args:
        buffer: Raw bytes written by the renderer.
        record_count: Number of colors to decode.
        channel_count: Bytes per record. Only RGBA8 (4) is supported.

    Returns:
        Exactly ``record_count`` colors.

    Raises:
        DecodeBufferTooSmallError: If the buffer is shorter than
            ``record_count * 4`` bytes.
    """
    if channel_count != RGBA8_CHANNELS:
        raise ValueError(f"Only RGBA8 buffers are supported, got {channel_count} channels")
    if record_count < 0:
        raise ValueError(f"record_count must be non-negative, got {record_count}")

    required = record_count * channel_count
    if len(buffer) < required:
        raise DecodeBufferTooSmallError(expected=required, actual=len(buffer))

    if record_count == 0:
        return []

    samples = np.frombuffer(buffer, dtype=np.uint8, count=required)
    channels = samples.reshape(record_count, channel_count).astype(np.float64) / 255.0
    return [Color(*(float(c) for c in row)) for row in channels]
