"""
Shared synthetic images for the color extraction tests.
"""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from colorkit.config import EngineConfig
from colorkit.engine import FilterEngine

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def make_image(rows: list[list[tuple[int, int, int, int]]]) -> Image.Image:
    """Build an RGBA image from rows of RGBA8 tuples."""
    return Image.fromarray(np.array(rows, dtype=np.uint8))


def make_halves(top: tuple[int, ...], bottom: tuple[int, ...], size: tuple[int, int] = (10, 10)) -> Image.Image:
    """Create an RGBA image whose top and bottom halves are solid colors."""
    width, height = size
    data = np.zeros((height, width, 4), dtype=np.uint8)
    data[: height // 2] = top
    data[height // 2:] = bottom
    return Image.fromarray(data)


@pytest.fixture
def red_blue_2x2() -> Image.Image:
    """The 2x2 image [red, red, blue, blue]."""
    return make_image([[RED, RED], [BLUE, BLUE]])


@pytest.fixture
def cpu_engine() -> FilterEngine:
    return FilterEngine(EngineConfig(device="cpu"))
