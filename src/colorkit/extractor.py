"""
Config-driven entry point bundling one filter engine and one quantizer.
"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from colorkit.average import AverageColorAlgorithm, average_color
from colorkit.color import Color
from colorkit.config import ColorKitConfig, load_config
from colorkit.dominant import DominantColorAlgorithm, dominant_colors
from colorkit.engine import FilterEngine
from colorkit.logging_setup import setup_logging
from colorkit.quality import DominantColorQuality
from colorkit.quantizer import MedianCutQuantizer

logger = logging.getLogger(__name__)


class ColorExtractor:
    """Computes average and dominant colors with a shared configuration.

    Results are never cached; every call reads the image again.

    Usage:
        ```python
        extractor = ColorExtractor.from_file("colorkit.yaml")
        accent = extractor.average_color(image, AverageColorAlgorithm.AREA_AVERAGE)
        swatches = extractor.dominant_colors(image, DominantColorQuality.HIGH)
        ```

    Args:
        config: Configuration. Uses defaults if None.
        configure_logging: Attach console logging at ``config.log_level``, plus
            text and JSON-lines logs under ``config.log_dir`` when it is set.
    """

    def __init__(self, config: ColorKitConfig | None = None, configure_logging: bool = False) -> None:
        self.config = config or ColorKitConfig()
        if configure_logging:
            setup_logging(log_dir=self.config.log_dir, level=self.config.log_level)
        self.engine = FilterEngine(self.config.engine)
        self.quantizer = MedianCutQuantizer(self.config.quantizer)
        logger.debug("ColorExtractor ready (device=%s)", self.engine.device)

    @classmethod
    def from_file(cls, config_path: str | Path) -> ColorExtractor:
        """Build an extractor from a YAML config file.

        A missing file falls back to the default configuration.

        Args:
            config_path: Path to a YAML file in the ``ColorKitConfig`` layout.

        Returns:
            A ready extractor.
        """
        return cls(load_config(config_path))

    def average_color(
        self,
        image: Image.Image,
        algorithm: AverageColorAlgorithm = AverageColorAlgorithm.MEDIAN_CUT,
    ) -> Color:
        return average_color(image, algorithm, engine=self.engine, quantizer=self.quantizer)

    def dominant_colors(
        self,
        image: Image.Image,
        quality: DominantColorQuality = DominantColorQuality.FAIR,
        algorithm: DominantColorAlgorithm = DominantColorAlgorithm.MEDIAN_CUT,
    ) -> list[Color]:
        return dominant_colors(image, quality, algorithm, engine=self.engine, quantizer=self.quantizer)
