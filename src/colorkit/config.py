"""
OmegaConf-based configuration for color extraction.

Dataclass defaults can be overridden from a YAML file and from nested
override dictionaries, in that order of priority.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from omegaconf import OmegaConf

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Configuration for the filter engine.

    Attributes:
        device: Torch device for filters. ``"auto"`` picks CUDA when available.
        disabled_filters: Filter names reported as unsupported by the engine.
        seed: Seed for k-means cluster initialization.
    """
    device: str = "auto"  # auto | cuda | cpu
    disabled_filters: list[str] = field(default_factory=list)
    seed: int = 0


@dataclass
class QuantizerConfig:
    """Configuration for the median cut quantizer."""
    quality: int = 10  # sampling step, 1 = every pixel


@dataclass
class ColorKitConfig:
    """Top-level configuration.

    Attributes:
        engine: Filter engine settings.
        quantizer: Median cut settings.
        log_level: Console logging level used by ``ColorExtractor``.
        log_dir: Directory for the text and JSON-lines logs; no log files if None.
    """
    engine: EngineConfig = field(default_factory=EngineConfig)
    quantizer: QuantizerConfig = field(default_factory=QuantizerConfig)
    log_level: str = "INFO"
    log_dir: Optional[str] = None


def load_config(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> ColorKitConfig:
    """Load configuration from a YAML file with optional overrides.

    Supports three levels of configuration (in priority order):
    1. Programmatic overrides (highest)
    2. YAML config file
    3. Dataclass defaults (lowest)

    Args:
        config_path: Path to a YAML config file.
        overrides: Nested dictionary of overrides, e.g.
            ``{"engine": {"device": "cpu"}}``.

    Returns:
        Merged ColorKitConfig.
    """
    merged = OmegaConf.structured(ColorKitConfig)

    if config_path is not None:
        config_path = Path(config_path)
        if config_path.exists():
            merged = OmegaConf.merge(merged, OmegaConf.load(config_path))
            logger.info("Config loaded from: %s", config_path)
        else:
            logger.warning("Config file not found: %s, using defaults", config_path)

    if overrides:
        merged = OmegaConf.merge(merged, OmegaConf.create(overrides))

    return OmegaConf.to_object(merged)


def save_config(config: ColorKitConfig, path: str | Path) -> Path:
    """Save configuration to a YAML file.

    Returns:
        Path to the saved config file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        OmegaConf.save(OmegaConf.structured(config), f)

    logger.info("Config saved to: %s", path)
    return path
