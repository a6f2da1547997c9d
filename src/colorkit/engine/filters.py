"""
Named image filters and the engine that hands them out.

Filters are looked up by name and configured through key/value parameters.
A filter produces its output image lazily when ``output_image`` is read, and
returns ``None`` when it has nothing to work on.
"""

from __future__ import annotations

import logging
from typing import Any

import torch
from PIL import Image

from colorkit.config import EngineConfig
from colorkit.engine.colorspace import srgb_to_lab
from colorkit.engine.image import FilterImage, Rect
from colorkit.engine.render import RenderContext

logger = logging.getLogger(__name__)

AREA_AVERAGE = "AreaAverage"
KMEANS = "KMeans"


class Filter:
    """A named transform configured with key/value parameters.

    Args:
        engine: Engine the filter runs on.
    """

    name = ""
    parameter_keys: tuple[str, ...] = ("input_image", "input_extent")

    def __init__(self, engine: FilterEngine) -> None:
        self.engine = engine
        self._values: dict[str, Any] = {}

    def set_value(self, key: str, value: Any) -> None:
        if key not in self.parameter_keys:
            raise KeyError(f"{self.name} has no parameter '{key}'")
        self._values[key] = value

    def value(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    @property
    def output_image(self) -> FilterImage | None:
        """Apply the filter, or ``None`` if there is no input to work on."""
        image: FilterImage | None = self._values.get("input_image")
        if image is None:
            return None

        extent = self._values.get("input_extent", image.extent).intersection(image.extent)
        if extent.is_empty:
            return None

        logger.debug(
            "Applying %s over %s on %s", self.name, extent, image.device,
            extra={"filter_name": self.name, "device": str(image.device)},
        )
        with torch.no_grad():
            return self._apply(image, extent)

    def _apply(self, image: FilterImage, extent: Rect) -> FilterImage:
        raise NotImplementedError


class AreaAverageFilter(Filter):
    """Averages the input extent into a single pixel.

    Colors are averaged on alpha-premultiplied samples and divided back by the
    mean alpha, so fully transparent pixels do not tint the result. The output
    alpha is the plain mean alpha.
    """

    name = AREA_AVERAGE

    def _apply(self, image: FilterImage, extent: Rect) -> FilterImage:
        region = image.crop(extent).pixels.reshape(-1, 4)
        alpha = region[:, 3:]
        coverage = alpha.sum()
        if coverage > 0:
            rgb = (region[:, :3] * alpha).sum(dim=0) / coverage
        else:
            rgb = torch.zeros(3, dtype=region.dtype, device=region.device)
        average = torch.cat([rgb, alpha.mean(dim=0)]).reshape(1, 1, 4)
        return FilterImage(average, Rect(extent.x, extent.y, 1, 1), image.color_space)


class KMeansFilter(Filter):
    """Groups the pixels of the input extent into ``input_count`` clusters.

    The output is an ``input_count`` x 1 image. Each pixel holds the mean
    color of a cluster, and its alpha holds the share of coverage assigned to
    that cluster. Clusters come out in seed order, not by size.

    Pixels count in proportion to their alpha; fully transparent pixels are
    left out. An extent with no visible pixels yields transparent black
    clusters.
    """

    name = KMEANS
    parameter_keys = Filter.parameter_keys + ("input_count", "input_passes", "input_perceptual")

    def _apply(self, image: FilterImage, extent: Rect) -> FilterImage:
        count = int(self.value("input_count", 8))
        passes = int(self.value("input_passes", 5))
        perceptual = bool(self.value("input_perceptual", False))
        if count < 1:
            raise ValueError(f"input_count must be positive, got {count}")

        region = image.crop(extent).pixels.reshape(-1, 4)
        visible = region[:, 3] > 0
        rgb = region[visible, :3]
        weights = region[visible, 3]
        output_extent = Rect(extent.x, extent.y, count, 1)
        if rgb.shape[0] == 0:
            output = torch.zeros(1, count, 4, dtype=region.dtype, device=region.device)
            return FilterImage(output, output_extent, image.color_space)

        features = srgb_to_lab(rgb) if perceptual else rgb

        generator = torch.Generator().manual_seed(self.engine.config.seed)
        seeds = _seed_indices(features, weights, count, generator)

        centers = features[seeds].clone()
        for _ in range(max(1, passes)):
            labels = torch.cdist(features, centers).argmin(dim=1)
            means, filled = _cluster_means(features, weights, labels, count)
            centers[filled] = means[filled]

        labels = torch.cdist(features, centers).argmin(dim=1)
        colors, filled = _cluster_means(rgb, weights, labels, count)
        colors[~filled] = rgb[seeds][~filled]
        coverage = torch.zeros(count, dtype=weights.dtype, device=weights.device)
        coverage.index_add_(0, labels, weights)
        shares = coverage / weights.sum()

        output = torch.cat([colors, shares.unsqueeze(1)], dim=1).reshape(1, count, 4)
        return FilterImage(output, output_extent, image.color_space)


def _seed_indices(
    features: torch.Tensor,
    weights: torch.Tensor,
    count: int,
    generator: torch.Generator,
) -> torch.Tensor:
    """Pick k-means++ seeds, weighting each pixel by its alpha. Once every
    distinct color is covered, the last seed is repeated and the extra
    clusters stay empty."""
    first = torch.multinomial(weights.cpu().to(torch.float64), 1, generator=generator)
    chosen = [int(first)]
    nearest = ((features - features[chosen[0]]) ** 2).sum(dim=1)

    for _ in range(1, count):
        candidates = (nearest * weights).cpu().to(torch.float64)
        if float(candidates.sum()) > 0.0:
            index = int(torch.multinomial(candidates, 1, generator=generator))
        else:
            index = chosen[-1]
        chosen.append(index)
        nearest = torch.minimum(nearest, ((features - features[index]) ** 2).sum(dim=1))

    return torch.tensor(chosen, device=features.device)


def _cluster_means(
    values: torch.Tensor,
    weights: torch.Tensor,
    labels: torch.Tensor,
    count: int,
) -> tuple[torch.Tensor, torch.Tensor]:
    sums = torch.zeros(count, values.shape[1], dtype=values.dtype, device=values.device)
    sums.index_add_(0, labels, values * weights.unsqueeze(1))
    totals = torch.zeros(count, dtype=values.dtype, device=values.device)
    totals.index_add_(0, labels, weights)
    filled = totals > 0
    means = sums / totals.clamp(min=torch.finfo(values.dtype).tiny).unsqueeze(1)
    return means, filled


class FilterEngine:
    """Hands out named filters running on a torch device.

    Filters listed in ``EngineConfig.disabled_filters`` and unknown names are
    reported as unavailable by :meth:`filter_named`.

    Args:
        config: Engine configuration. Uses defaults if None.
    """

    filters: dict[str, type[Filter]] = {
        AREA_AVERAGE: AreaAverageFilter,
        KMEANS: KMeansFilter,
    }

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()
        if self.config.device == "auto":
            self.device = "cuda" if torch.cuda.is_available() else "cpu"
        else:
            self.device = self.config.device
        logger.debug("Filter engine using device: %s", self.device)

    def filter_named(self, name: str) -> Filter | None:
        if name in self.config.disabled_filters:
            return None
        filter_class = self.filters.get(name)
        if filter_class is None:
            return None
        return filter_class(self)

    def image_from_pil(self, image: Image.Image) -> FilterImage:
        return FilterImage.from_pil(image, device=self.device)

    def context(self) -> RenderContext:
        return RenderContext()
