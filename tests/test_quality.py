"""
Tests for the dominant color quality policy.
"""

from __future__ import annotations

import pytest

from colorkit.quality import DominantColorQuality, iteration_passes, target_size


class TestTargetSize:
    """Tests for the sampling size reduction."""

    def test_best_keeps_original_size(self):
        assert DominantColorQuality.BEST.target_size((5000, 4000)) == (5000, 4000)

    @pytest.mark.parametrize("quality, size", [
        (DominantColorQuality.LOW, (10, 10)),
        (DominantColorQuality.FAIR, (100, 100)),
        (DominantColorQuality.HIGH, (250, 400)),
    ])
    def test_size_within_ceiling_is_unchanged(self, quality, size):
        """Images already small enough are never upscaled."""
        assert quality.target_size(size) == size

    @pytest.mark.parametrize("quality, size", [
        (DominantColorQuality.LOW, (640, 480)),
        (DominantColorQuality.FAIR, (400, 300)),
        (DominantColorQuality.HIGH, (1920, 1080)),
        (DominantColorQuality.FAIR, (300, 1200)),
    ])
    def test_large_size_fits_ceiling_and_keeps_ratio(self, quality, size):
        width, height = size
        new_width, new_height = quality.target_size(size)

        assert new_width * new_height <= quality.preferred_image_area
        assert new_width < width and new_height < height
        # Aspect ratio holds to within a pixel of rounding
        assert abs(new_width - round(new_height * width / height)) <= 1

    def test_rounding_over_ceiling_falls_back_to_floor(self):
        """400x300 rounds to 115x87 (10005 px), which would exceed 10000."""
        assert DominantColorQuality.FAIR.target_size((400, 300)) == (115, 86)

    @pytest.mark.parametrize("quality, size", [
        (DominantColorQuality.LOW, (1, 100_000)),
        (DominantColorQuality.LOW, (100_000, 1)),
        (DominantColorQuality.FAIR, (3, 1_000_000)),
    ])
    def test_thin_strip_stays_within_ceiling(self, quality, size):
        width, height = quality.target_size(size)

        assert width >= 1 and height >= 1
        assert width * height <= quality.preferred_image_area

    def test_thin_strip_keeps_one_pixel_across(self):
        assert DominantColorQuality.LOW.target_size((1, 100_000)) == (1, 1000)

    def test_functional_form(self):
        assert target_size((640, 480), DominantColorQuality.LOW) == DominantColorQuality.LOW.target_size((640, 480))

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError):
            DominantColorQuality.FAIR.target_size((-1, 10))


class TestQualityLookups:
    """Tests for per-quality constants."""

    def test_preferred_areas(self):
        assert DominantColorQuality.LOW.preferred_image_area == 1_000
        assert DominantColorQuality.FAIR.preferred_image_area == 10_000
        assert DominantColorQuality.HIGH.preferred_image_area == 100_000
        assert DominantColorQuality.BEST.preferred_image_area is None

    def test_iteration_passes(self):
        passes = [iteration_passes(q) for q in DominantColorQuality]
        assert passes == [1, 10, 15, 20]

    def test_quantizer_quality_decreases_step_with_quality(self):
        steps = [q.quantizer_quality for q in DominantColorQuality]
        assert steps == sorted(steps, reverse=True)
        assert DominantColorQuality.FAIR.quantizer_quality == 10
        assert DominantColorQuality.BEST.quantizer_quality == 1
