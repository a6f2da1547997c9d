"""
Tests for average color resolution, including the filter fallback.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from PIL import Image

from colorkit.average import AverageColorAlgorithm, average_color
from colorkit.color import Color
from colorkit.config import EngineConfig
from colorkit.engine import AREA_AVERAGE, FilterEngine
from colorkit.errors import (
    FilterUnsupportedError,
    ImageConversionError,
    MedianCutError,
    OutputImageError,
)
from colorkit.quantizer import MedianCutQuantizer

from conftest import RED, make_image


def _fake_quantizer(palette):
    quantizer = MagicMock(spec=MedianCutQuantizer)
    quantizer.get_palette.return_value = palette
    return quantizer


class TestMedianCutAverage:
    """Average color through the quantizer."""

    def test_matches_single_color_palette(self, red_blue_2x2):
        """[red, red, blue, blue] collapses to the quantizer's one-color palette."""
        expected = MedianCutQuantizer().get_palette(red_blue_2x2, color_count=1, ignore_white=False)[0]

        assert average_color(red_blue_2x2) == expected
        assert expected.alpha == 1.0

    def test_requests_one_color_with_white_included(self, red_blue_2x2):
        quantizer = _fake_quantizer([Color(0.2, 0.4, 0.6)])

        result = average_color(red_blue_2x2, quantizer=quantizer)

        assert result == Color(0.2, 0.4, 0.6)
        quantizer.get_palette.assert_called_once_with(red_blue_2x2, color_count=1, ignore_white=False)

    def test_white_image_is_not_ignored(self):
        white = Image.new("RGB", (3, 3), (255, 255, 255))
        assert average_color(white).rgba8 == (255, 255, 255, 255)

    @pytest.mark.parametrize("palette", [None, []])
    def test_no_palette_raises(self, red_blue_2x2, palette):
        with pytest.raises(MedianCutError):
            average_color(red_blue_2x2, quantizer=_fake_quantizer(palette))


class TestAreaAverage:
    """Average color through the area-average filter."""

    def test_area_average(self, red_blue_2x2, cpu_engine):
        result = average_color(red_blue_2x2, AverageColorAlgorithm.AREA_AVERAGE, engine=cpu_engine)
        assert result.rgba8 == (128, 0, 128, 255)

    def test_transparent_pixels_keep_their_neighbour_color(self, cpu_engine):
        image = make_image([[RED, (255, 255, 255, 0)]])
        result = average_color(image, AverageColorAlgorithm.AREA_AVERAGE, engine=cpu_engine)
        assert result.rgba8 == (255, 0, 0, 128)

    def test_does_not_touch_quantizer(self, red_blue_2x2, cpu_engine):
        quantizer = _fake_quantizer([Color(0.0, 0.0, 0.0)])
        average_color(red_blue_2x2, AverageColorAlgorithm.AREA_AVERAGE, engine=cpu_engine, quantizer=quantizer)
        quantizer.get_palette.assert_not_called()

    def test_unsupported_filter_falls_back_to_median_cut(self, red_blue_2x2):
        engine = FilterEngine(EngineConfig(device="cpu", disabled_filters=[AREA_AVERAGE]))

        fallback = average_color(red_blue_2x2, AverageColorAlgorithm.AREA_AVERAGE, engine=engine)

        assert fallback == average_color(red_blue_2x2, AverageColorAlgorithm.MEDIAN_CUT)

    def test_fallback_never_surfaces_unsupported_error(self, red_blue_2x2):
        engine = MagicMock(spec=FilterEngine)
        engine.filter_named.return_value = None
        quantizer = _fake_quantizer([Color(1.0, 1.0, 1.0)])

        result = average_color(red_blue_2x2, AverageColorAlgorithm.AREA_AVERAGE, engine=engine, quantizer=quantizer)

        assert result == Color(1.0, 1.0, 1.0)
        quantizer.get_palette.assert_called_once()

    def test_fallback_failure_is_median_cut_error(self, red_blue_2x2):
        engine = MagicMock(spec=FilterEngine)
        engine.filter_named.return_value = None

        with pytest.raises(MedianCutError):
            average_color(
                red_blue_2x2,
                AverageColorAlgorithm.AREA_AVERAGE,
                engine=engine,
                quantizer=_fake_quantizer(None),
            )

    def test_conversion_failure_propagates(self, red_blue_2x2):
        engine = MagicMock(spec=FilterEngine)
        engine.image_from_pil.side_effect = ImageConversionError()
        quantizer = _fake_quantizer([Color(0.0, 0.0, 0.0)])

        with pytest.raises(ImageConversionError):
            average_color(red_blue_2x2, AverageColorAlgorithm.AREA_AVERAGE, engine=engine, quantizer=quantizer)
        quantizer.get_palette.assert_not_called()

    def test_missing_output_propagates(self, red_blue_2x2):
        area_average = MagicMock()
        area_average.output_image = None
        engine = MagicMock(spec=FilterEngine)
        engine.filter_named.return_value = area_average
        quantizer = _fake_quantizer([Color(0.0, 0.0, 0.0)])

        with pytest.raises(OutputImageError):
            average_color(red_blue_2x2, AverageColorAlgorithm.AREA_AVERAGE, engine=engine, quantizer=quantizer)
        quantizer.get_palette.assert_not_called()

    def test_unsupported_error_names_the_filter(self):
        error = FilterUnsupportedError(AREA_AVERAGE)
        assert error.filter_name == AREA_AVERAGE
        assert AREA_AVERAGE in str(error)
