"""Unit tests for RenderSettings."""

import pytest

from spheretracer.config import MAX_IMAGE_SIZE, RenderSettings


class TestRenderSettings:
    def test_defaults(self):
        settings = RenderSettings()

        assert settings.width == 400
        assert settings.height == 225
        assert settings.samples_per_pixel == 100
        assert settings.max_depth == 50
        assert settings.seed == 0

    def test_derived_values(self):
        settings = RenderSettings(width=200, height=100)

        assert settings.aspect_ratio == 2.0
        assert settings.pixel_count == 20000

    def test_from_aspect_ratio(self):
        settings = RenderSettings.from_aspect_ratio(400, 16.0 / 9.0, samples_per_pixel=7)

        assert settings.height == 225
        assert settings.samples_per_pixel == 7

    def test_from_aspect_ratio_truncates(self):
        assert RenderSettings.from_aspect_ratio(100, 3.0).height == 33

    def test_zero_depth_allowed(self):
        assert RenderSettings(max_depth=0).max_depth == 0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"width": 1},
            {"height": 0},
            {"width": MAX_IMAGE_SIZE + 1},
            {"height": MAX_IMAGE_SIZE + 1},
            {"samples_per_pixel": 0},
            {"max_depth": -1},
            {"seed": -5},
        ],
    )
    def test_invalid_settings_raise(self, kwargs):
        with pytest.raises(ValueError):
            RenderSettings(**kwargs)

    @pytest.mark.parametrize("aspect_ratio", [0.0, -1.0])
    def test_invalid_aspect_ratio_raises(self, aspect_ratio):
        with pytest.raises(ValueError):
            RenderSettings.from_aspect_ratio(400, aspect_ratio)

    def test_aspect_ratio_giving_tiny_height_raises(self):
        with pytest.raises(ValueError):
            RenderSettings.from_aspect_ratio(10, 20.0)
