"""Tests for request models and process settings."""

import pytest
from pydantic import ValidationError

from archsketch.config import Settings
from archsketch.models.params import ExpertOverrides, GenerationParams


def test_param_defaults():
    params = GenerationParams()
    assert params.format == "a4"
    assert params.margin == 40.0
    assert params.stroke_width == 1.5
    assert params.use_fills
    assert not params.hatching
    assert params.hatch_density == 4.0
    assert params.hatch_angle == 45.0
    assert params.hatch_style is None
    assert params.hatch_coverage == 0.3


def test_param_validation():
    with pytest.raises(ValidationError):
        GenerationParams(stroke_width=0)
    with pytest.raises(ValidationError):
        ExpertOverrides(decay=2.0)
    with pytest.raises(ValidationError):
        GenerationParams(hatch_coverage=0.0)
    with pytest.raises(ValidationError):
        ExpertOverrides(ornament_level_mult=-1.0)


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("ARCHSKETCH_DEFAULT_FORMAT", "a3")
    monkeypatch.setenv("ARCHSKETCH_LOG_LEVEL", "debug")
    settings = Settings()
    assert settings.default_format == "a3"
    assert settings.log_level == "debug"
