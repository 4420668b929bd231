"""Shared test fixtures."""

from __future__ import annotations

import pytest

from archsketch.engine.context import GenerationContext, Rect, RenderOptions
from archsketch.main import register_stages
from archsketch.models.style import PRESETS, Style

# Drawing area of an a4 sheet with a 40pt margin
A4_BOUNDS = Rect(40.0, 40.0, 515.0, 762.0)


@pytest.fixture(scope="session", autouse=True)
def _stages() -> None:
    register_stages()


@pytest.fixture
def bounds() -> Rect:
    return A4_BOUNDS


@pytest.fixture
def plain_style() -> Style:
    return Style()


@pytest.fixture
def gothic() -> Style:
    return PRESETS["gothic"]


@pytest.fixture
def make_ctx(bounds):
    def _make(style: Style, seed: int = 42, **options) -> GenerationContext:
        return GenerationContext(
            bounds=bounds,
            style=style,
            seed=seed,
            options=RenderOptions(**options),
        )

    return _make
