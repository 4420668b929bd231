"""Tests for per-generation reserved areas."""

from archsketch.engine.config import EngineConfig
from archsketch.engine.context import GenerationContext, Rect
from archsketch.engine.decoration import ReservedAreas
from archsketch.models.style import Style


def test_reserved_area_blocks_overlap():
    reserved = ReservedAreas()
    assert reserved.is_free(Rect(0, 0, 10, 10))
    reserved.reserve(Rect(0, 0, 10, 10))
    assert len(reserved) == 1
    assert not reserved.is_free(Rect(5, 5, 10, 10))
    assert reserved.is_free(Rect(40, 40, 10, 10))


def test_padding_widens_the_claim():
    reserved = ReservedAreas(padding=5.0)
    reserved.reserve(Rect(0, 0, 10, 10))
    assert not reserved.is_free(Rect(14, 0, 5, 5))
    assert reserved.is_free(Rect(16, 0, 5, 5))
    assert reserved.is_free(Rect(14, 0, 5, 5), padding=0.0)


def test_clear_releases_everything():
    reserved = ReservedAreas()
    reserved.reserve(Rect(0, 0, 10, 10))
    reserved.reserve(Rect(20, 0, 10, 10))
    reserved.clear()
    assert len(reserved) == 0
    assert reserved.is_free(Rect(0, 0, 30, 10))


def test_context_uses_engine_padding():
    ctx = GenerationContext(
        bounds=Rect(0, 0, 100, 100), style=Style(), config=EngineConfig(reserve_padding=2.0)
    )
    assert ctx.reserved.padding == 2.0
    assert len(ctx.reserved) == 0
