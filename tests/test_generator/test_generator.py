"""Tests for the generation entry point."""

import pytest

from archsketch.engine.context import BlockKind, HatchSide
from archsketch.generator import (
    FORMATS,
    drawing_bounds,
    generate,
    generate_svg,
    get_format,
    resolve_style,
    summarize,
)
from archsketch.models.params import ExpertOverrides, GenerationParams
from archsketch.models.style import HatchStyle, IntRange


def test_formats():
    assert get_format("a4") == (595.0, 842.0)
    assert get_format("a4-landscape") == (842.0, 595.0)
    assert get_format("a3") == (842.0, 1190.0)
    assert get_format("square") == (700.0, 700.0)
    assert get_format("letter") == FORMATS["a4"]


def test_drawing_bounds_within_aspect():
    r = drawing_bounds((595.0, 842.0), 40.0, 0.7)
    assert (r.x, r.y, r.w, r.h) == (40.0, 40.0, 515.0, 762.0)


def test_drawing_bounds_narrowed_and_centred():
    r = drawing_bounds((700.0, 700.0), 50.0, 0.7)
    assert r.h == 600.0
    assert r.w == pytest.approx(420.0)
    assert r.center_x == pytest.approx(350.0)


def test_drawing_bounds_rejects_oversized_margin():
    with pytest.raises(ValueError):
        drawing_bounds((100.0, 100.0), 60.0, 0.7)


def test_expert_overrides_only_in_expert_mode():
    overrides = ExpertOverrides(
        max_towers=4, decay=0.3, window_density_x_mult=2.0, ornament_level_mult=2.0
    )
    plain = resolve_style(GenerationParams(style="gothic", overrides=overrides))
    assert plain.decay == 0.0

    expert = resolve_style(GenerationParams(style="gothic", expert_mode=True, overrides=overrides))
    assert expert.tower_count == IntRange(min=0, max=4)
    assert expert.decay == 0.3
    assert expert.window_density_x == 8
    assert expert.ornament_level == pytest.approx(plain.ornament_level * 2)
    assert expert.wing_probability == plain.wing_probability


def test_unknown_style_rejected():
    with pytest.raises(ValueError):
        generate(GenerationParams(style="rococo"))


def test_generate_is_deterministic():
    params = GenerationParams(seed=99, style="baroque", hatching=True)
    a = generate(params)
    b = generate(params)
    assert a.blocks == b.blocks
    assert a.paths == b.paths
    assert a.hatch_segments == b.hatch_segments


@pytest.mark.parametrize("style", ["gothic", "ruin", "brutalist"])
def test_line_art_is_deterministic(style):
    params = GenerationParams(seed=17, style=style, use_fills=False, hatching=True)
    a = generate(params)
    b = generate(params)
    assert a.visible_edges
    assert a.visible_edges == b.visible_edges
    assert a.hatch_segments == b.hatch_segments
    assert a.paths == b.paths


def test_different_seeds_differ():
    a = generate(GenerationParams(seed=1, style="gothic"))
    b = generate(GenerationParams(seed=2, style="gothic"))
    assert a.blocks != b.blocks


@pytest.mark.parametrize("style", ["gothic", "baroque", "artdeco", "modernist", "brutalist", "ruin", "classical"])
def test_every_preset_generates(style):
    for use_fills in (True, False):
        result = generate(GenerationParams(seed=5, style=style, use_fills=use_fills, hatching=True))
        assert result.errors == {}
        kinds = [b.kind for b in result.blocks]
        assert kinds.count(BlockKind.BODY) == 1
        assert kinds.count(BlockKind.BASE) == 1
        assert result.paths


def test_blocks_stand_on_drawing_area():
    for seed in range(10):
        result = generate(GenerationParams(seed=seed, style="gothic"))
        floor = result.bounds.bottom
        for block in result.blocks:
            assert block.rect.bottom <= floor + 1e-6


def test_line_art_result():
    result = generate(GenerationParams(seed=8, style="modernist", use_fills=False))
    assert result.visible_edges
    assert all(p.role != "fill" for p in result.paths)


def test_hatch_options_flow_through():
    params = GenerationParams(
        seed=4,
        style="classical",
        use_fills=False,
        hatching=True,
        hatch_style=HatchStyle.HORIZONTAL,
        hatch_side=HatchSide.ALL,
        hatch_density=6.0,
    )
    result = generate(params)
    assert result.hatch_segments
    for s in result.hatch_segments:
        assert s.y1 == pytest.approx(s.y2)


def test_generate_svg():
    svg = generate_svg(GenerationParams(seed=42, style="artdeco", format="square"))
    assert svg.startswith("<?xml")
    assert 'viewBox="0 0 700 700"' in svg
    assert "<title>artdeco #42</title>" in svg
    assert svg.count("<path") > 0


def test_summarize():
    result = generate(GenerationParams(seed=12, style="ruin", use_fills=False))
    summary = summarize(result)
    assert summary.style == "ruin"
    assert len(summary.blocks) == len(result.blocks)
    assert summary.visible_edges == len(result.visible_edges)
    body = next(b for b in summary.blocks if b.kind == "body")
    assert body.has_outline
