"""Tests for the pipeline orchestrator."""

import pytest

from archsketch.engine.context import GenerationContext, HatchConfig, HatchSide, Rect, RenderOptions
from archsketch.engine.pipeline import Pipeline
from archsketch.engine.registry import Layer, StageRegistry, StageSpec
from archsketch.models.style import PRESETS, Style

BOUNDS = Rect(40, 40, 515, 762)


def _ctx(**options) -> GenerationContext:
    return GenerationContext(bounds=BOUNDS, style=Style(), options=RenderOptions(**options))


def test_pipeline_runs_stages():
    reg = StageRegistry()
    results = []

    def s1(ctx: GenerationContext) -> None:
        results.append("s1")

    def s2(ctx: GenerationContext) -> None:
        results.append("s2")

    reg.register(StageSpec(id="G0.01", layer=Layer.GRAMMAR, fn=s1))
    reg.register(StageSpec(id="G0.02", layer=Layer.GRAMMAR, fn=s2, dependencies=["G0.01"]))

    ctx = _ctx()
    Pipeline(registry=reg).run(ctx)

    assert results == ["s1", "s2"]
    assert ctx.completed_stages == {"G0.01", "G0.02"}


def test_pipeline_records_optional_failures():
    reg = StageRegistry()

    def fail(ctx: GenerationContext) -> None:
        raise ValueError("test error")

    reg.register(StageSpec(id="R1.01", layer=Layer.RESOLUTION, fn=fail))

    ctx = _ctx(use_fills=False)
    Pipeline(registry=reg).run(ctx)

    assert "R1.01" in ctx.errors
    assert "test error" in ctx.errors["R1.01"]
    assert "R1.01" not in ctx.completed_stages


def test_pipeline_reraises_required_failures():
    reg = StageRegistry()

    def fail(ctx: GenerationContext) -> None:
        raise RuntimeError("boom")

    reg.register(StageSpec(id="G0.01", layer=Layer.GRAMMAR, fn=fail, tags={"required"}))

    with pytest.raises(RuntimeError, match="boom"):
        Pipeline(registry=reg).run(_ctx())


def test_fill_mode_skips_edge_resolution():
    ctx = Pipeline().run(_ctx(use_fills=True, hatching=False))
    assert "C2.01" in ctx.completed_stages
    for sid in ("R1.01", "R1.02", "R1.03", "C2.02"):
        assert sid not in ctx.completed_stages
    assert ctx.edges == []
    assert ctx.errors == {}


def test_line_art_mode_skips_fills():
    ctx = Pipeline().run(_ctx(use_fills=False, hatching=True))
    assert {"R1.01", "R1.02", "R1.03", "C2.02"} <= ctx.completed_stages
    assert "C2.01" not in ctx.completed_stages
    assert ctx.visible_edges
    assert len(ctx.visible_edges) <= len(ctx.edges)
    assert ctx.hatch_segments


def test_fill_pass_precedes_details():
    ctx = GenerationContext(
        bounds=BOUNDS,
        style=PRESETS["gothic"],
        seed=7,
        options=RenderOptions(hatching=True),
    )
    Pipeline().run(ctx)

    n = ctx.num_blocks
    fills = ctx.paths[:n]
    assert all(p.role == "fill" and p.closed and p.fill == "white" for p in fills)
    assert [p.block_id for p in fills] == [b.id for b in ctx.blocks]

    hatches = [p for p in ctx.paths[n:] if p.role == "hatch"]
    assert hatches
    assert all(p.stroke_width == pytest.approx(1.5 * 0.3) for p in hatches)


def test_line_art_roles():
    ctx = GenerationContext(
        bounds=BOUNDS,
        style=PRESETS["baroque"],
        seed=3,
        options=RenderOptions(use_fills=False),
    )
    Pipeline().run(ctx)
    roles = {p.role for p in ctx.paths}
    assert "fill" not in roles
    assert "edge" in roles
    assert roles <= {"edge", "dome", "spire", "hatch", "decoration"}
    assert all(not p.closed for p in ctx.paths)


def test_rect_blocks_hatch_only_their_band():
    ctx = _ctx(use_fills=False, hatching=True, hatch=HatchConfig(density=3.0, side=HatchSide.LEFT))
    Pipeline().run(ctx)
    body = ctx.body
    xs = [x for s in ctx.hatch_segments if s.block_id == body.id for x in (s.x1, s.x2)]
    assert xs
    assert max(xs) <= body.rect.x + body.rect.w * 0.3 + 1e-6


def test_rect_band_follows_configured_coverage():
    hatch = HatchConfig(density=3.0, side=HatchSide.LEFT, coverage=0.5)
    ctx = _ctx(use_fills=False, hatching=True, hatch=hatch)
    Pipeline().run(ctx)
    body = ctx.body
    xs = [x for s in ctx.hatch_segments if s.block_id == body.id for x in (s.x1, s.x2)]
    assert max(xs) > body.rect.x + body.rect.w * 0.3
    assert max(xs) <= body.rect.x + body.rect.w * 0.5 + 1e-6


def test_decorators_called_per_block_with_fresh_reservations():
    seen = []

    def ornament(block, style, stroke_width, reserved):
        seen.append((block.id, len(reserved)))
        reserved.reserve(block.rect)
        return []

    first = _ctx(decorators=(ornament,))
    Pipeline().run(first)
    assert [bid for bid, _ in seen] == [b.id for b in first.blocks]
    assert [count for _, count in seen] == list(range(first.num_blocks))

    seen.clear()
    second = _ctx(decorators=(ornament,))
    Pipeline().run(second)
    assert seen[0][1] == 0
    assert second.reserved is not first.reserved


def test_run_layer_only_builds_blocks():
    ctx = _ctx()
    Pipeline().run_layer(ctx, Layer.GRAMMAR)
    assert ctx.blocks
    assert ctx.paths == []
