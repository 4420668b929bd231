"""Generation entry point: params in, blocks, paths and SVG out."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from archsketch.engine.config import EngineConfig
from archsketch.engine.context import (
    Block,
    Edge,
    GenerationContext,
    HatchConfig,
    HatchSegment,
    Rect,
    RenderOptions,
    StrokePath,
)
from archsketch.engine.decoration import Decorator
from archsketch.engine.pipeline import create_pipeline
from archsketch.main import register_stages
from archsketch.models.output import BlockSummary, BuildingSummary
from archsketch.models.params import ExpertOverrides, GenerationParams
from archsketch.models.style import IntRange, Style, get_style
from archsketch.svg.serializer import serialize_svg

logger = logging.getLogger(__name__)

# Paper sizes in points (width, height)
FORMATS: dict[str, tuple[float, float]] = {
    "a4": (595.0, 842.0),
    "a4-landscape": (842.0, 595.0),
    "a3": (842.0, 1190.0),
    "square": (700.0, 700.0),
}


@dataclass
class GenerationResult:
    style: Style
    seed: int
    canvas_size: tuple[float, float]
    bounds: Rect
    blocks: list[Block] = field(default_factory=list)
    visible_edges: list[Edge] = field(default_factory=list)
    hatch_segments: list[HatchSegment] = field(default_factory=list)
    paths: list[StrokePath] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)


def get_format(name: str) -> tuple[float, float]:
    if name not in FORMATS:
        logger.warning("Unknown format %r, falling back to a4", name)
    return FORMATS.get(name, FORMATS["a4"])


def drawing_bounds(canvas: tuple[float, float], margin: float, aspect_ratio: float) -> Rect:
    """Canvas minus margins, narrowed and re-centred when wider than ``aspect_ratio``."""
    width, height = canvas
    x, y = margin, margin
    w, h = width - 2 * margin, height - 2 * margin
    if w <= 0 or h <= 0:
        raise ValueError(f"Margin {margin} leaves no drawing area on a {width}x{height} canvas")

    if w / h > aspect_ratio:
        narrowed = h * aspect_ratio
        x += (w - narrowed) / 2
        w = narrowed
    return Rect(x, y, w, h)


def resolve_style(params: GenerationParams) -> Style:
    style = get_style(params.style)
    if not params.expert_mode:
        return style
    return apply_overrides(style, params.overrides)


def apply_overrides(style: Style, o: ExpertOverrides) -> Style:
    tower_count = IntRange(min=0, max=o.max_towers) if o.max_towers is not None else None
    density_x = (
        round(style.window_density_x * o.window_density_x_mult)
        if o.window_density_x_mult is not None
        else None
    )
    density_y = (
        round(style.window_density_y * o.window_density_y_mult)
        if o.window_density_y_mult is not None
        else None
    )
    ornament = (
        style.ornament_level * o.ornament_level_mult
        if o.ornament_level_mult is not None
        else None
    )
    return style.with_overrides(
        tower_probability=o.tower_probability,
        tower_count=tower_count,
        wing_probability=o.wing_probability,
        setback_levels=o.setback_levels,
        aspect_ratio=o.aspect_ratio,
        base_height_ratio=o.base_height_ratio,
        chamfer_amount=o.chamfer_amount,
        decay=o.decay,
        window_density_x=density_x,
        window_density_y=density_y,
        ornament_level=ornament,
    )


def render_options(
    params: GenerationParams,
    style: Style,
    decorators: Sequence[Decorator] = (),
) -> RenderOptions:
    hatch = HatchConfig(
        style=params.hatch_style or style.hatch_style,
        density=params.hatch_density,
        angle=params.hatch_angle,
        coverage=params.hatch_coverage,
        side=params.hatch_side,
    )
    return RenderOptions(
        stroke_width=params.stroke_width,
        use_fills=params.use_fills,
        hatching=params.hatching,
        hatch=hatch,
        decorators=tuple(decorators),
    )


def generate(
    params: GenerationParams | None = None,
    decorators: Sequence[Decorator] = (),
    config: EngineConfig | None = None,
) -> GenerationResult:
    """Run one full generation. Deterministic for identical params."""
    register_stages()
    params = params or GenerationParams()

    style = resolve_style(params)
    canvas = get_format(params.format)
    bounds = drawing_bounds(canvas, params.margin, style.aspect_ratio)

    ctx = GenerationContext(
        bounds=bounds,
        style=style,
        seed=params.seed,
        config=config or EngineConfig(),
        options=render_options(params, style, decorators),
    )
    create_pipeline().run(ctx)

    return GenerationResult(
        style=style,
        seed=params.seed,
        canvas_size=canvas,
        bounds=bounds,
        blocks=list(ctx.blocks),
        visible_edges=list(ctx.visible_edges),
        hatch_segments=list(ctx.hatch_segments),
        paths=list(ctx.paths),
        errors=dict(ctx.errors),
    )


def generate_svg(params: GenerationParams | None = None, decorators: Sequence[Decorator] = ()) -> str:
    result = generate(params, decorators)
    w, h = result.canvas_size
    return serialize_svg(
        result.paths,
        w,
        h,
        title=f"{result.style.name} #{result.seed}",
    )


def summarize(result: GenerationResult) -> BuildingSummary:
    w, h = result.canvas_size
    return BuildingSummary(
        seed=result.seed,
        style=result.style.name,
        canvas_width=w,
        canvas_height=h,
        blocks=[
            BlockSummary(
                id=b.id,
                kind=b.kind.value,
                x=b.rect.x,
                y=b.rect.y,
                width=b.rect.w,
                height=b.rect.h,
                priority=b.priority,
                parent=b.parent,
                has_outline=b.outline is not None,
            )
            for b in result.blocks
        ],
        visible_edges=len(result.visible_edges),
        hatch_segments=len(result.hatch_segments),
        paths=len(result.paths),
        errors=result.errors,
    )
