"""Per-block detail pass shared by both compositors: hatching, then decorations."""

from __future__ import annotations

from collections import defaultdict

from archsketch.engine.context import GenerationContext, HatchSegment, StrokePath
from archsketch.svg.paths import hatch_path


def detail_paths(ctx: GenerationContext) -> list[StrokePath]:
    options = ctx.options
    hatch_width = options.stroke_width * ctx.config.hatch_stroke_ratio

    by_block: dict[int | None, list[HatchSegment]] = defaultdict(list)
    for segment in ctx.hatch_segments:
        by_block[segment.block_id].append(segment)

    paths: list[StrokePath] = []
    for block in ctx.blocks:
        paths.extend(hatch_path(s, hatch_width) for s in by_block.get(block.id, ()))
        for decorate in options.decorators:
            paths.extend(decorate(block, ctx.style, options.stroke_width, ctx.reserved))
    return paths
