"""C2.02 — Line-art composition.

Visible straight edges, then dome caps and spire flanks, then details.
"""

from __future__ import annotations

from archsketch.engine.composition._details import detail_paths
from archsketch.engine.context import BlockKind, GenerationContext
from archsketch.engine.registry import Layer, stage
from archsketch.svg.paths import dome_stroke_path, edge_path, spire_stroke_paths


@stage(
    id="C2.02",
    layer=Layer.COMPOSITION,
    dependencies=["R1.02", "R1.03"],
    description="Compose pure line art from visible edges",
)
def line_art(ctx: GenerationContext) -> None:
    width = ctx.options.stroke_width
    ctx.paths.extend(edge_path(e, width) for e in ctx.visible_edges)

    for block in ctx.blocks:
        if block.kind == BlockKind.DOME:
            ctx.paths.append(dome_stroke_path(block, width, ctx.config.dome_arc_samples))
        elif block.kind == BlockKind.SPIRE:
            ctx.paths.extend(spire_stroke_paths(block, width))

    ctx.paths.extend(detail_paths(ctx))
