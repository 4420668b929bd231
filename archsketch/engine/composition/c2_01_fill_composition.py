"""C2.01 — Fill composition.

Two passes, back to front: every block's white silhouette first so later
blocks occlude earlier ones, then every block's hatching and decorations on
top of all fills.
"""

from __future__ import annotations

from archsketch.engine.composition._details import detail_paths
from archsketch.engine.context import GenerationContext
from archsketch.engine.registry import Layer, stage
from archsketch.svg.paths import block_fill_path


@stage(
    id="C2.01",
    layer=Layer.COMPOSITION,
    dependencies=["G0.08", "R1.03"],
    description="Composite filled silhouettes back to front",
)
def fill_composition(ctx: GenerationContext) -> None:
    options = ctx.options
    for block in ctx.blocks:
        ctx.paths.append(
            block_fill_path(
                block,
                options.stroke_width,
                fill=options.fill_color,
                arc_samples=ctx.config.dome_arc_samples,
            )
        )
    ctx.paths.extend(detail_paths(ctx))
