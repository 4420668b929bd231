"""R1.03 — Hatching.

Clip the active hatch family to each hatchable block's drawn boundary.
Rectangular blocks honour the side band and coverage of the render options;
every other boundary is hatched whole.
"""

from __future__ import annotations

from archsketch.engine.context import GenerationContext
from archsketch.engine.hatching import hatch_block
from archsketch.engine.registry import Layer, stage


@stage(
    id="R1.03",
    layer=Layer.RESOLUTION,
    dependencies=["G0.08"],
    description="Generate clipped hatch segments per block",
)
def hatching(ctx: GenerationContext) -> None:
    config = ctx.options.hatch
    for block in ctx.blocks:
        if block.has_hatching:
            ctx.hatch_segments.extend(hatch_block(block, config, ctx.rng, ctx.config))
