"""G0.02 — Body.

Main mass: width from massiveness, height from verticality, both interpolated
across the style's ranges. Centred horizontally, standing on the bounds floor.
"""

from __future__ import annotations

from archsketch.engine.blocks import make_block
from archsketch.engine.context import BlockKind, GenerationContext, Rect
from archsketch.engine.registry import Layer, stage


@stage(
    id="G0.02",
    layer=Layer.GRAMMAR,
    dependencies=["G0.01"],
    tags={"required"},
    description="Place the main body",
)
def body(ctx: GenerationContext) -> None:
    bounds = ctx.bounds
    style = ctx.style
    harmony = ctx.harmony

    width = bounds.w * style.body_width_ratio.lerp(harmony.massiveness)
    height = bounds.h * style.body_height_ratio.lerp(harmony.verticality)
    rect = Rect(bounds.center_x - width / 2, bounds.bottom - height, width, height)

    ctx.body = make_block(ctx, BlockKind.BODY, rect, depth=1)
