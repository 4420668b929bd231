"""G0.04 — Wings.

Optional mirrored pair flush against the body's sides, sharing its baseline.
"""

from __future__ import annotations

from archsketch.engine.blocks import make_block
from archsketch.engine.context import BlockKind, GenerationContext, Rect, Side
from archsketch.engine.registry import Layer, stage


@stage(
    id="G0.04",
    layer=Layer.GRAMMAR,
    dependencies=["G0.03"],
    tags={"required"},
    description="Add a mirrored pair of wings",
)
def wings(ctx: GenerationContext) -> None:
    if not ctx.rng.chance(ctx.style.wing_probability):
        return

    style = ctx.style
    harmony = ctx.harmony
    body = ctx.body.rect

    width = body.w * style.wing_width_ratio.lerp(harmony.wing_width)
    height = body.h * style.wing_height_ratio.lerp(harmony.wing_height)
    top = ctx.bounds.bottom - height

    left = make_block(
        ctx, BlockKind.WING, Rect(body.x - width, top, width, height), side=Side.LEFT
    )
    right = make_block(
        ctx, BlockKind.WING, Rect(body.right, top, width, height), side=Side.RIGHT
    )
    ctx.wings = (left, right)
