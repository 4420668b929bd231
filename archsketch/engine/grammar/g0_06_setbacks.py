"""G0.06 — Setbacks.

Stack progressively narrower tiers on top of the body (each 70-85% of the tier
below, 10-20% of body height tall), optionally crowned by one spire.
"""

from __future__ import annotations

from archsketch.engine.blocks import add_spire, make_block
from archsketch.engine.context import BlockKind, GenerationContext, Rect
from archsketch.engine.registry import Layer, stage

_CROWN_SPIRE_PROBABILITY = 0.6


@stage(
    id="G0.06",
    layer=Layer.GRAMMAR,
    dependencies=["G0.05"],
    tags={"required"},
    description="Stack setback tiers above the body",
)
def setbacks(ctx: GenerationContext) -> None:
    style = ctx.style
    if style.setback_levels <= 0:
        return

    body = ctx.body.rect
    center = ctx.bounds.center_x
    width = body.w
    top = body.y

    for _ in range(style.setback_levels):
        width *= ctx.rng.uniform(0.7, 0.85)
        height = body.h * ctx.rng.uniform(0.1, 0.2)
        top -= height
        ctx.top_setback = make_block(
            ctx,
            BlockKind.SETBACK,
            Rect(center - width / 2, top, width, height),
        )

    if style.use_spires and ctx.rng.chance(_CROWN_SPIRE_PROBABILITY):
        add_spire(ctx, ctx.top_setback)
