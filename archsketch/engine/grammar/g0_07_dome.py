"""G0.07 — Dome.

Baroque/classical cap centred on the body's roof line.
"""

from __future__ import annotations

from archsketch.engine.blocks import make_block
from archsketch.engine.context import BlockKind, GenerationContext, Rect
from archsketch.engine.registry import Layer, stage

_DOME_PROBABILITY = 0.7


@stage(
    id="G0.07",
    layer=Layer.GRAMMAR,
    dependencies=["G0.06"],
    tags={"required"},
    description="Add a dome above the body",
)
def dome(ctx: GenerationContext) -> None:
    if not (ctx.style.use_dome and ctx.rng.chance(_DOME_PROBABILITY)):
        return

    body = ctx.body.rect
    width = body.w * ctx.rng.uniform(0.3, 0.5)
    height = width * ctx.rng.uniform(0.4, 0.6)

    make_block(
        ctx,
        BlockKind.DOME,
        Rect(ctx.bounds.center_x - width / 2, body.y - height, width, height),
        has_windows=False,
        allow_outline=False,
    )
