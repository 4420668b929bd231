"""G0.03 — Base.

Ground-floor band at the bottom of the body. Always carries the door.
"""

from __future__ import annotations

from archsketch.engine.blocks import make_block
from archsketch.engine.context import BlockKind, GenerationContext, Rect
from archsketch.engine.registry import Layer, stage


@stage(
    id="G0.03",
    layer=Layer.GRAMMAR,
    dependencies=["G0.02"],
    tags={"required"},
    description="Place the base band inside the body",
)
def base(ctx: GenerationContext) -> None:
    # The nominal body rectangle, not an outline bbox, anchors the base
    body = ctx.body
    height = body.rect.h * ctx.style.base_height_ratio
    rect = Rect(body.rect.x, body.rect.bottom - height, body.rect.w, height)

    make_block(
        ctx,
        BlockKind.BASE,
        rect,
        depth=2,
        parent=body,
        has_door=True,
        has_windows=False,
    )
