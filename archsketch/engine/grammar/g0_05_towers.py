"""G0.05 — Towers.

Tower count is drawn from the style's range, then placed by a fixed policy:

  1  → on the wing favoured by left bias (30%, wings only), else centred
  2  → one per wing (40%, wings only), else a pair offset 0.25-0.4 × body width
  3  → centred tower plus one per wing (50%, wings only) or a 0.35 × width pair
  4+ → a 0.3 × width pair plus one per wing; positions beyond the count drop

Wing towers are 0.7× as tall. Each tower may carry a spire.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from archsketch.engine.blocks import add_spire, make_block
from archsketch.engine.context import Block, BlockKind, GenerationContext, Rect
from archsketch.engine.harmony import Harmony
from archsketch.engine.registry import Layer, stage
from archsketch.utils.random import RandomStream, lerp

logger = logging.getLogger(__name__)

_WING_HEIGHT_FACTOR = 0.7
_SPIRE_PROBABILITY = 0.8


@dataclass(frozen=True)
class TowerSlot:
    x: float  # centre line
    base_y: float
    on_wing: bool


def _on_wing(wing: Block) -> TowerSlot:
    return TowerSlot(wing.rect.center_x, wing.rect.y, True)


def tower_slots(
    count: int,
    harmony: Harmony,
    body: Rect,
    wings: tuple[Block, Block] | None,
    rng: RandomStream,
) -> list[TowerSlot]:
    if count <= 0:
        return []

    center = body.center_x
    slots: list[TowerSlot] = []

    def pair(offset: float) -> None:
        slots.append(TowerSlot(center - offset, body.y, False))
        slots.append(TowerSlot(center + offset, body.y, False))

    # Draws are short-circuited when there are no wings
    if count == 1:
        if wings and rng.chance(0.3):
            left, right = wings
            slots.append(_on_wing(left if harmony.left_bias > 0.5 else right))
        else:
            slots.append(TowerSlot(center, body.y, False))
    elif count == 2:
        if wings and rng.chance(0.4):
            slots.extend(_on_wing(w) for w in wings)
        else:
            pair(body.w * lerp(0.25, 0.4, harmony.symmetry))
    elif count == 3:
        slots.append(TowerSlot(center, body.y, False))
        if wings and rng.chance(0.5):
            slots.extend(_on_wing(w) for w in wings)
        else:
            pair(body.w * 0.35)
    else:
        pair(body.w * 0.3)
        if wings:
            slots.extend(_on_wing(w) for w in wings)

    return slots[:count]


@stage(
    id="G0.05",
    layer=Layer.GRAMMAR,
    dependencies=["G0.04"],
    tags={"required"},
    description="Place towers and their spires",
)
def towers(ctx: GenerationContext) -> None:
    style = ctx.style
    if not ctx.rng.chance(style.tower_probability):
        return

    count = style.tower_count.clamp(ctx.rng.integer(style.tower_count.min, style.tower_count.max))
    body = ctx.body.rect
    slots = tower_slots(count, ctx.harmony, body, ctx.wings, ctx.rng)
    logger.debug("Placing %d of %d requested towers", len(slots), count)

    for slot in slots:
        width = body.w * style.tower_width_ratio.lerp(ctx.harmony.tower_width)
        height = body.h * style.tower_height_ratio.lerp(ctx.harmony.tower_height)
        if slot.on_wing:
            height *= _WING_HEIGHT_FACTOR

        tower = make_block(
            ctx,
            BlockKind.TOWER,
            Rect(slot.x - width / 2, slot.base_y - height, width, height),
        )

        if style.use_spires and ctx.rng.chance(_SPIRE_PROBABILITY):
            add_spire(ctx, tower)
