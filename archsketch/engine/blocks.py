"""Block construction — chamfer policy, irregular outlines and spire geometry.

Every Block of a building is made here so the invariants hold in one place:
chamfers stay under half the shorter side, an outline is generated once at
creation, and its bounding box becomes the block's rectangle.
"""

from __future__ import annotations

import enum
import math

from archsketch.engine.config import EngineConfig
from archsketch.engine.context import (
    NO_CHAMFER,
    Block,
    BlockKind,
    Chamfer,
    GenerationContext,
    Rect,
    Side,
)
from archsketch.models.style import Style
from archsketch.utils.random import RandomStream

# Kinds whose silhouette may be broken up by an irregular outline
OUTLINE_KINDS = frozenset({BlockKind.BODY, BlockKind.WING, BlockKind.TOWER})

Point = tuple[float, float]


class OutlineKind(str, enum.Enum):
    NONE = "none"
    RUIN = "ruin"
    BRUTALIST = "brutalist"


def outline_kind(style: Style) -> OutlineKind:
    """Which irregular outline generator, if any, the style calls for."""
    if style.is_ruin:
        return OutlineKind.RUIN
    if style.is_brutalist:
        return OutlineKind.BRUTALIST
    if style.decay > 0:
        return OutlineKind.RUIN
    return OutlineKind.NONE


def chamfer_for(style: Style, kind: BlockKind, rect: Rect, config: EngineConfig) -> Chamfer:
    amount = style.chamfer_amount * config.chamfer_scale
    if kind in (BlockKind.TOWER, BlockKind.SETBACK):
        top = amount
    elif kind == BlockKind.BODY:
        top = amount * 0.5
    else:
        return NO_CHAMFER

    top = min(top, config.max_chamfer_fraction * min(rect.w, rect.h))
    if top <= 0:
        return NO_CHAMFER
    return Chamfer(tl=top, tr=top, bl=0.0, br=0.0)


def ruin_outline(rect: Rect, decay: float, rng: RandomStream) -> list[Point]:
    """Closed polygon with a jagged top, jittered sides and chipped bottom corners."""
    x, y, w, h = rect.x, rect.y, rect.w, rect.h
    top_variation = h * decay * 0.5
    segments = rng.integer(5, 8)
    points: list[Point] = []

    # Bottom-left, possibly with a missing chunk
    if rng.chance(decay * 0.3):
        left_floor = y + h * 0.7
        points.append((x + w * 0.1, y + h))
        points.append((x + w * 0.1, left_floor))
        points.append((x, left_floor))
    else:
        left_floor = y + h
        points.append((x, y + h))

    # Left side, bottom to top, jitter only inward
    left_steps = rng.integer(2, 3)
    for i in range(left_steps, 0, -1):
        py = y + (h * i / left_steps) * 0.9
        px = x + (rng.random() - 0.5) * w * 0.05 * decay
        if py < left_floor:
            points.append((max(x, px), py))

    # Jagged top; tapering to zero at both ends keeps (x, y) and (x+w, y) exact
    for i in range(segments + 1):
        t = i / segments
        px = x + w * t
        edge_factor = 1 - abs(t - 0.5) * 2
        py = y + top_variation * edge_factor * (0.5 + rng.random() * 0.5)
        if 0 < i < segments and rng.chance(decay * 0.2):
            notch = w * 0.02
            points.append((px - notch, py))
            points.append((px, py + h * 0.1))
            points.append((px + notch, py))
        else:
            points.append((px, py))

    right_floor = y + h * 0.8 if rng.chance(decay * 0.3) else y + h

    # Right side, top to bottom
    right_steps = rng.integer(2, 3)
    for i in range(1, right_steps + 1):
        py = y + (h * i / right_steps) * 0.9
        px = x + w + (rng.random() - 0.5) * w * 0.05 * decay
        if py < right_floor:
            points.append((min(x + w, px), py))

    if right_floor < y + h:
        points.append((x + w, right_floor))
        points.append((x + w * 0.9, right_floor))
        points.append((x + w * 0.9, y + h))
    else:
        points.append((x + w, y + h))

    return points


def brutalist_outline(rect: Rect, rng: RandomStream) -> list[Point]:
    """Closed polygon with stepped side indents and an optional angular top notch."""
    x, y, w, h = rect.x, rect.y, rect.w, rect.h
    step_count = rng.integer(2, 4)
    step = w * 0.05
    levels = [y + h * (i / step_count) * 0.8 for i in range(step_count + 1)]
    points: list[Point] = [(x, y + h)]
    if step_count % 2 == 1:
        points.append((x, levels[-1]))

    # Left side: bands from levels[i] up to levels[i-1], odd bands indented
    for i in range(step_count, 0, -1):
        px = x + (step if i % 2 == 1 else 0.0)
        points.append((px, levels[i]))
        points.append((px, levels[i - 1]))

    if rng.chance(0.5):
        points.append((x + w * 0.3, y))
        points.append((x + w * 0.35, y + h * 0.05))
        points.append((x + w * 0.65, y + h * 0.05))
        points.append((x + w * 0.7, y))

    # Right side mirrored, top to bottom
    for i in range(1, step_count + 1):
        px = x + w - (step if i % 2 == 1 else 0.0)
        points.append((px, levels[i - 1]))
        points.append((px, levels[i]))

    if step_count % 2 == 1:
        points.append((x + w, levels[-1]))
    points.append((x + w, y + h))
    return _drop_repeats(points)


def _drop_repeats(points: list[Point]) -> list[Point]:
    out: list[Point] = []
    for p in points:
        if not out or out[-1] != p:
            out.append(p)
    if len(out) > 1 and out[0] == out[-1]:
        out.pop()
    return out


def irregular_outline(ctx: GenerationContext, kind: BlockKind, rect: Rect) -> list[Point] | None:
    if kind not in OUTLINE_KINDS:
        return None
    which = outline_kind(ctx.style)
    if which == OutlineKind.RUIN:
        return ruin_outline(rect, ctx.style.decay, ctx.rng)
    if which == OutlineKind.BRUTALIST:
        return brutalist_outline(rect, ctx.rng)
    return None


def make_block(
    ctx: GenerationContext,
    kind: BlockKind,
    rect: Rect,
    *,
    depth: int = 1,
    parent: Block | None = None,
    side: Side | None = None,
    has_windows: bool = True,
    has_door: bool = False,
    has_ornaments: bool = True,
    allow_outline: bool = True,
) -> Block:
    """Create a block, append it to the context and return it."""
    outline = irregular_outline(ctx, kind, rect) if allow_outline else None
    if outline is not None:
        rect = Rect.from_points(outline)

    block = Block(
        id=ctx.next_block_id(),
        kind=kind,
        rect=rect,
        chamfer=chamfer_for(ctx.style, kind, rect, ctx.config),
        outline=tuple(outline) if outline is not None else None,
        depth=depth,
        parent=parent.id if parent is not None else None,
        side=side,
        has_windows=has_windows,
        has_door=has_door,
        has_ornaments=has_ornaments,
    )
    ctx.blocks.append(block)
    return block


def spire_rect(base: Rect, apex_angle_deg: float) -> Rect:
    """Isosceles spire as wide as ``base``: height = (w/2) / tan(apex/2)."""
    half_angle = math.radians(apex_angle_deg) / 2
    height = (base.w / 2) / math.tan(half_angle)
    return Rect(base.x, base.y - height, base.w, height)


def add_spire(ctx: GenerationContext, below: Block) -> Block:
    return make_block(
        ctx,
        BlockKind.SPIRE,
        spire_rect(below.rect, ctx.style.spire_angle),
        depth=2,
        parent=below,
        has_windows=False,
        has_ornaments=False,
        allow_outline=False,
    )
