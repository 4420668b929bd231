"""Block, edge and hatch geometry → StrokePath conversion.

Closed shapes start at the top-left and run clockwise (screen coordinates).
"""

from __future__ import annotations

from archsketch.engine.context import (
    Block,
    BlockKind,
    Chamfer,
    Edge,
    HatchSegment,
    Rect,
    StrokePath,
)
from archsketch.utils.geometry import arc_through_points

Point = tuple[float, float]


def chamfered_rect_points(rect: Rect, chamfer: Chamfer) -> list[Point]:
    x, y, w, h = rect.x, rect.y, rect.w, rect.h
    c = chamfer
    pts: list[Point] = []

    if c.tl > 0:
        pts += [(x, y + c.tl), (x + c.tl, y)]
    else:
        pts.append((x, y))

    if c.tr > 0:
        pts += [(x + w - c.tr, y), (x + w, y + c.tr)]
    else:
        pts.append((x + w, y))

    if c.br > 0:
        pts += [(x + w, y + h - c.br), (x + w - c.br, y + h)]
    else:
        pts.append((x + w, y + h))

    if c.bl > 0:
        pts += [(x + c.bl, y + h), (x, y + h - c.bl)]
    else:
        pts.append((x, y + h))

    return pts


def dome_arc_points(rect: Rect, samples: int = 48) -> list[Point]:
    arc = arc_through_points(
        (rect.x, rect.bottom),
        (rect.center_x, rect.y),
        (rect.right, rect.bottom),
        samples,
    )
    return [(float(px), float(py)) for px, py in arc]


def spire_points(rect: Rect) -> list[Point]:
    return [(rect.x, rect.bottom), (rect.center_x, rect.y), (rect.right, rect.bottom)]


def block_fill_path(
    block: Block,
    stroke_width: float,
    fill: str = "white",
    arc_samples: int = 48,
) -> StrokePath:
    """Closed, filled silhouette of a block for back-to-front compositing."""
    if block.kind == BlockKind.DOME:
        pts = dome_arc_points(block.rect, arc_samples)
    elif block.kind == BlockKind.SPIRE:
        pts = spire_points(block.rect)
    elif block.outline is not None and len(block.outline) > 2:
        pts = list(block.outline)
    else:
        pts = chamfered_rect_points(block.rect, block.chamfer)

    return StrokePath(
        points=tuple(pts),
        stroke_width=stroke_width,
        closed=True,
        fill=fill,
        role="fill",
        block_id=block.id,
    )


def dome_stroke_path(block: Block, stroke_width: float, arc_samples: int = 48) -> StrokePath:
    """Open cap only; the base line is hidden behind the body roof."""
    return StrokePath(
        points=tuple(dome_arc_points(block.rect, arc_samples)),
        stroke_width=stroke_width,
        role="dome",
        block_id=block.id,
    )


def spire_stroke_paths(block: Block, stroke_width: float) -> list[StrokePath]:
    left, apex, right = spire_points(block.rect)
    return [
        StrokePath(points=(left, apex), stroke_width=stroke_width, role="spire", block_id=block.id),
        StrokePath(points=(apex, right), stroke_width=stroke_width, role="spire", block_id=block.id),
    ]


def edge_path(edge: Edge, stroke_width: float) -> StrokePath:
    return StrokePath(
        points=edge.endpoints(),
        stroke_width=stroke_width,
        role="edge",
        block_id=edge.block_id,
    )


def hatch_path(segment: HatchSegment, stroke_width: float) -> StrokePath:
    return StrokePath(
        points=((segment.x1, segment.y1), (segment.x2, segment.y2)),
        stroke_width=stroke_width,
        role="hatch",
        block_id=segment.block_id,
    )
