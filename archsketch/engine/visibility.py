"""Straight-edge extraction and painter's-order visibility for line-art output.

For pure line art there are no fills to hide what lies behind, so every
straight edge is tested against the blocks composited after its owner:

  1. both endpoints inside a front block's rectangle → hidden
  2. lying along a front block's wall → the front block draws the seam
  3. otherwise → kept

Domes and spires never take part; they are drawn through their own paths.
Only valid for axis-aligned rectangles with chamfered corners.
"""

from __future__ import annotations

from collections.abc import Sequence

from archsketch.engine.context import Block, Edge, EdgeSide


def block_edges(block: Block) -> list[Edge]:
    """Straight edges of a block, clockwise from the top-left corner.

    An outline block contributes its polygon sides; otherwise the four sides
    are shortened by, and joined through, any chamfer diagonals.
    """
    if block.is_curved_or_pointed:
        return []

    if block.outline is not None:
        pts = block.outline
        return [
            Edge(*pts[i], *pts[(i + 1) % len(pts)], block_id=block.id, side=EdgeSide.OUTLINE)
            for i in range(len(pts))
        ]

    r = block.rect
    c = block.chamfer
    x, y, w, h = r.x, r.y, r.w, r.h
    bid = block.id
    edges: list[Edge] = []

    if c.tl > 0:
        edges.append(Edge(x, y + c.tl, x + c.tl, y, bid, EdgeSide.CHAMFER_TL))
    if x + w - c.tr > x + c.tl:
        edges.append(Edge(x + c.tl, y, x + w - c.tr, y, bid, EdgeSide.TOP))
    if c.tr > 0:
        edges.append(Edge(x + w - c.tr, y, x + w, y + c.tr, bid, EdgeSide.CHAMFER_TR))

    edges.append(Edge(x + w, y + c.tr, x + w, y + h - c.br, bid, EdgeSide.RIGHT))

    if c.br > 0:
        edges.append(Edge(x + w, y + h - c.br, x + w - c.br, y + h, bid, EdgeSide.CHAMFER_BR))
    if x + w - c.br > x + c.bl:
        edges.append(Edge(x + w - c.br, y + h, x + c.bl, y + h, bid, EdgeSide.BOTTOM))
    if c.bl > 0:
        edges.append(Edge(x + c.bl, y + h, x, y + h - c.bl, bid, EdgeSide.CHAMFER_BL))

    edges.append(Edge(x, y + h - c.bl, x, y + c.tl, bid, EdgeSide.LEFT))
    return edges


def edge_inside_block(edge: Edge, block: Block, tolerance: float) -> bool:
    """Both endpoints within ``block``'s rectangle (grown by ``tolerance``)."""
    if edge.block_id == block.id:
        return False
    r = block.rect
    return r.contains_point(edge.x1, edge.y1, tolerance) and r.contains_point(
        edge.x2, edge.y2, tolerance
    )


def edge_on_block_boundary(edge: Edge, block: Block, tolerance: float) -> bool:
    """Edge runs along one of ``block``'s walls and stays within its extent."""
    if edge.block_id == block.id:
        return False
    r = block.rect

    if abs(edge.y1 - edge.y2) < tolerance:
        if abs(edge.y1 - r.y) < tolerance or abs(edge.y1 - r.bottom) < tolerance:
            lo, hi = sorted((edge.x1, edge.x2))
            return lo >= r.x - tolerance and hi <= r.right + tolerance

    if abs(edge.x1 - edge.x2) < tolerance:
        if abs(edge.x1 - r.x) < tolerance or abs(edge.x1 - r.right) < tolerance:
            lo, hi = sorted((edge.y1, edge.y2))
            return lo >= r.y - tolerance and hi <= r.bottom + tolerance

    return False


def extract_edges(blocks: Sequence[Block]) -> list[Edge]:
    edges: list[Edge] = []
    for block in blocks:
        edges.extend(block_edges(block))
    return edges


def filter_edges(
    edges: Sequence[Edge],
    blocks: Sequence[Block],
    inside_tolerance: float = 1.0,
    seam_tolerance: float = 2.0,
) -> list[Edge]:
    """Keep only edges that no later (front) block hides or already draws.

    ``blocks`` must already be in render order; an edge is only ever tested
    against blocks strictly after its owner.
    """
    index_of = {b.id: i for i, b in enumerate(blocks)}
    kept: list[Edge] = []

    for edge in edges:
        start = index_of[edge.block_id] + 1
        visible = True
        for front in blocks[start:]:
            if front.is_curved_or_pointed:
                continue
            if edge_inside_block(edge, front, inside_tolerance):
                visible = False
                break
            if edge_on_block_boundary(edge, front, seam_tolerance):
                visible = False
                break
        if visible:
            kept.append(edge)

    return kept
