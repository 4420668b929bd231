"""Hatch generation and clipping against arbitrary boundaries.

Line families are generated over a target's bounding box and then clipped to
the exact boundary (rectangle, triangle, arc-capped dome or any simple
polygon) with one inside/outside rule:

  - no crossings → keep the whole line iff its midpoint is inside
  - one crossing → keep the half whose original endpoint is inside
  - two or more  → split at every crossing (sorted along the line) and keep
                   each piece whose midpoint is inside

Splitting at every crossing is what keeps texture inside non-convex ruin and
brutalist silhouettes with several entry/exit points.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import LineString, Polygon, box
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry.base import BaseGeometry
from shapely.prepared import prep

from archsketch.engine.config import EngineConfig
from archsketch.engine.context import (
    NO_CHAMFER,
    Block,
    BlockKind,
    Chamfer,
    HatchConfig,
    HatchSegment,
    HatchSide,
    Rect,
)
from archsketch.models.style import HatchStyle
from archsketch.svg.paths import chamfered_rect_points
from archsketch.utils.geometry import arc_through_points, midpoint, project_onto
from archsketch.utils.random import RandomStream

logger = logging.getLogger(__name__)

Point = tuple[float, float]

# Shorter pieces are crossing-point noise, not hatch lines
_MIN_PIECE = 1e-9


# ---------------------------------------------------------------------------
# Line families
# ---------------------------------------------------------------------------


def parallel_lines(
    bounds: tuple[float, float, float, float],
    center: Point,
    spacing: float,
    angle_deg: float,
) -> NDArray[np.float64]:
    """Parallel lines at ``angle_deg`` (0 = horizontal) covering ``bounds``.

    Returns an Nx4 array of (x1, y1, x2, y2). Lines pass through ``center``
    offset by multiples of ``spacing`` and reach one bounding diagonal either side.
    """
    xmin, ymin, xmax, ymax = bounds
    diagonal = math.hypot(xmax - xmin, ymax - ymin)
    count = math.ceil(diagonal / spacing)

    a = math.radians(angle_deg)
    dx, dy = math.cos(a), math.sin(a)
    nx, ny = -dy, dx

    offsets = np.arange(-count, count + 1, dtype=np.float64) * spacing
    ox = center[0] + offsets * nx
    oy = center[1] + offsets * ny
    return np.column_stack([
        ox - diagonal * dx,
        oy - diagonal * dy,
        ox + diagonal * dx,
        oy + diagonal * dy,
    ])


def random_lines(
    bounds: tuple[float, float, float, float],
    density: float,
    rng: RandomStream,
    config: EngineConfig,
) -> NDArray[np.float64]:
    """Scattered short strokes; each candidate survives with a fixed probability."""
    xmin, ymin, xmax, ymax = bounds
    w, h = xmax - xmin, ymax - ymin
    count = int((w * h) // (density * density * config.random_line_area_factor))

    lines: list[tuple[float, float, float, float]] = []
    for _ in range(count):
        if not rng.chance(config.random_keep_probability):
            continue
        x1 = xmin + rng.random() * w
        y1 = ymin + rng.random() * h
        length = density * (0.5 + rng.random())
        theta = rng.random() * math.pi * 2
        lines.append((x1, y1, x1 + math.cos(theta) * length, y1 + math.sin(theta) * length))

    if not lines:
        return np.empty((0, 4))
    return np.asarray(lines, dtype=np.float64)


def line_family(
    region: Polygon,
    config: HatchConfig,
    rng: RandomStream,
    engine: EngineConfig,
) -> NDArray[np.float64]:
    bounds = region.bounds
    c = region.centroid
    center = (c.x, c.y)

    if config.style == HatchStyle.DIAGONAL:
        return parallel_lines(bounds, center, config.density, config.angle)
    if config.style == HatchStyle.HORIZONTAL:
        return parallel_lines(bounds, center, config.density, 0.0)
    if config.style == HatchStyle.VERTICAL:
        return parallel_lines(bounds, center, config.density, 90.0)
    if config.style == HatchStyle.CROSS:
        spacing = config.density * engine.cross_spacing_factor
        return np.vstack([
            parallel_lines(bounds, center, spacing, 45.0),
            parallel_lines(bounds, center, spacing, -45.0),
        ])
    return random_lines(bounds, config.density, rng, engine)


# ---------------------------------------------------------------------------
# Clipping
# ---------------------------------------------------------------------------


def _crossing_points(geom: BaseGeometry) -> list[Point]:
    """Flatten a line/boundary intersection into points.

    Collinear overlaps come back as line pieces; their ends are the crossings.
    """
    if geom.is_empty:
        return []
    kind = geom.geom_type
    if kind == "Point":
        return [(geom.x, geom.y)]
    if kind == "LineString":
        coords = list(geom.coords)
        return [coords[0], coords[-1]]
    if kind in ("MultiPoint", "MultiLineString", "GeometryCollection"):
        out: list[Point] = []
        for part in geom.geoms:
            out.extend(_crossing_points(part))
        return out
    return []


def clip_segment(p1: Point, p2: Point, region: Polygon, contains=None) -> list[tuple[Point, Point]]:
    """Pieces of segment p1→p2 lying inside ``region``."""
    if contains is None:
        contains = prep(region).contains

    def inside(p: Point) -> bool:
        return contains(ShapelyPoint(p))

    crossings = _crossing_points(LineString([p1, p2]).intersection(region.boundary))

    if not crossings:
        return [(p1, p2)] if inside(midpoint(p1, p2)) else []

    if len(crossings) == 1:
        hit = crossings[0]
        if inside(p1) and inside(midpoint(p1, hit)):
            return [(p1, hit)]
        if inside(p2) and inside(midpoint(hit, p2)):
            return [(hit, p2)]
        return []

    crossings.sort(key=lambda p: project_onto(p, p1, p2))
    stops = [p1, *crossings, p2]
    pieces: list[tuple[Point, Point]] = []
    for a, b in zip(stops, stops[1:]):
        if math.hypot(b[0] - a[0], b[1] - a[1]) < _MIN_PIECE:
            continue
        if inside(midpoint(a, b)):
            pieces.append((a, b))
    return pieces


def _usable(region: BaseGeometry) -> Polygon | None:
    """Return a valid, non-degenerate polygon or None."""
    if region.is_empty:
        return None
    if not region.is_valid:
        logger.debug("Repairing invalid hatch boundary with buffer(0)")
        region = region.buffer(0)
    if region.geom_type != "Polygon":
        # Self-crossing outlines split apart; hatch the largest part
        parts = [g for g in getattr(region, "geoms", []) if g.geom_type == "Polygon"]
        if not parts:
            return None
        region = max(parts, key=lambda g: g.area)
    if region.is_empty or region.area <= 0:
        return None
    return region


def hatch_region(
    region: BaseGeometry,
    config: HatchConfig,
    rng: RandomStream,
    engine: EngineConfig | None = None,
    block_id: int | None = None,
) -> list[HatchSegment]:
    """Generate the configured line family over ``region`` and clip it to the boundary."""
    engine = engine or EngineConfig()
    usable = _usable(region)
    if usable is None:
        return []

    contains = prep(usable).contains
    segments: list[HatchSegment] = []
    for x1, y1, x2, y2 in line_family(usable, config, rng, engine).tolist():
        for a, b in clip_segment((x1, y1), (x2, y2), usable, contains):
            segments.append(HatchSegment(a[0], a[1], b[0], b[1], block_id))
    return segments


# ---------------------------------------------------------------------------
# Target shapes
# ---------------------------------------------------------------------------


def band(rect: Rect, side: HatchSide, coverage: float) -> tuple[float, float, float, float]:
    """(x, y, w, h) of the coverage sub-band on ``side`` of ``rect``."""
    x, y, w, h = rect.x, rect.y, rect.w, rect.h
    if side == HatchSide.LEFT:
        return (x, y, w * coverage, h)
    if side == HatchSide.RIGHT:
        return (x + w * (1 - coverage), y, w * coverage, h)
    if side == HatchSide.TOP:
        return (x, y, w, h * coverage)
    if side == HatchSide.BOTTOM:
        return (x, y + h * (1 - coverage), w, h * coverage)
    return (x, y, w, h)


def hatch_rect(
    rect: Rect,
    config: HatchConfig,
    rng: RandomStream,
    engine: EngineConfig | None = None,
    block_id: int | None = None,
    chamfer: Chamfer = NO_CHAMFER,
) -> list[HatchSegment]:
    """Hatch the side band of ``rect``, minus any chamfered corners."""
    x, y, w, h = band(rect, config.side, config.coverage)
    region = box(x, y, x + w, y + h)
    if chamfer.any:
        region = region.intersection(Polygon(chamfered_rect_points(rect, chamfer)))
    return hatch_region(region, config, rng, engine, block_id)


def hatch_polygon(
    points: Sequence[Point],
    config: HatchConfig,
    rng: RandomStream,
    engine: EngineConfig | None = None,
    block_id: int | None = None,
) -> list[HatchSegment]:
    if len(points) < 3:
        return []
    return hatch_region(Polygon(points), config, rng, engine, block_id)


def hatch_triangle(
    a: Point,
    b: Point,
    c: Point,
    config: HatchConfig,
    rng: RandomStream,
    engine: EngineConfig | None = None,
    block_id: int | None = None,
) -> list[HatchSegment]:
    return hatch_polygon([a, b, c], config, rng, engine, block_id)


def dome_polygon(rect: Rect, samples: int = 48) -> Polygon:
    """Straight base plus the circular cap through both base corners and the apex."""
    arc = arc_through_points(
        (rect.x, rect.bottom),
        (rect.center_x, rect.y),
        (rect.right, rect.bottom),
        samples,
    )
    return Polygon(arc)


def hatch_dome(
    rect: Rect,
    config: HatchConfig,
    rng: RandomStream,
    engine: EngineConfig | None = None,
    block_id: int | None = None,
) -> list[HatchSegment]:
    engine = engine or EngineConfig()
    region = dome_polygon(rect, engine.dome_arc_samples)
    return hatch_region(region, config, rng, engine, block_id)


def spire_triangle(rect: Rect) -> tuple[Point, Point, Point]:
    return ((rect.x, rect.bottom), (rect.center_x, rect.y), (rect.right, rect.bottom))


def hatch_block(
    block: Block,
    config: HatchConfig,
    rng: RandomStream,
    engine: EngineConfig | None = None,
) -> list[HatchSegment]:
    """Hatch one block through the boundary that matches how it is drawn."""
    if block.kind == BlockKind.SPIRE:
        return hatch_triangle(*spire_triangle(block.rect), config, rng, engine, block.id)
    if block.kind == BlockKind.DOME:
        return hatch_dome(block.rect, config, rng, engine, block.id)
    if block.outline is not None and len(block.outline) > 2:
        return hatch_polygon(block.outline, config, rng, engine, block.id)
    return hatch_rect(block.rect, config, rng, engine, block.id, block.chamfer)
