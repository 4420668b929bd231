"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def project_onto(
    point: tuple[float, float],
    start: tuple[float, float],
    end: tuple[float, float],
) -> float:
    """Parameter t of ``point`` along the segment start→end (0 at start, 1 at end)."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    length_sq = dx * dx + dy * dy
    if length_sq < 1e-12:
        return 0.0
    return ((point[0] - start[0]) * dx + (point[1] - start[1]) * dy) / length_sq


def midpoint(a: tuple[float, float], b: tuple[float, float]) -> tuple[float, float]:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def circle_through_points(
    a: tuple[float, float],
    b: tuple[float, float],
    c: tuple[float, float],
) -> tuple[float, float, float] | None:
    """Circumcircle (cx, cy, r) of three points, or None when they are collinear."""
    ax, ay = a
    bx, by = b
    cx, cy = c
    d = 2 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
    if abs(d) < 1e-12:
        return None
    a_sq = ax * ax + ay * ay
    b_sq = bx * bx + by * by
    c_sq = cx * cx + cy * cy
    ux = (a_sq * (by - cy) + b_sq * (cy - ay) + c_sq * (ay - by)) / d
    uy = (a_sq * (cx - bx) + b_sq * (ax - cx) + c_sq * (bx - ax)) / d
    return (ux, uy, math.hypot(ax - ux, ay - uy))


def arc_through_points(
    start: tuple[float, float],
    through: tuple[float, float],
    end: tuple[float, float],
    samples: int = 48,
) -> NDArray[np.float64]:
    """Sample the circular arc from ``start`` to ``end`` passing through ``through``.

    Returns an (samples+1)x2 array that begins exactly at ``start`` and ends
    exactly at ``end``. Collinear input degrades to the straight polyline.
    """
    circle = circle_through_points(start, through, end)
    if circle is None:
        return np.array([start, through, end], dtype=np.float64)

    cx, cy, r = circle
    a0 = math.atan2(start[1] - cy, start[0] - cx)
    a1 = math.atan2(through[1] - cy, through[0] - cx)
    a2 = math.atan2(end[1] - cy, end[0] - cx)

    # Sweep counter-clockwise from a0; flip to clockwise if `through` is not on that sweep
    tau = 2 * math.pi
    sweep_end = (a2 - a0) % tau
    sweep_mid = (a1 - a0) % tau
    if sweep_mid > sweep_end:
        sweep_end -= tau

    angles = a0 + np.linspace(0.0, sweep_end, samples + 1)
    pts = np.column_stack([cx + r * np.cos(angles), cy + r * np.sin(angles)])
    pts[0] = start
    pts[-1] = end
    return pts
