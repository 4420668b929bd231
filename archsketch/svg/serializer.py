"""Write plotter-ready SVG from composed stroke paths."""

from __future__ import annotations

from collections.abc import Sequence
from xml.sax.saxutils import escape

from archsketch.engine.context import StrokePath

STROKE_COLOR = "#1a1a1a"


def _fmt(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def path_data(path: StrokePath) -> str:
    """SVG ``d`` attribute: absolute M/L commands, Z when closed."""
    if not path.points:
        return ""
    head, *tail = path.points
    parts = [f"M{_fmt(head[0])} {_fmt(head[1])}"]
    parts.extend(f"L{_fmt(x)} {_fmt(y)}" for x, y in tail)
    if path.closed:
        parts.append("Z")
    return " ".join(parts)


def serialize_svg(
    paths: Sequence[StrokePath],
    canvas_w: float,
    canvas_h: float,
    title: str = "",
    description: str = "",
    styles: dict[str, str] | None = None,
) -> str:
    """Generate SVG markup, one <path> per stroke path, in draw order."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg viewBox="0 0 {_fmt(canvas_w)} {_fmt(canvas_h)}"'
        f' width="{_fmt(canvas_w)}" height="{_fmt(canvas_h)}"'
        ' xmlns="http://www.w3.org/2000/svg" role="img">',
    ]

    if title:
        lines.append(f"  <title>{escape(title)}</title>")
    if description:
        lines.append(f"  <desc>{escape(description)}</desc>")

    if styles:
        lines.append("  <style>")
        for selector, props in styles.items():
            lines.append(f"    {selector} {{ {props} }}")
        lines.append("  </style>")

    for path in paths:
        d = path_data(path)
        if not d:
            continue
        attrs = {
            "d": d,
            "class": path.role,
            "fill": path.fill or "none",
            "stroke": STROKE_COLOR,
            "stroke-width": _fmt(path.stroke_width),
            "stroke-linecap": "round",
            "stroke-linejoin": "round",
        }
        attr_str = " ".join(f'{k}="{v}"' for k, v in attrs.items())
        lines.append(f"  <path {attr_str} />")

    lines.append("</svg>")
    return "\n".join(lines)
