"""Decoration seam — reserved-area bookkeeping and the glyph-drawer protocol.

Window, door and ornament drawers live outside the engine. They are handed a
ReservedAreas instance owned by the current generation: ornaments reserve
space first, doors and windows then skip anything already taken.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from archsketch.engine.context import Block, Rect, StrokePath
    from archsketch.models.style import Style


class ReservedAreas:
    """Rectangles already claimed by decorations during one generation."""

    def __init__(self, padding: float = 5.0) -> None:
        self.padding = padding
        self._areas: list[Rect] = []

    def clear(self) -> None:
        self._areas.clear()

    def reserve(self, rect: Rect) -> None:
        self._areas.append(rect)

    def is_free(self, rect: Rect, padding: float | None = None) -> bool:
        pad = self.padding if padding is None else padding
        x0, y0 = rect.x - pad, rect.y - pad
        x1, y1 = rect.x + rect.w + pad, rect.y + rect.h + pad
        for other in self._areas:
            if not (x1 < other.x or other.x + other.w < x0 or y1 < other.y or other.y + other.h < y0):
                return False
        return True

    def __len__(self) -> int:
        return len(self._areas)


class Decorator(Protocol):
    """External glyph drawer: one block in, stroke paths out."""

    def __call__(
        self,
        block: Block,
        style: Style,
        stroke_width: float,
        reserved: ReservedAreas,
    ) -> list[StrokePath]: ...
