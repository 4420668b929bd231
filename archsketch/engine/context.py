"""GenerationContext — the single mutable state object flowing through all stages.

Blocks, edges and hatch segments are immutable values; only the context's
lists grow while one generation runs. Nothing here outlives a generation.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from archsketch.engine.config import EngineConfig
from archsketch.engine.decoration import Decorator, ReservedAreas
from archsketch.models.style import HatchStyle, Style
from archsketch.utils.geometry import bbox
from archsketch.utils.random import RandomStream

if TYPE_CHECKING:
    from archsketch.engine.harmony import Harmony


class BlockKind(str, enum.Enum):
    BUILDING = "building"
    BODY = "body"
    WING = "wing"
    TOWER = "tower"
    SETBACK = "setback"
    BASE = "base"
    CROWN = "crown"
    DOME = "dome"
    SPIRE = "spire"
    FLOOR = "floor"
    BAY = "bay"


# Back (low) to front (high). Kinds without a slot composite with the base.
LAYER_PRIORITY: dict[BlockKind, int] = {
    BlockKind.BUILDING: 0,
    BlockKind.FLOOR: 0,
    BlockKind.BAY: 0,
    BlockKind.BASE: 0,
    BlockKind.WING: 1,
    BlockKind.BODY: 2,
    BlockKind.SETBACK: 3,
    BlockKind.TOWER: 4,
    BlockKind.CROWN: 5,
    BlockKind.DOME: 6,
    BlockKind.SPIRE: 7,
}


class Side(str, enum.Enum):
    LEFT = "left"
    RIGHT = "right"


class EdgeSide(str, enum.Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"
    CHAMFER_TL = "chamfer-tl"
    CHAMFER_TR = "chamfer-tr"
    CHAMFER_BL = "chamfer-bl"
    CHAMFER_BR = "chamfer-br"
    OUTLINE = "outline"


class HatchSide(str, enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"
    ALL = "all"


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    def __post_init__(self) -> None:
        if not (self.w > 0 and self.h > 0):
            raise ValueError(f"Rect needs positive size, got w={self.w} h={self.h}")

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center_x(self) -> float:
        return self.x + self.w / 2

    def contains_point(self, px: float, py: float, tolerance: float = 0.0) -> bool:
        return (
            self.x - tolerance <= px <= self.right + tolerance
            and self.y - tolerance <= py <= self.bottom + tolerance
        )

    @classmethod
    def from_points(cls, points: Sequence[tuple[float, float]]) -> Rect:
        xmin, ymin, xmax, ymax = bbox(np.asarray(points, dtype=np.float64))
        return cls(xmin, ymin, xmax - xmin, ymax - ymin)


@dataclass(frozen=True)
class Chamfer:
    tl: float = 0.0
    tr: float = 0.0
    bl: float = 0.0
    br: float = 0.0

    @property
    def any(self) -> bool:
        return self.tl > 0 or self.tr > 0 or self.bl > 0 or self.br > 0


NO_CHAMFER = Chamfer()


@dataclass(frozen=True)
class Block:
    """One mass volume. Created once by the grammar, never mutated."""

    id: int
    kind: BlockKind
    rect: Rect
    chamfer: Chamfer = NO_CHAMFER
    # Polygon that supersedes `rect` when drawing; `rect` is its bounding box
    outline: tuple[tuple[float, float], ...] | None = None
    depth: int = 0
    parent: int | None = None
    side: Side | None = None
    has_windows: bool = True
    has_door: bool = False
    has_ornaments: bool = True
    has_hatching: bool = True

    @property
    def priority(self) -> int:
        return LAYER_PRIORITY[self.kind]

    @property
    def is_curved_or_pointed(self) -> bool:
        """Domes and spires are drawn through their own paths, not straight edges."""
        return self.kind in (BlockKind.DOME, BlockKind.SPIRE)


@dataclass(frozen=True)
class Edge:
    x1: float
    y1: float
    x2: float
    y2: float
    block_id: int
    side: EdgeSide

    def endpoints(self) -> tuple[tuple[float, float], tuple[float, float]]:
        return ((self.x1, self.y1), (self.x2, self.y2))


@dataclass(frozen=True)
class HatchSegment:
    x1: float
    y1: float
    x2: float
    y2: float
    block_id: int | None = None


@dataclass(frozen=True)
class StrokePath:
    """A polyline or closed shape ready for serialization."""

    points: tuple[tuple[float, float], ...]
    stroke_width: float
    closed: bool = False
    fill: str | None = None
    role: str = "edge"  # fill, edge, dome, spire, hatch, decoration
    block_id: int | None = None


@dataclass(frozen=True)
class HatchConfig:
    style: HatchStyle = HatchStyle.DIAGONAL
    density: float = 4.0
    angle: float = 45.0
    coverage: float = 0.3
    side: HatchSide = HatchSide.ALL

    def __post_init__(self) -> None:
        if self.density <= 0:
            raise ValueError(f"hatch density must be positive, got {self.density}")
        if not 0.0 < self.coverage <= 1.0:
            raise ValueError(f"hatch coverage must be in (0, 1], got {self.coverage}")


@dataclass
class RenderOptions:
    """How the resolved building is turned into stroke paths."""

    stroke_width: float = 1.5
    use_fills: bool = True
    hatching: bool = False
    hatch: HatchConfig = field(default_factory=lambda: HatchConfig(side=HatchSide.LEFT))
    fill_color: str = "white"
    # Glyph drawers, called per block in order (ornaments, doors, windows)
    decorators: Sequence[Decorator] = ()


@dataclass
class GenerationContext:
    """Shared state flowing through the entire pipeline for one building."""

    bounds: Rect
    style: Style
    seed: int = 42
    config: EngineConfig = field(default_factory=EngineConfig)
    options: RenderOptions = field(default_factory=RenderOptions)

    # Re-seeded for every context; the only source of randomness besides Harmony
    rng: RandomStream = field(init=False)
    harmony: Harmony | None = None

    # --- Grammar output ---
    blocks: list[Block] = field(default_factory=list)
    body: Block | None = None
    wings: tuple[Block, Block] | None = None
    top_setback: Block | None = None

    # --- Resolution output ---
    edges: list[Edge] = field(default_factory=list)
    visible_edges: list[Edge] = field(default_factory=list)
    hatch_segments: list[HatchSegment] = field(default_factory=list)

    # --- Composition output ---
    paths: list[StrokePath] = field(default_factory=list)
    reserved: ReservedAreas = field(default_factory=ReservedAreas)

    # --- Pipeline metadata ---
    completed_stages: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    _next_block_id: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = RandomStream(self.seed)
        self.reserved.padding = self.config.reserve_padding
        self.reserved.clear()

    def next_block_id(self) -> int:
        block_id = self._next_block_id
        self._next_block_id += 1
        return block_id

    def get_block(self, block_id: int) -> Block | None:
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None

    def blocks_of(self, kind: BlockKind) -> list[Block]:
        return [b for b in self.blocks if b.kind == kind]

    @property
    def num_blocks(self) -> int:
        return len(self.blocks)
