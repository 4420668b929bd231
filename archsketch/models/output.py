"""Summary models describing a generated building."""

from __future__ import annotations

from pydantic import BaseModel, Field


class BlockSummary(BaseModel):
    id: int
    kind: str
    x: float
    y: float
    width: float
    height: float
    priority: int
    parent: int | None = None
    has_outline: bool = False


class BuildingSummary(BaseModel):
    seed: int
    style: str
    canvas_width: float
    canvas_height: float
    blocks: list[BlockSummary] = Field(default_factory=list)
    visible_edges: int = 0
    hatch_segments: int = 0
    paths: int = 0
    errors: dict[str, str] = Field(default_factory=dict)
