"""R1.01 — Edge extraction.

Straight sides (plus chamfer diagonals, or outline sides) of every block
except domes and spires, in render order.
"""

from __future__ import annotations

from archsketch.engine.context import GenerationContext
from archsketch.engine.registry import Layer, stage
from archsketch.engine.visibility import extract_edges


@stage(
    id="R1.01",
    layer=Layer.RESOLUTION,
    dependencies=["G0.08"],
    description="Extract straight block edges",
)
def edge_extraction(ctx: GenerationContext) -> None:
    ctx.edges = extract_edges(ctx.blocks)
