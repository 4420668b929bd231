"""R1.02 — Visibility filter.

Drop edges hidden by, or doubling the wall of, any block in front.
"""

from __future__ import annotations

import logging

from archsketch.engine.context import GenerationContext
from archsketch.engine.registry import Layer, stage
from archsketch.engine.visibility import filter_edges

logger = logging.getLogger(__name__)


@stage(
    id="R1.02",
    layer=Layer.RESOLUTION,
    dependencies=["R1.01"],
    description="Filter edges to the visible, non-duplicated set",
)
def visibility(ctx: GenerationContext) -> None:
    ctx.visible_edges = filter_edges(
        ctx.edges,
        ctx.blocks,
        inside_tolerance=ctx.config.inside_tolerance,
        seam_tolerance=ctx.config.seam_tolerance,
    )
    logger.debug("Visibility: kept %d of %d edges", len(ctx.visible_edges), len(ctx.edges))
