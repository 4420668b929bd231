"""G0.08 — Priority sort.

Stable sort by layering priority; the resulting flat list is the only
render-order authority for every later stage.
"""

from __future__ import annotations

import logging
from collections import Counter

from archsketch.engine.context import GenerationContext
from archsketch.engine.registry import Layer, stage

logger = logging.getLogger(__name__)


@stage(
    id="G0.08",
    layer=Layer.GRAMMAR,
    dependencies=["G0.07"],
    tags={"required"},
    description="Sort blocks back to front",
)
def priority_sort(ctx: GenerationContext) -> None:
    ctx.blocks.sort(key=lambda b: b.priority)

    kinds = Counter(b.kind.value for b in ctx.blocks)
    logger.debug("Grammar produced %d blocks: %s", len(ctx.blocks), dict(kinds))
