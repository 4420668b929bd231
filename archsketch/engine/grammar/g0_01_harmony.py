"""G0.01 — Harmony.

Hash the seed into correlated proportion weights. Runs before any draw from
the shared stream, though it would not matter: Harmony never reads it.
"""

from __future__ import annotations

import logging

from archsketch.engine.context import GenerationContext
from archsketch.engine.harmony import create_harmony
from archsketch.engine.registry import Layer, stage

logger = logging.getLogger(__name__)


@stage(
    id="G0.01",
    layer=Layer.GRAMMAR,
    tags={"required"},
    description="Derive seed harmony traits",
)
def harmony(ctx: GenerationContext) -> None:
    ctx.harmony = create_harmony(ctx.seed)

    # Seam tolerance must stay under the smallest cut it could swallow
    cut = ctx.style.chamfer_amount * ctx.config.chamfer_scale * 0.5
    if 0 < cut <= ctx.config.seam_tolerance:
        logger.warning(
            "Chamfer %.2f is not larger than seam tolerance %.2f; chamfer edges may merge",
            cut,
            ctx.config.seam_tolerance,
        )
