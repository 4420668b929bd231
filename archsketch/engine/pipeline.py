"""Pipeline orchestrator — runs stages in dependency order with render-mode gating."""

from __future__ import annotations

import logging
import time

from archsketch.engine.context import GenerationContext
from archsketch.engine.registry import Layer, StageRegistry, StageSpec, get_registry

logger = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates the stage pipeline for one generation at a time."""

    def __init__(self, registry: StageRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: GenerationContext) -> GenerationContext:
        """Run every stage not gated off by the context's render options."""
        start = time.perf_counter()

        skip_ids = self._mode_gate(ctx)
        requested = self.registry.ids() - skip_ids
        ordered = self.registry.resolve_order(requested)

        logger.info(
            "Pipeline: %d stages queued (%d skipped) for seed %d",
            len(ordered),
            len(skip_ids),
            ctx.seed,
        )

        for spec in ordered:
            self._run_stage(spec, ctx)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d stages, %d blocks in %.0fms",
            len(ctx.completed_stages),
            len(ordered),
            ctx.num_blocks,
            total,
        )
        return ctx

    def run_layer(self, ctx: GenerationContext, layer: Layer) -> GenerationContext:
        """Run only stages in a specific layer."""
        specs = self.registry.get_layer(layer)
        for spec in self.registry.resolve_order({s.id for s in specs}):
            self._run_stage(spec, ctx)
        return ctx

    def _run_stage(self, spec: StageSpec, ctx: GenerationContext) -> None:
        t0 = time.perf_counter()
        try:
            spec.fn(ctx)
        except Exception as e:
            if spec.required:
                logger.error("  %s FAILED: %s", spec.id, e)
                raise
            ctx.errors[spec.id] = str(e)
            logger.warning("  %s FAILED: %s", spec.id, e)
            return
        ctx.completed_stages.add(spec.id)
        elapsed = (time.perf_counter() - t0) * 1000
        logger.debug("  %s completed in %.1fms", spec.id, elapsed)

    def _mode_gate(self, ctx: GenerationContext) -> set[str]:
        """Determine which stages to skip for the requested output.

        - Fill mode composites white shapes back to front: no edge resolution
        - Line-art mode draws resolved edges: no fill pass
        - Hatching off: no hatch clipping
        """
        skip: set[str] = set()
        options = ctx.options

        if options.use_fills:
            skip.update({
                "R1.01",  # Edge extraction
                "R1.02",  # Visibility filter
                "C2.02",  # Line-art composition
            })
        else:
            skip.add("C2.01")  # Fill composition

        if not options.hatching:
            skip.add("R1.03")

        return skip


def create_pipeline(registry: StageRegistry | None = None) -> Pipeline:
    """Factory function for creating a pipeline instance."""
    return Pipeline(registry=registry)
