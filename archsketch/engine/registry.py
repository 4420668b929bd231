"""Stage registry — every generation stage is a standalone function registered via decorator.

Usage:
    @stage(id="G0.07", layer=Layer.GRAMMAR, dependencies=["G0.06"], tags={"required"})
    def dome(ctx: GenerationContext) -> None:
        ...

Adding a new stage = creating one file with the decorator. Nothing else changes.
Stages may only depend on stages of the same or an earlier layer; ``check()``
enforces that once every stage module has been imported.
"""

from __future__ import annotations

import enum
import heapq
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from archsketch.engine.context import GenerationContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    GRAMMAR = 0
    RESOLUTION = 1
    COMPOSITION = 2


@dataclass
class StageSpec:
    id: str
    layer: Layer
    fn: Callable[["GenerationContext"], None]
    dependencies: list[str] = field(default_factory=list)
    tags: set[str] = field(default_factory=set)
    description: str = ""

    @property
    def required(self) -> bool:
        """Grammar stages are required: without blocks nothing downstream means anything."""
        return "required" in self.tags


class StageRegistry:
    """Registry of generation stages, keyed by stage id."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def __len__(self) -> int:
        return len(self._stages)

    def __contains__(self, stage_id: object) -> bool:
        return stage_id in self._stages

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.layer.name)

    def ids(self) -> set[str]:
        return set(self._stages)

    def get_layer(self, layer: Layer) -> list[StageSpec]:
        return sorted((s for s in self._stages.values() if s.layer == layer), key=lambda s: s.id)

    def all(self) -> list[StageSpec]:
        return sorted(self._stages.values(), key=lambda s: (s.layer, s.id))

    def check(self) -> None:
        """Reject unknown dependencies and dependencies on a later layer."""
        for spec in self._stages.values():
            for dep in spec.dependencies:
                target = self._stages.get(dep)
                if target is None:
                    raise ValueError(f"Stage {spec.id} depends on unknown stage {dep}")
                if target.layer > spec.layer:
                    raise ValueError(
                        f"Stage {spec.id} ({spec.layer.name}) depends on later-layer "
                        f"stage {dep} ({target.layer.name})"
                    )

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[StageSpec]:
        """Dependency order for the requested stages (all when None).

        Ready stages run in lexicographic id order. Dependencies outside the
        requested set are ignored, so a gated-off stage never pulls itself back in.
        """
        pool = self._stages
        if requested_ids is not None:
            pool = {k: v for k, v in pool.items() if k in requested_ids}

        waiting: dict[str, int] = {}
        dependents: dict[str, list[str]] = defaultdict(list)
        for sid, spec in pool.items():
            deps = [d for d in spec.dependencies if d in pool]
            waiting[sid] = len(deps)
            for dep in deps:
                dependents[dep].append(sid)

        ready = [sid for sid, n in waiting.items() if n == 0]
        heapq.heapify(ready)
        ordered: list[StageSpec] = []
        while ready:
            sid = heapq.heappop(ready)
            ordered.append(pool[sid])
            for other in dependents[sid]:
                waiting[other] -= 1
                if waiting[other] == 0:
                    heapq.heappush(ready, other)

        if len(ordered) != len(pool):
            stuck = sorted(set(pool) - {s.id for s in ordered})
            raise ValueError(f"Circular dependency detected among: {stuck}")
        return ordered


# Module-level singleton, filled when the stage modules are imported
_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    tags: set[str] | None = None,
    description: str = "",
):
    """Decorator to register a stage function."""

    def decorator(fn: Callable[["GenerationContext"], None]):
        _registry.register(
            StageSpec(
                id=id,
                layer=layer,
                fn=fn,
                dependencies=list(dependencies or []),
                tags=set(tags or ()),
                description=description,
            )
        )
        return fn

    return decorator
