"""Archsketch silhouette engine."""

from archsketch.engine.context import Block, BlockKind, GenerationContext, Rect, RenderOptions
from archsketch.engine.pipeline import Pipeline
from archsketch.engine.registry import Layer, get_registry, stage

__all__ = [
    "stage",
    "Layer",
    "get_registry",
    "Block",
    "BlockKind",
    "GenerationContext",
    "Rect",
    "RenderOptions",
    "Pipeline",
]
