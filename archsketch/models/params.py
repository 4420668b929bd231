"""Generation request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from archsketch.config import settings
from archsketch.engine.context import HatchSide
from archsketch.models.style import HatchStyle


class ExpertOverrides(BaseModel):
    """Per-field style overrides; None leaves the preset value in place."""

    tower_probability: float | None = Field(default=None, ge=0.0, le=1.0)
    max_towers: int | None = Field(default=None, ge=0, description="Tower count becomes 0..max_towers")
    wing_probability: float | None = Field(default=None, ge=0.0, le=1.0)
    setback_levels: int | None = Field(default=None, ge=0)
    aspect_ratio: float | None = Field(default=None, gt=0.0)
    base_height_ratio: float | None = Field(default=None, gt=0.0, lt=1.0)
    chamfer_amount: float | None = Field(default=None, ge=0.0)
    decay: float | None = Field(default=None, ge=0.0, le=1.0)
    window_density_x_mult: float | None = Field(default=None, gt=0.0)
    window_density_y_mult: float | None = Field(default=None, gt=0.0)
    ornament_level_mult: float | None = Field(default=None, ge=0.0)


class GenerationParams(BaseModel):
    seed: int = Field(default=42, description="Same seed + same params = same building")
    style: str = Field(default="gothic", description="Built-in style preset name")
    format: str = Field(default_factory=lambda: settings.default_format, description="Paper format")
    margin: float = Field(default_factory=lambda: settings.default_margin, ge=0.0)

    stroke_width: float = Field(default=1.5, gt=0.0)
    use_fills: bool = Field(default=True, description="White-filled compositing; False = pure line art")

    hatching: bool = False
    hatch_density: float = Field(default=4.0, gt=0.0, description="Line spacing in px")
    hatch_side: HatchSide = HatchSide.LEFT
    hatch_angle: float = 45.0
    hatch_coverage: float = Field(default=0.3, gt=0.0, le=1.0, description="Band width as a share of the block")
    hatch_style: HatchStyle | None = Field(default=None, description="Defaults to the style's hatch style")

    expert_mode: bool = False
    overrides: ExpertOverrides = Field(default_factory=ExpertOverrides)
