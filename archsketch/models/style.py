"""Style — the closed, validated configuration record for one architectural style.

Every field the grammar, the hatcher or an external glyph drawer may read is
declared here; unknown fields are rejected. Ranges reject min > max at
construction so malformed configuration never reaches the grammar.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Silhouette(str, enum.Enum):
    REGULAR = "regular"
    BLOCK = "block"
    BROKEN = "broken"


class HatchStyle(str, enum.Enum):
    DIAGONAL = "diagonal"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    CROSS = "cross"
    RANDOM = "random"


class Range(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    max: float

    @model_validator(mode="after")
    def _ordered(self) -> Range:
        if self.min > self.max:
            raise ValueError(f"range min {self.min} exceeds max {self.max}")
        return self

    def lerp(self, t: float) -> float:
        return self.min + (self.max - self.min) * t


class IntRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int = Field(ge=0)
    max: int = Field(ge=0)

    @model_validator(mode="after")
    def _ordered(self) -> IntRange:
        if self.min > self.max:
            raise ValueError(f"range min {self.min} exceeds max {self.max}")
        return self

    def clamp(self, value: int) -> int:
        return max(self.min, min(self.max, value))


class Style(BaseModel):
    """Immutable per-style configuration. Never mutated by the engine."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = "custom"
    silhouette: Silhouette = Silhouette.REGULAR
    aspect_ratio: float = Field(default=0.7, gt=0.0)

    # Massing
    body_width_ratio: Range = Range(min=0.55, max=0.85)
    body_height_ratio: Range = Range(min=0.45, max=0.7)
    base_height_ratio: float = Field(default=0.12, gt=0.0, lt=1.0)

    wing_probability: float = Field(default=0.0, ge=0.0, le=1.0)
    wing_width_ratio: Range = Range(min=0.3, max=0.55)
    wing_height_ratio: Range = Range(min=0.35, max=0.75)

    tower_probability: float = Field(default=0.0, ge=0.0, le=1.0)
    tower_count: IntRange = IntRange(min=1, max=2)
    tower_width_ratio: Range = Range(min=0.12, max=0.25)
    tower_height_ratio: Range = Range(min=0.3, max=0.6)

    setback_levels: int = Field(default=0, ge=0)

    use_spires: bool = False
    spire_angle: float = Field(default=30.0, gt=0.0, lt=180.0)
    use_dome: bool = False

    chamfer_amount: float = Field(default=0.0, ge=0.0)
    decay: float = Field(default=0.0, ge=0.0, le=1.0)

    hatch_style: HatchStyle = HatchStyle.DIAGONAL

    # Consumed by external glyph drawers only
    window_style: str = "rect"
    window_density_x: int = Field(default=4, ge=0)
    window_density_y: int = Field(default=6, ge=0)
    window_aspect: float = Field(default=1.6, gt=0.0)
    ornament_level: float = Field(default=0.5, ge=0.0)
    use_pinnacles: bool = False
    use_rosette: bool = False
    use_buttresses: bool = False
    use_columns: bool = False
    use_pediments: bool = False
    use_sunburst: bool = False
    use_antennae: bool = False
    use_vertical_lines: bool = False

    @property
    def is_ruin(self) -> bool:
        return self.silhouette == Silhouette.BROKEN

    @property
    def is_brutalist(self) -> bool:
        return self.silhouette == Silhouette.BLOCK and self.chamfer_amount == 0

    @field_validator(
        "body_width_ratio",
        "body_height_ratio",
        "wing_width_ratio",
        "wing_height_ratio",
        "tower_width_ratio",
        "tower_height_ratio",
    )
    @classmethod
    def _positive_ratio(cls, value: Range) -> Range:
        # Every ratio scales a block side, which must stay positive
        if value.min <= 0:
            raise ValueError(f"ratio range must be positive, got min {value.min}")
        return value

    def with_overrides(self, **fields: Any) -> Style:
        """Return a re-validated copy with ``fields`` replaced (None values are ignored)."""
        data = self.model_dump()
        data.update({k: v for k, v in fields.items() if v is not None})
        return Style.model_validate(data)


PRESETS: dict[str, Style] = {
    "gothic": Style(
        name="gothic",
        aspect_ratio=0.6,
        base_height_ratio=0.1,
        wing_probability=0.6,
        tower_probability=0.9,
        tower_count=IntRange(min=1, max=3),
        tower_width_ratio=Range(min=0.12, max=0.22),
        tower_height_ratio=Range(min=0.4, max=0.8),
        use_spires=True,
        spire_angle=25.0,
        chamfer_amount=0.0,
        hatch_style=HatchStyle.VERTICAL,
        window_style="pointed",
        window_density_x=4,
        window_density_y=6,
        window_aspect=2.2,
        ornament_level=0.8,
        use_pinnacles=True,
        use_rosette=True,
        use_buttresses=True,
        use_vertical_lines=True,
    ),
    "baroque": Style(
        name="baroque",
        aspect_ratio=0.85,
        base_height_ratio=0.15,
        wing_probability=0.9,
        wing_width_ratio=Range(min=0.35, max=0.55),
        tower_probability=0.5,
        tower_count=IntRange(min=2, max=2),
        tower_width_ratio=Range(min=0.12, max=0.2),
        tower_height_ratio=Range(min=0.25, max=0.45),
        use_dome=True,
        chamfer_amount=0.3,
        hatch_style=HatchStyle.CROSS,
        window_style="arched",
        window_density_x=5,
        window_density_y=4,
        window_aspect=1.8,
        ornament_level=1.0,
        use_columns=True,
        use_pediments=True,
    ),
    "artdeco": Style(
        name="artdeco",
        aspect_ratio=0.5,
        body_height_ratio=Range(min=0.5, max=0.7),
        base_height_ratio=0.08,
        wing_probability=0.3,
        tower_probability=0.3,
        tower_count=IntRange(min=1, max=1),
        setback_levels=3,
        use_spires=True,
        spire_angle=18.0,
        chamfer_amount=0.5,
        hatch_style=HatchStyle.VERTICAL,
        window_style="rect",
        window_density_x=5,
        window_density_y=10,
        window_aspect=1.4,
        ornament_level=0.7,
        use_sunburst=True,
        use_vertical_lines=True,
    ),
    "modernist": Style(
        name="modernist",
        aspect_ratio=0.75,
        base_height_ratio=0.1,
        wing_probability=0.4,
        wing_height_ratio=Range(min=0.3, max=0.5),
        tower_probability=0.2,
        tower_count=IntRange(min=1, max=1),
        hatch_style=HatchStyle.HORIZONTAL,
        window_style="ribbon",
        window_density_x=6,
        window_density_y=8,
        window_aspect=0.6,
        ornament_level=0.1,
        use_antennae=True,
    ),
    "brutalist": Style(
        name="brutalist",
        silhouette=Silhouette.BLOCK,
        aspect_ratio=0.8,
        body_width_ratio=Range(min=0.65, max=0.9),
        base_height_ratio=0.14,
        wing_probability=0.5,
        tower_probability=0.4,
        tower_count=IntRange(min=1, max=2),
        tower_width_ratio=Range(min=0.18, max=0.3),
        tower_height_ratio=Range(min=0.2, max=0.4),
        chamfer_amount=0.0,
        hatch_style=HatchStyle.HORIZONTAL,
        window_style="slit",
        window_density_x=6,
        window_density_y=7,
        window_aspect=0.5,
        ornament_level=0.0,
    ),
    "ruin": Style(
        name="ruin",
        silhouette=Silhouette.BROKEN,
        aspect_ratio=0.7,
        base_height_ratio=0.12,
        wing_probability=0.5,
        tower_probability=0.6,
        tower_count=IntRange(min=1, max=2),
        tower_height_ratio=Range(min=0.3, max=0.55),
        decay=0.6,
        hatch_style=HatchStyle.RANDOM,
        window_style="arched",
        window_density_x=3,
        window_density_y=4,
        window_aspect=1.8,
        ornament_level=0.3,
        use_buttresses=True,
    ),
    "classical": Style(
        name="classical",
        aspect_ratio=0.9,
        body_height_ratio=Range(min=0.4, max=0.6),
        base_height_ratio=0.18,
        wing_probability=0.7,
        tower_probability=0.1,
        tower_count=IntRange(min=1, max=1),
        use_dome=True,
        hatch_style=HatchStyle.DIAGONAL,
        window_style="rect",
        window_density_x=5,
        window_density_y=3,
        window_aspect=1.7,
        ornament_level=0.9,
        use_columns=True,
        use_pediments=True,
    ),
}


def get_style(name: str) -> Style:
    """Look up a built-in preset by name."""
    try:
        return PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown style: {name!r} (known: {', '.join(sorted(PRESETS))})") from None
