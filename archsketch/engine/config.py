"""Engine configuration — tolerances and fixed constants of the grammar and renderers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EngineConfig:
    """Geometry tolerances and scale factors shared by all stages."""

    # Visibility: endpoint-inside test and shared-wall (seam) test.
    # Both absorb rounding at flush joints; keep below the smallest chamfer.
    inside_tolerance: float = 1.0
    seam_tolerance: float = 2.0

    # Chamfer cut = style.chamfer_amount * chamfer_scale, capped per block
    chamfer_scale: float = 20.0
    max_chamfer_fraction: float = 0.45  # of the shorter side

    # Dome cap polygonization
    dome_arc_samples: int = 48

    # Hatching
    hatch_stroke_ratio: float = 0.3
    cross_spacing_factor: float = 1.5
    random_keep_probability: float = 0.7
    random_line_area_factor: float = 10.0

    # Reserved-area padding for decoration placement
    reserve_padding: float = 5.0
