from __future__ import annotations

from .generate import generate
from .morph import MorphTransition, perturb_points
from .path import PathError, WirePath, check_control_points
from .proximity import NearestHit, closest_point_on_segment, nearest, progress_at
from .sample import SampledPolyline, rebuild_polyline, slither_offsets

__all__ = [
    "MorphTransition",
    "NearestHit",
    "PathError",
    "SampledPolyline",
    "WirePath",
    "check_control_points",
    "closest_point_on_segment",
    "generate",
    "nearest",
    "perturb_points",
    "progress_at",
    "rebuild_polyline",
    "slither_offsets",
]
