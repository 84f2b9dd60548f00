from __future__ import annotations

from dataclasses import dataclass
import math

from ..geom import Vec2
from ..math import clamp01
from .sample import SampledPolyline

SEGMENT_EPSILON = 1e-9


@dataclass(frozen=True, slots=True)
class NearestHit:
    closest: Vec2
    segment_index: int
    segment_t: float
    distance_sq: float

    @property
    def distance(self) -> float:
        return math.sqrt(self.distance_sq)


def closest_point_on_segment(p: Vec2, a: Vec2, b: Vec2) -> tuple[Vec2, float, float]:
    """Project `p` onto segment `ab`; returns `(closest, t, distance_sq)` with `t` clamped to `[0, 1]`."""
    abx = b.x - a.x
    aby = b.y - a.y
    ab2 = abx * abx + aby * aby
    if ab2 <= 0.0:
        ab2 = SEGMENT_EPSILON
    t = clamp01(((p.x - a.x) * abx + (p.y - a.y) * aby) / ab2)
    closest = Vec2(a.x + abx * t, a.y + aby * t)
    return closest, t, Vec2.distance_sq(p, closest)


def nearest(polyline: SampledPolyline, point: Vec2) -> NearestHit:
    """Linear scan for the closest point on the polyline.

    Ties keep the earliest segment.
    """
    samples = polyline.points
    if len(samples) < 2:
        only = samples[0]
        return NearestHit(closest=only, segment_index=0, segment_t=0.0, distance_sq=Vec2.distance_sq(point, only))

    best_d2 = math.inf
    best_closest = samples[0]
    best_idx = 0
    best_t = 0.0
    for i in range(len(samples) - 1):
        closest, t, d2 = closest_point_on_segment(point, samples[i], samples[i + 1])
        if d2 < best_d2:
            best_d2 = d2
            best_closest = closest
            best_idx = i
            best_t = t
    return NearestHit(closest=best_closest, segment_index=best_idx, segment_t=best_t, distance_sq=best_d2)


def progress_at(polyline: SampledPolyline, hit: NearestHit) -> float:
    """Arc length from the wire start to the hit's projection."""
    cum = polyline.cum_lengths
    idx = int(hit.segment_index)
    if idx + 1 >= len(cum):
        return cum[-1]
    return cum[idx] + (cum[idx + 1] - cum[idx]) * float(hit.segment_t)
