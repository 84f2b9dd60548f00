from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..geom import Vec2
from ..lcg import Lcg
from ..math import clamp, clamp01, ease_in_out_quad
from ..profiles import DeviceProfile, profile_tuning, resolve_profile
from .path import PathError

# Perturbed indices skip the first two and last two control points.
MORPH_EDGE_POINTS = 2


def perturb_points(points: Sequence[Vec2], profile: DeviceProfile, rng: Lcg) -> list[Vec2]:
    """Return a copy of `points` with a random subset of interior points nudged.

    Mobile wires move in y only so x stays non-decreasing.
    """
    profile = resolve_profile(profile)
    tuning = profile_tuning(profile)
    out = list(points)
    interior = len(out) - 2 * MORPH_EDGE_POINTS
    if interior <= 0:
        return out

    count = int(tuning.morph_points_min) + rng.randrange(int(tuning.morph_points_spread))
    lo = float(tuning.bounds_min)
    hi = float(tuning.bounds_max)
    for _ in range(count):
        idx = MORPH_EDGE_POINTS + rng.randrange(interior)
        p = out[idx]
        if profile is DeviceProfile.MOBILE:
            out[idx] = Vec2(p.x, clamp(p.y + rng.centered(tuning.morph_dy), lo, hi))
        else:
            x = clamp(p.x + rng.centered(tuning.morph_dx), lo, hi)
            y = clamp(p.y + rng.centered(tuning.morph_dy), lo, hi)
            out[idx] = Vec2(x, y)
    return out


@dataclass(frozen=True, slots=True)
class MorphTransition:
    source: tuple[Vec2, ...]
    target: tuple[Vec2, ...]
    started_at: float
    duration: float

    def __post_init__(self) -> None:
        if len(self.source) != len(self.target):
            raise PathError(f"morph endpoints differ in size: {len(self.source)} vs {len(self.target)}")
        if not float(self.duration) > 0.0:
            raise PathError(f"morph duration must be positive, got {self.duration}")

    def progress(self, now: float) -> float:
        return clamp01((float(now) - float(self.started_at)) / float(self.duration))

    def eased(self, now: float) -> float:
        return ease_in_out_quad(self.progress(now))

    def finished(self, now: float) -> bool:
        return self.progress(now) >= 1.0

    def points_at(self, now: float) -> list[Vec2]:
        e = self.eased(now)
        return [Vec2.lerp(a, b, e) for a, b in zip(self.source, self.target)]
