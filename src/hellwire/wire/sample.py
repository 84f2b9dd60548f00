from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import math

from ..geom import Rect, Vec2
from ..math import lerp
from ..profiles import DeviceProfile, profile_tuning, resolve_profile
from .path import PathError


@dataclass(frozen=True, slots=True)
class SampledPolyline:
    """Dense presentation-space samples with a cumulative arc-length table."""

    points: tuple[Vec2, ...]
    cum_lengths: tuple[float, ...]
    total_length: float

    def __len__(self) -> int:
        return len(self.points)

    @property
    def start(self) -> Vec2:
        return self.points[0]

    @property
    def end(self) -> Vec2:
        return self.points[-1]

    @property
    def segment_count(self) -> int:
        return max(0, len(self.points) - 1)

    def segment_length(self, index: int) -> float:
        return self.cum_lengths[index + 1] - self.cum_lengths[index]

    def point_at_length(self, length: float) -> Vec2:
        """Return the point `length` along the polyline, clamped to its ends."""
        if length <= 0.0 or len(self.points) < 2:
            return self.points[0]
        if length >= self.total_length:
            return self.points[-1]
        lo = 0
        hi = len(self.cum_lengths) - 1
        while hi - lo > 1:
            mid = (lo + hi) // 2
            if self.cum_lengths[mid] <= length:
                lo = mid
            else:
                hi = mid
        seg = self.segment_length(lo)
        if seg <= 0.0:
            return self.points[lo]
        return Vec2.lerp(self.points[lo], self.points[lo + 1], (length - self.cum_lengths[lo]) / seg)


def catmull_rom(p0: Vec2, p1: Vec2, p2: Vec2, p3: Vec2, t: float) -> Vec2:
    t2 = t * t
    t3 = t2 * t
    return Vec2(
        0.5
        * (
            (2.0 * p1.x)
            + (-p0.x + p2.x) * t
            + (2.0 * p0.x - 5.0 * p1.x + 4.0 * p2.x - p3.x) * t2
            + (-p0.x + 3.0 * p1.x - 3.0 * p2.x + p3.x) * t3
        ),
        0.5
        * (
            (2.0 * p1.y)
            + (-p0.y + p2.y) * t
            + (2.0 * p0.y - 5.0 * p1.y + 4.0 * p2.y - p3.y) * t2
            + (-p0.y + 3.0 * p1.y - 3.0 * p2.y + p3.y) * t3
        ),
    )


def sample_spline(points: Sequence[Vec2], segment_samples: int) -> list[Vec2]:
    last = len(points) - 1
    out: list[Vec2] = []
    for i in range(last):
        p0 = points[max(0, i - 1)]
        p1 = points[i]
        p2 = points[i + 1]
        p3 = points[min(last, i + 2)]
        for j in range(segment_samples):
            out.append(catmull_rom(p0, p1, p2, p3, j / segment_samples))
    out.append(points[last])
    return out


def sample_linear(points: Sequence[Vec2], segment_samples: int) -> list[Vec2]:
    # Linear only: spline overshoot would let a monotone-x course cross itself.
    out: list[Vec2] = []
    for i in range(len(points) - 1):
        a = points[i]
        b = points[i + 1]
        for j in range(segment_samples):
            t = j / segment_samples
            out.append(Vec2(lerp(a.x, b.x, t), lerp(a.y, b.y, t)))
    out.append(points[-1])
    return out


def to_presentation(samples: Sequence[Vec2], playfield: Rect) -> SampledPolyline:
    mapped = tuple(playfield.from_normalized(p) for p in samples)
    cum = [0.0]
    total = 0.0
    for i in range(1, len(mapped)):
        a = mapped[i - 1]
        b = mapped[i]
        total += math.hypot(b.x - a.x, b.y - a.y)
        cum.append(total)
    return SampledPolyline(points=mapped, cum_lengths=tuple(cum), total_length=total)


def rebuild_polyline(points: Sequence[Vec2], profile: DeviceProfile, playfield: Rect) -> SampledPolyline:
    """Sample control points into a dense polyline in playfield coordinates."""
    if len(points) < 2:
        raise PathError(f"cannot sample a wire with {len(points)} control points")
    profile = resolve_profile(profile)
    segment_samples = int(profile_tuning(profile).segment_samples)
    if profile is DeviceProfile.MOBILE:
        samples = sample_linear(points, segment_samples)
    else:
        samples = sample_spline(points, segment_samples)
    return to_presentation(samples, playfield)


def slither_offsets(count: int, phase: float, profile: DeviceProfile) -> list[float]:
    """Cosmetic per-sample y offsets for drawing; never fed to collision."""
    amplitude = math.sin(float(phase)) * float(profile_tuning(profile).slither_amplitude)
    return [amplitude * math.sin(i * 0.12) for i in range(int(count))]


def advance_slither_phase(phase: float, profile: DeviceProfile) -> float:
    return float(phase) + float(profile_tuning(profile).slither_rate)
