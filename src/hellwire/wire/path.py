from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ..geom import Vec2
from ..profiles import DeviceProfile, resolve_profile


class PathError(ValueError):
    pass


def check_control_points(points: Sequence[Vec2], profile: DeviceProfile) -> None:
    if len(points) < 2:
        raise PathError(f"a wire needs at least 2 control points, got {len(points)}")
    if resolve_profile(profile) is DeviceProfile.MOBILE:
        for idx in range(1, len(points)):
            if points[idx].x < points[idx - 1].x:
                raise PathError(
                    f"mobile wire must have non-decreasing x: point {idx} x={points[idx].x:.6f} "
                    f"< x={points[idx - 1].x:.6f}"
                )


@dataclass(slots=True)
class WirePath:
    """Ordered control points in normalized playfield space.

    The profile travels with the path and selects the sampling strategy.
    Points are replaced in place during a morph but never reordered.
    """

    profile: DeviceProfile
    points: list[Vec2] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.profile = resolve_profile(self.profile)
        self.points = list(self.points)
        check_control_points(self.points, self.profile)

    @classmethod
    def from_pairs(cls, profile: DeviceProfile, pairs: Iterable[tuple[float, float]]) -> WirePath:
        return cls(profile=profile, points=[Vec2(float(x), float(y)) for x, y in pairs])

    def __len__(self) -> int:
        return len(self.points)

    @property
    def start(self) -> Vec2:
        return self.points[0]

    @property
    def end(self) -> Vec2:
        return self.points[-1]

    def snapshot(self) -> tuple[Vec2, ...]:
        return tuple(self.points)

    def copy(self) -> WirePath:
        return WirePath(profile=self.profile, points=list(self.points))

    def assign(self, points: Sequence[Vec2]) -> None:
        """Replace every point in place, keeping the count and order."""
        if len(points) != len(self.points):
            raise PathError(f"point count changed: {len(self.points)} -> {len(points)}")
        for idx, point in enumerate(points):
            self.points[idx] = point

    def to_pairs(self, *, ndigits: int | None = None) -> list[list[float]]:
        if ndigits is None:
            return [[p.x, p.y] for p in self.points]
        return [[round(p.x, ndigits), round(p.y, ndigits)] for p in self.points]
