from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Protocol

from .math import clamp


class SupportsXY(Protocol):
    x: float
    y: float


@dataclass(slots=True, frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vec2:
        return self * scalar

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def normalized(self) -> Vec2:
        magnitude_sq = self.length_sq()
        if magnitude_sq <= 0.0:
            return Vec2()
        inv_magnitude = 1.0 / math.sqrt(magnitude_sq)
        return Vec2(self.x * inv_magnitude, self.y * inv_magnitude)

    def normalized_with_length(self, *, epsilon: float = 1e-6) -> tuple[Vec2, float]:
        magnitude = self.length()
        if magnitude <= epsilon:
            return Vec2(), 0.0
        return self / magnitude, magnitude

    def distance_to(self, other: Vec2) -> float:
        return (other - self).length()

    def clamp_length(self, max_length: float) -> Vec2:
        magnitude = self.length()
        if magnitude <= max_length or magnitude <= 0.0:
            return self
        return self * (max_length / magnitude)

    def clamp_rect(self, min_x: float, min_y: float, max_x: float, max_y: float) -> Vec2:
        return Vec2(
            x=clamp(self.x, min_x, max_x),
            y=clamp(self.y, min_y, max_y),
        )

    def to_dict(self, *, ndigits: int | None = None) -> dict[str, float]:
        if ndigits is None:
            return {"x": self.x, "y": self.y}
        return {
            "x": round(self.x, ndigits),
            "y": round(self.y, ndigits),
        }

    @classmethod
    def from_xy(cls, value: SupportsXY) -> Vec2:
        return cls(x=value.x, y=value.y)

    @staticmethod
    def distance_sq(a: Vec2, b: Vec2) -> float:
        dx = b.x - a.x
        dy = b.y - a.y
        return dx * dx + dy * dy

    @staticmethod
    def lerp(a: Vec2, b: Vec2, t: float) -> Vec2:
        return Vec2(
            x=a.x + (b.x - a.x) * t,
            y=a.y + (b.y - a.y) * t,
        )


@dataclass(slots=True, frozen=True)
class Rect:
    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def size(self) -> Vec2:
        return Vec2(self.w, self.h)

    @property
    def center(self) -> Vec2:
        return Vec2(self.x + self.w * 0.5, self.y + self.h * 0.5)

    def inset(self, *, dx: float = 0.0, dy: float = 0.0) -> Rect:
        return Rect(
            x=self.x + dx,
            y=self.y + dy,
            w=max(0.0, self.w - 2.0 * dx),
            h=max(0.0, self.h - 2.0 * dy),
        )

    def contains(self, point: SupportsXY) -> bool:
        px = point.x
        py = point.y
        return self.x <= px <= self.right and self.y <= py <= self.bottom

    def clamp_point(self, point: Vec2) -> Vec2:
        return point.clamp_rect(self.x, self.y, self.right, self.bottom)

    def from_normalized(self, point: SupportsXY) -> Vec2:
        """Map a normalized `[0, 1]` coordinate into this rectangle."""
        return Vec2(self.x + point.x * self.w, self.y + point.y * self.h)
