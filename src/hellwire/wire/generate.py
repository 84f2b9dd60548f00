"""Seeded procedural wire construction.

Both generators draw from one `Lcg` in a fixed order, so a given
`(seed, profile)` always produces the same control points.
"""

from __future__ import annotations

import math

from ..geom import Vec2
from ..lcg import Lcg
from ..math import clamp, lerp
from ..profiles import DeviceProfile, resolve_profile
from .path import WirePath

DESKTOP_POINT_COUNT = 140
DESKTOP_START = Vec2(0.03, 0.55)
DESKTOP_END = Vec2(0.97, 0.52)
DESKTOP_BOUNDS = (0.02, 0.98)
DESKTOP_BACKTRACK_PERIOD = 17
DESKTOP_KNOT_PERIOD = 19
DESKTOP_LOOP_INDICES = (32, 64, 101)
DESKTOP_LOOP_RADIUS = 0.06
DESKTOP_LOOP_STEPS = 10

MOBILE_POINT_COUNT = 85
MOBILE_X_RANGE = (0.05, 0.95)
MOBILE_BOUNDS = (0.06, 0.94)
MOBILE_SPIKE_PERIOD = 17
MOBILE_KNOT_FRACTIONS = (0.35, 0.62)
MOBILE_ENDPOINT_BOUNDS = (0.30, 0.75)


def _clamp_desktop(value: float) -> float:
    return clamp(value, *DESKTOP_BOUNDS)


def _clamp_mobile(value: float) -> float:
    return clamp(value, *MOBILE_BOUNDS)


def generate_desktop_points(rng: Lcg) -> list[Vec2]:
    x = DESKTOP_START.x
    y = DESKTOP_START.y
    points = [Vec2(x, y)]

    for i in range(1, DESKTOP_POINT_COUNT):
        forward = 0.006 + rng.random() * 0.008
        back_chance = 0.45 if i % DESKTOP_BACKTRACK_PERIOD == 0 else 0.12
        if rng.random() < back_chance:
            dx = -forward * (0.2 + rng.random() * 0.5)
        else:
            dx = forward
        roll = rng.random() - 0.5
        dy = roll * (0.08 + rng.random() * 0.09)

        x = _clamp_desktop(x + dx)
        y = _clamp_desktop(y + dy)

        if i % DESKTOP_KNOT_PERIOD == 0:
            direction = rng.sign()
            y = _clamp_desktop(y + direction * (0.18 + rng.random() * 0.22))
        points.append(Vec2(x, y))

    points[-1] = DESKTOP_END

    for idx in DESKTOP_LOOP_INDICES:
        if idx <= 2 or idx >= len(points) - 3:
            continue
        center = points[idx]
        loop: list[Vec2] = []
        for k in range(DESKTOP_LOOP_STEPS):
            angle = (k / DESKTOP_LOOP_STEPS) * math.tau
            rx = DESKTOP_LOOP_RADIUS * (0.7 + rng.random() * 0.7)
            lx = _clamp_desktop(center.x + math.cos(angle) * rx)
            ry = DESKTOP_LOOP_RADIUS * (0.7 + rng.random() * 0.7)
            ly = _clamp_desktop(center.y + math.sin(angle) * ry)
            loop.append(Vec2(lx, ly))
        points[idx:idx] = loop
    return points


def generate_mobile_points(rng: Lcg) -> list[Vec2]:
    n = MOBILE_POINT_COUNT
    x0, x1 = MOBILE_X_RANGE
    ys: list[float] = []

    y = 0.55
    vy = 0.0
    for i in range(n):
        acc = (rng.random() - 0.5) * 0.09
        vy = (vy + acc) * 0.72
        y += vy
        if i % MOBILE_SPIKE_PERIOD == 0 and 0 < i < n - 1:
            direction = rng.sign()
            y += direction * (0.10 + rng.random() * 0.10)
        y = _clamp_mobile(y)
        ys.append(y)

    # Knots wiggle y only, so x stays monotone.
    for fraction in MOBILE_KNOT_FRACTIONS:
        k = int(math.floor(n * fraction))
        if k < 3 or k > n - 4:
            continue
        base = ys[k]
        ys[k - 1] = _clamp_mobile(base + (rng.random() - 0.5) * 0.18)
        ys[k] = _clamp_mobile(base + (rng.random() - 0.5) * 0.20)
        ys[k + 1] = _clamp_mobile(base + (rng.random() - 0.5) * 0.18)

    ys[0] = clamp(ys[0], *MOBILE_ENDPOINT_BOUNDS)
    ys[-1] = clamp(ys[-1], *MOBILE_ENDPOINT_BOUNDS)
    return [Vec2(lerp(x0, x1, i / (n - 1)), ys[i]) for i in range(n)]


def generate(seed: int, profile: DeviceProfile | str) -> WirePath:
    """Build the wire for `profile` from a 32-bit `seed`."""
    resolved = resolve_profile(profile)
    rng = Lcg(int(seed))
    if resolved is DeviceProfile.MOBILE:
        points = generate_mobile_points(rng)
    else:
        points = generate_desktop_points(rng)
    return WirePath(profile=resolved, points=points)
