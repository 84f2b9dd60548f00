from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass, field
import math

from ..geom import Rect, Vec2
from ..lcg import Lcg
from ..math import clamp, exp_blend
from ..profiles import ProfileTuning
from .input import ControlMode, InputSnapshot, key_vector
from .sabotage import SabotageKind

WIND_ACCEL = 650.0
WIND_FREQ_X = 2.0
WIND_FREQ_Y = 2.6
WOBBLE_ACCEL = 900.0
WOBBLE_FREQ_X = 27.0
WOBBLE_FREQ_Y = 22.0
WOBBLE_SHAKE = 5.0


@dataclass(slots=True)
class Marker:
    pos: Vec2
    vel: Vec2 = field(default_factory=Vec2)
    outer_radius: float = 20.0
    inner_radius: float = 13.0

    @property
    def speed(self) -> float:
        return self.vel.length()


@dataclass(slots=True)
class SteeringStep:
    accel: Vec2
    shake: float = 0.0


def sabotage_push(active: Collection[SabotageKind], now: float) -> tuple[Vec2, float]:
    """Additive acceleration from wind and wobble at time `now`, plus the shake floor."""
    t = float(now)
    push = Vec2()
    shake = 0.0
    if SabotageKind.WIND in active:
        push = push + Vec2(math.sin(t * WIND_FREQ_X) * WIND_ACCEL, math.cos(t * WIND_FREQ_Y) * WIND_ACCEL)
    if SabotageKind.WOBBLE in active:
        push = push + Vec2(math.sin(t * WOBBLE_FREQ_X) * WOBBLE_ACCEL, math.cos(t * WOBBLE_FREQ_Y) * WOBBLE_ACCEL)
        shake = WOBBLE_SHAKE
    return push, shake


@dataclass(slots=True)
class SteeringController:
    """Turns an input snapshot into marker motion.

    Pointer mode chases a smoothed target with an arrive ramp; key mode pushes
    with a fixed magnitude plus jitter. Both go through a separate lag filter
    before sabotage modifiers are applied.
    """

    tuning: ProfileTuning
    raw_target: Vec2 = field(default_factory=Vec2)
    target: Vec2 = field(default_factory=Vec2)
    lagged_accel: Vec2 = field(default_factory=Vec2)

    def freeze(self, marker: Marker) -> None:
        self.raw_target = marker.pos
        self.target = marker.pos
        self.lagged_accel = Vec2()

    def aim(self, snapshot: InputSnapshot, *, enabled: bool) -> None:
        """Record the pointer target; while disabled the smoothed target snaps too (pre-aim)."""
        if snapshot.mode is not ControlMode.POINTER or snapshot.target is None:
            return
        self.raw_target = snapshot.target
        if not enabled:
            self.target = snapshot.target

    def _pointer_accel(self, dt: float, marker: Marker) -> Vec2:
        tuning = self.tuning
        s = exp_blend(dt, tuning.target_smoothing)
        self.target = Vec2.lerp(self.target, self.raw_target, s)

        delta = self.target - marker.pos
        dist = delta.length() or 1.0
        ramp = clamp(dist / float(tuning.arrive_radius), 0.0, 1.0)
        desired = delta * (float(tuning.max_speed) * ramp / dist)
        return (desired - marker.vel) * float(tuning.steering_gain)

    def _keys_accel(self, snapshot: InputSnapshot, rng: Lcg) -> Vec2:
        tuning = self.tuning
        accel = key_vector(snapshot.keys) * float(tuning.keys_accel)
        jitter_x = rng.centered(float(tuning.keys_jitter))
        jitter_y = rng.centered(float(tuning.keys_jitter))
        return accel + Vec2(jitter_x, jitter_y)

    def control_accel(
        self,
        dt: float,
        now: float,
        snapshot: InputSnapshot,
        marker: Marker,
        *,
        sabotage: Collection[SabotageKind],
        enabled: bool,
        rng: Lcg,
    ) -> SteeringStep:
        if not enabled:
            return SteeringStep(accel=Vec2())

        if snapshot.mode is ControlMode.KEYS:
            raw = self._keys_accel(snapshot, rng)
        else:
            raw = self._pointer_accel(dt, marker)

        blend = exp_blend(dt, self.tuning.lag)
        self.lagged_accel = Vec2.lerp(self.lagged_accel, raw, blend)

        accel = self.lagged_accel
        if SabotageKind.INVERT in sabotage:
            accel = -accel
        push, shake = sabotage_push(sabotage, now)
        return SteeringStep(accel=accel + push, shake=shake)

    def integrate(self, dt: float, marker: Marker, accel: Vec2, bounds: Rect) -> None:
        tuning = self.tuning
        vel = marker.vel + accel * dt
        vel = vel * math.exp(-float(tuning.drag) * dt)
        vel = vel.clamp_length(float(tuning.max_speed))
        marker.vel = vel
        marker.pos = bounds.clamp_point(marker.pos + vel * dt)

    def step(
        self,
        dt: float,
        now: float,
        snapshot: InputSnapshot,
        marker: Marker,
        *,
        sabotage: Collection[SabotageKind],
        enabled: bool,
        rng: Lcg,
        bounds: Rect,
    ) -> SteeringStep:
        """Advance `marker` in place by one step of length `dt`."""
        result = self.control_accel(dt, now, snapshot, marker, sabotage=sabotage, enabled=enabled, rng=rng)
        self.integrate(dt, marker, result.accel, bounds)
        return result
