from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
import math

from ..geom import Rect, Vec2
from ..profiles import ProfileTuning


class ControlMode(IntEnum):
    POINTER = 0
    KEYS = 1


class Direction(IntFlag):
    NONE = 0
    UP = 1 << 0
    DOWN = 1 << 1
    LEFT = 1 << 2
    RIGHT = 1 << 3


def control_mode_from_value(value: object) -> ControlMode:
    if isinstance(value, ControlMode):
        return value
    if isinstance(value, str):
        raw = value.strip().lower()
        if raw in ("mouse", "touch", "pen"):
            return ControlMode.POINTER
        if raw in ("keys", "keyboard"):
            return ControlMode.KEYS
        return ControlMode.POINTER
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return ControlMode(value)
        except ValueError:
            return ControlMode.POINTER
    return ControlMode.POINTER


@dataclass(frozen=True, slots=True)
class InputSnapshot:
    """One consistent read of the control devices for a single step.

    `target` is the pointer target in presentation space, or `None` when no
    pointer is held. `keys` is the set of held directional inputs.
    """

    mode: ControlMode = ControlMode.POINTER
    target: Vec2 | None = None
    keys: Direction = field(default=Direction.NONE)

    @classmethod
    def pointer(cls, x: float, y: float) -> InputSnapshot:
        return cls(mode=ControlMode.POINTER, target=Vec2(float(x), float(y)))

    @classmethod
    def directional(cls, keys: Direction) -> InputSnapshot:
        return cls(mode=ControlMode.KEYS, keys=Direction(keys))


def key_vector(keys: Direction) -> Vec2:
    """Normalized sum of the held directions (screen y grows downward)."""
    ix = (1.0 if keys & Direction.RIGHT else 0.0) - (1.0 if keys & Direction.LEFT else 0.0)
    iy = (1.0 if keys & Direction.DOWN else 0.0) - (1.0 if keys & Direction.UP else 0.0)
    length = math.hypot(ix, iy) or 1.0
    return Vec2(ix / length, iy / length)


@dataclass(frozen=True, slots=True)
class TouchJoystick:
    """Relative steering for touch and pen.

    A finger's drag away from where it landed moves the target away from where
    the marker was at touch-down, with a deadzone and a radius cap.
    """

    origin: Vec2
    anchor: Vec2

    def target(self, point: Vec2, tuning: ProfileTuning, *, ui_scale: float, playfield: Rect) -> Vec2:
        max_radius = float(tuning.touch_max_radius) * float(ui_scale)
        deadzone = float(tuning.touch_deadzone) * float(ui_scale)
        delta = point - self.origin
        magnitude = delta.length()
        if magnitude < deadzone:
            delta = Vec2()
        elif magnitude > max_radius:
            delta = delta * (max_radius / magnitude)
        return playfield.clamp_point(self.anchor + delta * float(tuning.touch_gain))
