from __future__ import annotations

from typing import Any, Literal, TypeAlias

import msgspec

from ..geom import Rect, Vec2
from ..sim.input import ControlMode, Direction, InputSnapshot, control_mode_from_value

REPLAY_FORMAT_VERSION = 1

CommandKind: TypeAlias = Literal["start", "pause", "resume", "reset"]
COMMAND_KINDS: tuple[str, ...] = ("start", "pause", "resume", "reset")


def _default_game_version() -> str:
    from .. import __version__

    return str(__version__)


class ReplayHeader(msgspec.Struct, forbid_unknown_fields=True):
    seed: int
    profile: str
    bounds: tuple[float, float, float, float]
    runtime_seed: int
    game_version: str = msgspec.field(default_factory=_default_game_version)
    config: dict[str, Any] = msgspec.field(default_factory=dict)

    @property
    def rect(self) -> Rect:
        x, y, w, h = self.bounds
        return Rect(float(x), float(y), float(w), float(h))


class ReplayStep(msgspec.Struct, array_like=True, forbid_unknown_fields=True):
    """One step row: `[dt, now, mode, target_x, target_y, keys]`."""

    dt: float
    now: float
    mode: int = int(ControlMode.POINTER)
    target_x: float | None = None
    target_y: float | None = None
    keys: int = 0

    @classmethod
    def from_snapshot(cls, dt: float, now: float, snapshot: InputSnapshot) -> ReplayStep:
        target = snapshot.target
        return cls(
            dt=float(dt),
            now=float(now),
            mode=int(snapshot.mode),
            target_x=None if target is None else float(target.x),
            target_y=None if target is None else float(target.y),
            keys=int(snapshot.keys),
        )

    def snapshot(self) -> InputSnapshot:
        target = None
        if self.target_x is not None and self.target_y is not None:
            target = Vec2(float(self.target_x), float(self.target_y))
        return InputSnapshot(
            mode=control_mode_from_value(self.mode),
            target=target,
            keys=Direction(int(self.keys) & 0xF),
        )


class ReplayCommand(msgspec.Struct, array_like=True, forbid_unknown_fields=True):
    """A session command applied just before step `step_index` runs."""

    step_index: int
    kind: str
    now: float
    full: bool = True


class Replay(msgspec.Struct, forbid_unknown_fields=True):
    version: int
    header: ReplayHeader
    steps: list[ReplayStep] = msgspec.field(default_factory=list)
    commands: list[ReplayCommand] = msgspec.field(default_factory=list)
    fingerprint: str = ""
