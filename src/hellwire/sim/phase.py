"""Game phase as a single tagged value.

Each phase is its own frozen dataclass, so impossible combinations such as
"won and over" or "in recatch while counting down" cannot be represented.
`transition` is the only place phases change.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, TypeAlias

from ..config import GameConfig


class PhaseKind(IntEnum):
    IDLE = 0
    COUNTDOWN = 1
    ACTIVE = 2
    RESPAWNING = 3
    OVER = 4
    WON = 5


@dataclass(frozen=True, slots=True)
class Idle:
    kind: ClassVar[PhaseKind] = PhaseKind.IDLE
    paused: bool = False


@dataclass(frozen=True, slots=True)
class Countdown:
    kind: ClassVar[PhaseKind] = PhaseKind.COUNTDOWN
    until: float


@dataclass(frozen=True, slots=True)
class Active:
    kind: ClassVar[PhaseKind] = PhaseKind.ACTIVE
    started_at: float
    recatch_until: float | None = None

    @property
    def in_recatch(self) -> bool:
        return self.recatch_until is not None


@dataclass(frozen=True, slots=True)
class Respawning:
    kind: ClassVar[PhaseKind] = PhaseKind.RESPAWNING
    at: float


@dataclass(frozen=True, slots=True)
class Over:
    kind: ClassVar[PhaseKind] = PhaseKind.OVER


@dataclass(frozen=True, slots=True)
class Won:
    kind: ClassVar[PhaseKind] = PhaseKind.WON


Phase: TypeAlias = Idle | Countdown | Active | Respawning | Over | Won


@dataclass(frozen=True, slots=True)
class Start:
    now: float


@dataclass(frozen=True, slots=True)
class Tick:
    now: float


@dataclass(frozen=True, slots=True)
class OpenRecatch:
    until: float


@dataclass(frozen=True, slots=True)
class CloseRecatch:
    pass


@dataclass(frozen=True, slots=True)
class Strike:
    now: float
    strikes: int


@dataclass(frozen=True, slots=True)
class Win:
    pass


@dataclass(frozen=True, slots=True)
class Pause:
    pass


@dataclass(frozen=True, slots=True)
class Reset:
    pass


Signal: TypeAlias = Start | Tick | OpenRecatch | CloseRecatch | Strike | Win | Pause | Reset


def is_terminal(phase: Phase) -> bool:
    return isinstance(phase, (Over, Won))


def input_enabled(phase: Phase) -> bool:
    return isinstance(phase, Active)


def transition(phase: Phase, signal: Signal, *, config: GameConfig) -> Phase:
    """Return the phase after `signal`; signals that do not apply leave it unchanged."""
    match signal:
        case Reset():
            return Idle()
        case Start(now=now):
            if isinstance(phase, (Idle, Over, Won)):
                return Countdown(until=float(now) + config.countdown_seconds)
            return phase
        case Tick(now=now):
            if isinstance(phase, Countdown) and float(now) >= phase.until:
                return Active(started_at=float(now))
            if isinstance(phase, Respawning) and float(now) >= phase.at:
                return Countdown(until=float(now) + config.countdown_seconds)
            return phase
        case OpenRecatch(until=until):
            if isinstance(phase, Active):
                return Active(started_at=phase.started_at, recatch_until=float(until))
            return phase
        case CloseRecatch():
            if isinstance(phase, Active) and phase.in_recatch:
                return Active(started_at=phase.started_at)
            return phase
        case Strike(now=now, strikes=strikes):
            if not isinstance(phase, Active):
                return phase
            if int(strikes) >= int(config.max_strikes):
                return Over()
            return Respawning(at=float(now) + config.respawn_delay)
        case Win():
            if isinstance(phase, Active):
                return Won()
            return phase
        case Pause():
            if isinstance(phase, (Active, Countdown)):
                return Idle(paused=True)
            return phase
    raise TypeError(f"unknown phase signal: {signal!r}")
