from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .sabotage import SabotageKind


class StepEventKind(IntEnum):
    COUNTDOWN = 0
    GO = 1
    SABOTAGE = 2
    MORPH = 3
    RECATCHED = 4
    RECATCH_FAILED = 5
    STRIKE = 6
    RESPAWN = 7
    GAME_OVER = 8
    WON = 9
    PAUSED = 10
    RESET = 11


CALM_TEXT = "No sabotage... yet."

SABOTAGE_TEXT: dict[SabotageKind, str] = {
    SabotageKind.INVERT: "Controls inverted. (Sorry.)",
    SabotageKind.WIND: "A mysterious wind pushes you.",
    SabotageKind.WOBBLE: "Wobble mode: enabled (unfortunately).",
    SabotageKind.PINCH: "Tolerance shrinks. Breathe carefully.",
}

EVENT_TEXT: dict[StepEventKind, str] = {
    StepEventKind.GO: "GO!",
    StepEventKind.MORPH: "WIRE SHIFT! Recatch it!",
    StepEventKind.RECATCHED: "Recaught. Don't blink.",
    StepEventKind.RECATCH_FAILED: "RECATCH failed. The wire ate you.",
    StepEventKind.STRIKE: "BUZZ! You touched the wire.",
    StepEventKind.RESPAWN: "Back to the start.",
    StepEventKind.GAME_OVER: "Game over. The wire wins.",
    StepEventKind.WON: "You did it. Somehow.",
    StepEventKind.PAUSED: "Paused.",
    StepEventKind.RESET: "Reset. The wire is still mad.",
}


def countdown_text(seconds_left: int) -> str:
    return f"Get ready... {int(seconds_left)}"


@dataclass(frozen=True, slots=True)
class StepEvent:
    """Something that happened during a step, for UI text and audio hooks."""

    kind: StepEventKind
    text: str
    sabotage: SabotageKind | None = None
    strikes: int = 0

    @classmethod
    def of(cls, kind: StepEventKind, *, strikes: int = 0) -> StepEvent:
        return cls(kind=kind, text=EVENT_TEXT.get(kind, ""), strikes=int(strikes))

    @classmethod
    def sabotage_fired(cls, kind: SabotageKind) -> StepEvent:
        return cls(kind=StepEventKind.SABOTAGE, text=SABOTAGE_TEXT[kind], sabotage=kind)

    @classmethod
    def countdown(cls, seconds_left: int) -> StepEvent:
        return cls(kind=StepEventKind.COUNTDOWN, text=countdown_text(seconds_left))
