from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class SabotageKind(IntEnum):
    INVERT = 0
    WIND = 1
    WOBBLE = 2
    PINCH = 3

    @property
    def label(self) -> str:
        return self.name.lower()


# Cumulative upper bounds of the selection roll: 25% / 25% / 22% / 28%.
SABOTAGE_BANDS: tuple[tuple[float, SabotageKind], ...] = (
    (0.25, SabotageKind.INVERT),
    (0.50, SabotageKind.WIND),
    (0.72, SabotageKind.WOBBLE),
    (1.00, SabotageKind.PINCH),
)


def pick_sabotage(roll: float) -> SabotageKind:
    for upper, kind in SABOTAGE_BANDS:
        if roll < upper:
            return kind
    return SABOTAGE_BANDS[-1][1]


@dataclass(slots=True)
class SabotageTimers:
    """Active-until timestamps, one per category; categories overlap freely."""

    invert_until: float = 0.0
    wind_until: float = 0.0
    wobble_until: float = 0.0
    pinch_until: float = 0.0
    # Latest expiry of any sabotage, used to age out the event text.
    any_until: float = 0.0

    def activate(self, kind: SabotageKind, until: float) -> None:
        until = float(until)
        if kind is SabotageKind.INVERT:
            self.invert_until = until
        elif kind is SabotageKind.WIND:
            self.wind_until = until
        elif kind is SabotageKind.WOBBLE:
            self.wobble_until = until
        else:
            self.pinch_until = until
        self.any_until = max(self.any_until, until)

    def until(self, kind: SabotageKind) -> float:
        if kind is SabotageKind.INVERT:
            return self.invert_until
        if kind is SabotageKind.WIND:
            return self.wind_until
        if kind is SabotageKind.WOBBLE:
            return self.wobble_until
        return self.pinch_until

    def is_active(self, kind: SabotageKind, now: float) -> bool:
        return float(now) < self.until(kind)

    def active(self, now: float) -> frozenset[SabotageKind]:
        return frozenset(kind for kind in SabotageKind if self.is_active(kind, now))

    def clear(self) -> None:
        self.invert_until = 0.0
        self.wind_until = 0.0
        self.wobble_until = 0.0
        self.pinch_until = 0.0
        self.any_until = 0.0
