from __future__ import annotations

from dataclasses import dataclass
import math


def clamp_dt(dt: float, *, max_dt: float) -> float:
    """Validate a frame delta and cap it to bound integration error."""
    dt = float(dt)
    if not math.isfinite(dt) or dt < 0.0:
        raise ValueError(f"dt must be finite and non-negative, got {dt}")
    if dt > float(max_dt):
        return float(max_dt)
    return dt


@dataclass(slots=True)
class FixedStepClock:
    """Synthetic monotonic clock for headless drivers and replays."""

    tick_rate: int = 60
    tick: int = 0
    start: float = 0.0

    def __post_init__(self) -> None:
        tick_rate = int(self.tick_rate)
        if tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {tick_rate}")
        self.tick_rate = tick_rate
        self.tick = int(self.tick)
        self.start = float(self.start)

    @property
    def dt_tick(self) -> float:
        return 1.0 / float(self.tick_rate)

    @property
    def now(self) -> float:
        return self.start + float(self.tick) * self.dt_tick

    def reset(self) -> None:
        self.tick = 0

    def advance(self) -> tuple[float, float]:
        """Move one tick forward; returns `(dt, now)` for the new tick."""
        self.tick += 1
        return self.dt_tick, self.now
