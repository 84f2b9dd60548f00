from __future__ import annotations

from dataclasses import dataclass

SHAKE_DECAY = 0.88
SHAKE_EPSILON = 0.01

SABOTAGE_SHAKE = 8.0
MORPH_SHAKE = 14.0
STRIKE_SHAKE = 16.0


@dataclass(slots=True)
class ShakeSignal:
    """Cosmetic screen-shake magnitude; the renderer picks the offsets."""

    intensity: float = 0.0

    def bump(self, level: float) -> None:
        if float(level) > self.intensity:
            self.intensity = float(level)

    def update(self) -> float:
        """Return this step's magnitude and decay it for the next step."""
        magnitude = self.intensity
        if magnitude <= SHAKE_EPSILON:
            self.intensity = 0.0
            return 0.0
        self.intensity = magnitude * SHAKE_DECAY
        return magnitude

    def reset(self) -> None:
        self.intensity = 0.0
