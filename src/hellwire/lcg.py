from __future__ import annotations


class Lcg:
    """Numerical Recipes 32-bit LCG used for wire generation and runtime hazards.

    Matches:
      seed = (seed * 1664525 + 1013904223) mod 2**32
      return seed / 2**32
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = int(seed) & 0xFFFFFFFF

    @property
    def state(self) -> int:
        return self._state

    def seed(self, seed: int) -> None:
        self._state = int(seed) & 0xFFFFFFFF

    def next_u32(self) -> int:
        self._state = (self._state * 1664525 + 1013904223) & 0xFFFFFFFF
        return self._state

    def random(self) -> float:
        return self.next_u32() / 4294967296.0

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.random()

    def centered(self, amplitude: float) -> float:
        """Return a value in `[-amplitude / 2, amplitude / 2)`."""
        return (self.random() - 0.5) * amplitude

    def randrange(self, n: int) -> int:
        if int(n) <= 0:
            raise ValueError(f"randrange bound must be positive, got {n}")
        return int(self.random() * int(n))

    def sign(self) -> float:
        return -1.0 if self.random() < 0.5 else 1.0
