from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("hellwire")
except PackageNotFoundError:  # pragma: no cover
    # Allow running from source (e.g. `PYTHONPATH=src`) without installed package metadata.
    __version__ = "0.0.0+dev"

from .sim.input import InputSnapshot
from .sim.session import StepResult, WireSession
from .wire.generate import generate


def step(session: WireSession, dt: float, now: float, snapshot: InputSnapshot | None = None) -> StepResult:
    """Advance `session` by one frame."""
    return session.step(dt, now, snapshot)


def reset(session: WireSession, full_reset: bool = True, now: float | None = None) -> None:
    session.reset(session.last_now if now is None else float(now), full=bool(full_reset))


__all__ = [
    "InputSnapshot",
    "StepResult",
    "WireSession",
    "generate",
    "replay",
    "reset",
    "sim",
    "step",
    "wire",
]
