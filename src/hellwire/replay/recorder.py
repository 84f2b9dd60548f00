from __future__ import annotations

from ..sim.input import InputSnapshot
from .types import COMMAND_KINDS, REPLAY_FORMAT_VERSION, Replay, ReplayCommand, ReplayHeader, ReplayStep


class ReplayRecorder:
    def __init__(self, header: ReplayHeader, *, version: int = REPLAY_FORMAT_VERSION) -> None:
        if int(version) != REPLAY_FORMAT_VERSION:
            raise ValueError(f"unsupported replay version: {version}")
        self._version = int(version)
        self._header = header
        self._steps: list[ReplayStep] = []
        self._commands: list[ReplayCommand] = []

    @property
    def header(self) -> ReplayHeader:
        return self._header

    @property
    def step_index(self) -> int:
        return len(self._steps)

    def record_step(self, dt: float, now: float, snapshot: InputSnapshot) -> int:
        """Record one step's timing and input; returns the recorded step index."""
        index = len(self._steps)
        self._steps.append(ReplayStep.from_snapshot(dt, now, snapshot))
        return index

    def record_command(self, kind: str, *, now: float, full: bool = True) -> None:
        if kind not in COMMAND_KINDS:
            raise ValueError(f"unknown replay command: {kind!r}")
        self._commands.append(
            ReplayCommand(step_index=len(self._steps), kind=str(kind), now=float(now), full=bool(full))
        )

    def finish(self, *, fingerprint: str = "") -> Replay:
        return Replay(
            version=self._version,
            header=self._header,
            steps=list(self._steps),
            commands=list(self._commands),
            fingerprint=str(fingerprint),
        )
