from __future__ import annotations

from dataclasses import dataclass, field

from ..config import ConfigError, GameConfig
from ..geom import Rect
from ..profiles import resolve_profile
from ..sim.events import StepEventKind
from ..sim.fingerprint import session_fingerprint
from ..sim.input import InputSnapshot
from ..sim.phase import PhaseKind
from ..sim.session import StepResult, WireSession
from .recorder import ReplayRecorder
from .types import Replay, ReplayCommand, ReplayHeader


class ReplayRunnerError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class ReplayRunResult:
    steps: int
    phase: PhaseKind
    strikes: int
    best_progress: float
    total_length: float
    elapsed: float
    fingerprint: str

    @property
    def progress_fraction(self) -> float:
        if self.total_length <= 0.0:
            return 0.0
        return self.best_progress / self.total_length


@dataclass(frozen=True, slots=True)
class ReplayVerification:
    expected: str
    actual: str
    run: ReplayRunResult
    version_note: str | None = None

    @property
    def ok(self) -> bool:
        return bool(self.expected) and self.expected == self.actual


def header_version_note(header: ReplayHeader, *, current_version: str | None = None) -> str | None:
    """Explain why this build may not reproduce the recorded session, or return None.

    Wire generation and steering constants are tied to the package version, so a
    header from another build can replay to a different fingerprint.
    """
    if current_version is None:
        from .. import __version__

        current_version = __version__
    current = str(current_version)
    recorded = str(header.game_version)
    if not recorded:
        return (
            f"replay header has no game_version; the {header.profile} wire for seed={header.seed} "
            f"may differ under {current!r}"
        )
    if recorded != current:
        return f"replay recorded by hellwire {recorded!r}, running {current!r}; the fingerprint may not reproduce"
    return None


def session_from_header(header: ReplayHeader) -> WireSession:
    try:
        config = GameConfig.from_overrides(header.config)
    except (ConfigError, TypeError) as exc:
        raise ReplayRunnerError(f"invalid replay config: {exc}") from exc
    try:
        profile = resolve_profile(header.profile)
    except ValueError as exc:
        raise ReplayRunnerError(str(exc)) from exc
    return WireSession.build(
        bounds=header.rect,
        profile=profile,
        seed=int(header.seed),
        config=config,
        runtime_seed=int(header.runtime_seed),
    )


def header_for_session(session: WireSession, *, runtime_seed: int) -> ReplayHeader:
    b = session.bounds
    return ReplayHeader(
        seed=int(session.seed),
        profile=session.profile.label,
        bounds=(float(b.x), float(b.y), float(b.w), float(b.h)),
        runtime_seed=int(runtime_seed),
        config=session.config.overrides(),
    )


def apply_command(session: WireSession, command: ReplayCommand) -> None:
    now = float(command.now)
    match command.kind:
        case "start":
            session.start(now)
        case "resume":
            session.resume(now)
        case "pause":
            session.pause(now)
        case "reset":
            session.reset(now, full=bool(command.full))
        case _:
            raise ReplayRunnerError(f"unknown replay command: {command.kind!r}")


def run_replay(replay: Replay, *, max_steps: int | None = None) -> tuple[WireSession, ReplayRunResult]:
    """Re-run a recorded session from its header, commands and input rows."""
    session = session_from_header(replay.header)
    pending: dict[int, list[ReplayCommand]] = {}
    for command in replay.commands:
        pending.setdefault(int(command.step_index), []).append(command)

    steps = replay.steps if max_steps is None else replay.steps[: max(0, int(max_steps))]
    for index, row in enumerate(steps):
        for command in pending.get(index, ()):
            apply_command(session, command)
        session.step(row.dt, row.now, row.snapshot())
    if max_steps is None:
        for command in pending.get(len(replay.steps), ()):
            apply_command(session, command)

    result = ReplayRunResult(
        steps=len(steps),
        phase=session.phase.kind,
        strikes=int(session.strikes),
        best_progress=float(session.best_progress),
        total_length=float(session.polyline.total_length),
        elapsed=float(session.elapsed),
        fingerprint=session_fingerprint(session),
    )
    return session, result


def verify_replay(replay: Replay, *, current_version: str | None = None) -> ReplayVerification:
    if not replay.fingerprint:
        raise ReplayRunnerError("replay has no recorded fingerprint to verify against")
    note = header_version_note(replay.header, current_version=current_version)
    _session, run = run_replay(replay)
    return ReplayVerification(
        expected=str(replay.fingerprint),
        actual=run.fingerprint,
        run=run,
        version_note=note,
    )


@dataclass(slots=True)
class RecordingSession:
    """A `WireSession` whose commands and steps are written to a recorder as they happen."""

    session: WireSession
    recorder: ReplayRecorder
    last: StepResult | None = None
    outcomes: list[StepEventKind] = field(default_factory=list)

    @classmethod
    def wrap(cls, session: WireSession, *, runtime_seed: int) -> RecordingSession:
        return cls(session=session, recorder=ReplayRecorder(header_for_session(session, runtime_seed=runtime_seed)))

    def start(self, now: float) -> None:
        self.recorder.record_command("start", now=now)
        self.session.start(now)

    def resume(self, now: float) -> None:
        self.recorder.record_command("resume", now=now)
        self.session.resume(now)

    def pause(self, now: float) -> None:
        self.recorder.record_command("pause", now=now)
        self.session.pause(now)

    def reset(self, now: float, *, full: bool = True) -> None:
        self.recorder.record_command("reset", now=now, full=full)
        self.session.reset(now, full=full)

    def step(self, dt: float, now: float, snapshot: InputSnapshot) -> StepResult:
        self.recorder.record_step(dt, now, snapshot)
        result = self.session.step(dt, now, snapshot)
        self.outcomes.extend(event.kind for event in result.events)
        self.last = result
        return result

    def finish(self) -> Replay:
        return self.recorder.finish(fingerprint=session_fingerprint(self.session))
