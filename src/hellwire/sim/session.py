from __future__ import annotations

from dataclasses import dataclass, field
import math

from ..config import GameConfig
from ..debug_log import debug_log
from ..geom import Rect, Vec2
from ..lcg import Lcg
from ..profiles import DeviceProfile, profile_tuning, resolve_profile
from ..wire.generate import generate
from ..wire.morph import MorphTransition
from ..wire.path import WirePath
from ..wire.proximity import NearestHit, nearest, progress_at
from ..wire.sample import SampledPolyline, rebuild_polyline
from .clock import clamp_dt
from .director import EventDirector, FiredEvent
from .events import CALM_TEXT, StepEvent, StepEventKind, countdown_text
from .input import InputSnapshot
from .phase import (
    Active,
    CloseRecatch,
    Countdown,
    Idle,
    OpenRecatch,
    Over,
    Pause,
    Phase,
    PhaseKind,
    Reset,
    Respawning,
    Signal,
    Start,
    Strike,
    Tick,
    Win,
    input_enabled,
    is_terminal,
    transition,
)
from .sabotage import SabotageKind, SabotageTimers
from .shake import STRIKE_SHAKE, ShakeSignal
from .steering import Marker, SteeringController

DEFAULT_RUNTIME_SEED = 0xBEEF


@dataclass(frozen=True, slots=True)
class StepResult:
    phase: PhaseKind
    strikes: int
    max_strikes: int
    best_progress: float
    total_length: float
    marker_pos: Vec2
    marker_vel: Vec2
    outer_radius: float
    inner_radius: float
    nearest: NearestHit
    polyline: SampledPolyline
    in_recatch: bool
    input_enabled: bool
    sabotage: frozenset[SabotageKind]
    tolerance: float
    elapsed: float
    countdown_remaining: int | None
    shake: float
    banner: str
    events: tuple[StepEvent, ...] = ()

    @property
    def progress_fraction(self) -> float:
        if self.total_length <= 0.0:
            return 0.0
        return self.best_progress / self.total_length

    def has_event(self, kind: StepEventKind) -> bool:
        return any(event.kind is kind for event in self.events)


@dataclass(slots=True)
class WireSession:
    """The single mutable simulation aggregate.

    Driven by one `step(dt, now, snapshot)` call per frame; every timed
    behavior compares against the `now` passed in.
    """

    config: GameConfig
    bounds: Rect
    path: WirePath
    seed: int
    rng: Lcg
    director: EventDirector
    steering: SteeringController
    marker: Marker
    polyline: SampledPolyline
    phase: Phase = field(default_factory=Idle)
    morph: MorphTransition | None = None
    sabotage: SabotageTimers = field(default_factory=SabotageTimers)
    shake: ShakeSignal = field(default_factory=ShakeSignal)
    strikes: int = 0
    best_progress: float = 0.0
    elapsed: float = 0.0
    banner: str = CALM_TEXT
    last_now: float = 0.0
    step_index: int = 0

    @classmethod
    def build(
        cls,
        *,
        bounds: Rect,
        profile: DeviceProfile | str = DeviceProfile.DESKTOP,
        seed: int | None = None,
        path: WirePath | None = None,
        config: GameConfig | None = None,
        runtime_seed: int = DEFAULT_RUNTIME_SEED,
    ) -> WireSession:
        if not (bounds.w > 0.0 and bounds.h > 0.0):
            raise ValueError(f"playable bounds must have positive size, got {bounds}")
        config = config or GameConfig()
        if path is None:
            resolved = resolve_profile(profile)
            if seed is None:
                seed = int(profile_tuning(resolved).default_seed)
            path = generate(int(seed), resolved)
        elif seed is None:
            seed = 0
        tuning = profile_tuning(path.profile)
        polyline = rebuild_polyline(path.points, path.profile, bounds)
        marker = Marker(
            pos=polyline.start,
            outer_radius=config.scaled_outer_radius,
            inner_radius=config.scaled_inner_radius,
        )
        steering = SteeringController(tuning=tuning)
        steering.freeze(marker)
        return cls(
            config=config,
            bounds=bounds,
            path=path,
            seed=int(seed),
            rng=Lcg(int(runtime_seed)),
            director=EventDirector(tuning=tuning, config=config),
            steering=steering,
            marker=marker,
            polyline=polyline,
        )

    @property
    def profile(self) -> DeviceProfile:
        return self.path.profile

    @property
    def movement_bounds(self) -> Rect:
        pad = self.config.scaled_padding
        return self.bounds.inset(dx=pad, dy=pad)

    @property
    def input_enabled(self) -> bool:
        return input_enabled(self.phase)

    @property
    def in_recatch(self) -> bool:
        return isinstance(self.phase, Active) and self.phase.in_recatch

    # -- phase plumbing ---------------------------------------------------

    def _apply(self, signal: Signal) -> Phase:
        before = self.phase
        after = transition(before, signal, config=self.config)
        if after != before:
            debug_log(
                "phase",
                step=self.step_index,
                before=before.kind.name,
                after=after.kind.name,
                strikes=self.strikes,
            )
        self.phase = after
        if not input_enabled(after) and input_enabled(before):
            self._disable_input()
        return after

    def _disable_input(self) -> None:
        self.marker.vel = Vec2()
        self.steering.freeze(self.marker)

    def _respawn(self) -> None:
        self.marker.pos = self.polyline.start
        self.marker.vel = Vec2()
        self.best_progress = 0.0
        self.steering.freeze(self.marker)

    def _countdown_remaining(self, now: float) -> int | None:
        if isinstance(self.phase, Countdown):
            return max(0, int(math.ceil(self.phase.until - float(now))))
        return None

    # -- commands ---------------------------------------------------------

    def start(self, now: float) -> list[StepEvent]:
        """Begin (or resume) play with a fresh countdown."""
        events: list[StepEvent] = []
        if is_terminal(self.phase):
            events.extend(self.reset(now, full=True))
        if not isinstance(self.phase, Idle):
            return events
        self._respawn_if_fresh()
        self._apply(Start(now=float(now)))
        self._disable_input()
        event = StepEvent.countdown(self.countdown_seconds)
        self.banner = event.text
        events.append(event)
        debug_log("start", now=float(now), strikes=self.strikes)
        return events

    @property
    def countdown_seconds(self) -> int:
        return int(math.ceil(self.config.countdown_seconds))

    def _respawn_if_fresh(self) -> None:
        # A paused run keeps its marker; anything else starts at the wire start.
        if isinstance(self.phase, Idle) and not self.phase.paused:
            self._respawn()

    def resume(self, now: float) -> list[StepEvent]:
        return self.start(now)

    def pause(self, now: float) -> list[StepEvent]:
        """Drop back to the menu; strikes, progress and hazard timers are kept."""
        if not isinstance(self.phase, (Active, Countdown)):
            return []
        self._apply(Pause())
        self._disable_input()
        event = StepEvent.of(StepEventKind.PAUSED, strikes=self.strikes)
        self.banner = event.text
        debug_log("pause", now=float(now), strikes=self.strikes, best=self.best_progress)
        return [event]

    def reset(self, now: float, *, full: bool = True) -> list[StepEvent]:
        """Put the marker back at the start.

        A full reset also clears strikes, active sabotage, the recatch window
        and the hazard timers, and leaves the session idle. A partial reset
        keeps strikes and goes straight into a fresh countdown.
        """
        if full:
            self._apply(Reset())
            self.strikes = 0
            self.sabotage.clear()
            self.director.disarm()
            self.shake.reset()
            self.elapsed = 0.0
            self._respawn()
            event = StepEvent.of(StepEventKind.RESET)
            self.banner = CALM_TEXT
            debug_log("reset", now=float(now), full=True)
            return [event]

        self._apply(Reset())
        self._respawn()
        debug_log("reset", now=float(now), full=False, strikes=self.strikes)
        return self.start(now)

    # -- per-step stages --------------------------------------------------

    def _advance_morph(self, now: float) -> None:
        morph = self.morph
        if morph is None:
            return
        self.path.assign(morph.points_at(now))
        if morph.finished(now):
            self.morph = None

    def _rebuild(self) -> None:
        self.polyline = rebuild_polyline(self.path.points, self.path.profile, self.bounds)

    def _advance_phase(self, now: float, snapshot: InputSnapshot, events: list[StepEvent]) -> None:
        phase = self.phase
        if isinstance(phase, Respawning) and float(now) >= phase.at:
            self._respawn()
            self._apply(Tick(now=float(now)))
            self._disable_input()
            events.append(StepEvent.of(StepEventKind.RESPAWN, strikes=self.strikes))
            self.banner = countdown_text(self.countdown_seconds)
            return

        if isinstance(phase, Countdown):
            if float(now) < phase.until:
                # Pre-aim: the target follows the pointer but nothing moves yet.
                self.steering.aim(snapshot, enabled=False)
                self.banner = countdown_text(self._countdown_remaining(now) or 0)
                return
            self._apply(Tick(now=float(now)))
            self.elapsed = 0.0
            if not self.director.armed:
                self.director.arm(now, self.rng)
                debug_log(
                    "arm",
                    now=float(now),
                    next_sabotage=self.director.next_sabotage_at,
                    next_morph=self.director.next_morph_at,
                )
            event = StepEvent.of(StepEventKind.GO)
            self.banner = CALM_TEXT
            events.append(event)

    def _fire_hazards(self, now: float, events: list[StepEvent]) -> None:
        if not self.input_enabled:
            return
        fired = self.director.update(
            now,
            path=self.path,
            timers=self.sabotage,
            shake=self.shake,
            rng=self.rng,
        )
        for item in fired:
            events.append(self._apply_fired(item))

    def _apply_fired(self, item: FiredEvent) -> StepEvent:
        if item.morph is not None:
            self.morph = item.morph
            self._apply(OpenRecatch(until=item.until))
            event = StepEvent.of(StepEventKind.MORPH, strikes=self.strikes)
            debug_log("morph", now=item.at, recatch_until=item.until)
        elif item.sabotage is not None:
            event = StepEvent.sabotage_fired(item.sabotage)
            debug_log("sabotage", now=item.at, kind=item.sabotage.label, until=item.until)
        else:
            raise ValueError(f"fired event carries no payload: {item!r}")
        self.banner = event.text
        return event

    def _integrate(self, dt: float, now: float, snapshot: InputSnapshot) -> None:
        if not self.input_enabled:
            return
        self.steering.aim(snapshot, enabled=True)
        result = self.steering.step(
            dt,
            now,
            snapshot,
            self.marker,
            sabotage=self.sabotage.active(now),
            enabled=True,
            rng=self.rng,
            bounds=self.movement_bounds,
        )
        if result.shake > 0.0:
            self.shake.bump(result.shake)

    def _charge_strike(self, now: float, kind: StepEventKind, events: list[StepEvent]) -> None:
        self.strikes = min(self.strikes + 1, int(self.config.max_strikes))
        self.shake.bump(STRIKE_SHAKE)
        events.append(StepEvent.of(kind, strikes=self.strikes))
        debug_log("strike", now=float(now), reason=kind.name, strikes=self.strikes)
        self._apply(Strike(now=float(now), strikes=self.strikes))
        if isinstance(self.phase, Over):
            event = StepEvent.of(StepEventKind.GAME_OVER, strikes=self.strikes)
            events.append(event)
            self.banner = event.text
            debug_log("game_over", now=float(now), strikes=self.strikes)
        else:
            self.banner = StepEvent.of(kind).text

    def _resolve(self, now: float, hit: NearestHit, events: list[StepEvent]) -> None:
        phase = self.phase
        if not isinstance(phase, Active):
            return
        d = hit.distance
        allowed = self.tolerance(now)

        if phase.recatch_until is not None:
            if d <= allowed:
                self._apply(CloseRecatch())
                event = StepEvent.of(StepEventKind.RECATCHED, strikes=self.strikes)
                self.banner = event.text
                events.append(event)
                debug_log("recatched", now=float(now))
            elif float(now) >= phase.recatch_until:
                self._apply(CloseRecatch())
                self._charge_strike(now, StepEventKind.RECATCH_FAILED, events)
                return
        elif d > allowed:
            self._charge_strike(now, StepEventKind.STRIKE, events)
            return

        progress = progress_at(self.polyline, hit)
        if progress > self.best_progress:
            self.best_progress = progress

        if self.win_reached():
            self._apply(Win())
            event = StepEvent.of(StepEventKind.WON, strikes=self.strikes)
            self.banner = event.text
            events.append(event)
            debug_log("won", now=float(now), strikes=self.strikes, elapsed=self.elapsed)
            return

        if (
            float(now) > self.sabotage.any_until
            and not self.in_recatch
            and self.morph is None
            and not events
        ):
            self.banner = CALM_TEXT

    # -- queries ----------------------------------------------------------

    def tolerance(self, now: float) -> float:
        return self.config.tolerance(pinched=self.sabotage.is_active(SabotageKind.PINCH, now))

    def win_reached(self) -> bool:
        """Both conditions: near the end sample and far enough along the wire."""
        end = self.polyline.end
        near_end = self.marker.pos.distance_to(end) < self.config.scaled_win_radius
        far_enough = self.best_progress >= self.polyline.total_length * self.config.win_progress_fraction
        return near_end and far_enough

    # -- main entry -------------------------------------------------------

    def step(self, dt: float, now: float, snapshot: InputSnapshot | None = None) -> StepResult:
        dt = clamp_dt(dt, max_dt=self.config.max_dt)
        now = float(now)
        if not math.isfinite(now):
            raise ValueError(f"now must be finite, got {now}")
        snapshot = snapshot or InputSnapshot()
        events: list[StepEvent] = []

        self._advance_morph(now)
        self._rebuild()
        self._advance_phase(now, snapshot, events)
        self._fire_hazards(now, events)

        hit = nearest(self.polyline, self.marker.pos)
        if isinstance(self.phase, Active):
            self.elapsed = now - self.phase.started_at
            self._integrate(dt, now, snapshot)
            hit = nearest(self.polyline, self.marker.pos)
            self._resolve(now, hit, events)

        self.last_now = now
        self.step_index += 1
        return self.snapshot_result(now, hit, events)

    def snapshot_result(self, now: float, hit: NearestHit, events: list[StepEvent]) -> StepResult:
        return StepResult(
            phase=self.phase.kind,
            strikes=int(self.strikes),
            max_strikes=int(self.config.max_strikes),
            best_progress=float(self.best_progress),
            total_length=float(self.polyline.total_length),
            marker_pos=self.marker.pos,
            marker_vel=self.marker.vel,
            outer_radius=float(self.marker.outer_radius),
            inner_radius=float(self.marker.inner_radius),
            nearest=hit,
            polyline=self.polyline,
            in_recatch=self.in_recatch,
            input_enabled=self.input_enabled,
            sabotage=self.sabotage.active(now),
            tolerance=self.tolerance(now),
            elapsed=float(self.elapsed),
            countdown_remaining=self._countdown_remaining(now),
            shake=self.shake.update(),
            banner=self.banner,
            events=tuple(events),
        )
