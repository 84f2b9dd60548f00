from __future__ import annotations

from dataclasses import dataclass

from ..config import GameConfig
from ..lcg import Lcg
from ..profiles import ProfileTuning
from ..wire.morph import MorphTransition, perturb_points
from ..wire.path import WirePath
from .events import StepEventKind
from .sabotage import SabotageKind, SabotageTimers, pick_sabotage
from .shake import MORPH_SHAKE, SABOTAGE_SHAKE, ShakeSignal


@dataclass(frozen=True, slots=True)
class FiredEvent:
    kind: StepEventKind
    at: float
    sabotage: SabotageKind | None = None
    until: float = 0.0
    morph: MorphTransition | None = None


@dataclass(slots=True)
class EventDirector:
    """Two independent hazard timers: sabotage and wire morph.

    Unarmed timers never fire. Each firing re-arms its own timer with
    `base + random * jitter` seconds from the firing time.
    """

    tuning: ProfileTuning
    config: GameConfig
    next_sabotage_at: float | None = None
    next_morph_at: float | None = None

    @property
    def armed(self) -> bool:
        return self.next_sabotage_at is not None and self.next_morph_at is not None

    def arm(self, now: float, rng: Lcg) -> None:
        self.schedule_sabotage(now, rng)
        self.schedule_morph(now, rng)

    def disarm(self) -> None:
        self.next_sabotage_at = None
        self.next_morph_at = None

    def schedule_sabotage(self, now: float, rng: Lcg) -> None:
        self.next_sabotage_at = float(now) + self.tuning.sabotage_base + rng.random() * self.tuning.sabotage_jitter

    def schedule_morph(self, now: float, rng: Lcg) -> None:
        self.next_morph_at = float(now) + self.tuning.morph_base + rng.random() * self.tuning.morph_jitter

    def trigger_sabotage(self, now: float, *, timers: SabotageTimers, shake: ShakeSignal, rng: Lcg) -> FiredEvent:
        config = self.config
        kind = pick_sabotage(rng.random())
        duration = config.sabotage_min_duration + rng.random() * config.sabotage_duration_jitter
        until = float(now) + duration
        timers.activate(kind, until)
        if rng.random() < config.sabotage_shake_chance:
            shake.bump(SABOTAGE_SHAKE)
        self.schedule_sabotage(now, rng)
        return FiredEvent(kind=StepEventKind.SABOTAGE, at=float(now), sabotage=kind, until=until)

    def trigger_morph(self, now: float, *, path: WirePath, shake: ShakeSignal, rng: Lcg) -> FiredEvent:
        source = path.snapshot()
        target = tuple(perturb_points(source, path.profile, rng))
        transition = MorphTransition(
            source=source,
            target=target,
            started_at=float(now),
            duration=self.config.morph_duration,
        )
        shake.bump(MORPH_SHAKE)
        self.schedule_morph(now, rng)
        return FiredEvent(
            kind=StepEventKind.MORPH,
            at=float(now),
            until=float(now) + self.config.recatch_window,
            morph=transition,
        )

    def update(
        self,
        now: float,
        *,
        path: WirePath,
        timers: SabotageTimers,
        shake: ShakeSignal,
        rng: Lcg,
    ) -> list[FiredEvent]:
        """Fire whichever timers are due at `now`, sabotage first."""
        fired: list[FiredEvent] = []
        if self.next_sabotage_at is not None and float(now) >= self.next_sabotage_at:
            fired.append(self.trigger_sabotage(now, timers=timers, shake=shake, rng=rng))
        if self.next_morph_at is not None and float(now) >= self.next_morph_at:
            fired.append(self.trigger_morph(now, path=path, shake=shake, rng=rng))
        return fired
