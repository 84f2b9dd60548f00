from __future__ import annotations

import hashlib
import struct

from ..geom import Vec2
from ..wire.morph import MorphTransition
from .phase import Active, Countdown, Idle, Phase, Respawning
from .session import WireSession

_U8 = struct.Struct("<B")
_U32 = struct.Struct("<I")
_F64 = struct.Struct("<d")


def _h_u8(h: "hashlib._Hash", value: int) -> None:
    h.update(_U8.pack(int(value) & 0xFF))


def _h_u32(h: "hashlib._Hash", value: int) -> None:
    h.update(_U32.pack(int(value) & 0xFFFF_FFFF))


def _h_f64(h: "hashlib._Hash", value: float) -> None:
    h.update(_F64.pack(float(value)))


def _h_vec(h: "hashlib._Hash", value: Vec2) -> None:
    _h_f64(h, value.x)
    _h_f64(h, value.y)


def _h_opt(h: "hashlib._Hash", value: float | None) -> None:
    if value is None:
        _h_u8(h, 0)
        return
    _h_u8(h, 1)
    _h_f64(h, value)


def _h_phase(h: "hashlib._Hash", phase: Phase) -> None:
    _h_u8(h, int(phase.kind))
    match phase:
        case Idle(paused=paused):
            _h_u8(h, 1 if paused else 0)
        case Countdown(until=until):
            _h_f64(h, until)
        case Active(started_at=started_at, recatch_until=recatch_until):
            _h_f64(h, started_at)
            _h_opt(h, recatch_until)
        case Respawning(at=at):
            _h_f64(h, at)


def _h_morph(h: "hashlib._Hash", morph: MorphTransition | None) -> None:
    if morph is None:
        _h_u8(h, 0)
        return
    _h_u8(h, 1)
    _h_f64(h, morph.started_at)
    _h_f64(h, morph.duration)
    _h_u32(h, len(morph.target))
    for a, b in zip(morph.source, morph.target):
        _h_vec(h, a)
        _h_vec(h, b)


def session_fingerprint(session: WireSession) -> str:
    """Hash everything that feeds future steps; equal hashes mean equal futures."""
    h = hashlib.sha256()
    _h_u32(h, session.rng.state)
    _h_phase(h, session.phase)
    _h_u8(h, int(session.strikes))
    _h_f64(h, session.best_progress)
    _h_f64(h, session.elapsed)

    marker = session.marker
    _h_vec(h, marker.pos)
    _h_vec(h, marker.vel)

    steering = session.steering
    _h_vec(h, steering.raw_target)
    _h_vec(h, steering.target)
    _h_vec(h, steering.lagged_accel)

    _h_opt(h, session.director.next_sabotage_at)
    _h_opt(h, session.director.next_morph_at)
    timers = session.sabotage
    for value in (timers.invert_until, timers.wind_until, timers.wobble_until, timers.pinch_until):
        _h_f64(h, value)
    _h_f64(h, timers.any_until)

    _h_u32(h, len(session.path.points))
    for point in session.path.points:
        _h_vec(h, point)
    _h_morph(h, session.morph)
    return h.hexdigest()[:16]
