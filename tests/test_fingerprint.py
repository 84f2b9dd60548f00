from __future__ import annotations

from hellwire.config import GameConfig
from hellwire.geom import Rect, Vec2
from hellwire.profiles import DeviceProfile
from hellwire.sim import WireSession
from hellwire.sim.fingerprint import session_fingerprint
from hellwire.sim.phase import Active, Countdown, Respawning
from hellwire.wire import WirePath
from hellwire.wire.morph import MorphTransition


def _session() -> WireSession:
    path = WirePath.from_pairs(DeviceProfile.MOBILE, [(0.1, 0.5), (0.5, 0.4), (0.9, 0.5)])
    return WireSession.build(bounds=Rect(0.0, 0.0, 1000.0, 1000.0), path=path, config=GameConfig())


def test_fresh_sessions_hash_alike() -> None:
    assert session_fingerprint(_session()) == session_fingerprint(_session())


def test_phase_deadlines_change_the_hash() -> None:
    a = _session()
    b = _session()

    a.phase = Countdown(until=5.0)
    b.phase = Countdown(until=6.0)
    assert session_fingerprint(a) != session_fingerprint(b)

    a.phase = Respawning(at=1.0)
    b.phase = Respawning(at=1.5)
    assert session_fingerprint(a) != session_fingerprint(b)

    a.phase = Active(started_at=5.0)
    b.phase = Active(started_at=5.0, recatch_until=7.0)
    assert session_fingerprint(a) != session_fingerprint(b)

    b.phase = Active(started_at=5.0)
    assert session_fingerprint(a) == session_fingerprint(b)


def test_pending_morph_target_changes_the_hash() -> None:
    a = _session()
    b = _session()
    source = a.path.snapshot()
    lifted = tuple(Vec2(p.x, p.y - 0.05) for p in source)
    lowered = tuple(Vec2(p.x, p.y + 0.05) for p in source)

    a.morph = MorphTransition(source=source, target=lifted, started_at=1.0, duration=0.95)
    b.morph = MorphTransition(source=source, target=lowered, started_at=1.0, duration=0.95)
    assert session_fingerprint(a) != session_fingerprint(b)

    b.morph = MorphTransition(source=source, target=lifted, started_at=2.0, duration=0.95)
    assert session_fingerprint(a) != session_fingerprint(b)

    b.morph = MorphTransition(source=source, target=lifted, started_at=1.0, duration=0.95)
    assert session_fingerprint(a) == session_fingerprint(b)
