from __future__ import annotations

from pathlib import Path

from hellwire.debug_log import close_debug_log, debug_log, debug_log_path, init_debug_log
from hellwire.geom import Rect
from hellwire.sim import InputSnapshot, WireSession


def test_debug_log_is_silent_until_initialised(tmp_path: Path) -> None:
    close_debug_log()
    debug_log("ignored", value=1)

    assert debug_log_path() is None
    assert not (tmp_path / "logs").exists()


def test_debug_log_writes_sorted_key_value_lines(tmp_path: Path) -> None:
    path = init_debug_log(base_dir=tmp_path, seed=7, profile="desktop", source="test")
    try:
        assert debug_log_path() == path
        debug_log("phase", before="IDLE", after="COUNTDOWN", progress=1.23456789)
    finally:
        close_debug_log()
    debug_log("after_close", value=2)

    assert path.parent == tmp_path / "logs"
    assert path.name.startswith("hellwire-pid")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert " event=init " in lines[0]
    assert "seed=7" in lines[0]
    assert lines[1].endswith(" event=phase after=COUNTDOWN before=IDLE progress=1.23457")


def test_session_traces_phase_changes(tmp_path: Path) -> None:
    path = init_debug_log(base_dir=tmp_path, seed=1337, profile="desktop", source="test")
    try:
        session = WireSession.build(bounds=Rect(0.0, 0.0, 800.0, 600.0))
        session.start(0.0)
        session.step(1.0 / 60.0, 5.0, InputSnapshot.pointer(session.marker.pos.x, session.marker.pos.y))
    finally:
        close_debug_log()

    text = path.read_text(encoding="utf-8")
    assert "event=start" in text
    assert "event=phase after=COUNTDOWN before=IDLE" in text
    assert "event=phase after=ACTIVE before=COUNTDOWN" in text
    assert "event=arm" in text
