from __future__ import annotations

from .codec import ReplayCodecError, dump_replay, dump_replay_file, load_replay, load_replay_file
from .recorder import ReplayRecorder
from .runner import (
    RecordingSession,
    ReplayRunnerError,
    ReplayRunResult,
    ReplayVerification,
    header_for_session,
    header_version_note,
    run_replay,
    session_from_header,
    verify_replay,
)
from .types import REPLAY_FORMAT_VERSION, Replay, ReplayCommand, ReplayHeader, ReplayStep

__all__ = [
    "REPLAY_FORMAT_VERSION",
    "RecordingSession",
    "Replay",
    "ReplayCodecError",
    "ReplayCommand",
    "ReplayHeader",
    "ReplayRecorder",
    "ReplayRunResult",
    "ReplayRunnerError",
    "ReplayStep",
    "ReplayVerification",
    "dump_replay",
    "dump_replay_file",
    "header_for_session",
    "header_version_note",
    "load_replay",
    "load_replay_file",
    "run_replay",
    "session_from_header",
    "verify_replay",
]
