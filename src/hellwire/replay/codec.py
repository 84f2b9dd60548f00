from __future__ import annotations

import gzip
import math
from pathlib import Path
import zlib

import msgspec

from ..profiles import device_profile_from_value
from .types import COMMAND_KINDS, REPLAY_FORMAT_VERSION, Replay

_GZIP_MAGIC = b"\x1f\x8b"


class ReplayCodecError(ValueError):
    pass


def _is_gzip(data: bytes) -> bool:
    return data.startswith(_GZIP_MAGIC)


def _validate(replay: Replay) -> None:
    if int(replay.version) != REPLAY_FORMAT_VERSION:
        raise ReplayCodecError(f"unsupported replay version: {replay.version}")
    header = replay.header
    if device_profile_from_value(header.profile) is None:
        raise ReplayCodecError(f"unknown replay profile: {header.profile!r}")
    _x, _y, w, h = header.bounds
    if not (float(w) > 0.0 and float(h) > 0.0):
        raise ReplayCodecError(f"replay bounds must have positive size, got {header.bounds}")

    step_count = len(replay.steps)
    for idx, step in enumerate(replay.steps):
        if not math.isfinite(step.dt) or step.dt < 0.0 or not math.isfinite(step.now):
            raise ReplayCodecError(f"step {idx} has invalid timing: dt={step.dt} now={step.now}")
        if (step.target_x is None) != (step.target_y is None):
            raise ReplayCodecError(f"step {idx} has a half-specified pointer target")

    for command in replay.commands:
        if command.kind not in COMMAND_KINDS:
            raise ReplayCodecError(f"unknown replay command: {command.kind!r}")
        if not 0 <= int(command.step_index) <= step_count:
            raise ReplayCodecError(
                f"command {command.kind!r} step_index out of range: {command.step_index} (steps={step_count})"
            )


def dump_replay(replay: Replay, *, compress: bool = True) -> bytes:
    _validate(replay)
    raw = msgspec.json.encode(replay)
    if not compress:
        return raw
    return gzip.compress(raw, mtime=0)


def load_replay(data: bytes) -> Replay:
    raw = bytes(data)
    if _is_gzip(raw):
        try:
            raw = gzip.decompress(raw)
        except (OSError, EOFError, zlib.error) as exc:
            raise ReplayCodecError(f"corrupt gzip replay: {exc}") from exc
    try:
        replay = msgspec.json.decode(raw, type=Replay)
    except msgspec.ValidationError as exc:
        raise ReplayCodecError(f"invalid replay: {exc}") from exc
    except msgspec.DecodeError as exc:
        raise ReplayCodecError(f"malformed replay json: {exc}") from exc
    _validate(replay)
    return replay


def dump_replay_file(path: Path, replay: Replay) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dump_replay(replay))


def load_replay_file(path: Path) -> Replay:
    return load_replay(Path(path).read_bytes())
