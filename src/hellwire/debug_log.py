"""Opt-in structured trace log.

Lines look like `<utc-iso> event=<name> key=value ...`. Nothing is written
until `init_debug_log` has chosen a file.
"""

from __future__ import annotations

import datetime as dt
import os
from pathlib import Path
from threading import Lock

_TRACE_LOCK = Lock()
_TRACE_PATH: Path | None = None


def _format_value(value: object) -> str:
    if isinstance(value, float):
        text = f"{value:.6g}"
    else:
        text = str(value)
    return text.replace("\n", "\\n")


def _format_fields(fields: dict[str, object]) -> str:
    parts: list[str] = []
    for key in sorted(fields):
        parts.append(f"{key}={_format_value(fields[key])}")
    return " ".join(parts)


def debug_log_path() -> Path | None:
    with _TRACE_LOCK:
        return _TRACE_PATH


def init_debug_log(
    *,
    base_dir: Path,
    seed: int,
    profile: str,
    source: str,
) -> Path:
    timestamp = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%S.%fZ")
    path = base_dir / "logs" / f"hellwire-pid{os.getpid()}-{timestamp}.log"
    path.parent.mkdir(parents=True, exist_ok=True)

    with _TRACE_LOCK:
        global _TRACE_PATH
        _TRACE_PATH = path

    debug_log(
        "init",
        seed=int(seed),
        profile=str(profile),
        source=str(source),
        pid=int(os.getpid()),
    )
    return path


def close_debug_log() -> None:
    with _TRACE_LOCK:
        global _TRACE_PATH
        _TRACE_PATH = None


def debug_log(event: str, **fields: object) -> None:
    with _TRACE_LOCK:
        path = _TRACE_PATH
        if path is None:
            return
        timestamp = dt.datetime.now(dt.timezone.utc).isoformat(timespec="milliseconds")
        payload = _format_fields(fields)
        line = f"{timestamp} event={str(event).strip()}"
        if payload:
            line += f" {payload}"
        line += "\n"
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line)
