from __future__ import annotations

import os
from pathlib import Path

from platformdirs import PlatformDirs

APP_NAME = "hellwire"
RUNTIME_DIR_ENV = "HELLWIRE_RUNTIME_DIR"
REPLAY_SUFFIX = ".hwreplay.gz"


def _dirs() -> PlatformDirs:
    return PlatformDirs(appname=APP_NAME, appauthor=False)


def default_runtime_dir() -> Path:
    """Directory for trace logs and recorded replays.

    `HELLWIRE_RUNTIME_DIR` overrides the per-user data directory.
    """
    override = os.environ.get(RUNTIME_DIR_ENV)
    if override:
        return Path(override).expanduser().resolve()
    return Path(_dirs().user_data_path).resolve()


def default_replay_dir(base_dir: Path | None = None) -> Path:
    root = default_runtime_dir() if base_dir is None else Path(base_dir)
    return root / "replays"


def resolve_replay_path(path: Path, *, base_dir: Path | None = None) -> Path:
    """Bare file names land in the replay dir; anything with a directory part is kept."""
    path = Path(path)
    if path.is_absolute() or path.parent != Path("."):
        return path
    name = path.name if path.name.endswith(REPLAY_SUFFIX) else f"{path.name}{REPLAY_SUFFIX}"
    return default_replay_dir(base_dir) / name
