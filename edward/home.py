"""edward home directory.

The home directory holds per-user runtime state (logs, pid files, state
files, generated scripts). Its location is taken from the ``EDWARD_HOME``
environment variable (default: ``~/.edward``).

Usage::

    from edward.home import initialize_home
    home = initialize_home()   # idempotent, safe to call multiple times

The generation engine itself never reads this module; callers run
:func:`initialize_home` once before invoking it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_HOME_DIR: Path | None = None


@dataclass(frozen=True)
class EdwardHome:
    """Resolved locations inside the home directory."""

    root: Path

    @property
    def log_dir(self) -> Path:
        return self.root / "logs"

    @property
    def pid_dir(self) -> Path:
        return self.root / "pidFiles"

    @property
    def state_dir(self) -> Path:
        return self.root / "stateFiles"

    @property
    def script_dir(self) -> Path:
        return self.root / "scripts"

    def directories(self) -> list[Path]:
        return [self.root, self.log_dir, self.pid_dir, self.state_dir, self.script_dir]


def _home_dir() -> Path:
    global _HOME_DIR
    if _HOME_DIR is None:
        _HOME_DIR = Path(os.environ.get("EDWARD_HOME", "~/.edward")).expanduser()
    return _HOME_DIR


def set_home(path: str | Path | None) -> None:
    """Override the home directory (useful for tests). ``None`` resets it."""
    global _HOME_DIR
    _HOME_DIR = Path(path).expanduser() if path is not None else None


def get_home() -> EdwardHome:
    return EdwardHome(root=_home_dir())


def initialize_home(path: str | Path | None = None) -> EdwardHome:
    """Create the home directory tree (idempotent).

    Args:
        path: Optional override, equivalent to calling :func:`set_home` first.

    Returns:
        The initialised :class:`EdwardHome`.
    """
    if path is not None:
        set_home(path)
    home = get_home()
    for directory in home.directories():
        directory.mkdir(parents=True, exist_ok=True)
    logger.debug("edward home initialised at %s", home.root)
    return home
