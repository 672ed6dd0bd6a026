"""Deterministic directory walk shared by the built-in backends."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

SKIP_DIRS: frozenset[str] = frozenset({"vendor", "node_modules", "testdata", "__pycache__"})


def _raise(exc: OSError) -> None:
    raise exc


def walk_dirs(target: Path) -> Iterator[tuple[Path, list[str]]]:
    """Yield ``(directory, sorted file names)`` under *target*, top-down.

    Hidden directories and :data:`SKIP_DIRS` are not entered. Directory
    read errors propagate.
    """
    for root, dirs, files in os.walk(target, onerror=_raise):
        dirs[:] = sorted(d for d in dirs if not d.startswith(".") and d not in SKIP_DIRS)
        yield Path(root), sorted(files)
