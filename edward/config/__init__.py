"""edward.config — load and atomically save ``edward.json`` files."""

from __future__ import annotations

from edward.config.store import load_config, save_config

__all__ = [
    "load_config",
    "save_config",
]
