"""edward.services — plain data shared by discovery, config and generation."""

from __future__ import annotations

from edward.services.model import Configuration, GroupConfig, ServiceConfig

__all__ = [
    "Configuration",
    "GroupConfig",
    "ServiceConfig",
]
