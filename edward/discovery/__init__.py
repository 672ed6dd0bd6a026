"""edward.discovery — find candidate services in a project tree.

Exports:
    DiscoveryBackend  — base class for per-technology scanners
    BackendRegistry   — ordered collection of backends
    DiscoveryResult   — candidates from one run
    discover          — run every backend over every target
"""

from __future__ import annotations

from edward.discovery.aggregator import DiscoveryResult, discover
from edward.discovery.base import DiscoveryBackend
from edward.discovery.registry import BackendRegistry, default_registry

__all__ = [
    "BackendRegistry",
    "DiscoveryBackend",
    "DiscoveryResult",
    "default_registry",
    "discover",
]
