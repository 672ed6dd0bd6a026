"""Built-in discovery backends."""

from __future__ import annotations

from edward.discovery.backends.docker import DockerBackend
from edward.discovery.backends.golang import GoBackend

__all__ = [
    "DockerBackend",
    "GoBackend",
]
