"""Discovery backend base class.

Each backend recognises one kind of runnable unit (a Go command, a
Dockerfile, ...) and proposes candidate services for a filesystem target.
Backends are registered with :class:`~edward.discovery.registry.BackendRegistry`.
"""

from __future__ import annotations

import abc
from pathlib import Path

from edward.services.model import ServiceConfig


class DiscoveryBackend(abc.ABC):
    """Abstract base class for all discovery backends."""

    #: Unique identifier, e.g. ``"go"``
    backend_id: str = ""

    #: Human-readable name shown in logs and errors
    display_name: str = ""

    @abc.abstractmethod
    def scan(self, target: Path) -> list[ServiceConfig]:
        """Return the candidate services found under *target*.

        ``path`` on each returned service is absolute; the aggregator makes
        it relative to the config file's directory. Raise on any failure
        (unreadable directory, malformed manifest); the aggregator wraps the
        exception in :class:`~edward.errors.DiscoveryBackendError`.
        """
        raise NotImplementedError
