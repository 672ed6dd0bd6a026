"""Backend registry — the ordered set of discovery backends to run."""

from __future__ import annotations

import logging

from edward.discovery.base import DiscoveryBackend

logger = logging.getLogger(__name__)


class BackendRegistry:
    """Ordered collection of discovery backends, keyed by ``backend_id``."""

    def __init__(self, backends: list[DiscoveryBackend] | None = None) -> None:
        self._backends: dict[str, DiscoveryBackend] = {}
        for backend in backends or []:
            self.register(backend)

    def register(self, backend: DiscoveryBackend) -> None:
        """Register (or replace) a backend instance."""
        self._backends[backend.backend_id] = backend
        logger.debug("Backend registered: %s (%s)", backend.backend_id, backend.display_name)

    def unregister(self, backend_id: str) -> None:
        """Remove a backend from the registry."""
        self._backends.pop(backend_id, None)

    def list_backends(self) -> list[DiscoveryBackend]:
        return list(self._backends.values())

    def __len__(self) -> int:
        return len(self._backends)


def default_registry() -> BackendRegistry:
    """Return a fresh registry holding the built-in backends."""
    from edward.discovery.backends import DockerBackend, GoBackend

    return BackendRegistry([GoBackend(), DockerBackend()])
