"""Docker backend — a directory with a ``Dockerfile`` is a service."""

from __future__ import annotations

import logging
from pathlib import Path

from edward.discovery.backends.walk import walk_dirs
from edward.discovery.base import DiscoveryBackend
from edward.services.model import ServiceConfig

logger = logging.getLogger(__name__)


class DockerBackend(DiscoveryBackend):
    backend_id = "docker"
    display_name = "Docker"

    def scan(self, target: Path) -> list[ServiceConfig]:
        found: list[ServiceConfig] = []
        for directory, files in walk_dirs(target):
            if "Dockerfile" not in files:
                continue
            name = directory.name
            logger.debug("Dockerfile found: %s at %s", name, directory)
            found.append(
                ServiceConfig(
                    name=name,
                    path=str(directory),
                    commands={
                        "build": f"docker build -t {name} .",
                        "launch": f"docker run --rm {name}",
                    },
                )
            )
        return found
