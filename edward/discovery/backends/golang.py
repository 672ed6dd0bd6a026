"""Go backend — a directory with a ``package main`` source file is a service."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from edward.discovery.backends.walk import walk_dirs
from edward.discovery.base import DiscoveryBackend
from edward.services.model import ServiceConfig

logger = logging.getLogger(__name__)

# First non-comment "package" clause of a Go source file
_PACKAGE_RE = re.compile(r"^\s*package\s+(\w+)", re.MULTILINE)


class GoBackend(DiscoveryBackend):
    backend_id = "go"
    display_name = "Go"

    def scan(self, target: Path) -> list[ServiceConfig]:
        found: list[ServiceConfig] = []
        for directory, files in walk_dirs(target):
            sources = [f for f in files if f.endswith(".go") and not f.endswith("_test.go")]
            if any(self._is_main(directory / f) for f in sources):
                name = directory.name
                logger.debug("Go command found: %s at %s", name, directory)
                found.append(
                    ServiceConfig(
                        name=name,
                        path=str(directory),
                        commands={"build": "go install", "launch": name},
                    )
                )
        return found

    @staticmethod
    def _is_main(source: Path) -> bool:
        text = source.read_text(encoding="utf-8", errors="replace")
        # Drop line comments so a commented-out clause is not matched
        text = re.sub(r"//[^\n]*", "", text)
        match = _PACKAGE_RE.search(text)
        return bool(match and match.group(1) == "main")
