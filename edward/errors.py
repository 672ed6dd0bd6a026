"""Exception types raised by the generation engine."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class EdwardError(Exception):
    """Base class for every fatal generation error."""


class DuplicateNameError(EdwardError):
    """Two or more services/groups would share a name."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names: list[str] = sorted(set(names))
        super().__init__(
            "Multiple services or groups were found with the names: "
            + ", ".join(self.names)
        )


class DiscoveryBackendError(EdwardError):
    """A discovery backend could not scan a target."""

    def __init__(self, backend: str, target: str | Path, cause: BaseException | str) -> None:
        self.backend = backend
        self.target = str(target)
        self.cause = cause
        super().__init__(f"{backend} could not scan {self.target}: {cause}")


class ConfigurationLoadError(EdwardError):
    """The config file exists but could not be read or validated."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"could not load config {self.path}: {reason}")


class ConfigurationSaveError(EdwardError):
    """The config file could not be written."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"could not save config {self.path}: {reason}")
