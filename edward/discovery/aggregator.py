"""Discovery aggregator — runs every backend over every target.

The result is normalised (sorted by name, then path), so neither backend
order nor filesystem enumeration order can change what the caller observes.
"""

from __future__ import annotations

import logging
import os
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from edward.discovery.base import DiscoveryBackend
from edward.errors import DiscoveryBackendError
from edward.services.model import ServiceConfig

logger = logging.getLogger(__name__)


@dataclass
class DiscoveryResult:
    """Candidate services proposed by one discovery run."""

    services: list[ServiceConfig] = field(default_factory=list)

    def names(self) -> list[str]:
        return [svc.name for svc in self.services]

    def duplicate_names(self) -> list[str]:
        counts = Counter(self.names())
        return sorted(name for name, n in counts.items() if n > 1)

    def filter(self, names: Iterable[str]) -> DiscoveryResult:
        """Keep only candidates named in *names* (all of them when empty)."""
        wanted = set(names)
        if not wanted:
            return self
        missing = wanted - set(self.names())
        if missing:
            logger.warning("Requested service(s) not found: %s", ", ".join(sorted(missing)))
        return DiscoveryResult([svc for svc in self.services if svc.name in wanted])


def _relative_path(path: str | None, base_dir: Path | None) -> str | None:
    if path is None or base_dir is None:
        return path
    try:
        return os.path.relpath(path, base_dir)
    except ValueError:
        # Different drive on Windows
        return path


def discover(
    targets: Sequence[str | Path],
    backends: Sequence[DiscoveryBackend],
    base_dir: str | Path | None = None,
    cwd: str | Path | None = None,
) -> DiscoveryResult:
    """Scan all *targets* × *backends* combinations.

    Args:
        targets:  Filesystem roots to scan; empty means *cwd*.
        backends: Backends to run, in order.
        base_dir: Directory that service paths are made relative to
                  (normally the config file's directory).
        cwd:      Directory used for the default target and for resolving
                  relative targets (default: the process working directory).

    Returns:
        A sorted :class:`DiscoveryResult`.

    Raises:
        DiscoveryBackendError: A target is missing or a backend failed.

    Distinct candidates sharing a name are kept; the conflict is reported by
    :func:`~edward.generate.reconcile.check_names` together with any
    collisions against the loaded configuration.
    """
    root = Path(cwd) if cwd is not None else Path.cwd()
    resolved = [(root / t).resolve() for t in targets] or [root.resolve()]
    base = Path(base_dir).resolve() if base_dir is not None else None

    found: list[ServiceConfig] = []
    for target in resolved:
        if not target.exists():
            raise DiscoveryBackendError("discovery", target, "no such file or directory")
        for backend in backends:
            try:
                candidates = backend.scan(target)
            except Exception as exc:
                raise DiscoveryBackendError(backend.display_name or backend.backend_id, target, exc) from exc
            logger.debug("%s found %d candidate(s) in %s", backend.backend_id, len(candidates), target)
            for svc in candidates:
                svc.path = _relative_path(svc.path, base)
                found.append(svc)

    # Stable sort keeps backend order between identical (name, path) pairs
    found.sort(key=lambda s: (s.name, s.path or ""))
    unique: list[ServiceConfig] = []
    for svc in found:
        if unique and unique[-1].name == svc.name and unique[-1].path == svc.path:
            logger.debug("Same service %s reported twice, keeping the first", svc.name)
            continue
        unique.append(svc)

    logger.info("discovery complete: %d service(s) found", len(unique))
    return DiscoveryResult(unique)
