"""Client — the entry point used by the command line and by tests.

One :meth:`Client.generate` call runs the whole pipeline:

  1. discover candidate services under the targets
  2. load the current config (or start empty)
  3. reconcile the two into a delta
  4. confirm the delta with the user (skipped when forced)
  5. merge and save atomically, then report where the file was written

The first error from any step propagates unchanged and nothing is saved.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Sequence, TextIO

from edward import EDWARD_VERSION
from edward.config.store import load_config, save_config
from edward.discovery.aggregator import discover
from edward.discovery.base import DiscoveryBackend
from edward.discovery.registry import default_registry
from edward.generate.confirm import confirm
from edward.generate.reconcile import apply_delta, check_names, reconcile

DEFAULT_CONFIG = "edward.json"


class Client:
    """Holds the per-invocation settings for generating ``edward.json``.

    Args:
        config_path: Config file, relative paths resolved against
                     *working_dir*.
        input:       Stream answers are read from (default: ``sys.stdin``).
        output:      Stream status text is written to (default: ``sys.stdout``).
        backends:    Discovery backends (default: the built-in registry).
        working_dir: Default scan target and base for relative paths
                     (default: the process working directory).
        logger:      Logger for progress messages.
    """

    def __init__(
        self,
        config_path: str | Path = DEFAULT_CONFIG,
        input: TextIO | None = None,
        output: TextIO | None = None,
        backends: Sequence[DiscoveryBackend] | None = None,
        working_dir: str | Path | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.working_dir = Path(working_dir) if working_dir is not None else Path.cwd()
        self.config_path = Path(os.path.abspath(self.working_dir / config_path))
        self._input = input
        self._output = output
        self.backends: list[DiscoveryBackend] = (
            list(backends) if backends is not None else default_registry().list_backends()
        )
        self.logger = logger or logging.getLogger(__name__)

    @property
    def input(self) -> TextIO:
        return self._input if self._input is not None else sys.stdin

    @property
    def output(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    def generate(
        self,
        service_names: Sequence[str],
        force: bool,
        group: str,
        targets: Sequence[str | Path],
    ) -> None:
        """Discover services and merge them into the config file.

        Args:
            service_names: Only consider discovered services with these
                           names (all of them when empty).
            force:         Skip the confirmation prompt.
            group:         Add the new services to this group, creating it
                           if needed. Empty for no group.
            targets:       Directories to scan; empty scans *working_dir*.

        Raises:
            DuplicateNameError, DiscoveryBackendError,
            ConfigurationLoadError, ConfigurationSaveError
        """
        discovered = discover(
            targets,
            self.backends,
            base_dir=self.config_path.parent,
            cwd=self.working_dir,
        )
        config = load_config(self.config_path, EDWARD_VERSION)

        # Conflicts are fatal even among services the caller did not ask for
        check_names(config, discovered, group or None)
        delta = reconcile(config, discovered.filter(service_names), group or None)

        if not confirm(delta, force, self.output, self.input):
            self.logger.info("nothing written to %s", self.config_path)
            return

        save_config(self.config_path, apply_delta(config, delta))
        self.output.write(f"Wrote to: {self.config_path}\n")
        self.output.flush()
