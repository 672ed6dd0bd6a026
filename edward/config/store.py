"""Config store — reads ``edward.json`` into a :class:`Configuration` and
writes it back atomically.

A missing file is not an error: :func:`load_config` returns an empty
configuration stamped with the running schema version. :func:`save_config`
writes to a temporary file in the target directory and renames it over the
destination, so readers see either the old file or the new one.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from packaging.version import InvalidVersion, Version
from pydantic import ValidationError

from edward.config.schema import ConfigFile, GroupEntry, ServiceEntry
from edward.errors import ConfigurationLoadError, ConfigurationSaveError
from edward.services.model import Configuration, GroupConfig, ServiceConfig

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------ #
# Load                                                                 #
# ------------------------------------------------------------------ #


def load_config(path: str | Path, version: str) -> Configuration:
    """Load the configuration at *path*.

    Args:
        path:    Config file location.
        version: Schema version of the running edward. New configurations
                 are stamped with it; files written by a newer version are
                 rejected.

    Raises:
        ConfigurationLoadError: The file is unreadable, is not valid JSON,
            does not match the schema, or is internally inconsistent.
    """
    path = Path(path)
    if not path.exists():
        logger.debug("No config at %s, starting empty (version %s)", path, version)
        return Configuration(version=version)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationLoadError(path, str(exc)) from exc

    if not text.strip():
        logger.debug("Config at %s is empty, starting empty (version %s)", path, version)
        return Configuration(version=version)

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationLoadError(path, f"invalid JSON: {exc}") from exc

    try:
        parsed = ConfigFile.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationLoadError(path, str(exc)) from exc

    file_version = parsed.version or version
    _check_version(path, file_version, version)
    config = _to_configuration(path, parsed, file_version)
    logger.info(
        "Loaded %s: %d service(s), %d group(s)",
        path, len(config.service_map), len(config.group_map),
    )
    return config


def _check_version(path: Path, file_version: str, running: str) -> None:
    try:
        newer = Version(file_version) > Version(running)
    except InvalidVersion as exc:
        raise ConfigurationLoadError(path, f"invalid edwardVersion {file_version!r}") from exc
    if newer:
        raise ConfigurationLoadError(
            path, f"requires edward {file_version} or newer (running {running})"
        )


def _to_configuration(path: Path, parsed: ConfigFile, version: str) -> Configuration:
    config = Configuration(
        version=version,
        imports=list(parsed.imports),
        extra=dict(parsed.model_extra or {}),
    )

    seen: list[str] = []
    for entry in parsed.services:
        seen.append(entry.name)
        config.service_map[entry.name] = ServiceConfig(
            name=entry.name,
            path=entry.path,
            commands=dict(entry.commands),
            env=list(entry.env),
            extra=dict(entry.model_extra or {}),
        )
    for group_entry in parsed.groups:
        seen.append(group_entry.name)
    duplicates = sorted({name for name in seen if seen.count(name) > 1})
    if duplicates:
        raise ConfigurationLoadError(path, "duplicate names: " + ", ".join(duplicates))

    group_names = {g.name for g in parsed.groups}
    for group_entry in parsed.groups:
        group = GroupConfig(
            name=group_entry.name,
            aliases=list(group_entry.aliases),
            env=list(group_entry.env),
            extra=dict(group_entry.model_extra or {}),
        )
        for child in group_entry.children:
            if child in config.service_map:
                group.services.append(child)
            elif child in group_names:
                group.groups.append(child)
            else:
                raise ConfigurationLoadError(
                    path, f"group {group_entry.name!r} has unknown child {child!r}"
                )
        config.group_map[group.name] = group

    cycle = config.find_cycle()
    if cycle:
        raise ConfigurationLoadError(path, "group cycle: " + " -> ".join(cycle))
    return config


# ------------------------------------------------------------------ #
# Save                                                                 #
# ------------------------------------------------------------------ #


def save_config(path: str | Path, config: Configuration) -> None:
    """Atomically write *config* to *path*.

    Raises:
        ConfigurationSaveError: The file could not be written. The previous
            file, if any, is left in place.
    """
    path = Path(path)
    data = json.dumps(to_file_data(config), indent=2) + "\n"

    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise ConfigurationSaveError(path, str(exc)) from exc
    logger.info(
        "Saved %s: %d service(s), %d group(s)",
        path, len(config.service_map), len(config.group_map),
    )


def to_file_data(config: Configuration) -> dict[str, Any]:
    """Return the JSON document for *config*, names in sorted order."""
    groups = [
        GroupEntry(
            name=group.name,
            aliases=group.aliases,
            children=group.children,
            env=group.env,
            **group.extra,
        ).model_dump(exclude_defaults=True)
        for group in sorted(config.group_map.values(), key=lambda g: g.name)
    ]
    services = [
        ServiceEntry(
            name=svc.name,
            path=svc.path,
            commands=svc.commands,
            env=svc.env,
            **svc.extra,
        ).model_dump(exclude_defaults=True)
        for svc in sorted(config.service_map.values(), key=lambda s: s.name)
    ]
    return {
        "edwardVersion": config.version,
        "imports": list(config.imports),
        "groups": groups,
        "services": services,
        **config.extra,
    }
