"""Service, group and configuration entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ServiceConfig:
    """A named, independently runnable unit.

    Everything except ``name`` is an opaque descriptor supplied by a
    discovery backend or read from the config file; the generation engine
    never interprets it.
    """

    name: str
    path: str | None = None
    commands: dict[str, str] = field(default_factory=dict)
    env: list[str] = field(default_factory=list)
    #: Keys from the config file this model does not name, kept verbatim.
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class GroupConfig:
    """A named set of child services and child groups, referenced by name."""

    name: str
    services: list[str] = field(default_factory=list)
    groups: list[str] = field(default_factory=list)
    aliases: list[str] = field(default_factory=list)
    env: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def children(self) -> list[str]:
        """All child names, services and groups together, sorted."""
        return sorted(set(self.services) | set(self.groups))


@dataclass
class Configuration:
    """The persisted aggregate of one ``edward.json`` file.

    Service and group names share one namespace: the key sets of
    ``service_map`` and ``group_map`` never overlap.
    """

    version: str
    imports: list[str] = field(default_factory=list)
    service_map: dict[str, ServiceConfig] = field(default_factory=dict)
    group_map: dict[str, GroupConfig] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    def find_cycle(self) -> list[str] | None:
        """Return a group cycle as a list of names, or ``None`` if acyclic."""
        visiting: list[str] = []
        done: set[str] = set()

        def visit(name: str) -> list[str] | None:
            if name in done:
                return None
            if name in visiting:
                return visiting[visiting.index(name):] + [name]
            visiting.append(name)
            group = self.group_map.get(name)
            for child in sorted(group.groups) if group else []:
                cycle = visit(child)
                if cycle:
                    return cycle
            visiting.pop()
            done.add(name)
            return None

        for name in sorted(self.group_map):
            cycle = visit(name)
            if cycle:
                return cycle
        return None
