"""Reconciliation — diff discovered services against a loaded configuration.

Matching is by name only:

- name already in ``service_map`` → already represented, no change
- name absent                     → new service
- name already used by a group    → conflict

Re-running discovery over an unchanged tree therefore yields an empty delta.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from edward.discovery.aggregator import DiscoveryResult
from edward.errors import DuplicateNameError
from edward.services.model import Configuration, GroupConfig, ServiceConfig

logger = logging.getLogger(__name__)


@dataclass
class Delta:
    """Additions needed to bring a configuration in line with discovery."""

    new_services: list[ServiceConfig] = field(default_factory=list)
    #: Group to create, holding exactly ``new_services``.
    new_group: GroupConfig | None = None
    #: Existing group that ``group_additions`` are appended to.
    extended_group: str | None = None
    group_additions: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.new_services and self.new_group is None and not self.group_additions

    @property
    def service_names(self) -> list[str]:
        return [svc.name for svc in self.new_services]

    @property
    def group_names(self) -> list[str]:
        """Names of groups created or changed by this delta, sorted."""
        names: list[str] = []
        if self.new_group is not None:
            names.append(self.new_group.name)
        if self.extended_group is not None and self.group_additions:
            names.append(self.extended_group)
        return sorted(names)


def check_names(
    existing: Configuration,
    discovered: DiscoveryResult,
    target_group: str | None = None,
) -> None:
    """Raise one :class:`DuplicateNameError` naming every conflict.

    Conflicts are candidates sharing a name, candidates named like an
    existing group, and a target group named like a service.
    """
    names = set(discovered.names())
    conflicts = set(discovered.duplicate_names())
    conflicts |= {name for name in names if name in existing.group_map}
    if target_group and target_group in existing.service_map:
        conflicts.add(target_group)
    if target_group and target_group in names and target_group not in existing.group_map:
        conflicts.add(target_group)
    if conflicts:
        raise DuplicateNameError(conflicts)


def reconcile(
    existing: Configuration,
    discovered: DiscoveryResult,
    target_group: str | None = None,
) -> Delta:
    """Compute the :class:`Delta` between *existing* and *discovered*.

    Args:
        existing:     Configuration loaded from disk. Not modified.
        discovered:   Candidates from :func:`~edward.discovery.discover`.
        target_group: Group that new services should be added to. Created
                      when it does not exist yet.

    Raises:
        DuplicateNameError: Candidates share a name, or a candidate (or the
            target group) collides with an entry of the other kind.
    """
    check_names(existing, discovered, target_group)

    new_services = sorted(
        (svc for svc in discovered.services if svc.name not in existing.service_map),
        key=lambda s: s.name,
    )
    delta = Delta(new_services=new_services)

    if target_group:
        group = existing.group_map.get(target_group)
        if group is None:
            if new_services:
                delta.new_group = GroupConfig(
                    name=target_group,
                    services=[svc.name for svc in new_services],
                )
        else:
            delta.extended_group = target_group
            delta.group_additions = [
                svc.name for svc in new_services if svc.name not in group.services
            ]

    logger.info(
        "reconcile: %d new service(s), group changes: %s",
        len(delta.new_services), ", ".join(delta.group_names) or "none",
    )
    return delta


def apply_delta(config: Configuration, delta: Delta) -> Configuration:
    """Merge *delta* into *config* in place and return it.

    Existing services and group children are never removed; group children
    end up sorted.
    """
    for svc in delta.new_services:
        config.service_map[svc.name] = svc

    if delta.new_group is not None:
        group = delta.new_group
        group.services = sorted(set(group.services))
        config.group_map[group.name] = group

    if delta.extended_group is not None and delta.group_additions:
        group = config.group_map[delta.extended_group]
        group.services = sorted(set(group.services) | set(delta.group_additions))

    return config
