"""edward.generate — reconcile discovered services and confirm the result.

Exports:
    Delta          — additions computed for one run
    check_names    — report every name conflict in one error
    reconcile      — diff discovery against a loaded configuration
    apply_delta    — merge a delta into a configuration
    confirm        — show the summary and ask for approval
"""

from __future__ import annotations

from edward.generate.confirm import confirm, render_summary
from edward.generate.reconcile import Delta, apply_delta, check_names, reconcile

__all__ = [
    "Delta",
    "apply_delta",
    "check_names",
    "confirm",
    "reconcile",
    "render_summary",
]
