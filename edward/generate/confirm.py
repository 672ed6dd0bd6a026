"""Confirmation prompt — show the pending changes and ask before writing.

All prompt text is written and flushed before the single blocking read, so
a driver that drains the output stream concurrently never deadlocks.
"""

from __future__ import annotations

import logging
from typing import TextIO

from edward.generate.reconcile import Delta

logger = logging.getLogger(__name__)

NO_CHANGES = "No new services, groups or imports found\n"
QUESTION = "Do you wish to continue? [y/n]? "

_AFFIRMATIVE = frozenset({"y", "yes"})


def render_summary(delta: Delta) -> str:
    """Return the human-readable list of what *delta* will generate."""
    lines = ["The following will be generated:"]
    if delta.new_services:
        lines.append("Services:")
        lines.extend(f"\t{name}" for name in delta.service_names)
    return "\n".join(lines) + "\n"


def is_affirmative(answer: str) -> bool:
    return answer.strip().lower() in _AFFIRMATIVE


def confirm(delta: Delta, force: bool, out: TextIO, in_: TextIO) -> bool:
    """Decide whether *delta* should be written.

    Args:
        delta: Changes computed by :func:`~edward.generate.reconcile.reconcile`.
        force: Proceed without asking (and without printing the summary).
        out:   Stream the summary and question are written to.
        in_:   Stream one answer line is read from. Never read when *delta*
               is empty or *force* is set.

    Returns:
        ``True`` to proceed. ``False`` for an empty delta or any answer other
        than y/yes, including end of input; declining is not an error.
    """
    if delta.is_empty:
        out.write(NO_CHANGES)
        out.flush()
        return False

    if force:
        logger.debug("force set, skipping confirmation")
        return True

    out.write(render_summary(delta))
    out.write(QUESTION)
    out.flush()

    answer = in_.readline()
    if not answer:
        logger.debug("input closed before an answer was given")
        return False
    proceed = is_affirmative(answer)
    logger.debug("confirmation answer %r -> %s", answer.strip(), proceed)
    return proceed
