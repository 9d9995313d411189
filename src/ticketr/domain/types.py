"""Issue type policy for tickets and tasks."""

from __future__ import annotations

from collections.abc import Mapping

TYPE_FIELD = "Type"

DEFAULT_TICKET_TYPE = "Story"
DEFAULT_TASK_TYPE = "Sub-task"


def effective_type(fields: Mapping[str, str], default: str) -> str:
    """Resolve the issue type used for hierarchy checks.

    Args:
        fields: Field mapping of a ticket or task.
        default: Type to fall back to when ``Type`` is absent or blank.

    Returns:
        The declared type, or the default.
    """
    return fields.get(TYPE_FIELD) or default
