"""Domain - Ticket and task records shared by every component."""

from ticketr.domain.models import Task, Ticket, WorkItem
from ticketr.domain.types import (
    DEFAULT_TASK_TYPE,
    DEFAULT_TICKET_TYPE,
    TYPE_FIELD,
    effective_type,
)

__all__ = [
    "DEFAULT_TASK_TYPE",
    "DEFAULT_TICKET_TYPE",
    "TYPE_FIELD",
    "Task",
    "Ticket",
    "WorkItem",
    "effective_type",
]
