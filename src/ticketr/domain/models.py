"""Data models for tickets and tasks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from ticketr.domain.types import DEFAULT_TASK_TYPE, DEFAULT_TICKET_TYPE, effective_type


@dataclass
class WorkItem:
    """Fields shared by tickets and tasks."""

    title: str
    external_id: str = ""  # Tracker key, e.g. "PROJ-123"; empty until created remotely
    description: str = ""
    fields: dict[str, str] = field(default_factory=dict)
    acceptance_criteria: list[str] = field(default_factory=list)
    # Diagnostics only, not part of record identity
    source_line: int = field(default=0, compare=False)

    default_type: ClassVar[str] = DEFAULT_TASK_TYPE

    @property
    def effective_type(self) -> str:
        """Type used for hierarchy validation."""
        return effective_type(self.fields, self.default_type)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "external_id": self.external_id,
            "title": self.title,
            "description": self.description,
            "fields": dict(self.fields),
            "acceptance_criteria": list(self.acceptance_criteria),
            "source_line": self.source_line,
        }


@dataclass
class Task(WorkItem):
    """A second-level unit of work nested under a ticket."""


@dataclass
class Ticket(WorkItem):
    """A top-level unit of work, optionally holding tasks."""

    tasks: list[Task] = field(default_factory=list)

    default_type: ClassVar[str] = DEFAULT_TICKET_TYPE

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary, tasks included."""
        data = super().to_dict()
        data["tasks"] = [task.to_dict() for task in self.tasks]
        return data
