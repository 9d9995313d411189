"""Data models for validation results."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationIssue:
    """A structural problem found in a ticket document."""

    message: str
    line: int = 0  # 1-based source line, 0 when unknown
    field: str = ""  # What the issue is about, e.g. "Task 'Write docs'"
    title: str = ""  # Title of the offending ticket or task

    def __str__(self) -> str:
        if self.line > 0:
            return f"line {self.line}: {self.field}: {self.message}"
        return f"{self.field}: {self.message}"
