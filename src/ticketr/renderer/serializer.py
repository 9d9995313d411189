"""Serializer that renders tickets back into the Markdown ticket format."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from ticketr.domain.models import Task, Ticket, WorkItem
from ticketr.parser.ticket_parser import (
    ACCEPTANCE_CRITERIA_HEADER,
    DESCRIPTION_HEADER,
    FIELDS_HEADER,
    NESTING_STEP,
    TASKS_HEADER,
    TICKET_HEADING,
)


class TicketSerializer:
    """Renders tickets so that parsing the output yields the same tickets.

    Field order follows each record's mapping. Empty sections are omitted.
    """

    def render_all(self, tickets: Iterable[Ticket]) -> str:
        """Render a sequence of tickets as one document.

        Args:
            tickets: Tickets in document order.

        Returns:
            Document text ending with a newline, or '' for no tickets.
        """
        blocks = [self.render(ticket) for ticket in tickets]
        # Each block ends with a blank line, which doubles as the separator
        return "".join(blocks).rstrip("\n") + "\n" if blocks else ""

    def render(self, ticket: Ticket) -> str:
        """Render a single ticket followed by a blank line."""
        lines = [_heading(TICKET_HEADING, ticket), ""]
        lines.extend(_sections(ticket, ""))

        if ticket.tasks:
            lines.append(TASKS_HEADER)
            for task in ticket.tasks:
                lines.extend(self._render_task(task))
            if lines[-1]:
                lines.append("")

        return "\n".join(lines) + "\n"

    def _render_task(self, task: Task) -> list[str]:
        indent = " " * NESTING_STEP
        lines = [_heading("-", task)]
        lines.extend(_sections(task, indent))
        return lines


def _heading(marker: str, item: WorkItem) -> str:
    if item.external_id:
        return f"{marker} [{item.external_id}] {item.title}"
    return f"{marker} {item.title}"


def _sections(item: WorkItem, indent: str) -> list[str]:
    """Render the Description, Fields and Acceptance Criteria blocks."""
    lines: list[str] = []
    if item.description:
        lines.append(indent + DESCRIPTION_HEADER)
        lines.extend(_indent_text(item.description, indent))
        lines.append("")
    if item.fields:
        lines.append(indent + FIELDS_HEADER)
        lines.extend(_field_lines(item.fields, indent))
        lines.append("")
    if item.acceptance_criteria:
        lines.append(indent + ACCEPTANCE_CRITERIA_HEADER)
        lines.extend(_criteria_lines(item.acceptance_criteria, indent))
        lines.append("")
    return lines


def _indent_text(text: str, indent: str) -> list[str]:
    # Empty lines stay empty so no trailing whitespace is written
    lines = [indent + line if line else "" for line in text.split("\n")]
    # A nested list item at the body's own indent would end the section;
    # the parser strips the extra step again
    if indent and lines[0].lstrip().startswith("-"):
        lines[0] = " " * NESTING_STEP + lines[0]
    return lines


def _field_lines(fields: Mapping[str, str], indent: str) -> list[str]:
    return [f"{indent}{key}: {value}".rstrip() for key, value in fields.items()]


def _criteria_lines(criteria: Sequence[str], indent: str) -> list[str]:
    return [f"{indent}- {criterion}" for criterion in criteria]


def serialize(tickets: Iterable[Ticket]) -> str:
    """Render tickets with a default serializer."""
    return TicketSerializer().render_all(tickets)
