"""Parser for ticket Markdown files.

Documents are a sequence of ``# TICKET:`` headings, each followed by optional
``## Description``, ``## Fields``, ``## Acceptance Criteria`` and ``## Tasks``
sections. Task bodies repeat the same sections indented by two spaces.

Every sub-parser takes ``(lines, index, indent)`` and returns its value
together with the index of the first line it did not consume.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

from ticketr.domain.models import Task, Ticket, WorkItem
from ticketr.logging import get_logger
from ticketr.parser.lines import classify_lines, split_lines

logger = get_logger("parser")

TICKET_HEADING = "# TICKET:"
SECTION_PREFIX = "##"
DESCRIPTION_HEADER = "## Description"
FIELDS_HEADER = "## Fields"
ACCEPTANCE_CRITERIA_HEADER = "## Acceptance Criteria"
TASKS_HEADER = "## Tasks"

# Indentation added per nesting level (ticket -> task body)
NESTING_STEP = 2


class TicketParser:
    """Parser for the tickets-as-code Markdown format.

    Headings that do not match the grammar (e.g. ``## TICKET:``) are skipped
    silently; only the legacy ``# STORY:`` heading is an error.
    """

    TICKET_PATTERN = re.compile(r"^# TICKET:\s*(?:\[([^\]]+)\])?\s*(.+)$")
    TASK_PATTERN = re.compile(r"^-\s*(?:\[([^\]]+)\])?\s*(.+)$")
    FIELD_PATTERN = re.compile(r"^([^:]+):\s*(.*)$")

    def parse_file(self, path: Path | str) -> list[Ticket]:
        """Parse a ticket file.

        Args:
            path: Path to the Markdown file, read as UTF-8.

        Returns:
            Parsed tickets in document order.

        Raises:
            OSError: If the file cannot be read.
            LegacyFormatError: If the file uses the legacy '# STORY:' heading.
        """
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            content = f.read()

        logger.debug("Parsing %s", path)
        return self.parse(content)

    def parse(self, content: str) -> list[Ticket]:
        """Parse ticket definitions from a string."""
        return self.parse_lines(split_lines(content))

    def parse_lines(self, lines: Sequence[str]) -> list[Ticket]:
        """Parse ticket definitions from already split lines.

        Args:
            lines: Document lines without line terminators.

        Returns:
            Parsed tickets, possibly empty.

        Raises:
            LegacyFormatError: If any line uses the legacy '# STORY:' heading.
        """
        lines = classify_lines(lines)
        tickets: list[Ticket] = []

        index = 0
        while index < len(lines):
            ticket = self._match_heading(lines[index], index + 1)
            if ticket is None:
                index += 1
                continue

            index = self._parse_body(ticket, lines, index + 1, 0)
            tickets.append(ticket)

        logger.debug("Parsed %d ticket(s) from %d line(s)", len(tickets), len(lines))
        return tickets

    def _match_heading(self, line: str, line_number: int) -> Ticket | None:
        """Build a ticket from a '# TICKET:' heading line, if it is one."""
        match = self.TICKET_PATTERN.match(line)
        if not match:
            return None

        title = match.group(2).strip()
        if not title:
            return None

        return Ticket(
            title=title,
            external_id=match.group(1) or "",
            source_line=line_number,
        )

    def _match_task(self, line: str, line_number: int) -> Task | None:
        """Build a task from a '- [id] title' list item, if it is one."""
        match = self.TASK_PATTERN.match(line)
        if not match:
            return None

        title = match.group(2).strip()
        if not title:
            return None

        return Task(
            title=title,
            external_id=match.group(1) or "",
            source_line=line_number,
        )

    def _parse_body(self, item: WorkItem, lines: list[str], start: int, indent: int) -> int:
        """Parse the sections of a ticket or task body into ``item``.

        Args:
            item: Ticket or task being populated.
            lines: All document lines.
            start: Index of the first line after the heading.
            indent: Number of leading spaces owned by this body.

        Returns:
            Index of the first line that belongs to something else.
        """
        prefix = " " * indent
        index = start

        while index < len(lines):
            raw = lines[index]

            if raw.strip().startswith(TICKET_HEADING):
                return index

            # A shallower list item or section belongs to the parent
            if indent and _leaves_scope(raw, prefix):
                return index

            line = raw[indent:] if indent and raw.startswith(prefix) else raw

            if line.startswith(DESCRIPTION_HEADER):
                item.description, index = self._parse_description(lines, index + 1, indent)
            elif line.startswith(FIELDS_HEADER):
                fields, index = self._parse_fields(lines, index + 1, indent)
                item.fields.update(fields)
            elif line.startswith(ACCEPTANCE_CRITERIA_HEADER):
                item.acceptance_criteria, index = self._parse_criteria(lines, index + 1, indent)
            elif line.startswith(TASKS_HEADER) and isinstance(item, Ticket):
                item.tasks, index = self._parse_tasks(lines, index + 1, indent)
            else:
                index += 1

        return index

    def _parse_description(self, lines: list[str], start: int, indent: int) -> tuple[str, int]:
        """Collect free text up to the next section, keeping blank lines."""
        prefix = " " * indent
        nested_prefix = " " * (indent + NESTING_STEP)
        content: list[str] = []
        index = start

        while index < len(lines):
            line = lines[index]
            stripped = line.strip()

            if stripped.startswith(SECTION_PREFIX) or stripped.startswith(TICKET_HEADING):
                break

            if indent:
                if stripped.startswith("-") and not line.startswith(nested_prefix):
                    break
                if line.startswith(prefix):
                    content.append(line[indent:])
                elif not stripped:
                    content.append("")
                else:
                    break
            else:
                content.append(line)

            index += 1

        return "\n".join(content).strip(), index

    def _parse_fields(
        self, lines: list[str], start: int, indent: int
    ) -> tuple[dict[str, str], int]:
        """Parse 'Key: Value' lines. '#' lines are comments."""
        prefix = " " * indent
        fields: dict[str, str] = {}
        index = start

        while index < len(lines):
            line = lines[index]
            if indent and line.startswith(prefix):
                line = line[indent:]
            stripped = line.strip()

            if stripped.startswith(SECTION_PREFIX) or stripped.startswith(TICKET_HEADING):
                break
            if indent and stripped.startswith("-"):
                break

            if stripped and not stripped.startswith("#"):
                match = self.FIELD_PATTERN.match(stripped)
                if match:
                    fields[match.group(1).strip()] = match.group(2).strip()

            index += 1

        return fields, index

    def _parse_criteria(self, lines: list[str], start: int, indent: int) -> tuple[list[str], int]:
        """Parse '- item' lines into a list of acceptance criteria."""
        prefix = " " * indent
        criteria: list[str] = []
        index = start

        while index < len(lines):
            line = lines[index]
            if indent:
                if line.strip() and not line.startswith(prefix):
                    break
                if line.startswith(prefix):
                    line = line[indent:]
            stripped = line.strip()

            if stripped.startswith(SECTION_PREFIX) or stripped.startswith(TICKET_HEADING):
                break

            if stripped.startswith("-"):
                criterion = stripped[1:].strip()
                if criterion:
                    criteria.append(criterion)

            index += 1

        return criteria, index

    def _parse_tasks(self, lines: list[str], start: int, indent: int) -> tuple[list[Task], int]:
        """Parse a task list; each task body sits one nesting step deeper."""
        prefix = " " * indent
        tasks: list[Task] = []
        index = start

        while index < len(lines):
            line = lines[index]
            if indent and line.startswith(prefix):
                line = line[indent:]
            stripped = line.strip()

            if stripped.startswith(SECTION_PREFIX + " ") and not line.startswith(" " * NESTING_STEP):
                break
            if stripped.startswith(TICKET_HEADING):
                break

            task = self._match_task(stripped, index + 1)
            if task is None:
                index += 1
                continue

            index = self._parse_body(task, lines, index + 1, indent + NESTING_STEP)
            tasks.append(task)

        return tasks, index


def _leaves_scope(line: str, prefix: str) -> bool:
    """Check whether an under-indented line starts a sibling task or section."""
    stripped = line.strip()
    if not stripped or line.startswith(prefix):
        return False
    return stripped.startswith("-") or stripped.startswith(SECTION_PREFIX)
