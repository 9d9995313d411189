"""Validator - checks decoded tickets against hierarchy and field rules."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from ticketr.domain.models import Ticket
from ticketr.logging import get_logger
from ticketr.validation.models import ValidationIssue

logger = get_logger("validation")

# Parent type -> child types it may contain. Types not listed are unrestricted.
HIERARCHY_RULES: Mapping[str, frozenset[str]] = {
    "Epic": frozenset({"Story", "Task", "Bug"}),
    "Story": frozenset({"Sub-task", "Task"}),
    "Task": frozenset({"Sub-task"}),
    "Bug": frozenset({"Sub-task"}),
    "Feature": frozenset({"Sub-task", "Task"}),
}


class Validator:
    """Validation service for parsed tickets.

    Never raises and never mutates its input; problems are returned as
    ValidationIssue lists for the caller to act on.
    """

    def __init__(self, hierarchy_rules: Mapping[str, Iterable[str]] | None = None) -> None:
        """Initialize the validator.

        Args:
            hierarchy_rules: Parent type to allowed child types. Defaults to
                HIERARCHY_RULES.
        """
        rules = HIERARCHY_RULES if hierarchy_rules is None else hierarchy_rules
        self.hierarchy_rules = {parent: frozenset(children) for parent, children in rules.items()}

    def validate_hierarchy(self, tickets: Iterable[Ticket]) -> list[ValidationIssue]:
        """Check that every task type is allowed under its ticket's type.

        Args:
            tickets: Parsed tickets.

        Returns:
            One issue per disallowed task, in document order.
        """
        issues: list[ValidationIssue] = []

        for ticket in tickets:
            parent_type = ticket.effective_type
            allowed = self.hierarchy_rules.get(parent_type)
            if allowed is None:
                continue

            for task in ticket.tasks:
                child_type = task.effective_type
                if child_type in allowed:
                    continue
                issues.append(
                    ValidationIssue(
                        message=f"A '{child_type}' cannot be the child of a '{parent_type}'",
                        line=task.source_line,
                        field=f"Task '{task.title}'",
                        title=task.title,
                    )
                )

        return issues

    def validate_required_fields(
        self, ticket: Ticket, required_fields: Sequence[str]
    ) -> list[ValidationIssue]:
        """Check that a ticket has a title and every required field.

        Args:
            ticket: Ticket to check.
            required_fields: Field names that must be present and non-empty.

        Returns:
            Issues for the blank title and each missing field.
        """
        issues: list[ValidationIssue] = []

        if not ticket.title.strip():
            issues.append(
                ValidationIssue(
                    message="Title is required",
                    line=ticket.source_line,
                    field="Title",
                )
            )

        for name in required_fields:
            if not ticket.fields.get(name):
                issues.append(
                    ValidationIssue(
                        message=f"Required field '{name}' is missing or empty",
                        line=ticket.source_line,
                        field=name,
                        title=ticket.title,
                    )
                )

        return issues

    def validate_tickets(
        self, tickets: Sequence[Ticket], required_fields: Sequence[str] = ()
    ) -> list[ValidationIssue]:
        """Run hierarchy checks followed by per-ticket field checks."""
        issues = self.validate_hierarchy(tickets)
        for ticket in tickets:
            issues.extend(self.validate_required_fields(ticket, required_fields))

        logger.debug("Validated %d ticket(s): %d issue(s)", len(tickets), len(issues))
        return issues


def validate_hierarchy(tickets: Iterable[Ticket]) -> list[ValidationIssue]:
    """Check tickets against the default hierarchy rules."""
    return Validator().validate_hierarchy(tickets)
