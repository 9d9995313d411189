"""Parser module for ticket Markdown files."""

from ticketr.parser.exceptions import LegacyFormatError, ParseError
from ticketr.parser.lines import classify_lines, split_lines
from ticketr.parser.ticket_parser import TicketParser

__all__ = [
    "LegacyFormatError",
    "ParseError",
    "TicketParser",
    "classify_lines",
    "split_lines",
]
