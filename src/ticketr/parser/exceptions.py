"""Custom exceptions for the ticket parser."""


class ParseError(Exception):
    """Base exception for ticket parsing errors."""


class LegacyFormatError(ParseError):
    """Input uses the retired '# STORY:' heading."""

    def __init__(self, line_number: int) -> None:
        self.line_number = line_number
        super().__init__(
            f"Legacy '# STORY:' format detected at line {line_number}. "
            "Please use '# TICKET:' headings instead. "
            "Run 'ticketr migrate <file>' to convert the file automatically."
        )
