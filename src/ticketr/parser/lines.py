"""Line splitting and the legacy-format gate."""

from __future__ import annotations

from collections.abc import Sequence

from ticketr.logging import get_logger
from ticketr.parser.exceptions import LegacyFormatError

logger = get_logger("parser")

LEGACY_HEADING = "# STORY:"


def split_lines(text: str) -> list[str]:
    """Split text into logical lines.

    Lines end at '\\n'; a trailing '\\r' is dropped and a final newline does
    not produce an extra empty line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def classify_lines(lines: Sequence[str]) -> list[str]:
    """Reject legacy documents before any structural parsing.

    Args:
        lines: Raw input lines.

    Returns:
        The same lines, unchanged.

    Raises:
        LegacyFormatError: If any line starts with '# STORY:' once trimmed.
    """
    for index, line in enumerate(lines):
        if line.strip().startswith(LEGACY_HEADING):
            logger.warning("Legacy heading found at line %d", index + 1)
            raise LegacyFormatError(index + 1)
    return list(lines)
