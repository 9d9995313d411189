"""FileRepository - reads and writes ticket documents on disk."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ticketr.domain.models import Ticket
from ticketr.logging import get_logger
from ticketr.parser.ticket_parser import TicketParser
from ticketr.renderer.serializer import TicketSerializer

logger = get_logger("repository")


class FileRepository:
    """File-backed ticket storage in the Markdown ticket format.

    I/O errors propagate unchanged to the caller.
    """

    def __init__(
        self,
        parser: TicketParser | None = None,
        serializer: TicketSerializer | None = None,
    ) -> None:
        self.parser = parser or TicketParser()
        self.serializer = serializer or TicketSerializer()

    def get_tickets(self, path: Path | str) -> list[Ticket]:
        """Read and parse tickets from a file.

        Raises:
            OSError: If the file cannot be opened or read.
            LegacyFormatError: If the file uses the legacy heading.
        """
        return self.parser.parse_file(path)

    def read_document(self, path: Path | str) -> tuple[str, list[Ticket]]:
        """Read a file and return its raw text together with the parsed tickets.

        Raises:
            OSError: If the file cannot be opened or read.
            LegacyFormatError: If the file uses the legacy heading.
        """
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            content = f.read()
        return content, self.parser.parse(content)

    def render(self, tickets: Sequence[Ticket]) -> str:
        """Render tickets exactly as save_tickets would write them."""
        return self.serializer.render_all(tickets)

    def save_tickets(self, path: Path | str, tickets: Sequence[Ticket]) -> None:
        """Serialize tickets and write them to a file, replacing its content.

        Raises:
            OSError: If the file cannot be created or written.
        """
        path = Path(path)
        content = self.render(tickets)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.debug("Wrote %d ticket(s) to %s", len(tickets), path)
