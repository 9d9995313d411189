"""Migrator - converts legacy '# STORY:' documents to '# TICKET:' headings."""

from __future__ import annotations

from pathlib import Path

from ticketr.logging import get_logger
from ticketr.parser.lines import LEGACY_HEADING, split_lines

logger = get_logger("migration")

CURRENT_HEADING = "# TICKET:"


class Migrator:
    """Rewrites legacy headings, with a dry-run preview before writing."""

    def __init__(self, dry_run: bool = True) -> None:
        self.dry_run = dry_run

    def migrate_text(self, content: str) -> tuple[str, bool]:
        """Replace every legacy heading marker.

        Returns:
            Tuple of (migrated content, whether anything changed).
        """
        migrated = content.replace(LEGACY_HEADING, CURRENT_HEADING)
        return migrated, migrated != content

    def migrate_file(self, path: Path | str) -> tuple[str, bool]:
        """Read a file and return its migrated content without writing it.

        Raises:
            OSError: If the file cannot be read.
        """
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            content = f.read()
        return self.migrate_text(content)

    def preview_diff(self, path: Path | str, old_content: str, new_content: str) -> str:
        """Describe the changed lines for a dry run."""
        old_lines = split_lines(old_content)
        new_lines = split_lines(new_content)

        result = [f"Preview of changes for: {path}"]
        change_count = 0
        for number, (old, new) in enumerate(zip(old_lines, new_lines), start=1):
            if old != new:
                change_count += 1
                result.append(f"  Line {number}: {old} -> {new}")

        result.append("")
        result.append(f"{change_count} change(s) would be made. Use --write to apply.")
        return "\n".join(result) + "\n"

    def write_migration(self, path: Path | str, content: str) -> None:
        """Write migrated content back to disk.

        Raises:
            OSError: If the file cannot be written.
        """
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.debug("Migrated %s", path)
