"""Unit tests for the legacy format migrator."""

from pathlib import Path

import pytest

from ticketr.migration.migrator import Migrator
from ticketr.parser.ticket_parser import TicketParser


@pytest.fixture
def migrator() -> Migrator:
    """Create a dry-run migrator."""
    return Migrator()


LEGACY_CONTENT = "# STORY: [TEST-001] Test story\n\n## Description\nTest content\n\n# STORY: Second\n"


@pytest.mark.unit
class TestMigrateText:
    """Tests for Migrator.migrate_text."""

    def test_replaces_every_legacy_heading(self, migrator: Migrator) -> None:
        migrated, changed = migrator.migrate_text(LEGACY_CONTENT)

        assert changed is True
        assert "# STORY:" not in migrated
        assert migrated.count("# TICKET:") == 2

    def test_migrated_content_parses(self, migrator: Migrator) -> None:
        migrated, _ = migrator.migrate_text(LEGACY_CONTENT)

        tickets = TicketParser().parse(migrated)

        assert [t.title for t in tickets] == ["Test story", "Second"]
        assert tickets[0].external_id == "TEST-001"
        assert tickets[0].description == "Test content"

    def test_current_format_is_unchanged(self, migrator: Migrator) -> None:
        content = "# TICKET: Already new\n"

        migrated, changed = migrator.migrate_text(content)

        assert changed is False
        assert migrated == content

    def test_default_is_dry_run(self) -> None:
        assert Migrator().dry_run is True
        assert Migrator(dry_run=False).dry_run is False


@pytest.mark.unit
class TestMigrateFile:
    """Tests for file-based migration."""

    def test_migrate_file_does_not_write(self, migrator: Migrator, tmp_path: Path) -> None:
        path = tmp_path / "legacy.md"
        path.write_text(LEGACY_CONTENT, encoding="utf-8")

        migrated, changed = migrator.migrate_file(path)

        assert changed is True
        assert "# TICKET: [TEST-001] Test story" in migrated
        assert path.read_text(encoding="utf-8") == LEGACY_CONTENT

    def test_migrate_missing_file(self, migrator: Migrator, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            migrator.migrate_file(tmp_path / "missing.md")

    def test_write_migration(self, tmp_path: Path) -> None:
        path = tmp_path / "legacy.md"
        path.write_text(LEGACY_CONTENT, encoding="utf-8")
        migrator = Migrator(dry_run=False)

        migrated, _ = migrator.migrate_file(path)
        migrator.write_migration(path, migrated)

        written = path.read_text(encoding="utf-8")
        assert "# STORY:" not in written
        assert "# TICKET: Second" in written


@pytest.mark.unit
class TestPreviewDiff:
    """Tests for Migrator.preview_diff."""

    def test_lists_changed_lines(self, migrator: Migrator) -> None:
        migrated, _ = migrator.migrate_text(LEGACY_CONTENT)

        preview = migrator.preview_diff("legacy.md", LEGACY_CONTENT, migrated)

        assert "Preview of changes for: legacy.md" in preview
        assert "  Line 1: # STORY: [TEST-001] Test story -> # TICKET: [TEST-001] Test story" in preview
        assert "  Line 6: # STORY: Second -> # TICKET: Second" in preview
        assert "2 change(s) would be made. Use --write to apply." in preview

    def test_no_changes(self, migrator: Migrator) -> None:
        preview = migrator.preview_diff("same.md", "a\nb\n", "a\nb\n")

        assert "0 change(s) would be made" in preview
        assert "Line" not in preview
