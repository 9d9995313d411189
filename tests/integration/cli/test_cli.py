"""Integration tests for the ticketr command line."""

import json
from pathlib import Path
from textwrap import dedent

import pytest
from click.testing import CliRunner

from ticketr.cli import main

VALID_DOCUMENT = dedent("""
    # TICKET: [PROJ-1] Parent

    ## Fields
    Type: Story

    ## Tasks
    - [PROJ-2] Child
      ## Fields
      Type: Task
""").lstrip("\n")

INVALID_DOCUMENT = dedent("""
    # TICKET: Big epic
    ## Fields
    Type: Epic
    ## Tasks
    - Loose subtask
""").lstrip("\n")


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run each command from an empty directory with no ticketr.yaml above it."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TICKETR_LOG_DIR", raising=False)
    return tmp_path


def write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.integration
class TestValidateCommand:
    """Tests for 'ticketr validate'."""

    def test_valid_file(self, runner: CliRunner, workdir: Path) -> None:
        path = write(workdir / "ok.md", VALID_DOCUMENT)

        result = runner.invoke(main, ["validate", str(path)])

        assert result.exit_code == 0
        assert "1 ticket(s) valid." in result.output

    def test_hierarchy_violation(self, runner: CliRunner, workdir: Path) -> None:
        path = write(workdir / "bad.md", INVALID_DOCUMENT)

        result = runner.invoke(main, ["validate", str(path)])

        assert result.exit_code == 1
        assert (
            "line 5: Task 'Loose subtask': A 'Sub-task' cannot be the child of a 'Epic'"
            in result.output
        )
        assert "1 validation error(s) found." in result.output

    def test_required_field_option(self, runner: CliRunner, workdir: Path) -> None:
        path = write(workdir / "ok.md", VALID_DOCUMENT)

        result = runner.invoke(main, ["validate", str(path), "-r", "Priority"])

        assert result.exit_code == 1
        assert "Required field 'Priority' is missing or empty" in result.output

    def test_required_fields_from_config(self, runner: CliRunner, workdir: Path) -> None:
        path = write(workdir / "ok.md", VALID_DOCUMENT)
        write(workdir / "ticketr.yaml", "validation:\n  required_fields: [Sprint]\n")

        result = runner.invoke(main, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Required field 'Sprint' is missing or empty" in result.output

    def test_invalid_config(self, runner: CliRunner, workdir: Path) -> None:
        path = write(workdir / "ok.md", VALID_DOCUMENT)
        config = write(workdir / "broken.yaml", "- not a mapping\n")

        result = runner.invoke(main, ["validate", str(path), "-c", str(config)])

        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_legacy_file(self, runner: CliRunner, workdir: Path) -> None:
        path = write(workdir / "legacy.md", "# STORY: Old\n")

        result = runner.invoke(main, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Parse error" in result.output
        assert "line 1" in result.output

    def test_missing_file(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(main, ["validate", str(workdir / "missing.md")])

        assert result.exit_code != 0


@pytest.mark.integration
class TestFormatCommand:
    """Tests for 'ticketr format'."""

    def test_prints_canonical_form(self, runner: CliRunner, workdir: Path) -> None:
        path = write(workdir / "messy.md", "# TICKET:   Messy\n## Fields\nType :  Bug\n")

        result = runner.invoke(main, ["format", str(path)])

        assert result.exit_code == 0
        assert result.output == "# TICKET: Messy\n\n## Fields\nType: Bug\n"

    def test_writes_output_file(self, runner: CliRunner, workdir: Path) -> None:
        path = write(workdir / "in.md", INVALID_DOCUMENT)
        output = workdir / "out.md"

        result = runner.invoke(main, ["format", str(path), "-o", str(output)])

        assert result.exit_code == 0
        assert "Wrote 1 ticket(s)" in result.output
        assert output.read_text(encoding="utf-8").startswith("# TICKET: Big epic\n\n## Fields\n")

    def test_check_formatted(self, runner: CliRunner, workdir: Path) -> None:
        path = write(workdir / "ok.md", "# TICKET: Clean\n")

        result = runner.invoke(main, ["format", str(path), "--check"])

        assert result.exit_code == 0
        assert "already formatted" in result.output

    def test_check_unformatted(self, runner: CliRunner, workdir: Path) -> None:
        path = write(workdir / "messy.md", "# TICKET:   Messy\n")

        result = runner.invoke(main, ["format", str(path), "--check"])

        assert result.exit_code == 1
        assert "would be reformatted" in result.output


@pytest.mark.integration
class TestExportCommand:
    """Tests for 'ticketr export'."""

    def test_exports_json(self, runner: CliRunner, workdir: Path) -> None:
        path = write(workdir / "ok.md", VALID_DOCUMENT)

        result = runner.invoke(main, ["export", str(path)])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["external_id"] == "PROJ-1"
        assert data[0]["tasks"][0]["fields"] == {"Type": "Task"}
        assert data[0]["tasks"][0]["source_line"] == 7


@pytest.mark.integration
class TestMigrateCommand:
    """Tests for 'ticketr migrate'."""

    def test_dry_run_previews(self, runner: CliRunner, workdir: Path) -> None:
        path = write(workdir / "legacy.md", "# STORY: Old\n")

        result = runner.invoke(main, ["migrate", str(path)])

        assert result.exit_code == 0
        assert "Line 1: # STORY: Old -> # TICKET: Old" in result.output
        assert path.read_text(encoding="utf-8") == "# STORY: Old\n"

    def test_write_applies(self, runner: CliRunner, workdir: Path) -> None:
        path = write(workdir / "legacy.md", "# STORY: Old\n")

        result = runner.invoke(main, ["migrate", str(path), "--write"])

        assert result.exit_code == 0
        assert path.read_text(encoding="utf-8") == "# TICKET: Old\n"

        validate = runner.invoke(main, ["validate", str(path)])
        assert validate.exit_code == 0

    def test_nothing_to_migrate(self, runner: CliRunner, workdir: Path) -> None:
        path = write(workdir / "ok.md", VALID_DOCUMENT)

        result = runner.invoke(main, ["migrate", str(path)])

        assert result.exit_code == 0
        assert "No legacy headings found" in result.output
