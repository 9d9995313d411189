"""CLI entry point for ticketr.

Commands work on a single Markdown ticket file:
- validate: parse and check hierarchy/required-field rules
- format: re-render a file in canonical form
- export: print the parsed tickets as JSON
- migrate: convert legacy '# STORY:' headings
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import NoReturn

import click

from ticketr.config import ConfigError, TicketrConfig, find_config, load_config
from ticketr.logging import get_logger, setup_logging
from ticketr.migration.migrator import Migrator
from ticketr.parser.exceptions import ParseError
from ticketr.repository.file_repository import FileRepository
from ticketr.validation.validator import Validator

logger = get_logger("cli")

CONFIG_OPTION_HELP = "Path to ticketr.yaml (auto-detected if not specified)"


def load_settings(config_path: Path | None, verbose: bool) -> TicketrConfig:
    """Load configuration and configure logging from it.

    Args:
        config_path: Explicit config file, or None to search upwards.
        verbose: Whether to enable debug logging.

    Returns:
        Loaded configuration, or defaults when no file is found.

    Raises:
        ConfigError: If an explicit or discovered config file is invalid.
    """
    if config_path is None:
        try:
            config_path = find_config()
        except ConfigError:
            config_path = None

    config = load_config(config_path) if config_path is not None else TicketrConfig()

    level = "DEBUG" if verbose else config.logging.level
    setup_logging(log_dir=config.logging.dir, level=level)
    if config_path is not None:
        logger.debug("Using configuration %s", config_path)

    return config


def _fail(message: str) -> NoReturn:
    click.echo(message, err=True)
    sys.exit(1)


@click.group()
@click.version_option(package_name="ticketr")
def main() -> None:
    """ticketr - manage tickets as code in Markdown files."""
    pass


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-r",
    "--required-field",
    "required_fields",
    multiple=True,
    help="Field every ticket must define (repeatable, adds to config)",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help=CONFIG_OPTION_HELP,
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def validate(
    file: Path, required_fields: tuple[str, ...], config_path: Path | None, verbose: bool
) -> None:
    """Validate ticket hierarchy and required fields in FILE."""
    try:
        config = load_settings(config_path, verbose)
        tickets = FileRepository().get_tickets(file)
    except ConfigError as e:
        _fail(f"Configuration error: {e}")
    except ParseError as e:
        _fail(f"Parse error: {e}")
    except OSError as e:
        _fail(f"Error reading tickets from file: {e}")

    required = list(dict.fromkeys([*config.validation.required_fields, *required_fields]))
    issues = Validator().validate_tickets(tickets, required)

    if issues:
        click.echo("Validation errors found:")
        for issue in issues:
            click.echo(f"  - {issue}")
        _fail(f"\n{len(issues)} validation error(s) found.")

    click.echo(f"{len(tickets)} ticket(s) valid.")


@main.command(name="format")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the formatted document here instead of stdout",
)
@click.option("--check", is_flag=True, help="Exit 1 if FILE is not already formatted")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help=CONFIG_OPTION_HELP,
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def format_command(
    file: Path, output: Path | None, check: bool, config_path: Path | None, verbose: bool
) -> None:
    """Re-render FILE in canonical form."""
    repository = FileRepository()
    try:
        load_settings(config_path, verbose)
        content, tickets = repository.read_document(file)
    except ConfigError as e:
        _fail(f"Configuration error: {e}")
    except ParseError as e:
        _fail(f"Parse error: {e}")
    except OSError as e:
        _fail(f"Error reading tickets from file: {e}")

    rendered = repository.render(tickets)

    if check:
        if rendered != content:
            _fail(f"{file} would be reformatted")
        click.echo(f"{file} is already formatted")
        return

    if output is None:
        click.echo(rendered, nl=False)
        return

    try:
        repository.save_tickets(output, tickets)
    except OSError as e:
        _fail(f"Error writing tickets to file: {e}")
    click.echo(f"Wrote {len(tickets)} ticket(s) to {output}")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help=CONFIG_OPTION_HELP,
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def export(file: Path, config_path: Path | None, verbose: bool) -> None:
    """Print the tickets in FILE as JSON."""
    try:
        load_settings(config_path, verbose)
        tickets = FileRepository().get_tickets(file)
    except ConfigError as e:
        _fail(f"Configuration error: {e}")
    except ParseError as e:
        _fail(f"Parse error: {e}")
    except OSError as e:
        _fail(f"Error reading tickets from file: {e}")

    click.echo(json.dumps([ticket.to_dict() for ticket in tickets], indent=2, ensure_ascii=False))


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--write", is_flag=True, help="Apply the migration in place")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def migrate(file: Path, write: bool, verbose: bool) -> None:
    """Convert legacy '# STORY:' headings in FILE to '# TICKET:'."""
    setup_logging(level="DEBUG" if verbose else None)
    migrator = Migrator(dry_run=not write)

    try:
        content = file.read_text(encoding="utf-8")
        migrated, changed = migrator.migrate_text(content)
        if not changed:
            click.echo(f"No legacy headings found in {file}")
            return

        if migrator.dry_run:
            click.echo(migrator.preview_diff(file, content, migrated), nl=False)
            return

        migrator.write_migration(file, migrated)
    except OSError as e:
        _fail(f"Migration failed: {e}")

    click.echo(f"Migrated {file}")


if __name__ == "__main__":
    main()
