"""Configuration loading for ticketr."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "ticketr.yaml"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class ValidationConfig:
    """Validation settings."""

    required_fields: list[str] = field(default_factory=list)


@dataclass
class LoggingConfig:
    """Logging settings. Unset values fall back to environment/defaults."""

    level: str | None = None
    dir: str | None = None


@dataclass
class TicketrConfig:
    """ticketr project configuration. Every key is optional."""

    validation: ValidationConfig = field(default_factory=ValidationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    root_path: Path = field(default_factory=Path)

    @classmethod
    def from_dict(cls, data: dict[str, Any], root_path: Path) -> TicketrConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary from YAML.
            root_path: Root directory containing the config file.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a section has the wrong shape.
        """
        validation_data = _section(data, "validation")
        required = validation_data.get("required_fields", [])
        if not isinstance(required, list) or not all(isinstance(name, str) for name in required):
            raise ConfigError("validation.required_fields must be a list of field names")

        logging_data = _section(data, "logging")
        log_dir = logging_data.get("dir")

        return cls(
            validation=ValidationConfig(required_fields=list(required)),
            logging=LoggingConfig(
                level=logging_data.get("level"),
                dir=str(root_path / log_dir) if log_dir else None,
            ),
            root_path=root_path,
        )


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping, got {type(section).__name__}")
    return section


def load_config(config_path: Path | str) -> TicketrConfig:
    """Load ticketr configuration from a YAML file.

    Args:
        config_path: Path to ticketr.yaml file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return TicketrConfig.from_dict(data, config_path.parent)


def find_config(start_path: Path | str | None = None) -> Path:
    """Find ticketr.yaml by walking up directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to ticketr.yaml file.

    Raises:
        ConfigError: If no config file is found.
    """
    if start_path is None:
        start_path = Path.cwd()
    else:
        start_path = Path(start_path)

    current = start_path.resolve()

    while current != current.parent:
        config_path = current / CONFIG_FILENAME
        if config_path.exists():
            return config_path
        current = current.parent

    # Check root
    config_path = current / CONFIG_FILENAME
    if config_path.exists():
        return config_path

    raise ConfigError(f"No {CONFIG_FILENAME} found in {start_path} or any parent directory")
