"""Configuration management for collab using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILE = ".collab.json"


class OutputFormat(str, Enum):
    """Output format types."""
    JSON = "json"
    PRETTY = "pretty"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class RootConfig(BaseModel):
    """Blackboard root configuration section."""
    path: str | None = None
    markers: list[str] = Field(default_factory=lambda: ["CONTRIBUTING.md", "projects"])

    @field_validator("markers")
    @classmethod
    def validate_markers(cls, v):
        if not v:
            raise ValueError("markers must name at least one file or directory")
        return v


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: OutputFormat = OutputFormat.JSON

    model_config = ConfigDict(use_enum_values=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class CollabConfig(BaseModel):
    """Complete collab configuration model."""
    root: RootConfig = Field(default_factory=RootConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> CollabConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .collab.json

    Returns:
        CollabConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    config_file = find_config_file() if config_path is None else Path(config_path)
    if config_file is None or not config_file.is_file():
        return CollabConfig()

    try:
        config_data = json.loads(config_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {config_file}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ValueError(f"Failed to read config file {config_file}: {e}") from e

    try:
        return CollabConfig.model_validate(config_data)
    except ValidationError as e:
        raise ValueError(f"Failed to load config from {config_file}: {e}") from e


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .collab.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    start = Path(start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        config_file = directory / CONFIG_FILE
        if config_file.is_file():
            return config_file
    return None
