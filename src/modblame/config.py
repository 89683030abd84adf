"""Configuration management for modblame using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .graph.models import Direction

CONFIG_FILE_NAME = ".modblame.json"


class OutputFormat(str, Enum):
    """Output format types."""
    MERMAID = "mermaid"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"

    def to_logging_level(self) -> int:
        """Map to a standard library logging level; trace maps to DEBUG."""
        return {
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.TRACE: logging.DEBUG,
        }[self]


class SourceConfig(BaseModel):
    """Dependency source configuration section."""
    command: list[str] = Field(default_factory=lambda: ["go", "mod", "graph"])
    workdir: str | None = None

    @field_validator("command")
    @classmethod
    def validate_command(cls, v):
        if not v or not v[0]:
            raise ValueError("command must name an executable")
        return v


class FilterConfig(BaseModel):
    """Graph filtering configuration section."""
    from_module: str | None = Field(alias="from", default=None)
    to_module: str | None = Field(alias="to", default=None)
    until: str | None = None
    cycles_only: bool = Field(alias="cyclesOnly", default=False)
    ignore_versions: bool = Field(alias="ignoreVersions", default=False)

    model_config = ConfigDict(populate_by_name=True)


class OutputConfig(BaseModel):
    """Output configuration section."""
    path: str | None = None  # stdout when unset
    format: OutputFormat = OutputFormat.MERMAID
    direction: Direction = Direction.LR
    title: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO


class ModblameConfig(BaseModel):
    """Complete modblame configuration model."""
    source: SourceConfig = Field(default_factory=SourceConfig)
    filters: FilterConfig = Field(default_factory=FilterConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> ModblameConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .modblame.json

    Returns:
        ModblameConfig: Loaded and validated configuration

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return ModblameConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}") from e
    else:
        return ModblameConfig()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .modblame.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None
