"""
Configuration management using YAML files and dataclasses.

Configuration sections:
- PermalinkConfig: URL prefix and timezone for naive dates
- OutputConfig: Result file and console table settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


@dataclass
class PermalinkConfig:
    """Configuration for permalink generation.

    Attributes:
        prefix: Path prefix for generated permalinks
        timezone: IANA timezone name applied to dates without an offset
    """

    prefix: str = "/blog/"
    timezone: str = "UTC"


@dataclass
class OutputConfig:
    """Configuration for result output.

    Attributes:
        filename: Name of the JSON result file in the output directory
        table: Whether to print a summary table to the console
        warn_duplicates: Whether to log a warning when published paths collide
    """

    filename: str = "permalinks.json"
    table: bool = True
    warn_duplicates: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to a file in the output directory
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "build.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    permalinks: PermalinkConfig = field(default_factory=PermalinkConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict):
            data[key].update(value)
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "permalinks": {
            "prefix": cfg.permalinks.prefix,
            "timezone": cfg.permalinks.timezone,
        },
        "output": {
            "filename": cfg.output.filename,
            "table": cfg.output.table,
            "warn_duplicates": cfg.output.warn_duplicates,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        permalinks=PermalinkConfig(**data["permalinks"]),
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
    )
