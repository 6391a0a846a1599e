"""Logging for build runs.

Everything logs under the ``blog_permalinks`` logger. The console gets a
Rich handler; the output directory can get a log file in JSONL (one event per
line, with the structured fields passed to ``log_event``) or plain text.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from ..config import LoggingConfig

LOGGER_NAME = "blog_permalinks"
PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Attributes every LogRecord has; anything else came in through `extra`.
_RESERVED = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys() | {"message", "asctime"}
)


def setup_logging(
    cfg: LoggingConfig | None = None, output_dir: Path | None = None
) -> logging.Logger:
    """Configure the package logger for one build run.

    Handlers from a previous run are closed and replaced, so repeated runs in
    one process do not log twice or keep old log files open.

    Args:
        cfg: Logging settings; defaults apply when None
        output_dir: Directory for the log file; no file is written when None

    Returns:
        The configured ``blog_permalinks`` logger
    """
    cfg = cfg or LoggingConfig()
    level = _level_from_string(cfg.level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
    logger.propagate = False

    if cfg.console:
        console_handler = RichHandler(
            rich_tracebacks=True, show_time=False, show_path=False, markup=False
        )
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

    if cfg.file and output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(output_dir / cfg.filename, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            BuildEventFormatter() if cfg.format == "jsonl" else logging.Formatter(PLAIN_FORMAT)
        )
        logger.addHandler(file_handler)

    return logger


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the package logger, or a child such as ``blog_permalinks.runner``."""
    return logging.getLogger(f"{LOGGER_NAME}.{component}" if component else LOGGER_NAME)


def log_event(
    logger: logging.Logger | None, message: str, level: int = logging.INFO, **fields: Any
) -> None:
    """Log ``message`` with ``fields`` attached to the record; no-op without a logger."""
    if logger is None:
        return
    logger.log(level, message, extra=fields)


class BuildEventFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, message and extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            {key: value for key, value in record.__dict__.items() if key not in _RESERVED}
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        # Titles stay readable in the log file.
        return json.dumps(payload, ensure_ascii=False, default=str)


def _level_from_string(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)
