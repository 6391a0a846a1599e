"""
Shared utility functions.

This package contains utility code used across the resolver, the runner
and the CLI.
"""

from .logging import BuildEventFormatter, get_logger, log_event, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "log_event",
    "BuildEventFormatter",
]
