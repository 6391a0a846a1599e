"""Exception types raised by the permalink hook."""

from __future__ import annotations


class PermalinkError(Exception):
    """Base class for all errors raised by this package."""


class InvalidDateError(PermalinkError, ValueError):
    """A content item carries a date that cannot be compared against ``now``.

    Attributes:
        value: The offending raw date value
        source: Where the item came from, if known
    """

    def __init__(self, value: object, source: str | None = None, detail: str | None = None):
        self.value = value
        self.source = source
        where = f" in {source}" if source else ""
        message = f"Invalid date {value!r}{where}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InputError(PermalinkError):
    """Front matter or a manifest could not be turned into content items."""
