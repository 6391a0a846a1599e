"""Date parsing for front matter values."""

from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InvalidDateError, PermalinkError


def parse_iso8601(value: str, tz: tzinfo = timezone.utc) -> datetime:
    """Parse an ISO 8601 string into a timezone-aware datetime.

    Date-only strings resolve to midnight. Naive values are taken to be in ``tz``.
    """
    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = f"{raw[:-1]}+00:00"
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed


def parse_item_date(
    value: object, tz: tzinfo = timezone.utc, source: str | None = None
) -> datetime | None:
    """Turn a front matter ``date`` into an aware datetime.

    Returns None when the item has no date. Raises InvalidDateError for values
    that cannot be compared against the build time.
    """
    if value is None:
        return None
    # bool is an int subclass; neither is a date we accept.
    if isinstance(value, (bool, int, float)):
        raise InvalidDateError(value, source, "expected an ISO 8601 date")
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=tz)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=tz)
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return parse_iso8601(value, tz)
        except ValueError as exc:
            raise InvalidDateError(value, source, str(exc)) from exc
    raise InvalidDateError(value, source, f"unsupported type {type(value).__name__}")


def ensure_aware(moment: datetime) -> datetime:
    """Treat a naive ``now`` as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def resolve_timezone(timezone_name: str | None) -> tzinfo:
    """Resolve an IANA timezone name, defaulting to UTC."""
    if not timezone_name or timezone_name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise PermalinkError(f"Unknown timezone: {timezone_name}") from exc
