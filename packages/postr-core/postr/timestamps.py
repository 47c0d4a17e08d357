"""
Timestamp normalisation.

SQLite rows carry epoch seconds, PostgreSQL rows carry aware datetimes and
API clients send ISO strings. Everything funnels through to_datetime().
"""

from datetime import datetime, timezone
from typing import Any


def to_datetime(value: Any) -> datetime:
    """
    Convert a heterogeneous timestamp into an aware UTC datetime.

    Accepts datetime objects (naive values are taken as UTC), epoch seconds
    as int/float or numeric string, and ISO-8601 strings (a trailing "Z" is
    allowed).

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp
    """
    if isinstance(value, bool):
        raise ValueError(f"Value is not a valid timestamp: {value!r}")

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Value is not a valid timestamp: empty string")
        try:
            return datetime.fromtimestamp(float(text), tz=timezone.utc)
        except ValueError:
            pass
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"Value is not a valid timestamp: {value!r}") from None
        return to_datetime(parsed)

    raise ValueError(f"Value is not a valid timestamp: {value!r}")


def to_iso(value: Any) -> str:
    """Format any accepted timestamp as ISO-8601 with millisecond precision."""
    dt = to_datetime(value)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def utcnow() -> datetime:
    """Current UTC time truncated to whole seconds (SQLite stores seconds)."""
    return datetime.now(timezone.utc).replace(microsecond=0)
