"""
Custom GraphQL scalars.

Annotate fields with the NewType and register SCALAR_MAP on the schema
config.
"""

from datetime import datetime
from typing import Any, NewType

import strawberry

from postr.timestamps import to_datetime, to_iso

DateTime = NewType("DateTime", datetime)


def _serialize(value: Any) -> str:
    try:
        return to_iso(value)
    except ValueError:
        raise ValueError(f"Value is not a valid DateTime: {value!r}") from None


def _parse_value(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"Value is not a valid DateTime: {value!r}")
    return to_datetime(value)


SCALAR_MAP = {
    DateTime: strawberry.scalar(
        name="DateTime",
        description="ISO-8601 date and time in UTC, e.g. 2024-01-31T12:00:00.000Z",
        serialize=_serialize,
        parse_value=_parse_value,
    ),
}
