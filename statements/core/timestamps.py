"""
Timestamp parsing and canonical rendering.

Both statement formats carry instants as ISO-8601 strings in UTC with
millisecond precision, e.g. "2024-03-01T09:30:00.000Z".
"""

from datetime import date, datetime, time, timezone
from typing import Any


def parse_timestamp(value: Any) -> datetime:
    """
    Convert a datetime, date or ISO-8601 string to an aware UTC datetime.

    Naive values are interpreted as UTC.

    Raises:
        ValueError: If the value cannot be interpreted as a point in time
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("empty timestamp")
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    else:
        raise ValueError(f"not a timestamp: {value!r}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_timestamp(value: Any) -> str:
    """Render an instant in the canonical statement format."""
    dt = parse_timestamp(value)
    millis = dt.microsecond // 1000
    return dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{millis:03d}Z"


def is_timestamp(value: Any) -> bool:
    try:
        parse_timestamp(value)
    except (ValueError, TypeError):
        return False
    return True
