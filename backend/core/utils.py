"""
Utility functions for the analytics engine.

Includes:
- UTC datetime helpers
- Lenient timestamp parsing for flow records
"""

from datetime import datetime, timezone
from typing import Any, Optional


def utc_now() -> datetime:
    """
    Get the current UTC datetime.

    Returns:
        Current datetime in UTC timezone
    """
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a timestamp from a flow record.

    Accepts ISO-8601 strings (a trailing "Z" is allowed) or datetime
    objects. Empty values yield None.

    Args:
        value: Raw timestamp value

    Returns:
        Timezone-aware UTC datetime, or None

    Raises:
        ValueError: If a string is not a valid ISO-8601 timestamp
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(text))
