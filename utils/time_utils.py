"""
utils/time_utils.py

Purpose: Timestamp utilities

- UTC "now" for documents written by the store adapter
- ISO-8601 rendering of stored timestamps for API responses
"""

from datetime import datetime, timezone
from typing import Optional, Any


def utc_now() -> datetime:
    """
    Returns the current time as an aware UTC datetime.
    """
    return datetime.now(timezone.utc)


def to_iso(value: Any, default_now: bool = True) -> Optional[str]:
    """
    Renders a stored timestamp the way the web client expects it
    (millisecond precision, trailing "Z").

    Naive datetimes are treated as UTC, which is how MongoDB returns them.
    Strings are passed through untouched. Missing values render as "now"
    unless default_now is False.
    """
    if isinstance(value, str):
        return value

    if not isinstance(value, datetime):
        if not default_now:
            return None
        value = utc_now()

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)

    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
