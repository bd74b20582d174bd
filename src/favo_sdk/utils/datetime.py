"""
DateTime utilities for consistent timezone handling.
"""
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Union

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """
    Get the current UTC time with timezone awareness.

    Returns:
        datetime: Current UTC time with timezone info
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Return the datetime in UTC, treating naive values as UTC.

    Args:
        dt: Datetime to normalize

    Returns:
        datetime: Timezone-aware UTC datetime
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def timestamp_to_utc(timestamp: Union[int, float]) -> datetime:
    """
    Convert Unix timestamp to UTC datetime.

    Args:
        timestamp: Unix timestamp (seconds since epoch)

    Returns:
        datetime: UTC datetime with timezone info
    """
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def is_expired(
    expiry_time: Optional[datetime],
    now: Optional[datetime] = None,
    buffer_seconds: int = 0,
) -> bool:
    """
    Check if a datetime has expired (is in the past).

    Args:
        expiry_time: The expiry datetime to check; None never expires
        now: Reference time, defaults to the current UTC time
        buffer_seconds: Optional buffer in seconds before actual expiry

    Returns:
        bool: True if expired, False otherwise
    """
    if expiry_time is None:
        return False

    expiry_time = ensure_utc(expiry_time)
    current_time = ensure_utc(now) if now is not None else utc_now()

    if buffer_seconds > 0:
        expiry_time = expiry_time - timedelta(seconds=buffer_seconds)

    return current_time >= expiry_time

