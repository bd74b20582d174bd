"""Utility helpers for favo-sdk."""

from .datetime import (
    Clock,
    ensure_utc,
    is_expired,
    timestamp_to_utc,
    utc_now,
)

__all__ = [
    "Clock",
    "ensure_utc",
    "is_expired",
    "timestamp_to_utc",
    "utc_now",
]
