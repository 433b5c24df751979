"""
Time utilities for the blessing backend.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Get current UTC time (timezone-aware, Python 3.12+ compatible)."""
    return datetime.now(timezone.utc)


def isoformat_utc(moment: datetime | None = None) -> str:
    """ISO-8601 timestamp with millisecond precision and a trailing Z."""
    moment = moment or utcnow()
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
