"""
Time Utilities
==============

Current-time acquisition and timestamp rendering for log lines.

Timestamps default to RFC 3339 with microsecond precision, e.g.
``2026-10-18T09:15:02.123456+00:00``. Local timestamps carry the local
UTC offset.
"""

from datetime import datetime, timezone
from typing import Optional


def now(use_utc: bool = True) -> datetime:
    """Return the current time as an aware datetime in UTC or local time"""
    if use_utc:
        return datetime.now(timezone.utc)
    return datetime.now().astimezone()


def format_timestamp(moment: datetime, fmt: Optional[str] = None) -> str:
    """
    Render a timestamp for a log line

    Args:
        moment (datetime): Aware datetime to render
        fmt (str): Optional strftime format; RFC 3339 when omitted

    Returns:
        str: Rendered timestamp
    """
    if fmt:
        return moment.strftime(fmt)
    return moment.isoformat(timespec="microseconds")


def current_timestamp(use_utc: bool = True, fmt: Optional[str] = None) -> str:
    return format_timestamp(now(use_utc), fmt)


__all__ = ["now", "format_timestamp", "current_timestamp"]
