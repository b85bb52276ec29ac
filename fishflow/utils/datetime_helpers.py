"""
Date/Time Handling Utilities

Catch timestamps may arrive naive (already local wall-clock time) or
timezone-aware. Achievements reason about local calendar days and local
hours, so everything goes through to_local() first.

RULES:
- Naive timestamps are taken as local time and never shifted
- Aware timestamps are converted to the configured local timezone, if any
- Stored timestamps (unlocked_at) are always UTC
"""

import logging
from datetime import datetime, date
from typing import Optional
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)


def now_utc() -> datetime:
    """
    Get current datetime in UTC (timezone-aware)

    Returns:
        Current datetime in UTC with timezone info
    """
    return datetime.now(ZoneInfo("UTC"))


def to_local(dt: datetime, local_tz: Optional[ZoneInfo] = None) -> datetime:
    """
    Convert a catch timestamp to local wall-clock time

    Args:
        dt: Timestamp (naive or aware)
        local_tz: Target timezone; None keeps the timestamp's own offset

    Returns:
        Datetime whose .date() and .hour are the local calendar day and hour
    """
    if dt.tzinfo is None or local_tz is None:
        return dt
    return dt.astimezone(local_tz)


def local_date(dt: datetime, local_tz: Optional[ZoneInfo] = None) -> date:
    """Local calendar date of a timestamp"""
    return to_local(dt, local_tz).date()


def local_hour(dt: datetime, local_tz: Optional[ZoneInfo] = None) -> int:
    """Local hour (0-23) of a timestamp"""
    return to_local(dt, local_tz).hour


def sort_key(dt: datetime, local_tz: Optional[ZoneInfo] = None) -> float:
    """
    Ordering key that works for mixed naive and aware timestamps

    Naive values are local wall-clock time, so they are placed in local_tz;
    with no local timezone configured they are compared as if they were UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=local_tz or ZoneInfo("UTC"))
    return dt.timestamp()
