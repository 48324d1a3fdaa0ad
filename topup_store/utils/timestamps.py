"""Fixed-timezone timestamp strings for transaction records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "Asia/Bangkok"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(now: Optional[datetime] = None, tz: str = DEFAULT_TIMEZONE) -> str:
    """Return ``now`` (default: current time) as ``YYYY-MM-DD HH:MM:SS`` in ``tz``.

    Naive datetimes are treated as UTC.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(ZoneInfo(tz)).strftime(TIMESTAMP_FORMAT)
