"""Calendar-based daily record keys.

Each calendar day gets its own key prefix. "Yesterday" is plain calendar
arithmetic on the date, so month and year boundaries roll over naturally.
Old days are never cleaned up: once a date is neither today nor yesterday
it is simply no longer addressed, and its fields expire on their own.
"""

from datetime import date, timedelta
from typing import Literal

Day = Literal["today", "yesterday"]

DAILY_RECORD_EXPIRY = 60 * 60 * 24 * 30


def day_for(which: Day, today: date) -> date:
    """Return the calendar date for "today" or "yesterday" relative to today."""
    if which == "today":
        return today
    if which == "yesterday":
        return today - timedelta(days=1)
    raise ValueError(f"which must be 'today' or 'yesterday', not {which!r}")


def day_roll_key(arena: str, which: Day, today: date) -> str:
    """Build the daily record key prefix, e.g. ``arena:1:maiden:day:2022-03-01``."""
    when = day_for(which, today)
    return f"{arena}:maiden:day:{when.isoformat()}"
