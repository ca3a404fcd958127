"""
Operating Hours Utilities
Selects today's line from a provider's weekly hours listing
"""

from datetime import datetime
from typing import List, Optional

from config import get_eastern_now

DAYS_PER_WEEK = 7


def provider_day_index(sunday_first_index: int) -> int:
    """
    Convert a Sunday-first weekday index to the provider's Monday-first index.

    The local calendar counts Sunday=0 .. Saturday=6 while the place details
    weekly listing starts on Monday, so Sunday becomes 6 and Monday becomes 0.

    Args:
        sunday_first_index: 0 (Sunday) through 6 (Saturday)

    Returns:
        0 (Monday) through 6 (Sunday)
    """
    if not 0 <= sunday_first_index < DAYS_PER_WEEK:
        raise ValueError(f"weekday index out of range: {sunday_first_index}")
    return (sunday_first_index + DAYS_PER_WEEK - 1) % DAYS_PER_WEEK


def sunday_first_index(now: datetime) -> int:
    """Weekday of a (timezone-aware) datetime, counting Sunday as 0"""
    return int(now.strftime('%w'))


def today_hours_line(weekday_text: List[str], now: Optional[datetime] = None) -> str:
    """
    Pick today's entry from a Monday-first weekly hours listing.

    The provider writes lines like "Monday: 9:00 AM – 5:00 PM"; only the
    separator after the weekday is rewritten so the line reads
    "Monday, 9:00 AM – 5:00 PM" in an SMS.

    Args:
        weekday_text: Seven lines, Monday first
        now: Reference time (defaults to current US Eastern time)

    Returns:
        Today's hours line
    """
    if now is None:
        now = get_eastern_now()
    line = weekday_text[provider_day_index(sunday_first_index(now))]
    return line.replace(':', ',', 1)


def join_weekly_hours(weekday_text: List[str]) -> str:
    """Flatten a weekly listing into the text cached on the store record"""
    return '\n'.join(weekday_text)
