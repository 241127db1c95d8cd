"""
datekey.py — Calendar-day keys ("YYYY-MM-DD") and their arithmetic.

A DateKey is a plain `datetime.date`. All differences and shifts are done on
dates, never on timestamps, so UTC offsets and DST changes cannot move a day
across a streak boundary.
"""

import re
from datetime import date, datetime, timedelta

from success_tracker.config import MAX_LOG_AGE_DAYS
from success_tracker.errors import InvalidFormat, FutureDate, TooOld

DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def today() -> date:
    """Local calendar day of this process."""
    return date.today()


def parse(value) -> date:
    """Parse a YYYY-MM-DD string into a DateKey. Raises InvalidFormat."""
    if isinstance(value, datetime):
        raise InvalidFormat(f"Expected a calendar date, got a timestamp: {value!r}")
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not DATE_KEY_RE.fullmatch(value):
        raise InvalidFormat(f"Invalid date format {value!r}. Use YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        # e.g. 2025-02-30
        raise InvalidFormat(f"Not a calendar date: {value!r}") from None


def format_key(d: date) -> str:
    return d.isoformat()


def day_difference(a: date, b: date) -> int:
    """Calendar days from b to a (positive if a is later)."""
    return (a - b).days


def add_days(key: date, n: int) -> date:
    return key + timedelta(days=n)


def is_future(key: date, today_: date | None = None) -> bool:
    return key > (today_ or today())


def start_of_week(key: date) -> date:
    """Most recent Sunday at or before key."""
    # date.weekday(): Monday=0 .. Sunday=6
    return key - timedelta(days=(key.weekday() + 1) % 7)


def validate_log_day(value: str | None, today_: date | None = None, max_age_days: int = MAX_LOG_AGE_DAYS) -> date:
    """
    Date policy for logging a day: empty means today, future days and days
    more than max_age_days back are rejected.
    """
    current = today_ or today()
    if not value:
        return current

    d = parse(value)
    if d > current:
        raise FutureDate()
    if d < add_days(current, -max_age_days):
        raise TooOld(f"Cannot log dates more than {max_age_days} days in the past")
    return d
