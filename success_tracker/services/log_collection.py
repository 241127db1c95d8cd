"""
log_collection.py — Normalizes raw log rows for the streak and trend engines.
Rows may be DayLog objects or plain dicts; only `day` and `outcome` are read.
"""

from collections.abc import Iterable, Mapping
from datetime import date
from typing import NamedTuple

from success_tracker import datekey
from success_tracker.errors import DuplicateDay


class LogEntry(NamedTuple):
    day: date
    outcome: bool


def _field(row, name: str):
    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name, None)


def normalize(logs: Iterable) -> list[LogEntry]:
    """
    Return entries sorted by day, oldest first.

    Rows without a day or a boolean outcome are skipped. A malformed day
    string raises InvalidFormat, and two rows for the same day raise
    DuplicateDay.
    """
    entries: dict[date, LogEntry] = {}
    for row in logs or ():
        if row is None:
            continue
        raw_day = _field(row, "day")
        outcome = _field(row, "outcome")
        if raw_day is None or raw_day == "" or not isinstance(outcome, bool):
            continue

        day = datekey.parse(raw_day)
        if day in entries:
            raise DuplicateDay(f"Two logs for {datekey.format_key(day)}")
        entries[day] = LogEntry(day, outcome)

    return [entries[d] for d in sorted(entries)]


def by_day(logs: Iterable) -> dict[date, bool]:
    """Map of day -> outcome for membership lookups."""
    return {e.day: e.outcome for e in normalize(logs)}
