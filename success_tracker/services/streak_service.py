"""
streak_service.py — Current and best win streaks over a user's day logs.
"""

from datetime import date

from success_tracker import datekey
from success_tracker.services.log_collection import normalize


def current_streak(logs, today: date | None = None) -> int:
    """
    Consecutive wins ending today, counted backward.
    A loss or a day with no log breaks the streak.
    """
    today = today or datekey.today()
    streak = 0
    expected = 0  # offset from today of the next day that must be a win

    for entry in reversed(normalize(logs)):
        diff = datekey.day_difference(today, entry.day)
        if diff < expected:
            continue  # logged after today
        if diff > expected or not entry.outcome:
            break
        streak += 1
        expected += 1

    return streak


def best_streak(logs) -> int:
    """Longest run of wins on consecutive calendar days."""
    best = 0
    current = 0
    last_win_day = None

    for entry in normalize(logs):
        if not entry.outcome:
            current = 0
            last_win_day = None
            continue

        if last_win_day is not None and datekey.day_difference(entry.day, last_win_day) == 1:
            current += 1
        else:
            current = 1
        best = max(best, current)
        last_win_day = entry.day

    return best
