"""
trend_service.py — Win-rate trends
Week-over-week comparison, the running win rate over a trailing window,
the all-time success rate and the last-N-days strip.
"""

from datetime import date

from success_tracker import datekey
from success_tracker.services.log_collection import normalize, by_day

TREND_THRESHOLD = 0.1  # rate change needed before a week counts as up/down
WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def _percent(wins: int, total: int) -> int:
    """100 * wins / total rounded half-up; 0 when total is 0."""
    if total <= 0:
        return 0
    return (200 * wins + total) // (2 * total)


def _direction(this_rate: float, last_rate: float) -> str:
    if this_rate > last_rate + TREND_THRESHOLD:
        return "up"
    if this_rate < last_rate - TREND_THRESHOLD:
        return "down"
    return "same"


def weekly_trend(logs, today: date | None = None) -> dict:
    """Compare this week's win rate (Sunday..today) with the previous 7 days."""
    today = today or datekey.today()
    this_start = datekey.start_of_week(today)
    last_start = datekey.add_days(this_start, -7)

    this_wins = this_total = last_wins = last_total = 0
    for entry in normalize(logs):
        if this_start <= entry.day <= today:
            this_total += 1
            this_wins += entry.outcome
        elif last_start <= entry.day < this_start:
            last_total += 1
            last_wins += entry.outcome

    this_rate = this_wins / this_total if this_total else 0
    last_rate = last_wins / last_total if last_total else 0

    return {
        "week_start": datekey.format_key(this_start),
        "this_week_wins": this_wins,
        "this_week_total": this_total,
        "last_week_wins": last_wins,
        "last_week_total": last_total,
        "direction": _direction(this_rate, last_rate),
    }


def rolling_win_rate(logs, window_days: int = 30, today: date | None = None) -> list[dict]:
    """
    One point per day of the trailing window, oldest first. Each point holds
    the win rate accumulated from the window start up to that day.
    """
    if window_days < 1:
        raise ValueError("window_days must be at least 1")

    today = today or datekey.today()
    outcomes = by_day(logs)

    series = []
    wins = total = 0
    for offset in range(window_days - 1, -1, -1):
        day = datekey.add_days(today, -offset)
        if day in outcomes:
            total += 1
            wins += outcomes[day]
        series.append({
            "day": datekey.format_key(day),
            "win_rate": _percent(wins, total),
            "wins": wins,
            "total": total,
        })
    return series


def success_rate(logs) -> int:
    """All-time percentage of logged days that were wins."""
    entries = normalize(logs)
    return _percent(sum(e.outcome for e in entries), len(entries))


def recent_days(logs, days: int = 7, today: date | None = None) -> list[dict]:
    """Last `days` calendar days, oldest first; outcome is None when not logged."""
    if days < 1:
        raise ValueError("days must be at least 1")

    today = today or datekey.today()
    outcomes = by_day(logs)
    cells = []
    for offset in range(days - 1, -1, -1):
        day = datekey.add_days(today, -offset)
        cells.append({
            "day": datekey.format_key(day),
            "label": WEEKDAY_LABELS[day.weekday()],
            "outcome": outcomes.get(day),
            "is_today": offset == 0,
        })
    return cells
