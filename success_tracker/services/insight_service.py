"""
insight_service.py — Insight card
Bundles streaks, the weekly trend and the success rate, and picks the
motivational message shown with them.
"""

from collections.abc import Mapping
from datetime import date

from success_tracker import datekey
from success_tracker.services.log_collection import normalize
from success_tracker.services.streak_service import current_streak, best_streak
from success_tracker.services.trend_service import weekly_trend, success_rate

MESSAGES = {
    "month": "Incredible! A month of consistency. You're unstoppable! 🏆",
    "two_weeks": "Two weeks strong! You're building real momentum. 🚀",
    "one_week": "One week streak! Habits are forming. Keep it up! ⭐",
    "three_days": "Three days in a row! You're on a roll. 🔥",
    "great_start": "Great start today! Every journey begins with a single step.",
    "momentum": "Your week is trending up! Keep the momentum going.",
    "strong_record": "Strong track record! You're doing great overall.",
    "ready_to_log": "Ready to log today? Small wins add up to big results.",
    "encouragement": "Every day is a fresh opportunity. You've got this! 💪",
}


def _stat(stats, name: str, default=None):
    if isinstance(stats, Mapping):
        return stats.get(name, default)
    return getattr(stats, name, default)


def message(streak: int, stats) -> str:
    """
    First matching rule wins; the order matters because the bands overlap.
    `stats` needs direction, success_rate and this_week_total.
    """
    if streak >= 30:
        return MESSAGES["month"]
    if streak >= 14:
        return MESSAGES["two_weeks"]
    if streak >= 7:
        return MESSAGES["one_week"]
    if streak >= 3:
        return MESSAGES["three_days"]
    if streak == 1:
        return MESSAGES["great_start"]
    if _stat(stats, "direction") == "up":
        return MESSAGES["momentum"]
    if _stat(stats, "success_rate", 0) >= 70:
        return MESSAGES["strong_record"]
    if _stat(stats, "this_week_total", 0) == 0:
        return MESSAGES["ready_to_log"]
    return MESSAGES["encouragement"]


def summarize(logs, today: date | None = None) -> dict:
    """Everything the insights card shows, computed from one log collection."""
    today = today or datekey.today()
    entries = normalize(logs)

    streak = current_streak(entries, today=today)
    stats = weekly_trend(entries, today=today)
    stats["success_rate"] = success_rate(entries)
    stats["current_streak"] = streak
    stats["best_streak"] = best_streak(entries)
    stats["total_logs"] = len(entries)
    stats["message"] = message(streak, stats)
    return stats
