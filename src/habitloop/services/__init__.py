"""Recurrence and streak engine exports."""

from . import aggregate, calendar, day_status, recurrence, settings, stats, streaks, validation
from .aggregate import aggregate_streak
from .day_status import CompletionIndex, DayStatus, resolve_day_status
from .recurrence import is_due
from .streaks import StreakPolicy, StreakResult, calculate_streak

__all__ = [
    "CompletionIndex",
    "DayStatus",
    "StreakPolicy",
    "StreakResult",
    "aggregate",
    "aggregate_streak",
    "calculate_streak",
    "calendar",
    "day_status",
    "is_due",
    "recurrence",
    "resolve_day_status",
    "settings",
    "stats",
    "streaks",
    "validation",
]
