"""Weekly recurrence checks for habits."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..models.habit import Habit
from .calendar import iter_days, start_of_day, weekday_index

DAYS_PER_WEEK = 7


def is_due(habit: Habit, on: date | datetime) -> bool:
    """Return True when ``on`` falls on one of the habit's scheduled weekdays.

    Schedule only: archived habits still report their weekdays, callers filter
    on ``archived`` themselves.
    """

    return weekday_index(on) in habit.days_of_week


def next_due_date(habit: Habit, start: date | datetime) -> Optional[date]:
    """First due day in the week starting at ``start``, or None for an empty schedule."""

    day = start_of_day(start)
    for offset in range(DAYS_PER_WEEK):
        candidate = day + timedelta(days=offset)
        if is_due(habit, candidate):
            return candidate
    return None


def due_dates_between(habit: Habit, start: date, end: date) -> list[date]:
    """All due days in ``[start, end]``, oldest first."""

    return [day for day in iter_days(start_of_day(start), start_of_day(end)) if is_due(habit, day)]


__all__ = ["DAYS_PER_WEEK", "due_dates_between", "is_due", "next_due_date"]
