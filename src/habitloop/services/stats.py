"""Completion-rate and daily progress figures built on the engine primitives."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable

from ..models.habit import Habit, HabitCompletion
from .calendar import date_key, days_back, start_of_day
from .recurrence import is_due
from .streaks import completion_keys


@dataclass(slots=True)
class DailyProgress:
    """Today's checklist split the way the daily view shows it."""

    day: date
    essentials: list[Habit] = field(default_factory=list)
    others: list[Habit] = field(default_factory=list)
    completed_ids: set[str] = field(default_factory=set)

    @property
    def essentials_done(self) -> int:
        return sum(1 for habit in self.essentials if habit.id in self.completed_ids)

    @property
    def essential_percent(self) -> int:
        if not self.essentials:
            return 0
        return round(self.essentials_done / len(self.essentials) * 100)

    @property
    def all_essentials_done(self) -> bool:
        return bool(self.essentials) and self.essentials_done == len(self.essentials)


def completion_rate(
    habit: Habit,
    completions: Iterable[HabitCompletion],
    reference_date: date | datetime | None = None,
    *,
    window_days: int = 7,
) -> int:
    """Percentage of due days in the last ``window_days`` days that were completed.

    The window ends at ``reference_date`` inclusive. Returns 0 when nothing was
    due in the window.
    """

    if window_days <= 0:
        return 0
    today = start_of_day(reference_date or date.today())
    completed = completion_keys(habit, completions)
    due_days = [day for day in days_back(today, window_days) if is_due(habit, day)]
    if not due_days:
        return 0
    hits = sum(1 for day in due_days if date_key(day) in completed)
    return min(100, round(hits / len(due_days) * 100))


def daily_progress(
    habits: Iterable[Habit],
    completions: Iterable[HabitCompletion],
    reference_date: date | datetime | None = None,
) -> DailyProgress:
    today = start_of_day(reference_date or date.today())
    key = date_key(today)
    progress = DailyProgress(day=today)
    for habit in habits:
        if habit.archived or not is_due(habit, today):
            continue
        if habit.is_essential:
            progress.essentials.append(habit)
        else:
            progress.others.append(habit)
    scheduled = {habit.id for habit in progress.essentials + progress.others}
    progress.completed_ids = {
        entry.habit_id for entry in completions if entry.date == key and entry.habit_id in scheduled
    }
    return progress


__all__ = ["DailyProgress", "completion_rate", "daily_progress"]
