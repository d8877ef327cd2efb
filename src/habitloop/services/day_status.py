"""Calendar day classification over essential habits."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Mapping, Union

from ..models.habit import Habit, HabitCompletion
from .calendar import date_key, month_grid, start_of_day
from .recurrence import is_due


class DayStatus(str, Enum):
    """Colour bucket of a calendar cell."""

    NONE = "none"
    FULL = "full"
    PARTIAL = "partial"
    MISSED = "missed"


class CompletionIndex:
    """Date key -> ids of habits completed that day.

    Built once per calendar page so each cell lookup only touches that day's
    completions.
    """

    __slots__ = ("_by_day",)

    def __init__(self, by_day: Mapping[str, frozenset[str]]):
        self._by_day = dict(by_day)

    @classmethod
    def build(cls, completions: Iterable[HabitCompletion]) -> "CompletionIndex":
        grouped: dict[str, set[str]] = defaultdict(set)
        for entry in completions:
            grouped[entry.date].add(entry.habit_id)
        return cls({key: frozenset(ids) for key, ids in grouped.items()})

    def completed_on(self, on: date | datetime | str) -> frozenset[str]:
        key = on if isinstance(on, str) else date_key(on)
        return self._by_day.get(key, frozenset())


CompletionSource = Union[CompletionIndex, Iterable[HabitCompletion]]


@dataclass(slots=True)
class CalendarDay:
    """One cell of a month page."""

    day: date
    status: DayStatus
    in_month: bool


@dataclass(slots=True)
class MonthSummary:
    """Counts shown under the month calendar (in-month days only)."""

    full: int = 0
    partial: int = 0
    missed: int = 0


def _as_index(completions: CompletionSource) -> CompletionIndex:
    if isinstance(completions, CompletionIndex):
        return completions
    return CompletionIndex.build(completions)


def essential_habits_due(on: date | datetime, habits: Iterable[Habit]) -> list[Habit]:
    """Non-archived essential habits scheduled on ``on``."""

    return [
        habit
        for habit in habits
        if not habit.archived and habit.is_essential and is_due(habit, on)
    ]


def resolve_day_status(
    on: date | datetime, habits: Iterable[Habit], completions: CompletionSource
) -> DayStatus:
    """Classify ``on`` as none/full/partial/missed over the essential habits due that day."""

    due = essential_habits_due(on, habits)
    if not due:
        return DayStatus.NONE

    completed_ids = _as_index(completions).completed_on(on)
    done = sum(1 for habit in due if habit.id in completed_ids)
    if done == 0:
        return DayStatus.MISSED
    if done == len(due):
        return DayStatus.FULL
    return DayStatus.PARTIAL


def resolve_month(
    year: int, month: int, habits: Iterable[Habit], completions: CompletionSource
) -> list[CalendarDay]:
    """Status for every cell of the Sunday-first month page."""

    habits = list(habits)
    index = _as_index(completions)
    return [
        CalendarDay(
            day=day,
            status=resolve_day_status(day, habits, index),
            in_month=day.month == month,
        )
        for day in month_grid(year, month)
    ]


def summarize_month(days: Iterable[CalendarDay]) -> MonthSummary:
    summary = MonthSummary()
    for cell in days:
        if not cell.in_month:
            continue
        if cell.status == DayStatus.FULL:
            summary.full += 1
        elif cell.status == DayStatus.PARTIAL:
            summary.partial += 1
        elif cell.status == DayStatus.MISSED:
            summary.missed += 1
    return summary


def essentials_for_day(
    on: date | datetime, habits: Iterable[Habit], completions: CompletionSource
) -> list[tuple[Habit, bool]]:
    """Essential habits due on ``on`` paired with whether each was completed."""

    completed_ids = _as_index(completions).completed_on(start_of_day(on))
    return [(habit, habit.id in completed_ids) for habit in essential_habits_due(on, habits)]


__all__ = [
    "CalendarDay",
    "CompletionIndex",
    "DayStatus",
    "MonthSummary",
    "essential_habits_due",
    "essentials_for_day",
    "resolve_day_status",
    "resolve_month",
    "summarize_month",
]
