"""Headline streak across all essential habits."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from typing import Iterable

from ..logging_config import get_logger
from ..models.habit import Habit, HabitCompletion
from .streaks import MAX_LOOKBACK_DAYS, StreakPolicy, calculate_streak

logger = get_logger(__name__)


def group_by_habit(completions: Iterable[HabitCompletion]) -> dict[str, list[HabitCompletion]]:
    grouped: dict[str, list[HabitCompletion]] = defaultdict(list)
    for entry in completions:
        grouped[entry.habit_id].append(entry)
    return grouped


def aggregate_streak(
    habits: Iterable[Habit],
    completions: Iterable[HabitCompletion],
    reference_date: date | datetime | None = None,
    *,
    max_lookback_days: int = MAX_LOOKBACK_DAYS,
    policy: StreakPolicy | None = None,
) -> int:
    """Weakest-link streak: the minimum per-habit streak over active essential habits.

    Returns 0 when there is no active essential habit.
    """

    essentials = [habit for habit in habits if not habit.archived and habit.is_essential]
    if not essentials:
        return 0

    by_habit = group_by_habit(completions)
    counts = {
        habit.id: calculate_streak(
            habit,
            by_habit.get(habit.id, []),
            reference_date,
            max_lookback_days=max_lookback_days,
            policy=policy,
        ).count
        for habit in essentials
    }
    headline = min(counts.values())
    logger.debug("Aggregate streak %d over %d essential habit(s)", headline, len(counts))
    return headline


__all__ = ["aggregate_streak", "group_by_habit"]
