"""Streak calculation for weekday-scheduled habits.

The current streak is found by walking backward one day at a time from the
reference date:

- days the habit is not scheduled on are skipped,
- an incomplete reference day is skipped without counting (the user still has
  the rest of the day), unless the policy turns that off,
- a completed due day extends the streak,
- an incomplete due day ends it, unless grace days absorb the miss. Two
  misses in a row on due days are never both absorbed.

The walk is bounded by ``max_lookback_days`` so habits that were never
completed (or never scheduled) still finish in constant time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from ..logging_config import get_logger
from ..models.habit import Habit, HabitCompletion
from .calendar import date_key, start_of_day
from .recurrence import DAYS_PER_WEEK, is_due, next_due_date
from .settings import StreakMode, StreakSettings

logger = get_logger(__name__)

MAX_LOOKBACK_DAYS = 365
ONE_DAY = timedelta(days=1)


@dataclass(frozen=True, slots=True)
class StreakPolicy:
    """Knobs that change how misses are treated during the walk."""

    grace_days: int = 0
    forgive_pending_today: bool = True

    @classmethod
    def from_settings(cls, settings: StreakSettings) -> "StreakPolicy":
        """Strict mode never forgives, lenient mode forgives ``grace_days`` per week."""

        if settings.streak_mode == StreakMode.STRICT:
            return cls(grace_days=0)
        return cls(grace_days=settings.grace_days)


DEFAULT_POLICY = StreakPolicy()


@dataclass(frozen=True, slots=True)
class StreakResult:
    """Outcome of a backward streak walk."""

    count: int = 0
    last_completion: Optional[str] = None
    broken_on: Optional[str] = None
    forgiven: tuple[str, ...] = field(default_factory=tuple)


def completion_keys(habit: Habit, completions: Iterable[HabitCompletion]) -> set[str]:
    """Date keys on which ``habit`` was completed."""

    return {entry.date for entry in completions if entry.habit_id == habit.id}


def _absorb_miss(day: date, forgiven: list[date], grace_days: int) -> bool:
    """Forgive ``day`` if fewer than ``grace_days`` misses were forgiven in its week.

    ``forgiven`` holds days newer than ``day``; only those inside the 7-day
    window starting at ``day`` count against the allowance.
    """

    if grace_days <= 0:
        return False
    window_end = day + timedelta(days=DAYS_PER_WEEK - 1)
    used = sum(1 for other in forgiven if other <= window_end)
    if used >= grace_days:
        return False
    forgiven.append(day)
    return True


def calculate_streak(
    habit: Habit,
    completions: Iterable[HabitCompletion],
    reference_date: date | datetime | None = None,
    *,
    max_lookback_days: int = MAX_LOOKBACK_DAYS,
    policy: StreakPolicy | None = None,
) -> StreakResult:
    """Count consecutive completed due days ending at ``reference_date``.

    Args:
        habit: Habit whose schedule is walked
        completions: Completion records; entries for other habits are ignored
        reference_date: Day to walk back from (defaults to today)
        max_lookback_days: Upper bound on the number of days inspected
        policy: Today-exception and grace-day behaviour

    Returns:
        StreakResult with the count, the most recent counted day and the day
        the streak was broken on (None when the window ran out first)
    """
    policy = policy or DEFAULT_POLICY
    today = start_of_day(reference_date or date.today())
    completed = completion_keys(habit, completions)

    cursor = today
    count = 0
    last_completion: Optional[str] = None
    forgiven: list[date] = []
    previous_forgiven = False

    for _ in range(max_lookback_days):
        if not is_due(habit, cursor):
            cursor -= ONE_DAY
            continue

        key = date_key(cursor)
        done = key in completed

        if not done and cursor == today and policy.forgive_pending_today:
            # Today is still in progress.
            cursor -= ONE_DAY
            continue

        if not done:
            if not previous_forgiven and _absorb_miss(cursor, forgiven, policy.grace_days):
                previous_forgiven = True
                cursor -= ONE_DAY
                continue
            logger.debug(
                "Streak for habit %s broken on %s after %d day(s)", habit.id, key, count
            )
            return StreakResult(
                count=count,
                last_completion=last_completion,
                broken_on=key,
                forgiven=tuple(date_key(day) for day in forgiven),
            )

        count += 1
        previous_forgiven = False
        if last_completion is None:
            last_completion = key
        cursor -= ONE_DAY

    return StreakResult(
        count=count,
        last_completion=last_completion,
        forgiven=tuple(date_key(day) for day in forgiven),
    )


def is_streak_broken(
    habit: Habit,
    completions: Iterable[HabitCompletion],
    reference_date: date | datetime | None = None,
    *,
    policy: StreakPolicy | None = None,
) -> bool:
    """True when a scheduled habit has no streak left to protect.

    Habits with no weekday in their schedule are never considered broken.
    """

    today = start_of_day(reference_date or date.today())
    if next_due_date(habit, today) is None:
        return False
    result = calculate_streak(habit, completions, today, policy=policy)
    return result.last_completion is None


def longest_streak(
    habit: Habit,
    completions: Iterable[HabitCompletion],
    reference_date: date | datetime | None = None,
    *,
    max_lookback_days: int = MAX_LOOKBACK_DAYS,
) -> int:
    """Longest run of consecutive completed due days within the lookback window."""

    today = start_of_day(reference_date or date.today())
    completed = completion_keys(habit, completions)

    longest = 0
    run = 0
    cursor = today - timedelta(days=max_lookback_days - 1)
    while cursor <= today:
        if is_due(habit, cursor):
            if date_key(cursor) in completed:
                run += 1
                longest = max(longest, run)
            elif cursor != today:
                run = 0
        cursor += ONE_DAY
    return longest


__all__ = [
    "DEFAULT_POLICY",
    "MAX_LOOKBACK_DAYS",
    "StreakPolicy",
    "StreakResult",
    "calculate_streak",
    "completion_keys",
    "is_streak_broken",
    "longest_streak",
]
