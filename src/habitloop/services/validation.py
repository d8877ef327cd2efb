"""Boundary checks for habit and completion records.

The engine trusts its inputs; these run before a record is built or written.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from ..models.habit import HabitCategory
from .calendar import parse_date_key

_REMINDER_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_CATEGORIES = {category.value for category in HabitCategory}


def validate_date_key(key: str) -> str:
    """Return ``key`` unchanged if it is a real ``YYYY-MM-DD`` date."""

    parse_date_key(key)
    return key


def normalize_days_of_week(days: Iterable[int]) -> list[int]:
    """Sorted, de-duplicated weekday indices; rejects anything outside 0-6."""

    normalized: set[int] = set()
    for day in days:
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
            raise ValueError(f"Weekday must be an integer 0-6 (0=Sunday), got {day!r}")
        normalized.add(day)
    return sorted(normalized)


def validate_habit_fields(
    *,
    title: str,
    days_of_week: Iterable[int],
    reminder_time: Optional[str] = None,
    category: Optional[str] = None,
) -> dict:
    """Validate user-supplied habit fields and return them normalized."""

    title = (title or "").strip()
    if not title:
        raise ValueError("Habit title cannot be empty")
    if len(title) > 80:
        raise ValueError("Habit title must be at most 80 characters")

    if reminder_time is not None:
        reminder_time = reminder_time.strip() or None
    if reminder_time is not None and not _REMINDER_RE.match(reminder_time):
        raise ValueError(f"Reminder time must be HH:MM, got {reminder_time!r}")

    category = (category or HabitCategory.ESSENTIAL.value).strip().lower()
    if category not in _CATEGORIES:
        raise ValueError(f"Invalid category: {category}")

    return {
        "title": title,
        "days_of_week": normalize_days_of_week(days_of_week),
        "reminder_time": reminder_time,
        "category": category,
    }


__all__ = ["normalize_days_of_week", "validate_date_key", "validate_habit_fields"]
