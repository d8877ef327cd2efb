"""SQLModel table exports."""

from .habit import DEFAULT_CATEGORY, Habit, HabitCategory, HabitCompletion
from .settings import AppSetting

__all__ = [
    "AppSetting",
    "DEFAULT_CATEGORY",
    "Habit",
    "HabitCategory",
    "HabitCompletion",
]
