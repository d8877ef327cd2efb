"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import Habit, HabitCompletion


class HabitRepository(Protocol):
    """Storage for habits and their daily completions."""

    def list_habits(self, include_archived: bool = True) -> list[Habit]:
        """List habits, optionally leaving out archived ones."""
        ...

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def save_habit(self, habit: Habit) -> Habit:
        """Create a habit or update an existing one."""
        ...

    def delete_habit(self, habit_id: str) -> None:
        """Delete a habit and its completions."""
        ...

    # Completion operations
    def list_completions(
        self, on: date | str | None = None, habit_id: str | None = None
    ) -> list[HabitCompletion]:
        """List completions, optionally for one day and/or one habit."""
        ...

    def mark_complete(self, habit_id: str, on: date | str) -> HabitCompletion:
        """Record a completion; marking the same day twice returns the existing row."""
        ...

    def unmark_complete(self, habit_id: str, on: date | str) -> None:
        """Remove a completion if present."""
        ...

    def clear_all(self) -> None:
        """Delete every habit and completion."""
        ...
