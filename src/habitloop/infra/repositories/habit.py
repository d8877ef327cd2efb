"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ...logging_config import get_logger
from ...models.habit import DEFAULT_CATEGORY, Habit, HabitCompletion
from ...services.calendar import date_key
from ...services.validation import validate_date_key, validate_habit_fields
from ..database import SessionFactory

logger = get_logger(__name__)


def _key(on: date | datetime | str) -> str:
    if isinstance(on, str):
        return validate_date_key(on)
    return date_key(on)


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_habits(self, include_archived: bool = True) -> list[Habit]:
        """List habits ordered by creation, optionally without archived ones."""
        with self.session_factory() as session:
            statement = select(Habit).order_by(Habit.created_at, Habit.title)  # type: ignore[arg-type]
            if not include_archived:
                statement = statement.where(Habit.archived == False)  # noqa: E712
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.get(Habit, habit_id)
            if obj:
                session.expunge(obj)
            return obj

    def save_habit(self, habit: Habit) -> Habit:
        """Create a habit or update the stored row with the same id."""
        fields = validate_habit_fields(
            title=habit.title,
            days_of_week=habit.days_of_week or [],
            reminder_time=habit.reminder_time,
            category=habit.category,
        )
        with self.session_factory() as session:
            existing = session.get(Habit, habit.id) if habit.id else None
            if existing:
                existing.title = fields["title"]
                existing.description = habit.description
                existing.days_of_week = fields["days_of_week"]
                existing.reminder_time = fields["reminder_time"]
                existing.archived = bool(habit.archived)
                # An update that omits the category keeps the stored one.
                existing.category = (
                    fields["category"] if habit.category else existing.category or DEFAULT_CATEGORY
                )
                existing.updated_at = datetime.now(timezone.utc)
                target = existing
                action = "updated"
            else:
                for name, value in fields.items():
                    setattr(habit, name, value)
                habit.archived = bool(habit.archived)
                target = habit
                action = "created"
            session.add(target)
            session.commit()
            session.refresh(target)
            session.expunge(target)
        logger.info(
            "Habit %s: %s",
            action,
            target.title,
            extra={"habit_id": target.id, "days_of_week": target.days_of_week, "category": target.category},
        )
        return target

    def delete_habit(self, habit_id: str) -> None:
        """Delete a habit and every completion recorded for it."""
        with self.session_factory() as session:
            entries = session.exec(
                select(HabitCompletion).where(HabitCompletion.habit_id == habit_id)
            ).all()
            for entry in entries:
                session.delete(entry)
            habit = session.get(Habit, habit_id)
            if habit:
                session.delete(habit)
            session.commit()
        logger.info("Habit deleted", extra={"habit_id": habit_id})

    # Completion operations
    def list_completions(
        self, on: date | str | None = None, habit_id: str | None = None
    ) -> list[HabitCompletion]:
        """List completions ordered by day, optionally filtered by day and habit."""
        with self.session_factory() as session:
            statement = select(HabitCompletion)
            if on is not None:
                statement = statement.where(HabitCompletion.date == _key(on))
            if habit_id is not None:
                statement = statement.where(HabitCompletion.habit_id == habit_id)
            statement = statement.order_by(HabitCompletion.date)  # type: ignore[arg-type]
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def _find_completion(self, session, habit_id: str, key: str) -> Optional[HabitCompletion]:
        return session.exec(
            select(HabitCompletion)
            .where(HabitCompletion.habit_id == habit_id)
            .where(HabitCompletion.date == key)
        ).first()

    def mark_complete(self, habit_id: str, on: date | str) -> HabitCompletion:
        """Record a completion; an existing one for the same day is returned as-is."""
        key = _key(on)
        with self.session_factory() as session:
            existing = self._find_completion(session, habit_id, key)
            if existing:
                session.expunge(existing)
                return existing
            entry = HabitCompletion(habit_id=habit_id, date=key)
            session.add(entry)
            try:
                session.commit()
            except IntegrityError:
                # Another writer recorded the same day first.
                session.rollback()
                existing = self._find_completion(session, habit_id, key)
                if existing is None:
                    raise
                session.expunge(existing)
                return existing
            session.refresh(entry)
            session.expunge(entry)
        logger.info("Habit completed", extra={"habit_id": habit_id, "date": key})
        return entry

    def unmark_complete(self, habit_id: str, on: date | str) -> None:
        """Remove the completion for that day, if any."""
        key = _key(on)
        with self.session_factory() as session:
            entry = self._find_completion(session, habit_id, key)
            if entry:
                session.delete(entry)
                session.commit()
                logger.info("Habit completion removed", extra={"habit_id": habit_id, "date": key})

    def clear_all(self) -> None:
        """Delete every habit and completion."""
        with self.session_factory() as session:
            for entry in session.exec(select(HabitCompletion)).all():
                session.delete(entry)
            for habit in session.exec(select(Habit)).all():
                session.delete(habit)
            session.commit()
        logger.warning("All habit data cleared")


__all__ = ["SQLModelHabitRepository"]
