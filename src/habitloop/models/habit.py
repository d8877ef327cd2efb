"""Habit tracking data structures."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Optional
from uuid import uuid4

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel


def _new_id() -> str:
    return uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HabitCategory(str, Enum):
    """How a habit participates in streak continuity."""

    ESSENTIAL = "essential"
    FLEXIBLE = "flexible"
    WEEKLY = "weekly"


DEFAULT_CATEGORY = HabitCategory.ESSENTIAL.value


class Habit(SQLModel, table=True):
    """A user-defined habit scheduled on a subset of weekdays (0=Sunday)."""

    __tablename__: ClassVar[str] = "habit"

    id: str = Field(default_factory=_new_id, primary_key=True, max_length=32)
    title: str = Field(nullable=False, max_length=80, index=True)
    description: Optional[str] = Field(default=None, max_length=255)
    days_of_week: list[int] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    reminder_time: Optional[str] = Field(default=None, max_length=5)
    archived: bool = Field(default=False, nullable=False)
    category: str = Field(
        default=DEFAULT_CATEGORY,
        nullable=False,
        max_length=16,
        sa_column_kwargs={"server_default": DEFAULT_CATEGORY},
    )
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)

    @property
    def is_essential(self) -> bool:
        return self.category == HabitCategory.ESSENTIAL.value


class HabitCompletion(SQLModel, table=True):
    """A habit marked done on one calendar day."""

    __tablename__: ClassVar[str] = "habit_completion"
    __table_args__ = (
        UniqueConstraint("habit_id", "date", name="uq_habit_completion_day"),
    )

    id: str = Field(default_factory=_new_id, primary_key=True, max_length=32)
    # Weak reference: completions can outlive a habit row until cleanup.
    habit_id: str = Field(nullable=False, index=True, max_length=32)
    date: str = Field(nullable=False, index=True, max_length=10)
    completed_at: datetime = Field(default_factory=_utcnow, nullable=False)
