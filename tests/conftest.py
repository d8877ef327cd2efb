"""Pytest configuration and shared fixtures for HabitLoop tests.

Engine tests build habits and completions in memory; repository and CLI tests
get an isolated temporary SQLite database.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from habitloop.infra.database import create_session_factory
from habitloop.models import Habit, HabitCompletion
from habitloop.services.calendar import date_key

EVERY_DAY = [0, 1, 2, 3, 4, 5, 6]


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what the repositories expect."""

    return create_session_factory(db_engine)


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Point the CLI's configuration at a throwaway data directory."""

    monkeypatch.setenv("HABITLOOP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("HABITLOOP_DEV_MODE", "false")
    monkeypatch.delenv("HABITLOOP_DATABASE_URL", raising=False)
    monkeypatch.delenv("HABITLOOP_GRACE_DAYS", raising=False)
    monkeypatch.delenv("HABITLOOP_STREAK_MODE", raising=False)
    monkeypatch.delenv("HABITLOOP_MAX_LOOKBACK_DAYS", raising=False)
    yield tmp_path

    # The CLI attaches handlers bound to the runner's streams; drop them.
    package_logger = logging.getLogger("habitloop")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory():
    """Factory for in-memory habits.

    Returns:
        Callable: Function that builds Habit instances (not persisted)
    """

    def _create_habit(
        title: str = "Test Habit",
        days_of_week: list[int] | None = None,
        category: str = "essential",
        archived: bool = False,
        habit_id: str | None = None,
    ) -> Habit:
        habit = Habit(
            title=title,
            days_of_week=list(EVERY_DAY if days_of_week is None else days_of_week),
            category=category,
            archived=archived,
        )
        if habit_id is not None:
            habit.id = habit_id
        return habit

    return _create_habit


@pytest.fixture
def completions_for():
    """Build completion records for a habit on the given days or date keys."""

    def _completions(habit: Habit, days) -> list[HabitCompletion]:
        return [
            HabitCompletion(
                habit_id=habit.id,
                date=day if isinstance(day, str) else date_key(day),
            )
            for day in days
        ]

    return _completions
