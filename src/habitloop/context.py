"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import BaseConfig
from .domain.repositories import HabitRepository, SettingsRepository
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import SQLModelHabitRepository, SQLModelSettingsRepository
from .services.settings import StreakSettings, load_streak_settings
from .services.streaks import StreakPolicy


@dataclass
class AppContext:
    """Configuration plus the storage handles the engine's callers need."""

    config: BaseConfig
    session_factory: SessionFactory
    habit_repo: HabitRepository
    settings_repo: SettingsRepository

    def config_defaults(self) -> StreakSettings:
        """Streak settings from the environment, used until the user saves their own."""

        return StreakSettings(
            grace_days=self.config.DEFAULT_GRACE_DAYS,
            streak_mode=self.config.DEFAULT_STREAK_MODE,
        )

    def streak_settings(self) -> StreakSettings:
        return load_streak_settings(self.settings_repo, defaults=self.config_defaults())

    def streak_policy(self) -> StreakPolicy:
        return StreakPolicy.from_settings(self.streak_settings())


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, schema and repositories for one process."""

    if config is None:
        config = BaseConfig()

    _, session_factory = bootstrap_database(config)
    return AppContext(
        config=config,
        session_factory=session_factory,
        habit_repo=SQLModelHabitRepository(session_factory),
        settings_repo=SQLModelSettingsRepository(session_factory),
    )
