"""User-configurable streak policy settings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from ..config import ALLOWED_GRACE_DAYS
from ..logging_config import get_logger
from ..models.settings import AppSetting

logger = get_logger(__name__)

GRACE_DAYS_KEY = "streak.grace_days"
STREAK_MODE_KEY = "streak.mode"


class StreakMode(str, Enum):
    """Strict ignores grace days entirely, lenient honours them."""

    STRICT = "strict"
    LENIENT = "lenient"


@dataclass(frozen=True, slots=True)
class StreakSettings:
    """Grace-day tolerance and streak mode chosen by the user."""

    grace_days: int = 0
    streak_mode: StreakMode = StreakMode.STRICT

    def __post_init__(self) -> None:
        if self.grace_days not in ALLOWED_GRACE_DAYS:
            raise ValueError(
                f"grace_days must be one of {ALLOWED_GRACE_DAYS}, got {self.grace_days!r}"
            )
        try:
            mode = StreakMode(self.streak_mode)
        except ValueError as exc:
            raise ValueError(f"Unknown streak mode: {self.streak_mode!r}") from exc
        object.__setattr__(self, "streak_mode", mode)


DEFAULT_SETTINGS = StreakSettings()


class SettingsRepository(Protocol):
    """Key/value store the settings are persisted in."""

    def get(self, key: str) -> Optional[AppSetting]:  # pragma: no cover - interface
        ...

    def set(
        self, key: str, value: str, description: str | None = None
    ) -> AppSetting:  # pragma: no cover - interface
        ...

    def delete(self, key: str) -> None:  # pragma: no cover - interface
        ...


def load_streak_settings(
    repository: SettingsRepository, *, defaults: StreakSettings = DEFAULT_SETTINGS
) -> StreakSettings:
    """Read stored settings, falling back to ``defaults`` for missing or unreadable rows."""

    grace_row = repository.get(GRACE_DAYS_KEY)
    mode_row = repository.get(STREAK_MODE_KEY)
    grace_days = defaults.grace_days
    streak_mode = defaults.streak_mode
    if grace_row is not None:
        try:
            stored = int(grace_row.value)
        except ValueError:
            stored = None
        if stored in ALLOWED_GRACE_DAYS:
            grace_days = stored
        else:
            logger.warning("Ignoring unreadable grace days setting %r", grace_row.value)
    if mode_row is not None:
        try:
            streak_mode = StreakMode(mode_row.value)
        except ValueError:
            logger.warning("Ignoring unknown streak mode setting %r", mode_row.value)
    return StreakSettings(grace_days=grace_days, streak_mode=streak_mode)


def save_streak_settings(repository: SettingsRepository, settings: StreakSettings) -> StreakSettings:
    """Persist validated settings."""

    repository.set(
        GRACE_DAYS_KEY,
        str(settings.grace_days),
        description="Missed due days forgiven per rolling week (lenient mode)",
    )
    repository.set(
        STREAK_MODE_KEY,
        settings.streak_mode.value,
        description="strict ignores grace days, lenient applies them",
    )
    logger.info(
        "Streak settings saved",
        extra={"grace_days": settings.grace_days, "streak_mode": settings.streak_mode.value},
    )
    return settings


__all__ = [
    "DEFAULT_SETTINGS",
    "SettingsRepository",
    "StreakMode",
    "StreakSettings",
    "load_streak_settings",
    "save_streak_settings",
]
