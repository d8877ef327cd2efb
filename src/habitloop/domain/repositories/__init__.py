"""Repository protocol definitions for domain layer."""

from ...services.settings import SettingsRepository
from .habit import HabitRepository

__all__ = ["HabitRepository", "SettingsRepository"]
