"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

ALLOWED_GRACE_DAYS = (0, 1, 2)
STREAK_MODES = ("strict", "lenient")


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, rejecting garbage early."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitLoop"
    DB_FILENAME = "habitloop.db"
    DEFAULT_MAX_LOOKBACK_DAYS = 365

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITLOOP_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("HABITLOOP_DATABASE_URL", self._build_sqlite_url())
        self.MAX_LOOKBACK_DAYS = _env_int(
            "HABITLOOP_MAX_LOOKBACK_DAYS", self.DEFAULT_MAX_LOOKBACK_DAYS
        )
        if self.MAX_LOOKBACK_DAYS <= 0:
            raise ValueError("HABITLOOP_MAX_LOOKBACK_DAYS must be positive.")
        # Used only until the user stores their own streak settings.
        self.DEFAULT_GRACE_DAYS = _env_int("HABITLOOP_GRACE_DAYS", 0)
        self.DEFAULT_STREAK_MODE = os.getenv("HABITLOOP_STREAK_MODE", "strict").strip().lower()
        if self.DEFAULT_GRACE_DAYS not in ALLOWED_GRACE_DAYS:
            raise ValueError(f"HABITLOOP_GRACE_DAYS must be one of {ALLOWED_GRACE_DAYS}.")
        if self.DEFAULT_STREAK_MODE not in STREAK_MODES:
            raise ValueError(f"HABITLOOP_STREAK_MODE must be one of {STREAK_MODES}.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("HABITLOOP_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to per-user storage.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            engine_options["connect_args"] = {"check_same_thread": False}
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False
