"""Application configuration objects and helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from .models.habit import WEEK_STARTS_MONDAY, WEEK_STARTS_SUNDAY

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, rejecting junk values."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "streakwise"
    MIN_LOOKBACK_DAYS = 30
    MAX_LOOKBACK_DAYS = 400

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("STREAKWISE_DEV_MODE", default=True)
        self.LOG_LEVEL = self._resolve_log_level()
        self.TIMEZONE = os.getenv("STREAKWISE_TIMEZONE", "").strip() or None
        self.WEEK_STARTS_ON = self._resolve_week_start()
        self.SKIPPED_BREAKS_STREAK = _env_bool("STREAKWISE_SKIPPED_BREAKS_STREAK", default=False)
        self.STREAK_LOOKBACK_DAYS = self._resolve_lookback()

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs and local state are written."""

        data_root = os.getenv("STREAKWISE_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _resolve_log_level(self) -> int:
        name = os.getenv("STREAKWISE_LOG_LEVEL", "INFO").strip().upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"STREAKWISE_LOG_LEVEL must be a logging level name, got {name!r}")
        return level

    def _resolve_week_start(self) -> int:
        raw = os.getenv("STREAKWISE_WEEK_STARTS_ON", "").strip().lower()
        if raw in {"", "1", "monday"}:
            return WEEK_STARTS_MONDAY
        if raw in {"0", "sunday"}:
            return WEEK_STARTS_SUNDAY
        raise ValueError(f"STREAKWISE_WEEK_STARTS_ON must be monday or sunday, got {raw!r}")

    def _resolve_lookback(self) -> int:
        days = _env_int("STREAKWISE_STREAK_LOOKBACK_DAYS", 120)
        return max(self.MIN_LOOKBACK_DAYS, min(self.MAX_LOOKBACK_DAYS, days))


class DevConfig(BaseConfig):
    """Development configuration."""

    DEBUG = True
    TESTING = False
