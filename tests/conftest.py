"""Pytest configuration and shared fixtures for streakwise tests.

Calculations are pinned to a fixed reference day so results never depend on
the wall clock. The reference day is Wednesday 2025-12-31; with Monday-start
weeks the surrounding weeks are:

- current week: Mon 29 Dec - Sun 04 Jan
- last week: Mon 22 Dec - Sun 28 Dec
- week before: Mon 15 Dec - Sun 21 Dec
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable

import pytest

from streakwise.config import BaseConfig
from streakwise.models.habit import Checkin, HabitConfig

TODAY = date(2025, 12, 31)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep config side effects (data dir, env flags) inside the test's tmp dir."""

    monkeypatch.setenv("STREAKWISE_DATA_DIR", str(tmp_path / "data"))
    for name in (
        "STREAKWISE_DEV_MODE",
        "STREAKWISE_LOG_LEVEL",
        "STREAKWISE_TIMEZONE",
        "STREAKWISE_WEEK_STARTS_ON",
        "STREAKWISE_SKIPPED_BREAKS_STREAK",
        "STREAKWISE_STREAK_LOOKBACK_DAYS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def habit_factory():
    """Factory for habit configs; defaults to a simple daily habit."""

    def _create(**overrides) -> HabitConfig:
        return HabitConfig(**overrides)

    return _create


def checkins_for(dates: Iterable[str], *, skipped: bool = False, value=None) -> list[Checkin]:
    """Build check-ins for explicit ``YYYY-MM-DD`` dates."""
    return [Checkin(occurred_on=d, skipped=skipped, value=value) for d in dates]


def consecutive_checkins(end: str, count: int, *, value=None) -> list[Checkin]:
    """``count`` daily check-ins ending on ``end``, newest first."""

    last = date.fromisoformat(end)
    return [Checkin(occurred_on=last - timedelta(days=i), value=value) for i in range(count)]


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so they do not leak between tests."""

    yield
    package_logger = logging.getLogger("streakwise")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def app_config(isolated_environment) -> BaseConfig:
    """Configuration built from the isolated environment: dev mode, no timezone."""

    config = BaseConfig()
    config.DEV_MODE = True
    config.TIMEZONE = None
    return config
