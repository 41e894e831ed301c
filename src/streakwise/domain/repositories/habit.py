"""Protocols for the storage and settings layers that feed the streak engine."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import Checkin, HabitConfig


class CheckinRepository(Protocol):
    """Source of a habit's check-ins."""

    def list_checkins(self, habit_id: str, *, since: Optional[date] = None) -> list[Checkin]:
        """Return check-ins for a habit, optionally only those on or after ``since``."""
        ...


class HabitConfigProvider(Protocol):
    """Source of habit scheduling configuration."""

    def get_habit_config(self, habit_id: str, *, user_id: str) -> Optional[HabitConfig]:
        """Return the configuration for a user's habit, or None when it does not exist."""
        ...


class UserSettingsProvider(Protocol):
    """Per-user preferences that change how streaks are evaluated.

    Returning None from any method falls back to the application config.
    """

    def skipped_breaks_streak(self, user_id: str) -> Optional[bool]:
        """Whether a skipped day breaks the user's streaks."""
        ...

    def week_starts_on(self, user_id: str) -> Optional[int]:
        """0 for Sunday-start weeks, 1 for Monday-start weeks."""
        ...

    def timezone(self, user_id: str) -> Optional[str]:
        """IANA timezone name used to decide the user's "today"."""
        ...
