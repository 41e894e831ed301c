"""Caller-side facade wiring repositories and user settings into the streak engine."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from typing import Any, Iterable, Optional

from ..config import BaseConfig
from ..domain.repositories import CheckinRepository, HabitConfigProvider, UserSettingsProvider
from ..logging_config import get_logger
from ..models.habit import HabitConfig, StreakStats
from .dates import month_start, resolve_today, shift_months, week_start
from .period_status import MAX_MONTHS, MAX_WEEKS
from .streaks import calculate_current_streak, calculate_streak_stats

logger = get_logger(__name__)


class HabitNotFoundError(LookupError):
    """Raised when a habit id does not resolve to a configuration."""


class HabitStreakService:
    """Fetch inputs for a user's habit and run the streak calculators."""

    def __init__(
        self,
        *,
        checkins: CheckinRepository,
        habits: HabitConfigProvider,
        settings: UserSettingsProvider,
        config: Optional[BaseConfig] = None,
    ) -> None:
        self.checkins = checkins
        self.habits = habits
        self.settings = settings
        self.config = config or BaseConfig()

    def current_streak(self, habit_id: str, *, user_id: str, today: Any = None) -> int:
        """Current streak using only the bounded lookback window."""

        habit, skipped_breaks_streak, reference = self._prepare(habit_id, user_id, today)
        since = self.lookback_start(habit, reference)
        rows = self.checkins.list_checkins(habit_id, since=since)
        return calculate_current_streak(rows, habit, skipped_breaks_streak, reference)

    def current_streaks(
        self, habit_ids: Iterable[str], *, user_id: str, today: Any = None
    ) -> dict[str, int]:
        """Current streaks for several habits, keyed by habit id (list views)."""

        streaks = {
            habit_id: self.current_streak(habit_id, user_id=user_id, today=today)
            for habit_id in habit_ids
        }
        logger.info("Computed current streaks", extra={"user_id": user_id, "habits": len(streaks)})
        return streaks

    def stats(self, habit_id: str, *, user_id: str, today: Any = None) -> StreakStats:
        """Full statistics over the habit's complete history."""

        habit, skipped_breaks_streak, reference = self._prepare(habit_id, user_id, today)
        rows = self.checkins.list_checkins(habit_id)
        stats = calculate_streak_stats(rows, habit, skipped_breaks_streak, reference)
        logger.info(
            "Computed habit stats",
            extra={"user_id": user_id, "habit_id": habit_id, "checkins": len(rows)},
        )
        return stats

    def lookback_start(self, habit: HabitConfig, today: date) -> date:
        """Oldest day the current-streak walk can reach for ``habit``."""

        if habit.is_daily:
            return today - timedelta(days=self.config.STREAK_LOOKBACK_DAYS)
        if habit.is_monthly:
            return shift_months(month_start(today), -(MAX_MONTHS - 1))
        return week_start(today, habit.week_starts_on) - timedelta(weeks=MAX_WEEKS - 1)

    def _prepare(self, habit_id: str, user_id: str, today: Any) -> tuple[HabitConfig, bool, date]:
        habit = self.habits.get_habit_config(habit_id, user_id=user_id)
        if habit is None:
            logger.warning("Habit not found", extra={"user_id": user_id, "habit_id": habit_id})
            raise HabitNotFoundError(f"Habit {habit_id!r} not found")

        week_starts_on = self.settings.week_starts_on(user_id)
        if week_starts_on is not None:
            habit = replace(habit, week_starts_on=week_starts_on)

        skipped_breaks_streak = self.settings.skipped_breaks_streak(user_id)
        if skipped_breaks_streak is None:
            skipped_breaks_streak = self.config.SKIPPED_BREAKS_STREAK

        timezone_name = self.settings.timezone(user_id) or self.config.TIMEZONE
        reference = resolve_today(today, timezone_name=timezone_name)
        return habit, skipped_breaks_streak, reference


__all__ = ["HabitNotFoundError", "HabitStreakService"]
