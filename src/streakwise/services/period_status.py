"""Classify weeks and months of weekly/custom habits as completed, incomplete or grace.

``grace`` marks a period that has not been satisfied yet but can still be:
the week or month containing today. It neither extends nor breaks a streak.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterator

from ..models.habit import FREQUENCY_WEEKLY, HabitConfig
from .completion import CheckinMap, is_actually_completed, is_day_satisfied
from .dates import active_days_in_week, iter_days, month_end, month_start, shift_months, week_end, week_start

STATUS_COMPLETED = "completed"
STATUS_INCOMPLETE = "incomplete"
STATUS_GRACE = "grace"

MAX_WEEKS = 52
MAX_MONTHS = 12


def weekly_status(
    start: date,
    habit: HabitConfig,
    checkins: CheckinMap,
    today: date,
    skipped_breaks_streak: bool,
) -> str:
    """Status of one week of a habit scheduled on specific weekdays.

    Every past active day must be completed or covered by a preserving skip;
    a single miss makes the week incomplete even if later days are still open.
    """

    scheduled = active_days_in_week(start, habit.active_days)
    if not scheduled:
        return STATUS_COMPLETED

    has_grace = False
    for day in scheduled:
        if day > today:
            has_grace = True
            continue
        satisfied = is_day_satisfied(
            checkins.get(day), habit.habit_type, habit.target_value, skipped_breaks_streak
        )
        if satisfied:
            continue
        if day == today:
            has_grace = True
        else:
            return STATUS_INCOMPLETE

    return STATUS_GRACE if has_grace else STATUS_COMPLETED


def count_completions(
    checkins: CheckinMap, habit: HabitConfig, start: date, end: date
) -> int:
    """Number of days in ``[start, end]`` with an actual completion (skips excluded)."""

    return sum(
        1
        for day in iter_days(start, end)
        if is_actually_completed(checkins.get(day), habit.habit_type, habit.target_value)
    )


def _quota_status(
    start: date, end: date, habit: HabitConfig, checkins: CheckinMap, today: date
) -> str:
    completed = count_completions(checkins, habit, start, min(end, today))
    if completed >= habit.frequency_value:
        return STATUS_COMPLETED
    if today < end:
        return STATUS_GRACE
    return STATUS_INCOMPLETE


def custom_week_status(start: date, habit: HabitConfig, checkins: CheckinMap, today: date) -> str:
    """Status of a week for an X-times-per-week habit."""
    return _quota_status(start, week_end(start), habit, checkins, today)


def custom_month_status(start: date, habit: HabitConfig, checkins: CheckinMap, today: date) -> str:
    """Status of a calendar month for an X-times-per-month habit."""
    return _quota_status(start, month_end(start), habit, checkins, today)


def period_status(
    start: date,
    habit: HabitConfig,
    checkins: CheckinMap,
    today: date,
    skipped_breaks_streak: bool,
) -> str:
    """Dispatch to the evaluator matching the habit's frequency."""

    if habit.frequency_type == FREQUENCY_WEEKLY:
        return weekly_status(start, habit, checkins, today, skipped_breaks_streak)
    if habit.is_monthly:
        return custom_month_status(start, habit, checkins, today)
    return custom_week_status(start, habit, checkins, today)


def period_limit(habit: HabitConfig) -> int:
    return MAX_MONTHS if habit.is_monthly else MAX_WEEKS


def period_bounds(start: date, habit: HabitConfig) -> tuple[date, date]:
    """First and last day of the period beginning at ``start``."""

    if habit.is_monthly:
        return start, month_end(start)
    return start, week_end(start)


def iter_periods_back(habit: HabitConfig, today: date, limit: int) -> Iterator[date]:
    """Yield period start dates, newest first, beginning with the period containing today."""

    if habit.is_monthly:
        current = month_start(today)
        for offset in range(limit):
            yield shift_months(current, -offset)
    else:
        current = week_start(today, habit.week_starts_on)
        for offset in range(limit):
            yield current - timedelta(weeks=offset)


__all__ = [
    "MAX_MONTHS",
    "MAX_WEEKS",
    "STATUS_COMPLETED",
    "STATUS_GRACE",
    "STATUS_INCOMPLETE",
    "count_completions",
    "custom_month_status",
    "custom_week_status",
    "iter_periods_back",
    "period_bounds",
    "period_limit",
    "period_status",
    "weekly_status",
]
