"""Streak and adherence statistics for habits.

Two entry points share the same primitives:

* :func:`calculate_current_streak` - the running streak only, for list views.
* :func:`calculate_streak_stats` - current/longest streak, totals and
  completion rate over the habit's observed lifetime, for detail views.

Daily habits count days. Weekly habits (specific weekdays) and custom
habits (X completions per week or month) count whole periods. The period
containing today is in grace until it is either satisfied or over, so an
unfinished today never breaks a streak.

Both functions are pure: they read nothing but their arguments and the
optional ``today``, which defaults to the server's local date.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from ..logging_config import get_logger
from ..models.habit import FREQUENCY_WEEKLY, Checkin, HabitConfig, StreakStats
from .completion import (
    CheckinMap,
    build_checkin_map,
    is_actually_completed,
    is_skip_preserving_streak,
)
from .dates import active_days_in_week, days_between, months_between, resolve_today, weeks_between
from .period_status import (
    STATUS_COMPLETED,
    STATUS_GRACE,
    STATUS_INCOMPLETE,
    count_completions,
    iter_periods_back,
    period_bounds,
    period_limit,
    period_status,
)

logger = get_logger(__name__)

MAX_DAYS = 365


@dataclass(slots=True)
class _RunTracker:
    """Tracks streak runs while scanning backwards from today."""

    current: int = 0
    longest: int = 0
    running: int = 0
    broken: bool = False

    def extend(self) -> None:
        self.running += 1
        # Until the first break the running count is the current streak.
        if not self.broken:
            self.current = self.running
        self.longest = max(self.longest, self.running)

    def reset(self) -> None:
        self.broken = True
        self.running = 0


def completion_rate(total_checkins: int, total_expected: int) -> int:
    """Percentage of expected days completed, rounded half up; 0 when nothing was expected."""

    if total_expected <= 0:
        return 0
    ratio = Decimal(100 * total_checkins) / Decimal(total_expected)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _has_no_schedule(habit: HabitConfig) -> bool:
    return habit.frequency_type == FREQUENCY_WEEKLY and not habit.active_days


def calculate_current_streak(
    checkins: Iterable[Checkin],
    habit: HabitConfig,
    skipped_breaks_streak: bool = False,
    today: Any = None,
) -> int:
    """Return the current run of satisfied days, weeks or months ending at today."""

    checkins = list(checkins)
    if not checkins:
        return 0

    reference = resolve_today(today)
    checkin_map = build_checkin_map(checkins)

    if habit.is_daily:
        streak = _daily_current_streak(checkin_map, habit, skipped_breaks_streak, reference)
    else:
        streak = _periodic_current_streak(checkin_map, habit, skipped_breaks_streak, reference)

    logger.debug(
        "Current streak computed",
        extra={
            "frequency_type": habit.frequency_type,
            "checkins": len(checkins),
            "today": reference.isoformat(),
            "streak": streak,
        },
    )
    return streak


def _daily_current_streak(
    checkins: CheckinMap, habit: HabitConfig, skipped_breaks_streak: bool, today: date
) -> int:
    streak = 0
    day = today
    for _ in range(MAX_DAYS):
        checkin = checkins.get(day)
        if is_skip_preserving_streak(checkin, skipped_breaks_streak):
            pass
        elif is_actually_completed(checkin, habit.habit_type, habit.target_value):
            streak += 1
        elif day != today:
            break
        day -= timedelta(days=1)
    return streak


def _periodic_current_streak(
    checkins: CheckinMap, habit: HabitConfig, skipped_breaks_streak: bool, today: date
) -> int:
    if _has_no_schedule(habit):
        return 0

    streak = 0
    for start in iter_periods_back(habit, today, period_limit(habit)):
        status = period_status(start, habit, checkins, today, skipped_breaks_streak)
        if status == STATUS_COMPLETED:
            streak += 1
        elif status == STATUS_INCOMPLETE:
            break
    return streak


def calculate_streak_stats(
    checkins: Iterable[Checkin],
    habit: HabitConfig,
    skipped_breaks_streak: bool = False,
    today: Any = None,
) -> StreakStats:
    """Return current/longest streaks and completion totals for a habit."""

    checkins = list(checkins)
    if not checkins:
        return StreakStats()

    reference = resolve_today(today)
    checkin_map = build_checkin_map(checkins)
    earliest = _earliest_date(checkins, habit, reference)

    if habit.is_daily:
        stats = _daily_stats(checkin_map, habit, skipped_breaks_streak, reference, earliest)
    else:
        stats = _periodic_stats(checkin_map, habit, skipped_breaks_streak, reference, earliest)

    logger.debug(
        "Streak stats computed",
        extra={
            "frequency_type": habit.frequency_type,
            "checkins": len(checkins),
            "today": reference.isoformat(),
            "earliest": earliest.isoformat(),
            **stats.to_dict(),
        },
    )
    return stats


def _earliest_date(checkins: list[Checkin], habit: HabitConfig, today: date) -> date:
    """Lower bound of the statistics window.

    Backfilled check-ins older than the habit's creation date extend the
    window; nothing after today is considered.
    """

    candidates = [c.occurred_on for c in checkins if c.occurred_on <= today]
    if habit.created_at is not None:
        candidates.append(min(habit.created_at, today))
    return min(candidates, default=today)


def _daily_stats(
    checkins: CheckinMap,
    habit: HabitConfig,
    skipped_breaks_streak: bool,
    today: date,
    earliest: date,
) -> StreakStats:
    tracker = _RunTracker()
    total_checkins = 0
    total_expected = 0

    span = min(MAX_DAYS, days_between(earliest, today) + 1)
    for offset in range(span):
        day = today - timedelta(days=offset)
        checkin = checkins.get(day)
        total_expected += 1

        if is_skip_preserving_streak(checkin, skipped_breaks_streak):
            continue
        if is_actually_completed(checkin, habit.habit_type, habit.target_value):
            total_checkins += 1
            tracker.extend()
        elif day != today:
            tracker.reset()

    return StreakStats(
        current_streak=tracker.current,
        longest_streak=tracker.longest,
        completion_rate=completion_rate(total_checkins, total_expected),
        total_checkins=total_checkins,
        total_expected_days=total_expected,
    )


def _periodic_stats(
    checkins: CheckinMap,
    habit: HabitConfig,
    skipped_breaks_streak: bool,
    today: date,
    earliest: date,
) -> StreakStats:
    if _has_no_schedule(habit):
        return StreakStats()

    if habit.is_monthly:
        elapsed = months_between(earliest, today)
    else:
        elapsed = weeks_between(earliest, today, habit.week_starts_on)
    span = min(period_limit(habit), elapsed + 1)

    tracker = _RunTracker()
    total_checkins = 0
    total_expected = 0

    for start in iter_periods_back(habit, today, span):
        status = period_status(start, habit, checkins, today, skipped_breaks_streak)

        _, end = period_bounds(start, habit)
        window_start = max(start, earliest)
        window_end = min(end, today)
        if window_start <= window_end:
            if habit.frequency_type == FREQUENCY_WEEKLY:
                expected, done = _scheduled_day_totals(checkins, habit, start, window_start, window_end)
            else:
                expected, done = _quota_totals(checkins, habit, window_start, window_end, status)
            total_expected += expected
            total_checkins += done

        if status == STATUS_COMPLETED:
            tracker.extend()
        elif status == STATUS_INCOMPLETE:
            tracker.reset()

    return StreakStats(
        current_streak=tracker.current,
        longest_streak=tracker.longest,
        completion_rate=completion_rate(total_checkins, total_expected),
        total_checkins=total_checkins,
        total_expected_days=total_expected,
    )


def _scheduled_day_totals(
    checkins: CheckinMap, habit: HabitConfig, start: date, window_start: date, window_end: date
) -> tuple[int, int]:
    """(expected, completed) active days of one week, clipped to the window."""

    expected = 0
    done = 0
    for day in active_days_in_week(start, habit.active_days):
        if not window_start <= day <= window_end:
            continue
        expected += 1
        if is_actually_completed(checkins.get(day), habit.habit_type, habit.target_value):
            done += 1
    return expected, done


def _quota_totals(
    checkins: CheckinMap, habit: HabitConfig, window_start: date, window_end: date, status: str
) -> tuple[int, int]:
    """(expected, completed) for one custom period; extra completions are not credited."""

    done = min(count_completions(checkins, habit, window_start, window_end), habit.frequency_value)
    if status == STATUS_GRACE:
        # An open period only owes what has been done so far.
        return done, done
    return habit.frequency_value, done


__all__ = ["MAX_DAYS", "calculate_current_streak", "calculate_streak_stats", "completion_rate"]
