"""Per-day completion rules for check-ins."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..models.habit import HABIT_TARGET, Checkin, parse_number

CheckinMap = dict[date, Checkin]


def build_checkin_map(checkins: Iterable[Checkin]) -> CheckinMap:
    """Index check-ins by day; a later duplicate for the same day replaces earlier ones."""

    return {checkin.occurred_on: checkin for checkin in checkins}


def is_actually_completed(
    checkin: Optional[Checkin], habit_type: str, target_value: Optional[float]
) -> bool:
    """Return True when the check-in really completes the habit for its day.

    Skips never count as completions, whatever the skip policy is.
    """

    if checkin is None or checkin.skipped:
        return False
    if habit_type == HABIT_TARGET:
        return parse_number(checkin.value) >= parse_number(target_value)
    return True


def is_skip_preserving_streak(checkin: Optional[Checkin], skipped_breaks_streak: bool) -> bool:
    """A skip keeps the streak alive (without extending it) unless skips break streaks."""

    return checkin is not None and checkin.skipped and not skipped_breaks_streak


def is_day_satisfied(
    checkin: Optional[Checkin],
    habit_type: str,
    target_value: Optional[float],
    skipped_breaks_streak: bool,
) -> bool:
    return is_actually_completed(checkin, habit_type, target_value) or is_skip_preserving_streak(
        checkin, skipped_breaks_streak
    )


__all__ = [
    "CheckinMap",
    "build_checkin_map",
    "is_actually_completed",
    "is_day_satisfied",
    "is_skip_preserving_streak",
]
