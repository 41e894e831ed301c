"""Habit scheduling and check-in data structures consumed by the streak engine."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional

FREQUENCY_DAILY = "DAILY"
FREQUENCY_WEEKLY = "WEEKLY"
FREQUENCY_CUSTOM = "CUSTOM"
FREQUENCY_TYPES = (FREQUENCY_DAILY, FREQUENCY_WEEKLY, FREQUENCY_CUSTOM)

PERIOD_WEEK = "week"
PERIOD_MONTH = "month"
FREQUENCY_PERIODS = (PERIOD_WEEK, PERIOD_MONTH)

HABIT_SIMPLE = "SIMPLE"
HABIT_TARGET = "TARGET"
HABIT_TYPES = (HABIT_SIMPLE, HABIT_TARGET)

WEEK_STARTS_SUNDAY = 0
WEEK_STARTS_MONDAY = 1

_TRUE_STRINGS = {"1", "true", "yes", "on", "y", "t"}


def parse_number(value: Any) -> float:
    """Return ``value`` as a float, or 0.0 when it is missing or not numeric."""

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def parse_date(value: Any) -> date:
    """Coerce a ``YYYY-MM-DD`` string, ``date`` or ``datetime`` into a ``date``."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            # Tolerate timestamps by reading only the calendar part.
            return date.fromisoformat(text[:10])
        except ValueError as exc:
            raise ValueError(f"Invalid date {value!r}; expected YYYY-MM-DD") from exc
    raise ValueError(f"Invalid date {value!r}; expected YYYY-MM-DD")


def parse_bool(value: Any) -> bool:
    """Interpret loosely typed truthy values (CSV cells, JSON, env strings)."""

    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return not math.isnan(value) and value != 0
    return str(value).strip().lower() in _TRUE_STRINGS


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclass(slots=True)
class Checkin:
    """One day's record for one habit: completed, partially logged, or skipped."""

    occurred_on: date
    skipped: bool = False
    value: Optional[float] = None

    def __post_init__(self) -> None:
        self.occurred_on = parse_date(self.occurred_on)
        self.skipped = parse_bool(self.skipped)
        if self.value is not None:
            self.value = parse_number(self.value)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Checkin":
        """Build a check-in from an API/CSV style mapping (``date``, ``skipped``, ``value``)."""

        raw_value = _pick(data, "value")
        if isinstance(raw_value, str) and not raw_value.strip():
            raw_value = None
        return cls(
            occurred_on=_pick(data, "date", "occurred_on"),
            skipped=_pick(data, "skipped", default=False),
            value=raw_value,
        )


@dataclass(slots=True)
class HabitConfig:
    """Scheduling configuration for a habit.

    ``active_days`` uses 0=Sunday..6=Saturday and only matters for weekly
    habits. ``frequency_value`` is the number of completions required per
    ``frequency_period`` for custom habits.
    """

    frequency_type: str = FREQUENCY_DAILY
    frequency_value: int = 1
    frequency_period: str = PERIOD_WEEK
    active_days: frozenset[int] = field(default_factory=frozenset)
    habit_type: str = HABIT_SIMPLE
    target_value: Optional[float] = None
    created_at: Optional[date] = None
    week_starts_on: int = WEEK_STARTS_MONDAY

    def __post_init__(self) -> None:
        self.frequency_type = str(self.frequency_type or FREQUENCY_DAILY).strip().upper()
        if self.frequency_type not in FREQUENCY_TYPES:
            raise ValueError(f"Unknown frequency type {self.frequency_type!r}")

        self.frequency_period = str(self.frequency_period or PERIOD_WEEK).strip().lower()
        if self.frequency_period not in FREQUENCY_PERIODS:
            raise ValueError(f"Unknown frequency period {self.frequency_period!r}")

        self.habit_type = str(self.habit_type or HABIT_SIMPLE).strip().upper()
        if self.habit_type not in HABIT_TYPES:
            raise ValueError(f"Unknown habit type {self.habit_type!r}")

        frequency_value = int(parse_number(self.frequency_value))
        self.frequency_value = frequency_value if frequency_value > 0 else 1

        weekdays = (_parse_weekday(day) for day in (self.active_days or ()))
        self.active_days = frozenset(day for day in weekdays if day is not None)

        if self.target_value is not None:
            self.target_value = parse_number(self.target_value)

        if self.created_at is not None:
            self.created_at = parse_date(self.created_at)

        self.week_starts_on = parse_week_start(self.week_starts_on)

    @property
    def is_daily(self) -> bool:
        return self.frequency_type == FREQUENCY_DAILY

    @property
    def is_monthly(self) -> bool:
        return self.frequency_type == FREQUENCY_CUSTOM and self.frequency_period == PERIOD_MONTH

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], *, week_starts_on: int = WEEK_STARTS_MONDAY
    ) -> "HabitConfig":
        """Build a config from camelCase (API) or snake_case keys.

        ``week_starts_on`` applies only when the mapping does not name one.
        """

        return cls(
            frequency_type=_pick(data, "frequencyType", "frequency_type", default=FREQUENCY_DAILY),
            frequency_value=_pick(data, "frequencyValue", "frequency_value", default=1),
            frequency_period=_pick(data, "frequencyPeriod", "frequency_period", default=PERIOD_WEEK),
            active_days=frozenset(_pick(data, "activeDays", "active_days", default=None) or ()),
            habit_type=_pick(data, "habitType", "habit_type", default=HABIT_SIMPLE),
            target_value=_pick(data, "targetValue", "target_value"),
            created_at=_pick(data, "createdAt", "created_at"),
            week_starts_on=_pick(data, "weekStartsOn", "week_starts_on", default=week_starts_on),
        )


def parse_week_start(value: Any) -> int:
    """Normalise ``0``/``1``/``"sunday"``/``"monday"`` to a week-start index."""

    if isinstance(value, str):
        text = value.strip().lower()
        return WEEK_STARTS_SUNDAY if text in {"0", "sunday", "sun"} else WEEK_STARTS_MONDAY
    if isinstance(value, int) and not isinstance(value, bool) and value == WEEK_STARTS_SUNDAY:
        return WEEK_STARTS_SUNDAY
    return WEEK_STARTS_MONDAY


def _parse_weekday(value: Any) -> Optional[int]:
    """Return a 0..6 weekday number, or None for anything else."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    try:
        day = int(str(value).strip())
    except ValueError:
        return None
    return day if 0 <= day <= 6 else None


@dataclass(slots=True)
class StreakStats:
    """Statistics record returned by the full statistics calculator."""

    current_streak: int = 0
    longest_streak: int = 0
    completion_rate: int = 0
    total_checkins: int = 0
    total_expected_days: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "completion_rate": self.completion_rate,
            "total_checkins": self.total_checkins,
            "total_expected_days": self.total_expected_days,
        }
