"""Data structures exchanged with the streak engine."""

from .habit import (
    FREQUENCY_CUSTOM,
    FREQUENCY_DAILY,
    FREQUENCY_WEEKLY,
    HABIT_SIMPLE,
    HABIT_TARGET,
    PERIOD_MONTH,
    PERIOD_WEEK,
    WEEK_STARTS_MONDAY,
    WEEK_STARTS_SUNDAY,
    Checkin,
    HabitConfig,
    StreakStats,
)

__all__ = [
    "Checkin",
    "HabitConfig",
    "StreakStats",
    "FREQUENCY_CUSTOM",
    "FREQUENCY_DAILY",
    "FREQUENCY_WEEKLY",
    "HABIT_SIMPLE",
    "HABIT_TARGET",
    "PERIOD_MONTH",
    "PERIOD_WEEK",
    "WEEK_STARTS_MONDAY",
    "WEEK_STARTS_SUNDAY",
]
