"""Habit streak and adherence statistics engine."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .models.habit import Checkin, HabitConfig, StreakStats
from .services.streaks import calculate_current_streak, calculate_streak_stats

__all__ = [
    "BaseConfig",
    "Checkin",
    "DevConfig",
    "HabitConfig",
    "StreakStats",
    "calculate_current_streak",
    "calculate_streak_stats",
]
