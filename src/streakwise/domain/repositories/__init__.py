"""Repository protocols supplying streak engine inputs."""

from .habit import CheckinRepository, HabitConfigProvider, UserSettingsProvider

__all__ = ["CheckinRepository", "HabitConfigProvider", "UserSettingsProvider"]
