"""Service module exports."""

from . import completion, dates, habits, import_csv, period_status, streaks

__all__ = [
    "completion",
    "dates",
    "habits",
    "import_csv",
    "period_status",
    "streaks",
]
