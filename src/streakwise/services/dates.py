"""Calendar helpers and period windowing for streak calculations.

All arithmetic is done on ``datetime.date`` values, so daylight-saving
transitions can never move a check-in onto a neighbouring day. Weekday
numbers follow the 0=Sunday..6=Saturday convention used by habit configs.
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Iterator, Optional

import pytz

from ..models.habit import WEEK_STARTS_MONDAY, parse_date


def resolve_today(today: Any = None, *, timezone_name: Optional[str] = None) -> date:
    """Return the reference day for a calculation.

    A caller-supplied ``today`` (string or date) always wins. Otherwise the
    current date is read in ``timezone_name`` when given, or in the server's
    local time.
    """

    if today is not None:
        return parse_date(today)
    if timezone_name:
        try:
            zone = pytz.timezone(timezone_name)
        except pytz.UnknownTimeZoneError as exc:
            raise ValueError(f"Unknown timezone {timezone_name!r}") from exc
        return datetime.now(zone).date()
    return date.today()


def format_date(day: date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return day.isoformat()


def weekday_number(day: date) -> int:
    """Return 0 for Sunday through 6 for Saturday."""
    return (day.weekday() + 1) % 7


def week_start(day: date, week_starts_on: int = WEEK_STARTS_MONDAY) -> date:
    """Return the first day of the calendar week containing ``day``.

    With Monday-start weeks a Sunday belongs to the week that began six
    days earlier.
    """

    weekday = weekday_number(day)
    if week_starts_on == WEEK_STARTS_MONDAY:
        offset = 6 if weekday == 0 else weekday - 1
    else:
        offset = weekday
    return day - timedelta(days=offset)


def week_end(start: date) -> date:
    return start + timedelta(days=6)


def month_start(day: date) -> date:
    return day.replace(day=1)


def days_in_month(day: date) -> int:
    return monthrange(day.year, day.month)[1]


def month_end(day: date) -> date:
    return day.replace(day=days_in_month(day))


def shift_months(day: date, months: int) -> date:
    """Return the first day of the month ``months`` away from ``day``'s month."""

    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    return date(year, month + 1, 1)


def active_days_in_week(start: date, active_days: Iterable[int]) -> list[date]:
    """Dates within ``[start, start + 6]`` whose weekday is scheduled, ascending."""

    scheduled = set(active_days)
    days = (start + timedelta(days=offset) for offset in range(7))
    return [day for day in days if weekday_number(day) in scheduled]


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each date from ``start`` to ``end`` inclusive."""

    cursor = start
    while cursor <= end:
        yield cursor
        cursor += timedelta(days=1)


def days_between(start: date, end: date) -> int:
    return (end - start).days


def weeks_between(start: date, end: date, week_starts_on: int = WEEK_STARTS_MONDAY) -> int:
    """Number of week boundaries crossed going from ``start`` to ``end``."""

    return (week_start(end, week_starts_on) - week_start(start, week_starts_on)).days // 7


def months_between(start: date, end: date) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)


__all__ = [
    "active_days_in_week",
    "days_between",
    "days_in_month",
    "format_date",
    "iter_days",
    "month_end",
    "month_start",
    "months_between",
    "resolve_today",
    "shift_months",
    "week_end",
    "week_start",
    "weekday_number",
    "weeks_between",
]
