"""Load check-in history and habit configuration from local files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd

from ..logging_config import get_logger
from ..models.habit import WEEK_STARTS_MONDAY, Checkin, HabitConfig

logger = get_logger(__name__)

REQUIRED_COLUMNS = ("date",)


def normalize_frame(*, file_path: Path, encoding: str = "utf-8") -> pd.DataFrame:
    """Load a CSV file into a DataFrame with consistent column casing."""

    frame = pd.read_csv(file_path, encoding=encoding, dtype=str, keep_default_na=False)
    frame.columns = [c.strip().lower() for c in frame.columns]
    missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
    if missing:
        raise ValueError(f"{file_path}: missing required column(s): {', '.join(missing)}")
    return frame


def rows_to_checkins(rows: Iterable[Mapping[str, Any]]) -> list[Checkin]:
    """Convert dict-like rows (``date``, ``skipped``, ``value``) into check-ins.

    Blank ``date`` cells are ignored; any other unparseable date raises
    ``ValueError`` naming the offending row.
    """

    checkins: list[Checkin] = []
    for row_num, row in enumerate(rows, start=1):
        raw_date = row.get("date")
        if raw_date is None or not str(raw_date).strip():
            continue
        try:
            checkins.append(Checkin.from_dict(row))
        except ValueError as exc:
            raise ValueError(f"Row {row_num}: {exc}") from exc
    return checkins


def load_checkins_csv(file_path: Path) -> list[Checkin]:
    """Read a check-in CSV with a ``date`` column and optional ``skipped``/``value`` columns."""

    frame = normalize_frame(file_path=Path(file_path))
    checkins = rows_to_checkins(frame.to_dict(orient="records"))
    logger.info(f"Loaded {len(checkins)} check-ins from {file_path}")
    return checkins


def load_habit_config(file_path: Path, *, week_starts_on: int = WEEK_STARTS_MONDAY) -> HabitConfig:
    """Read a habit configuration JSON object (camelCase or snake_case keys).

    ``week_starts_on`` is the default for files that do not set ``weekStartsOn``.
    """

    with Path(file_path).open("r", encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{file_path}: invalid JSON ({exc.msg})") from exc
    if not isinstance(data, dict):
        raise ValueError(f"{file_path}: habit configuration must be a JSON object")
    return HabitConfig.from_dict(data, week_starts_on=week_starts_on)


__all__ = ["load_checkins_csv", "load_habit_config", "normalize_frame", "rows_to_checkins"]
