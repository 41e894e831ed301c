"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from streakwise.config import BaseConfig
from streakwise.logging_config import JSONFormatter, get_logger, setup_logging
from streakwise.models.habit import HabitConfig
from streakwise.services.streaks import calculate_current_streak
from tests.conftest import TODAY, consecutive_checkins


def _record(**kwargs) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=kwargs.pop("level", logging.INFO),
        pathname="test.py",
        lineno=42,
        msg=kwargs.pop("msg", "Test message"),
        args=(),
        exc_info=kwargs.pop("exc_info", None),
    )
    record.module = "test_module"
    record.funcName = "test_function"
    for key, value in kwargs.items():
        setattr(record, key, value)
    return record


def test_json_formatter():
    """JSONFormatter emits the standard fields."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_with_exception():
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record(level=logging.ERROR, exc_info=exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"] is not None


def test_json_formatter_includes_extra_fields():
    log_data = json.loads(JSONFormatter().format(_record(streak=4, habit_id="read")))
    assert log_data["extra"] == {"streak": 4, "habit_id": "read"}


def test_setup_logging(tmp_path):
    """Logging setup creates a rotating JSON log file."""
    config = BaseConfig()
    config.DATA_DIR = tmp_path
    config.DEV_MODE = True

    logger = setup_logging(config)

    assert logger.name == "streakwise"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 2  # Console + File

    log_file = tmp_path / "logs" / "streakwise.log"
    assert log_file.exists()

    logger.warning("Test warning message")
    for handler in logger.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    assert len(lines) >= 2
    for line in lines:
        entry = json.loads(line)
        assert {"timestamp", "level", "message"} <= entry.keys()


def test_setup_logging_is_idempotent(tmp_path):
    config = BaseConfig()
    config.DATA_DIR = tmp_path
    setup_logging(config)
    logger = setup_logging(config)
    assert len(logger.handlers) == 2


def test_engine_debug_logs_reach_file(tmp_path, monkeypatch):
    monkeypatch.setenv("STREAKWISE_LOG_LEVEL", "DEBUG")
    config = BaseConfig()
    config.DATA_DIR = tmp_path
    logger = setup_logging(config)

    calculate_current_streak(consecutive_checkins("2025-12-31", 2), HabitConfig(), False, TODAY)
    for handler in logger.handlers:
        handler.flush()

    entries = [json.loads(line) for line in (tmp_path / "logs" / "streakwise.log").read_text().splitlines()]
    computed = [e for e in entries if e["message"] == "Current streak computed"]
    assert computed
    assert computed[-1]["logger"] == "streakwise.services.streaks"
    assert computed[-1]["extra"]["streak"] == 2


def test_get_logger():
    """get_logger returns loggers namespaced under the package."""
    assert get_logger("module1").name == "streakwise.module1"
    assert get_logger("streakwise.services.streaks").name == "streakwise.services.streaks"
    assert get_logger("module1") is not get_logger("module2")


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(tmp_path, dev_mode):
    """Console logging level adjusts based on dev mode."""
    config = BaseConfig()
    config.DATA_DIR = tmp_path
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)

    console_handler = next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )
    expected_level = logging.INFO if dev_mode else logging.WARNING
    assert console_handler.level == expected_level
