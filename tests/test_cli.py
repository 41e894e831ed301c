"""Tests for the streakwise command line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from streakwise.cli import main


@pytest.fixture
def runner(monkeypatch):
    # Outside dev mode the console handler only emits warnings.
    monkeypatch.setenv("STREAKWISE_DEV_MODE", "false")
    return CliRunner()


@pytest.fixture
def daily_files(tmp_path):
    habit = tmp_path / "habit.json"
    habit.write_text(json.dumps({"frequencyType": "DAILY", "createdAt": "2025-12-21"}), encoding="utf-8")
    checkins = tmp_path / "checkins.csv"
    rows = ["date,skipped,value"] + [f"2025-12-{day},false," for day in range(24, 32)]
    checkins.write_text("\n".join(rows) + "\n", encoding="utf-8")
    return habit, checkins


def test_streak_command(runner, daily_files):
    habit, checkins = daily_files
    result = runner.invoke(
        main, ["streak", "--habit", str(habit), "--checkins", str(checkins), "--today", "2025-12-31"]
    )
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "8"


def test_stats_command_json(runner, daily_files):
    habit, checkins = daily_files
    result = runner.invoke(
        main,
        ["stats", "--habit", str(habit), "--checkins", str(checkins), "--today", "2025-12-31", "--json"],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload == {
        "completion_rate": 73,
        "current_streak": 8,
        "longest_streak": 8,
        "total_checkins": 8,
        "total_expected_days": 11,
    }


def test_stats_command_text(runner, daily_files):
    habit, checkins = daily_files
    result = runner.invoke(
        main, ["stats", "--habit", str(habit), "--checkins", str(checkins), "--today", "2025-12-31"]
    )
    assert result.exit_code == 0, result.output
    assert "Completion rate: 73%" in result.output
    assert "Check-ins:       8/11" in result.output


def test_skip_flag(runner, tmp_path):
    habit = tmp_path / "habit.json"
    habit.write_text("{}", encoding="utf-8")
    checkins = tmp_path / "checkins.csv"
    checkins.write_text("date,skipped\n2025-12-31,false\n2025-12-30,true\n2025-12-29,false\n", encoding="utf-8")
    args = ["streak", "--habit", str(habit), "--checkins", str(checkins), "--today", "2025-12-31"]

    preserving = runner.invoke(main, args)
    breaking = runner.invoke(main, args + ["--skipped-breaks-streak", "true"])

    assert preserving.output.strip() == "2"
    assert breaking.output.strip() == "1"


def test_invalid_today_is_reported(runner, daily_files):
    habit, checkins = daily_files
    result = runner.invoke(
        main, ["streak", "--habit", str(habit), "--checkins", str(checkins), "--today", "31/12/2025"]
    )
    assert result.exit_code != 0
    assert "expected YYYY-MM-DD" in result.output


def test_invalid_config_is_reported(runner, daily_files, monkeypatch):
    monkeypatch.setenv("STREAKWISE_WEEK_STARTS_ON", "friday")
    habit, checkins = daily_files
    result = runner.invoke(main, ["streak", "--habit", str(habit), "--checkins", str(checkins)])
    assert result.exit_code != 0
    assert "STREAKWISE_WEEK_STARTS_ON" in result.output


def test_configured_week_start_applies_to_habit_file(runner, tmp_path, monkeypatch):
    habit = tmp_path / "habit.json"
    habit.write_text(json.dumps({"frequencyType": "WEEKLY", "activeDays": [0, 6]}), encoding="utf-8")
    checkins = tmp_path / "checkins.csv"
    checkins.write_text("date\n2025-12-27\n2025-12-28\n", encoding="utf-8")
    args = ["streak", "--habit", str(habit), "--checkins", str(checkins), "--today", "2025-12-31"]

    assert runner.invoke(main, args).output.strip() == "1"

    monkeypatch.setenv("STREAKWISE_WEEK_STARTS_ON", "sunday")
    assert runner.invoke(main, args).output.strip() == "0"
