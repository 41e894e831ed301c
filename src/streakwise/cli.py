"""Command line entry points for computing streaks from local files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click

from .config import BaseConfig
from .logging_config import get_logger, setup_logging
from .services.dates import resolve_today
from .services.import_csv import load_checkins_csv, load_habit_config
from .services.streaks import calculate_current_streak, calculate_streak_stats

logger = get_logger(__name__)


def _input_options(command):
    """Attach the options shared by ``streak`` and ``stats``."""

    options = [
        click.option(
            "--habit",
            "habit_path",
            required=True,
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="Habit configuration JSON file.",
        ),
        click.option(
            "--checkins",
            "checkins_path",
            required=True,
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="Check-in CSV file with date, skipped and value columns.",
        ),
        click.option("--today", default=None, help="Reference date (YYYY-MM-DD); defaults to now."),
        click.option("--timezone", "timezone_name", default=None, help="IANA timezone for today."),
        click.option(
            "--skipped-breaks-streak",
            "skipped_breaks_streak",
            type=click.BOOL,
            default=None,
            help="true if skipped days break streaks (default from STREAKWISE_SKIPPED_BREAKS_STREAK).",
        ),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def _load_inputs(ctx: click.Context, habit_path, checkins_path, today, timezone_name, skipped_breaks_streak):
    config: BaseConfig = ctx.obj["config"]
    try:
        habit = load_habit_config(habit_path, week_starts_on=config.WEEK_STARTS_ON)
        checkins = load_checkins_csv(checkins_path)
        reference = resolve_today(today, timezone_name=timezone_name or config.TIMEZONE)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    if skipped_breaks_streak is None:
        skipped_breaks_streak = config.SKIPPED_BREAKS_STREAK
    return habit, checkins, reference, skipped_breaks_streak


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """Compute habit streaks and adherence statistics."""

    try:
        config = BaseConfig()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(config)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@main.command("streak")
@_input_options
@click.pass_context
def streak_command(
    ctx: click.Context,
    habit_path: Path,
    checkins_path: Path,
    today: Optional[str],
    timezone_name: Optional[str],
    skipped_breaks_streak: Optional[bool],
) -> None:
    """Print the current streak."""

    habit, checkins, reference, skips_break = _load_inputs(
        ctx, habit_path, checkins_path, today, timezone_name, skipped_breaks_streak
    )
    streak = calculate_current_streak(checkins, habit, skips_break, reference)
    logger.info("Current streak requested", extra={"habit_file": str(habit_path), "streak": streak})
    click.echo(str(streak))


@main.command("stats")
@_input_options
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON instead of text.")
@click.pass_context
def stats_command(
    ctx: click.Context,
    habit_path: Path,
    checkins_path: Path,
    today: Optional[str],
    timezone_name: Optional[str],
    skipped_breaks_streak: Optional[bool],
    as_json: bool,
) -> None:
    """Print current/longest streaks and the completion rate."""

    habit, checkins, reference, skips_break = _load_inputs(
        ctx, habit_path, checkins_path, today, timezone_name, skipped_breaks_streak
    )
    stats = calculate_streak_stats(checkins, habit, skips_break, reference)
    logger.info("Stats requested", extra={"habit_file": str(habit_path), **stats.to_dict()})

    if as_json:
        click.echo(json.dumps(stats.to_dict(), sort_keys=True))
        return

    click.echo(f"Current streak:  {stats.current_streak}")
    click.echo(f"Longest streak:  {stats.longest_streak}")
    click.echo(f"Completion rate: {stats.completion_rate}%")
    click.echo(f"Check-ins:       {stats.total_checkins}/{stats.total_expected_days}")


if __name__ == "__main__":  # pragma: no cover
    main()
