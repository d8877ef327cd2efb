"""Command line interface for HabitLoop."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .logging_config import setup_logging
from .models.habit import Habit, HabitCategory
from .services.aggregate import aggregate_streak, group_by_habit
from .services.calendar import date_key, start_of_day
from .services.day_status import CompletionIndex, DayStatus, resolve_month, summarize_month
from .services.settings import StreakMode, StreakSettings, save_streak_settings
from .services.stats import completion_rate, daily_progress
from .services.streaks import calculate_streak

WEEKDAY_NAMES = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")
DAY_PRESETS = {
    "daily": list(range(7)),
    "weekdays": [1, 2, 3, 4, 5],
    "weekends": [0, 6],
}
STATUS_MARKS = {
    DayStatus.NONE: ".",
    DayStatus.FULL: "#",
    DayStatus.PARTIAL: "+",
    DayStatus.MISSED: "x",
}

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


def parse_days(value: str) -> list[int]:
    """Parse ``mon,wed,fri`` / ``1,3,5`` / ``weekdays`` into weekday indices (0=Sunday)."""

    text = value.strip().lower()
    if text in DAY_PRESETS:
        return DAY_PRESETS[text]
    days: list[int] = []
    for part in filter(None, (piece.strip() for piece in text.split(","))):
        if part.isdigit():
            days.append(int(part))
        elif part[:3] in WEEKDAY_NAMES:
            days.append(WEEKDAY_NAMES.index(part[:3]))
        else:
            raise click.BadParameter(f"Unknown weekday: {part}")
    if not days:
        raise click.BadParameter("Pick at least one weekday")
    return days


def format_days(days: list[int]) -> str:
    return ",".join(WEEKDAY_NAMES[day] for day in sorted(days))


def _reference(value: Optional[datetime]) -> date:
    return start_of_day(value) if value else date.today()


def _resolve_habit(app: AppContext, ref: str) -> Habit:
    """Find a habit by id, id prefix or exact title."""

    habits = app.habit_repo.list_habits()
    exact = [habit for habit in habits if habit.id == ref]
    if exact:
        return exact[0]
    matches = [habit for habit in habits if habit.id.startswith(ref) or habit.title == ref]
    if not matches:
        raise click.ClickException(f"No habit matches {ref!r}")
    if len(matches) > 1:
        raise click.ClickException(f"{ref!r} matches {len(matches)} habits; use the id")
    return matches[0]


@click.group()
@click.option("--verbose", is_flag=True, default=False, help="Show engine debug logs")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Track weekday habits and their streaks."""

    try:
        config = BaseConfig()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(config, verbose=verbose)
    ctx.obj = create_app_context(config)


@main.command("add")
@click.argument("title")
@click.option("--days", "days", default="daily", show_default=True, help="e.g. mon,wed,fri or weekdays")
@click.option(
    "--category",
    type=click.Choice([category.value for category in HabitCategory]),
    default=HabitCategory.ESSENTIAL.value,
    show_default=True,
)
@click.option("--reminder", default=None, help="Reminder time HH:MM")
@click.option("--description", default=None)
@click.pass_obj
def add_habit(
    app: AppContext,
    title: str,
    days: str,
    category: str,
    reminder: Optional[str],
    description: Optional[str],
) -> None:
    """Create a habit."""

    habit = Habit(
        title=title,
        description=description,
        days_of_week=parse_days(days),
        reminder_time=reminder,
        category=category,
    )
    try:
        saved = app.habit_repo.save_habit(habit)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Created {saved.title} [{saved.id[:8]}] on {format_days(saved.days_of_week)}")


@main.command("list")
@click.option("--all", "show_all", is_flag=True, default=False, help="Include archived habits")
@click.pass_obj
def list_habits(app: AppContext, show_all: bool) -> None:
    """List habits."""

    habits = app.habit_repo.list_habits(include_archived=show_all)
    if not habits:
        click.echo("No habits yet.")
        return
    for habit in habits:
        flag = " (archived)" if habit.archived else ""
        click.echo(
            f"{habit.id[:8]}  {habit.title:<24} {habit.category:<9} "
            f"{format_days(habit.days_of_week)}{flag}"
        )


@main.command("done")
@click.argument("habit_ref")
@click.option("--date", "on", type=DATE_TYPE, default=None, help="Day to mark (YYYY-MM-DD)")
@click.pass_obj
def mark_done(app: AppContext, habit_ref: str, on: Optional[datetime]) -> None:
    """Mark a habit complete for a day."""

    habit = _resolve_habit(app, habit_ref)
    entry = app.habit_repo.mark_complete(habit.id, _reference(on))
    click.echo(f"{habit.title} done on {entry.date}")


@main.command("undo")
@click.argument("habit_ref")
@click.option("--date", "on", type=DATE_TYPE, default=None, help="Day to unmark (YYYY-MM-DD)")
@click.pass_obj
def undo_done(app: AppContext, habit_ref: str, on: Optional[datetime]) -> None:
    """Remove a completion."""

    habit = _resolve_habit(app, habit_ref)
    day = _reference(on)
    app.habit_repo.unmark_complete(habit.id, day)
    click.echo(f"{habit.title} unmarked on {date_key(day)}")


@main.command("archive")
@click.argument("habit_ref")
@click.option("--restore", is_flag=True, default=False, help="Un-archive instead")
@click.pass_obj
def archive_habit(app: AppContext, habit_ref: str, restore: bool) -> None:
    """Archive a habit (or restore it)."""

    habit = _resolve_habit(app, habit_ref)
    habit.archived = not restore
    app.habit_repo.save_habit(habit)
    click.echo(f"{habit.title} {'restored' if restore else 'archived'}")


@main.command("remove")
@click.argument("habit_ref")
@click.confirmation_option(prompt="This removes the habit and its streak history. Continue?")
@click.pass_obj
def remove_habit(app: AppContext, habit_ref: str) -> None:
    """Delete a habit and its completions."""

    habit = _resolve_habit(app, habit_ref)
    app.habit_repo.delete_habit(habit.id)
    click.echo(f"Removed {habit.title}")


@main.command("streak")
@click.option("--date", "on", type=DATE_TYPE, default=None, help="Reference day (YYYY-MM-DD)")
@click.pass_obj
def show_streak(app: AppContext, on: Optional[datetime]) -> None:
    """Show the headline streak, today's progress and per-habit streaks."""

    reference = _reference(on)
    policy = app.streak_policy()
    max_lookback = app.config.MAX_LOOKBACK_DAYS
    habits = app.habit_repo.list_habits(include_archived=False)
    completions = app.habit_repo.list_completions()

    headline = aggregate_streak(
        habits, completions, reference, max_lookback_days=max_lookback, policy=policy
    )
    click.echo(f"Streak: {headline} day{'s' if headline != 1 else ''}")

    progress = daily_progress(habits, completions, reference)
    if progress.essentials:
        click.echo(
            f"Essentials today: {progress.essentials_done}/{len(progress.essentials)} "
            f"({progress.essential_percent}%)"
        )

    by_habit = group_by_habit(completions)
    for habit in habits:
        entries = by_habit.get(habit.id, [])
        result = calculate_streak(
            habit, entries, reference, max_lookback_days=max_lookback, policy=policy
        )
        rate_7 = completion_rate(habit, entries, reference, window_days=7)
        rate_30 = completion_rate(habit, entries, reference, window_days=30)
        broken = f", broken on {result.broken_on}" if result.broken_on else ""
        click.echo(
            f"  {habit.title:<24} {result.count:>3}  7d {rate_7:>3}%  30d {rate_30:>3}%{broken}"
        )


@main.command("calendar")
@click.option("--month", "month", default=None, help="Month to show (YYYY-MM)")
@click.pass_obj
def show_calendar(app: AppContext, month: Optional[str]) -> None:
    """Print a month of essential-habit day statuses."""

    if month:
        try:
            first = datetime.strptime(month, "%Y-%m").date()
        except ValueError as exc:
            raise click.BadParameter("Use YYYY-MM", param_hint="--month") from exc
    else:
        first = date.today().replace(day=1)

    habits = app.habit_repo.list_habits()
    index = CompletionIndex.build(app.habit_repo.list_completions())
    days = resolve_month(first.year, first.month, habits, index)

    click.echo(first.strftime("%B %Y"))
    click.echo(" ".join(f"{name[:2].title():>3}" for name in WEEKDAY_NAMES))
    for start in range(0, len(days), 7):
        week = days[start:start + 7]
        click.echo(
            " ".join(
                f"{cell.day.day:>2}{STATUS_MARKS[cell.status]}" if cell.in_month else "   "
                for cell in week
            )
        )
    summary = summarize_month(days)
    click.echo(f"Full days: {summary.full}  Partial: {summary.partial}  Missed: {summary.missed}")


@main.command("settings")
@click.option("--grace-days", type=click.IntRange(0, 2), default=None)
@click.option("--mode", type=click.Choice([mode.value for mode in StreakMode]), default=None)
@click.pass_obj
def streak_settings(app: AppContext, grace_days: Optional[int], mode: Optional[str]) -> None:
    """Show or change grace days and streak mode."""

    current = app.streak_settings()
    if grace_days is not None or mode is not None:
        current = save_streak_settings(
            app.settings_repo,
            StreakSettings(
                grace_days=current.grace_days if grace_days is None else grace_days,
                streak_mode=current.streak_mode if mode is None else mode,
            ),
        )
    click.echo(f"Grace days: {current.grace_days}")
    click.echo(f"Streak mode: {current.streak_mode.value}")


if __name__ == "__main__":  # pragma: no cover
    main()
