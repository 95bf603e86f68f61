"""Typer CLI for Studybook — inspect projections and run the focus timer."""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Annotated

import typer
from result import Err

from studybook.config import Config
from studybook.data.dates import format_date_label
from studybook.data.durations import format_duration
from studybook.models.timer import CompletionEvent, TimerState
from studybook.services.container import AppContext
from studybook.services.project_service import SubtaskDraft, project_stats

app = typer.Typer(
    name="studybook",
    help="Studybook — focus timer with session-based project tracking.",
    no_args_is_help=True,
)

_STATUS_MARKS = {"success": "+", "failed": "x", "pending": "."}


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", help="Directory holding studybook.json"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Load the snapshot and share the application context with commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = Config(data_dir=data_dir) if data_dir else Config()
    ctx.obj = config


def _load_context(config: Config) -> AppContext:
    context = AppContext.create(config)
    loaded = context.load_file()
    if isinstance(loaded, Err):
        typer.echo(loaded.err_value, err=True)
        raise typer.Exit(code=1)
    return context


def _save_context(context: AppContext) -> None:
    saved = context.save_file()
    if isinstance(saved, Err):
        typer.echo(saved.err_value, err=True)
        raise typer.Exit(code=1)


@app.command()
def status(ctx: typer.Context) -> None:
    """Show projects with progress and today's daily status."""
    context = _load_context(ctx.obj)
    today = context.clock()
    pomodoro_minutes = context.settings.current.durations.pomodoro
    projects = context.projects.visible_projects(today)
    if not projects:
        typer.echo("No projects yet.")
        return
    for project in projects:
        stats = project_stats(project, pomodoro_minutes)
        kind = "daily" if project.is_daily else f"{context.projection.span_days(project)}d"
        typer.echo(
            f"{project.id}  {project.name} [{kind}] "
            f"{stats.completed_sessions}/{stats.total_sessions} "
            f"spent {stats.time_spent} left {stats.time_remaining}"
        )
        if project.is_daily:
            today_status = context.projection.status_on(project, today)
            if today_status is not None:
                typer.echo(f"    today: {today_status.done}/{today_status.target} ({today_status.status})")
        for task in context.projection.daily_subtask_progress(project, today):
            typer.echo(f"    {task.subtask_id}  {task.name}: {task.completed}/{task.target}")


@app.command()
def timeline(ctx: typer.Context) -> None:
    """Print the Gantt timeline of one-off projects."""
    context = _load_context(ctx.obj)
    result = context.timeline.build()
    if not result.axis:
        typer.echo("No projects to display in timeline.")
        return
    typer.echo(f"{result.axis[0]} .. {result.axis[-1]} ({len(result.axis)} days)")
    for bar in result.bars:
        row = [" "] * len(result.axis)
        for i in range(bar.start_index, min(len(row), bar.start_index + bar.span_days)):
            row[i] = "#"
        if result.today_index is not None:
            row[result.today_index] = "|" if row[result.today_index] == " " else "@"
        typer.echo(f"{bar.name[:20]:<20} {''.join(row)} {round(bar.fill * 100)}%")
        for sub in bar.subtasks:
            typer.echo(
                f"  - {sub.name[:16]:<16} {sub.start_date} -> {sub.end_date} "
                f"({sub.span_days:.2f}d, {round(sub.fill * 100)}%)"
            )
    typer.echo(f"Duration = sum(target sessions) / {result.daily_target} (daily target)")


@app.command("calendar")
def calendar_cmd(
    ctx: typer.Context,
    month: Annotated[str | None, typer.Option("--month", help="Month as YYYY-MM")] = None,
) -> None:
    """Print the monthly calendar feed."""
    context = _load_context(ctx.obj)
    today = context.clock()
    if month:
        try:
            parsed = datetime.strptime(month, "%Y-%m")
        except ValueError:
            typer.echo(f"Invalid month: {month}", err=True)
            raise typer.Exit(code=2) from None
        year, month_num = parsed.year, parsed.month
    else:
        year, month_num = today.year, today.month

    feed = context.projection.calendar_month(year, month_num, today)
    typer.echo(feed.label)
    for day in feed.days:
        marks = "".join(_STATUS_MARKS[s.status] for s in day.daily_statuses)
        flag = "*" if day.is_today else " "
        minutes = f"{int(day.focus_minutes // 60)}h{round(day.focus_minutes % 60)}m" if day.focus_minutes else ""
        typer.echo(f"{flag}{day.day.day:>2} {minutes:>7} {len(day.project_ids)} active {marks}")


@app.command()
def chart(ctx: typer.Context) -> None:
    """Print focus minutes per day, grouped by month."""
    context = _load_context(ctx.obj)
    charts = context.analytics.get_charts().unwrap()
    if not charts:
        typer.echo("No performance data available.")
        return
    for data in charts:
        typer.echo(f"{data.group.label}  (ticks: {', '.join(map(str, data.ticks))})")
        top = data.ticks[-1] or 1
        for point in data.group.points:
            width = round(point.minutes / top * 40)
            typer.echo(f"  {point.date_label:<18} {'#' * width} {round(point.minutes)}m")


@app.command("add-project")
def add_project(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Project name")],
    subtask: Annotated[
        list[str] | None,
        typer.Option("--subtask", "-s", help="Subtask as NAME or NAME:TARGET"),
    ] = None,
    until: Annotated[
        str | None,
        typer.Option("--until", help="Make the project daily until YYYY-MM-DD"),
    ] = None,
) -> None:
    """Create a project."""
    context = _load_context(ctx.obj)
    drafts = [_parse_draft(raw) for raw in subtask or []]
    end: date | None = None
    if until:
        try:
            end = date.fromisoformat(until)
        except ValueError:
            typer.echo(f"Invalid date: {until}", err=True)
            raise typer.Exit(code=2) from None
    created = context.projects.create_project(
        name, drafts, is_daily=end is not None, recurrence_end_date=end
    )
    if isinstance(created, Err):
        typer.echo(created.err_value, err=True)
        raise typer.Exit(code=1)
    _save_context(context)
    typer.echo(f"Created {created.ok_value.name} ({created.ok_value.id})")


@app.command()
def run(
    ctx: typer.Context,
    project: Annotated[str | None, typer.Option("--project", "-p", help="Project ID")] = None,
    subtask: Annotated[str | None, typer.Option("--subtask", "-t", help="Subtask ID")] = None,
    sessions: Annotated[int, typer.Option("--sessions", "-n", min=1, help="Pomodoros to run")] = 1,
) -> None:
    """Run the countdown until the given number of pomodoros complete."""
    context = _load_context(ctx.obj)
    if project and isinstance(context.projects.get_project(project), Err):
        typer.echo(f"Project {project} not found", err=True)
        raise typer.Exit(code=1)
    context.timer.set_active(project, subtask)
    asyncio.run(_run_timer(context, sessions))


async def _run_timer(context: AppContext, sessions: int) -> None:
    """Drive the timer from the asyncio ticker, saving after each pomodoro."""
    done = asyncio.Event()
    timer = context.timer
    target = timer.completed_pomodoro_count + sessions
    failure: str | None = None

    def on_tick(state: TimerState) -> None:
        typer.echo(f"\r{state.mode:<11} {format_duration(state.time_left)}", nl=False)

    def on_complete(event: CompletionEvent) -> None:
        nonlocal failure
        typer.echo(f"\n{event.title} {event.body}")
        if event.logged:
            saved = context.save_file()
            if isinstance(saved, Err):
                failure = saved.err_value
                timer.pause()
                done.set()
                return
        if event.logged and event.completed_pomodoro_count >= target:
            timer.pause()
            done.set()
        elif not timer.is_active:
            timer.start()

    timer.set_on_tick(on_tick)
    timer.set_on_complete(on_complete)
    typer.echo(f"Starting on {format_date_label(context.clock())}")
    timer.start()
    try:
        await done.wait()
    finally:
        timer.pause()
    if failure is not None:
        typer.echo(failure, err=True)
        raise typer.Exit(code=1)


def _parse_draft(raw: str) -> SubtaskDraft:
    name, sep, target = raw.rpartition(":")
    if sep and target.strip().isdigit():
        return SubtaskDraft(name=name, target=int(target))
    return SubtaskDraft(name=raw)
