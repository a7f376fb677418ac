"""StudyFlow CLI - personal study planner."""

import json
import logging
import sys
import threading
from datetime import date

import click

from .config import load_config
from .core.dashboard import DashboardSummary, format_upcoming_line
from .core.schedule import DAYS
from .core.timer import Mode, PhaseComplete, TimerSettings, TimerState
from .core.validation import ValidationError
from .planner import Planner, open_planner
from .ports.store import StorageError
from .ticker import Ticker

DASHBOARD_JOB_ID = "dashboard_refresh"


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _due_text(due: date | None) -> str:
    return f"Due {due.isoformat()}" if due else "No due date"


@click.group()
@click.option("--data-dir", envvar="STUDYFLOW_DATA_DIR", default=None,
              help="Directory for stored documents (overrides config)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="studyflow")
@click.pass_context
def main(ctx, data_dir: str | None, debug: bool):
    """StudyFlow - Personal Study Planner."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    config = load_config()
    if data_dir:
        config.data_dir = data_dir
    ctx.obj = {"config": config, "planner": open_planner(config)}


def _planner(ctx) -> Planner:
    return ctx.obj["planner"]


# ============== Dashboard ==============


def _show_dashboard(summary: DashboardSummary, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(summary.to_dict(), indent=2))
        return

    click.echo(f"Pending tasks:      {summary.pending_count}")
    click.echo(f"Assignments due:    {summary.due_soon_count}")
    click.echo(f"Study time:         {summary.study_minutes}m")
    click.echo(f"Progress:           {summary.completion_percent}% complete")
    click.echo()
    click.echo("Upcoming:")
    if not summary.upcoming:
        click.echo("  No upcoming items")
        return
    for item in summary.upcoming:
        click.echo(f"  {format_upcoming_line(item)}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--watch", is_flag=True, help="Keep refreshing until Ctrl+C")
@click.pass_context
def dashboard(ctx, as_json: bool, watch: bool):
    """Show counts, progress and upcoming items."""
    planner = _planner(ctx)
    _show_dashboard(planner.dashboard(), as_json)
    if not watch:
        return

    def refresh() -> None:
        click.echo()
        _show_dashboard(planner.dashboard(), as_json)

    stop = threading.Event()
    with Ticker() as ticker:
        ticker.every(ctx.obj["config"].dashboard_refresh_seconds, refresh, DASHBOARD_JOB_ID)
        try:
            while not stop.wait(0.5):
                pass
        except KeyboardInterrupt:
            click.echo("\nStopped.")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def stats(ctx, as_json: bool):
    """Show study totals."""
    planner = _planner(ctx)
    totals = planner.stats.get()
    count = planner.counter.get().count
    if as_json:
        click.echo(json.dumps({**totals.to_dict(), "count": count}, indent=2))
        return
    click.echo(f"Study minutes: {totals.study_minutes}")
    click.echo(f"Sessions:      {totals.sessions}")
    click.echo(f"Pomodoros:     {count}")


# ============== Tasks ==============


@main.group()
def todo():
    """Manage tasks."""
    pass


@todo.command("add")
@click.argument("text")
@click.option("--priority", "-p", type=click.Choice(["low", "medium", "high"]), default="medium")
@click.option("--due", "-d", default=None, help="Due date (YYYY-MM-DD)")
@click.pass_context
def todo_add(ctx, text: str, priority: str, due: str | None):
    """Add a task."""
    try:
        task = _planner(ctx).tasks.add(text, priority=priority, due=due)
    except (ValidationError, StorageError) as e:
        _fail(str(e))
    click.echo(f"Added {task.id}: {task.text}")


@todo.command("list")
@click.option("--status", type=click.Choice(["all", "active", "done"]), default="all")
@click.option("--search", "-s", "query", default="", help="Only tasks containing this text")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def todo_list(ctx, status: str, query: str, as_json: bool):
    """List tasks."""
    tasks = _planner(ctx).tasks.search(status, query)
    if as_json:
        click.echo(json.dumps([t.to_dict() for t in tasks], indent=2))
        return
    if not tasks:
        click.echo("No tasks")
        return
    for t in tasks:
        check = "x" if t.done else " "
        click.echo(f"[{check}] {t.id}  {t.text}  ({t.priority.value.capitalize()} • {_due_text(t.due)})")


@todo.command("done")
@click.argument("task_id")
@click.pass_context
def todo_done(ctx, task_id: str):
    """Toggle a task between done and not done."""
    task = _planner(ctx).tasks.toggle_done(task_id)
    if task is None:
        _fail(f"No task with id {task_id}")
    click.echo(f"{task.id} {'done' if task.done else 'not done'}")


@todo.command("edit")
@click.argument("task_id")
@click.argument("text")
@click.pass_context
def todo_edit(ctx, task_id: str, text: str):
    """Change a task's text."""
    try:
        task = _planner(ctx).tasks.edit_text(task_id, text)
    except (ValidationError, StorageError) as e:
        _fail(str(e))
    if task is None:
        _fail(f"No task with id {task_id}")
    click.echo(f"Updated {task.id}: {task.text}")


@todo.command("delete")
@click.argument("task_id")
@click.pass_context
def todo_delete(ctx, task_id: str):
    """Delete a task."""
    if not _planner(ctx).tasks.remove(task_id):
        _fail(f"No task with id {task_id}")
    click.echo(f"Deleted {task_id}")


# ============== Schedule ==============


@main.group()
def schedule():
    """Manage the weekly class schedule."""
    pass


@schedule.command("add")
@click.argument("name")
@click.option("--day", required=True, type=click.Choice(list(DAYS), case_sensitive=False))
@click.option("--start", required=True, help="Start time (HH:MM)")
@click.option("--end", required=True, help="End time (HH:MM)")
@click.option("--location", default=None)
@click.pass_context
def schedule_add(ctx, name: str, day: str, start: str, end: str, location: str | None):
    """Add a class to the weekly schedule."""
    try:
        entry = _planner(ctx).schedule.add(name, day, start, end, location)
    except (ValidationError, StorageError) as e:
        _fail(str(e))
    click.echo(f"Added {entry.id}: {entry.name} {entry.day} {entry.format_time()}")


@schedule.command("show")
@click.option("--day", default=None, type=click.Choice(list(DAYS), case_sensitive=False))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def schedule_show(ctx, day: str | None, as_json: bool):
    """Show the week (or one day)."""
    repo = _planner(ctx).schedule
    week = {day.capitalize(): repo.for_day(day)} if day else repo.week()
    if as_json:
        click.echo(json.dumps({d: [e.to_dict() for e in entries] for d, entries in week.items()}, indent=2))
        return
    for d, entries in week.items():
        click.echo(f"### {d}")
        if not entries:
            click.echo("  No classes")
        for e in entries:
            loc = f" • {e.location}" if e.location else ""
            click.echo(f"  {e.format_time()}  {e.name}{loc}  [{e.id}]")


@schedule.command("delete")
@click.argument("entry_id")
@click.pass_context
def schedule_delete(ctx, entry_id: str):
    """Remove a class."""
    if not _planner(ctx).schedule.remove(entry_id):
        _fail(f"No class with id {entry_id}")
    click.echo(f"Deleted {entry_id}")


# ============== Assignments ==============


@main.group()
def assignments():
    """Manage assignments."""
    pass


@assignments.command("add")
@click.argument("title")
@click.option("--subject", required=True)
@click.option("--due", required=True, help="Due date (YYYY-MM-DD)")
@click.option("--priority", "-p", type=click.Choice(["low", "medium", "high"]), default="medium")
@click.option("--notes", default=None)
@click.pass_context
def assignments_add(ctx, title: str, subject: str, due: str, priority: str, notes: str | None):
    """Add an assignment."""
    try:
        a = _planner(ctx).assignments.add(title, subject, due, priority=priority, notes=notes)
    except (ValidationError, StorageError) as e:
        _fail(str(e))
    click.echo(f"Added {a.id}: {a.title} (due {a.due.isoformat()})")


@assignments.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def assignments_list(ctx, as_json: bool):
    """List assignments by due date."""
    items = _planner(ctx).assignments.by_due()
    if as_json:
        click.echo(json.dumps([a.to_dict() for a in items], indent=2))
        return
    if not items:
        click.echo("No assignments yet")
        return
    for a in items:
        check = "x" if a.done else " "
        click.echo(f"[{check}] {a.id}  {a.title} • {a.subject}  (Due {a.due.isoformat()} • {a.priority.value})")
        if a.notes:
            click.echo(f"      {a.notes}")


@assignments.command("toggle")
@click.argument("assignment_id")
@click.pass_context
def assignments_toggle(ctx, assignment_id: str):
    """Mark an assignment done or undone."""
    a = _planner(ctx).assignments.toggle_done(assignment_id)
    if a is None:
        _fail(f"No assignment with id {assignment_id}")
    click.echo(f"{a.id} {'done' if a.done else 'not done'}")


@assignments.command("delete")
@click.argument("assignment_id")
@click.pass_context
def assignments_delete(ctx, assignment_id: str):
    """Delete an assignment."""
    if not _planner(ctx).assignments.remove(assignment_id):
        _fail(f"No assignment with id {assignment_id}")
    click.echo(f"Deleted {assignment_id}")


# ============== Pomodoro ==============


@main.command()
@click.option("--work", "work_minutes", default=None, help="Work minutes (default from config)")
@click.option("--break", "break_minutes", default=None, help="Break minutes (default from config)")
@click.pass_context
def pomodoro(ctx, work_minutes: str | None, break_minutes: str | None):
    """Run one work session followed by its break."""
    config = ctx.obj["config"]
    planner = _planner(ctx)
    timer = planner.timer
    settings = TimerSettings.coerce(
        work_minutes if work_minutes is not None else config.work_minutes,
        break_minutes if break_minutes is not None else config.break_minutes,
    )
    finished = threading.Event()

    def show(state: TimerState) -> None:
        click.echo(f"\r{state.mode.value:5} {timer.display()}", nl=False)

    def phase_done(completed: PhaseComplete) -> None:
        click.echo(f"\n{completed.message}")
        if completed.mode is Mode.BREAK:
            finished.set()

    timer.on_tick(show)
    timer.on_phase_complete(phase_done)

    with Ticker() as ticker:
        timer.ticker = ticker
        try:
            timer.start(settings)
            show(timer.state)
            while not finished.wait(0.5) and timer.running:
                pass
        except KeyboardInterrupt:
            timer.pause()
            click.echo("\nPaused.")
        else:
            # Phase listeners run just after the state flips to idle
            if not finished.wait(1):
                _fail("timer stopped: the finished session could not be saved")

    click.echo(f"Sessions completed: {timer.session_count()}")


if __name__ == "__main__":
    main()
