"""Pure dashboard aggregation logic - no I/O dependencies."""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .assignments import Assignment
from .stats import Stats
from .tasks import Task

DUE_SOON_DAYS = 7


@dataclass(frozen=True)
class UpcomingItem:
    """A task or assignment in the upcoming feed."""

    kind: str  # "Task" or "Assignment"
    id: str
    title: str
    due: date

    def to_dict(self) -> dict:
        return {"type": self.kind, "id": self.id, "title": self.title, "due": self.due.isoformat()}


@dataclass
class DashboardSummary:
    """Assembled dashboard data ready for rendering."""

    pending_count: int
    due_soon_count: int
    completion_percent: int
    study_minutes: int
    sessions: int
    upcoming: list[UpcomingItem]

    def to_dict(self) -> dict:
        return {
            "pending": self.pending_count,
            "due_soon": self.due_soon_count,
            "completion_percent": self.completion_percent,
            "study_minutes": self.study_minutes,
            "sessions": self.sessions,
            "upcoming": [item.to_dict() for item in self.upcoming],
        }


def pending_count(tasks: list[Task]) -> int:
    """Number of tasks not yet done."""
    return sum(1 for t in tasks if not t.done)


def due_soon_count(
    assignments: list[Assignment],
    now: datetime | None = None,
    days: int = DUE_SOON_DAYS,
) -> int:
    """
    Undone assignments due within `days` of now.

    Only the upper bound is checked, so overdue assignments still count.
    """
    now = now or datetime.now()
    window = timedelta(days=days)
    return sum(1 for a in assignments if not a.done and a.is_due_within(window, now))


def completion_percent(tasks: list[Task], assignments: list[Assignment]) -> int:
    """Share of tasks and assignments done, as a whole percentage (0 when empty)."""
    total = len(tasks) + len(assignments) or 1
    completed = sum(1 for t in tasks if t.done) + sum(1 for a in assignments if a.done)
    # Half-up rounding so 12.5 shows as 13.
    return math.floor(completed * 100 / total + 0.5)


def upcoming_feed(
    tasks: list[Task],
    assignments: list[Assignment],
    now: datetime | None = None,
    days: int = DUE_SOON_DAYS,
) -> list[UpcomingItem]:
    """
    Undone tasks (with a due date) and assignments due within the window.

    Sorted by due date; ties keep tasks before assignments and stored order.
    Pure function - no I/O.
    """
    now = now or datetime.now()
    window = timedelta(days=days)
    items = [
        UpcomingItem(kind="Task", id=t.id, title=t.text, due=t.due)
        for t in tasks
        if not t.done and t.due and t.is_due_within(window, now)
    ]
    items += [
        UpcomingItem(kind="Assignment", id=a.id, title=a.title, due=a.due)
        for a in assignments
        if not a.done and a.is_due_within(window, now)
    ]
    return sorted(items, key=lambda item: item.due)


def assemble_dashboard(
    tasks: list[Task],
    assignments: list[Assignment],
    stats: Stats,
    now: datetime | None = None,
    days: int = DUE_SOON_DAYS,
) -> DashboardSummary:
    """
    Assemble dashboard data from current snapshots.

    Pure function - no I/O. Recomputed from scratch on every call.
    """
    now = now or datetime.now()
    return DashboardSummary(
        pending_count=pending_count(tasks),
        due_soon_count=due_soon_count(assignments, now, days),
        completion_percent=completion_percent(tasks, assignments),
        study_minutes=stats.study_minutes,
        sessions=stats.sessions,
        upcoming=upcoming_feed(tasks, assignments, now, days),
    )


def format_upcoming_line(item: UpcomingItem, as_of: date | None = None) -> str:
    """Format a single upcoming item for display."""
    as_of = as_of or date.today()
    days_until = (item.due - as_of).days
    if days_until < 0:
        when = f"OVERDUE by {-days_until}d"
    elif days_until == 0:
        when = "due TODAY"
    else:
        when = f"due in {days_until}d"
    return f"- {item.title} ({item.kind}, {when})"
