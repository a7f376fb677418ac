"""Functional core - pure business logic with no I/O."""

from .validation import Priority, ValidationError
from .tasks import Task, filter_tasks
from .schedule import DAYS, ScheduleEntry, entries_for_day, week_view
from .assignments import Assignment, sort_by_due
from .stats import Stats, TimerCount
from .timer import Mode, PhaseComplete, TimerSettings, TimerState
from .dashboard import (
    DashboardSummary,
    UpcomingItem,
    assemble_dashboard,
    completion_percent,
    due_soon_count,
    pending_count,
    upcoming_feed,
)

__all__ = [
    # Validation
    "Priority",
    "ValidationError",
    # Tasks
    "Task",
    "filter_tasks",
    # Schedule
    "DAYS",
    "ScheduleEntry",
    "entries_for_day",
    "week_view",
    # Assignments
    "Assignment",
    "sort_by_due",
    # Stats
    "Stats",
    "TimerCount",
    # Timer
    "Mode",
    "PhaseComplete",
    "TimerSettings",
    "TimerState",
    # Dashboard
    "DashboardSummary",
    "UpcomingItem",
    "assemble_dashboard",
    "completion_percent",
    "due_soon_count",
    "pending_count",
    "upcoming_feed",
]
