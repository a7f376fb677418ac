"""Wiring layer between the storage, repositories, timer and whatever renders them.

Every query re-reads the repositories and recomputes; nothing is cached.
"""

from dataclasses import dataclass, field
from datetime import datetime

from .adapters.json_file_store import JsonFileStore
from .config import Config
from .core.dashboard import (
    DUE_SOON_DAYS,
    DashboardSummary,
    UpcomingItem,
    assemble_dashboard,
    completion_percent,
    due_soon_count,
    pending_count,
    upcoming_feed,
)
from .core.timer import TimerSettings
from .events import EventBus
from .ports.store import KeyValueStore
from .ports.ticks import TickSource
from .repositories import (
    AssignmentRepository,
    ScheduleRepository,
    StatsRepository,
    TaskRepository,
    TimerCountRepository,
)
from .timer import FocusTimer


@dataclass
class Planner:
    """All repositories, the focus timer and the dashboard queries over one store."""

    store: KeyValueStore
    tasks: TaskRepository
    schedule: ScheduleRepository
    assignments: AssignmentRepository
    stats: StatsRepository
    counter: TimerCountRepository
    timer: FocusTimer
    events: EventBus = field(default_factory=EventBus)
    due_soon_days: int = DUE_SOON_DAYS

    @classmethod
    def open(
        cls,
        store: KeyValueStore,
        settings: TimerSettings | None = None,
        ticker: TickSource | None = None,
        due_soon_days: int = DUE_SOON_DAYS,
    ) -> "Planner":
        events = EventBus()
        stats = StatsRepository(store, events)
        counter = TimerCountRepository(store, events)
        return cls(
            store=store,
            tasks=TaskRepository(store, events),
            schedule=ScheduleRepository(store, events),
            assignments=AssignmentRepository(store, events),
            stats=stats,
            counter=counter,
            timer=FocusTimer(counter, stats, settings=settings, ticker=ticker),
            events=events,
            due_soon_days=due_soon_days,
        )

    # ---- dashboard queries ----

    def pending_count(self) -> int:
        return pending_count(self.tasks.list())

    def due_soon_count(self, now: datetime | None = None) -> int:
        return due_soon_count(self.assignments.list(), now, self.due_soon_days)

    def completion_percent(self) -> int:
        return completion_percent(self.tasks.list(), self.assignments.list())

    def upcoming_feed(self, now: datetime | None = None) -> list[UpcomingItem]:
        return upcoming_feed(self.tasks.list(), self.assignments.list(), now, self.due_soon_days)

    def dashboard(self, now: datetime | None = None) -> DashboardSummary:
        return assemble_dashboard(
            self.tasks.list(),
            self.assignments.list(),
            self.stats.get(),
            now,
            self.due_soon_days,
        )


def get_store(config: Config) -> JsonFileStore:
    """Resolve the document store from config."""
    return JsonFileStore(config.data_path)


def open_planner(config: Config, ticker: TickSource | None = None) -> Planner:
    """Planner over the configured data directory with configured timer lengths."""
    return Planner.open(
        get_store(config),
        settings=TimerSettings.coerce(config.work_minutes, config.break_minutes),
        ticker=ticker,
        due_soon_days=config.due_soon_days,
    )
