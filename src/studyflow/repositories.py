"""
Entity repositories - typed CRUD views over the key-value store.

Each collection lives in one JSON document. Every mutation reads the whole
collection, validates the change, and writes the whole collection back.
"""

from __future__ import annotations

import dataclasses
import logging
import secrets
import string
import time
from typing import Any, Callable, ClassVar, Generic, TypeVar

from .core.assignments import Assignment, sort_by_due
from .core.schedule import ScheduleEntry, entries_for_day, week_view
from .core.stats import Stats, TimerCount
from .core.tasks import Task, filter_tasks
from .core.validation import ValidationError, reject_unknown
from .events import ChangeEvent, EventBus
from .ports.store import KeyValueStore

logger = logging.getLogger(__name__)

# Namespaced, versioned document keys.
STORAGE_KEYS = {
    "tasks": "sf_todos_v1",
    "schedule": "sf_schedule_v1",
    "assignments": "sf_assignments_v1",
    "timerState": "sf_pomodoro_v1",
    "stats": "sf_stats_v1",
}

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_LENGTH = 7

E = TypeVar("E")


def generate_id(prefix: str, taken: set[str] | None = None) -> str:
    """Random "<prefix>_<7 base-36 chars>" id not already in `taken`."""
    taken = taken or set()
    while True:
        candidate = prefix + "_" + "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))
        if candidate not in taken:
            return candidate


def _now_ms() -> int:
    return int(time.time() * 1000)


class _CollectionRepository(Generic[E]):
    """Shared read-modify-write plumbing for one collection document."""

    collection: ClassVar[str]
    entity_cls: ClassVar[type]
    id_prefix: ClassVar[str]

    def __init__(self, store: KeyValueStore, events: EventBus | None = None, key: str | None = None):
        self.store = store
        self.events = events
        self.key = key or STORAGE_KEYS[self.collection]

    # ---- low-level helpers ----

    def _load(self) -> list[E]:
        raw = self.store.get(self.key, [])
        if not isinstance(raw, list):
            logger.warning(f"{self.key} is not a list ({type(raw).__name__}); treating as empty")
            return []
        items: list[E] = []
        for doc in raw:
            try:
                items.append(self.entity_cls.from_dict(doc))
            except (ValidationError, KeyError, TypeError, AttributeError, ValueError) as e:
                logger.warning(f"Skipping malformed {self.collection} record {doc!r}: {e}")
        return items

    def _save(self, items: list[E]) -> None:
        self.store.put(self.key, [item.to_dict() for item in items])

    def _emit(self, action: str, entity_id: str | None) -> None:
        if self.events is not None:
            self.events.emit(ChangeEvent(collection=self.collection, action=action, entity_id=entity_id))

    def _insert(self, **fields: Any) -> E:
        items = self._load()
        entity = self.entity_cls.build(
            id=generate_id(self.id_prefix, {item.id for item in items}),
            **fields,
        )
        items.append(entity)
        self._save(items)
        logger.debug(f"Added {self.collection} {entity.id}")
        self._emit("added", entity.id)
        return entity

    # ---- public API ----

    def list(self, predicate: Callable[[E], bool] | None = None) -> list[E]:
        """All entities in stored order, optionally filtered."""
        items = self._load()
        if predicate is None:
            return items
        return [item for item in items if predicate(item)]

    def get(self, entity_id: str) -> E | None:
        for item in self._load():
            if item.id == entity_id:
                return item
        return None

    def update(self, entity_id: str, **patch: Any) -> E | None:
        """
        Apply a partial change and re-validate the whole entity.

        Returns the updated entity, or None if the id is unknown (nothing written).
        """
        reject_unknown(patch, self.entity_cls.EDITABLE)
        items = self._load()
        for index, item in enumerate(items):
            if item.id != entity_id:
                continue
            fields = {f.name: getattr(item, f.name) for f in dataclasses.fields(item)}
            fields.update(patch)
            updated = self.entity_cls.build(**fields)
            items[index] = updated
            self._save(items)
            logger.debug(f"Updated {self.collection} {entity_id}: {sorted(patch)}")
            self._emit("updated", entity_id)
            return updated
        logger.debug(f"Update of unknown {self.collection} id {entity_id}")
        return None

    def remove(self, entity_id: str) -> bool:
        """Delete an entity. Returns False if it did not exist."""
        items = self._load()
        kept = [item for item in items if item.id != entity_id]
        if len(kept) == len(items):
            return False
        self._save(kept)
        logger.debug(f"Removed {self.collection} {entity_id}")
        self._emit("removed", entity_id)
        return True


class _CompletableRepository(_CollectionRepository[E]):
    """Collections whose entities carry a `done` flag."""

    def toggle_done(self, entity_id: str) -> E | None:
        """Flip `done`. Returns the updated entity, or None if the id is unknown."""
        item = self.get(entity_id)
        if item is None:
            return None
        return self.update(entity_id, done=not item.done)


class TaskRepository(_CompletableRepository[Task]):
    """Tasks stored under the `tasks` document."""

    collection = "tasks"
    entity_cls = Task
    id_prefix = "t"

    def add(self, text: str, priority: str | None = None, due: Any = None) -> Task:
        return self._insert(text=text, priority=priority, due=due, done=False, created=_now_ms())

    def edit_text(self, entity_id: str, text: str) -> Task | None:
        return self.update(entity_id, text=text)

    def search(self, status: str = "all", query: str = "") -> list[Task]:
        """Tasks matching a status filter (all/active/done) and a text search."""
        return filter_tasks(self._load(), status, query)


class ScheduleRepository(_CollectionRepository[ScheduleEntry]):
    """Weekly class entries stored under the `schedule` document."""

    collection = "schedule"
    entity_cls = ScheduleEntry
    id_prefix = "c"

    def add(
        self,
        name: str,
        day: str,
        start: str,
        end: str,
        location: str | None = None,
    ) -> ScheduleEntry:
        return self._insert(name=name, day=day, start=start, end=end, location=location)

    def for_day(self, day: str) -> list[ScheduleEntry]:
        """Entries of one weekday, earliest start first."""
        return entries_for_day(self._load(), day)

    def week(self) -> dict[str, list[ScheduleEntry]]:
        """Mon..Sun mapped to their ordered entries."""
        return week_view(self._load())


class AssignmentRepository(_CompletableRepository[Assignment]):
    """Assignments stored under the `assignments` document."""

    collection = "assignments"
    entity_cls = Assignment
    id_prefix = "a"

    def add(
        self,
        title: str,
        subject: str,
        due: Any,
        priority: str | None = None,
        notes: str | None = None,
    ) -> Assignment:
        return self._insert(
            title=title, subject=subject, due=due, priority=priority, notes=notes, done=False
        )

    def by_due(self) -> list[Assignment]:
        """Assignments ordered by due date (stable)."""
        return sort_by_due(self._load())


class _DocumentRepository:
    """A single JSON object document."""

    collection: ClassVar[str]

    def __init__(self, store: KeyValueStore, events: EventBus | None = None, key: str | None = None):
        self.store = store
        self.events = events
        self.key = key or STORAGE_KEYS[self.collection]

    def _load_dict(self) -> dict:
        raw = self.store.get(self.key, {})
        if not isinstance(raw, dict):
            logger.warning(f"{self.key} is not an object ({type(raw).__name__}); using defaults")
            return {}
        return raw

    def _emit(self) -> None:
        if self.events is not None:
            self.events.emit(ChangeEvent(collection=self.collection, action="updated"))


class StatsRepository(_DocumentRepository):
    """Aggregate study statistics stored under the `stats` document."""

    collection = "stats"

    def get(self) -> Stats:
        return Stats.from_dict(self._load_dict())

    def record_session(self, minutes: int) -> Stats:
        """Add one completed work session of `minutes` and persist the totals."""
        stats = self.get().record_session(minutes)
        self.store.put(self.key, stats.to_dict())
        logger.debug(f"Stats now {stats.study_minutes}m over {stats.sessions} sessions")
        self._emit()
        return stats


class TimerCountRepository(_DocumentRepository):
    """Completed focus-session counter stored under the `timerState` document."""

    collection = "timerState"

    def get(self) -> TimerCount:
        return TimerCount.from_dict(self._load_dict())

    def increment(self) -> TimerCount:
        counter = TimerCount(count=self.get().count + 1)
        self.store.put(self.key, counter.to_dict())
        self._emit()
        return counter
