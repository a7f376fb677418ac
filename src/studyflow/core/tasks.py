"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from .validation import Priority, ValidationError, parse_bool, parse_date, require_text

TASK_STATUSES = ("all", "active", "done")


@dataclass
class Task:
    """A to-do item."""

    id: str
    text: str
    priority: Priority
    due: date | None
    done: bool
    created: int  # epoch milliseconds

    EDITABLE = frozenset({"text", "priority", "due", "done"})

    @classmethod
    def build(
        cls,
        id: str,
        text: str,
        priority: Priority | str | None = None,
        due: date | str | None = None,
        done: bool = False,
        created: int = 0,
    ) -> "Task":
        """Validate and normalize raw fields into a Task."""
        if not isinstance(created, int) or isinstance(created, bool) or created < 0:
            raise ValidationError("created", f"must be a timestamp, got {created!r}")
        return cls(
            id=require_text(id, "id"),
            text=require_text(text, "text"),
            priority=Priority.parse(priority, default=Priority.MEDIUM),
            due=parse_date(due, "due"),
            done=parse_bool(done, "done"),
            created=created,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from a stored document."""
        return cls.build(
            id=data["id"],
            text=data["text"],
            priority=data.get("priority"),
            due=data.get("due"),
            done=bool(data.get("done", False)),
            created=int(data.get("created") or 0),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "priority": self.priority.value,
            "due": self.due.isoformat() if self.due else None,
            "done": self.done,
            "created": self.created,
        }

    @property
    def due_at(self) -> datetime | None:
        """Start of the due day."""
        if not self.due:
            return None
        return datetime.combine(self.due, time.min)

    def is_due_within(self, window: timedelta, now: datetime) -> bool:
        """Due no later than now + window. Overdue counts; no due date never does."""
        if self.due_at is None:
            return False
        return self.due_at - now <= window


def filter_tasks(tasks: list[Task], status: str = "all", query: str = "") -> list[Task]:
    """
    Filter by completion status and a case-insensitive text search.

    Pure function - no I/O.
    """
    if status not in TASK_STATUSES:
        raise ValidationError("status", f"must be one of {', '.join(TASK_STATUSES)}")
    q = query.strip().lower()
    out = []
    for t in tasks:
        if status == "active" and t.done:
            continue
        if status == "done" and not t.done:
            continue
        if q and q not in t.text.lower():
            continue
        out.append(t)
    return out
