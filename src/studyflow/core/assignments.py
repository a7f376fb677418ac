"""Pure assignment domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from .validation import (
    Priority,
    optional_text,
    parse_bool,
    parse_date,
    require_text,
)


@dataclass
class Assignment:
    """A piece of coursework with a due date."""

    id: str
    title: str
    subject: str
    due: date
    priority: Priority
    notes: str | None = None
    done: bool = False

    EDITABLE = frozenset({"title", "subject", "due", "priority", "notes", "done"})

    @classmethod
    def build(
        cls,
        id: str,
        title: str,
        subject: str,
        due: date | str,
        priority: Priority | str | None = None,
        notes: str | None = None,
        done: bool = False,
    ) -> "Assignment":
        """Validate and normalize raw fields into an Assignment."""
        return cls(
            id=require_text(id, "id"),
            title=require_text(title, "title"),
            subject=require_text(subject, "subject"),
            due=parse_date(due, "due", required=True),
            priority=Priority.parse(priority, default=Priority.MEDIUM),
            notes=optional_text(notes, "notes"),
            done=parse_bool(done, "done"),
        )

    @classmethod
    def from_dict(cls, data: dict) -> "Assignment":
        """Create Assignment from a stored document."""
        return cls.build(
            id=data["id"],
            title=data["title"],
            subject=data["subject"],
            due=data["due"],
            priority=data.get("priority"),
            notes=data.get("notes"),
            done=bool(data.get("done", False)),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "subject": self.subject,
            "due": self.due.isoformat(),
            "priority": self.priority.value,
            "notes": self.notes,
            "done": self.done,
        }

    @property
    def due_at(self) -> datetime:
        """Start of the due day."""
        return datetime.combine(self.due, time.min)

    def is_due_within(self, window: timedelta, now: datetime) -> bool:
        """Due no later than now + window. There is no lower bound: overdue counts."""
        return self.due_at - now <= window


def sort_by_due(assignments: list[Assignment]) -> list[Assignment]:
    """Ascending due date, keeping stored order for ties."""
    return sorted(assignments, key=lambda a: a.due)
