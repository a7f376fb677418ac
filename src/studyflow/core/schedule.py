"""Pure weekly class schedule logic - no I/O dependencies."""

import re
from dataclasses import dataclass

from .validation import ValidationError, optional_text, require_text

DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_DAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_day(value: object) -> str:
    """Normalize a weekday to its three-letter form ("monday" -> "Mon")."""
    if isinstance(value, str):
        key = value.strip().lower()
        for day, name in zip(DAYS, _DAY_NAMES):
            if key in (day.lower(), name):
                return day
    raise ValidationError("day", f"must be one of {', '.join(DAYS)}, got {value!r}")


def parse_time(value: object, field: str) -> str:
    """Normalize a clock time to zero-padded "HH:MM" so it sorts lexicographically."""
    text = require_text(value, field)
    match = _TIME_RE.match(text)
    if not match:
        raise ValidationError(field, f"must look like HH:MM, got {text!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValidationError(field, f"is not a valid time: {text!r}")
    return f"{hour:02d}:{minute:02d}"


@dataclass
class ScheduleEntry:
    """A recurring weekly class slot."""

    id: str
    name: str
    day: str
    start: str
    end: str
    location: str | None = None

    EDITABLE = frozenset({"name", "day", "start", "end", "location"})

    @classmethod
    def build(
        cls,
        id: str,
        name: str,
        day: str,
        start: str,
        end: str,
        location: str | None = None,
    ) -> "ScheduleEntry":
        """Validate and normalize raw fields into a ScheduleEntry."""
        return cls(
            id=require_text(id, "id"),
            name=require_text(name, "name"),
            day=parse_day(day),
            start=parse_time(start, "start"),
            end=parse_time(end, "end"),
            location=optional_text(location, "location"),
        )

    @classmethod
    def from_dict(cls, data: dict) -> "ScheduleEntry":
        """Create ScheduleEntry from a stored document."""
        return cls.build(
            id=data["id"],
            name=data["name"],
            day=data["day"],
            start=data["start"],
            end=data["end"],
            location=data.get("location"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "day": self.day,
            "start": self.start,
            "end": self.end,
            "location": self.location,
        }

    def format_time(self) -> str:
        return f"{self.start} - {self.end}"


def entries_for_day(entries: list[ScheduleEntry], day: str) -> list[ScheduleEntry]:
    """
    Entries on one weekday ordered by start time.

    Pure function - no I/O. Stable for entries sharing a start time.
    """
    day = parse_day(day)
    return sorted((e for e in entries if e.day == day), key=lambda e: e.start)


def week_view(entries: list[ScheduleEntry]) -> dict[str, list[ScheduleEntry]]:
    """Every weekday Mon..Sun mapped to its ordered entries (possibly empty)."""
    return {day: entries_for_day(entries, day) for day in DAYS}
