"""Aggregate study statistics - no I/O dependencies."""

from dataclasses import dataclass, replace


def _non_negative_int(value: object) -> int:
    try:
        n = int(value or 0)
    except (TypeError, ValueError):
        return 0
    return max(0, n)


@dataclass(frozen=True)
class Stats:
    """Running totals, only ever increased by completed work sessions."""

    study_minutes: int = 0
    sessions: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Stats":
        return cls(
            study_minutes=_non_negative_int(data.get("studyMinutes")),
            sessions=_non_negative_int(data.get("sessions")),
        )

    def to_dict(self) -> dict:
        return {"studyMinutes": self.study_minutes, "sessions": self.sessions}

    def record_session(self, minutes: int) -> "Stats":
        """Totals after one more completed work session of `minutes`."""
        return replace(
            self,
            study_minutes=self.study_minutes + max(0, minutes),
            sessions=self.sessions + 1,
        )


@dataclass(frozen=True)
class TimerCount:
    """Persisted number of completed focus sessions."""

    count: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "TimerCount":
        return cls(count=_non_negative_int(data.get("count")))

    def to_dict(self) -> dict:
        return {"count": self.count}
