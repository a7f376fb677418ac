"""
Pure focus-timer state machine - no I/O dependencies.

Every transition takes the current TimerState and returns a new one; the
caller owns the state and performs any persistence.
"""

from dataclasses import dataclass, replace
from enum import Enum

from .validation import ValidationError

DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5


class Mode(Enum):
    """Timer phase."""

    WORK = "work"
    BREAK = "break"


@dataclass(frozen=True)
class TimerSettings:
    """Phase lengths in minutes."""

    work_minutes: int = DEFAULT_WORK_MINUTES
    break_minutes: int = DEFAULT_BREAK_MINUTES

    def __post_init__(self):
        for name in ("work_minutes", "break_minutes"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValidationError(name, f"must be a positive whole number, got {value!r}")

    @classmethod
    def coerce(cls, work_minutes: object = None, break_minutes: object = None) -> "TimerSettings":
        """Lenient construction from form input: anything unusable falls back to the default."""
        return cls(
            work_minutes=_positive_int_or(work_minutes, DEFAULT_WORK_MINUTES),
            break_minutes=_positive_int_or(break_minutes, DEFAULT_BREAK_MINUTES),
        )

    def minutes_for(self, mode: Mode) -> int:
        return self.work_minutes if mode is Mode.WORK else self.break_minutes


def _positive_int_or(value: object, default: int) -> int:
    try:
        n = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default


@dataclass(frozen=True)
class TimerState:
    """Transient timer state. Only the completed-session count is persisted."""

    mode: Mode = Mode.WORK
    remaining: int = 0
    running: bool = False
    phase_minutes: int = 0


@dataclass(frozen=True)
class PhaseComplete:
    """Emitted when a phase runs out."""

    mode: Mode
    minutes: int

    @property
    def message(self) -> str:
        if self.mode is Mode.WORK:
            return "Work session finished! Time for a break."
        return "Break finished - back to work!"


def start(state: TimerState, settings: TimerSettings) -> TimerState:
    """Begin (or resume) counting down. A fresh phase reads its length from settings now."""
    if state.running:
        return state
    if state.remaining <= 0:
        minutes = settings.minutes_for(state.mode)
        return replace(state, remaining=minutes * 60, running=True, phase_minutes=minutes)
    return replace(state, running=True)


def pause(state: TimerState) -> TimerState:
    """Stop counting down, keeping the remaining time for resume."""
    return replace(state, running=False)


def reset(state: TimerState) -> TimerState:
    """Back to an idle work phase."""
    return TimerState()


def tick(state: TimerState, settings: TimerSettings) -> tuple[TimerState, PhaseComplete | None]:
    """
    Advance one second.

    When work runs out the break starts immediately; when the break runs out
    the timer goes idle in work mode and waits for a manual start.
    """
    if not state.running:
        return state, None

    remaining = max(0, state.remaining - 1)
    if remaining > 0:
        return replace(state, remaining=remaining), None

    completed = PhaseComplete(mode=state.mode, minutes=state.phase_minutes)
    if state.mode is Mode.WORK:
        break_state = TimerState(mode=Mode.BREAK, remaining=0, running=False)
        return start(break_state, settings), completed
    return TimerState(mode=Mode.WORK, remaining=0, running=False), completed


def display_seconds(state: TimerState, settings: TimerSettings) -> int:
    """Seconds to show: the remaining time, or the full phase length when idle."""
    if state.remaining > 0:
        return state.remaining
    return settings.minutes_for(state.mode) * 60


def format_clock(seconds: int) -> str:
    """Format seconds as MM:SS."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"
