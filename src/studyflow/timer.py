"""Focus timer service: drives the pure state machine and records finished sessions."""

import logging
from typing import Callable

from .core import timer as machine
from .core.timer import Mode, PhaseComplete, TimerSettings, TimerState
from .events import EventBus
from .ports.store import StorageError
from .ports.ticks import TickSource
from .repositories import StatsRepository, TimerCountRepository

logger = logging.getLogger(__name__)

TICK_JOB_ID = "focus_timer_tick"
TICK_SECONDS = 1


class FocusTimer:
    """
    One work/break focus timer.

    Owns its TimerState explicitly. When a work phase completes, the session
    count and study statistics are persisted before the timer switches to the
    break and before any subscriber hears about it.

    Without a tick source the caller drives the clock by calling tick().
    """

    def __init__(
        self,
        counter: TimerCountRepository,
        stats: StatsRepository,
        settings: TimerSettings | None = None,
        ticker: TickSource | None = None,
    ):
        self.counter = counter
        self.stats = stats
        self.settings = settings or TimerSettings()
        self.ticker = ticker
        self.state = TimerState()
        self._tick_listeners = EventBus()
        self._phase_listeners = EventBus()
        self._count_recorded = False

    # ---- subscriptions ----

    def on_tick(self, callback: Callable[[TimerState], None]) -> Callable[[], None]:
        """Called with the new state after every tick."""
        return self._tick_listeners.subscribe(callback)

    def on_phase_complete(self, callback: Callable[[PhaseComplete], None]) -> Callable[[], None]:
        """Called when a work or break phase runs out."""
        return self._phase_listeners.subscribe(callback)

    # ---- state ----

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def remaining(self) -> int:
        return self.state.remaining

    @property
    def running(self) -> bool:
        return self.state.running

    def session_count(self) -> int:
        return self.counter.get().count

    def display(self) -> str:
        """Clock text, e.g. "24:59"."""
        return machine.format_clock(machine.display_seconds(self.state, self.settings))

    # ---- transitions ----

    def start(self, settings: TimerSettings | None = None) -> TimerState:
        """Start or resume. New settings only apply to phases that start from zero."""
        if settings is not None:
            self.settings = settings
        was_running = self.state.running
        self.state = machine.start(self.state, self.settings)
        if not was_running:
            logger.info(f"Timer started: {self.state.mode.value}, {self.state.remaining}s left")
            self._schedule()
        return self.state

    def pause(self) -> TimerState:
        self._unschedule()
        self.state = machine.pause(self.state)
        return self.state

    def reset(self, settings: TimerSettings | None = None) -> TimerState:
        if settings is not None:
            self.settings = settings
        self._unschedule()
        self.state = machine.reset(self.state)
        self._count_recorded = False
        return self.state

    def tick(self) -> TimerState:
        """
        Advance one second.

        If a completion write fails the tick job is cancelled and the timer is
        paused on its last work second. A counter increment that already
        landed is not repeated when the phase completes after resuming.
        """
        if not self.state.running:
            return self.state
        new_state, completed = machine.tick(self.state, self.settings)

        if completed is not None and completed.mode is Mode.WORK:
            try:
                if not self._count_recorded:
                    self.counter.increment()
                    self._count_recorded = True
                totals = self.stats.record_session(completed.minutes)
            except StorageError as e:
                logger.error(f"Could not record finished work session: {e}")
                self.pause()
                raise
            self._count_recorded = False
            logger.info(
                f"Work session complete (#{self.session_count()}); "
                f"{totals.study_minutes} study minutes total"
            )

        self.state = new_state
        if completed is not None and not new_state.running:
            self._unschedule()
            logger.info("Break complete; waiting for manual start")

        self._tick_listeners.emit(self.state)
        if completed is not None:
            self._phase_listeners.emit(completed)
        return self.state

    # ---- tick scheduling ----

    def _schedule(self) -> None:
        if self.ticker is not None:
            self.ticker.every(TICK_SECONDS, self.tick, TICK_JOB_ID)

    def _unschedule(self) -> None:
        if self.ticker is not None:
            self.ticker.cancel(TICK_JOB_ID)
