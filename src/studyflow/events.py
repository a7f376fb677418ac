"""Change notifications between the core and whatever renders it."""

import logging
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    """A committed mutation of one collection."""

    collection: str
    action: str  # "added", "updated", "removed"
    entity_id: str | None = None


class EventBus:
    """
    Minimal synchronous observer list.

    Callbacks run in subscription order on the caller's thread, after the
    change has been written. A failing callback is logged and does not stop
    the others.
    """

    def __init__(self):
        self._subscribers: list[Callable[[Any], None]] = []

    def subscribe(self, callback: Callable[[Any], None]) -> Callable[[], None]:
        """Register a callback. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, event: Any) -> None:
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception(f"Subscriber {callback!r} failed handling {event!r}")

    def __len__(self) -> int:
        return len(self._subscribers)
