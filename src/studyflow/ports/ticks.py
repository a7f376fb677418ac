"""Periodic tick source interface."""

from typing import Callable, Protocol


class TickSource(Protocol):
    """Interface for anything that can call a function on a fixed period."""

    def every(self, seconds: float, func: Callable[[], None], job_id: str) -> None:
        """Run func every `seconds` until cancelled. Replaces a job with the same id."""
        ...

    def cancel(self, job_id: str) -> None:
        """Stop a periodic job. Unknown ids are ignored."""
        ...
