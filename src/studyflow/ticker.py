"""APScheduler-backed tick source for the focus timer and dashboard refresh."""

import logging
from typing import Callable

from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)


def build_scheduler() -> BackgroundScheduler:
    """
    Background scheduler with a single worker thread.

    With one worker, periodic jobs run one at a time and never overlap each
    other, so repository read-modify-write needs no locking.
    """
    return BackgroundScheduler(
        executors={"default": ThreadPoolExecutor(max_workers=1)},
        job_defaults={"coalesce": True, "max_instances": 1},
    )


class Ticker:
    """
    Periodic job runner.

    Implements TickSource protocol on top of an APScheduler scheduler.
    """

    def __init__(self, scheduler: BackgroundScheduler | None = None):
        self.scheduler = scheduler or build_scheduler()

    def start(self) -> None:
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("Ticker started")

    def shutdown(self, wait: bool = False) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)
            logger.info("Ticker stopped")

    def every(self, seconds: float, func: Callable[[], None], job_id: str) -> None:
        """Run func every `seconds` until cancelled."""
        self.scheduler.add_job(
            func,
            IntervalTrigger(seconds=seconds),
            id=job_id,
            replace_existing=True,
        )
        logger.debug(f"Scheduled {job_id} every {seconds}s")

    def cancel(self, job_id: str) -> None:
        """Stop a periodic job. Unknown ids are ignored."""
        try:
            self.scheduler.remove_job(job_id)
            logger.debug(f"Cancelled {job_id}")
        except JobLookupError:
            pass

    def __enter__(self) -> "Ticker":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()
