"""Shared fixtures."""

from datetime import date, datetime

import pytest

from studyflow.adapters.memory_store import MemoryStore
from studyflow.planner import Planner


class FakeTicker:
    """
    Manual TickSource for timer tests.

    Records scheduled jobs; tests call fire() instead of waiting on a clock.
    """

    def __init__(self):
        self.jobs = {}
        self.cancelled = []

    def every(self, seconds, func, job_id):
        self.jobs[job_id] = (seconds, func)

    def cancel(self, job_id):
        self.cancelled.append(job_id)
        self.jobs.pop(job_id, None)

    def fire(self, job_id, times=1):
        for _ in range(times):
            if job_id not in self.jobs:
                break
            _, func = self.jobs[job_id]
            func()


@pytest.fixture
def today():
    return date(2025, 1, 15)


@pytest.fixture
def now(today):
    return datetime(2025, 1, 15, 10, 0)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def planner(store):
    return Planner.open(store)


@pytest.fixture
def ticker():
    return FakeTicker()
