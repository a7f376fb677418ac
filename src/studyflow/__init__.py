"""StudyFlow - local personal study planner."""

from .adapters import JsonFileStore, MemoryStore
from .core import Priority, TimerSettings, ValidationError
from .planner import Planner, open_planner
from .ports import StorageCorruptError, StorageError, StorageQuotaExceededError
from .timer import FocusTimer

__all__ = [
    "JsonFileStore",
    "MemoryStore",
    "Priority",
    "TimerSettings",
    "ValidationError",
    "Planner",
    "open_planner",
    "StorageError",
    "StorageCorruptError",
    "StorageQuotaExceededError",
    "FocusTimer",
]
