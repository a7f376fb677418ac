"""Ports - interfaces/protocols for external dependencies."""

from .store import (
    KeyValueStore,
    StorageCorruptError,
    StorageError,
    StorageQuotaExceededError,
)
from .ticks import TickSource

__all__ = [
    "KeyValueStore",
    "StorageError",
    "StorageCorruptError",
    "StorageQuotaExceededError",
    "TickSource",
]
