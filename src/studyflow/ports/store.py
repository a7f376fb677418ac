"""Persistent key-value store interface."""

from typing import Any, Protocol


class StorageError(Exception):
    """Base class for storage failures."""


class StorageCorruptError(StorageError):
    """A persisted document could not be decoded."""


class StorageQuotaExceededError(StorageError):
    """The backing storage refused a write because it is full."""


class KeyValueStore(Protocol):
    """Interface for whole-document JSON storage addressed by key."""

    def get(self, key: str, fallback: Any = None) -> Any:
        """Read the document under key. Missing or corrupt data returns fallback."""
        ...

    def put(self, key: str, value: Any) -> None:
        """Overwrite the entire document under key."""
        ...
