"""In-memory document store adapter."""

import logging
from typing import Any

from ..ports.store import StorageCorruptError, StorageQuotaExceededError
from .json_file_store import decode_document, encode_document

logger = logging.getLogger(__name__)


class MemoryStore:
    """
    In-memory storage holding serialized JSON text per key.

    Implements KeyValueStore protocol. Behaves like browser local storage:
    values are kept as strings and an optional byte quota applies to the
    total size of all stored text.
    """

    def __init__(self, quota_bytes: int | None = None):
        self.quota_bytes = quota_bytes
        self._data: dict[str, str] = {}

    def get(self, key: str, fallback: Any = None) -> Any:
        """Read the document under key. Missing or corrupt data returns fallback."""
        try:
            value = decode_document(key, self._data.get(key))
        except StorageCorruptError as e:
            logger.error(f"load error for {key}: {e}")
            return fallback
        return fallback if value is None else value

    def put(self, key: str, value: Any) -> None:
        """Overwrite the document under key."""
        self.put_raw(key, encode_document(value))

    def put_raw(self, key: str, raw: str) -> None:
        """Store raw text under key without encoding it."""
        if self.quota_bytes is not None:
            used = sum(len(v.encode("utf-8")) for k, v in self._data.items() if k != key)
            if used + len(raw.encode("utf-8")) > self.quota_bytes:
                raise StorageQuotaExceededError(
                    f"Writing {key!r} would exceed quota of {self.quota_bytes} bytes"
                )
        self._data[key] = raw

    def get_raw(self, key: str) -> str | None:
        return self._data.get(key)

    def keys(self) -> list[str]:
        return sorted(self._data)
