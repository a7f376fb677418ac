"""File-based JSON document store adapter."""

import errno
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from ..ports.store import StorageCorruptError, StorageQuotaExceededError

logger = logging.getLogger(__name__)

_QUOTA_ERRNOS = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)}


def decode_document(key: str, raw: str | None) -> Any:
    """
    Decode a raw stored document.

    Returns None for empty/missing data, raises StorageCorruptError otherwise
    if the text is not valid JSON.
    """
    if raw is None or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise StorageCorruptError(f"Document {key!r} is not valid JSON: {e}") from e


def encode_document(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


class JsonFileStore:
    """
    JSON file storage.

    Implements KeyValueStore protocol. Each key gets its own <key>.json file,
    replaced atomically on every write.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_key(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get(self, key: str, fallback: Any = None) -> Any:
        """Read the document under key. Missing or corrupt data returns fallback."""
        path = self._path_for_key(key)
        if not path.exists():
            return fallback
        try:
            value = decode_document(key, path.read_text(encoding="utf-8"))
        except (StorageCorruptError, UnicodeDecodeError) as e:
            logger.error(f"load error for {key}: {e}")
            return fallback
        return fallback if value is None else value

    def put(self, key: str, value: Any) -> None:
        """Overwrite the document under key. The old file survives a failed write."""
        path = self._path_for_key(key)
        payload = encode_document(value)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.data_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            if e.errno in _QUOTA_ERRNOS:
                raise StorageQuotaExceededError(f"No space left writing {key!r}") from e
            raise
        logger.debug(f"Saved {key} ({len(payload)} bytes)")

    def keys(self) -> list[str]:
        """List stored keys."""
        return sorted(p.stem for p in self.data_dir.glob("*.json"))
