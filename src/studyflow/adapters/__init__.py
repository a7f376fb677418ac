"""Adapters - I/O implementations of ports."""

from .json_file_store import JsonFileStore
from .memory_store import MemoryStore

__all__ = [
    "JsonFileStore",
    "MemoryStore",
]
