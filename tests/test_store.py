"""Tests for the document store adapters."""

import errno
import json
import logging
from unittest.mock import patch

import pytest

from studyflow.adapters.json_file_store import JsonFileStore
from studyflow.adapters.memory_store import MemoryStore
from studyflow.ports.store import StorageQuotaExceededError


@pytest.fixture
def file_store(tmp_path):
    return JsonFileStore(tmp_path / "data")


class TestJsonFileStore:
    def test_creates_data_dir(self, tmp_path):
        JsonFileStore(tmp_path / "nested" / "data")
        assert (tmp_path / "nested" / "data").is_dir()

    def test_missing_key_returns_fallback(self, file_store):
        assert file_store.get("sf_todos_v1", []) == []
        assert file_store.get("sf_stats_v1", {"studyMinutes": 0}) == {"studyMinutes": 0}

    def test_put_then_get(self, file_store):
        file_store.put("sf_todos_v1", [{"id": "t_1", "text": "Read"}])
        assert file_store.get("sf_todos_v1", []) == [{"id": "t_1", "text": "Read"}]

    def test_put_overwrites_whole_document(self, file_store):
        file_store.put("k", {"a": 1, "b": 2})
        file_store.put("k", {"a": 3})
        assert file_store.get("k") == {"a": 3}

    def test_one_file_per_key(self, file_store):
        file_store.put("sf_todos_v1", [])
        file_store.put("sf_stats_v1", {})
        assert file_store.keys() == ["sf_stats_v1", "sf_todos_v1"]
        assert json.loads((file_store.data_dir / "sf_stats_v1.json").read_text()) == {}

    def test_corrupt_document_returns_fallback_and_logs(self, file_store, caplog):
        (file_store.data_dir / "sf_todos_v1.json").write_text("{not json")
        with caplog.at_level(logging.ERROR):
            assert file_store.get("sf_todos_v1", []) == []
        assert "sf_todos_v1" in caplog.text

    def test_empty_file_returns_fallback(self, file_store):
        (file_store.data_dir / "k.json").write_text("")
        assert file_store.get("k", "fallback") == "fallback"

    def test_quota_error_keeps_previous_document(self, file_store):
        file_store.put("k", {"v": 1})
        with patch("studyflow.adapters.json_file_store.os.replace",
                   side_effect=OSError(errno.ENOSPC, "No space left on device")):
            with pytest.raises(StorageQuotaExceededError):
                file_store.put("k", {"v": 2})
        assert file_store.get("k") == {"v": 1}
        assert not list(file_store.data_dir.glob("*.tmp"))

    def test_other_os_errors_propagate(self, file_store):
        with patch("studyflow.adapters.json_file_store.os.replace",
                   side_effect=PermissionError(errno.EACCES, "denied")):
            with pytest.raises(PermissionError):
                file_store.put("k", {"v": 2})


class TestMemoryStore:
    def test_missing_key_returns_fallback(self):
        assert MemoryStore().get("k", []) == []

    def test_values_stored_as_json_text(self):
        store = MemoryStore()
        store.put("k", {"count": 2})
        assert store.get_raw("k") == '{"count": 2}'
        assert store.get("k") == {"count": 2}

    def test_corrupt_raw_value_returns_fallback(self, caplog):
        store = MemoryStore()
        store.put_raw("sf_todos_v1", "undefined")
        with caplog.at_level(logging.ERROR):
            assert store.get("sf_todos_v1", []) == []
        assert "load error" in caplog.text

    def test_quota_exceeded_raises_and_keeps_old_value(self):
        store = MemoryStore(quota_bytes=20)
        store.put("k", [1, 2])
        with pytest.raises(StorageQuotaExceededError):
            store.put("k", list(range(50)))
        assert store.get("k") == [1, 2]

    def test_quota_counts_other_keys(self):
        store = MemoryStore(quota_bytes=12)
        store.put("a", "xxxxxx")  # 8 bytes encoded
        with pytest.raises(StorageQuotaExceededError):
            store.put("b", "yyyyyy")
        assert store.keys() == ["a"]

    def test_replacing_a_key_does_not_double_count(self):
        store = MemoryStore(quota_bytes=10)
        store.put("a", "xxxxxx")
        store.put("a", "zzzzzz")
        assert store.get("a") == "zzzzzz"
