"""
Tests for the SQLite key-value store.

Tests:
- get/set/remove/keys/clear on an in-memory database
- Persistence across instances on a file database
- Error translation to StorageError
"""
import pytest
from datetime import date
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, OperationalError

from teabook.core.exceptions import StorageError
from teabook.core.logging_manager import TeabookLogger
from teabook.storage import KeyValueStore, handle_storage_errors, log_storage_operation


class TestKeyValueStore:
    """Tests for basic store operations."""

    def test_missing_key_returns_default(self, kv_store):
        assert kv_store.get("nope") is None
        assert kv_store.get("nope", default=[]) == []

    def test_set_and_get(self, kv_store):
        kv_store.set("history", ["yabukita", "mildew"])
        assert kv_store.get("history") == ["yabukita", "mildew"]

    def test_overwrite(self, kv_store):
        kv_store.set("k", {"a": 1})
        kv_store.set("k", {"a": 2})
        assert kv_store.get("k") == {"a": 2}
        assert kv_store.keys() == ["k"]

    def test_unicode_values(self, kv_store):
        kv_store.set("k", "やぶきた")
        assert kv_store.get("k") == "やぶきた"

    def test_remove(self, kv_store):
        kv_store.set("k", 1)
        assert kv_store.remove("k") is True
        assert kv_store.remove("k") is False
        assert "k" not in kv_store

    def test_keys_sorted_and_clear(self, kv_store):
        kv_store.set("b", 1)
        kv_store.set("a", 2)
        assert kv_store.keys() == ["a", "b"]
        kv_store.clear()
        assert kv_store.keys() == []

    def test_contains(self, kv_store):
        kv_store.set("k", 0)
        assert "k" in kv_store

    def test_not_serializable(self, kv_store):
        with pytest.raises(StorageError, match="not JSON serializable"):
            kv_store.set("k", {"when": date(2024, 1, 1)})

    def test_persists_across_instances(self, tmp_path):
        db_path = tmp_path / "state" / "teabook.db"
        KeyValueStore(db_path=db_path).set("k", [1, 2])
        assert db_path.exists()
        assert KeyValueStore(db_path=db_path).get("k") == [1, 2]

    def test_operations_are_logged(self):
        logger = MagicMock(spec=TeabookLogger)
        store = KeyValueStore(logger=logger)
        store.set("k", 1)
        messages = [call[0][0] for call in logger.log_debug.call_args_list]
        assert "kv_set_completed" in messages


class TestDecorators:
    """Tests for storage decorators."""

    def test_integrity_error_becomes_storage_error(self):
        @handle_storage_errors
        def failing():
            raise IntegrityError("INSERT", {}, Exception("duplicate"))

        with pytest.raises(StorageError, match="integrity"):
            failing()

    def test_sqlalchemy_error_becomes_storage_error(self):
        @handle_storage_errors
        def failing():
            raise OperationalError("SELECT", {}, Exception("locked"))

        with pytest.raises(StorageError, match="Storage operation failed"):
            failing()

    def test_log_storage_operation_logs_errors(self):
        class Thing:
            def __init__(self):
                self.logger = MagicMock(spec=TeabookLogger)

            @log_storage_operation("explode")
            def explode(self):
                raise ValueError("boom")

        thing = Thing()
        with pytest.raises(ValueError):
            thing.explode()
        thing.logger.log_error.assert_called_once()
        assert thing.logger.log_error.call_args[0][1]["operation"] == "explode"

    def test_log_storage_operation_without_logger(self):
        class Thing:
            logger = None

            @log_storage_operation("noop")
            def noop(self):
                return 42

        assert Thing().noop() == 42
