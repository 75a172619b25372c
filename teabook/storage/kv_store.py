#!/usr/bin/env python3
"""
kv_store.py
-----------
SQLite-backed key-value store for search state.

Values are JSON-encoded, so anything ``json.dumps`` accepts can be
stored. The store is an explicit object handed to whoever needs it
(search history, saved searches); there is no module-level instance.

Usage:
    store = KeyValueStore(db_path=DB_PATH, logger=logger)
    store.set("search_history", ["yabukita", "mildew"])
    store.get("search_history", default=[])
    store.remove("search_history")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional

# --- Third party imports ---
from sqlalchemy import Engine, create_engine, delete, select
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from teabook.core.exceptions import StorageError
from teabook.core.logging_manager import TeabookLogger, safe_logger
from teabook.storage.decorators import handle_storage_errors, log_storage_operation
from teabook.storage.models import Base, KeyValueEntry


class KeyValueStore:
    """
    Persistent string-keyed store of JSON values.

    Attributes:
        engine: SQLAlchemy engine
        logger: Optional logger
    """

    def __init__(
        self,
        db_path: Optional[Path] = None,
        engine: Optional[Engine] = None,
        logger: Optional[TeabookLogger] = None,
    ) -> None:
        """
        Open (and create if needed) the store.

        Args:
            db_path: SQLite file; None with no engine means in-memory
            engine: Existing engine to use instead of ``db_path``
            logger: Optional logger
        """
        self.logger = logger

        if engine is None:
            if db_path is None:
                url = "sqlite:///:memory:"
            else:
                db_path = Path(db_path)
                db_path.parent.mkdir(parents=True, exist_ok=True)
                url = f"sqlite:///{db_path}"
            engine = create_engine(url, echo=False, future=True)

        self.engine: Engine = engine
        self.SessionLocal: sessionmaker = sessionmaker(
            bind=self.engine, expire_on_commit=False, future=True
        )
        self._create_schema()

    @handle_storage_errors
    def _create_schema(self) -> None:
        Base.metadata.create_all(self.engine)
        safe_logger(self.logger).log_debug(
            "kv_store_ready", {"url": self.engine.url.render_as_string(hide_password=True)}
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope around store operations."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @handle_storage_errors
    @log_storage_operation("kv_get")
    def get(self, key: str, default: Any = None) -> Any:
        """Return the decoded value for ``key``, or ``default``."""
        with self.session_scope() as session:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                return default
            try:
                return json.loads(entry.value)
            except json.JSONDecodeError:
                safe_logger(self.logger).log_warning(
                    "Discarding undecodable value", {"key": key}
                )
                return default

    @handle_storage_errors
    @log_storage_operation("kv_set")
    def set(self, key: str, value: Any) -> None:
        """
        Store ``value`` under ``key``, replacing any previous value.

        Raises:
            StorageError: If the value is not JSON serializable
        """
        try:
            encoded = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value for key '{key}' is not JSON serializable: {e}") from e

        with self.session_scope() as session:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                session.add(KeyValueEntry(key=key, value=encoded))
            else:
                entry.value = encoded

    @handle_storage_errors
    @log_storage_operation("kv_remove")
    def remove(self, key: str) -> bool:
        """Delete ``key``; returns whether it existed."""
        with self.session_scope() as session:
            result = session.execute(delete(KeyValueEntry).where(KeyValueEntry.key == key))
            return result.rowcount > 0

    @handle_storage_errors
    def keys(self) -> List[str]:
        with self.session_scope() as session:
            return list(session.scalars(select(KeyValueEntry.key).order_by(KeyValueEntry.key)))

    @handle_storage_errors
    @log_storage_operation("kv_clear")
    def clear(self) -> None:
        with self.session_scope() as session:
            session.execute(delete(KeyValueEntry))

    def __contains__(self, key: str) -> bool:
        return self.get(key, default=None) is not None
