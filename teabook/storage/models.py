"""
Storage Models
--------------

ORM classes for the search-state database.

Classes:
    - Base: Declarative base for all SQLAlchemy models
    - KeyValueEntry: One JSON-encoded value stored under a string key
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timezone

# --- Third party ---
from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Provides access to the metadata object for table creation.
    """

    pass


class KeyValueEntry(Base):
    """
    A JSON-encoded value stored under a unique key.

    Attributes:
        key: Unique key (e.g. "search_history")
        value: JSON text
        updated_at: Last write time (UTC)
    """

    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<KeyValueEntry(key={self.key!r})>"
