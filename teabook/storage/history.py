#!/usr/bin/env python3
"""
history.py
----------
Search history and saved searches on top of the key-value store.

Both are thin views over one key each; they hold no state of their own,
so several instances over the same store always agree.

Usage:
    store = KeyValueStore(db_path=DB_PATH)
    history = SearchHistory(store)
    history.add("yabukita")
    history.entries()          # ['yabukita', ...]

    saved = SavedSearches(store)
    entry = saved.save("Active in Shizuoka", filters)
    saved.get(entry.id).filters
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

# --- Local imports ---
from teabook.core.exceptions import ValidationError
from teabook.search.search_engine import SearchFilters
from teabook.storage.kv_store import KeyValueStore

HISTORY_KEY = "search_history"
SAVED_SEARCHES_KEY = "saved_searches"
DEFAULT_HISTORY_SIZE = 20


class SearchHistory:
    """Most-recent-first list of distinct past queries."""

    def __init__(self, store: KeyValueStore, max_entries: int = DEFAULT_HISTORY_SIZE):
        if max_entries < 1:
            raise ValidationError(f"max_entries must be >= 1, got {max_entries}")
        self.store = store
        self.max_entries = max_entries

    def entries(self) -> List[str]:
        entries = self.store.get(HISTORY_KEY, default=[])
        return [str(entry) for entry in entries] if isinstance(entries, list) else []

    def add(self, query: str) -> List[str]:
        """
        Record a query at the front of the history.

        Blank queries are ignored; a repeated query moves to the front.

        Returns:
            The updated history
        """
        query = (query or "").strip()
        entries = self.entries()
        if not query:
            return entries

        entries = [query] + [entry for entry in entries if entry != query]
        entries = entries[: self.max_entries]
        self.store.set(HISTORY_KEY, entries)
        return entries

    def clear(self) -> None:
        self.store.remove(HISTORY_KEY)


@dataclass
class SavedSearch:
    """A named, persisted set of search filters."""

    id: str
    name: str
    filters: SearchFilters
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "filters": self.filters.to_dict(),
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedSearch":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            filters=SearchFilters.from_dict(data.get("filters") or {}),
            created_at=datetime.fromisoformat(data["created_at"]),
        )


class SavedSearches:
    """Named search filters persisted in the key-value store."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _load(self) -> List[Dict[str, Any]]:
        raw = self.store.get(SAVED_SEARCHES_KEY, default=[])
        return raw if isinstance(raw, list) else []

    def list(self) -> List[SavedSearch]:
        """All saved searches, oldest first."""
        return [SavedSearch.from_dict(item) for item in self._load()]

    def get(self, search_id: str) -> Optional[SavedSearch]:
        for item in self._load():
            if item.get("id") == search_id:
                return SavedSearch.from_dict(item)
        return None

    def save(self, name: str, filters: SearchFilters) -> SavedSearch:
        """
        Persist filters under a display name.

        Raises:
            ValidationError: If the name is blank
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Saved search name must not be empty")

        saved = SavedSearch(
            id=uuid.uuid4().hex[:12],
            name=name,
            filters=filters,
            created_at=datetime.now(timezone.utc),
        )
        items = self._load()
        items.append(saved.to_dict())
        self.store.set(SAVED_SEARCHES_KEY, items)
        return saved

    def delete(self, search_id: str) -> bool:
        """Remove a saved search; returns whether it existed."""
        items = self._load()
        remaining = [item for item in items if item.get("id") != search_id]
        if len(remaining) == len(items):
            return False
        self.store.set(SAVED_SEARCHES_KEY, remaining)
        return True
