#!/usr/bin/env python3
"""
teabook Storage Package
-----------------------
Persistent search state: a SQLite key-value store, search history and
saved searches. Entity data itself is never stored here.
"""

from .kv_store import KeyValueStore
from .history import SavedSearch, SavedSearches, SearchHistory
from .decorators import handle_storage_errors, log_storage_operation

__all__ = [
    "KeyValueStore",
    "SearchHistory",
    "SavedSearches",
    "SavedSearch",
    "handle_storage_errors",
    "log_storage_operation",
]
