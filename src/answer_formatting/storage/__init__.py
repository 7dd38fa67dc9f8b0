"""Persistence layer for configuration and metrics state.

Example:
    >>> from answer_formatting.storage import StoreConfig, create_store
    >>>
    >>> store = create_store(StoreConfig(store_type="memory"))
    >>> store.set("pattern-config:settings", "{}")
    >>> store.get("pattern-config:settings")
    '{}'
"""

from .factory import StoreConfig, create_store, get_store
from .interface import KeyValueStore, StoreType
from .json_store import JsonFileStore
from .memory_store import InMemoryStore
from .sqlite_store import SQLiteStore

__all__ = [
    # Factory
    "StoreConfig",
    "create_store",
    "get_store",
    # Interface
    "KeyValueStore",
    "StoreType",
    # Backends
    "InMemoryStore",
    "JsonFileStore",
    "SQLiteStore",
]
