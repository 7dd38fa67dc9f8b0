"""Store factory and configuration.

This module provides a factory function and configuration class for creating
key-value stores based on the store type (memory, JSON file or SQLite).
"""

from dataclasses import dataclass
from pathlib import Path

from .interface import KeyValueStore, StoreType
from .json_store import JsonFileStore
from .memory_store import InMemoryStore
from .sqlite_store import SQLiteStore


@dataclass
class StoreConfig:
    """Store configuration container.

    Attributes:
        store_type: Type of store ('memory', 'file' or 'sqlite')
        path: Backing file (file and sqlite stores only)
    """

    store_type: StoreType | str
    path: Path | None = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.store_type, str):
            try:
                self.store_type = StoreType(self.store_type.lower())
            except ValueError as e:
                raise ValueError(
                    f"Unsupported store type: {self.store_type}. "
                    f"Must be one of: {', '.join(t.value for t in StoreType)}"
                ) from e

        if self.store_type in (StoreType.FILE, StoreType.SQLITE):
            if self.path is None:
                raise ValueError(f"path is required for the {self.store_type.value} store")
            if isinstance(self.path, str):
                self.path = Path(self.path)


def create_store(config: StoreConfig) -> KeyValueStore:
    """Factory function to create the appropriate store.

    Args:
        config: Store configuration

    Returns:
        Key-value store instance

    Example:
        >>> store = create_store(StoreConfig(store_type="file", path=Path("./data/state.json")))
    """
    if config.store_type == StoreType.FILE:
        return JsonFileStore(config.path)
    if config.store_type == StoreType.SQLITE:
        return SQLiteStore(config.path)
    return InMemoryStore()


def get_store() -> KeyValueStore:
    """Get a store using environment configuration.

    Reads ANSWER_FORMATTING_STORE and ANSWER_FORMATTING_STORE_PATH.

    Returns:
        Configured key-value store
    """
    from common.env import env

    store_type = env.store_type()
    if store_type.lower() == StoreType.MEMORY.value:
        return create_store(StoreConfig(store_type=StoreType.MEMORY))
    return create_store(StoreConfig(store_type=store_type, path=env.store_path()))
