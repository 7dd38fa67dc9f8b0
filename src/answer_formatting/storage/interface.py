"""Abstract key-value store interface.

Configuration and metrics state is persisted as JSON strings under
namespaced keys; every backend implements this interface.
"""

from abc import ABC, abstractmethod
from enum import Enum


class StoreType(str, Enum):
    """Supported store backends."""

    MEMORY = "memory"
    FILE = "file"
    SQLITE = "sqlite"


class KeyValueStore(ABC):
    """String-keyed, string-valued persistence interface."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Read a value.

        Returns:
            Stored value, or None if the key is absent

        Raises:
            PersistenceError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Write a value.

        Raises:
            PersistenceError: If the backend cannot be written
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key; deleting an absent key is not an error.

        Raises:
            PersistenceError: If the backend cannot be written
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys in sorted order."""
        pass
