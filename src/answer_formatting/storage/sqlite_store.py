"""Key-value store backed by a SQLite table."""

import sqlite3
from pathlib import Path

from ..errors import PersistenceError
from .interface import KeyValueStore

SCHEMA = "CREATE TABLE IF NOT EXISTS kv_store (key TEXT PRIMARY KEY, value TEXT NOT NULL)"


class SQLiteStore(KeyValueStore):
    """Store persisting each key as a row; opens a connection per operation."""

    def __init__(self, db_path: str | Path):
        """Initialize the store.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self._schema_ready = False

    def _connect(self) -> sqlite3.Connection:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path))
            if not self._schema_ready:
                conn.execute(SCHEMA)
                conn.commit()
                self._schema_ready = True
            return conn
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Failed to open SQLite store {self.db_path}: {e}") from e

    def get(self, key: str) -> str | None:
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to read key '{key}': {e}") from e
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = self._connect()
        try:
            conn.execute(
                "INSERT INTO kv_store (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to write key '{key}': {e}") from e
        finally:
            conn.close()

    def remove(self, key: str) -> None:
        conn = self._connect()
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to remove key '{key}': {e}") from e
        finally:
            conn.close()

    def keys(self) -> list[str]:
        conn = self._connect()
        try:
            return [row[0] for row in conn.execute("SELECT key FROM kv_store ORDER BY key")]
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to list keys: {e}") from e
        finally:
            conn.close()
