"""Key-value store persisted as a single JSON file."""

import json
from pathlib import Path

from ..errors import PersistenceError
from .interface import KeyValueStore


class JsonFileStore(KeyValueStore):
    """Store that rewrites one JSON object file on every mutation.

    The file is re-read on every access so several stores pointing at the
    same path see each other's writes (no locking).
    """

    def __init__(self, file_path: str | Path):
        """Initialize the store.

        Args:
            file_path: Path to the JSON file; created on first write
        """
        self.file_path = Path(file_path)

    def _read(self) -> dict[str, str]:
        if not self.file_path.exists():
            return {}
        try:
            data = json.loads(self.file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Failed to read store file {self.file_path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Store file {self.file_path} does not contain a JSON object")
        return data

    def _write(self, data: dict[str, str]) -> None:
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self.file_path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Failed to write store file {self.file_path}: {e}") from e

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def keys(self) -> list[str]:
        return sorted(self._read())
