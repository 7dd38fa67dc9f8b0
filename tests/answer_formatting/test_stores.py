"""Tests for key-value store backends and the store factory."""

from pathlib import Path

import pytest

from answer_formatting.errors import PersistenceError
from answer_formatting.storage import (
    InMemoryStore,
    JsonFileStore,
    SQLiteStore,
    StoreConfig,
    StoreType,
    create_store,
    get_store,
)


@pytest.fixture(params=["memory", "file", "sqlite"])
def store(request, tmp_path):
    """Each backend, empty."""
    if request.param == "memory":
        return InMemoryStore()
    if request.param == "file":
        return JsonFileStore(tmp_path / "state.json")
    return SQLiteStore(tmp_path / "state.db")


class TestKeyValueStore:
    """Behavior shared by every backend."""

    def test_get_missing_key_returns_none(self, store):
        """Test that reading an absent key returns None."""
        assert store.get("missing") is None

    def test_set_then_get(self, store):
        """Test that a written value can be read back."""
        store.set("pattern-config:settings", '{"strict_mode": true}')
        assert store.get("pattern-config:settings") == '{"strict_mode": true}'

    def test_set_overwrites(self, store):
        """Test that writing an existing key replaces its value."""
        store.set("metrics", "1")
        store.set("metrics", "2")
        assert store.get("metrics") == "2"

    def test_remove(self, store):
        """Test that removed keys are gone and removing twice is harmless."""
        store.set("metrics", "{}")
        store.remove("metrics")
        store.remove("metrics")
        assert store.get("metrics") is None

    def test_keys_sorted(self, store):
        """Test that keys are listed in sorted order."""
        store.set("b", "2")
        store.set("a", "1")
        store.set("c", "3")
        assert store.keys() == ["a", "b", "c"]


class TestInMemoryStore:
    """Tests for the in-memory backend."""

    def test_initial_data(self):
        """Test seeding the store with initial data."""
        store = InMemoryStore({"metrics": "{}"})
        assert store.get("metrics") == "{}"

    def test_instances_are_isolated(self):
        """Test that two instances do not share state."""
        first = InMemoryStore()
        second = InMemoryStore()
        first.set("key", "value")
        assert second.get("key") is None


class TestJsonFileStore:
    """Tests for the JSON file backend."""

    def test_creates_parent_directories(self, tmp_path):
        """Test that the file and its directories are created on first write."""
        path = tmp_path / "nested" / "dir" / "state.json"
        store = JsonFileStore(path)
        store.set("key", "value")
        assert path.exists()

    def test_two_stores_share_file(self, tmp_path):
        """Test that stores on the same path see each other's writes."""
        path = tmp_path / "state.json"
        JsonFileStore(path).set("key", "value")
        assert JsonFileStore(path).get("key") == "value"

    def test_corrupt_file_raises_persistence_error(self, tmp_path):
        """Test that an unreadable file surfaces as PersistenceError."""
        path = tmp_path / "state.json"
        path.write_text("{not json")
        with pytest.raises(PersistenceError):
            JsonFileStore(path).get("key")

    def test_non_object_file_raises_persistence_error(self, tmp_path):
        """Test that a JSON array file is rejected."""
        path = tmp_path / "state.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(PersistenceError):
            JsonFileStore(path).keys()


class TestSQLiteStore:
    """Tests for the SQLite backend."""

    def test_persists_across_instances(self, tmp_path):
        """Test that values survive reopening the database."""
        db_path = tmp_path / "state.db"
        SQLiteStore(db_path).set("key", "value")
        assert SQLiteStore(db_path).get("key") == "value"

    def test_unopenable_path_raises_persistence_error(self, tmp_path):
        """Test that a directory in place of the database file is reported."""
        db_path = tmp_path / "occupied"
        db_path.mkdir()
        with pytest.raises(PersistenceError):
            SQLiteStore(db_path).get("key")


class TestStoreConfig:
    """Tests for StoreConfig validation."""

    def test_string_type_is_coerced(self):
        """Test that store types given as strings become StoreType members."""
        config = StoreConfig(store_type="MEMORY")
        assert config.store_type == StoreType.MEMORY

    def test_unsupported_type_raises(self):
        """Test that unknown store types are rejected."""
        with pytest.raises(ValueError, match="Unsupported store type"):
            StoreConfig(store_type="redis")

    def test_file_store_requires_path(self):
        """Test that file stores need a path."""
        with pytest.raises(ValueError, match="path is required"):
            StoreConfig(store_type="file")

    def test_path_string_is_coerced(self):
        """Test that string paths become Path objects."""
        config = StoreConfig(store_type="sqlite", path="data/state.db")
        assert config.path == Path("data/state.db")


class TestCreateStore:
    """Tests for the store factory."""

    def test_create_memory_store(self):
        """Test creating an in-memory store."""
        assert isinstance(create_store(StoreConfig(store_type="memory")), InMemoryStore)

    def test_create_file_store(self, tmp_path):
        """Test creating a JSON file store."""
        store = create_store(StoreConfig(store_type="file", path=tmp_path / "state.json"))
        assert isinstance(store, JsonFileStore)

    def test_create_sqlite_store(self, tmp_path):
        """Test creating a SQLite store."""
        store = create_store(StoreConfig(store_type="sqlite", path=tmp_path / "state.db"))
        assert isinstance(store, SQLiteStore)

    def test_get_store_defaults_to_memory(self, monkeypatch):
        """Test that the environment default is an in-memory store."""
        monkeypatch.delenv("ANSWER_FORMATTING_STORE", raising=False)
        assert isinstance(get_store(), InMemoryStore)

    def test_get_store_from_environment(self, monkeypatch, tmp_path):
        """Test that the environment selects the backend and its path."""
        path = tmp_path / "state.json"
        monkeypatch.setenv("ANSWER_FORMATTING_STORE", "file")
        monkeypatch.setenv("ANSWER_FORMATTING_STORE_PATH", str(path))

        store = get_store()

        assert isinstance(store, JsonFileStore)
        assert store.file_path == path
