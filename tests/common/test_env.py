"""Tests for environment configuration interface."""

from common.env import Environment, env


class TestEnvironment:
    """Tests for Environment class."""

    def test_store_type_default(self, monkeypatch):
        """Test store_type returns default value."""
        monkeypatch.delenv("ANSWER_FORMATTING_STORE", raising=False)
        assert Environment.store_type() == "memory"

    def test_store_type_from_env(self, monkeypatch):
        """Test store_type reads from environment."""
        monkeypatch.setenv("ANSWER_FORMATTING_STORE", "sqlite")
        assert Environment.store_type() == "sqlite"

    def test_store_path_default(self, monkeypatch):
        """Test store_path returns default value."""
        monkeypatch.delenv("ANSWER_FORMATTING_STORE_PATH", raising=False)
        assert str(Environment.store_path()) == "data/answer_formatting.json"

    def test_store_path_from_env(self, monkeypatch):
        """Test store_path reads from environment."""
        monkeypatch.setenv("ANSWER_FORMATTING_STORE_PATH", "/tmp/state.json")
        assert str(Environment.store_path()) == "/tmp/state.json"

    def test_patterns_path_unset(self, monkeypatch):
        """Test patterns_path is None when not configured."""
        monkeypatch.delenv("ANSWER_FORMATTING_PATTERNS", raising=False)
        assert Environment.patterns_path() is None

    def test_patterns_path_from_env(self, monkeypatch):
        """Test patterns_path reads from environment."""
        monkeypatch.setenv("ANSWER_FORMATTING_PATTERNS", "/tmp/patterns.json")
        assert str(Environment.patterns_path()) == "/tmp/patterns.json"

    def test_trend_days_default(self, monkeypatch):
        """Test trend_days returns default value."""
        monkeypatch.delenv("ANSWER_FORMATTING_TREND_DAYS", raising=False)
        assert Environment.trend_days() == 30

    def test_trend_days_from_env(self, monkeypatch):
        """Test trend_days reads from environment."""
        monkeypatch.setenv("ANSWER_FORMATTING_TREND_DAYS", "7")
        assert Environment.trend_days() == 7


class TestEnvSingleton:
    """Tests for env singleton instance."""

    def test_env_is_environment_instance(self):
        """Test that env is an instance of Environment."""
        assert isinstance(env, Environment)

    def test_env_singleton_methods_work(self, monkeypatch):
        """Test that env singleton methods work."""
        monkeypatch.setenv("ANSWER_FORMATTING_STORE", "file")
        assert env.store_type() == "file"
