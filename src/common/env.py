"""Environment configuration interface for answer-formatting.

This module provides a clean interface for accessing environment variables,
centralizing all environment variable access in one place.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from .constants import DEFAULT_STORE_PATH, DEFAULT_TREND_DAYS

# Load environment variables from .env file if it exists
load_dotenv()


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def store_type() -> str:
        """Get the persistence backend (memory, file or sqlite).

        Returns:
            Store type, defaults to 'memory'
        """
        return os.getenv("ANSWER_FORMATTING_STORE", "memory")

    @staticmethod
    def store_path() -> Path:
        """Get the backing file used by the file and sqlite stores.

        Returns:
            Path to the store file, defaults to ./data/answer_formatting.json
        """
        return Path(os.getenv("ANSWER_FORMATTING_STORE_PATH", str(DEFAULT_STORE_PATH)))

    @staticmethod
    def patterns_path() -> Path | None:
        """Get an optional JSON file of pattern definitions.

        Returns:
            Path to the patterns file, or None to use the built-in defaults
        """
        value = os.getenv("ANSWER_FORMATTING_PATTERNS")
        return Path(value) if value else None

    @staticmethod
    def trend_days() -> int:
        """Get the number of days covered by metrics trends.

        Returns:
            Trend window in days, defaults to 30
        """
        return int(os.getenv("ANSWER_FORMATTING_TREND_DAYS", str(DEFAULT_TREND_DAYS)))


# Singleton instance for convenient access
env = Environment()
