"""Shared constants for the answer-formatting application.

For environment-based configuration (store backend, paths, etc.), use the env module:
    from common.env import env
    store_type = env.store_type()
"""

from pathlib import Path

# Data directories
DATA_DIR = Path("./data")
DEFAULT_STORE_PATH = DATA_DIR / "answer_formatting.json"

# Metrics trend window
DEFAULT_TREND_DAYS = 30
