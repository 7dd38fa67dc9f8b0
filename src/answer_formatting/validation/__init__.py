"""Answer validation against format patterns."""

from .feedback import find_text_location
from .plugins import RuleRegistry
from .validator import FormatValidator

__all__ = [
    "FormatValidator",
    "RuleRegistry",
    "find_text_location",
]
