"""Pattern definitions, registry and detection."""

from .defaults import DEFAULT_PATTERNS, get_default_patterns
from .detector import PatternDetector
from .library import PatternLibrary
from .loader import load_patterns_file, save_patterns_file

__all__ = [
    "DEFAULT_PATTERNS",
    "get_default_patterns",
    "PatternDetector",
    "PatternLibrary",
    "load_patterns_file",
    "save_patterns_file",
]
