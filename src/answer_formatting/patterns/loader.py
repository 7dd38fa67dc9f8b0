"""Load and save pattern definitions as JSON documents."""

import json
from pathlib import Path

from common.logger import get_logger

from ..errors import InputValidationError
from ..models import FormatPattern

logger = get_logger(__name__)


def patterns_from_document(data: dict) -> list[FormatPattern]:
    """Build patterns from a ``{"patterns": [...]}`` document.

    Args:
        data: Parsed JSON document

    Returns:
        List of patterns in document order

    Raises:
        InputValidationError: If the document does not describe valid patterns
    """
    if not isinstance(data, dict) or not isinstance(data.get("patterns"), list):
        raise InputValidationError("Pattern document must contain a 'patterns' list")

    try:
        return [FormatPattern.from_dict(p) for p in data["patterns"]]
    except (KeyError, TypeError, ValueError) as e:
        raise InputValidationError(f"Invalid pattern definition: {e}") from e


def load_patterns_file(file_path: Path) -> list[FormatPattern]:
    """Load pattern definitions from a JSON file.

    Args:
        file_path: Path to patterns JSON file

    Returns:
        List of patterns loaded from file

    Raises:
        InputValidationError: If the file is missing, unreadable or malformed
    """
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise InputValidationError(f"Cannot read patterns from {file_path}: {e}") from e

    patterns = patterns_from_document(data)
    logger.debug(f"Loaded {len(patterns)} patterns from {file_path}")
    return patterns


def save_patterns_file(patterns: list[FormatPattern], file_path: Path):
    """Save pattern definitions to a JSON file.

    Args:
        patterns: Patterns to write
        file_path: Path where patterns should be saved
    """
    data = {"patterns": [p.to_dict() for p in patterns]}
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
