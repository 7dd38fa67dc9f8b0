"""Registry of format patterns with keyword search."""

from pathlib import Path
from typing import Any

from common.logger import get_logger

from ..models import FormatPattern
from .defaults import get_default_patterns
from .loader import load_patterns_file, save_patterns_file

logger = get_logger(__name__)


class PatternLibrary:
    """In-memory registry of format patterns keyed by id."""

    def __init__(self, patterns: list[FormatPattern] | None = None):
        """Initialize the library.

        Args:
            patterns: Initial patterns, defaults to the built-in set
        """
        self.patterns: dict[str, FormatPattern] = {}
        self._initialized = False
        self.initialize_patterns(get_default_patterns() if patterns is None else patterns)

    def get_pattern(self, pattern_id: str) -> FormatPattern | None:
        """Get a pattern by id, or None if it is not registered."""
        return self.patterns.get(pattern_id)

    def get_all_patterns(self) -> list[FormatPattern]:
        return list(self.patterns.values())

    def patterns_for_ids(self, pattern_ids: list[str]) -> list[FormatPattern]:
        """Get the registered patterns among the given ids, in the given order."""
        return [self.patterns[pid] for pid in pattern_ids if pid in self.patterns]

    def search_patterns(self, keywords: list[str]) -> list[FormatPattern]:
        """Search patterns by keywords.

        A search keyword matches a pattern keyword when either contains the
        other, ignoring case. Every match counts once per keyword pair.

        Args:
            keywords: Keywords to search for

        Returns:
            Matching patterns sorted by match count, then priority (both descending)
        """
        normalized = [k.lower().strip() for k in keywords or [] if k and k.strip()]
        if not normalized:
            return []

        matches: list[tuple[int, FormatPattern]] = []
        for pattern in self.patterns.values():
            count = 0
            for pattern_keyword in pattern.keywords:
                pattern_keyword = pattern_keyword.lower()
                for keyword in normalized:
                    if keyword in pattern_keyword or pattern_keyword in keyword:
                        count += 1
            if count > 0:
                matches.append((count, pattern))

        matches.sort(key=lambda m: (-m[0], -m[1].priority))
        return [pattern for _, pattern in matches]

    def add_pattern(self, pattern: FormatPattern):
        """Register a pattern, replacing any pattern with the same id."""
        self.patterns[pattern.id] = pattern

    def update_pattern(self, pattern_id: str, updates: dict[str, Any]) -> FormatPattern | None:
        """Replace fields of a registered pattern.

        Args:
            pattern_id: Id of the pattern to update
            updates: Field values to change; the id itself cannot be changed

        Returns:
            The updated pattern, or None if no pattern has this id
        """
        existing = self.patterns.get(pattern_id)
        if existing is None:
            logger.warning(f"Cannot update unknown pattern: {pattern_id}")
            return None

        changes = {k: v for k, v in updates.items() if k != "id"}
        updated = existing.with_updates(**changes)
        self.patterns[pattern_id] = updated
        return updated

    def remove_pattern(self, pattern_id: str) -> bool:
        """Remove a pattern; returns True if it was registered."""
        return self.patterns.pop(pattern_id, None) is not None

    def clear_patterns(self):
        self.patterns.clear()

    def initialize_patterns(self, patterns: list[FormatPattern]):
        """Replace the active set with the given patterns."""
        self.patterns = {p.id: p for p in patterns}
        self._initialized = True
        logger.debug(f"Pattern library initialized with {len(self.patterns)} patterns")

    def reset_to_defaults(self):
        self.initialize_patterns(get_default_patterns())

    def get_pattern_count(self) -> int:
        return len(self.patterns)

    def is_initialized(self) -> bool:
        return self._initialized

    def save(self, file_path: Path):
        """Save the active patterns to a JSON file."""
        save_patterns_file(self.get_all_patterns(), file_path)

    @classmethod
    def load(cls, file_path: Path) -> "PatternLibrary":
        """Load a library from a JSON file of pattern definitions.

        Raises:
            InputValidationError: If the file is missing or malformed
        """
        return cls(load_patterns_file(file_path))
