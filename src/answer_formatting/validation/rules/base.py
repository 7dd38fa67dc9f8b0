"""Shared types for section checkers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...models import Section, SectionFormat, Severity


@dataclass
class Finding:
    """A raw checker result before feedback enrichment.

    ``search_text`` and ``line_hint`` (0-based) guide location lookup.
    """

    rule: str
    severity: Severity
    message: str
    fix: str
    search_text: str | None = None
    line_hint: int | None = None


class SectionChecker(ABC):
    """Validates an answer against one section format."""

    FORMAT: SectionFormat

    @abstractmethod
    def check(self, answer: str, section: Section, pattern_id: str) -> list[Finding]:
        """Check the answer against a section.

        Args:
            answer: Answer text
            section: Section definition with its constraints
            pattern_id: Id of the pattern, used as the rule id prefix

        Returns:
            List of findings
        """
        pass
