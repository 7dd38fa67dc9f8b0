"""Section checkers, one per section format."""

from ...models import SectionFormat
from .base import Finding, SectionChecker
from .code_rules import CodeChecker
from .diagram_rules import DiagramChecker
from .list_rules import ListChecker
from .process_rules import ProcessChecker
from .pros_cons_rules import ProsConsChecker
from .table_rules import TableChecker
from .text_rules import TextChecker
from .troubleshooting_rules import TroubleshootingChecker


def default_checkers() -> dict[SectionFormat, SectionChecker]:
    """One checker instance per section format."""
    checkers: list[SectionChecker] = [
        TableChecker(),
        ListChecker(),
        ProcessChecker(),
        CodeChecker(),
        DiagramChecker(),
        TextChecker(),
        ProsConsChecker(),
        TroubleshootingChecker(),
    ]
    return {checker.FORMAT: checker for checker in checkers}


__all__ = [
    "Finding",
    "SectionChecker",
    "CodeChecker",
    "DiagramChecker",
    "ListChecker",
    "ProcessChecker",
    "ProsConsChecker",
    "TableChecker",
    "TextChecker",
    "TroubleshootingChecker",
    "default_checkers",
]
