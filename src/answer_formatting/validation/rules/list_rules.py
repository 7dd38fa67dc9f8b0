"""List section checks."""

import re

from ...models import ConstraintKind, Section, SectionFormat, Severity
from ..scanners import (
    count_sentences,
    has_bullets,
    has_numbered,
    indent_width,
    list_items,
    split_lines,
)
from .base import Finding, SectionChecker

MAX_NESTING_LEVELS = 3
NESTING_STEPS = (2, 4)

# Loose matches so malformed items (no space after marker) are still seen
_LOOSE_BULLET_RE = re.compile(r"^\s*([-*+])")
_LOOSE_NUMBERED_RE = re.compile(r"^\s*(\d+)\.\s")
_LIST_LINE_RE = re.compile(r"^\s*(?:[-*+]|\d+\.)\s")


class ListChecker(SectionChecker):
    """Validates bulleted and numbered lists.

    Horizontal rules (``---``) and bold markers at line start read as bullets;
    those false positives are accepted.
    """

    FORMAT = SectionFormat.LIST

    def check(self, answer: str, section: Section, pattern_id: str) -> list[Finding]:
        findings = []
        bullets = has_bullets(answer)
        numbered = has_numbered(answer)

        if not bullets and not numbered:
            if section.required:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-list-required",
                        severity=Severity.ERROR,
                        message=f"{section.name} section requires a bulleted or numbered list",
                        fix="Add a bulleted list using - or * or a numbered list using 1. 2. 3.",
                    )
                )
            return findings

        items = list_items(answer)

        max_sentences = section.constraint(ConstraintKind.MAX_SENTENCES)
        if max_sentences is not None:
            for item in items:
                sentences = count_sentences(item)
                if sentences > max_sentences:
                    findings.append(
                        Finding(
                            rule=f"{pattern_id}-list-item-length",
                            severity=Severity.WARNING,
                            message=f"List item exceeds maximum of {max_sentences} sentences (found {sentences})",
                            fix="Break down long list items into shorter, more concise points",
                            search_text=item[:40],
                        )
                    )

        if bullets and numbered:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-list-consistency",
                    severity=Severity.INFO,
                    message="Answer contains both bulleted and numbered lists",
                    fix="Consider using consistent list formatting throughout the answer",
                )
            )

        if section.flag(ConstraintKind.PROPER_BULLET_SYNTAX):
            findings.extend(self._check_bullet_syntax(answer, pattern_id))
        if section.flag(ConstraintKind.PROPER_NUMBERING_SYNTAX):
            findings.extend(self._check_numbering_syntax(answer, pattern_id))
        if section.flag(ConstraintKind.NESTING_STRUCTURE):
            findings.extend(self._check_nesting(answer, pattern_id))

        min_items = section.constraint(ConstraintKind.MIN_LIST_ITEMS)
        if min_items is not None and len(items) < min_items:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-min-list-items",
                    severity=Severity.WARNING,
                    message=f"List should have at least {min_items} items, found {len(items)}",
                    fix=f"Add more list items to reach at least {min_items} items",
                )
            )

        max_items = section.constraint(ConstraintKind.MAX_LIST_ITEMS)
        if max_items is not None and len(items) > max_items:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-max-list-items",
                    severity=Severity.INFO,
                    message=f"List has {len(items)} items, consider limiting to {max_items} for better readability",
                    fix=f"Consider consolidating or removing some items to stay within {max_items} items",
                )
            )

        if section.flag(ConstraintKind.CONSISTENT_INDENTATION):
            findings.extend(self._check_indentation(answer, pattern_id))

        return findings

    def _check_bullet_syntax(self, answer: str, pattern_id: str) -> list[Finding]:
        findings = []
        first_char = None
        mixed_reported = False

        for index, line in enumerate(split_lines(answer)):
            match = _LOOSE_BULLET_RE.match(line)
            # "**bold**" and "---" are not bullets
            if not match or line.strip().startswith(("**", "---")):
                continue

            if not re.match(r"^\s*[-*+]\s+\S", line):
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-bullet-spacing",
                        severity=Severity.WARNING,
                        message="Bullet points should have proper spacing after the bullet character",
                        fix="Ensure there is a space after the bullet character (-, *, or +)",
                        search_text=line.strip(),
                        line_hint=index,
                    )
                )

            if first_char is None:
                first_char = match.group(1)
            elif match.group(1) != first_char and not mixed_reported:
                mixed_reported = True
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-bullet-consistency",
                        severity=Severity.INFO,
                        message="Mixed bullet characters found in list",
                        fix="Use consistent bullet characters throughout the list (all -, *, or +)",
                        search_text=line.strip(),
                        line_hint=index,
                    )
                )

        return findings

    def _check_numbering_syntax(self, answer: str, pattern_id: str) -> list[Finding]:
        findings = []
        expected = 1

        for index, line in enumerate(split_lines(answer)):
            match = _LOOSE_NUMBERED_RE.match(line)
            if not match:
                continue

            actual = int(match.group(1))
            if actual != expected:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-numbering-sequence",
                        severity=Severity.WARNING,
                        message=f"List numbering is not sequential: expected {expected}, found {actual}",
                        fix="Ensure numbered lists use sequential numbering (1. 2. 3. ...)",
                        search_text=line.strip(),
                        line_hint=index,
                    )
                )
            if not re.match(r"^\s*\d+\.\s+\S", line):
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-number-spacing",
                        severity=Severity.WARNING,
                        message="Numbered items should have proper spacing after the number",
                        fix="Ensure there is a space after the number and period (1. item)",
                        search_text=line.strip(),
                        line_hint=index,
                    )
                )
            expected += 1

        return findings

    def _check_nesting(self, answer: str, pattern_id: str) -> list[Finding]:
        findings = []
        previous = None
        levels: list[int] = []

        for index, line in enumerate(split_lines(answer)):
            if not _LIST_LINE_RE.match(line):
                continue

            indent = indent_width(line)
            if indent not in levels:
                levels.append(indent)

            if previous is not None and indent > previous and indent - previous not in NESTING_STEPS:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-nesting-increment",
                        severity=Severity.INFO,
                        message="Inconsistent nesting indentation found",
                        fix="Use consistent indentation for nested list items (2 or 4 spaces)",
                        search_text=line.strip(),
                        line_hint=index,
                    )
                )
            previous = indent

        if len(levels) > MAX_NESTING_LEVELS:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-excessive-nesting",
                    severity=Severity.WARNING,
                    message=f"List has {len(levels)} nesting levels, consider simplifying",
                    fix=f"Reduce nesting to {MAX_NESTING_LEVELS} levels or fewer for better readability",
                )
            )

        return findings

    def _check_indentation(self, answer: str, pattern_id: str) -> list[Finding]:
        indents = [indent_width(line) for line in split_lines(answer) if _LIST_LINE_RE.match(line)]
        nested = [i for i in indents if i > 0]
        if not nested:
            return []

        unit = min(nested)
        if all(i % unit == 0 for i in nested):
            return []

        return [
            Finding(
                rule=f"{pattern_id}-list-indentation",
                severity=Severity.INFO,
                message=f"Nested list items should be indented in multiples of {unit} spaces",
                fix="Indent nested list items by a consistent number of spaces",
            )
        ]
