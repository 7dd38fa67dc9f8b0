"""Text (definition) section checks."""

import re

from ...models import ConstraintKind, Section, SectionFormat, Severity
from ..scanners import BULLET_RE, NUMBERED_RE, count_sentences, has_bullets, list_items, split_lines
from .base import Finding, SectionChecker


class TextChecker(SectionChecker):
    """Validates prose sections such as a definition opener plus characteristics."""

    FORMAT = SectionFormat.TEXT

    def check(self, answer: str, section: Section, pattern_id: str) -> list[Finding]:
        findings = []
        lines = split_lines(answer)

        headers = section.constraint(ConstraintKind.REQUIRED_HEADERS) or ()
        for header in headers:
            if not re.search(rf"^#{{1,6}}\s+{re.escape(header)}", answer, re.IGNORECASE | re.MULTILINE):
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-required-header",
                        severity=Severity.ERROR,
                        message=f'Missing required section header: "{header}"',
                        fix=f'Add the "{header}" section header',
                    )
                )

        if section.flag(ConstraintKind.SINGLE_SENTENCE):
            sentences = count_sentences(lines[0])
            if sentences != 1:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-single-sentence",
                        severity=Severity.ERROR,
                        message=f"First line should be a single sentence, found {sentences} sentences",
                        fix="Rewrite the opening as a single, concise sentence",
                        search_text=lines[0][:40],
                        line_hint=0,
                    )
                )

        if section.flag(ConstraintKind.BLANK_LINE_AFTER) and len(lines) > 1 and lines[1] != "":
            findings.append(
                Finding(
                    rule=f"{pattern_id}-blank-line",
                    severity=Severity.WARNING,
                    message="Missing blank line after opening sentence",
                    fix="Add a blank line after the first sentence",
                    search_text=lines[1][:40],
                    line_hint=1,
                )
            )

        if section.flag(ConstraintKind.BULLETED_LIST_REQUIRED) and not has_bullets(answer):
            findings.append(
                Finding(
                    rule=f"{pattern_id}-bulleted-list-required",
                    severity=Severity.ERROR,
                    message="Definition format requires a bulleted list of key characteristics",
                    fix="Add a bulleted list with 3-5 key characteristics using - or * bullets",
                )
            )

        items = list_items(answer)
        min_items = section.constraint(ConstraintKind.MIN_LIST_ITEMS)
        if min_items is not None and len(items) < min_items:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-min-list-items",
                    severity=Severity.WARNING,
                    message=f"Definition should have at least {min_items} key characteristics, found {len(items)}",
                    fix=f"Add more key characteristics to reach at least {min_items} items",
                )
            )

        max_items = section.constraint(ConstraintKind.MAX_LIST_ITEMS)
        if max_items is not None and len(items) > max_items:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-max-list-items",
                    severity=Severity.INFO,
                    message=f"Definition has {len(items)} characteristics, consider limiting to {max_items} for better readability",
                    fix=f"Consider consolidating or removing some characteristics to stay within {max_items} items",
                )
            )

        if section.flag(ConstraintKind.DEFINITION_STRUCTURE):
            findings.extend(self._check_definition_structure(lines, pattern_id))

        return findings

    def _check_definition_structure(self, lines: list[str], pattern_id: str) -> list[Finding]:
        if not lines[0].strip():
            return [
                Finding(
                    rule=f"{pattern_id}-definition-opening",
                    severity=Severity.ERROR,
                    message="Definition must start with a clear opening sentence",
                    fix="Add a concise definition sentence at the beginning",
                )
            ]

        findings = []
        has_blank_line = len(lines) > 1 and not lines[1].strip()
        has_characteristics = False

        if has_blank_line:
            # The first non-blank line after the gap must start the list
            for line in lines[2:]:
                if BULLET_RE.match(line) or NUMBERED_RE.match(line):
                    has_characteristics = True
                    break
                if line.strip():
                    break

        if not has_blank_line:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-definition-blank-line",
                    severity=Severity.WARNING,
                    message="Definition should be followed by a blank line before characteristics",
                    fix="Add a blank line after the definition sentence",
                )
            )
        if not has_characteristics:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-definition-characteristics",
                    severity=Severity.ERROR,
                    message="Definition should include a list of key characteristics",
                    fix="Add a bulleted list of 3-5 key characteristics after the definition",
                )
            )
        return findings
