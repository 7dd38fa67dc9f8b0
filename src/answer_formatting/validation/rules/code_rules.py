"""Code section checks."""

import re

from ...constants import KNOWN_CODE_LANGUAGES
from ...models import ConstraintKind, Section, SectionFormat, Severity
from ..scanners import FencedBlock, fenced_blocks, indent_width, inline_code_spans
from .base import Finding, SectionChecker

MAX_UNIQUE_INDENTS = 4
COMMENT_THRESHOLD_LINES = 5
MAX_INLINE_CODE_LENGTH = 50

_ELLIPSIS_RE = re.compile(r"\.\.\.")
_BRACKET_PAIRS = (("{", "}"), ("(", ")"), ("[", "]"))


def _is_comment(line: str) -> bool:
    stripped = line.strip()
    return (
        stripped.startswith(("//", "#", "/*", "<!--", "--"))
        or "*/" in stripped
        or "-->" in stripped
    )


def _unbalanced(content: str) -> bool:
    return any(content.count(opening) != content.count(closing) for opening, closing in _BRACKET_PAIRS)


class CodeChecker(SectionChecker):
    """Validates fenced and inline code.

    Bracket balance and ellipsis detection are character counts, so brackets
    inside string literals can produce false positives.
    """

    FORMAT = SectionFormat.CODE

    def check(self, answer: str, section: Section, pattern_id: str) -> list[Finding]:
        findings = []
        blocks = [b for b in fenced_blocks(answer) if b.language.lower() != "mermaid"]
        inline = inline_code_spans(answer)

        if not blocks and not inline:
            if section.required:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-code-required",
                        severity=Severity.ERROR,
                        message=f"{section.name} section requires code examples",
                        fix="Add code examples using fenced code blocks (```) or inline code (`)",
                    )
                )
            return findings

        if blocks:
            if section.flag(ConstraintKind.REQUIRES_LANGUAGE):
                findings.extend(self._check_languages(blocks, pattern_id))
            if section.flag(ConstraintKind.PROPER_INDENTATION):
                findings.extend(self._check_indentation(blocks, pattern_id))
            if section.flag(ConstraintKind.COMPLETE_BLOCKS):
                findings.extend(self._check_completeness(blocks, pattern_id))
            if section.flag(ConstraintKind.CODE_COMMENTS):
                findings.extend(self._check_comments(blocks, pattern_id))
            if section.flag(ConstraintKind.RUNNABLE_CODE):
                findings.extend(self._check_runnable(blocks, pattern_id))
            findings.extend(self._check_line_limits(blocks, section, pattern_id))

        if inline and section.flag(ConstraintKind.INLINE_CODE_USAGE):
            findings.extend(self._check_inline(inline, pattern_id))

        return findings

    def _check_languages(self, blocks: list[FencedBlock], pattern_id: str) -> list[Finding]:
        findings = []
        for block in blocks:
            language = block.language.lower()
            if not language:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-code-language",
                        severity=Severity.WARNING,
                        message="Code block is missing language identifier",
                        fix="Add language identifier after opening ``` (e.g., ```javascript, ```python)",
                        search_text="```",
                        line_hint=block.start_line,
                    )
                )
            elif language not in KNOWN_CODE_LANGUAGES:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-unknown-language",
                        severity=Severity.INFO,
                        message=f'Unknown language identifier: "{language}"',
                        fix="Use standard language identifiers (javascript, python, java, etc.)",
                        search_text=f"```{block.language}",
                        line_hint=block.start_line,
                    )
                )
        return findings

    def _check_indentation(self, blocks: list[FencedBlock], pattern_id: str) -> list[Finding]:
        findings = []
        for block in blocks:
            indents = {indent_width(line) for line in block.code_lines}
            if len(block.body) > 1 and len(indents) > MAX_UNIQUE_INDENTS:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-code-indentation",
                        severity=Severity.INFO,
                        message="Code block has inconsistent indentation",
                        fix="Ensure consistent indentation throughout the code block",
                    )
                )
        return findings

    def _check_completeness(self, blocks: list[FencedBlock], pattern_id: str) -> list[Finding]:
        findings = []
        for block in blocks:
            if not block.closed:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-incomplete-block",
                        severity=Severity.ERROR,
                        message="Code block is not properly closed",
                        fix="Ensure code blocks start and end with ``` on separate lines",
                        search_text="```",
                        line_hint=block.start_line,
                    )
                )
            if not block.content:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-empty-block",
                        severity=Severity.WARNING,
                        message="Code block is empty",
                        fix="Add meaningful code content or remove the empty code block",
                        search_text="```",
                        line_hint=block.start_line,
                    )
                )
        return findings

    def _check_comments(self, blocks: list[FencedBlock], pattern_id: str) -> list[Finding]:
        findings = []
        for block in blocks:
            code_lines = block.code_lines
            if len(code_lines) > COMMENT_THRESHOLD_LINES and not any(_is_comment(l) for l in code_lines):
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-missing-comments",
                        severity=Severity.INFO,
                        message="Complex code block lacks explanatory comments",
                        fix="Add inline comments to explain complex logic",
                    )
                )
        return findings

    def _check_runnable(self, blocks: list[FencedBlock], pattern_id: str) -> list[Finding]:
        findings = []
        for block in blocks:
            content = block.content
            if _ELLIPSIS_RE.search(content):
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-incomplete-code",
                        severity=Severity.INFO,
                        message="Code block contains placeholder ellipsis (...)",
                        fix="Replace ellipsis with complete, runnable code",
                        search_text="...",
                    )
                )
            if _unbalanced(content):
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-syntax-error",
                        severity=Severity.WARNING,
                        message="Code block may have unmatched brackets, braces, or parentheses",
                        fix="Check for matching opening and closing brackets, braces, and parentheses",
                    )
                )
        return findings

    def _check_line_limits(self, blocks: list[FencedBlock], section: Section, pattern_id: str) -> list[Finding]:
        findings = []
        min_lines = section.constraint(ConstraintKind.MIN_LINES)
        max_lines = section.constraint(ConstraintKind.MAX_LINES)

        for block in blocks:
            count = len(block.code_lines)
            if min_lines is not None and count < min_lines:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-min-code-lines",
                        severity=Severity.WARNING,
                        message=f"Code block has {count} lines, minimum required is {min_lines}",
                        fix=f"Add more code content to reach at least {min_lines} lines",
                    )
                )
            if max_lines is not None and count > max_lines:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-max-code-lines",
                        severity=Severity.INFO,
                        message=f"Code block has {count} lines, consider breaking it down (max recommended: {max_lines})",
                        fix="Break large code blocks into smaller, focused examples",
                    )
                )
        return findings

    def _check_inline(self, spans: list[str], pattern_id: str) -> list[Finding]:
        findings = []
        for span in spans:
            if len(span) > MAX_INLINE_CODE_LENGTH:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-long-inline-code",
                        severity=Severity.INFO,
                        message="Inline code is quite long, consider using a code block instead",
                        fix="Use fenced code blocks (```) for longer code snippets",
                        search_text=f"`{span[:20]}",
                    )
                )
            if "\n" in span:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-multiline-inline-code",
                        severity=Severity.WARNING,
                        message="Inline code contains line breaks",
                        fix="Use fenced code blocks for multi-line code",
                    )
                )
        return findings
