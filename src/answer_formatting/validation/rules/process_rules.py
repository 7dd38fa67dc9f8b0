"""Process (numbered steps) section checks."""

import re

from ...constants import PROCESS_ACTION_VERBS, VAGUE_STEP_PHRASES
from ...models import ConstraintKind, Section, SectionFormat, Severity
from ..scanners import has_numbered, numbered_items, split_lines
from .base import Finding, SectionChecker

MAX_STEP_WORDS = 30
MIN_STEP_LENGTH = 10


def first_word(text: str) -> str:
    """Lowercased first word with non-letters stripped."""
    words = text.strip().split()
    return re.sub(r"[^a-z]", "", words[0].lower()) if words else ""


def contains_phrase(text: str, phrases: tuple[str, ...]) -> bool:
    """Whole-word, case-insensitive phrase search."""
    lowered = text.lower()
    return any(re.search(rf"\b{re.escape(phrase)}\b", lowered) for phrase in phrases)


def preview(text: str, limit: int = 50) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def sequence_findings(numbers: list[int], rule: str, severity: Severity, noun: str, fix: str) -> list[Finding]:
    """Flag numbers that break a strict 1, 2, 3... sequence."""
    findings = []
    for expected, actual in enumerate(numbers, start=1):
        if actual != expected:
            findings.append(
                Finding(
                    rule=rule,
                    severity=severity,
                    message=f"{noun} numbering is not sequential: expected {expected}, found {actual}",
                    fix=fix,
                    search_text=f"{actual}.",
                )
            )
    return findings


class ProcessChecker(SectionChecker):
    """Validates numbered, action-led process steps."""

    FORMAT = SectionFormat.PROCESS

    def check(self, answer: str, section: Section, pattern_id: str) -> list[Finding]:
        findings = []

        if not has_numbered(answer):
            if section.required:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-process-numbered-list",
                        severity=Severity.ERROR,
                        message=f"{section.name} section requires numbered steps",
                        fix="Use numbered list format (1. 2. 3.) for process steps",
                    )
                )
            return findings

        steps = numbered_items(answer)

        if section.flag(ConstraintKind.ACTION_VERBS):
            findings.extend(self._check_action_verbs(answer, steps, pattern_id))
        if section.flag(ConstraintKind.STEP_CLARITY):
            findings.extend(self._check_clarity(steps, pattern_id))
        if section.flag(ConstraintKind.PROPER_SEQUENCE):
            findings.extend(
                sequence_findings(
                    [number for number, _ in steps],
                    rule=f"{pattern_id}-sequence-numbering",
                    severity=Severity.ERROR,
                    noun="Process step",
                    fix="Ensure process steps use sequential numbering (1. 2. 3. ...)",
                )
            )

        min_steps = section.constraint(ConstraintKind.MIN_STEPS)
        if min_steps is not None and len(steps) < min_steps:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-min-steps",
                    severity=Severity.WARNING,
                    message=f"Process should have at least {min_steps} steps, found {len(steps)}",
                    fix=f"Add more detailed steps to reach at least {min_steps} steps",
                )
            )

        max_steps = section.constraint(ConstraintKind.MAX_STEPS)
        if max_steps is not None and len(steps) > max_steps:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-max-steps",
                    severity=Severity.INFO,
                    message=f"Process has {len(steps)} steps, consider consolidating to {max_steps} or fewer",
                    fix=f"Consider combining related steps to stay within {max_steps} steps",
                )
            )

        return findings

    def _check_action_verbs(self, answer: str, steps: list[tuple[int, str]], pattern_id: str) -> list[Finding]:
        findings = []
        lines = split_lines(answer)

        for position, (number, text) in enumerate(steps, start=1):
            step = text.strip()
            word = first_word(step)
            if not word or word in PROCESS_ACTION_VERBS:
                continue

            prefix = f"{number}."
            line_hint = next((i for i, line in enumerate(lines) if line.strip().startswith(prefix)), None)
            findings.append(
                Finding(
                    rule=f"{pattern_id}-action-verb",
                    severity=Severity.WARNING,
                    message=f'Step {position} should start with an action verb: "{preview(step)}"',
                    fix="Start each step with a clear action verb (create, configure, run, etc.)",
                    search_text=f"{prefix} {step[:20]}",
                    line_hint=line_hint,
                )
            )

        return findings

    def _check_clarity(self, steps: list[tuple[int, str]], pattern_id: str) -> list[Finding]:
        findings = []

        for position, (_, text) in enumerate(steps, start=1):
            step = text.strip()
            word_count = len(step.split())

            if word_count > MAX_STEP_WORDS:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-step-length",
                        severity=Severity.INFO,
                        message=f"Step {position} is quite long ({word_count} words), consider breaking it down",
                        fix="Break long steps into smaller, more manageable sub-steps",
                    )
                )
            if contains_phrase(step, VAGUE_STEP_PHRASES):
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-step-vagueness",
                        severity=Severity.WARNING,
                        message=f"Step {position} contains vague language that may confuse users",
                        fix="Use specific, concrete language in process steps",
                        search_text=step[:30],
                    )
                )
            if len(step) < MIN_STEP_LENGTH:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-step-detail",
                        severity=Severity.WARNING,
                        message=f"Step {position} may be too brief to be actionable",
                        fix="Provide more specific details for each step",
                        search_text=step,
                    )
                )

        return findings
