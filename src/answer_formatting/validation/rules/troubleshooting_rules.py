"""Troubleshooting section checks."""

import re

from ...constants import SOLUTION_ACTION_VERBS, VAGUE_SOLUTION_PHRASES
from ...models import ConstraintKind, Section, SectionFormat, Severity
from ..scanners import find_heading, has_bullets, has_numbered, list_items, numbered_items
from .base import Finding, SectionChecker
from .process_rules import contains_phrase, first_word, preview, sequence_findings

MIN_PROBLEM_LENGTH = 20
MIN_SOLUTION_LENGTH = 10
MIN_CAUSES = 2

_SYMPTOM_RE = re.compile(r"symptoms?|error|issue|fail|problem|wrong|incorrect|unexpected", re.IGNORECASE)


class TroubleshootingChecker(SectionChecker):
    """Validates Problem / Causes / Solutions structure."""

    FORMAT = SectionFormat.TROUBLESHOOTING

    def check(self, answer: str, section: Section, pattern_id: str) -> list[Finding]:
        findings = []

        for name in section.constraint(ConstraintKind.REQUIRED_SECTIONS) or ():
            if find_heading(answer, re.escape(name)) is None:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-missing-{name.lower()}",
                        severity=Severity.ERROR,
                        message=f'Missing required section: "{name}"',
                        fix=f'Add a "{name}" section header',
                    )
                )

        solutions = find_heading(answer, r"Solutions?")
        if solutions is not None:
            steps = numbered_items(solutions.content)
            if section.flag(ConstraintKind.NUMBERED_SOLUTIONS):
                findings.extend(self._check_numbered(solutions.content, steps, pattern_id))
            if section.flag(ConstraintKind.SOLUTION_CLARITY):
                findings.extend(self._check_clarity(steps, pattern_id))

        problem = find_heading(answer, r"Problems?")
        if problem is not None and section.flag(ConstraintKind.PROBLEM_DESCRIPTION):
            findings.extend(self._check_problem(problem.content, pattern_id))

        causes = find_heading(answer, r"Causes?")
        if causes is not None and section.flag(ConstraintKind.CAUSE_ANALYSIS):
            findings.extend(self._check_causes(causes.content, pattern_id))

        return findings

    def _check_numbered(self, content: str, steps: list[tuple[int, str]], pattern_id: str) -> list[Finding]:
        if not has_numbered(content):
            return [
                Finding(
                    rule=f"{pattern_id}-solutions-numbered",
                    severity=Severity.ERROR,
                    message="Solutions section should use numbered steps",
                    fix="Format solutions as numbered list (1. 2. 3.) for clear step-by-step guidance",
                    search_text="Solution",
                )
            ]
        return sequence_findings(
            [number for number, _ in steps],
            rule=f"{pattern_id}-solutions-sequence",
            severity=Severity.WARNING,
            noun="Solution step",
            fix="Number solution steps sequentially (1. 2. 3. ...)",
        )

    def _check_clarity(self, steps: list[tuple[int, str]], pattern_id: str) -> list[Finding]:
        findings = []
        for position, (_, text) in enumerate(steps, start=1):
            step = text.strip()
            if contains_phrase(step, VAGUE_SOLUTION_PHRASES):
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-solution-vague",
                        severity=Severity.WARNING,
                        message=f'Solution step {position} contains vague language: "{preview(step)}"',
                        fix="Use specific, actionable language in solution steps",
                        search_text=step[:30],
                    )
                )
            if len(step) < MIN_SOLUTION_LENGTH:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-solution-too-brief",
                        severity=Severity.INFO,
                        message=f'Solution step {position} may be too brief: "{step}"',
                        fix="Provide more detailed instructions for each solution step",
                        search_text=step,
                    )
                )
            if first_word(step) not in SOLUTION_ACTION_VERBS:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-solution-action-verb",
                        severity=Severity.INFO,
                        message=f'Solution step {position} should start with an action verb: "{preview(step)}"',
                        fix="Start solution steps with clear action verbs (check, restart, update, etc.)",
                        search_text=step[:30],
                    )
                )
        return findings

    def _check_problem(self, content: str, pattern_id: str) -> list[Finding]:
        if not content:
            return [
                Finding(
                    rule=f"{pattern_id}-problem-empty",
                    severity=Severity.ERROR,
                    message="Problem section is empty",
                    fix="Provide a clear description of the problem",
                    search_text="Problem",
                )
            ]

        findings = []
        if len(content) < MIN_PROBLEM_LENGTH:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-problem-too-brief",
                    severity=Severity.WARNING,
                    message="Problem description may be too brief",
                    fix="Provide more detailed description of the problem symptoms and context",
                    search_text=content[:30],
                )
            )
        if not _SYMPTOM_RE.search(content):
            findings.append(
                Finding(
                    rule=f"{pattern_id}-problem-no-symptoms",
                    severity=Severity.INFO,
                    message="Problem description should include specific symptoms or error details",
                    fix="Describe what specifically is failing or behaving incorrectly",
                )
            )
        return findings

    def _check_causes(self, content: str, pattern_id: str) -> list[Finding]:
        if not content:
            return [
                Finding(
                    rule=f"{pattern_id}-causes-empty",
                    severity=Severity.ERROR,
                    message="Causes section is empty",
                    fix="Provide analysis of potential causes for the problem",
                    search_text="Cause",
                )
            ]

        findings = []
        if not has_bullets(content) and not has_numbered(content):
            findings.append(
                Finding(
                    rule=f"{pattern_id}-causes-format",
                    severity=Severity.WARNING,
                    message="Causes section should use list format for better readability",
                    fix="Format causes as bulleted or numbered list",
                )
            )
        if len(list_items(content)) < MIN_CAUSES:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-causes-insufficient",
                    severity=Severity.INFO,
                    message="Consider providing multiple potential causes for thorough analysis",
                    fix="List at least 2-3 potential causes to help with diagnosis",
                )
            )
        return findings
