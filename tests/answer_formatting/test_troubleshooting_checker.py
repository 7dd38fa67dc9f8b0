"""Tests for troubleshooting section checks."""

from answer_formatting.models import Severity
from answer_formatting.patterns import PatternLibrary
from answer_formatting.validation.rules import TroubleshootingChecker

SECTION = PatternLibrary().get_pattern("troubleshooting").structure.sections[0]

PROBLEM = "## Problem\n\nThe application fails with an out of memory error after running for several hours."
CAUSES = "## Causes\n\n- Unbounded cache growth\n- Event listeners never removed"
SOLUTIONS = (
    "## Solutions\n\n"
    "1. Check heap snapshots for retained objects\n"
    "2. Remove listeners when components unmount\n"
    "3. Restart the worker with a memory limit"
)


def check(answer: str):
    return TroubleshootingChecker().check(answer, SECTION, "troubleshooting")


def rules(answer: str) -> list[str]:
    return [f.rule for f in check(answer)]


def test_complete_answer_passes():
    """Test that Problem, Causes and Solutions sections pass."""
    assert check(f"{PROBLEM}\n\n{CAUSES}\n\n{SOLUTIONS}") == []


def test_missing_sections():
    """Test that every required section is reported."""
    findings = check("Restart the server and it should work.")
    assert [(f.rule, f.severity) for f in findings] == [
        ("troubleshooting-missing-problem", Severity.ERROR),
        ("troubleshooting-missing-causes", Severity.ERROR),
        ("troubleshooting-missing-solutions", Severity.ERROR),
    ]


def test_solutions_must_be_numbered():
    """Test that bulleted solutions are an error."""
    solutions = "## Solutions\n\n- Check heap snapshots for retained objects\n- Restart the worker process"
    assert rules(f"{PROBLEM}\n\n{CAUSES}\n\n{solutions}") == ["troubleshooting-solutions-numbered"]


def test_solution_numbering_sequence():
    """Test that gaps in solution numbering are warnings."""
    solutions = "## Solutions\n\n1. Check heap snapshots for retained objects\n3. Restart the worker process"
    findings = check(f"{PROBLEM}\n\n{CAUSES}\n\n{solutions}")
    assert [(f.rule, f.severity) for f in findings] == [("troubleshooting-solutions-sequence", Severity.WARNING)]


def test_vague_solution():
    """Test that hedged solutions are flagged."""
    solutions = "## Solutions\n\n1. Maybe restart the server process\n2. Check the logs for stack traces"
    found = rules(f"{PROBLEM}\n\n{CAUSES}\n\n{solutions}")
    assert found == ["troubleshooting-solution-vague", "troubleshooting-solution-action-verb"]


def test_brief_solution():
    """Test that very short solutions are noted."""
    solutions = "## Solutions\n\n1. Reboot\n2. Check the logs for stack traces"
    assert rules(f"{PROBLEM}\n\n{CAUSES}\n\n{solutions}") == ["troubleshooting-solution-too-brief"]


def test_problem_description():
    """Test problem length and symptom checks."""
    problem = "## Problem\n\nIt is slow."
    found = rules(f"{problem}\n\n{CAUSES}\n\n{SOLUTIONS}")
    assert found == ["troubleshooting-problem-too-brief", "troubleshooting-problem-no-symptoms"]


def test_empty_problem_and_causes():
    """Test that empty sections are errors."""
    found = rules(f"## Problem\n\n## Causes\n\n{SOLUTIONS}")
    assert "troubleshooting-problem-empty" in found
    assert "troubleshooting-causes-empty" in found


def test_causes_format():
    """Test that causes should be a list of several items."""
    causes = "## Causes\n\nThe cache grows without bound."
    found = rules(f"{PROBLEM}\n\n{causes}\n\n{SOLUTIONS}")
    assert found == ["troubleshooting-causes-format", "troubleshooting-causes-insufficient"]
