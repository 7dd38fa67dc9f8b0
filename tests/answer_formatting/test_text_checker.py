"""Tests for definition (text) section checks."""

from answer_formatting.models import Constraint, ConstraintKind, Section, SectionFormat, Severity
from answer_formatting.patterns import PatternLibrary
from answer_formatting.validation.rules import TextChecker

SECTION = PatternLibrary().get_pattern("definition").structure.sections[0]

GOOD_DEFINITION = (
    "A closure is a function that captures variables from its enclosing scope.\n"
    "\n"
    "- Retains access to outer variables\n"
    "- Created every time a function is created\n"
    "- Enables data privacy"
)


def check(answer: str, section: Section = SECTION):
    return TextChecker().check(answer, section, "definition")


def rules(answer: str, section: Section = SECTION) -> list[str]:
    return [f.rule for f in check(answer, section)]


def test_good_definition():
    """Test that a one-sentence opener with characteristics passes."""
    assert check(GOOD_DEFINITION) == []


def test_opening_must_be_one_sentence():
    """Test that a multi-sentence opener is an error."""
    answer = GOOD_DEFINITION.replace("scope.", "scope. It is common in JavaScript.")
    findings = [f for f in check(answer) if f.rule == "definition-single-sentence"]
    assert len(findings) == 1
    assert findings[0].severity == Severity.ERROR
    assert "found 2 sentences" in findings[0].message


def test_blank_line_after_opener():
    """Test that the opener must be followed by a blank line."""
    answer = GOOD_DEFINITION.replace("scope.\n\n", "scope.\n")
    assert rules(answer) == ["definition-blank-line"]


def test_bulleted_list_required():
    """Test that characteristics must be a bulleted list."""
    found = rules("A closure is a function bundled with its scope.")
    assert found == ["definition-bulleted-list-required", "definition-min-list-items"]


def test_too_many_characteristics():
    """Test the maximum number of characteristics."""
    items = "\n".join(f"- Characteristic {i}" for i in range(1, 8))
    answer = f"A closure is a function bundled with its scope.\n\n{items}"
    assert rules(answer) == ["definition-max-list-items"]


def test_required_headers():
    """Test that required headers must be present."""
    section = Section(
        name="Overview",
        format=SectionFormat.TEXT,
        constraints=(Constraint(ConstraintKind.REQUIRED_HEADERS, ("Overview", "Details")),),
    )
    findings = check("## Overview\nText here.", section)
    assert [f.message for f in findings] == ['Missing required section header: "Details"']


def test_definition_structure():
    """Test the opener, gap and characteristics structure."""
    section = Section(
        name="Definition",
        format=SectionFormat.TEXT,
        constraints=(Constraint(ConstraintKind.DEFINITION_STRUCTURE),),
    )
    assert rules(GOOD_DEFINITION, section) == []
    assert rules("A closure is a function.\nIt keeps its scope.", section) == [
        "definition-definition-blank-line",
        "definition-definition-characteristics",
    ]
    assert rules("\nA closure is a function.", section) == ["definition-definition-opening"]
