"""Tests for code section checks."""

from answer_formatting.models import Constraint, ConstraintKind, Location, Section, SectionFormat, Severity
from answer_formatting.patterns import PatternLibrary
from answer_formatting.validation import FormatValidator
from answer_formatting.validation.rules import CodeChecker

PATTERN = PatternLibrary().get_pattern("code-example")
SECTION = PATTERN.structure.sections[0]


def rules(answer: str, section: Section = SECTION) -> list[str]:
    return [f.rule for f in CodeChecker().check(answer, section, "code-example")]


def test_clean_code_block():
    """Test that a tagged, commented, balanced block passes."""
    answer = "Adding numbers:\n\n```python\n# Add two numbers\ndef add(a, b):\n    return a + b\n```"
    assert rules(answer) == []


def test_code_required():
    """Test that code must be present."""
    findings = CodeChecker().check("Plain prose.", SECTION, "code-example")
    assert [(f.rule, f.severity) for f in findings] == [("code-example-code-required", Severity.ERROR)]


def test_mermaid_is_not_code():
    """Test that diagram blocks do not count as code."""
    assert rules("```mermaid\ngraph TD\n  A --> B\n```") == ["code-example-code-required"]


def test_inline_code_satisfies_presence():
    """Test that inline code alone counts as code."""
    assert rules("Call `len(items)` to count.") == []


def test_missing_language_located():
    """Test that an untagged fence is flagged with its location."""
    answer = "Example:\n```\nx = 1\n```"
    result = FormatValidator().validate(answer, PATTERN)
    language = [v for v in result.violations if v.rule == "code-example-code-language"]
    assert len(language) == 1
    assert language[0].location == Location(line=2, column=1)
    assert language[0].fix.startswith("SHOULD FIX: Add language identifier")


def test_unknown_language():
    """Test that unrecognized language tags are noted."""
    assert rules("```klingon\nqapla()\n```") == ["code-example-unknown-language"]


def test_unclosed_block():
    """Test that an unterminated block is an error."""
    assert "code-example-incomplete-block" in rules("```python\n# start\nprint('hi')")


def test_empty_block():
    """Test that an empty block is flagged."""
    assert rules("```python\n```") == ["code-example-empty-block"]


def test_placeholder_ellipsis_and_unbalanced_brackets():
    """Test runnable-code heuristics."""
    answer = "```javascript\n// handler\nfunction run() {\n  ...\n```"
    found = rules(answer)
    assert "code-example-incomplete-code" in found
    assert "code-example-syntax-error" in found


def test_long_block_without_comments():
    """Test that long uncommented blocks are noted."""
    body = "\n".join(f"x{i} = {i}" for i in range(6))
    assert rules(f"```python\n{body}\n```") == ["code-example-missing-comments"]


def test_line_limits():
    """Test minimum and maximum code lines."""
    section = Section(
        name="Code",
        format=SectionFormat.CODE,
        constraints=(Constraint(ConstraintKind.MIN_LINES, 3), Constraint(ConstraintKind.MAX_LINES, 4)),
    )
    assert rules("```python\nx = 1\n```", section) == ["code-example-min-code-lines"]
    body = "\n".join(f"x{i} = {i}" for i in range(5))
    assert rules(f"```python\n{body}\n```", section) == ["code-example-max-code-lines"]


def test_long_inline_code():
    """Test that long inline spans are noted."""
    span = "const result = items.filter(item => item.active).map(item => item.id)"
    assert rules(f"Use `{span}` here.") == ["code-example-long-inline-code"]
