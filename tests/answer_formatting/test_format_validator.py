"""Tests for the format validator."""

import pytest

from answer_formatting.models import (
    FormatPattern,
    PatternStructure,
    Rule,
    Section,
    SectionFormat,
    Severity,
)
from answer_formatting.patterns import PatternLibrary
from answer_formatting.validation import FormatValidator, RuleRegistry

COMPARISON_ANSWER = """| Feature | REST | GraphQL |
|---------|------|---------|
| Endpoints | Many | One |
| Fetching | Fixed shape | Client-defined |"""


@pytest.fixture
def library():
    return PatternLibrary()


@pytest.fixture
def validator():
    return FormatValidator()


@pytest.mark.parametrize(
    "pattern_id",
    [
        "comparison-table",
        "definition",
        "list",
        "process",
        "code-example",
        "pros-cons",
        "architecture",
        "troubleshooting",
        "best-practices",
    ],
)
def test_empty_answer_is_valid(validator, library, pattern_id):
    """Test that an empty answer passes any pattern with a perfect score."""
    for answer in ("", "   \n  "):
        result = validator.validate(answer, library.get_pattern(pattern_id))
        assert result.is_valid
        assert result.score == 100
        assert result.violations == []


def test_compliant_comparison_table(validator, library):
    """Test that a well-formed comparison table is clean."""
    result = validator.validate(COMPARISON_ANSWER, library.get_pattern("comparison-table"))
    assert result.is_valid
    assert result.score == 100
    assert result.is_clean


def test_answer_without_table_fails_comparison(validator, library):
    """Test that prose fails the comparison table pattern."""
    answer = "REST exposes many endpoints. GraphQL exposes a single endpoint."
    result = validator.validate(answer, library.get_pattern("comparison-table"))

    assert not result.is_valid
    assert result.score <= 80
    errors = result.errors
    assert errors
    assert any("table" in v.rule for v in errors)
    assert errors[0].message.startswith("Critical Issue: ")
    assert errors[0].fix.startswith("MUST FIX: ")
    assert result.suggestions == ["Add a markdown table with proper headers and data rows"]


def test_process_answer_without_verb_errors(validator, library):
    """Test that short action-led steps produce no numbering or verb errors."""
    answer = "1. Configure server\n2. Run tests\n3. Deploy to prod"
    result = validator.validate(answer, library.get_pattern("process"))

    assert result.is_valid
    rules = [v.rule for v in result.errors]
    assert not any("numbered" in r or "sequence" in r or "action-verb" in r for r in rules)
    assert not any("action-verb" in v.rule for v in result.violations)


def test_validation_is_pure(validator, library):
    """Test that validating twice yields equal results."""
    pattern = library.get_pattern("pros-cons")
    answer = "## Pros\n- fast\n\n## Cons\nslow to build"
    assert validator.validate(answer, pattern) == validator.validate(answer, pattern)


def test_score_matches_penalties(validator, library):
    """Test that the score is 100 minus the per-severity penalties."""
    answer = "## Cons\n- slow\n\n## Pros\n- fast"
    result = validator.validate(answer, library.get_pattern("pros-cons"))
    penalty = {Severity.ERROR: 20, Severity.WARNING: 10, Severity.INFO: 5}
    expected = max(0, 100 - sum(penalty[v.severity] for v in result.violations))
    assert result.score == expected


class TestCustomRules:
    """Tests for named-predicate custom rules."""

    @staticmethod
    def pattern_with_rule(predicate: str) -> FormatPattern:
        return FormatPattern(
            id="faq",
            name="FAQ",
            keywords=("faq",),
            priority=10,
            structure=PatternStructure(
                rules=(Rule("faq-no-placeholders", "No placeholder text", predicate, "Answer contains placeholders"),)
            ),
        )

    def test_failing_rule_is_error(self, validator):
        """Test that a failing custom rule becomes an error violation."""
        result = validator.validate("TODO: finish", self.pattern_with_rule("no-placeholders"))
        assert not result.is_valid
        assert [v.rule for v in result.violations] == ["faq-no-placeholders"]
        assert result.violations[0].fix == "MUST FIX: Address the issue: No placeholder text"

    def test_passing_rule(self, validator):
        """Test that a passing custom rule adds nothing."""
        result = validator.validate("A complete answer.", self.pattern_with_rule("no-placeholders"))
        assert result.is_clean

    def test_failing_plugin_is_skipped(self, caplog):
        """Test that a raising predicate is logged and skipped."""

        def explode(answer):
            raise RuntimeError("boom")

        registry = RuleRegistry()
        registry.register("explode", explode)
        validator = FormatValidator(registry=registry)

        result = validator.validate("Some answer", self.pattern_with_rule("explode"))

        assert result.is_valid
        assert result.score == 100
        assert "faq-no-placeholders" in caplog.text

    def test_unknown_plugin_is_skipped(self, validator, caplog):
        """Test that an unknown predicate is logged and skipped."""
        result = validator.validate("Some answer", self.pattern_with_rule("nonexistent"))
        assert result.is_clean
        assert "nonexistent" in caplog.text


def test_missing_checker_is_skipped(caplog):
    """Test that sections without a registered checker are ignored."""
    pattern = FormatPattern(
        id="tabular",
        name="Tabular",
        keywords=("table",),
        priority=1,
        structure=PatternStructure(sections=(Section(name="Table", format=SectionFormat.TABLE),)),
    )
    validator = FormatValidator()
    validator.checkers = {}

    result = validator.validate("no table here", pattern)

    assert result.is_clean
    assert "table" in caplog.text
