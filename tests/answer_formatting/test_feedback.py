"""Tests for violation enrichment and scoring."""

from answer_formatting.models import Location, Severity
from answer_formatting.validation.feedback import (
    actionable_fix,
    calculate_score,
    collect_suggestions,
    enhance_message,
    find_text_location,
    to_violation,
)
from answer_formatting.validation.rules import Finding


def finding(rule="p-rule", severity=Severity.ERROR, message="Broken", fix="Repair it", **kwargs) -> Finding:
    return Finding(rule=rule, severity=severity, message=message, fix=fix, **kwargs)


class TestEnhanceMessage:
    """Tests for message prefixes and category hints."""

    def test_severity_prefixes(self):
        """Test that each severity gets its prefix."""
        assert enhance_message(finding(severity=Severity.ERROR)).startswith("Critical Issue: ")
        assert enhance_message(finding(severity=Severity.WARNING)).startswith("Warning: ")
        assert enhance_message(finding(severity=Severity.INFO)).startswith("Suggestion: ")

    def test_category_hint(self):
        """Test that the rule id selects a category hint."""
        message = enhance_message(finding(rule="comparison-table-min-columns", message="Too narrow"))
        assert message == "Critical Issue: Too narrow (Table formatting issue)"

    def test_no_hint_for_unknown_category(self):
        """Test that unrelated rule ids get no hint."""
        assert enhance_message(finding(rule="faq-no-todo")) == "Critical Issue: Broken"


class TestActionableFix:
    """Tests for fix prefixes and examples."""

    def test_priority_prefixes(self):
        """Test that each severity gets its fix tag."""
        assert actionable_fix(finding(severity=Severity.ERROR)) == "MUST FIX: Repair it"
        assert actionable_fix(finding(severity=Severity.WARNING)) == "SHOULD FIX: Repair it"
        assert actionable_fix(finding(severity=Severity.INFO)) == "CONSIDER: Repair it"

    def test_example_appended(self):
        """Test that known rule families get a worked example."""
        fix = actionable_fix(finding(rule="comparison-table-table-required", fix="Add a table"))
        assert fix.startswith("MUST FIX: Add a table")
        assert "Example:" in fix
        assert "| Feature |" in fix

    def test_empty_fix_falls_back(self):
        """Test the generic fix text."""
        assert actionable_fix(finding(fix="")) == "MUST FIX: Review and correct the issue"


class TestFindTextLocation:
    """Tests for best-effort location lookup."""

    ANSWER = "first line\nsecond Line\nthird line"

    def test_hinted_line_first(self):
        """Test that the hinted line wins when it contains the text."""
        assert find_text_location(self.ANSWER, "line", line_hint=2) == Location(line=3, column=7)

    def test_falls_back_to_scan(self):
        """Test scanning all lines when the hint misses."""
        assert find_text_location(self.ANSWER, "third", line_hint=0) == Location(line=3, column=1)

    def test_case_insensitive_fallback(self):
        """Test the case-insensitive pass."""
        assert find_text_location(self.ANSWER, "SECOND") == Location(line=2, column=1)

    def test_absent_text(self):
        """Test that missing text has no location."""
        assert find_text_location(self.ANSWER, "fourth") is None
        assert find_text_location(self.ANSWER, "") is None

    def test_to_violation_uses_search_text(self):
        """Test that violations carry the located position."""
        violation = to_violation(finding(search_text="second", line_hint=1), self.ANSWER)
        assert violation.location == Location(line=2, column=1)
        assert violation.severity == Severity.ERROR


class TestScoring:
    """Tests for score calculation."""

    def test_clean_score(self):
        """Test that no findings score 100."""
        assert calculate_score([]) == 100

    def test_penalties(self):
        """Test penalties of 20, 10 and 5 per severity."""
        findings = [
            finding(severity=Severity.ERROR),
            finding(severity=Severity.WARNING),
            finding(severity=Severity.INFO),
        ]
        assert calculate_score(findings) == 65

    def test_floor_at_zero(self):
        """Test that the score never drops below zero."""
        assert calculate_score([finding()] * 10) == 0

    def test_score_non_increasing(self):
        """Test that adding findings never raises the score."""
        severities = [Severity.INFO, Severity.ERROR, Severity.WARNING] * 5
        findings = []
        previous = calculate_score(findings)
        for severity in severities:
            findings.append(finding(severity=severity))
            score = calculate_score(findings)
            assert 0 <= score <= previous
            previous = score


def test_collect_suggestions_dedupes_and_skips_info():
    """Test that suggestions are unique error and warning fixes in order."""
    findings = [
        finding(fix="Add a table"),
        finding(severity=Severity.INFO, fix="Consider this"),
        finding(severity=Severity.WARNING, fix="Fill cells"),
        finding(fix="Add a table"),
        finding(fix=""),
    ]
    assert collect_suggestions(findings) == ["Add a table", "Fill cells"]
