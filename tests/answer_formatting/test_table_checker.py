"""Tests for table section checks."""

from answer_formatting.models import Section, SectionFormat, Severity
from answer_formatting.patterns import PatternLibrary
from answer_formatting.validation.rules import TableChecker

SECTION = PatternLibrary().get_pattern("comparison-table").structure.sections[0]


def check(answer: str, section: Section = SECTION):
    return TableChecker().check(answer, section, "comparison-table")


def rules(answer: str) -> list[str]:
    return [f.rule for f in check(answer)]


def test_well_formed_table():
    """Test that a complete comparison table passes."""
    answer = "| Feature | A | B |\n|---|---|---|\n| Speed | Fast | Slow |\n| Cost | High | Low |"
    assert check(answer) == []


def test_table_required():
    """Test that a required table must be present."""
    findings = check("Just prose.")
    assert [f.rule for f in findings] == ["comparison-table-table-required"]
    assert findings[0].severity == Severity.ERROR


def test_optional_table_may_be_absent():
    """Test that an optional table section accepts no table."""
    section = Section(name="Table", format=SectionFormat.TABLE, required=False)
    assert check("Just prose.", section) == []


def test_min_columns():
    """Test the minimum column count."""
    answer = "| Feature | A |\n|---|---|\n| Speed | Fast |\n| Cost | High |"
    assert "comparison-table-min-columns" in rules(answer)


def test_missing_header_separator():
    """Test that a table without a separator row is flagged."""
    answer = "| Feature | A | B |\n| Speed | Fast | Slow |\n| Cost | High | Low |"
    found = rules(answer)
    assert "comparison-table-table-headers" in found
    assert "comparison-table-min-data-rows" in found


def test_separator_column_mismatch():
    """Test header and separator column agreement."""
    answer = "| Feature | A | B |\n|---|---|\n| Speed | Fast | Slow |\n| Cost | High | Low |"
    assert "comparison-table-table-alignment" in rules(answer)


def test_feature_column_and_comparison_format():
    """Test hints for a table without a feature column."""
    answer = "| Option | A | B |\n|---|---|---|\n| Speed | Fast | Slow |\n| Cost | High | Low |"
    found = check(answer)
    assert [(f.rule, f.severity) for f in found] == [
        ("comparison-table-feature-column", Severity.WARNING),
        ("comparison-table-comparison-format-2", Severity.INFO),
    ]


def test_multi_item_comparison_format():
    """Test the hint for comparisons of more than two items."""
    answer = "| Option | A | B | C |\n|---|---|---|---|\n| Speed | 1 | 2 | 3 |\n| Cost | 1 | 2 | 3 |"
    assert "comparison-table-comparison-format-multi" in rules(answer)


def test_inconsistent_rows():
    """Test rows with the wrong number of columns."""
    answer = "| Feature | A | B |\n|---|---|---|\n| Speed | Fast |\n| Cost | High | Low |"
    findings = [f for f in check(answer) if f.rule == "comparison-table-inconsistent-rows"]
    assert len(findings) == 1
    assert findings[0].message == "Table row 1 has 2 columns, expected 3"


def test_placeholder_cells():
    """Test that dashes and ellipses count as empty cells."""
    answer = "| Feature | A | B |\n|---|---|---|\n| Speed | - | Slow |\n| Cost | ... | Low |"
    assert rules(answer).count("comparison-table-empty-cells") == 2
