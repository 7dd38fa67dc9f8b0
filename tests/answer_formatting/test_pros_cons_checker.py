"""Tests for pros/cons section checks."""

from answer_formatting.models import Severity
from answer_formatting.patterns import PatternLibrary
from answer_formatting.validation.rules import ProsConsChecker

SECTION = PatternLibrary().get_pattern("pros-cons").structure.sections[0]

BALANCED = "## Advantages\n\n- Fast reads\n- Simple model\n\n## Disadvantages\n\n- Stale data\n- Memory cost"


def check(answer: str):
    return ProsConsChecker().check(answer, SECTION, "pros-cons")


def rules(answer: str) -> list[str]:
    return [f.rule for f in check(answer)]


def test_balanced_answer_passes():
    """Test that two bulleted, balanced sections pass."""
    assert check(BALANCED) == []


def test_alternate_heading_names():
    """Test that Pros/Cons headings are accepted."""
    assert check("### Pros\n- Fast reads\n- Simple model\n### Cons\n- Stale data\n- Memory cost") == []


def test_missing_both_sections():
    """Test that both sections are required."""
    findings = check("Caching makes reads faster but costs memory.")
    assert [(f.rule, f.severity) for f in findings] == [
        ("pros-cons-missing-advantages", Severity.ERROR),
        ("pros-cons-missing-disadvantages", Severity.ERROR),
    ]


def test_missing_cons_section():
    """Test a missing disadvantages section and the resulting imbalance."""
    found = rules("## Advantages\n- Fast reads\n- Simple model")
    assert found == ["pros-cons-missing-disadvantages", "pros-cons-section-imbalance"]


def test_empty_section():
    """Test that an existing section without items is flagged."""
    found = rules("## Advantages\n- Fast reads\n- Simple model\n\n## Disadvantages\n")
    assert "pros-cons-missing-cons" in found
    assert "pros-cons-missing-disadvantages" not in found


def test_imbalance():
    """Test that a lopsided ratio is flagged."""
    pros = "\n".join(f"- Benefit {i}" for i in range(7))
    answer = f"## Pros\n{pros}\n## Cons\n- Drawback one\n- Drawback two"
    assert rules(answer) == ["pros-cons-section-imbalance"]


def test_prose_sections_should_be_bulleted():
    """Test that sections written as prose are flagged."""
    answer = "## Advantages\nIt is fast.\n\n## Disadvantages\nIt is costly."
    assert rules(answer).count("pros-cons-list-format") == 2


def test_few_items_noted():
    """Test the minimum items per section."""
    found = rules("## Advantages\n- Fast reads\n\n## Disadvantages\n- Stale data")
    assert found == ["pros-cons-min-pros", "pros-cons-min-cons"]


def test_section_order():
    """Test that disadvantages before advantages is noted."""
    answer = "## Disadvantages\n- Stale data\n- Memory cost\n\n## Advantages\n- Fast reads\n- Simple model"
    findings = check(answer)
    assert [(f.rule, f.severity) for f in findings] == [("pros-cons-section-order", Severity.INFO)]
