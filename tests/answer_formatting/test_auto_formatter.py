"""Tests for the auto-formatter and fix backlog."""

import pytest

from answer_formatting.formatting import AutoFormatter
from answer_formatting.formatting.auto_formatter import (
    format_comparison,
    format_definition,
    format_list,
    format_process,
    format_pros_cons,
    format_troubleshooting,
    tag_untagged_fences,
)
from answer_formatting.models import (
    FixType,
    FormatFix,
    FormatPattern,
    PatternStructure,
    Section,
    SectionFormat,
    Severity,
    ValidationResult,
    ValidationViolation,
)
from answer_formatting.patterns import PatternLibrary
from answer_formatting.validation import FormatValidator


@pytest.fixture
def formatter():
    return AutoFormatter()


@pytest.fixture
def library():
    return PatternLibrary()


class TestFormat:
    """Tests for pattern transforms."""

    def test_empty_answer_unchanged(self, formatter, library):
        """Test that blank answers are returned as is."""
        assert formatter.format("", library.get_pattern("list")) == ""
        assert formatter.format("  ", library.get_pattern("list")) == "  "

    def test_format_is_deterministic(self, formatter, library):
        """Test that formatting the same input twice gives the same output."""
        pattern = library.get_pattern("process")
        answer = "- Install the tools\n- Build the project"
        assert formatter.format(answer, pattern) == formatter.format(answer, pattern)

    def test_unknown_pattern_unchanged(self, formatter):
        """Test that a pattern without sections or formatter is a no-op."""
        pattern = FormatPattern(id="haiku", name="Haiku", keywords=("haiku",), priority=1)
        assert formatter.format("Old pond, frog jumps in", pattern) == "Old pond, frog jumps in"

    def test_custom_pattern_uses_section_format(self, formatter):
        """Test that custom patterns fall back to their first section's transform."""
        pattern = FormatPattern(
            id="faq",
            name="FAQ",
            keywords=("faq",),
            priority=1,
            structure=PatternStructure(sections=(Section(name="Steps", format=SectionFormat.PROCESS),)),
        )
        assert formatter.format("- Install the tools\n- Run the suite", pattern) == (
            "1. Install the tools\n2. Run the suite"
        )

    def test_comparison_adds_placeholder_table(self):
        """Test that prose gets a leading placeholder table."""
        result = format_comparison("REST has many endpoints.")
        assert result.startswith("| Feature | Option A | Option B |")
        assert result.endswith("REST has many endpoints.")

    def test_comparison_normalizes_table(self):
        """Test that cramped tables get spacing and a separator row."""
        result = format_comparison("|Feature|REST|GraphQL|\n|Endpoints|Many|One|")
        assert result.split("\n") == [
            "| Feature | REST | GraphQL |",
            "|----------|----------|----------|",
            "| Endpoints | Many | One |",
        ]

    def test_definition_separates_opener_and_bulletizes(self):
        """Test definition restructuring."""
        answer = "A closure is a function.\nIt retains access to outer variables\nIt enables data privacy"
        assert format_definition(answer) == (
            "A closure is a function.\n\n- It retains access to outer variables\n- It enables data privacy"
        )

    def test_list_normalizes_bullets(self):
        """Test that odd bullet characters become dashes."""
        assert format_list("• First item\n• Second item") == "- First item\n- Second item"

    def test_list_spaces_glued_markers(self):
        """Test that a marker glued to its text gets a space."""
        assert format_list("-First item\n- Second item") == "- First item\n- Second item"

    def test_list_bulletizes_bare_lines(self):
        """Test that bare lines become a list when there is none."""
        assert format_list("Readability\nTestability") == "- Readability\n- Testability"

    def test_list_renumbers(self):
        """Test that numbered lists are renumbered."""
        assert format_list("1. First\n3. Second\n7. Third") == "1. First\n2. Second\n3. Third"

    def test_process_numbers_bullets(self):
        """Test that bullets become sequential steps."""
        answer = "- Install the dependencies\n- Build the bundle\n- Deploy to production"
        assert format_process(answer) == "1. Install the dependencies\n2. Build the bundle\n3. Deploy to production"

    def test_process_keeps_code_blocks(self):
        """Test that lines inside fenced code are left alone."""
        answer = "- Install the dependencies\n```bash\n- not a step\n```"
        assert format_process(answer) == "1. Install the dependencies\n```bash\n- not a step\n```"

    def test_code_tags_opening_fences_only(self):
        """Test that only untagged opening fences get a language."""
        answer = "```\nx = 1\n```\n\n```python\ny = 2\n```"
        assert tag_untagged_fences(answer) == "```javascript\nx = 1\n```\n\n```python\ny = 2\n```"

    def test_pros_cons_adds_sections(self):
        """Test that missing sections are appended."""
        result = format_pros_cons("Caching is fast.")
        assert result.startswith("Caching is fast.\n\n## Advantages")
        assert "## Disadvantages" in result

    def test_pros_cons_inserts_missing_advantages_before_cons(self):
        """Test that a lone Disadvantages section gets Advantages first."""
        result = format_pros_cons("## Disadvantages\n- Memory cost")
        assert result.index("## Advantages") < result.index("## Disadvantages")

    def test_architecture_inserts_diagram(self, formatter, library):
        """Test that a placeholder diagram is inserted."""
        result = formatter.format("The client talks to the server.\nThe server talks to the database.", library.get_pattern("architecture"))
        assert "```mermaid" in result
        assert result.startswith("The client talks to the server.")

    def test_troubleshooting_adds_sections_and_numbers_solutions(self):
        """Test troubleshooting restructuring."""
        result = format_troubleshooting("## Solutions\n- Restart the worker\n- Check the logs")
        assert result.startswith("## Problem")
        assert result.index("## Causes") < result.index("## Solutions")
        assert "1. Restart the worker\n2. Check the logs" in result

    def test_formatting_improves_score(self, formatter, library):
        """Test that formatting a bulleted process answer raises its score."""
        pattern = library.get_pattern("process")
        validator = FormatValidator()
        answer = "- Install the dependencies\n- Build the bundle\n- Deploy to production"

        before = validator.validate(answer, pattern)
        after = validator.validate(formatter.format(answer, pattern), pattern)

        assert not before.is_valid
        assert after.is_valid
        assert after.score > before.score


def violation(rule: str, severity: Severity = Severity.ERROR) -> ValidationViolation:
    return ValidationViolation(rule=rule, severity=severity, message=f"{rule} message", fix=f"{rule} fix")


class TestSuggestFixes:
    """Tests for the fix backlog."""

    def test_sorted_by_priority(self, formatter):
        """Test that errors come before warnings and infos."""
        result = ValidationResult(
            is_valid=False,
            score=65,
            violations=[
                violation("list-max-list-items", Severity.INFO),
                violation("comparison-table-table-required", Severity.ERROR),
                violation("process-action-verb", Severity.WARNING),
            ],
        )
        suggestions = formatter.suggest_fixes(result)
        assert [s.priority for s in suggestions] == [100, 50, 25]
        assert suggestions[0].violation.rule == "comparison-table-table-required"

    def test_known_fix_types(self, formatter):
        """Test the fix chosen for known rule families."""
        result = ValidationResult(
            is_valid=False,
            score=0,
            violations=[
                violation("comparison-table-table-required"),
                violation("code-example-code-language"),
                violation("definition-blank-line"),
                violation("architecture-diagram-required"),
                violation("troubleshooting-missing-causes"),
            ],
        )
        fixes = {s.violation.rule: s.fixes[0] for s in formatter.suggest_fixes(result)}

        assert fixes["comparison-table-table-required"].type == FixType.REFORMAT
        assert fixes["code-example-code-language"].replacement == "```javascript"
        assert fixes["definition-blank-line"].target == "after-first-line"
        assert fixes["architecture-diagram-required"].target == "end"
        assert "## Problem" in fixes["troubleshooting-missing-causes"].replacement

    def test_unknown_rule_has_no_replacement(self, formatter):
        """Test that unmapped violations name a fix without an edit."""
        result = ValidationResult(is_valid=True, score=95, violations=[violation("list-list-consistency", Severity.INFO)])
        suggestion = formatter.suggest_fixes(result)[0]
        assert suggestion.fixes[0].replacement is None
        assert suggestion.description.startswith("1 fix available for info issue")

    def test_solution_action_verb_not_mapped_to_step_fix(self, formatter):
        """Test that solution verb notes do not get the process step fix."""
        result = ValidationResult(
            is_valid=True, score=95, violations=[violation("troubleshooting-solution-action-verb", Severity.INFO)]
        )
        assert formatter.suggest_fixes(result)[0].fixes[0].replacement is None


class TestApplyFix:
    """Tests for applying single fixes."""

    def test_replace_language_tag(self, formatter):
        """Test tagging untagged fences without touching closing fences."""
        fix = FormatFix("f", FixType.REPLACE, "tag", "```", "```python")
        assert formatter.apply_fix("```\nx = 1\n```", fix) == "```python\nx = 1\n```"

    def test_prefix_step_with_verb(self, formatter):
        """Test adding a verb to the first step without one."""
        fix = FormatFix("f", FixType.REPLACE, "verb", "step-beginning", "Configure")
        answer = "1. Install the tools\n2. The server settings"
        assert formatter.apply_fix(answer, fix) == "1. Install the tools\n2. Configure the server settings"

    def test_replace_literal_text(self, formatter):
        """Test replacing literal text."""
        fix = FormatFix("f", FixType.REPLACE, "rename", "REST", "gRPC")
        assert formatter.apply_fix("REST is fine", fix) == "gRPC is fine"

    def test_replace_without_replacement_is_noop(self, formatter):
        """Test that a fix without an edit leaves the answer alone."""
        fix = FormatFix("f", FixType.REPLACE, "manual", "content", None)
        assert formatter.apply_fix("answer", fix) == "answer"

    def test_insert_after_first_line(self, formatter):
        """Test inserting a blank line after the opener."""
        fix = FormatFix("f", FixType.INSERT, "blank", "after-first-line", "\n")
        assert formatter.apply_fix("Opener.\n- item", fix) == "Opener.\n\n- item"

    def test_insert_at_end(self, formatter):
        """Test appending content."""
        fix = FormatFix("f", FixType.INSERT, "diagram", "end", "```mermaid\ngraph TD\n```")
        assert formatter.apply_fix("Text", fix) == "Text\n\n```mermaid\ngraph TD\n```"

    def test_insert_after_first_table_row(self, formatter):
        """Test inserting a header separator."""
        fix = FormatFix("f", FixType.INSERT, "separator", "after-first-table-row", "|---|---|")
        assert formatter.apply_fix("Intro\n| A | B |\n| 1 | 2 |", fix) == "Intro\n| A | B |\n|---|---|\n| 1 | 2 |"

    def test_remove(self, formatter):
        """Test removing literal text."""
        fix = FormatFix("f", FixType.REMOVE, "drop", " TODO", None)
        assert formatter.apply_fix("Done TODO", fix) == "Done"

    def test_reformat_replaces_content(self, formatter):
        """Test replacing the whole answer with a template."""
        fix = FormatFix("f", FixType.REFORMAT, "template", "content", "- one\n- two")
        assert formatter.apply_fix("anything", fix) == "- one\n- two"
