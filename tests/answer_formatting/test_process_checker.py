"""Tests for process step checks."""

from answer_formatting.models import Severity
from answer_formatting.patterns import PatternLibrary
from answer_formatting.validation.rules import ProcessChecker
from answer_formatting.validation.rules.process_rules import contains_phrase, first_word

SECTION = PatternLibrary().get_pattern("process").structure.sections[0]


def check(answer: str):
    return ProcessChecker().check(answer, SECTION, "process")


def rules(answer: str) -> list[str]:
    return [f.rule for f in check(answer)]


def test_clean_process():
    """Test that clear, action-led steps pass."""
    answer = "1. Install the dependencies\n2. Build the production bundle\n3. Deploy the bundle to the server"
    assert check(answer) == []


def test_short_action_led_steps_have_no_errors():
    """Test that brief steps only draw detail warnings."""
    findings = check("1. Configure server\n2. Run tests\n3. Deploy to prod")
    assert not [f for f in findings if f.severity == Severity.ERROR]
    assert [f.rule for f in findings] == ["process-step-detail"]


def test_numbered_list_required():
    """Test that steps must be numbered."""
    findings = check("- Install things\n- Run things")
    assert [(f.rule, f.severity) for f in findings] == [("process-process-numbered-list", Severity.ERROR)]


def test_action_verb_warning():
    """Test that steps must start with an action verb."""
    findings = check("1. The server must be configured\n2. Run the migrations now\n3. Deploy the release build")
    verb = [f for f in findings if f.rule == "process-action-verb"]
    assert len(verb) == 1
    assert verb[0].severity == Severity.WARNING
    assert verb[0].line_hint == 0
    assert 'Step 1 should start with an action verb: "The server must be configured"' == verb[0].message


def test_sequence_errors():
    """Test that out-of-order numbering is an error."""
    findings = check("1. Install the dependencies\n2. Build the production bundle\n4. Deploy the bundle now")
    sequence = [f for f in findings if f.rule == "process-sequence-numbering"]
    assert len(sequence) == 1
    assert sequence[0].severity == Severity.ERROR
    assert "expected 3, found 4" in sequence[0].message


def test_vague_step():
    """Test that vague wording is flagged."""
    answer = "1. Configure the cache somehow\n2. Restart the application\n3. Verify the cache hit ratio"
    assert rules(answer) == ["process-step-vagueness"]


def test_vague_phrase_needs_whole_word():
    """Test that vague phrases do not match inside other words."""
    assert not contains_phrase("Install setcap binaries", ("etc",))
    assert contains_phrase("Install tools, etc.", ("etc",))


def test_step_count_limits():
    """Test minimum and maximum step counts."""
    assert rules("1. Install the dependencies\n2. Deploy the application") == ["process-min-steps"]
    many = "\n".join(f"{i}. Run migration batch {i}" for i in range(1, 12))
    assert rules(many) == ["process-max-steps"]


def test_long_step():
    """Test that very long steps are noted."""
    long_step = "Configure " + " ".join(["the"] * 35)
    answer = f"1. {long_step}\n2. Restart the application\n3. Verify the deployment"
    assert rules(answer) == ["process-step-length"]


def test_first_word():
    """Test first-word extraction strips punctuation and case."""
    assert first_word("  **Install** the tool") == "install"
    assert first_word("") == ""
