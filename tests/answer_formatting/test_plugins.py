"""Tests for the custom rule predicate registry."""

import pytest

from answer_formatting.errors import RuleExecutionError
from answer_formatting.models import Rule
from answer_formatting.validation import RuleRegistry
from answer_formatting.validation.plugins import (
    balanced_code_fences,
    has_heading,
    no_placeholders,
    non_empty,
)


def make_rule(predicate: str) -> Rule:
    return Rule(id="custom-rule", description="Custom check", predicate=predicate, error_message="Custom failed")


class TestBuiltinPredicates:
    """Tests for the built-in predicates."""

    def test_non_empty(self):
        """Test the non-empty predicate."""
        assert non_empty("text")
        assert not non_empty("  \n ")

    def test_no_placeholders(self):
        """Test placeholder detection."""
        assert no_placeholders("A complete answer.")
        assert not no_placeholders("TODO: write this")
        assert not no_placeholders("Lorem ipsum dolor")
        assert not no_placeholders("Use [insert example here]")

    def test_balanced_code_fences(self):
        """Test fence balance."""
        assert balanced_code_fences("```\ncode\n```")
        assert not balanced_code_fences("```\ncode")

    def test_has_heading(self):
        """Test heading detection."""
        assert has_heading("## Overview\ntext")
        assert not has_heading("#hashtag only")


class TestRuleRegistry:
    """Tests for RuleRegistry."""

    def test_builtins_registered(self):
        """Test that built-ins are available by default."""
        assert RuleRegistry().names() == ["balanced-code-fences", "has-heading", "no-placeholders", "non-empty"]

    def test_without_builtins(self):
        """Test starting from an empty registry."""
        assert RuleRegistry(include_builtins=False).names() == []

    def test_register_and_evaluate(self):
        """Test registering a custom predicate."""
        registry = RuleRegistry()
        registry.register("mentions-cache", lambda answer: "cache" in answer)
        assert registry.evaluate(make_rule("mentions-cache"), "cache hits")
        assert not registry.evaluate(make_rule("mentions-cache"), "no match")

    def test_unregister(self):
        """Test removing a predicate."""
        registry = RuleRegistry()
        assert registry.unregister("non-empty") is True
        assert registry.unregister("non-empty") is False

    def test_unknown_predicate_raises(self):
        """Test that an unknown predicate name is a rule execution error."""
        with pytest.raises(RuleExecutionError) as exc_info:
            RuleRegistry().evaluate(make_rule("missing"), "answer")
        assert exc_info.value.rule_id == "custom-rule"

    def test_failing_predicate_is_wrapped(self):
        """Test that predicate exceptions are wrapped with the rule id."""

        def explode(answer):
            raise RuntimeError("boom")

        registry = RuleRegistry()
        registry.register("explode", explode)
        with pytest.raises(RuleExecutionError, match="boom") as exc_info:
            registry.evaluate(make_rule("explode"), "answer")
        assert isinstance(exc_info.value.cause, RuntimeError)
