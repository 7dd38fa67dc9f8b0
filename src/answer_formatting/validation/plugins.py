"""Named predicate registry for custom pattern rules."""

import re
from collections.abc import Callable

from ..errors import RuleExecutionError
from ..models import Rule
from .scanners import FENCE_RE, HEADING_RE, split_lines

Predicate = Callable[[str], bool]

_PLACEHOLDER_RE = re.compile(r"\bTODO\b|\bTBD\b|\bFIXME\b|lorem ipsum|\[insert[^\]]*\]", re.IGNORECASE)


def non_empty(answer: str) -> bool:
    return bool(answer.strip())


def no_placeholders(answer: str) -> bool:
    """True when the answer has no TODO/TBD/lorem ipsum style filler."""
    return not _PLACEHOLDER_RE.search(answer)


def balanced_code_fences(answer: str) -> bool:
    return sum(1 for line in split_lines(answer) if FENCE_RE.match(line)) % 2 == 0


def has_heading(answer: str) -> bool:
    return any(HEADING_RE.match(line) for line in split_lines(answer))


BUILTIN_PREDICATES: dict[str, Predicate] = {
    "non-empty": non_empty,
    "no-placeholders": no_placeholders,
    "balanced-code-fences": balanced_code_fences,
    "has-heading": has_heading,
}


class RuleRegistry:
    """Maps predicate names referenced by custom rules to callables."""

    def __init__(self, include_builtins: bool = True):
        """Initialize the registry.

        Args:
            include_builtins: Whether to register the built-in predicates
        """
        self.predicates: dict[str, Predicate] = dict(BUILTIN_PREDICATES) if include_builtins else {}

    def register(self, name: str, predicate: Predicate):
        """Register (or replace) a predicate under a name."""
        self.predicates[name] = predicate

    def unregister(self, name: str) -> bool:
        return self.predicates.pop(name, None) is not None

    def names(self) -> list[str]:
        return sorted(self.predicates)

    def evaluate(self, rule: Rule, answer: str) -> bool:
        """Evaluate a custom rule against an answer.

        Args:
            rule: Rule naming the predicate to run
            answer: Answer text

        Returns:
            True if the answer satisfies the rule

        Raises:
            RuleExecutionError: If the predicate is unknown or raises
        """
        predicate = self.predicates.get(rule.predicate)
        if predicate is None:
            raise RuleExecutionError(rule.id, KeyError(f"unknown predicate '{rule.predicate}'"))

        try:
            return bool(predicate(answer))
        except Exception as e:
            raise RuleExecutionError(rule.id, e) from e
