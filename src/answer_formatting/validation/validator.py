"""Main validator orchestrating section checkers and custom rules."""

from common.logger import get_logger

from ..errors import RuleExecutionError
from ..models import FormatPattern, Rule, SectionFormat, Severity, ValidationResult
from .feedback import calculate_score, collect_suggestions, to_violation
from .plugins import RuleRegistry
from .rules import Finding, SectionChecker, default_checkers

logger = get_logger(__name__)


class FormatValidator:
    """Validates answers against a pattern's sections and custom rules.

    Validation is a pure function of (answer, pattern); the validator keeps
    no per-run state.
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        checkers: dict[SectionFormat, SectionChecker] | None = None,
    ):
        """Initialize the validator.

        Args:
            registry: Predicate registry for custom rules, defaults to built-ins
            checkers: Checker per section format, defaults to the standard set
        """
        self.registry = registry or RuleRegistry()
        self.checkers = checkers or default_checkers()

    def validate(self, answer: str, pattern: FormatPattern) -> ValidationResult:
        """Validate an answer against a pattern.

        Args:
            answer: Answer text
            pattern: Pattern the answer should follow

        Returns:
            ValidationResult with score, violations and suggestions
        """
        if not answer or not answer.strip():
            return ValidationResult(is_valid=True, score=100, violations=[], suggestions=[])

        findings: list[Finding] = []
        for section in pattern.structure.sections:
            checker = self.checkers.get(section.format)
            if checker is None:
                logger.warning(f"No checker registered for section format '{section.format.value}'")
                continue
            findings.extend(checker.check(answer, section, pattern.id))

        for rule in pattern.structure.rules:
            finding = self._check_rule(answer, rule)
            if finding is not None:
                findings.append(finding)

        violations = [to_violation(f, answer) for f in findings]
        return ValidationResult(
            is_valid=not any(f.severity == Severity.ERROR for f in findings),
            score=calculate_score(findings),
            violations=violations,
            suggestions=collect_suggestions(findings),
        )

    def _check_rule(self, answer: str, rule: Rule) -> Finding | None:
        try:
            passed = self.registry.evaluate(rule, answer)
        except RuleExecutionError as e:
            logger.warning(f"Skipping custom rule: {e}")
            return None

        if passed:
            return None

        return Finding(
            rule=rule.id,
            severity=Severity.ERROR,
            message=rule.error_message,
            fix=f"Address the issue: {rule.description}",
        )
