"""Validation report building and display."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from rich.markup import escape

from common.logger import get_logger

from .formatting import AutoFormatter
from .models import Severity, ValidationResult, ValidationViolation

logger = get_logger(__name__)


@dataclass
class ValidationReport:
    """Validation outcome for one question, ready to store or display."""

    question_id: str
    timestamp: str
    pattern: str
    score: int
    violations: list[ValidationViolation] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    auto_fixable: bool = False

    @property
    def is_valid(self) -> bool:
        return not any(v.severity == Severity.ERROR for v in self.violations)

    def to_dict(self) -> dict[str, Any]:
        return {
            "question_id": self.question_id,
            "timestamp": self.timestamp,
            "pattern": self.pattern,
            "score": self.score,
            "violations": [v.to_dict() for v in self.violations],
            "suggestions": list(self.suggestions),
            "auto_fixable": self.auto_fixable,
        }


def build_report(
    question_id: str,
    pattern: str,
    result: ValidationResult,
    formatter: AutoFormatter | None = None,
    timestamp: str | None = None,
) -> ValidationReport:
    """Build a report from a validation result.

    Args:
        question_id: Question the answer belongs to
        pattern: Id of the pattern validated against
        result: Validation result
        formatter: Formatter used to decide auto-fixability
        timestamp: Report time, defaults to now (UTC)

    Returns:
        Validation report; auto-fixable when any suggested fix carries an edit
    """
    formatter = formatter or AutoFormatter()
    auto_fixable = any(
        fix.replacement is not None
        for suggestion in formatter.suggest_fixes(result)
        for fix in suggestion.fixes
    )
    return ValidationReport(
        question_id=question_id,
        timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
        pattern=pattern,
        score=result.score,
        violations=list(result.violations),
        suggestions=list(result.suggestions),
        auto_fixable=auto_fixable,
    )


class ValidationReporter:
    """Format and display validation reports."""

    def __init__(self, show_info: bool = True):
        """Initialize the reporter.

        Args:
            show_info: Whether to show info-level violations
        """
        self.show_info = show_info

    def report_console(self, reports: list[ValidationReport]) -> int:
        """Log validation reports to the console.

        Args:
            reports: Reports to display

        Returns:
            Exit code (0 for success, 1 if errors found)
        """
        total_errors = 0
        total_warnings = 0
        total_info = 0

        for report in reports:
            if not report.violations:
                continue

            heading = f"{escape(report.question_id)} ([cyan]{escape(report.pattern)}[/cyan], score {report.score})"
            logger.info(f"\n{heading}:")

            for violation in report.violations:
                if violation.severity == Severity.ERROR:
                    total_errors += 1
                    icon = "[red]✗[/red]"
                elif violation.severity == Severity.WARNING:
                    total_warnings += 1
                    icon = "[yellow]⚠[/yellow]"
                else:
                    total_info += 1
                    icon = "ℹ"

                if not self.show_info and violation.severity == Severity.INFO:
                    continue

                where = f"Line [bold]{violation.location.line}[/bold]: " if violation.location else ""
                logger.info(f"  {icon} {where}{escape(violation.message)}")
                logger.info(f"      {escape(violation.fix)}")

        logger.info("\n" + "=" * 60)
        logger.info(
            f"Total: [bold]{total_errors}[/bold] errors, [bold]{total_warnings}[/bold] warnings, "
            f"[bold]{total_info}[/bold] info"
        )

        if total_errors > 0:
            return 1
        return 0

    def report_json(self, reports: list[ValidationReport]) -> str:
        """Format reports with violations as JSON.

        Args:
            reports: Reports to serialize

        Returns:
            JSON string
        """
        data = {"reports": [r.to_dict() for r in reports if r.violations]}
        return json.dumps(data, indent=2)
