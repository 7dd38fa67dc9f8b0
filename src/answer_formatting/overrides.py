"""Helpers for validating, resolving and auditing manual overrides."""

import json
import math
import re
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any

from common.logger import get_logger

from .configuration import ConfigurationManager
from .models import OverrideRecord, Question, parse_timestamp

logger = get_logger(__name__)

MIN_JUSTIFICATION_LENGTH = 10
BRIEF_JUSTIFICATION_LENGTH = 40
SPECIFIC_JUSTIFICATION_LENGTH = 50
RECENT_OVERRIDE_DAYS = 30
STALE_OVERRIDE_DAYS = 90

# Words that suggest a justification names a symptom rather than a reason
GENERIC_COMPLAINT_WORDS = ("bad", "wrong", "broken", "fix", "error")
VAGUE_JUSTIFICATION_TERMS = ("bad", "wrong", "broken", "doesn't work", "not good")


@dataclass
class OverrideValidation:
    """Outcome of checking a proposed override."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class OverrideStats:
    """Usage statistics over all recorded overrides."""

    total_overrides: int = 0
    overrides_by_pattern: dict[str, int] = field(default_factory=dict)
    overrides_by_user: dict[str, int] = field(default_factory=dict)
    average_justification_length: float = 0.0
    most_common_reasons: list[str] = field(default_factory=list)
    override_rate: float = 0.0  # Percentage of questions with overrides

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_overrides": self.total_overrides,
            "overrides_by_pattern": dict(self.overrides_by_pattern),
            "overrides_by_user": dict(self.overrides_by_user),
            "average_justification_length": self.average_justification_length,
            "most_common_reasons": list(self.most_common_reasons),
            "override_rate": self.override_rate,
        }


@dataclass
class JustificationQuality:
    score: int
    feedback: list[str]


def validate_justification_quality(justification: str) -> JustificationQuality:
    """Score how useful a justification is to a later reviewer.

    Args:
        justification: Free-text reason given for an override

    Returns:
        Score in [0, 100] with feedback messages
    """
    feedback = []
    score = 100

    if len(justification) < 20:
        score -= 30
        feedback.append("Justification is too short. Provide more detail.")
    elif len(justification) < SPECIFIC_JUSTIFICATION_LENGTH:
        score -= 15
        feedback.append("Consider providing more detailed explanation.")

    lowered = justification.lower()
    if any(term in lowered for term in VAGUE_JUSTIFICATION_TERMS):
        score -= 20
        feedback.append("Avoid vague terms. Be specific about the issue.")

    sentences = [s for s in re.split(r"[.!?]+", justification) if s.strip()]
    if len(sentences) < 2:
        score -= 10
        feedback.append("Consider using multiple sentences for clarity.")

    if score >= 80:
        feedback.append("Good justification quality.")

    return JustificationQuality(score=max(0, score), feedback=feedback)


class OverrideService:
    """Override checks and reporting on top of a configuration manager."""

    def __init__(self, config_manager: ConfigurationManager):
        self.config_manager = config_manager

    def validate_override(
        self,
        question_id: str,
        justification: str,
        override_pattern: str | None = None,
    ) -> OverrideValidation:
        """Check a proposed override before it is added.

        Args:
            question_id: Question the override applies to
            justification: Reason for the override
            override_pattern: Pattern to force, or None to disable formatting

        Returns:
            Validation outcome; problems are reported, never raised
        """
        errors = []
        warnings = []
        question_id = question_id or ""
        justification = justification or ""
        trimmed = justification.strip()

        if not question_id.strip():
            errors.append("Question ID is required")

        if not trimmed:
            errors.append("Justification is required")
        elif len(trimmed) < MIN_JUSTIFICATION_LENGTH:
            errors.append("Justification must be at least 10 characters long")
        elif len(trimmed) < BRIEF_JUSTIFICATION_LENGTH:
            warnings.append("Consider providing a more detailed justification")

        if question_id and self.config_manager.has_override(question_id):
            errors.append("Override already exists for this question")

        if override_pattern is not None and not override_pattern.strip():
            warnings.append("Override pattern is empty")

        lowered = justification.lower()
        if (
            any(word in lowered for word in GENERIC_COMPLAINT_WORDS)
            and len(justification) < SPECIFIC_JUSTIFICATION_LENGTH
        ):
            warnings.append(
                "Consider providing more specific details about why the override is needed"
            )

        return OverrideValidation(is_valid=not errors, errors=errors, warnings=warnings)

    def get_override_stats(self, total_questions: int | None = None) -> OverrideStats:
        """Summarize recorded overrides.

        Args:
            total_questions: Size of the question set, used for the override rate

        Returns:
            Statistics; zeroed when there are no overrides
        """
        overrides = self.config_manager.get_overrides()
        if not overrides:
            return OverrideStats()

        by_pattern = Counter(o.override_pattern or "no-pattern" for o in overrides)
        by_user = Counter(o.user_id or "unknown" for o in overrides)
        average_length = sum(len(o.justification) for o in overrides) / len(overrides)

        # First five longer words of each justification stand in for its reasons
        reasons: Counter[str] = Counter()
        for override in overrides:
            words = [w for w in override.justification.lower().split() if len(w) > 3]
            reasons.update(words[:5])

        rate = 0.0
        if total_questions:
            questions_with_override = len({o.question_id for o in overrides})
            rate = questions_with_override / total_questions * 100

        return OverrideStats(
            total_overrides=len(overrides),
            overrides_by_pattern=dict(by_pattern),
            overrides_by_user=dict(by_user),
            average_justification_length=average_length,
            most_common_reasons=[word for word, _ in reasons.most_common(5)],
            override_rate=rate,
        )

    def should_bypass_formatting(self, question_id: str) -> bool:
        return self.config_manager.has_override(question_id)

    def get_effective_pattern(self, question_id: str, detected_pattern: str | None = None) -> str | None:
        """Resolve the pattern to apply to a question.

        An override wins over detection; an override without a pattern means
        formatting is disabled and resolves to None.
        """
        override = self.config_manager.get_override_for_question(question_id)
        if override is not None:
            return override.override_pattern or None
        return detected_pattern or None

    def enrich_question_with_override(self, question: Question) -> Question:
        """Return a copy of the question carrying its override fields."""
        override = self.config_manager.get_override_for_question(question.id)
        if override is None:
            return replace(question, has_override=False)
        return replace(
            question,
            has_override=True,
            override_justification=override.justification,
            override_pattern=override.override_pattern,
            override_timestamp=override.timestamp,
        )

    def generate_override_report(self, question_id: str) -> str | None:
        override = self.config_manager.get_override_for_question(question_id)
        if override is None:
            return None

        created = override.created_at.strftime("%Y-%m-%d %H:%M:%S %Z")
        lines = [
            f"Override Report for Question: {question_id}",
            f"Created: {created}",
            f"User: {override.user_id or 'Unknown'}",
            "",
            "Justification:",
            override.justification,
        ]
        if override.original_pattern:
            lines.extend(["", f"Original Pattern: {override.original_pattern}"])
        if override.override_pattern:
            lines.append(f"Override Pattern: {override.override_pattern}")
        else:
            lines.append("Override Pattern: None (formatting disabled)")
        return "\n".join(lines)

    def _now(self, now: datetime | None) -> datetime:
        if now is not None:
            return now
        return parse_timestamp(self.config_manager.clock())

    def is_recent_override(self, override: OverrideRecord, now: datetime | None = None) -> bool:
        """Check whether an override was created within the last 30 days."""
        cutoff = self._now(now) - timedelta(days=RECENT_OVERRIDE_DAYS)
        return override.created_at > cutoff

    def get_override_age(self, override: OverrideRecord, now: datetime | None = None) -> int:
        """Age of an override in whole days, rounded up."""
        elapsed = abs((self._now(now) - override.created_at).total_seconds())
        return math.ceil(elapsed / 86400)

    def suggest_override_cleanup(
        self, threshold_days: int = STALE_OVERRIDE_DAYS, now: datetime | None = None
    ) -> list[OverrideRecord]:
        """List overrides older than the threshold."""
        return [
            o
            for o in self.config_manager.get_overrides()
            if self.get_override_age(o, now) > threshold_days
        ]

    def export_override_data(self, now: datetime | None = None) -> str:
        """Serialize overrides with their statistics, age and recency."""
        current = self._now(now)
        overrides = self.config_manager.get_overrides()
        document = {
            "export_date": current.isoformat(),
            "total_overrides": len(overrides),
            "statistics": self.get_override_stats().to_dict(),
            "overrides": [
                {
                    **o.to_dict(),
                    "age": self.get_override_age(o, current),
                    "is_recent": self.is_recent_override(o, current),
                }
                for o in overrides
            ],
        }
        logger.debug(f"Exported {len(overrides)} overrides")
        return json.dumps(document, indent=2)

    def validate_justification_quality(self, justification: str) -> JustificationQuality:
        return validate_justification_quality(justification)
