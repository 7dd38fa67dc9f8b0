"""End-to-end processing of one question.

Resolves the pattern (override first, then detection), validates the answer,
optionally auto-formats it when it falls short, and records every step in the
metrics collector and the configuration manager's counters.
"""

from dataclasses import dataclass

from common.logger import get_logger

from .context import EngineContext
from .metrics import AutoFixEvent, PatternDetectionEvent, ValidationEvent
from .models import FixType, FormatPattern, Question, ValidationResult
from .reporters import ValidationReport, build_report

logger = get_logger(__name__)


@dataclass
class PipelineOutcome:
    """Result of processing one question."""

    question: Question
    answer: str  # Final answer text, formatted when that improved the score
    pattern: FormatPattern | None = None
    confidence: float = 0.0
    bypassed: bool = False  # An override disabled formatting
    initial_result: ValidationResult | None = None
    final_result: ValidationResult | None = None
    auto_formatted: bool = False
    passed: bool = True
    report: ValidationReport | None = None


class FormattingPipeline:
    """Runs detection, validation and auto-formatting against an engine context."""

    def __init__(self, context: EngineContext):
        self.ctx = context

    def process(self, question: Question) -> PipelineOutcome:
        """Process a question's answer.

        Args:
            question: Question record with its answer

        Returns:
            Outcome with the resolved pattern, validation results and final answer
        """
        ctx = self.ctx
        question = ctx.overrides.enrich_question_with_override(question)
        outcome = PipelineOutcome(question=question, answer=question.answer)

        detected = ctx.detector.detect_pattern(question.question)
        outcome.confidence = ctx.detector.get_confidence()
        effective_id = ctx.overrides.get_effective_pattern(question.id, detected.id if detected else None)

        if detected is not None:
            ctx.metrics.record_pattern_detection(
                PatternDetectionEvent(
                    question_id=question.id,
                    timestamp=ctx.config.clock(),
                    detected_pattern=detected.id,
                    confidence=outcome.confidence,
                    applied_pattern=effective_id,
                )
            )

        if effective_id is None:
            outcome.bypassed = question.has_override
            logger.debug(f"No pattern applies to question {question.id}")
            return outcome

        pattern = ctx.library.get_pattern(effective_id)
        if pattern is None:
            logger.warning(f"Override for question {question.id} names unknown pattern '{effective_id}'")
            return outcome
        outcome.pattern = pattern

        settings = ctx.config.get_settings()
        if not settings.validation_enabled:
            return outcome

        result = self._validate(question, pattern, question.answer)
        outcome.initial_result = result
        outcome.final_result = result

        needs_work = not result.is_valid or result.score < settings.max_validation_score
        if needs_work and settings.auto_format_enabled and not question.has_override:
            candidate = ctx.formatter.format(question.answer, pattern)
            if settings.auto_apply_fixes:
                candidate = self._apply_fixes(candidate, pattern)
            if candidate != question.answer:
                self._try_candidate(outcome, question, pattern, candidate)

        final = outcome.final_result
        outcome.passed = final.is_valid and (
            not settings.strict_mode or final.score >= settings.max_validation_score
        )
        outcome.report = build_report(
            question.id, pattern.id, final, ctx.formatter, timestamp=ctx.config.clock()
        )
        return outcome

    def _validate(self, question: Question, pattern: FormatPattern, answer: str) -> ValidationResult:
        ctx = self.ctx
        result = ctx.validator.validate(answer, pattern)
        ctx.metrics.record_validation(
            ValidationEvent(
                question_id=question.id,
                timestamp=ctx.config.clock(),
                pattern=pattern.id,
                score=result.score,
                passed=result.is_valid,
                violation_count=len(result.violations),
                auto_fixable=any(v.fix for v in result.violations),
                channel=question.channel,
            )
        )
        ctx.config.update_average_validation_score(result.score)
        ctx.config.increment_validation_count()
        return result

    def _apply_fixes(self, answer: str, pattern: FormatPattern) -> str:
        ctx = self.ctx
        result = ctx.validator.validate(answer, pattern)
        for suggestion in ctx.formatter.suggest_fixes(result):
            for fix in suggestion.fixes:
                # Reformat fixes swap in a whole template and would discard the answer
                if fix.replacement is not None and fix.type != FixType.REFORMAT:
                    answer = ctx.formatter.apply_fix(answer, fix)
        return answer

    def _try_candidate(self, outcome: PipelineOutcome, question: Question, pattern: FormatPattern, candidate: str):
        ctx = self.ctx
        before = outcome.initial_result
        after = self._validate(question, pattern, candidate)
        success = after.score > before.score

        ctx.metrics.record_auto_fix(
            AutoFixEvent(
                question_id=question.id,
                timestamp=ctx.config.clock(),
                violation_type=before.violations[0].rule if before.violations else pattern.id,
                success=success,
                before_score=before.score,
                after_score=after.score,
            )
        )
        ctx.config.increment_auto_format_count()

        if success:
            outcome.answer = candidate
            outcome.final_result = after
            outcome.auto_formatted = True
            logger.info(f"Auto-formatted {question.id}: score {before.score} -> {after.score}")
        else:
            logger.debug(f"Auto-format did not improve {question.id} ({before.score} -> {after.score})")
