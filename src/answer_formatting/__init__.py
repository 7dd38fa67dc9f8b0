"""Answer formatting validation and auto-correction engine.

Detects the structural pattern an answer should follow, validates the answer
against it, nudges it toward compliance and tracks overrides and metrics.

Example:
    >>> from answer_formatting import create_context, FormattingPipeline
    >>>
    >>> pipeline = FormattingPipeline(create_context())
    >>> outcome = pipeline.process(question)
    >>> outcome.final_result.score
"""

from .configuration import ConfigurationManager
from .consistency import LanguageConsistencyChecker
from .context import EngineContext, create_context
from .errors import AnswerFormattingError, InputValidationError, PersistenceError, RuleExecutionError
from .formatting import AutoFormatter
from .metrics import MetricsCollector
from .models import FormatPattern, Question, Severity, ValidationResult, ValidationViolation
from .overrides import OverrideService
from .patterns import PatternDetector, PatternLibrary
from .pipeline import FormattingPipeline, PipelineOutcome
from .reporters import ValidationReport, ValidationReporter, build_report
from .validation import FormatValidator, RuleRegistry

__all__ = [
    # Context and pipeline
    "EngineContext",
    "create_context",
    "FormattingPipeline",
    "PipelineOutcome",
    # Components
    "PatternLibrary",
    "PatternDetector",
    "FormatValidator",
    "RuleRegistry",
    "AutoFormatter",
    "ConfigurationManager",
    "OverrideService",
    "MetricsCollector",
    "LanguageConsistencyChecker",
    # Reports
    "ValidationReport",
    "ValidationReporter",
    "build_report",
    # Models
    "FormatPattern",
    "Question",
    "Severity",
    "ValidationResult",
    "ValidationViolation",
    # Errors
    "AnswerFormattingError",
    "InputValidationError",
    "PersistenceError",
    "RuleExecutionError",
]
