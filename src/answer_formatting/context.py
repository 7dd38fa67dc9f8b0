"""Engine context: the explicit handle that replaces process-wide singletons.

Example:
    >>> from answer_formatting.context import create_context
    >>>
    >>> ctx = create_context()
    >>> pattern = ctx.detector.detect_pattern("What is the difference between REST and GraphQL?")
    >>> result = ctx.validator.validate(answer, pattern)
"""

from dataclasses import dataclass

from common.logger import get_logger

from .configuration import ConfigurationManager
from .formatting import AutoFormatter
from .metrics import MetricsCollector
from .models import FormatPattern
from .overrides import OverrideService
from .patterns import PatternDetector, PatternLibrary
from .storage import KeyValueStore, get_store
from .validation import FormatValidator, RuleRegistry

logger = get_logger(__name__)


@dataclass
class EngineContext:
    """All engine components sharing one store and one pattern library."""

    store: KeyValueStore
    library: PatternLibrary
    detector: PatternDetector
    registry: RuleRegistry
    validator: FormatValidator
    formatter: AutoFormatter
    config: ConfigurationManager
    overrides: OverrideService
    metrics: MetricsCollector


def create_context(
    store: KeyValueStore | None = None,
    patterns: list[FormatPattern] | None = None,
) -> EngineContext:
    """Build an engine context.

    Args:
        store: Backing store, defaults to the store configured in the environment
        patterns: Pattern set, defaults to ANSWER_FORMATTING_PATTERNS or the built-in set

    Returns:
        Engine context
    """
    from common.env import env

    if store is None:
        store = get_store()

    if patterns is None and env.patterns_path() is not None:
        library = PatternLibrary.load(env.patterns_path())
        logger.info(f"Loaded {library.get_pattern_count()} patterns from {env.patterns_path()}")
    else:
        library = PatternLibrary(patterns)

    registry = RuleRegistry()
    config = ConfigurationManager(store, patterns=library.get_all_patterns())
    return EngineContext(
        store=store,
        library=library,
        detector=PatternDetector(library),
        registry=registry,
        validator=FormatValidator(registry=registry),
        formatter=AutoFormatter(),
        config=config,
        overrides=OverrideService(config),
        metrics=MetricsCollector(store, trend_days=env.trend_days()),
    )
