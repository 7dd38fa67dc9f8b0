"""Pure aggregation of metrics event logs.

Every figure here is recomputed from the raw events, so the result depends
only on the set of events (not the order they were recorded in) and on the
reference time used for trends.
"""

from collections import Counter, defaultdict
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from .events import AutoFixEvent, PatternDetectionEvent, ValidationEvent


@dataclass
class PatternUsage:
    name: str
    detection_count: int = 0
    application_count: int = 0
    average_score: float = 0.0
    success_rate: float = 0.0


@dataclass
class MetricsTrend:
    date: str  # YYYY-MM-DD
    compliance_rate: float
    validation_pass_rate: float
    auto_fix_success_rate: float
    total_questions: int


@dataclass
class ChannelMetrics:
    channel: str
    total_questions: int
    compliance_rate: float
    average_score: float
    top_patterns: list[str]


@dataclass
class FormatMetrics:
    """Aggregated compliance statistics (derived, never edited by hand)."""

    total_questions: int = 0
    total_validations: int = 0
    last_updated: str = ""
    compliance_rate: float = 0.0  # % of validations without errors
    average_score: float = 0.0
    validation_pass_rate: float = 0.0  # % of questions passing their first validation
    average_violations_per_question: float = 0.0
    auto_fix_success_rate: float = 0.0
    auto_fix_attempts: int = 0
    auto_fix_successes: int = 0
    pattern_usage: dict[str, PatternUsage] = field(default_factory=dict)
    trends: list[MetricsTrend] = field(default_factory=list)
    channel_breakdown: list[ChannelMetrics] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _percent(part: int, whole: int) -> float:
    return part / whole * 100 if whole else 0.0


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _first_attempt_key(event: ValidationEvent) -> tuple:
    # Full content key so simultaneous events still resolve deterministically
    return (event.when, event.score, event.violation_count, event.passed, event.pattern)


def compliance_rate(events: list[ValidationEvent]) -> float:
    return _percent(sum(1 for e in events if e.passed), len(events))


def first_attempt_pass_rate(events: list[ValidationEvent]) -> float:
    """Percentage of questions whose earliest validation passed."""
    by_question: dict[str, list[ValidationEvent]] = defaultdict(list)
    for event in events:
        by_question[event.question_id].append(event)
    passes = sum(1 for runs in by_question.values() if min(runs, key=_first_attempt_key).passed)
    return _percent(passes, len(by_question))


def auto_fix_success_rate(events: list[AutoFixEvent]) -> float:
    return _percent(sum(1 for e in events if e.success), len(events))


def pattern_usage(
    validations: list[ValidationEvent], detections: list[PatternDetectionEvent]
) -> dict[str, PatternUsage]:
    """Detection, application and outcome statistics per pattern id."""
    usage: dict[str, PatternUsage] = {}
    for event in detections:
        stats = usage.setdefault(event.detected_pattern, PatternUsage(name=event.detected_pattern))
        stats.detection_count += 1
        if event.applied_pattern:
            stats.application_count += 1

    for event in validations:
        usage.setdefault(event.pattern, PatternUsage(name=event.pattern))

    for pattern_id, stats in usage.items():
        runs = [e for e in validations if e.pattern == pattern_id]
        stats.average_score = _mean([e.score for e in runs])
        stats.success_rate = compliance_rate(runs)

    return dict(sorted(usage.items()))


def trends(
    validations: list[ValidationEvent],
    auto_fixes: list[AutoFixEvent],
    now: datetime,
    days: int,
) -> list[MetricsTrend]:
    """Daily figures for the ``days`` calendar days ending on ``now``'s date."""
    validations_by_day: dict[str, list[ValidationEvent]] = defaultdict(list)
    for event in validations:
        validations_by_day[event.when.astimezone(timezone.utc).date().isoformat()].append(event)
    fixes_by_day: dict[str, list[AutoFixEvent]] = defaultdict(list)
    for event in auto_fixes:
        fixes_by_day[event.when.astimezone(timezone.utc).date().isoformat()].append(event)

    today = now.astimezone(timezone.utc).date()
    result = []
    for offset in range(days - 1, -1, -1):
        day = (today - timedelta(days=offset)).isoformat()
        day_validations = validations_by_day.get(day, [])
        result.append(
            MetricsTrend(
                date=day,
                compliance_rate=compliance_rate(day_validations),
                validation_pass_rate=first_attempt_pass_rate(day_validations),
                auto_fix_success_rate=auto_fix_success_rate(fixes_by_day.get(day, [])),
                total_questions=len(day_validations),
            )
        )
    return result


def channel_breakdown(validations: list[ValidationEvent]) -> list[ChannelMetrics]:
    """Per-channel figures, busiest channel first; events without a channel are skipped."""
    by_channel: dict[str, list[ValidationEvent]] = defaultdict(list)
    for event in validations:
        if event.channel:
            by_channel[event.channel].append(event)

    breakdown = []
    for channel, runs in by_channel.items():
        pattern_counts = Counter(e.pattern for e in runs)
        top = sorted(pattern_counts.items(), key=lambda item: (-item[1], item[0]))[:3]
        breakdown.append(
            ChannelMetrics(
                channel=channel,
                total_questions=len(runs),
                compliance_rate=compliance_rate(runs),
                average_score=_mean([e.score for e in runs]),
                top_patterns=[pattern for pattern, _ in top],
            )
        )
    breakdown.sort(key=lambda c: (-c.total_questions, c.channel))
    return breakdown


def aggregate(
    validations: list[ValidationEvent],
    auto_fixes: list[AutoFixEvent],
    detections: list[PatternDetectionEvent],
    now: datetime,
    trend_days: int = 30,
) -> FormatMetrics:
    """Compute all metrics from the event logs.

    Args:
        validations: Validation events
        auto_fixes: Auto-fix events
        detections: Pattern detection events
        now: Reference time for the trend window and ``last_updated``
        trend_days: Number of days in the trend window

    Returns:
        Aggregated metrics
    """
    successes = sum(1 for e in auto_fixes if e.success)
    return FormatMetrics(
        total_questions=len({e.question_id for e in validations}),
        total_validations=len(validations),
        last_updated=now.isoformat(),
        compliance_rate=compliance_rate(validations),
        average_score=_mean([e.score for e in validations]),
        validation_pass_rate=first_attempt_pass_rate(validations),
        average_violations_per_question=_mean([e.violation_count for e in validations]),
        auto_fix_success_rate=auto_fix_success_rate(auto_fixes),
        auto_fix_attempts=len(auto_fixes),
        auto_fix_successes=successes,
        pattern_usage=pattern_usage(validations, detections),
        trends=trends(validations, auto_fixes, now, trend_days),
        channel_breakdown=channel_breakdown(validations),
    )
