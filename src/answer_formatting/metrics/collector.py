"""Metrics collector over append-only event logs."""

import json
from datetime import datetime, timezone
from typing import Any

from rich.markup import escape

from common.logger import get_logger

from ..constants import AUTOFIX_EVENTS_KEY, PATTERN_EVENTS_KEY, VALIDATION_EVENTS_KEY
from ..errors import InputValidationError, PersistenceError
from ..storage import InMemoryStore, KeyValueStore
from .aggregation import FormatMetrics, aggregate
from .events import AutoFixEvent, PatternDetectionEvent, ValidationEvent, parse_timestamp

logger = get_logger(__name__)

EVENT_LOGS = {
    VALIDATION_EVENTS_KEY: ValidationEvent,
    AUTOFIX_EVENTS_KEY: AutoFixEvent,
    PATTERN_EVENTS_KEY: PatternDetectionEvent,
}


class MetricsCollector:
    """Records validation, auto-fix and detection events and aggregates them on read."""

    def __init__(self, store: KeyValueStore | None = None, trend_days: int = 30):
        """Initialize the collector and load persisted event logs.

        Args:
            store: Backing store, defaults to a fresh in-memory store
            trend_days: Number of days covered by metrics trends
        """
        self.store = store if store is not None else InMemoryStore()
        self.trend_days = trend_days
        self.validation_events: list[ValidationEvent] = self._load(VALIDATION_EVENTS_KEY)
        self.autofix_events: list[AutoFixEvent] = self._load(AUTOFIX_EVENTS_KEY)
        self.pattern_events: list[PatternDetectionEvent] = self._load(PATTERN_EVENTS_KEY)

    def _load(self, key: str) -> list:
        event_type = EVENT_LOGS[key]
        try:
            raw = self.store.get(key)
        except PersistenceError as e:
            logger.warning(f"Could not read '{key}': {e}")
            return []
        if raw is None:
            return []
        try:
            events = [event_type.from_dict(item) for item in json.loads(raw)]
            for event in events:
                event.when  # reject unparseable timestamps up front
            return events
        except (json.JSONDecodeError, TypeError, AttributeError, ValueError) as e:
            logger.warning(f"Discarding malformed event log '{key}': {e}")
            return []

    def _persist(self, key: str, events: list):
        try:
            self.store.set(key, json.dumps([e.to_dict() for e in events]))
        except PersistenceError as e:
            logger.error(f"Failed to persist '{key}': {e}")

    def _persist_all(self):
        self._persist(VALIDATION_EVENTS_KEY, self.validation_events)
        self._persist(AUTOFIX_EVENTS_KEY, self.autofix_events)
        self._persist(PATTERN_EVENTS_KEY, self.pattern_events)

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def _accepts(self, event) -> bool:
        try:
            event.when
        except (TypeError, AttributeError, ValueError) as e:
            name = type(event).__name__
            logger.warning(f"Skipping {name} for '{escape(str(event.question_id))}' with bad timestamp: {escape(str(e))}")
            return False
        return True

    def record_validation(self, event: ValidationEvent):
        """Append a validation event; events with unparseable timestamps are skipped."""
        if self._accepts(event):
            self.validation_events.append(event)
            self._persist(VALIDATION_EVENTS_KEY, self.validation_events)

    def record_auto_fix(self, event: AutoFixEvent):
        if self._accepts(event):
            self.autofix_events.append(event)
            self._persist(AUTOFIX_EVENTS_KEY, self.autofix_events)

    def record_pattern_detection(self, event: PatternDetectionEvent):
        if self._accepts(event):
            self.pattern_events.append(event)
            self._persist(PATTERN_EVENTS_KEY, self.pattern_events)

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def get_metrics(self, now: datetime | None = None) -> FormatMetrics:
        """Aggregate all recorded events.

        Args:
            now: Reference time for the trend window, defaults to the current UTC time

        Returns:
            Metrics recomputed from the full event logs
        """
        return aggregate(
            self.validation_events,
            self.autofix_events,
            self.pattern_events,
            now=now or datetime.now(timezone.utc),
            trend_days=self.trend_days,
        )

    def get_metrics_for_date_range(
        self,
        start: str | datetime,
        end: str | datetime,
        now: datetime | None = None,
    ) -> FormatMetrics:
        """Aggregate only events timestamped within [start, end]."""
        start_at = parse_timestamp(start)
        end_at = parse_timestamp(end)

        def within(events: list) -> list:
            return [e for e in events if start_at <= e.when <= end_at]

        return aggregate(
            within(self.validation_events),
            within(self.autofix_events),
            within(self.pattern_events),
            now=now or datetime.now(timezone.utc),
            trend_days=self.trend_days,
        )

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def clear_metrics(self):
        self.validation_events = []
        self.autofix_events = []
        self.pattern_events = []
        self._persist_all()

    def export_data(self, now: datetime | None = None) -> dict[str, Any]:
        """Export aggregates together with the raw event logs."""
        return {
            "metrics": self.get_metrics(now).to_dict(),
            "validation_events": [e.to_dict() for e in self.validation_events],
            "autofix_events": [e.to_dict() for e in self.autofix_events],
            "pattern_detection_events": [e.to_dict() for e in self.pattern_events],
        }

    def import_data(self, document: dict[str, Any]):
        """Replace the event logs with those of an exported document.

        Raises:
            InputValidationError: If an event log is malformed
        """
        try:
            validation_events = [ValidationEvent.from_dict(e) for e in document.get("validation_events", [])]
            autofix_events = [AutoFixEvent.from_dict(e) for e in document.get("autofix_events", [])]
            pattern_events = [
                PatternDetectionEvent.from_dict(e) for e in document.get("pattern_detection_events", [])
            ]
            for event in (*validation_events, *autofix_events, *pattern_events):
                event.when
        except (TypeError, AttributeError, ValueError) as e:
            raise InputValidationError("Invalid metrics data") from e

        self.validation_events = validation_events
        self.autofix_events = autofix_events
        self.pattern_events = pattern_events
        self._persist_all()
        logger.info(f"Imported {len(validation_events)} validation events")
