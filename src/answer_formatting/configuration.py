"""Configuration manager for answer formatting.

Holds the pattern configuration, feature settings, manual overrides and a
lightweight metrics counter, mirrored to a key-value store under four keys.
Missing or corrupt persisted data falls back to defaults; only
``import_configuration`` raises.
"""

import json
from collections.abc import Callable
from dataclasses import fields, replace
from datetime import datetime, timezone
from typing import Any

from rich.markup import escape

from common.logger import get_logger

from .constants import CONFIG_VERSION, METRICS_KEY, OVERRIDES_KEY, PATTERN_CONFIG_KEY, SETTINGS_KEY
from .errors import InputValidationError, PersistenceError
from .models import (
    ConfigurationMetrics,
    ConfigurationSettings,
    FormatPattern,
    OverrideRecord,
    PatternConfig,
    Severity,
    ValidationRule,
)
from .patterns.defaults import get_default_patterns
from .storage import InMemoryStore, KeyValueStore

logger = get_logger(__name__)

DEFAULT_SETTINGS = ConfigurationSettings()

DEFAULT_VALIDATION_RULES: tuple[ValidationRule, ...] = (
    ValidationRule("table-structure", "comparison-table", Severity.ERROR, auto_fix=True),
    ValidationRule("definition-format", "definition", Severity.WARNING, auto_fix=True),
    ValidationRule("list-conciseness", "list", Severity.INFO, auto_fix=False),
    ValidationRule("code-blocks", "code-example", Severity.ERROR, auto_fix=True),
    ValidationRule("pros-cons-balance", "pros-cons", Severity.WARNING, auto_fix=True),
)


def utc_now() -> str:
    """Current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def _parse_override(data: dict[str, Any]) -> OverrideRecord:
    """Build an override record, rejecting unparseable timestamps."""
    record = OverrideRecord.from_dict(data)
    record.created_at
    return record


class ConfigurationManager:
    """Process-wide settings, rule toggles, overrides and counters."""

    def __init__(
        self,
        store: KeyValueStore | None = None,
        patterns: list[FormatPattern] | None = None,
        clock: Callable[[], str] = utc_now,
    ):
        """Initialize the manager and load persisted state.

        Args:
            store: Backing store, defaults to a fresh in-memory store
            patterns: Patterns recorded in a default configuration,
                      defaults to the built-in set
            clock: Returns the current time as an ISO string
        """
        self.store = store if store is not None else InMemoryStore()
        self.clock = clock
        self._default_patterns = list(patterns) if patterns is not None else get_default_patterns()
        self.config: PatternConfig | None = None
        self.settings = replace(DEFAULT_SETTINGS)
        self.overrides: list[OverrideRecord] = []
        self.metrics = ConfigurationMetrics(last_updated=self.clock())
        self._load()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _read_json(self, key: str) -> Any | None:
        try:
            raw = self.store.get(key)
        except PersistenceError as e:
            logger.warning(f"Could not read '{key}': {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Discarding corrupt data under '{key}': {e}")
            return None

    def _load(self):
        config_data = self._read_json(PATTERN_CONFIG_KEY)
        try:
            self.config = PatternConfig.from_dict(config_data) if config_data else None
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Discarding invalid pattern configuration: {e}")
            self.config = None

        settings_data = self._read_json(SETTINGS_KEY)
        if isinstance(settings_data, dict):
            self.settings = ConfigurationSettings.from_dict(settings_data)

        overrides_data = self._read_json(OVERRIDES_KEY)
        if isinstance(overrides_data, list):
            self.overrides = []
            for item in overrides_data:
                try:
                    self.overrides.append(_parse_override(item))
                except (TypeError, ValueError, AttributeError) as e:
                    logger.warning(f"Discarding invalid override {escape(repr(item))}: {escape(str(e))}")

        metrics_data = self._read_json(METRICS_KEY)
        if isinstance(metrics_data, dict):
            merged = {**self.metrics.to_dict(), **metrics_data}
            self.metrics = ConfigurationMetrics.from_dict(merged)

        if self.config is None:
            self._initialize_default_config()

    def _initialize_default_config(self):
        self.config = PatternConfig(
            version=CONFIG_VERSION,
            patterns=list(self._default_patterns),
            validation_rules=[replace(rule) for rule in DEFAULT_VALIDATION_RULES],
            auto_format_enabled=True,
            strict_mode=False,
        )
        self._save()

    def _save(self):
        documents = {
            SETTINGS_KEY: self.settings.to_dict(),
            OVERRIDES_KEY: [o.to_dict() for o in self.overrides],
            METRICS_KEY: self.metrics.to_dict(),
        }
        if self.config is not None:
            documents[PATTERN_CONFIG_KEY] = self.config.to_dict()
        try:
            for key, document in documents.items():
                self.store.set(key, json.dumps(document))
        except PersistenceError as e:
            logger.error(f"Failed to save configuration: {e}")

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def get_configuration(self) -> PatternConfig | None:
        return self.config

    def update_configuration(self, **updates: Any):
        """Replace top-level fields of the pattern configuration.

        Args:
            **updates: PatternConfig field values (unknown names are ignored)
        """
        if self.config is None:
            return
        names = {f.name for f in fields(PatternConfig)}
        known = {k: v for k, v in updates.items() if k in names}
        if "validation_rules" in known:
            known["validation_rules"] = [
                r if isinstance(r, ValidationRule) else ValidationRule.from_dict(r)
                for r in known["validation_rules"]
            ]
        self.config = replace(self.config, **known)
        self._save()

    def reset_configuration(self):
        self._initialize_default_config()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_settings(self) -> ConfigurationSettings:
        """Get a copy of the current settings."""
        return replace(self.settings)

    def update_settings(self, **updates: Any):
        names = {f.name for f in fields(ConfigurationSettings)}
        self.settings = replace(self.settings, **{k: v for k, v in updates.items() if k in names})
        self._save()

    def get_setting(self, key: str) -> Any | None:
        """Get one setting, or None if the name is unknown."""
        if key not in {f.name for f in fields(ConfigurationSettings)}:
            logger.warning(f"Unknown setting: {escape(key)}")
            return None
        return getattr(self.settings, key)

    def set_setting(self, key: str, value: Any):
        """Set one setting; unknown names are logged and ignored."""
        if key not in {f.name for f in fields(ConfigurationSettings)}:
            logger.warning(f"Ignoring unknown setting: {escape(key)}")
            return
        setattr(self.settings, key, value)
        self._save()

    # ------------------------------------------------------------------
    # Validation rules
    # ------------------------------------------------------------------

    def get_validation_rules(self) -> list[ValidationRule]:
        return list(self.config.validation_rules) if self.config else []

    def update_validation_rule(self, rule_id: str, **updates: Any):
        """Update fields of a validation rule; unknown rule ids are ignored."""
        if self.config is None:
            return
        if "severity" in updates:
            updates["severity"] = Severity(updates["severity"])
        names = {f.name for f in fields(ValidationRule)} - {"id"}
        for index, rule in enumerate(self.config.validation_rules):
            if rule.id == rule_id:
                self.config.validation_rules[index] = replace(
                    rule, **{k: v for k, v in updates.items() if k in names}
                )
                self._save()
                return

    def toggle_validation_rule(self, rule_id: str, enabled: bool):
        self.update_validation_rule(rule_id, enabled=enabled)

    def get_enabled_rules_for_pattern(self, pattern_id: str) -> list[ValidationRule]:
        return [r for r in self.get_validation_rules() if r.enabled and r.pattern == pattern_id]

    # ------------------------------------------------------------------
    # Overrides
    # ------------------------------------------------------------------

    def add_override(
        self,
        question_id: str,
        justification: str,
        original_pattern: str | None = None,
        override_pattern: str | None = None,
        user_id: str | None = None,
    ) -> OverrideRecord:
        """Record a manual override.

        Uniqueness per question is not enforced here; callers check
        ``has_override`` first.

        Returns:
            The stored record with its timestamp
        """
        now = self.clock()
        record = OverrideRecord(
            question_id=question_id,
            timestamp=now,
            justification=justification,
            original_pattern=original_pattern,
            override_pattern=override_pattern,
            user_id=user_id,
        )
        self.overrides.append(record)
        self.metrics.manual_overrides += 1
        self.metrics.last_updated = now
        self._save()
        return record

    def get_overrides(self) -> list[OverrideRecord]:
        return list(self.overrides)

    def get_override_for_question(self, question_id: str) -> OverrideRecord | None:
        return next((o for o in self.overrides if o.question_id == question_id), None)

    def remove_override(self, question_id: str):
        self.overrides = [o for o in self.overrides if o.question_id != question_id]
        self._save()

    def has_override(self, question_id: str) -> bool:
        return any(o.question_id == question_id for o in self.overrides)

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def get_metrics(self) -> ConfigurationMetrics:
        return replace(self.metrics)

    def update_metrics(self, **updates: Any):
        names = {f.name for f in fields(ConfigurationMetrics)}
        known = {k: v for k, v in updates.items() if k in names}
        known["last_updated"] = self.clock()
        self.metrics = replace(self.metrics, **known)
        self._save()

    def increment_validation_count(self):
        self.metrics.total_validations += 1
        self.metrics.last_updated = self.clock()
        self._save()

    def increment_auto_format_count(self):
        self.metrics.auto_formats_applied += 1
        self.metrics.last_updated = self.clock()
        self._save()

    def update_average_validation_score(self, new_score: float):
        """Fold a score into the running mean.

        Call before ``increment_validation_count`` for the same validation:
        the current total is taken as the number of scores already averaged.
        """
        count = self.metrics.total_validations
        total = self.metrics.average_validation_score * count
        self.metrics.average_validation_score = (total + new_score) / (count + 1)
        self._save()

    def reset_metrics(self):
        self.metrics = ConfigurationMetrics(last_updated=self.clock())
        self._save()

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def export_configuration(self) -> str:
        """Serialize the entire state as one JSON document."""
        return json.dumps(
            {
                "config": self.config.to_dict() if self.config else None,
                "settings": self.settings.to_dict(),
                "overrides": [o.to_dict() for o in self.overrides],
                "metrics": self.metrics.to_dict(),
            },
            indent=2,
        )

    def import_configuration(self, json_data: str):
        """Replace state from an exported document.

        Sections absent from the document are left unchanged.

        Raises:
            InputValidationError: If the document is not valid JSON or has
                                  malformed sections
        """
        try:
            data = json.loads(json_data)
            if not isinstance(data, dict):
                raise TypeError("document must be a JSON object")
            config = PatternConfig.from_dict(data["config"]) if data.get("config") else self.config
            settings = (
                ConfigurationSettings.from_dict({**DEFAULT_SETTINGS.to_dict(), **data["settings"]})
                if data.get("settings")
                else self.settings
            )
            overrides = (
                [_parse_override(o) for o in data["overrides"]]
                if data.get("overrides") is not None
                else self.overrides
            )
            metrics = (
                ConfigurationMetrics.from_dict({**self.metrics.to_dict(), **data["metrics"]})
                if data.get("metrics")
                else self.metrics
            )
        except (json.JSONDecodeError, TypeError, KeyError, ValueError, AttributeError) as e:
            logger.error(f"Failed to import configuration: {e}")
            raise InputValidationError("Invalid configuration data") from e

        self.config = config
        self.settings = settings
        self.overrides = overrides
        self.metrics = metrics
        self._save()

    def clear_configuration(self):
        """Remove all persisted keys and reinitialize defaults."""
        for key in (PATTERN_CONFIG_KEY, SETTINGS_KEY, OVERRIDES_KEY, METRICS_KEY):
            try:
                self.store.remove(key)
            except PersistenceError as e:
                logger.error(f"Failed to remove '{key}': {e}")
        self.settings = replace(DEFAULT_SETTINGS)
        self.overrides = []
        self.metrics = ConfigurationMetrics(last_updated=self.clock())
        self._initialize_default_config()
