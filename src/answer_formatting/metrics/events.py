"""Event records appended to the metrics logs."""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from ..models import _known_fields, parse_timestamp


@dataclass(frozen=True)
class ValidationEvent:
    """One validation run of one answer."""

    question_id: str
    timestamp: str
    pattern: str
    score: int
    passed: bool
    violation_count: int
    auto_fixable: bool = False
    channel: str | None = None

    @property
    def when(self) -> datetime:
        return parse_timestamp(self.timestamp)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ValidationEvent":
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class AutoFixEvent:
    """One auto-format attempt with the scores before and after."""

    question_id: str
    timestamp: str
    violation_type: str
    success: bool
    before_score: int
    after_score: int

    @property
    def when(self) -> datetime:
        return parse_timestamp(self.timestamp)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AutoFixEvent":
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class PatternDetectionEvent:
    """One detector decision; ``applied_pattern`` is set when the pattern was used."""

    question_id: str
    timestamp: str
    detected_pattern: str
    confidence: float
    applied_pattern: str | None = None

    @property
    def when(self) -> datetime:
        return parse_timestamp(self.timestamp)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PatternDetectionEvent":
        return cls(**_known_fields(cls, data))
