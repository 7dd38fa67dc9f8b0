"""Data models for patterns, validation results, fixes, and configuration records."""

from dataclasses import asdict, dataclass, field, fields, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity levels for validation violations."""

    ERROR = "error"  # Structure is missing or broken
    WARNING = "warning"  # Structure present but weak
    INFO = "info"  # Stylistic suggestion


class SectionFormat(str, Enum):
    """Structural shape a pattern section requires."""

    TABLE = "table"
    LIST = "list"
    CODE = "code"
    DIAGRAM = "diagram"
    TEXT = "text"
    PROCESS = "process"
    PROS_CONS = "pros-cons"
    TROUBLESHOOTING = "troubleshooting"


class ConstraintKind(str, Enum):
    """Typed constraints attachable to a section."""

    # table
    MIN_COLUMNS = "min-columns"
    HAS_HEADERS = "has-headers"
    REQUIRES_FEATURE_COLUMN = "requires-feature-column"
    COMPARISON_FORMAT = "comparison-format"
    CONSISTENT_ROWS = "consistent-rows"
    NO_EMPTY_CELLS = "no-empty-cells"
    MIN_DATA_ROWS = "min-data-rows"
    # list
    MAX_SENTENCES = "max-sentences"
    PROPER_BULLET_SYNTAX = "proper-bullet-syntax"
    PROPER_NUMBERING_SYNTAX = "proper-numbering-syntax"
    NESTING_STRUCTURE = "nesting-structure"
    MIN_LIST_ITEMS = "min-list-items"
    MAX_LIST_ITEMS = "max-list-items"
    CONSISTENT_INDENTATION = "consistent-indentation"
    # process
    ACTION_VERBS = "action-verbs"
    STEP_CLARITY = "step-clarity"
    PROPER_SEQUENCE = "proper-sequence"
    MIN_STEPS = "min-steps"
    MAX_STEPS = "max-steps"
    # code
    REQUIRES_LANGUAGE = "requires-language"
    PROPER_INDENTATION = "proper-indentation"
    COMPLETE_BLOCKS = "complete-blocks"
    CODE_COMMENTS = "code-comments"
    RUNNABLE_CODE = "runnable-code"
    MIN_LINES = "min-lines"
    MAX_LINES = "max-lines"
    INLINE_CODE_USAGE = "inline-code-usage"
    # diagram
    MAX_NODES = "max-nodes"
    TEXT_EXPLANATION = "text-explanation"
    MIN_EXPLANATION_LENGTH = "min-explanation-length"
    DIAGRAM_CONTEXT = "diagram-context"
    APPROPRIATE_DIAGRAM_TYPE = "appropriate-diagram-type"
    # text
    REQUIRED_HEADERS = "required-headers"
    SINGLE_SENTENCE = "single-sentence"
    BLANK_LINE_AFTER = "blank-line-after"
    BULLETED_LIST_REQUIRED = "bulleted-list-required"
    DEFINITION_STRUCTURE = "definition-structure"
    # pros-cons / troubleshooting
    REQUIRED_SECTIONS = "required-sections"
    SECTION_BALANCE = "section-balance"
    BULLETED_LISTS = "bulleted-lists"
    MIN_ITEMS_PER_SECTION = "min-items-per-section"
    SECTION_ORDER = "section-order"
    NUMBERED_SOLUTIONS = "numbered-solutions"
    SOLUTION_CLARITY = "solution-clarity"
    PROBLEM_DESCRIPTION = "problem-description"
    CAUSE_ANALYSIS = "cause-analysis"

    @property
    def value_type(self) -> type:
        """Python type of this constraint's payload (bool, int or tuple of names)."""
        if self in _COUNT_CONSTRAINTS:
            return int
        if self in _NAME_CONSTRAINTS:
            return tuple
        return bool


_COUNT_CONSTRAINTS = {
    ConstraintKind.MIN_COLUMNS,
    ConstraintKind.MIN_DATA_ROWS,
    ConstraintKind.MAX_SENTENCES,
    ConstraintKind.MIN_LIST_ITEMS,
    ConstraintKind.MAX_LIST_ITEMS,
    ConstraintKind.MIN_STEPS,
    ConstraintKind.MAX_STEPS,
    ConstraintKind.MIN_LINES,
    ConstraintKind.MAX_LINES,
    ConstraintKind.MAX_NODES,
    ConstraintKind.MIN_EXPLANATION_LENGTH,
    ConstraintKind.MIN_ITEMS_PER_SECTION,
}

_NAME_CONSTRAINTS = {
    ConstraintKind.REQUIRED_HEADERS,
    ConstraintKind.REQUIRED_SECTIONS,
}


def parse_timestamp(timestamp: str | datetime) -> datetime:
    """Parse an ISO timestamp, treating naive values as UTC."""
    if isinstance(timestamp, datetime):
        parsed = timestamp
    else:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _known_fields(cls, data: dict[str, Any]) -> dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


@dataclass(frozen=True)
class Constraint:
    """A typed, parameterized requirement attached to a section."""

    kind: ConstraintKind
    value: bool | int | tuple[str, ...] = True

    def __post_init__(self):
        """Coerce and validate the payload against the constraint kind."""
        if isinstance(self.kind, str) and not isinstance(self.kind, ConstraintKind):
            try:
                object.__setattr__(self, "kind", ConstraintKind(self.kind))
            except ValueError as e:
                raise ValueError(f"Unknown constraint kind: {self.kind}") from e

        expected = self.kind.value_type
        value = self.value
        if expected is tuple:
            if isinstance(value, (list, tuple)):
                object.__setattr__(self, "value", tuple(str(v) for v in value))
                return
        elif expected is int:
            if isinstance(value, int) and not isinstance(value, bool):
                return
        elif isinstance(value, bool):
            return

        raise ValueError(
            f"Constraint '{self.kind.value}' expects a {expected.__name__} value, got {value!r}"
        )

    def to_dict(self) -> dict[str, Any]:
        value = list(self.value) if isinstance(self.value, tuple) else self.value
        return {"kind": self.kind.value, "value": value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Constraint":
        return cls(kind=data.get("kind") or data["type"], value=data.get("value", True))


@dataclass(frozen=True)
class Section:
    """One structural requirement within a pattern."""

    name: str
    format: SectionFormat
    required: bool = True
    constraints: tuple[Constraint, ...] = ()

    def constraint(self, kind: ConstraintKind) -> bool | int | tuple[str, ...] | None:
        """Return the payload of the first constraint of this kind, if any."""
        for constraint in self.constraints:
            if constraint.kind == kind:
                return constraint.value
        return None

    def flag(self, kind: ConstraintKind) -> bool:
        """Check whether a boolean constraint is switched on."""
        return self.constraint(kind) is True

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "format": self.format.value,
            "required": self.required,
            "constraints": [c.to_dict() for c in self.constraints],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Section":
        return cls(
            name=data["name"],
            format=SectionFormat(data["format"]),
            required=bool(data.get("required", True)),
            constraints=tuple(Constraint.from_dict(c) for c in data.get("constraints", [])),
        )


@dataclass(frozen=True)
class Rule:
    """A custom rule evaluated by a named predicate from the rule registry."""

    id: str
    description: str
    predicate: str
    error_message: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Rule":
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class PatternStructure:
    """Sections and custom rules that make up a pattern."""

    sections: tuple[Section, ...] = ()
    rules: tuple[Rule, ...] = ()


@dataclass(frozen=True)
class FormatPattern:
    """A named structural template an answer should follow."""

    id: str
    name: str
    keywords: tuple[str, ...]
    priority: int
    structure: PatternStructure = field(default_factory=PatternStructure)
    template: str = ""
    examples: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "keywords": list(self.keywords),
            "priority": self.priority,
            "structure": {
                "sections": [s.to_dict() for s in self.structure.sections],
                "rules": [r.to_dict() for r in self.structure.rules],
            },
            "template": self.template,
            "examples": list(self.examples),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FormatPattern":
        structure = data.get("structure", {})
        return cls(
            id=data["id"],
            name=data["name"],
            keywords=tuple(data.get("keywords", [])),
            priority=int(data.get("priority", 0)),
            structure=PatternStructure(
                sections=tuple(Section.from_dict(s) for s in structure.get("sections", [])),
                rules=tuple(Rule.from_dict(r) for r in structure.get("rules", [])),
            ),
            template=data.get("template", ""),
            examples=tuple(data.get("examples", [])),
        )

    def with_updates(self, **changes: Any) -> "FormatPattern":
        """Return a copy of this pattern with the given fields replaced."""
        if "keywords" in changes:
            changes["keywords"] = tuple(changes["keywords"])
        if "examples" in changes:
            changes["examples"] = tuple(changes["examples"])
        return replace(self, **changes)


@dataclass(frozen=True)
class Location:
    """1-based line and column of a violation."""

    line: int
    column: int


@dataclass
class ValidationViolation:
    """A single detected deviation from required structure."""

    rule: str  # e.g. "comparison-table-table-required"
    severity: Severity
    message: str
    fix: str
    location: Location | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule,
            "severity": self.severity.value,
            "message": self.message,
            "fix": self.fix,
            "location": asdict(self.location) if self.location else None,
        }


@dataclass
class ValidationResult:
    """Outcome of validating one answer against one pattern."""

    is_valid: bool
    score: int
    violations: list[ValidationViolation]
    suggestions: list[str] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationViolation]:
        """Violations with error severity."""
        return [v for v in self.violations if v.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationViolation]:
        """Violations with warning severity."""
        return [v for v in self.violations if v.severity == Severity.WARNING]

    @property
    def is_clean(self) -> bool:
        """Check if result has no violations."""
        return len(self.violations) == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "score": self.score,
            "violations": [v.to_dict() for v in self.violations],
            "suggestions": list(self.suggestions),
        }


class FixType(str, Enum):
    """How a fix modifies the answer."""

    INSERT = "insert"
    REPLACE = "replace"
    REMOVE = "remove"
    REFORMAT = "reformat"


@dataclass(frozen=True)
class FormatFix:
    """A concrete edit proposed for a violation."""

    id: str
    type: FixType
    description: str
    target: str
    replacement: str | None = None


@dataclass
class FormatSuggestion:
    """A ranked entry in the fix backlog."""

    violation: ValidationViolation
    fixes: list[FormatFix]
    priority: int
    description: str


@dataclass
class Question:
    """A question record supplied by the content store."""

    id: str
    question: str
    answer: str
    channel: str | None = None
    difficulty: str | None = None
    has_override: bool = False
    override_justification: str | None = None
    override_pattern: str | None = None
    override_timestamp: str | None = None


@dataclass
class ValidationRule:
    """Manager-level toggle for a pattern's validation behavior."""

    id: str
    pattern: str
    severity: Severity
    enabled: bool = True
    auto_fix: bool = False

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ValidationRule":
        values = _known_fields(cls, data)
        values["severity"] = Severity(values["severity"])
        return cls(**values)


@dataclass
class ConfigurationSettings:
    """Process-wide feature flags."""

    auto_format_enabled: bool = True
    strict_mode: bool = False
    validation_enabled: bool = True
    show_suggestions: bool = True
    auto_apply_fixes: bool = False
    max_validation_score: int = 80  # Minimum score to pass (0-100)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConfigurationSettings":
        return cls(**_known_fields(cls, data))


@dataclass
class OverrideRecord:
    """A human decision to bypass or redirect formatting for one question.

    An ``override_pattern`` of None means formatting is explicitly disabled.
    """

    question_id: str
    timestamp: str
    justification: str
    original_pattern: str | None = None
    override_pattern: str | None = None
    user_id: str | None = None

    @property
    def created_at(self) -> datetime:
        return parse_timestamp(self.timestamp)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OverrideRecord":
        return cls(**_known_fields(cls, data))


@dataclass
class ConfigurationMetrics:
    """Lightweight counters kept by the configuration manager."""

    total_validations: int = 0
    auto_formats_applied: int = 0
    manual_overrides: int = 0
    average_validation_score: float = 0.0
    last_updated: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConfigurationMetrics":
        return cls(**_known_fields(cls, data))


@dataclass
class PatternConfig:
    """Persisted pattern configuration document."""

    version: str
    patterns: list[FormatPattern]
    validation_rules: list[ValidationRule]
    auto_format_enabled: bool = True
    strict_mode: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "patterns": [p.to_dict() for p in self.patterns],
            "validation_rules": [r.to_dict() for r in self.validation_rules],
            "auto_format_enabled": self.auto_format_enabled,
            "strict_mode": self.strict_mode,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PatternConfig":
        return cls(
            version=data["version"],
            patterns=[FormatPattern.from_dict(p) for p in data.get("patterns", [])],
            validation_rules=[ValidationRule.from_dict(r) for r in data.get("validation_rules", [])],
            auto_format_enabled=bool(data.get("auto_format_enabled", True)),
            strict_mode=bool(data.get("strict_mode", False)),
        )
