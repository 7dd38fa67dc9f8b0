"""Exceptions raised by the answer formatting engine."""


class AnswerFormattingError(Exception):
    """Base exception for answer formatting operations."""

    pass


class InputValidationError(AnswerFormattingError):
    """Caller-supplied document is malformed (e.g. a configuration import)."""

    pass


class PersistenceError(AnswerFormattingError):
    """Error reading from or writing to a key-value store."""

    pass


class RuleExecutionError(AnswerFormattingError):
    """A custom validation rule raised while evaluating an answer."""

    def __init__(self, rule_id: str, cause: Exception):
        super().__init__(f"Rule '{rule_id}' failed: {cause}")
        self.rule_id = rule_id
        self.cause = cause
