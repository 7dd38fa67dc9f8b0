"""Detect which format pattern a question calls for."""

import re

from common.logger import get_logger

from ..models import FormatPattern
from .library import PatternLibrary

logger = get_logger(__name__)

# Inputs shorter than this carry no usable signal
MIN_QUESTION_LENGTH = 3

# Keyword hit weights
WHOLE_QUESTION_WEIGHT = 2.0
PHRASE_WEIGHT = 1.0
SUBSTRING_WEIGHT = 0.5
MIN_SUBSTRING_KEYWORD_LENGTH = 4

# Score at which confidence saturates to 1.0
CONFIDENCE_SCALE = 2.0


def _normalize(text: str) -> str:
    return (text or "").lower().strip()


def _keyword_score(text: str, bare_text: str, keyword: str) -> float:
    """Weight of a single keyword against normalized question text.

    Each keyword counts once: a question consisting solely of the keyword
    outranks a whole-word hit, which outranks a substring hit. Short
    keywords ("vs", "list") only count on whole-word hits so they do not
    fire inside unrelated words.
    """
    keyword = keyword.lower().strip()
    if not keyword:
        return 0.0
    if bare_text == keyword:
        return WHOLE_QUESTION_WEIGHT
    if re.search(rf"\b{re.escape(keyword)}\b", text):
        return PHRASE_WEIGHT
    if len(keyword) >= MIN_SUBSTRING_KEYWORD_LENGTH and keyword in text:
        return SUBSTRING_WEIGHT
    return 0.0


class PatternDetector:
    """Maps question text to the best-matching pattern in a library."""

    def __init__(self, library: PatternLibrary):
        """Initialize the detector.

        Args:
            library: Pattern library to score against
        """
        self.library = library
        self._confidence = 0.0
        self._last_question = ""
        self._last_pattern: FormatPattern | None = None

    def score_patterns(self, question: str) -> list[tuple[FormatPattern, float]]:
        """Score every pattern with at least one keyword hit.

        Args:
            question: Question text

        Returns:
            (pattern, score) pairs sorted by score desc, priority desc, id asc
        """
        text = _normalize(question)
        if len(text) < MIN_QUESTION_LENGTH:
            return []

        bare_text = re.sub(r"[^\w\s'-]", "", text).strip()
        scored = []
        for pattern in self.library.get_all_patterns():
            score = sum(_keyword_score(text, bare_text, kw) for kw in pattern.keywords)
            if score > 0:
                scored.append((pattern, score))

        scored.sort(key=lambda item: (-item[1], -item[0].priority, item[0].id))
        return scored

    def detect_pattern(self, question: str) -> FormatPattern | None:
        """Detect the best pattern for a question.

        Args:
            question: Question text

        Returns:
            Best-matching pattern, or None when no keyword matches
        """
        self._last_question = question or ""
        scored = self.score_patterns(question)

        if not scored:
            self._confidence = 0.0
            self._last_pattern = None
            logger.debug("No pattern matched question")
            return None

        pattern, score = scored[0]
        self._confidence = min(1.0, score / CONFIDENCE_SCALE)
        self._last_pattern = pattern
        logger.debug(f"Detected pattern '{pattern.id}' (score {score}, confidence {self._confidence:.2f})")
        return pattern

    def get_suggested_patterns(self, question: str, limit: int | None = None) -> list[FormatPattern]:
        """Get all patterns with a positive score, best first."""
        patterns = [pattern for pattern, _ in self.score_patterns(question)]
        return patterns[:limit] if limit is not None else patterns

    def get_confidence(self) -> float:
        """Confidence of the last detection, in [0, 1]."""
        return self._confidence

    def get_last_question(self) -> str:
        return self._last_question

    def get_last_pattern(self) -> FormatPattern | None:
        return self._last_pattern

    def reset(self):
        self._confidence = 0.0
        self._last_question = ""
        self._last_pattern = None
