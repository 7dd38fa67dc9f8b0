"""Cross-language consistency checks for answers with several code examples.

Compares every pair of fenced code examples for structure, naming and
complexity, then checks that the surrounding explanations follow one approach
and that examples are separated from each other. All analysis is regex based
and approximate.
"""

import re
from dataclasses import dataclass, field

from common.logger import get_logger

from .validation.scanners import FencedBlock, fenced_blocks, split_lines

logger = get_logger(__name__)

CONSISTENCY_PENALTY = 15
MIN_EXPLANATION_LENGTH = 20
MAX_LINE_COUNT_RATIO = 0.5
MAX_COMPLEXITY_GAP = 2

IGNORED_NAMES = {"console", "print", "log", "true", "false", "null", "undefined"}

_JS_VARIABLES = (
    re.compile(r"(?:var|let|const)\s+([a-zA-Z_$][\w$]*)"),
    re.compile(r"([a-zA-Z_$][\w$]*)\s*="),
)
VARIABLE_PATTERNS: dict[str, tuple[re.Pattern, ...]] = {
    "javascript": _JS_VARIABLES,
    "typescript": (
        re.compile(r"(?:var|let|const)\s+([a-zA-Z_$][\w$]*)"),
        re.compile(r"([a-zA-Z_$][\w$]*)\s*:"),
    ),
    "python": (re.compile(r"([a-zA-Z_]\w*)\s*="),),
    "java": (
        re.compile(r"(?:int|String|boolean|double|float|long|char)\s+([a-zA-Z_$][\w$]*)"),
        re.compile(r"([a-zA-Z_$][\w$]*)\s*="),
    ),
    "csharp": (
        re.compile(r"(?:int|string|bool|double|float|long|char|var)\s+([a-zA-Z_]\w*)"),
        re.compile(r"([a-zA-Z_]\w*)\s*="),
    ),
}

_JS_FUNCTIONS = (
    re.compile(r"function\s+([a-zA-Z_$][\w$]*)"),
    re.compile(r"([a-zA-Z_$][\w$]*)\s*=\s*(?:function|\([^)]*\)\s*=>)"),
)
FUNCTION_PATTERNS: dict[str, tuple[re.Pattern, ...]] = {
    "javascript": _JS_FUNCTIONS,
    "typescript": _JS_FUNCTIONS,
    "python": (re.compile(r"def\s+([a-zA-Z_]\w*)"), re.compile(r"([a-zA-Z_]\w*)\s*=\s*lambda")),
    "java": (re.compile(r"(?:public|private|protected)?\s*(?:static)?\s*\w+\s+([a-zA-Z_$][\w$]*)\s*\("),),
    "csharp": (re.compile(r"(?:public|private|protected)?\s*(?:static)?\s*\w+\s+([a-zA-Z_]\w*)\s*\("),),
}

LANGUAGE_TERMS: dict[str, tuple[str, ...]] = {
    "javascript": ("javascript", "js", "node", "npm", "react", "vue", "angular"),
    "python": ("python", "py", "pip", "django", "flask", "pandas"),
    "java": ("java", "jvm", "spring", "maven", "gradle"),
    "csharp": ("c#", "csharp", ".net", "dotnet", "visual studio"),
    "typescript": ("typescript", "ts", "angular", "type"),
}

TRANSITION_WORDS = ("alternatively", "similarly", "in contrast")


@dataclass
class CodeStructure:
    has_classes: bool
    has_functions: bool
    has_variables: bool
    has_loops: bool
    has_conditionals: bool
    line_count: int

    @property
    def complexity(self) -> int:
        score = 2 * self.has_classes + 2 * self.has_functions + self.has_loops + self.has_conditionals
        return score + self.line_count // 5


@dataclass
class CodeExample:
    language: str
    code: str
    block: FencedBlock
    variables: list[str]
    functions: list[str]
    structure: CodeStructure


@dataclass
class LanguageComparison:
    language1: str
    language2: str
    is_consistent: bool
    differences: list[str]
    similarity: float  # 0-1


@dataclass
class ConsistencyResult:
    is_consistent: bool
    score: int
    violations: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)
    comparisons: list[LanguageComparison] = field(default_factory=list)


def _unique_matches(code: str, patterns: tuple[re.Pattern, ...], ignored: set[str]) -> list[str]:
    names: list[str] = []
    for pattern in patterns:
        for match in pattern.finditer(code):
            name = match.group(1)
            if name and name not in names and name not in ignored:
                names.append(name)
    return names


def analyze_structure(code: str) -> CodeStructure:
    return CodeStructure(
        has_classes=bool(re.search(r"class\s+\w+", code, re.IGNORECASE)),
        has_functions=bool(re.search(r"(?:function|def|public|private)\s+\w+", code, re.IGNORECASE)),
        has_variables=bool(re.search(r"(?:var|let|const|int|string|=)", code, re.IGNORECASE)),
        has_loops=bool(re.search(r"(?:for|while|foreach)\s*\(", code, re.IGNORECASE)),
        has_conditionals=bool(re.search(r"(?:if|switch|case)\s*\(", code, re.IGNORECASE)),
        line_count=len([line for line in code.split("\n") if line.strip()]),
    )


def extract_examples(answer: str) -> list[CodeExample]:
    """Closed, non-empty fenced blocks other than diagrams."""
    examples = []
    for block in fenced_blocks(answer):
        language = (block.language or "unknown").lower()
        if not block.closed or not block.content or language == "mermaid":
            continue
        examples.append(
            CodeExample(
                language=language,
                code=block.content,
                block=block,
                variables=_unique_matches(
                    block.content, VARIABLE_PATTERNS.get(language, _JS_VARIABLES), IGNORED_NAMES
                ),
                functions=_unique_matches(block.content, FUNCTION_PATTERNS.get(language, _JS_FUNCTIONS), set()),
                structure=analyze_structure(block.content),
            )
        )
    return examples


def detect_naming_style(names: list[str]) -> str:
    if not names:
        return "none"
    counts = {
        "camelCase": sum(1 for n in names if re.fullmatch(r"[a-z][a-zA-Z0-9]*", n)),
        "snake_case": sum(1 for n in names if re.fullmatch(r"[a-z][a-z0-9_]*", n) and "_" in n),
        "PascalCase": sum(1 for n in names if re.fullmatch(r"[A-Z][a-zA-Z0-9]*", n)),
    }
    best = max(counts.values())
    leaders = [style for style, count in counts.items() if count == best]
    return leaders[0] if len(leaders) == 1 else "mixed"


def _compare_structure(a: CodeExample, b: CodeExample) -> list[str]:
    differences = []
    for attribute, label in (
        ("has_classes", "class usage"),
        ("has_functions", "function usage"),
        ("has_loops", "loop usage"),
        ("has_conditionals", "conditional usage"),
    ):
        left, right = getattr(a.structure, attribute), getattr(b.structure, attribute)
        if left != right:
            differences.append(f"{label} differs ({a.language}: {left}, {b.language}: {right})")

    longest = max(a.structure.line_count, b.structure.line_count)
    if longest and abs(a.structure.line_count - b.structure.line_count) / longest > MAX_LINE_COUNT_RATIO:
        differences.append(
            f"significant line count difference ({a.language}: {a.structure.line_count}, "
            f"{b.language}: {b.structure.line_count})"
        )
    return differences


def _compare_naming(a: CodeExample, b: CodeExample) -> list[str]:
    differences = []
    if len(a.variables) != len(b.variables):
        differences.append(
            f"different number of variables ({a.language}: {len(a.variables)}, {b.language}: {len(b.variables)})"
        )
    style_a, style_b = detect_naming_style(a.variables), detect_naming_style(b.variables)
    if style_a != style_b and a.variables and b.variables:
        differences.append(f"different naming styles ({a.language}: {style_a}, {b.language}: {style_b})")
    if len(a.functions) != len(b.functions):
        differences.append(
            f"different number of functions ({a.language}: {len(a.functions)}, {b.language}: {len(b.functions)})"
        )
    return differences


def _compare_complexity(a: CodeExample, b: CodeExample) -> list[str]:
    left, right = a.structure.complexity, b.structure.complexity
    if abs(left - right) > MAX_COMPLEXITY_GAP:
        return [f"significant complexity difference ({a.language}: {left}, {b.language}: {right})"]
    return []


def compare_examples(a: CodeExample, b: CodeExample) -> LanguageComparison:
    differences = _compare_structure(a, b) + _compare_naming(a, b) + _compare_complexity(a, b)
    return LanguageComparison(
        language1=a.language,
        language2=b.language,
        is_consistent=not differences,
        differences=differences,
        similarity=max(0.0, 1 - len(differences) / 10),
    )


def _paragraphs(lines: list[str]) -> list[str]:
    return [p.strip() for p in "\n".join(lines).split("\n\n") if p.strip()]


def _mentions_language(text: str, language: str) -> bool:
    lowered = text.lower()
    return any(term in lowered for term in LANGUAGE_TERMS.get(language, ()))


class LanguageConsistencyChecker:
    """Checks that multi-language code examples tell the same story."""

    def check_consistency(self, answer: str) -> ConsistencyResult:
        """Check an answer's code examples against each other.

        Args:
            answer: Markdown answer text

        Returns:
            Consistency result; fewer than two examples is trivially consistent
        """
        examples = extract_examples(answer)
        languages = [e.language for e in examples]
        if len(examples) < 2:
            return ConsistencyResult(is_consistent=True, score=100, languages=languages)

        violations: list[str] = []
        suggestions: list[str] = []
        comparisons: list[LanguageComparison] = []

        for i, first in enumerate(examples):
            for second in examples[i + 1 :]:
                comparison = compare_examples(first, second)
                comparisons.append(comparison)
                if not comparison.is_consistent:
                    violations.append(
                        f"Inconsistency between {first.language} and {second.language}: "
                        f"{', '.join(comparison.differences)}"
                    )
                    suggestions.append(
                        f"Ensure {first.language} and {second.language} examples are consistent "
                        "in structure and functionality"
                    )

        lines = split_lines(answer)
        self._check_explanations(lines, examples, violations, suggestions)
        self._check_separation(lines, examples, violations, suggestions)

        score = max(0, 100 - CONSISTENCY_PENALTY * len(violations))
        logger.debug(f"Consistency across {languages}: {score} ({len(violations)} violations)")
        return ConsistencyResult(
            is_consistent=not violations,
            score=score,
            violations=violations,
            suggestions=suggestions,
            languages=languages,
            comparisons=comparisons,
        )

    def _check_explanations(
        self, lines: list[str], examples: list[CodeExample], violations: list[str], suggestions: list[str]
    ):
        # Neighbouring code blocks are not explanations
        prose = list(lines)
        for block in fenced_blocks("\n".join(lines)):
            prose[block.start_line : block.end_line + 1] = [""] * (block.end_line + 1 - block.start_line)

        explanations = []
        for example in examples:
            before = _paragraphs(prose[: example.block.start_line])
            after = _paragraphs(prose[example.block.end_line + 1 :])
            text = f"{before[-1] if before else ''} {after[0] if after else ''}"
            explanations.append((example.language, text))

        specific = [lang for lang, text in explanations if _mentions_language(text, lang)]
        if specific and len(specific) < len(explanations):
            violations.append(
                "Inconsistent explanation approach: some code examples have language-specific "
                "explanations while others are generic"
            )
            suggestions.append(
                "Use consistent explanation approach: either provide language-specific explanations "
                "for all examples or keep all explanations generic"
            )

        missing = [lang for lang, text in explanations if len(text.strip()) < MIN_EXPLANATION_LENGTH]
        if missing:
            violations.append(f"Missing or insufficient explanations for {', '.join(missing)} examples")
            suggestions.append("Provide adequate explanations for all code examples to maintain consistency")

    def _check_separation(
        self, lines: list[str], examples: list[CodeExample], violations: list[str], suggestions: list[str]
    ):
        for current, following in zip(examples, examples[1:]):
            between = lines[current.block.end_line + 1 : following.block.start_line]
            if following.block.start_line - current.block.end_line < 2:
                violations.append(
                    f"Insufficient separation between {current.language} and {following.language} examples"
                )
                suggestions.append("Add more spacing or explanatory text between different language examples")

            text = "\n".join(between).lower()
            target = following.language
            markers = (f"in {target}", f"{target} equivalent", f"{target} version", f"using {target}", f"{target}:")
            has_transition = any(m in text for m in markers + TRANSITION_WORDS)
            if not has_transition and current.language != following.language:
                suggestions.append(
                    f"Consider adding transition text between {current.language} and {target} examples "
                    f'(e.g., "In {target}:", "The {target} equivalent:")'
                )
