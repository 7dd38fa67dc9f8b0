"""Turn raw findings into actionable violations and a score."""

from ..constants import SEVERITY_PENALTIES
from ..models import Location, Severity, ValidationViolation
from .rules.base import Finding

MESSAGE_PREFIXES = {
    Severity.ERROR: "Critical Issue: ",
    Severity.WARNING: "Warning: ",
    Severity.INFO: "Suggestion: ",
}

FIX_PREFIXES = {
    Severity.ERROR: "MUST FIX: ",
    Severity.WARNING: "SHOULD FIX: ",
    Severity.INFO: "CONSIDER: ",
}

# First matching rule-id fragment wins
CATEGORY_HINTS = (
    ("table", " (Table formatting issue)"),
    ("list", " (List formatting issue)"),
    ("code", " (Code formatting issue)"),
    ("diagram", " (Diagram issue)"),
    ("pros-cons", " (Pros/Cons structure issue)"),
    ("process", " (Process steps issue)"),
    ("definition", " (Definition format issue)"),
    ("troubleshooting", " (Troubleshooting structure issue)"),
)

FIX_EXAMPLES = (
    (
        "table-required",
        "\n\nExample:\n```\n| Feature | Option A | Option B |\n|---------|----------|----------|\n"
        "| Speed   | Fast     | Slow     |\n| Cost    | High     | Low      |\n```",
    ),
    (
        "table-headers",
        "\n\nExample header separator:\n```\n| Column 1 | Column 2 |\n|----------|----------|\n"
        "| Data 1   | Data 2   |\n```",
    ),
    ("min-columns", "\n\nFor comparison tables, use at least:\n```\n| Feature | Item A | Item B |\n```"),
    (
        "list-required",
        "\n\nExample bulleted list:\n```\n- First key point\n- Second key point\n- Third key point\n```",
    ),
    (
        "action-verb",
        "\n\nGood action verbs: Create, Configure, Run, Check, Update, Install, Remove, Set, Enable, Restart",
    ),
    (
        "code-language",
        '\n\nExample:\n```javascript\nconst example = "code here";\n```\n\n'
        "Supported languages: javascript, python, java, typescript, bash, sql, html, css",
    ),
    (
        "diagram-required",
        "\n\nExample Mermaid diagram:\n```mermaid\ngraph TD\n    A[Start] --> B[Process]\n    B --> C[End]\n```",
    ),
    (
        "single-sentence",
        '\n\nExample definition opening:\n"A microservice is an independently deployable service '
        'that focuses on a single business capability."',
    ),
    (
        "pros-cons",
        "\n\nExample structure:\n```\n## Advantages\n- Benefit one\n- Benefit two\n\n"
        "## Disadvantages\n- Drawback one\n- Drawback two\n```",
    ),
    (
        "troubleshooting",
        "\n\nRequired sections:\n```\n## Problem\n[Description of the issue]\n\n## Causes\n"
        "- Potential cause 1\n- Potential cause 2\n\n## Solutions\n1. First solution step\n"
        "2. Second solution step\n```",
    ),
)


def enhance_message(finding: Finding) -> str:
    """Prefix the message with its severity and append a category hint."""
    hint = next((text for fragment, text in CATEGORY_HINTS if fragment in finding.rule), "")
    return f"{MESSAGE_PREFIXES[finding.severity]}{finding.message}{hint}"


def actionable_fix(finding: Finding) -> str:
    """Prefix the fix with its priority tag and append a worked example."""
    base = finding.fix or "Review and correct the issue"
    example = next((text for fragment, text in FIX_EXAMPLES if fragment in finding.rule), "")
    return f"{FIX_PREFIXES[finding.severity]}{base}{example}"


def find_text_location(answer: str, search_text: str, line_hint: int | None = None) -> Location | None:
    """Best-effort 1-based location of text in the answer.

    Tries the hinted line, then every line, then every line ignoring case.

    Args:
        answer: Answer text
        search_text: Text to look for
        line_hint: 0-based line index to try first

    Returns:
        Location of the first match, or None when the text is absent
    """
    if not search_text:
        return None

    lines = answer.split("\n")
    if line_hint is not None and 0 <= line_hint < len(lines):
        column = lines[line_hint].find(search_text)
        if column != -1:
            return Location(line=line_hint + 1, column=column + 1)

    for index, line in enumerate(lines):
        column = line.find(search_text)
        if column != -1:
            return Location(line=index + 1, column=column + 1)

    needle = search_text.lower()
    for index, line in enumerate(lines):
        column = line.lower().find(needle)
        if column != -1:
            return Location(line=index + 1, column=column + 1)

    return None


def to_violation(finding: Finding, answer: str) -> ValidationViolation:
    """Enrich a finding into a caller-facing violation."""
    location = None
    if finding.search_text:
        location = find_text_location(answer, finding.search_text, finding.line_hint)

    return ValidationViolation(
        rule=finding.rule,
        severity=finding.severity,
        message=enhance_message(finding),
        fix=actionable_fix(finding),
        location=location,
    )


def calculate_score(findings: list[Finding]) -> int:
    """Start at 100 and subtract a penalty per finding, floored at 0."""
    penalty = sum(SEVERITY_PENALTIES[f.severity.value] for f in findings)
    return max(0, 100 - penalty)


def collect_suggestions(findings: list[Finding]) -> list[str]:
    """De-duplicated base fixes of error and warning findings, in order."""
    suggestions: list[str] = []
    for finding in findings:
        if finding.severity == Severity.INFO or not finding.fix:
            continue
        if finding.fix not in suggestions:
            suggestions.append(finding.fix)
    return suggestions
