"""Best-effort transforms that move answers toward pattern compliance."""

import re
from collections.abc import Callable

from common.logger import get_logger

from ..constants import DEFAULT_CODE_LANGUAGE, FIX_PRIORITIES, PROCESS_ACTION_VERBS
from ..models import (
    FixType,
    FormatFix,
    FormatPattern,
    FormatSuggestion,
    SectionFormat,
    ValidationResult,
    ValidationViolation,
)
from ..validation.rules.diagram_rules import diagram_blocks
from ..validation.rules.pros_cons_rules import CONS_TITLES, PROS_TITLES
from ..validation.scanners import (
    BULLET_RE,
    FENCE_RE,
    NUMBERED_RE,
    column_count,
    count_sentences,
    fenced_blocks,
    find_heading,
    heading_sections,
    row_cells,
    split_lines,
)
from . import templates

logger = get_logger(__name__)

_TABLE_LINE_RE = re.compile(r"^\s*\|.*\|\s*$")
_SEPARATOR_CELL_RE = re.compile(r"^:?-{2,}:?$")
_ODD_BULLET_RE = re.compile(r"^(\s*)[•·‣⁃]\s*")
_NUMBER_PREFIX_RE = re.compile(r"^(\s*)\d+\.(\s+)")
_BULLET_PREFIX_RE = re.compile(r"^(\s*)[-*+]\s+")
_STRUCTURAL_PREFIXES = ("-", "*", "+", "#", "|", ">", "```")


def _fenced_line_indices(text: str) -> set[int]:
    indices = set()
    for block in fenced_blocks(text):
        indices.update(range(block.start_line, block.end_line + 1))
    return indices


def _is_plain_line(line: str, min_length: int) -> bool:
    """A prose line that is not already list, heading, table or quote syntax."""
    stripped = line.strip()
    return (
        len(stripped) > min_length
        and not stripped.endswith(":")
        and not stripped.startswith(_STRUCTURAL_PREFIXES)
        and not NUMBERED_RE.match(stripped)
    )


def _has_list(lines: list[str]) -> bool:
    return any(BULLET_RE.match(line) or NUMBERED_RE.match(line) for line in lines)


def _renumber(lines: list[str], skip: set[int]) -> list[str]:
    """Renumber numbered items 1, 2, 3... across the whole answer."""
    number = 1
    result = []
    for index, line in enumerate(lines):
        if index not in skip and NUMBERED_RE.match(line):
            line = _NUMBER_PREFIX_RE.sub(lambda m: f"{m.group(1)}{number}.{m.group(2)}", line, count=1)
            number += 1
        result.append(line)
    return result


def _section_range(text: str, heading_line: int) -> range:
    """Line indices of a heading's body, up to the next heading."""
    following = [s.line_index for s in heading_sections(text) if s.line_index > heading_line]
    end = following[0] if following else len(split_lines(text))
    return range(heading_line + 1, end)


# Pattern transforms


def normalize_table_row(line: str) -> str:
    indent = line[: len(line) - len(line.lstrip())]
    return f"{indent}| " + " | ".join(row_cells(line.strip())) + " |"


def is_separator_row(line: str) -> bool:
    cells = row_cells(line.strip())
    return bool(cells) and all(_SEPARATOR_CELL_RE.match(cell) for cell in cells)


def format_comparison(answer: str) -> str:
    """Normalize existing tables, or lead with a placeholder comparison table."""
    lines = split_lines(answer)
    fenced = _fenced_line_indices(answer)
    table_lines = [i for i, line in enumerate(lines) if i not in fenced and _TABLE_LINE_RE.match(line)]

    if not table_lines:
        return f"{templates.PLACEHOLDER_COMPARISON_TABLE}\n\n{templates.DETAILED_COMPARISON_HEADING}\n\n{answer}"

    for index in table_lines:
        lines[index] = normalize_table_row(lines[index])

    if not any(is_separator_row(lines[i]) for i in table_lines):
        first = table_lines[0]
        columns = max(1, column_count(lines[first].strip()))
        lines.insert(first + 1, "|" + "|".join(["----------"] * columns) + "|")

    return "\n".join(lines)


def format_definition(answer: str) -> str:
    """Separate the opening sentence and bulletize short characteristic lines."""
    lines = split_lines(answer)
    fenced = _fenced_line_indices(answer)
    opener = next((i for i, line in enumerate(lines) if line.strip()), None)
    if opener is None:
        return answer

    result = lines[: opener + 1]
    rest = list(enumerate(lines[opener + 1 :], start=opener + 1))
    if rest and rest[0][1].strip():
        result.append("")

    for index, line in rest:
        stripped = line.strip()
        if (
            index not in fenced
            and _is_plain_line(line, min_length=10)
            and len(stripped) < 200
            and count_sentences(stripped) <= 1
        ):
            line = f"- {stripped}"
        result.append(line)

    return "\n".join(result)


def format_list(answer: str) -> str:
    """Normalize bullet characters and spacing, renumber, bulletize bare lines."""
    fenced = _fenced_line_indices(answer)
    lines = []
    for index, line in enumerate(split_lines(answer)):
        if index not in fenced:
            line = _ODD_BULLET_RE.sub(lambda m: f"{m.group(1)}- ", line)
            line = re.sub(r"^(\s*)([-+])(?=[^\s\-+])", r"\1\2 ", line)
            line = re.sub(r"^(\s*)\*(?=[^\s*])", r"\1* ", line)
        lines.append(line)

    # Prose around an existing list stays prose
    if not _has_list(lines):
        lines = [
            f"- {line.strip()}" if i not in fenced and _is_plain_line(line, min_length=5) else line
            for i, line in enumerate(lines)
        ]

    return "\n".join(_renumber(lines, fenced))


def format_process(answer: str) -> str:
    """Turn bullets (or bare lines when there is no list) into numbered steps."""
    lines = split_lines(answer)
    fenced = _fenced_line_indices(answer)
    had_list = _has_list(lines)

    result = []
    for index, line in enumerate(lines):
        if index not in fenced:
            if BULLET_RE.match(line):
                line = _BULLET_PREFIX_RE.sub(lambda m: f"{m.group(1)}1. ", line, count=1)
            elif not had_list and _is_plain_line(line, min_length=10):
                line = f"1. {line.strip()}"
        result.append(line)

    return "\n".join(_renumber(result, fenced))


def tag_untagged_fences(answer: str, language: str = DEFAULT_CODE_LANGUAGE) -> str:
    """Add a language tag to opening fences that have none; closing fences are untouched."""
    inside = False
    result = []
    for line in split_lines(answer):
        match = FENCE_RE.match(line)
        if match:
            if not inside and not match.group(1) and line.strip() == "```":
                line = line.replace("```", f"```{language}", 1)
            inside = not inside
        result.append(line)
    return "\n".join(result)


def format_code(answer: str) -> str:
    return tag_untagged_fences(answer)


def format_pros_cons(answer: str) -> str:
    """Bulletize section content and inject missing Advantages/Disadvantages sections."""
    pros = find_heading(answer, PROS_TITLES)
    cons = find_heading(answer, CONS_TITLES)
    lines = split_lines(answer)
    fenced = _fenced_line_indices(answer)

    for heading in (pros, cons):
        if heading is None:
            continue
        for index in _section_range(answer, heading.line_index):
            if index not in fenced and _is_plain_line(lines[index], min_length=3):
                lines[index] = f"- {lines[index].strip()}"

    if pros is None and cons is not None:
        lines[cons.line_index : cons.line_index] = [*split_lines(templates.ADVANTAGES_PLACEHOLDER), ""]

    text = "\n".join(lines).rstrip()
    if pros is None and cons is None:
        text = f"{text}\n\n{templates.ADVANTAGES_PLACEHOLDER}\n\n{templates.DISADVANTAGES_PLACEHOLDER}"
    elif cons is None:
        text = f"{text}\n\n{templates.DISADVANTAGES_PLACEHOLDER}"
    return text


def format_architecture(answer: str) -> str:
    """Insert a placeholder diagram near the middle when no diagram is present."""
    if diagram_blocks(answer):
        return answer

    lines = split_lines(answer)
    position = (len(lines) + 1) // 2
    for block in fenced_blocks(answer):
        if block.start_line < position <= block.end_line:
            position = block.end_line + 1

    lines[position:position] = ["", *split_lines(templates.PLACEHOLDER_DIAGRAM), ""]
    return "\n".join(lines).strip("\n")


def format_troubleshooting(answer: str) -> str:
    """Number the solutions and inject missing Problem/Causes/Solutions sections."""
    problem = find_heading(answer, r"Problems?")
    causes = find_heading(answer, r"Causes?")
    solutions = find_heading(answer, r"Solutions?")
    lines = split_lines(answer)

    if solutions is not None:
        fenced = _fenced_line_indices(answer)
        number = 1
        for index in _section_range(answer, solutions.line_index):
            if index in fenced:
                continue
            line = lines[index]
            if BULLET_RE.match(line) or NUMBERED_RE.match(line):
                prefix = _BULLET_PREFIX_RE if BULLET_RE.match(line) else _NUMBER_PREFIX_RE
                lines[index] = prefix.sub(lambda m: f"{m.group(1)}{number}. ", line, count=1)
                number += 1

        if causes is None:
            lines[solutions.line_index : solutions.line_index] = [*split_lines(templates.CAUSES_PLACEHOLDER), ""]

    text = "\n".join(lines).rstrip()
    if solutions is None:
        if causes is None:
            text = f"{text}\n\n{templates.CAUSES_PLACEHOLDER}"
        text = f"{text}\n\n{templates.SOLUTIONS_PLACEHOLDER}"
    if problem is None:
        text = f"{templates.PROBLEM_PLACEHOLDER}\n\n{text}"
    return text


PATTERN_FORMATTERS: dict[str, Callable[[str], str]] = {
    "comparison-table": format_comparison,
    "comparison": format_comparison,
    "definition": format_definition,
    "list": format_list,
    "best-practices": format_list,
    "process": format_process,
    "code-example": format_code,
    "code": format_code,
    "pros-cons": format_pros_cons,
    "architecture": format_architecture,
    "troubleshooting": format_troubleshooting,
}

# Used for custom patterns whose id has no dedicated formatter
SECTION_FORMATTERS: dict[SectionFormat, Callable[[str], str]] = {
    SectionFormat.TABLE: format_comparison,
    SectionFormat.TEXT: format_definition,
    SectionFormat.LIST: format_list,
    SectionFormat.PROCESS: format_process,
    SectionFormat.CODE: format_code,
    SectionFormat.PROS_CONS: format_pros_cons,
    SectionFormat.DIAGRAM: format_architecture,
    SectionFormat.TROUBLESHOOTING: format_troubleshooting,
}


# Fix backlog


def _fix_for(violation: ValidationViolation) -> FormatFix:
    rule = violation.rule
    fix_id = f"fix-{rule}"

    if "table-required" in rule:
        return FormatFix(fix_id, FixType.REFORMAT, "Convert content to comparison table format", "content", templates.TABLE_TEMPLATE)
    if "table-headers" in rule:
        return FormatFix(fix_id, FixType.INSERT, "Add table header separator", "after-first-table-row", templates.TABLE_SEPARATOR)
    if "list-required" in rule:
        return FormatFix(fix_id, FixType.REFORMAT, "Convert content to bulleted list format", "content", templates.LIST_TEMPLATE)
    if "code-language" in rule:
        return FormatFix(fix_id, FixType.REPLACE, "Add language identifier to code block", "```", f"```{DEFAULT_CODE_LANGUAGE}")
    if "action-verb" in rule and "solution" not in rule:
        return FormatFix(fix_id, FixType.REPLACE, "Start step with action verb", "step-beginning", templates.DEFAULT_ACTION_VERB)
    if "blank-line" in rule:
        return FormatFix(fix_id, FixType.INSERT, "Add blank line after definition", "after-first-line", "\n")
    if re.search(r"missing-(?:advantages|disadvantages)$", rule):
        return FormatFix(fix_id, FixType.REFORMAT, "Add pros/cons section structure", "content", templates.PROS_CONS_TEMPLATE)
    if "diagram-required" in rule:
        return FormatFix(fix_id, FixType.INSERT, "Add Mermaid diagram", "end", templates.DIAGRAM_TEMPLATE)
    if re.search(r"missing-(?:problem|causes|solutions)$", rule):
        return FormatFix(fix_id, FixType.REFORMAT, "Add troubleshooting section structure", "content", templates.TROUBLESHOOTING_TEMPLATE)

    # Named but not automatically applicable
    return FormatFix(fix_id, FixType.REPLACE, violation.fix or "Apply suggested fix", "content", None)


def _describe(violation: ValidationViolation, fixes: list[FormatFix]) -> str:
    count = len(fixes)
    plural = "es" if count > 1 else ""
    steps = "\n".join(f"{i}. {fix.description}" for i, fix in enumerate(fixes, start=1))
    return f"{count} fix{plural} available for {violation.severity.value} issue: {violation.message}\n\nSuggested fixes:\n{steps}"


def _prefix_first_step(answer: str, verb: str) -> str:
    """Prefix the first numbered step lacking an action verb with a verb."""
    lines = split_lines(answer)
    for index, line in enumerate(lines):
        match = NUMBERED_RE.match(line)
        if not match:
            continue
        words = match.group(2).split()
        first = re.sub(r"[^a-z]", "", words[0].lower()) if words else ""
        if first not in PROCESS_ACTION_VERBS:
            step = match.group(2)
            lines[index] = line[: match.start(2)] + f"{verb} {step[:1].lower()}{step[1:]}"
            break
    return "\n".join(lines)


class AutoFormatter:
    """Applies pattern-keyed transforms and builds ranked fix backlogs.

    All operations are pure: the same input always yields the same output.
    """

    def format(self, answer: str, pattern: FormatPattern) -> str:
        """Apply the best-effort transform for a pattern.

        Args:
            answer: Answer text
            pattern: Pattern to move the answer toward

        Returns:
            Transformed answer, or the input unchanged when no transform applies
        """
        if not answer or not answer.strip():
            return answer

        formatter = PATTERN_FORMATTERS.get(pattern.id)
        if formatter is None and pattern.structure.sections:
            formatter = SECTION_FORMATTERS.get(pattern.structure.sections[0].format)
        if formatter is None:
            logger.debug(f"No formatter for pattern '{pattern.id}'")
            return answer

        return formatter(answer)

    def suggest_fixes(self, result: ValidationResult) -> list[FormatSuggestion]:
        """Rank violations into a fix backlog, highest priority first.

        Args:
            result: Validation result to build fixes for

        Returns:
            One suggestion per violation, sorted by priority (stable within a priority)
        """
        suggestions = []
        for violation in result.violations:
            fixes = [_fix_for(violation)]
            suggestions.append(
                FormatSuggestion(
                    violation=violation,
                    fixes=fixes,
                    priority=FIX_PRIORITIES.get(violation.severity.value, 10),
                    description=_describe(violation, fixes),
                )
            )

        suggestions.sort(key=lambda s: s.priority, reverse=True)
        return suggestions

    def apply_fix(self, answer: str, fix: FormatFix) -> str:
        """Apply one fix to an answer.

        Args:
            answer: Answer text
            fix: Fix to apply

        Returns:
            The edited answer, or the input unchanged when the fix does not apply
        """
        if fix.type == FixType.REPLACE:
            if fix.replacement is None or not fix.target:
                return answer
            if fix.target == "step-beginning":
                return _prefix_first_step(answer, fix.replacement)
            if fix.target == "```" and fix.replacement.startswith("```"):
                return tag_untagged_fences(answer, fix.replacement[3:] or DEFAULT_CODE_LANGUAGE)
            return answer.replace(fix.target, fix.replacement)

        if fix.type == FixType.INSERT:
            replacement = fix.replacement or ""
            if fix.target == "end":
                return f"{answer}\n\n{replacement}"
            lines = split_lines(answer)
            if fix.target == "after-first-line":
                lines.insert(1, replacement.strip("\n"))
                return "\n".join(lines)
            if fix.target == "after-first-table-row":
                for index, line in enumerate(lines):
                    if "|" in line:
                        lines.insert(index + 1, replacement)
                        break
                return "\n".join(lines)
            return answer

        if fix.type == FixType.REMOVE:
            return answer.replace(fix.target, "") if fix.target else answer

        if fix.type == FixType.REFORMAT:
            if fix.target == "content" and fix.replacement:
                return fix.replacement
            return answer

        return answer
