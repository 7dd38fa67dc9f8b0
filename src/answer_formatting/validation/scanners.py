"""Small line scanners for markdown-flavored answer text.

These are heuristics, not a markdown parser. Each scanner accepts some false
positives (e.g. a pipe inside prose counts as a table row) in exchange for
never failing on malformed input.
"""

import re
from dataclasses import dataclass, field

BULLET_RE = re.compile(r"^\s*([-*+])\s+(.+)$")
NUMBERED_RE = re.compile(r"^\s*(\d+)\.\s+(.+)$")
TABLE_ROW_RE = re.compile(r"\|.*\|")
HEADER_SEPARATOR_RE = re.compile(r"\|\s*:?-{2,}:?\s*\|")
HEADING_RE = re.compile(r"^(#{1,6})\s+(.+?)\s*$")
FENCE_RE = re.compile(r"^\s*```\s*([\w+#-]*)")
INLINE_CODE_RE = re.compile(r"`([^`]+)`")

# Abbreviations whose trailing period does not end a sentence
_ABBREVIATION_RE = re.compile(r"\b(Mr|Mrs|Ms|Dr|Prof|Sr|Jr|vs|etc|i\.e|e\.g)\.", re.IGNORECASE)
_DECIMAL_RE = re.compile(r"\d+\.\d+")
_SENTENCE_END_RE = re.compile(r"[.!?]+(?:\s|$)")
_DOT = "\x00"


def split_lines(text: str) -> list[str]:
    return text.split("\n")


def indent_width(line: str) -> int:
    return len(line) - len(line.lstrip())


def count_sentences(text: str) -> int:
    """Count sentences, ignoring periods in common abbreviations and decimals."""
    if not text or not text.strip():
        return 0

    protected = _ABBREVIATION_RE.sub(lambda m: m.group(1).replace(".", _DOT) + _DOT, text.strip())
    protected = _DECIMAL_RE.sub(lambda m: m.group(0).replace(".", _DOT), protected)
    return len([s for s in _SENTENCE_END_RE.split(protected) if s.strip()])


# Lists


def bullet_items(text: str) -> list[str]:
    """Text of every bulleted item (-, * or +)."""
    items = []
    for line in split_lines(text):
        match = BULLET_RE.match(line)
        if match:
            items.append(match.group(2))
    return items


def numbered_items(text: str) -> list[tuple[int, str]]:
    """(number, text) of every numbered item, in document order."""
    items = []
    for line in split_lines(text):
        match = NUMBERED_RE.match(line)
        if match:
            items.append((int(match.group(1)), match.group(2)))
    return items


def list_items(text: str) -> list[str]:
    """Text of every bulleted or numbered item."""
    items = []
    for line in split_lines(text):
        match = BULLET_RE.match(line) or NUMBERED_RE.match(line)
        if match:
            items.append(match.group(2))
    return items


def has_bullets(text: str) -> bool:
    return any(BULLET_RE.match(line) for line in split_lines(text))


def has_numbered(text: str) -> bool:
    return any(NUMBERED_RE.match(line) for line in split_lines(text))


# Tables


def table_rows(text: str) -> list[str]:
    """Pipe-delimited row text (first to last pipe) of every table-like line."""
    rows = []
    for line in split_lines(text):
        match = TABLE_ROW_RE.search(line)
        if match:
            rows.append(match.group(0))
    return rows


def column_count(row: str) -> int:
    return row.count("|") - 1


def row_cells(row: str) -> list[str]:
    return [cell.strip() for cell in row.split("|")[1:-1]]


# Fenced code


@dataclass
class FencedBlock:
    """A fenced code block; line indices are 0-based and inclusive."""

    language: str
    body: list[str]
    start_line: int
    end_line: int
    closed: bool = True

    @property
    def code_lines(self) -> list[str]:
        """Non-blank lines of the block body."""
        return [line for line in self.body if line.strip()]

    @property
    def content(self) -> str:
        return "\n".join(self.body).strip()


def fenced_blocks(text: str) -> list[FencedBlock]:
    """Scan fenced code blocks. An unterminated fence runs to the end of the text."""
    lines = split_lines(text)
    blocks: list[FencedBlock] = []
    current: FencedBlock | None = None

    for index, line in enumerate(lines):
        match = FENCE_RE.match(line)
        if current is None:
            if match:
                current = FencedBlock(language=match.group(1), body=[], start_line=index, end_line=index)
        elif match:
            current.end_line = index
            blocks.append(current)
            current = None
        else:
            current.body.append(line)

    if current is not None:
        current.end_line = len(lines) - 1
        current.closed = False
        blocks.append(current)

    return blocks


def outside_fences(text: str) -> list[tuple[int, str]]:
    """(index, line) pairs for lines not inside a fenced block, fences excluded."""
    inside = set()
    for block in fenced_blocks(text):
        inside.update(range(block.start_line, block.end_line + 1))
    return [(i, line) for i, line in enumerate(split_lines(text)) if i not in inside]


def inline_code_spans(text: str) -> list[str]:
    """Inline code spans found outside fenced blocks."""
    prose = "\n".join(line for _, line in outside_fences(text))
    return INLINE_CODE_RE.findall(prose)


# Headings


@dataclass
class HeadingSection:
    """A markdown heading and the lines up to the next heading."""

    title: str
    level: int
    line_index: int
    body: list[str] = field(default_factory=list)

    @property
    def content(self) -> str:
        return "\n".join(self.body).strip()


def heading_sections(text: str) -> list[HeadingSection]:
    """Split text into heading-bounded sections, skipping '#' lines inside code fences."""
    sections: list[HeadingSection] = []
    for index, line in outside_fences(text):
        match = HEADING_RE.match(line)
        if match:
            sections.append(HeadingSection(title=match.group(2), level=len(match.group(1)), line_index=index))
        elif sections:
            sections[-1].body.append(line)
    return sections


def find_heading(text: str, title_pattern: str) -> HeadingSection | None:
    """First heading whose full title matches the pattern, case-insensitively."""
    regex = re.compile(rf"^(?:{title_pattern})$", re.IGNORECASE)
    for section in heading_sections(text):
        if regex.match(section.title):
            return section
    return None
