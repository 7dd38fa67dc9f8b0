"""Diagram (Mermaid) section checks."""

import re

from ...constants import ARCHITECTURE_CONTEXT_TERMS, DIAGRAM_REFERENCE_TERMS, MERMAID_DIAGRAM_TYPES
from ...models import ConstraintKind, Section, SectionFormat, Severity
from ..scanners import FencedBlock, fenced_blocks, split_lines
from .base import Finding, SectionChecker

_NODE_RE = re.compile(r"\b([A-Za-z_]\w*)\s*(?:\[[^\]]*\]|\([^)]*\)|\{[^}]*\})?")
_EDGE_LABEL_RE = re.compile(r"\|[^|]*\|")
_CHAIN_RE = re.compile(r"\w+\s*-->\s*\w+\s*-->\s*\w+")

# Mermaid keywords that are not nodes
_NON_NODE_WORDS = {
    "graph", "flowchart", "subgraph", "end", "direction", "td", "tb", "lr", "rl", "bt",
    "style", "classdef", "class", "click", "linkstyle", "participant", "actor", "note",
    "loop", "alt", "else", "opt", "par", "activate", "deactivate", "as", "over", "of",
    "left", "right",
}


def diagram_blocks(answer: str) -> list[FencedBlock]:
    return [b for b in fenced_blocks(answer) if b.language.lower() == "mermaid"]


def count_nodes(block: FencedBlock) -> int:
    """Approximate distinct node ids; the first line is the diagram declaration.

    Labels in brackets, edge labels and message text after ':' are ignored.
    Multi-word unbracketed labels can still inflate the count.
    """
    nodes = set()
    for line in block.body[1:]:
        line = _EDGE_LABEL_RE.sub(" ", line.split(":", 1)[0])
        for match in _NODE_RE.finditer(line):
            name = match.group(1)
            if name.lower() not in _NON_NODE_WORDS:
                nodes.add(name)
    return len(nodes)


def has_valid_syntax(content: str) -> bool:
    content = content.strip()
    if not content:
        return False
    lowered = content.lower()
    starts_with_type = any(lowered.startswith(t.lower()) for t in MERMAID_DIAGRAM_TYPES)
    return starts_with_type or "-->" in content or "---" in content


def detect_diagram_type(content: str) -> str | None:
    """Declared diagram type, or one inferred from its tokens."""
    lowered = content.strip().lower()
    for diagram_type in MERMAID_DIAGRAM_TYPES:
        if lowered.startswith(diagram_type.lower()):
            return diagram_type
    if "participant" in content or "activate" in content:
        return "sequenceDiagram"
    if "class " in content or "<<" in content or ">>" in content:
        return "classDiagram"
    if "-->" in content or "->" in content:
        return "graph"
    return None


class DiagramChecker(SectionChecker):
    """Validates Mermaid diagrams and the prose around them."""

    FORMAT = SectionFormat.DIAGRAM

    def check(self, answer: str, section: Section, pattern_id: str) -> list[Finding]:
        findings = []
        diagrams = diagram_blocks(answer)

        if not diagrams:
            if section.required:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-diagram-required",
                        severity=Severity.ERROR,
                        message=f"{section.name} section requires a Mermaid diagram",
                        fix="Add a Mermaid diagram using ```mermaid code blocks",
                    )
                )
            return findings

        max_nodes = section.constraint(ConstraintKind.MAX_NODES)
        min_length = section.constraint(ConstraintKind.MIN_EXPLANATION_LENGTH)
        lines = split_lines(answer)

        for diagram in diagrams:
            if max_nodes is not None:
                nodes = count_nodes(diagram)
                if nodes > max_nodes:
                    findings.append(
                        Finding(
                            rule=f"{pattern_id}-diagram-complexity",
                            severity=Severity.WARNING,
                            message=f"Diagram has {nodes} nodes, exceeding maximum of {max_nodes}",
                            fix=f"Simplify the diagram to have no more than {max_nodes} nodes",
                            search_text="```mermaid",
                            line_hint=diagram.start_line,
                        )
                    )

            if not has_valid_syntax(diagram.content):
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-diagram-syntax",
                        severity=Severity.ERROR,
                        message="Diagram contains invalid Mermaid syntax",
                        fix="Check Mermaid syntax and ensure proper diagram structure",
                        search_text="```mermaid",
                        line_hint=diagram.start_line,
                    )
                )

            before = "\n".join(lines[: diagram.start_line]).strip()
            after = "\n".join(lines[diagram.end_line + 1 :]).strip()

            if section.flag(ConstraintKind.TEXT_EXPLANATION):
                findings.extend(self._check_explanation(before, after, pattern_id))

            if min_length is not None:
                total = len(before) + len(after)
                if total < min_length:
                    findings.append(
                        Finding(
                            rule=f"{pattern_id}-diagram-insufficient-explanation",
                            severity=Severity.WARNING,
                            message=f"Diagram explanation is too brief ({total} chars, minimum: {min_length})",
                            fix=f"Add more detailed explanation around the diagram to reach at least {min_length} characters",
                        )
                    )

            if section.flag(ConstraintKind.DIAGRAM_CONTEXT):
                findings.extend(self._check_context(answer, before, pattern_id))

            if section.flag(ConstraintKind.APPROPRIATE_DIAGRAM_TYPE):
                findings.extend(self._check_type(diagram, pattern_id))

        return findings

    def _check_explanation(self, before: str, after: str, pattern_id: str) -> list[Finding]:
        if not before and not after:
            return [
                Finding(
                    rule=f"{pattern_id}-diagram-no-explanation",
                    severity=Severity.ERROR,
                    message="Diagram should be accompanied by explanatory text",
                    fix="Add text explanation before or after the diagram to provide context",
                )
            ]
        if not before:
            return [
                Finding(
                    rule=f"{pattern_id}-diagram-no-intro",
                    severity=Severity.WARNING,
                    message="Diagram should be preceded by introductory text",
                    fix="Add explanatory text before the diagram to introduce the concept",
                )
            ]
        if not after:
            return [
                Finding(
                    rule=f"{pattern_id}-diagram-no-conclusion",
                    severity=Severity.INFO,
                    message="Consider adding explanatory text after the diagram",
                    fix="Add text after the diagram to summarize or elaborate on the visual",
                )
            ]
        return []

    def _check_context(self, answer: str, before: str, pattern_id: str) -> list[Finding]:
        findings = []
        if not any(term in before.lower() for term in ARCHITECTURE_CONTEXT_TERMS):
            findings.append(
                Finding(
                    rule=f"{pattern_id}-diagram-missing-context",
                    severity=Severity.INFO,
                    message="Diagram should be introduced with architectural context",
                    fix="Add text that explains the architectural concept being illustrated",
                )
            )
        if not any(term in answer.lower() for term in DIAGRAM_REFERENCE_TERMS):
            findings.append(
                Finding(
                    rule=f"{pattern_id}-diagram-not-referenced",
                    severity=Severity.INFO,
                    message="Consider referencing the diagram in the explanatory text",
                    fix='Add text that refers to the diagram (e.g., "The diagram shows...", "As illustrated above...")',
                )
            )
        return findings

    def _check_type(self, diagram: FencedBlock, pattern_id: str) -> list[Finding]:
        content = diagram.content
        diagram_type = detect_diagram_type(content)

        if diagram_type is None:
            return [
                Finding(
                    rule=f"{pattern_id}-diagram-unknown-type",
                    severity=Severity.WARNING,
                    message="Unable to determine diagram type",
                    fix="Ensure the diagram uses a recognized Mermaid diagram type (graph, flowchart, sequenceDiagram, etc.)",
                    search_text="```mermaid",
                    line_hint=diagram.start_line,
                )
            ]

        if diagram_type in ("graph", "flowchart"):
            has_flow = "-->" in content or "->" in content
            has_hierarchy = "subgraph" in content or bool(_CHAIN_RE.search(content))
            if not has_flow and not has_hierarchy:
                return [
                    Finding(
                        rule=f"{pattern_id}-diagram-inappropriate-flowchart",
                        severity=Severity.INFO,
                        message="Flowchart diagram may not be the best choice for this content",
                        fix="Consider using a different diagram type if not showing a process or hierarchy",
                    )
                ]
        elif diagram_type == "sequenceDiagram":
            if "participant" not in content and "activate" not in content:
                return [
                    Finding(
                        rule=f"{pattern_id}-diagram-inappropriate-sequence",
                        severity=Severity.INFO,
                        message="Sequence diagram should show interactions between participants",
                        fix="Add participant interactions or consider using a different diagram type",
                    )
                ]
        return []
