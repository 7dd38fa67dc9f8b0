"""Placeholder content used by the auto-formatter and fix suggestions."""

TABLE_TEMPLATE = """| Feature | Option A | Option B |
|---------|----------|----------|
| Speed   | Fast     | Slow     |
| Cost    | High     | Low      |
| Ease    | Simple   | Complex  |"""

PLACEHOLDER_COMPARISON_TABLE = """| Feature | Option A | Option B |
|---------|----------|----------|
| [Aspect 1] | [Value] | [Value] |
| [Aspect 2] | [Value] | [Value] |"""

LIST_TEMPLATE = """- First key point
- Second key point
- Third key point"""

PROS_CONS_TEMPLATE = """## Advantages
- Benefit one
- Benefit two
- Benefit three

## Disadvantages
- Drawback one
- Drawback two
- Drawback three"""

ADVANTAGES_PLACEHOLDER = """## Advantages

- [Advantage 1]
- [Advantage 2]"""

DISADVANTAGES_PLACEHOLDER = """## Disadvantages

- [Disadvantage 1]
- [Disadvantage 2]"""

DIAGRAM_TEMPLATE = """```mermaid
graph TD
    A[Start] --> B[Process]
    B --> C[Decision]
    C -->|Yes| D[Action]
    C -->|No| E[Alternative]
    D --> F[End]
    E --> F
```"""

PLACEHOLDER_DIAGRAM = """```mermaid
graph TD
    A[Component A] --> B[Component B]
    B --> C[Component C]
```"""

TROUBLESHOOTING_TEMPLATE = """## Problem
[Describe the specific issue or error]

## Causes
- Potential cause 1
- Potential cause 2
- Potential cause 3

## Solutions
1. First solution step
2. Second solution step
3. Third solution step"""

PROBLEM_PLACEHOLDER = """## Problem

[Describe the issue]"""

CAUSES_PLACEHOLDER = """## Causes

- [Potential cause 1]
- [Potential cause 2]"""

SOLUTIONS_PLACEHOLDER = """## Solutions

1. [First solution step]
2. [Second solution step]"""

TABLE_SEPARATOR = "|----------|----------|----------|"

DETAILED_COMPARISON_HEADING = "**Detailed Comparison:**"

DEFAULT_ACTION_VERB = "Configure"
