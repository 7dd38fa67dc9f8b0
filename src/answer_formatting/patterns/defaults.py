"""Built-in pattern definitions."""

from ..models import (
    Constraint,
    ConstraintKind as K,
    FormatPattern,
    PatternStructure,
    Section,
    SectionFormat,
)


def _section(name: str, fmt: SectionFormat, *constraints: Constraint, required: bool = True) -> Section:
    return Section(name=name, format=fmt, required=required, constraints=tuple(constraints))


COMPARISON_TABLE = FormatPattern(
    id="comparison-table",
    name="Comparison Table",
    keywords=(
        "difference",
        "differences",
        "differ",
        "difference between",
        "compare",
        "comparison",
        "vs",
        "versus",
        "contrast",
        "better than",
        "distinguish",
        "which is better",
    ),
    priority=90,
    structure=PatternStructure(
        sections=(
            _section(
                "Comparison Table",
                SectionFormat.TABLE,
                Constraint(K.MIN_COLUMNS, 3),
                Constraint(K.HAS_HEADERS),
                Constraint(K.REQUIRES_FEATURE_COLUMN),
                Constraint(K.COMPARISON_FORMAT),
                Constraint(K.CONSISTENT_ROWS),
                Constraint(K.NO_EMPTY_CELLS),
                Constraint(K.MIN_DATA_ROWS, 2),
            ),
        )
    ),
    template=(
        "| Feature | Option A | Option B |\n"
        "|---------|----------|----------|\n"
        "| Aspect 1 | Value | Value |\n"
        "| Aspect 2 | Value | Value |"
    ),
    examples=(
        "| Feature | REST | GraphQL |\n"
        "|---------|------|---------|\n"
        "| Endpoints | Many | One |\n"
        "| Fetching | Fixed shape | Client-defined |",
    ),
)

DEFINITION = FormatPattern(
    id="definition",
    name="Definition",
    keywords=("what is", "define", "definition", "meaning of", "explain what", "what does"),
    priority=80,
    structure=PatternStructure(
        sections=(
            _section(
                "Definition",
                SectionFormat.TEXT,
                Constraint(K.SINGLE_SENTENCE),
                Constraint(K.BLANK_LINE_AFTER),
                Constraint(K.BULLETED_LIST_REQUIRED),
                Constraint(K.MIN_LIST_ITEMS, 3),
                Constraint(K.MAX_LIST_ITEMS, 5),
            ),
        )
    ),
    template=(
        "[Term] is [one-sentence definition].\n"
        "\n"
        "- Characteristic 1\n"
        "- Characteristic 2\n"
        "- Characteristic 3"
    ),
    examples=(
        "A closure is a function that captures variables from its enclosing scope.\n"
        "\n"
        "- Retains access to outer variables\n"
        "- Created every time a function is created\n"
        "- Enables data privacy",
    ),
)

LIST = FormatPattern(
    id="list",
    name="List",
    keywords=("list", "types of", "kinds of", "examples of", "categories", "enumerate", "principles"),
    priority=70,
    structure=PatternStructure(
        sections=(
            _section(
                "List",
                SectionFormat.LIST,
                Constraint(K.MAX_SENTENCES, 2),
                Constraint(K.PROPER_BULLET_SYNTAX),
                Constraint(K.PROPER_NUMBERING_SYNTAX),
                Constraint(K.NESTING_STRUCTURE),
                Constraint(K.MIN_LIST_ITEMS, 3),
                Constraint(K.MAX_LIST_ITEMS, 10),
                Constraint(K.CONSISTENT_INDENTATION),
            ),
        )
    ),
    template="- Item 1\n- Item 2\n- Item 3",
    examples=("- Single responsibility\n- Open/closed\n- Liskov substitution",),
)

PROCESS = FormatPattern(
    id="process",
    name="Process Steps",
    keywords=(
        "how to",
        "steps",
        "step by step",
        "process",
        "procedure",
        "workflow",
        "deploy",
        "set up",
        "install",
        "configure",
    ),
    priority=85,
    structure=PatternStructure(
        sections=(
            _section(
                "Steps",
                SectionFormat.PROCESS,
                Constraint(K.ACTION_VERBS),
                Constraint(K.STEP_CLARITY),
                Constraint(K.PROPER_SEQUENCE),
                Constraint(K.MIN_STEPS, 3),
                Constraint(K.MAX_STEPS, 10),
            ),
        )
    ),
    template="1. Configure the first thing\n2. Run the second thing\n3. Verify the result",
    examples=("1. Install dependencies\n2. Build the bundle\n3. Deploy to production",),
)

CODE_EXAMPLE = FormatPattern(
    id="code-example",
    name="Code Example",
    keywords=(
        "code",
        "implement",
        "implementation",
        "write a",
        "syntax",
        "snippet",
        "function",
        "example code",
        "program",
    ),
    priority=75,
    structure=PatternStructure(
        sections=(
            _section(
                "Code",
                SectionFormat.CODE,
                Constraint(K.REQUIRES_LANGUAGE),
                Constraint(K.COMPLETE_BLOCKS),
                Constraint(K.CODE_COMMENTS),
                Constraint(K.RUNNABLE_CODE),
                Constraint(K.PROPER_INDENTATION),
                Constraint(K.MAX_LINES, 50),
                Constraint(K.INLINE_CODE_USAGE),
            ),
        )
    ),
    template="```javascript\n// Explain what the code does\nfunction example() {\n  return true;\n}\n```",
    examples=("```python\n# Add two numbers\ndef add(a, b):\n    return a + b\n```",),
)

PROS_CONS = FormatPattern(
    id="pros-cons",
    name="Pros and Cons",
    keywords=(
        "pros and cons",
        "advantages and disadvantages",
        "benefits and drawbacks",
        "pros",
        "cons",
        "advantages",
        "disadvantages",
        "drawbacks",
        "trade-offs",
        "tradeoffs",
    ),
    priority=88,
    structure=PatternStructure(
        sections=(
            _section(
                "Pros and Cons",
                SectionFormat.PROS_CONS,
                Constraint(K.REQUIRED_SECTIONS, ("Advantages", "Disadvantages")),
                Constraint(K.SECTION_BALANCE),
                Constraint(K.BULLETED_LISTS),
                Constraint(K.MIN_ITEMS_PER_SECTION, 2),
                Constraint(K.SECTION_ORDER),
            ),
        )
    ),
    template="## Advantages\n\n- Advantage 1\n- Advantage 2\n\n## Disadvantages\n\n- Disadvantage 1\n- Disadvantage 2",
    examples=(
        "## Advantages\n\n- Fast reads\n- Simple model\n\n## Disadvantages\n\n- Stale data\n- Memory cost",
    ),
)

ARCHITECTURE = FormatPattern(
    id="architecture",
    name="Architecture Diagram",
    keywords=(
        "architecture",
        "system design",
        "design",
        "diagram",
        "components",
        "structure",
        "mvc",
        "infrastructure",
    ),
    priority=82,
    structure=PatternStructure(
        sections=(
            _section(
                "Diagram",
                SectionFormat.DIAGRAM,
                Constraint(K.MAX_NODES, 15),
                Constraint(K.TEXT_EXPLANATION),
                Constraint(K.MIN_EXPLANATION_LENGTH, 100),
                Constraint(K.DIAGRAM_CONTEXT),
                Constraint(K.APPROPRIATE_DIAGRAM_TYPE),
            ),
        )
    ),
    template=(
        "The system is composed of the following components:\n"
        "\n"
        "```mermaid\n"
        "graph TD\n"
        "    A[Client] --> B[Server]\n"
        "    B --> C[Database]\n"
        "```\n"
        "\n"
        "The diagram above shows how requests flow through the system."
    ),
)

TROUBLESHOOTING = FormatPattern(
    id="troubleshooting",
    name="Troubleshooting",
    keywords=(
        "debug",
        "troubleshoot",
        "fix",
        "error",
        "not working",
        "fails",
        "failing",
        "leak",
        "crash",
        "issue",
        "problem",
        "resolve",
    ),
    priority=78,
    structure=PatternStructure(
        sections=(
            _section(
                "Troubleshooting",
                SectionFormat.TROUBLESHOOTING,
                Constraint(K.REQUIRED_SECTIONS, ("Problem", "Causes", "Solutions")),
                Constraint(K.NUMBERED_SOLUTIONS),
                Constraint(K.SOLUTION_CLARITY),
                Constraint(K.PROBLEM_DESCRIPTION),
                Constraint(K.CAUSE_ANALYSIS),
            ),
        )
    ),
    template=(
        "## Problem\n\n[Describe the symptoms and error]\n\n"
        "## Causes\n\n- Cause 1\n- Cause 2\n\n"
        "## Solutions\n\n1. Check the first thing\n2. Restart the second thing"
    ),
)

BEST_PRACTICES = FormatPattern(
    id="best-practices",
    name="Best Practices",
    keywords=(
        "best practices",
        "best practice",
        "guidelines",
        "recommendations",
        "tips",
        "conventions",
        "dos and don'ts",
    ),
    priority=72,
    structure=PatternStructure(
        sections=(
            _section(
                "Practices",
                SectionFormat.LIST,
                Constraint(K.PROPER_BULLET_SYNTAX),
                Constraint(K.MIN_LIST_ITEMS, 3),
                Constraint(K.MAX_LIST_ITEMS, 10),
                Constraint(K.MAX_SENTENCES, 3),
            ),
        )
    ),
    template="- Practice 1\n- Practice 2\n- Practice 3",
)

DEFAULT_PATTERNS: tuple[FormatPattern, ...] = (
    COMPARISON_TABLE,
    DEFINITION,
    LIST,
    PROCESS,
    CODE_EXAMPLE,
    PROS_CONS,
    ARCHITECTURE,
    TROUBLESHOOTING,
    BEST_PRACTICES,
)


def get_default_patterns() -> list[FormatPattern]:
    """Return a fresh list of the built-in patterns."""
    return list(DEFAULT_PATTERNS)
