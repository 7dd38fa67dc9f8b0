"""Shared constants for the answer_formatting package."""

# Persisted state keys
PATTERN_CONFIG_KEY = "pattern-config"
SETTINGS_KEY = f"{PATTERN_CONFIG_KEY}:settings"
OVERRIDES_KEY = f"{PATTERN_CONFIG_KEY}:overrides"
METRICS_KEY = "metrics"
VALIDATION_EVENTS_KEY = f"{METRICS_KEY}:validation-events"
AUTOFIX_EVENTS_KEY = f"{METRICS_KEY}:autofix-events"
PATTERN_EVENTS_KEY = f"{METRICS_KEY}:pattern-events"

CONFIG_VERSION = "1.0.0"

# Score penalty per violation severity
SEVERITY_PENALTIES: dict[str, int] = {
    "error": 20,
    "warning": 10,
    "info": 5,
}

# Fix backlog priority per violation severity
FIX_PRIORITIES: dict[str, int] = {
    "error": 100,
    "warning": 50,
    "info": 25,
}

# Verbs accepted as the first word of a process step
PROCESS_ACTION_VERBS: frozenset[str] = frozenset(
    {
        "create", "build", "configure", "setup", "install", "run", "execute", "start",
        "stop", "add", "remove", "delete", "update", "modify", "change", "edit",
        "replace", "insert", "open", "close", "save", "load", "import", "export",
        "download", "upload", "copy", "move", "navigate", "click", "select", "choose",
        "enter", "type", "input", "submit", "verify", "check", "validate", "test",
        "confirm", "ensure", "review", "examine", "connect", "disconnect", "link",
        "unlink", "join", "leave", "attach", "detach", "enable", "disable", "activate",
        "deactivate", "turn", "switch", "toggle", "set", "deploy", "publish", "release",
        "launch", "initialize", "restart", "refresh", "reload", "analyze", "process",
        "generate", "compile", "package", "bundle", "compress", "extract", "unzip",
        "mount", "unmount", "format", "partition", "backup", "restore", "redirect",
        "handle", "exchange", "use", "access", "send", "receive", "fetch", "get", "post",
        "put", "patch", "authenticate", "authorize", "login", "logout", "register",
        "define", "write", "call", "apply", "monitor", "scale", "migrate", "merge",
        "commit", "push", "pull", "clone", "initialise", "implement", "invoke",
    }
)

# Verbs accepted as the first word of a troubleshooting solution
SOLUTION_ACTION_VERBS: frozenset[str] = frozenset(
    {
        "check", "verify", "examine", "inspect", "review", "test", "run", "execute",
        "restart", "reboot", "reset", "clear", "clean", "update", "upgrade", "install",
        "uninstall", "remove", "delete", "add", "create", "configure", "set", "change",
        "modify", "edit", "replace", "fix", "repair", "restore", "backup", "save",
        "open", "close", "enable", "disable", "activate", "deactivate", "connect",
        "disconnect", "refresh", "reload", "navigate", "access", "contact", "consult",
        "increase", "decrease", "allow", "use",
    }
)

VAGUE_STEP_PHRASES: tuple[str, ...] = (
    "somehow",
    "something",
    "etc",
    "and so on",
    "as needed",
    "if necessary",
    "appropriately",
    "might",
    "try to",
)

VAGUE_SOLUTION_PHRASES: tuple[str, ...] = (
    "try to",
    "might",
    "maybe",
    "possibly",
    "perhaps",
    "could be",
    "should work",
)

KNOWN_CODE_LANGUAGES: frozenset[str] = frozenset(
    {
        "javascript", "js", "typescript", "ts", "python", "py", "java", "c", "cpp",
        "csharp", "cs", "go", "rust", "php", "ruby", "swift", "kotlin", "scala", "html",
        "css", "scss", "sass", "json", "xml", "yaml", "yml", "sql", "bash", "sh",
        "shell", "powershell", "dockerfile", "makefile", "markdown", "md", "text",
        "plaintext", "diff", "patch", "mermaid", "graphql", "toml", "ini",
    }
)

MERMAID_DIAGRAM_TYPES: tuple[str, ...] = (
    "graph",
    "flowchart",
    "sequenceDiagram",
    "classDiagram",
    "stateDiagram",
    "erDiagram",
    "journey",
    "gantt",
    "pie",
    "gitGraph",
)

ARCHITECTURE_CONTEXT_TERMS: tuple[str, ...] = (
    "architecture", "system", "design", "component", "service", "flow", "process",
    "pattern", "structure", "model", "framework", "workflow", "interaction",
    "relationship", "connection", "communication", "data flow", "sequence", "layer",
)

DIAGRAM_REFERENCE_TERMS: tuple[str, ...] = (
    "diagram", "chart", "figure", "illustration", "visual", "above", "below",
    "shown", "depicts", "illustrates", "represents",
)

DEFAULT_CODE_LANGUAGE = "javascript"
