"""Fixed content-type tag set and extension mapping."""

from __future__ import annotations

PLAINTEXT = "plaintext"
JSON = "json"
JAVASCRIPT = "javascript"
TYPESCRIPT = "typescript"
HTML = "html"
CSS = "css"
SCSS = "scss"
LESS = "less"
MARKDOWN = "markdown"
YAML = "yaml"
XML = "xml"
PYTHON = "python"
JAVA = "java"
C = "c"
CPP = "cpp"
CSHARP = "csharp"
GO = "go"
RUST = "rust"
PHP = "php"
RUBY = "ruby"
SHELL = "shell"
SQL = "sql"

LANGUAGE_TAGS = (
    PLAINTEXT,
    JSON,
    JAVASCRIPT,
    TYPESCRIPT,
    HTML,
    CSS,
    SCSS,
    LESS,
    MARKDOWN,
    YAML,
    XML,
    PYTHON,
    JAVA,
    C,
    CPP,
    CSHARP,
    GO,
    RUST,
    PHP,
    RUBY,
    SHELL,
    SQL,
)
_KNOWN_TAGS = frozenset(LANGUAGE_TAGS)

EXTENSION_LANGUAGES: dict[str, str] = {
    "js": JAVASCRIPT,
    "jsx": JAVASCRIPT,
    "mjs": JAVASCRIPT,
    "cjs": JAVASCRIPT,
    "ts": TYPESCRIPT,
    "tsx": TYPESCRIPT,
    "mts": TYPESCRIPT,
    "cts": TYPESCRIPT,
    "json": JSON,
    "css": CSS,
    "scss": SCSS,
    "less": LESS,
    "html": HTML,
    "htm": HTML,
    "md": MARKDOWN,
    "markdown": MARKDOWN,
    "yml": YAML,
    "yaml": YAML,
    "xml": XML,
    "xsd": XML,
    "svg": XML,
    "sh": SHELL,
    "bash": SHELL,
    "zsh": SHELL,
    "py": PYTHON,
    "pyw": PYTHON,
    "java": JAVA,
    "c": C,
    "h": C,
    "cpp": CPP,
    "cc": CPP,
    "cxx": CPP,
    "hpp": CPP,
    "cs": CSHARP,
    "go": GO,
    "rs": RUST,
    "php": PHP,
    "rb": RUBY,
    "sql": SQL,
}


def is_known_tag(tag: str | None) -> bool:
    """Return True when ``tag`` belongs to the fixed tag set."""
    return tag is not None and tag in _KNOWN_TAGS


def language_for_extension(hint: str | None) -> str:
    """Map a file name, path or bare extension onto a tag.

    ``"src/app.ts"``, ``".ts"`` and ``"ts"`` all resolve the same way;
    anything unmapped is ``plaintext``.
    """
    if not hint:
        return PLAINTEXT
    basename = hint.replace("\\", "/").rsplit("/", 1)[-1].strip().lower()
    extension = basename.rsplit(".", 1)[-1]
    return EXTENSION_LANGUAGES.get(extension, PLAINTEXT)
