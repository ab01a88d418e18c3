"""Ordered content detectors used by the language classifier.

Each detector exposes ``name`` and ``detect(path, text)``; ``detect`` returns a
tag from ``textscope.language.tags`` or None when its signal is absent.
Detectors are stateless and only read their inputs.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from textscope.json_index import DEFAULT_MAX_DEPTH, validate_json
from textscope.language.statistical import LexerGuess, guess_with_pygments
from textscope.language.tags import (
    CSS,
    HTML,
    JAVA,
    JAVASCRIPT,
    JSON,
    LESS,
    MARKDOWN,
    PHP,
    PLAINTEXT,
    PYTHON,
    SCSS,
    SHELL,
    SQL,
    TYPESCRIPT,
    XML,
    YAML,
    language_for_extension,
)

_SHELL_NAMES = frozenset({"sh", "bash", "zsh", "ksh", "dash", "ash"})
_JS_INTERPRETERS = ("node", "deno")

_JSON_KEY_RE = re.compile(r'"\s*:|:\s*"')

_HTML_RE = re.compile(
    r"<!doctype\s+html\b"
    r"|<(?:html|head|body|div|span|script|style|meta|p|ul|ol|li|table|tr|td|form|input"
    r"|button|h[1-6]|section|nav|header|footer|main|article|img|br|iframe)\b[^<>]*>"
    r"|<a\s+href\s*=",
    re.IGNORECASE,
)
_XML_RE = re.compile(r"<\?xml\b|\bxmlns(?::[A-Za-z_][\w.-]*)?\s*=")

# Lines that open a code statement; mapping-like heuristics back off when present.
_CODE_LINE_RE = re.compile(
    r"^\s*(?:def|class|import|from|return|function|const|let|var|public|private|package)\s",
    re.MULTILINE,
)
_YAML_DOC_START_RE = re.compile(r"^---\s*$")
_YAML_KEY_RE = re.compile(r"^\s*[A-Za-z_][\w.-]*\s*:(?:\s+\S.*)?$")
_YAML_PARENT_KEY_RE = re.compile(r"^\s*[A-Za-z_][\w.-]*\s*:\s*$")
_YAML_LIST_ITEM_RE = re.compile(r"^\s*-\s+\S")
_YAML_LIST_KEY_RE = re.compile(r"^\s*-\s+[A-Za-z_][\w.-]*\s*:(?:\s|$)")

_MD_FENCE_RE = re.compile(r"^\s{0,3}(?:```|~~~)", re.MULTILINE)
_MD_LINK_RE = re.compile(
    r"\[[^\]\n]+\]\((?:(?:https?://|mailto:|#|\.{0,2}/)[^)\s]*"
    r"|[^)\s]+\.(?:md|markdown|html?|png|jpe?g|gif|svg|pdf))(?:\s+\"[^\"\n]*\")?\)"
)
_MD_HEADING_RE = re.compile(r"^#{1,6}\s+\S")
_MD_BULLET_RE = re.compile(r"^(?: {0,3}(?:[-+]|\d+\.)|\*)\s+\S", re.MULTILINE)
_MD_EMPHASIS_RE = re.compile(r"(?<![\w*])\*\*[^\s*][^*\n]*?[^\s*]\*\*(?![\w*])")
_MD_QUOTE_RE = re.compile(r"^>\s", re.MULTILINE)
_CODE_PUNCTUATION_RE = re.compile(r"[;{}]\s*$|\)\s*:?\s*$| = ", re.MULTILINE)

_SQL_STATEMENT_RE = re.compile(
    r"(?:^|;)\s*(?:SELECT|INSERT|UPDATE|DELETE|CREATE|ALTER|DROP|WITH)\s",
    re.IGNORECASE | re.MULTILINE,
)
_SQL_FROM_RE = re.compile(r"\bFROM\b", re.IGNORECASE)
_NOT_SQL_FROM_LINE_RE = re.compile(
    r"^\s*(?:from\s+\S+\s+import\b|import\b|export\b)", re.IGNORECASE
)

_SCSS_RE = re.compile(r"^\s*\$[A-Za-z_][\w-]*\s*:|@mixin\b|@include\b", re.MULTILINE)
_LESS_RE = re.compile(r"^\s*@[A-Za-z_][\w-]*\s*:", re.MULTILINE)
_CSS_RULE_RE = re.compile(
    r"^\s*(?!(?:interface|class|enum|type|function|struct|export|const|let|var"
    r"|public|private|protected|if|for|while|switch)\b)"
    r"[A-Za-z.#*:\[@][^{};=()<'\"\n]*\{\s*[A-Za-z-]+\s*:\s*[^;{}]+;",
    re.MULTILINE,
)

_JAVA_RE = re.compile(
    r"^\s*package\s+[\w.]+\s*;"
    r"|^\s*import\s+(?:static\s+)?javax?\.[\w.*]+\s*;"
    r"|\bpublic\s+(?:(?:final|abstract|static|sealed)\s+)*(?:class|interface|enum)\s+[A-Za-z_]\w*"
    r"|@Override\b",
    re.MULTILINE,
)

_PHP_VARIABLE_RE = re.compile(r"\$[A-Za-z_]\w*\b")
_PHP_MEMBER_RE = re.compile(r"->|::")

_TS_PATTERNS = (
    re.compile(
        r"^\s*(?:export\s+)?(?:declare\s+)?interface\s+[A-Za-z_$][\w$]*\s*(?:<[^>\n]*>)?"
        r"\s*(?:extends\b|\{)",
        re.MULTILINE,
    ),
    re.compile(
        r"^\s*(?:export\s+)?(?:declare\s+)?(?:const\s+)?enum\s+[A-Za-z_$][\w$]*\s*\{",
        re.MULTILINE,
    ),
    re.compile(
        r"^\s*(?:export\s+)?type\s+[A-Za-z_$][\w$]*\s*(?:<[^>\n]*>)?\s*=", re.MULTILINE
    ),
    re.compile(
        r"^\s*import\s+[A-Z][\w$]*\s*(?:,\s*\{[^}]*\}\s*)?from\s+['\"]", re.MULTILINE
    ),
    re.compile(r"^\s*export\s+default\b", re.MULTILINE),
)
_JS_PATTERNS = (
    re.compile(
        r"^\s*(?:export\s+)?(?:const|let|var)\s+(?:[A-Za-z_$][\w$]*\s*=|[\[{])", re.MULTILINE
    ),
    re.compile(r"^\s*(?:export\s+)?(?:async\s+)?function\b\s*\*?\s*[\w$]*\s*\(", re.MULTILINE),
    re.compile(r"(?:\([^()\n]*\)|\b[A-Za-z_$][\w$]*)\s*=>"),
)


class ExtensionDetector:
    """Map the file name hint through the fixed extension table."""

    name = "extension"

    def detect(self, path: str | None, text: str) -> str | None:
        _ = text
        language = language_for_extension(path)
        if language == PLAINTEXT:
            return None
        return language


class ShebangDetector:
    """Read the interpreter named on a ``#!`` first line."""

    name = "shebang"

    def detect(self, path: str | None, text: str) -> str | None:
        _ = path
        first_line = text.split("\n", 1)[0].rstrip("\r")
        if not first_line.startswith("#!"):
            return None
        program = shebang_interpreter(first_line)
        if not program:
            return None
        if program.startswith(_JS_INTERPRETERS):
            return JAVASCRIPT
        if program.startswith("python"):
            return PYTHON
        if program in _SHELL_NAMES:
            return SHELL
        if program.startswith("php"):
            return PHP
        return None


def shebang_interpreter(line: str) -> str:
    """Return the interpreter basename from a shebang line, skipping ``env``."""
    parts = line[2:].split()
    if not parts:
        return ""
    program = parts[0].rsplit("/", 1)[-1]
    if program != "env":
        return program
    for part in parts[1:]:
        if part.startswith("-") or "=" in part:
            continue
        return part.rsplit("/", 1)[-1]
    return ""


@dataclass(slots=True, frozen=True)
class JsonDetector:
    """Accept samples that look like JSON objects and strictly parse."""

    max_depth: int = DEFAULT_MAX_DEPTH
    name: str = "json"

    def detect(self, path: str | None, text: str) -> str | None:
        _ = path
        trimmed = text.strip()
        if not trimmed.startswith(("{", "[")):
            return None
        if _JSON_KEY_RE.search(trimmed) is None:
            return None
        if not validate_json(trimmed, max_depth=self.max_depth):
            return None
        return JSON


class MarkupDetector:
    """Separate HTML documents from generic XML."""

    name = "markup"

    def detect(self, path: str | None, text: str) -> str | None:
        _ = path
        if _HTML_RE.search(text) is not None:
            return HTML
        if _XML_RE.search(text) is not None:
            return XML
        return None


class YamlDetector:
    """Recognize YAML mappings, block lists and documents without brace syntax."""

    name = "yaml"

    def detect(self, path: str | None, text: str) -> str | None:
        _ = path
        if "{" in text or "}" in text:
            return None
        if _CODE_LINE_RE.search(text) is not None:
            return None
        lines = [line for line in text.splitlines() if line.strip()]
        if not lines:
            return None
        if _YAML_DOC_START_RE.match(lines[0]) is not None:
            return YAML
        run = 0
        list_run = 0
        for index, line in enumerate(lines):
            if _YAML_LIST_KEY_RE.match(line) is not None:
                return YAML
            if (
                _YAML_PARENT_KEY_RE.match(line) is not None
                and index + 1 < len(lines)
                and _YAML_LIST_ITEM_RE.match(lines[index + 1]) is not None
            ):
                return YAML
            if line.lstrip().startswith("#"):
                continue
            if _YAML_LIST_ITEM_RE.match(line) is not None:
                list_run += 1
                if list_run >= 2:
                    return YAML
            else:
                list_run = 0
            if _YAML_KEY_RE.match(line) is not None:
                run += 1
                if run >= 2:
                    return YAML
            else:
                run = 0
        return None


class MarkdownDetector:
    """Recognize Markdown structure that source-code comments do not produce."""

    name = "markdown"

    def detect(self, path: str | None, text: str) -> str | None:
        _ = path
        if _MD_FENCE_RE.search(text) is not None or _MD_LINK_RE.search(text) is not None:
            return MARKDOWN
        first_line = next((line for line in text.splitlines() if line.strip()), "")
        leading_heading = _MD_HEADING_RE.match(first_line) is not None
        bullet_count = len(_MD_BULLET_RE.findall(text))
        signals = (
            leading_heading,
            bullet_count > 0,
            _MD_EMPHASIS_RE.search(text) is not None,
            _MD_QUOTE_RE.search(text) is not None,
        )
        if sum(signals) >= 2:
            return MARKDOWN
        looks_like_code = (
            _CODE_PUNCTUATION_RE.search(text) is not None
            or _CODE_LINE_RE.search(text) is not None
        )
        if looks_like_code:
            return None
        if leading_heading or bullet_count >= 2:
            return MARKDOWN
        return None


class SqlDetector:
    """Find a statement keyword followed later by ``FROM``."""

    name = "sql"

    def detect(self, path: str | None, text: str) -> str | None:
        _ = path
        for statement in _SQL_STATEMENT_RE.finditer(text):
            if _line_at(text, statement.end() - 1).rstrip().endswith(":"):
                continue
            for from_match in _SQL_FROM_RE.finditer(text, statement.end()):
                if _NOT_SQL_FROM_LINE_RE.match(_line_at(text, from_match.start())) is None:
                    return SQL
        return None


def _line_at(text: str, index: int) -> str:
    start = text.rfind("\n", 0, index) + 1
    end = text.find("\n", index)
    if end == -1:
        return text[start:]
    return text[start:end]


class StyleSheetDetector:
    """Tell SCSS and LESS variables apart from plain CSS rule blocks."""

    name = "stylesheet"

    def detect(self, path: str | None, text: str) -> str | None:
        _ = path
        if _SCSS_RE.search(text) is not None:
            return SCSS
        if _LESS_RE.search(text) is not None:
            return LESS
        if _CSS_RULE_RE.search(text) is not None:
            return CSS
        return None


class JavaDetector:
    name = "java"

    def detect(self, path: str | None, text: str) -> str | None:
        _ = path
        if _JAVA_RE.search(text) is not None:
            return JAVA
        return None


class PhpDetector:
    name = "php"

    def detect(self, path: str | None, text: str) -> str | None:
        _ = path
        if text.lstrip().startswith("<?php"):
            return PHP
        if _PHP_VARIABLE_RE.search(text) is not None and _PHP_MEMBER_RE.search(text) is not None:
            return PHP
        return None


class TypeScriptDetector:
    name = "typescript"

    def detect(self, path: str | None, text: str) -> str | None:
        _ = path
        if any(pattern.search(text) is not None for pattern in _TS_PATTERNS):
            return TYPESCRIPT
        return None


class JavaScriptDetector:
    name = "javascript"

    def detect(self, path: str | None, text: str) -> str | None:
        _ = path
        if any(pattern.search(text) is not None for pattern in _JS_PATTERNS):
            return JAVASCRIPT
        return None


@dataclass(slots=True, frozen=True)
class StatisticalDetector:
    """Accept a general-purpose lexer guess only when it is confident enough."""

    min_confidence: float
    guesser: Callable[[str], LexerGuess | None] = guess_with_pygments
    name: str = "statistical"

    def detect(self, path: str | None, text: str) -> str | None:
        _ = path
        if not text.strip():
            return None
        guess = self.guesser(text)
        if guess is None or guess.language is None:
            return None
        if guess.confidence < self.min_confidence:
            return None
        return guess.language
