"""Pygments-backed statistical language guessing."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pygments.lexer import Lexer
from pygments.lexers import guess_lexer
from pygments.token import Comment, Error, Keyword, Literal, Name
from pygments.util import ClassNotFound

from textscope.language.tags import (
    C,
    CPP,
    CSHARP,
    CSS,
    GO,
    HTML,
    JAVA,
    JAVASCRIPT,
    JSON,
    LESS,
    MARKDOWN,
    PHP,
    PYTHON,
    RUBY,
    RUST,
    SCSS,
    SHELL,
    SQL,
    TYPESCRIPT,
    XML,
    YAML,
)

LEXER_ALIAS_LANGUAGES: dict[str, str] = {
    "javascript": JAVASCRIPT,
    "js": JAVASCRIPT,
    "typescript": TYPESCRIPT,
    "ts": TYPESCRIPT,
    "html": HTML,
    "xml": XML,
    "css": CSS,
    "scss": SCSS,
    "less": LESS,
    "json": JSON,
    "java": JAVA,
    "python": PYTHON,
    "python3": PYTHON,
    "py": PYTHON,
    "cpp": CPP,
    "c++": CPP,
    "c": C,
    "csharp": CSHARP,
    "c#": CSHARP,
    "go": GO,
    "golang": GO,
    "php": PHP,
    "ruby": RUBY,
    "rb": RUBY,
    "rust": RUST,
    "rs": RUST,
    "bash": SHELL,
    "sh": SHELL,
    "shell": SHELL,
    "zsh": SHELL,
    "sql": SQL,
    "mysql": SQL,
    "postgresql": SQL,
    "sqlite3": SQL,
    "yaml": YAML,
    "markdown": MARKDOWN,
    "md": MARKDOWN,
}


# Token kinds that count as language evidence; plain names and punctuation do not.
EVIDENCE_TOKEN_TYPES = (
    Keyword,
    Literal,
    Comment,
    Name.Builtin,
    Name.Decorator,
    Name.Tag,
    Name.Attribute,
    Name.Variable,
)


@dataclass(slots=True, frozen=True)
class LexerGuess:
    """Top lexer guess with its confidence in ``[0, 1]``."""

    lexer_name: str
    language: str | None
    confidence: float


def language_for_lexer_aliases(aliases: Iterable[str]) -> str | None:
    """Map the first recognised lexer alias onto the fixed tag set."""
    for alias in aliases:
        language = LEXER_ALIAS_LANGUAGES.get(alias.lower())
        if language is not None:
            return language
    return None


def token_evidence(lexer: Lexer, sample: str) -> float:
    """Return the share of non-whitespace characters lexed as evidence tokens."""
    total = 0
    matched = 0
    for token_type, value in lexer.get_tokens(sample):
        size = len("".join(value.split()))
        if not size:
            continue
        total += size
        if token_type in Error:
            continue
        if any(token_type in kind for kind in EVIDENCE_TOKEN_TYPES):
            matched += size
    if not total:
        return 0.0
    return matched / total


def guess_with_pygments(sample: str) -> LexerGuess | None:
    """Return Pygments' best lexer for ``sample``, or None when it has no guess.

    Confidence is the lower of the lexer's ``analyse_text`` score and its
    :func:`token_evidence` over ``sample``.
    """
    try:
        lexer = guess_lexer(sample)
    except ClassNotFound:
        return None
    language = language_for_lexer_aliases(lexer.aliases)
    if language is None:
        return LexerGuess(lexer_name=lexer.name, language=None, confidence=0.0)
    score = float(lexer.analyse_text(sample))
    return LexerGuess(
        lexer_name=lexer.name,
        language=language,
        confidence=min(score, token_evidence(lexer, sample)),
    )
