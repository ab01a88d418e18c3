"""Strict offset-tracking JSON parser that indexes every scalar leaf."""

from __future__ import annotations

import math
import re
from collections.abc import Iterator

from textscope.errors import InvalidArgumentError, ParseError
from textscope.json_index.models import DEFAULT_MAX_DEPTH, ROOT_PATH, Entry, JsonScalar
from textscope.positions import offset_to_position

_WHITESPACE = frozenset(" \t\n\r")
_DIGITS = frozenset("0123456789")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_STRING_CHUNK_RE = re.compile(r'[^"\\\x00-\x1f]*')
_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]+)?")
_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
_LITERALS: tuple[tuple[str, JsonScalar], ...] = (
    ("true", True),
    ("false", False),
    ("null", None),
)


class _Scanner:
    """Single-pass recursive-descent scanner over one document."""

    def __init__(self, text: str, max_depth: int) -> None:
        self._text = text
        self._length = len(text)
        self._max_depth = max_depth
        self._pos = 0

    def entries(self) -> Iterator[Entry]:
        self._skip_ws()
        yield from self._value("", depth=0)
        self._skip_ws()
        if self._pos < self._length:
            raise ParseError(self._pos, "Unexpected trailing content")

    def _peek(self) -> str:
        if self._pos >= self._length:
            return ""
        return self._text[self._pos]

    def _skip_ws(self) -> None:
        text = self._text
        while self._pos < self._length and text[self._pos] in _WHITESPACE:
            self._pos += 1

    def _value(self, path: str, depth: int) -> Iterator[Entry]:
        # Containers are handled inline so each nesting level costs one frame.
        self._skip_ws()
        char = self._peek()
        if not char:
            raise ParseError(self._pos, "Unexpected end of input")

        if char == "{":
            self._enter(depth)
            self._pos += 1
            self._skip_ws()
            if self._peek() == "}":
                self._pos += 1
                return
            while True:
                self._skip_ws()
                if self._peek() != '"':
                    raise ParseError(self._pos, "Expected string key")
                key = self._scan_string()
                self._skip_ws()
                if self._peek() != ":":
                    raise ParseError(self._pos, "Expected ':' after key")
                self._pos += 1
                yield from self._value(f"{path}.{key}" if path else key, depth + 1)
                self._skip_ws()
                separator = self._peek()
                if separator == ",":
                    self._pos += 1
                    continue
                if separator == "}":
                    self._pos += 1
                    return
                raise ParseError(self._pos, "Expected ',' or '}'")

        if char == "[":
            self._enter(depth)
            self._pos += 1
            self._skip_ws()
            if self._peek() == "]":
                self._pos += 1
                return
            index = 0
            while True:
                yield from self._value(f"{path}[{index}]", depth + 1)
                index += 1
                self._skip_ws()
                separator = self._peek()
                if separator == ",":
                    self._pos += 1
                    continue
                if separator == "]":
                    self._pos += 1
                    return
                raise ParseError(self._pos, "Expected ',' or ']'")

        start = self._pos
        value: JsonScalar
        if char == '"':
            value = self._scan_string()
        elif char == "-" or char in _DIGITS:
            value = self._scan_number()
        else:
            value = self._scan_literal()
        yield Entry(path=path or ROOT_PATH, value=value, start=start, end=self._pos)

    def _enter(self, depth: int) -> None:
        if depth >= self._max_depth:
            raise ParseError(
                self._pos, f"Maximum nesting depth of {self._max_depth} exceeded"
            )

    def _scan_string(self) -> str:
        text = self._text
        start = self._pos
        pos = start + 1
        chunks: list[str] = []
        while True:
            match = _STRING_CHUNK_RE.match(text, pos)
            assert match is not None
            chunks.append(match.group(0))
            pos = match.end()
            if pos >= self._length:
                raise ParseError(start, "Unterminated string")
            char = text[pos]
            if char == '"':
                self._pos = pos + 1
                return "".join(chunks)
            if char != "\\":
                raise ParseError(pos, "Unescaped control character in string")
            pos += 1
            if pos >= self._length:
                raise ParseError(start, "Unterminated string")
            escape = text[pos]
            if escape == "u":
                code = self._hex4(pos + 1)
                pos += 5
                if 0xD800 <= code <= 0xDBFF and text.startswith("\\u", pos):
                    low = self._hex4(pos + 2)
                    if 0xDC00 <= low <= 0xDFFF:
                        code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
                        pos += 6
                chunks.append(chr(code))
                continue
            decoded = _ESCAPES.get(escape)
            if decoded is None:
                raise ParseError(pos - 1, f"Invalid escape '\\{escape}'")
            chunks.append(decoded)
            pos += 1

    def _hex4(self, pos: int) -> int:
        digits = self._text[pos : pos + 4]
        if len(digits) != 4 or any(char not in _HEX_DIGITS for char in digits):
            raise ParseError(pos - 2, "Invalid unicode escape")
        return int(digits, 16)

    def _scan_number(self) -> int | float:
        start = self._pos
        match = _NUMBER_RE.match(self._text, start)
        if match is None:
            raise ParseError(start, "Invalid number")
        end = match.end()
        following = self._text[end] if end < self._length else ""
        if following in _DIGITS:
            raise ParseError(start, "Leading zeros are not allowed")
        if following == ".":
            raise ParseError(end + 1, "Expected digit after decimal point")
        if following in {"e", "E"}:
            raise ParseError(end + 1, "Expected digit in exponent")
        raw = match.group(0)
        self._pos = end
        value = float(raw)
        if not math.isfinite(value):
            raise ParseError(start, "Number out of range")
        if match.group(1) is None and match.group(2) is None:
            return int(raw)
        return value

    def _scan_literal(self) -> JsonScalar:
        for word, value in _LITERALS:
            if self._text.startswith(word, self._pos):
                self._pos += len(word)
                return value
        raise ParseError(self._pos, "Invalid value")


def iter_entries(text: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Iterator[Entry]:
    """Lazily yield scalar entries in source order.

    Errors surface while iterating; callers that need all-or-nothing
    behavior should use ``parse_entries``.
    """
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise InvalidArgumentError("max_depth must be a positive integer.")
    return _Scanner(text, max_depth).entries()


def parse_entries(text: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> list[Entry]:
    """Parse strict JSON and return every scalar leaf with its source offsets."""
    return list(iter_entries(text, max_depth=max_depth))


def validate_json(text: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> bool:
    """Return True when ``text`` is strictly valid JSON."""
    try:
        for _ in iter_entries(text, max_depth=max_depth):
            pass
    except ParseError:
        return False
    return True


def entry_position(text: str, entry: Entry) -> tuple[int, int]:
    """Return the 1-based ``(line, column)`` where an entry's token starts."""
    return offset_to_position(text, entry.start)
