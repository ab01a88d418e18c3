"""Offset to line/column conversion over in-memory buffers."""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass

from textscope.errors import InvalidArgumentError

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(slots=True, frozen=True)
class PositionIndex:
    """Line-start table for one buffer.

    Line breaks are ``\\n``, ``\\r\\n`` and a lone ``\\r``. Lines and columns are
    1-based; a column counts characters from the start of its line.
    """

    length: int
    line_starts: tuple[int, ...]

    @classmethod
    def from_text(cls, text: str) -> PositionIndex:
        """Build the line-start table for ``text``."""
        starts = [0]
        starts.extend(match.end() for match in _LINE_BREAK_RE.finditer(text))
        return cls(length=len(text), line_starts=tuple(starts))

    @property
    def line_count(self) -> int:
        """Return the number of lines, counting a trailing empty line."""
        return len(self.line_starts)

    def position_at(self, offset: int) -> tuple[int, int]:
        """Return the 1-based ``(line, column)`` for a character offset.

        Offsets past the end clamp to the end of the buffer.
        """
        if offset < 0:
            raise InvalidArgumentError(f"Offset must be >= 0, got {offset}.")
        clamped = min(offset, self.length)
        line_index = bisect_right(self.line_starts, clamped) - 1
        return line_index + 1, clamped - self.line_starts[line_index] + 1


def offset_to_position(text: str, offset: int) -> tuple[int, int]:
    """Convert one offset without keeping an index around."""
    return PositionIndex.from_text(text).position_at(offset)
