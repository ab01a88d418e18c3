"""Typed models for diff operations and change ranges."""

from __future__ import annotations

from dataclasses import dataclass

ADDED = "added"
REMOVED = "removed"
UNCHANGED = "unchanged"
DIFF_OP_KINDS = (ADDED, REMOVED, UNCHANGED)

ADDITION = "addition"
DELETION = "deletion"


@dataclass(slots=True, frozen=True)
class DiffOp:
    """One edit-script span; its length is ``count`` if given, else ``len(text)``."""

    kind: str
    text: str | None = None
    count: int | None = None

    @classmethod
    def added(cls, text: str) -> DiffOp:
        return cls(kind=ADDED, text=text)

    @classmethod
    def removed(cls, text: str) -> DiffOp:
        return cls(kind=REMOVED, text=text)

    @classmethod
    def unchanged(cls, text: str) -> DiffOp:
        return cls(kind=UNCHANGED, text=text)


@dataclass(slots=True, frozen=True)
class ChangeRange:
    """Changed span in one buffer, 1-based line/column plus raw offsets."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int
    kind: str
    start_offset: int
    end_offset: int

    @property
    def length(self) -> int:
        return self.end_offset - self.start_offset


@dataclass(slots=True, frozen=True)
class LineDecoration:
    """Whole-line highlight derived from a change range."""

    start_line: int
    end_line: int
    kind: str


@dataclass(slots=True, frozen=True)
class DiffSummary:
    """Aggregate change counts; ``modified`` is ``min(added, removed)``."""

    added: int
    removed: int
    modified: int


@dataclass(slots=True, frozen=True)
class DiffRangeResult:
    """Change ranges for both buffers plus summary counts."""

    original_ranges: tuple[ChangeRange, ...]
    modified_ranges: tuple[ChangeRange, ...]
    summary: DiffSummary

