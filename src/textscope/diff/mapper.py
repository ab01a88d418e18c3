"""Map character edit scripts onto line/column change ranges."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from textscope.diff.models import (
    ADDED,
    ADDITION,
    DELETION,
    DIFF_OP_KINDS,
    REMOVED,
    UNCHANGED,
    ChangeRange,
    DiffOp,
    DiffRangeResult,
    DiffSummary,
    LineDecoration,
)
from textscope.errors import InvalidArgumentError
from textscope.positions import PositionIndex


def span_length(op: DiffOp) -> int:
    """Return the validated span length of one operation."""
    if op.kind not in DIFF_OP_KINDS:
        raise InvalidArgumentError(
            f"Diff operation kind must be one of added, removed, unchanged; got {op.kind!r}."
        )
    if op.count is not None:
        if isinstance(op.count, bool) or not isinstance(op.count, int):
            raise InvalidArgumentError("Diff operation count must be an integer.")
        if op.count < 0:
            raise InvalidArgumentError("Diff operation count must be >= 0.")
        if op.text is not None and len(op.text) != op.count:
            raise InvalidArgumentError("Diff operation count does not match its text length.")
        return op.count
    if op.text is None:
        raise InvalidArgumentError("Diff operation needs text or count.")
    return len(op.text)


def validate_diff_ops(ops: Iterable[DiffOp]) -> list[tuple[DiffOp, int]]:
    """Validate every operation up front and pair it with its span length."""
    return [(op, span_length(op)) for op in ops]


def map_diff_ranges(
    ops: Iterable[DiffOp],
    original_text: str | None = None,
    modified_text: str | None = None,
) -> DiffRangeResult:
    """Convert an edit script into deletion ranges (original) and addition ranges (modified).

    Buffers default to the texts rebuilt from the operations themselves, so
    ``count``-only operations require the matching buffer text.
    """
    checked = validate_diff_ops(ops)
    original_index = _buffer_index(checked, original_text, REMOVED, "original_text")
    modified_index = _buffer_index(checked, modified_text, ADDED, "modified_text")

    original_ranges: list[ChangeRange] = []
    modified_ranges: list[ChangeRange] = []
    original_cursor = 0
    modified_cursor = 0
    added = 0
    removed = 0
    for op, length in checked:
        if op.kind == UNCHANGED:
            original_cursor += length
            modified_cursor += length
            continue
        if op.kind == REMOVED:
            if length:
                original_ranges.append(
                    _change_range(original_index, original_cursor, length, DELETION)
                )
            original_cursor += length
            removed += length
            continue
        if length:
            modified_ranges.append(_change_range(modified_index, modified_cursor, length, ADDITION))
        modified_cursor += length
        added += length

    return DiffRangeResult(
        original_ranges=tuple(original_ranges),
        modified_ranges=tuple(modified_ranges),
        summary=DiffSummary(added=added, removed=removed, modified=min(added, removed)),
    )


def line_decorations(ranges: Sequence[ChangeRange]) -> list[LineDecoration]:
    """Derive whole-line decorations from character ranges.

    A range ending at column 1 of a later line stops at the line before it.
    """
    decorations: list[LineDecoration] = []
    for item in ranges:
        end_line = item.end_line
        if item.end_column == 1 and end_line > item.start_line:
            end_line -= 1
        decorations.append(
            LineDecoration(start_line=item.start_line, end_line=end_line, kind=item.kind)
        )
    return decorations


def _buffer_index(
    checked: list[tuple[DiffOp, int]],
    text: str | None,
    exclusive_kind: str,
    argument: str,
) -> PositionIndex:
    relevant = [(op, length) for op, length in checked if op.kind in {UNCHANGED, exclusive_kind}]
    if text is not None:
        needed = sum(length for _, length in relevant)
        if needed > len(text):
            raise InvalidArgumentError(
                f"Diff operations span {needed} characters but {argument} has {len(text)}."
            )
        return PositionIndex.from_text(text)
    parts: list[str] = []
    for op, _ in relevant:
        if op.text is None:
            raise InvalidArgumentError(f"Count-only diff operations require {argument}.")
        parts.append(op.text)
    return PositionIndex.from_text("".join(parts))


def _change_range(index: PositionIndex, start: int, length: int, kind: str) -> ChangeRange:
    start_line, start_column = index.position_at(start)
    end_line, end_column = index.position_at(start + length)
    return ChangeRange(
        start_line=start_line,
        start_column=start_column,
        end_line=end_line,
        end_column=end_column,
        kind=kind,
        start_offset=start,
        end_offset=start + length,
    )
