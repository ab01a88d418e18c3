from __future__ import annotations

import pytest

from textscope.diff import (
    ADDITION,
    DELETION,
    ChangeRange,
    DiffOp,
    DiffSummary,
    LineDecoration,
    line_decorations,
    map_diff_ranges,
)
from textscope.errors import InvalidArgumentError


def test_removed_then_added_after_common_prefix() -> None:
    ops = [DiffOp.unchanged("hello"), DiffOp.removed("abc"), DiffOp.added("wxyz")]

    result = map_diff_ranges(ops)

    assert result.original_ranges == (
        ChangeRange(
            start_line=1,
            start_column=6,
            end_line=1,
            end_column=9,
            kind=DELETION,
            start_offset=5,
            end_offset=8,
        ),
    )
    assert result.modified_ranges == (
        ChangeRange(
            start_line=1,
            start_column=6,
            end_line=1,
            end_column=10,
            kind=ADDITION,
            start_offset=5,
            end_offset=9,
        ),
    )
    assert result.summary == DiffSummary(added=4, removed=3, modified=3)


def test_count_only_ops_use_supplied_buffers() -> None:
    ops = [
        DiffOp(kind="unchanged", count=5),
        DiffOp(kind="removed", count=3),
        DiffOp(kind="added", count=4),
    ]

    result = map_diff_ranges(ops, original_text="hello---", modified_text="hello++++")

    assert [(item.start_offset, item.end_offset) for item in result.original_ranges] == [(5, 8)]
    assert [(item.start_offset, item.end_offset) for item in result.modified_ranges] == [(5, 9)]
    assert result.summary == DiffSummary(added=4, removed=3, modified=3)


def test_count_only_ops_without_buffers_are_rejected() -> None:
    with pytest.raises(InvalidArgumentError, match="original_text"):
        map_diff_ranges([DiffOp(kind="unchanged", count=2)])


def test_line_breaks_advance_lines_and_reset_columns() -> None:
    ops = [
        DiffOp.unchanged("one\n"),
        DiffOp.removed("two"),
        DiffOp.added("TWO"),
        DiffOp.unchanged("\nthree"),
    ]

    result = map_diff_ranges(ops, "one\ntwo\nthree", "one\nTWO\nthree")

    deletion = result.original_ranges[0]
    addition = result.modified_ranges[0]
    assert (deletion.start_line, deletion.start_column) == (2, 1)
    assert (deletion.end_line, deletion.end_column) == (2, 4)
    assert (addition.start_line, addition.start_column) == (2, 1)
    assert (addition.end_line, addition.end_column) == (2, 4)


def test_range_spanning_lines_and_whole_line_decorations() -> None:
    ops = [DiffOp.unchanged("a\n"), DiffOp.removed("x\ny\n"), DiffOp.unchanged("z")]

    result = map_diff_ranges(ops)
    deletion = result.original_ranges[0]

    assert (deletion.start_line, deletion.start_column) == (2, 1)
    assert (deletion.end_line, deletion.end_column) == (4, 1)
    assert deletion.length == 4
    assert line_decorations(result.original_ranges) == [
        LineDecoration(start_line=2, end_line=3, kind=DELETION)
    ]


def test_single_line_decoration_keeps_its_line() -> None:
    result = map_diff_ranges([DiffOp.added("\n")])

    assert line_decorations(result.modified_ranges) == [
        LineDecoration(start_line=1, end_line=1, kind=ADDITION)
    ]


def test_cursors_advance_independently() -> None:
    ops = [
        DiffOp.removed("aa"),
        DiffOp.added("b"),
        DiffOp.unchanged("cc"),
        DiffOp.added("ddd"),
        DiffOp.removed("e"),
    ]

    result = map_diff_ranges(ops)

    assert [(r.start_offset, r.end_offset) for r in result.original_ranges] == [(0, 2), (4, 5)]
    assert [(r.start_offset, r.end_offset) for r in result.modified_ranges] == [(0, 1), (3, 6)]
    assert result.summary == DiffSummary(added=4, removed=3, modified=3)


def test_zero_length_spans_emit_nothing() -> None:
    result = map_diff_ranges([DiffOp.added(""), DiffOp.removed(""), DiffOp.unchanged("x")])

    assert result.original_ranges == ()
    assert result.modified_ranges == ()
    assert result.summary == DiffSummary(added=0, removed=0, modified=0)


def test_empty_script_yields_empty_result() -> None:
    result = map_diff_ranges([], "", "")

    assert result.original_ranges == ()
    assert result.modified_ranges == ()


def test_summary_lengths_match_op_lengths() -> None:
    ops = [
        DiffOp.unchanged("ab\n"),
        DiffOp.removed("cd"),
        DiffOp.added("x\r\ny"),
        DiffOp.unchanged("e"),
        DiffOp.added("\n\n"),
        DiffOp.removed("fgh"),
    ]

    result = map_diff_ranges(ops)

    added = sum(len(op.text or "") for op in ops if op.kind == "added")
    removed = sum(len(op.text or "") for op in ops if op.kind == "removed")
    assert sum(item.length for item in result.modified_ranges) == added
    assert sum(item.length for item in result.original_ranges) == removed


@pytest.mark.parametrize(
    ("op", "message"),
    [
        (DiffOp(kind="moved", text="x"), "kind"),
        (DiffOp(kind="added", count=-1), ">= 0"),
        (DiffOp(kind="added"), "text or count"),
        (DiffOp(kind="added", text="abc", count=2), "does not match"),
        (DiffOp(kind="added", count=True), "integer"),
    ],
)
def test_malformed_ops_are_rejected(op: DiffOp, message: str) -> None:
    with pytest.raises(InvalidArgumentError, match=message):
        map_diff_ranges([op], "", "abc")


def test_ops_longer_than_buffer_are_rejected() -> None:
    with pytest.raises(InvalidArgumentError, match="span 10 characters"):
        map_diff_ranges([DiffOp(kind="unchanged", count=10)], "abc", "abcdefghij")
