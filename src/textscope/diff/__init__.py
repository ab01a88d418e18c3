"""Diff-to-position range mapping."""

from .mapper import line_decorations, map_diff_ranges, span_length, validate_diff_ops
from .models import (
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
from .ops import char_diff_ops, compare_buffers

__all__ = [
    "ADDED",
    "ADDITION",
    "ChangeRange",
    "DELETION",
    "DIFF_OP_KINDS",
    "DiffOp",
    "DiffRangeResult",
    "DiffSummary",
    "LineDecoration",
    "REMOVED",
    "UNCHANGED",
    "char_diff_ops",
    "compare_buffers",
    "line_decorations",
    "map_diff_ranges",
    "span_length",
    "validate_diff_ops",
]
