"""Edit-script helpers built on ``difflib``."""

from __future__ import annotations

from difflib import SequenceMatcher

from textscope.diff.mapper import map_diff_ranges
from textscope.diff.models import DiffOp, DiffRangeResult
from textscope.errors import LanguageMismatchError


def char_diff_ops(original: str, modified: str) -> list[DiffOp]:
    """Return a character-level edit script; replacements remove before they add."""
    matcher = SequenceMatcher(None, original, modified, autojunk=False)
    ops: list[DiffOp] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            ops.append(DiffOp.unchanged(original[i1:i2]))
            continue
        if tag in {"delete", "replace"}:
            ops.append(DiffOp.removed(original[i1:i2]))
        if tag in {"insert", "replace"}:
            ops.append(DiffOp.added(modified[j1:j2]))
    return ops


def compare_buffers(
    original: str,
    modified: str,
    *,
    original_language: str | None = None,
    modified_language: str | None = None,
) -> DiffRangeResult:
    """Diff two buffers and map the result; both sides must share a language."""
    if (
        original_language is not None
        and modified_language is not None
        and original_language != modified_language
    ):
        raise LanguageMismatchError(original=original_language, modified=modified_language)
    return map_diff_ranges(char_diff_ops(original, modified), original, modified)
