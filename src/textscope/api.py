"""Pure entry points exposed to host applications."""

from __future__ import annotations

from collections.abc import Iterable

from textscope.diff import DiffOp, DiffRangeResult
from textscope.diff import map_diff_ranges as _map_diff_ranges
from textscope.json_index import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_RESULTS,
    Entry,
    QueryResult,
    parse_entries,
)
from textscope.json_index import query_paths as _query_paths
from textscope.language import PLAINTEXT, ClassifierSettings
from textscope.language import classify_language as _classify_language


def parse_json(text: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> list[Entry]:
    """Return every scalar leaf of a strict JSON document, in source order."""
    return parse_entries(text, max_depth=max_depth)


def query_paths(
    text: str,
    path_filter: str | None,
    max_results: int = DEFAULT_MAX_RESULTS,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> QueryResult:
    """Return up to ``max_results`` entries whose path contains ``path_filter``."""
    return _query_paths(text, path_filter, max_results, max_depth=max_depth)


def classify_language(
    sample: str | None,
    extension_hint: str | None = None,
    prior_hint: str | None = None,
    fallback: str | None = PLAINTEXT,
    *,
    settings: ClassifierSettings | None = None,
) -> str:
    """Return one content-type tag for ``sample``."""
    return _classify_language(sample, extension_hint, prior_hint, fallback, settings=settings)


def map_diff_ranges(
    ops: Iterable[DiffOp],
    original_text: str | None = None,
    modified_text: str | None = None,
) -> DiffRangeResult:
    """Return change ranges for both buffers of an edit script."""
    return _map_diff_ranges(ops, original_text, modified_text)
