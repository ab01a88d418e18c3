"""Bounded substring path queries over indexed JSON entries."""

from __future__ import annotations

from collections.abc import Iterable

from textscope.errors import InvalidArgumentError
from textscope.json_index.models import DEFAULT_MAX_DEPTH, DEFAULT_MAX_RESULTS, Entry, QueryResult
from textscope.json_index.parser import iter_entries

EMPTY_RESULT = QueryResult(items=(), truncated=False)


def query_entries(
    entries: Iterable[Entry],
    path_filter: str | None,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> QueryResult:
    """Return entries whose path contains ``path_filter``, capped at ``max_results``.

    The iterable is always drained so that a lazily parsed document is fully
    validated before any result is returned.
    """
    validate_max_results(max_results)
    if not path_filter:
        return EMPTY_RESULT

    items: list[Entry] = []
    truncated = False
    for entry in entries:
        if path_filter not in entry.path:
            continue
        if len(items) < max_results:
            items.append(entry)
        else:
            truncated = True
    return QueryResult(items=tuple(items), truncated=truncated)


def query_paths(
    text: str,
    path_filter: str | None,
    max_results: int = DEFAULT_MAX_RESULTS,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> QueryResult:
    """Parse ``text`` and run a bounded path query over its scalar entries."""
    validate_max_results(max_results)
    if not path_filter:
        return EMPTY_RESULT
    return query_entries(iter_entries(text, max_depth=max_depth), path_filter, max_results)


def validate_max_results(max_results: object) -> None:
    """Reject anything but a positive integer result cap."""
    if isinstance(max_results, bool) or not isinstance(max_results, int) or max_results < 1:
        raise InvalidArgumentError("max_results must be a positive integer.")
