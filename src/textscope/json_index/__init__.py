"""Strict JSON scalar indexing and path queries."""

from .models import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_RESULTS,
    NOT_JSON_MESSAGE,
    ROOT_PATH,
    Entry,
    JsonScalar,
    QueryResult,
    format_value,
)
from .parser import entry_position, iter_entries, parse_entries, validate_json
from .query import query_entries, query_paths, validate_max_results

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_MAX_RESULTS",
    "Entry",
    "JsonScalar",
    "NOT_JSON_MESSAGE",
    "QueryResult",
    "ROOT_PATH",
    "entry_position",
    "format_value",
    "iter_entries",
    "parse_entries",
    "query_entries",
    "query_paths",
    "validate_json",
    "validate_max_results",
]
