from __future__ import annotations

import pytest

from textscope.api import classify_language, map_diff_ranges, parse_json, query_paths
from textscope.diff import DiffOp, DiffSummary
from textscope.errors import ParseError
from textscope.language import ClassifierSettings


def test_parse_json_scenario() -> None:
    entries = parse_json('{"a":1,"b":[true,null]}')

    assert [(entry.path, entry.value) for entry in entries] == [
        ("a", 1),
        ("b[0]", True),
        ("b[1]", None),
    ]


def test_parse_json_rejects_missing_value() -> None:
    with pytest.raises(ParseError):
        parse_json('{"a":}')


def test_query_paths_scenario() -> None:
    result = query_paths('{"user":{"name":"Ann","age":3}}', "name", 10)

    assert [(entry.path, entry.value) for entry in result.items] == [("user.name", "Ann")]
    assert result.truncated is False


def test_classify_language_scenarios() -> None:
    assert classify_language("#!/usr/bin/env python3\nprint(1)") == "python"
    assert classify_language('{"x": 1}') == "json"
    assert classify_language("not real code at all", "file.ts") == "typescript"
    assert (
        classify_language("", fallback="sql", settings=ClassifierSettings(sample_chars=10))
        == "sql"
    )


def test_map_diff_ranges_scenario() -> None:
    result = map_diff_ranges(
        [
            DiffOp(kind="unchanged", count=5),
            DiffOp(kind="removed", count=3),
            DiffOp(kind="added", count=4),
        ],
        "01234abc",
        "01234wxyz",
    )

    assert [(r.start_offset, r.end_offset, r.kind) for r in result.original_ranges] == [
        (5, 8, "deletion")
    ]
    assert [(r.start_offset, r.end_offset, r.kind) for r in result.modified_ranges] == [
        (5, 9, "addition")
    ]
    assert result.summary == DiffSummary(added=4, removed=3, modified=3)
