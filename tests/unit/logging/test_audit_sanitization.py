from __future__ import annotations

import json
from pathlib import Path

from textscope.logging import sanitize_arguments
from textscope.server import create_server


def _audit_entries(tmp_path: Path) -> list[dict[str, object]]:
    audit_path = tmp_path / ".textscope" / "audit.jsonl"
    return [json.loads(line) for line in audit_path.read_text(encoding="utf-8").splitlines()]


def test_buffers_are_logged_as_presence_and_length(tmp_path: Path) -> None:
    server = create_server(workdir=str(tmp_path))
    text = '{"api_key": "top-secret"}'
    server.handle_payload(
        {
            "id": "req-300",
            "method": "json.query",
            "params": {"text": text, "filter": "api_key", "max_results": 5},
        }
    )

    event = _audit_entries(tmp_path)[-1]
    metadata = event["metadata"]

    assert metadata["text_present"] is True
    assert metadata["text_length"] == len(text)
    assert metadata["filter_length"] == len("api_key")
    assert metadata["max_results"] == 5
    assert "text" not in metadata
    assert "top-secret" not in json.dumps(event, sort_keys=True)


def test_hints_are_logged_verbatim(tmp_path: Path) -> None:
    server = create_server(workdir=str(tmp_path))
    server.handle_payload(
        {
            "id": "req-301",
            "method": "language.classify",
            "params": {"sample": "x", "extension_hint": "app.ts", "prior_hint": "json"},
        }
    )

    metadata = _audit_entries(tmp_path)[-1]["metadata"]

    assert metadata["extension_hint"] == "app.ts"
    assert metadata["prior_hint"] == "json"
    assert metadata["sample_length"] == 1


def test_ops_are_logged_as_list_shape() -> None:
    sanitized = sanitize_arguments(
        {"ops": [{"kind": "added", "text": "secret"}], "original_text": "abc"}
    )

    assert sanitized == {
        "ops_type": "list",
        "ops_length": 1,
        "original_text_present": True,
        "original_text_length": 3,
    }


def test_unknown_strings_and_objects_are_reduced() -> None:
    sanitized = sanitize_arguments({"note": "token=abc", "extra": {"b": 1, "a": 2}, "n": 3})

    assert sanitized == {
        "extra_type": "dict",
        "extra_keys": ["a", "b"],
        "n": 3,
        "note_present": True,
        "note_length": len("token=abc"),
    }
