from __future__ import annotations

import json
from pathlib import Path

from textscope.logging import AuditEvent, JsonlAuditLogger, utc_timestamp
from textscope.server import create_server


def test_one_event_per_request_with_stable_fields(tmp_path: Path) -> None:
    server = create_server(workdir=str(tmp_path))
    server.handle_payload({"id": "req-a", "method": "engine.status", "params": {}})
    server.handle_payload({"id": "req-b", "method": "json.parse", "params": {"text": "{"}})
    server.handle_json_line("not json")

    lines = server.audit_log_path.read_text(encoding="utf-8").splitlines()
    events = [json.loads(line) for line in lines]

    assert len(events) == 3
    for event in events:
        assert set(event) == {
            "timestamp",
            "request_id",
            "tool",
            "ok",
            "blocked",
            "error_code",
            "metadata",
        }
    assert events[0]["tool"] == "engine.status"
    assert events[0]["ok"] is True
    assert events[1]["error_code"] == "PARSE_ERROR"
    assert events[2]["tool"] == "invalid_json"
    assert events[2]["error_code"] == "INVALID_JSON"


def test_logger_appends_json_lines(tmp_path: Path) -> None:
    logger = JsonlAuditLogger(tmp_path / "nested" / "audit.jsonl")
    event = AuditEvent(
        timestamp=utc_timestamp(),
        request_id="req-1",
        tool="json.parse",
        ok=True,
        blocked=False,
        error_code=None,
        metadata={"text_length": 2},
    )

    logger.append(event)
    logger.append(event)

    lines = logger.path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert json.loads(lines[0])["metadata"] == {"text_length": 2}


def test_utc_timestamp_uses_z_suffix() -> None:
    assert utc_timestamp().endswith("Z")
