from __future__ import annotations

from pathlib import Path

import pytest

from textscope.config import CliOverrides
from textscope.security import EngineLimits, InputLimitError, enforce_input_limits
from textscope.server import create_server


def test_text_arguments_within_limit_pass() -> None:
    enforce_input_limits({"text": "x" * 10, "filter": "y" * 50}, EngineLimits(max_input_chars=10))


def test_oversized_text_argument_is_blocked() -> None:
    with pytest.raises(InputLimitError) as raised:
        enforce_input_limits({"sample": "x" * 11}, EngineLimits(max_input_chars=10))

    assert "sample" in raised.value.reason
    assert raised.value.hint


def test_ops_total_is_bounded_by_both_buffers() -> None:
    limits = EngineLimits(max_input_chars=4)
    within = [{"kind": "removed", "text": "abcd"}, {"kind": "added", "text": "efgh"}]
    beyond = within + [{"kind": "unchanged", "text": "i"}]

    enforce_input_limits({"ops": within}, limits)
    with pytest.raises(InputLimitError, match="Diff operations"):
        enforce_input_limits({"ops": beyond}, limits)


def test_server_returns_blocked_envelope(tmp_path: Path) -> None:
    server = create_server(
        workdir=str(tmp_path), cli_overrides=CliOverrides(max_input_chars=8)
    )

    response = server.handle_payload(
        {"id": "req-big", "method": "json.parse", "params": {"text": "[1,2,3,4,5]"}}
    )

    assert response["ok"] is False
    assert response["blocked"] is True
    assert response["error"]["code"] == "INPUT_BLOCKED"
    assert set(response["result"]) == {"reason", "hint"}


def test_oversized_response_is_blocked(tmp_path: Path) -> None:
    server = create_server(
        workdir=str(tmp_path),
        cli_overrides=CliOverrides(max_total_bytes_per_response=300),
    )
    text = "[" + ",".join(str(n) for n in range(50)) + "]"

    response = server.handle_payload(
        {"id": "req-out", "method": "json.parse", "params": {"text": text}}
    )

    assert response["blocked"] is True
    assert response["error"]["code"] == "RESPONSE_BLOCKED"
