"""JSON-lines stdio server exposing the text engines."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from textscope.config import CliOverrides, ServerConfig, load_effective_config
from textscope.errors import InvalidArgumentError, LanguageMismatchError, ParseError
from textscope.json_index import NOT_JSON_MESSAGE
from textscope.language import build_detector_registry
from textscope.logging import AuditEvent, JsonlAuditLogger, sanitize_arguments, utc_timestamp
from textscope.security import InputLimitError, enforce_input_limits
from textscope.tools import ToolDispatchError, ToolRegistry, register_builtin_tools


@dataclass(slots=True, frozen=True)
class Request:
    """Normalized incoming request."""

    request_id: str
    method: str
    params: dict[str, object]


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for server startup configuration."""
    parser = argparse.ArgumentParser(prog="textscope")
    parser.add_argument("--workdir", required=False, default=".")
    parser.add_argument("--data-dir", required=False, default=None)
    parser.add_argument("--max-results", type=int, required=False, default=None)
    parser.add_argument("--max-input-chars", type=int, required=False, default=None)
    parser.add_argument("--max-total-bytes-per-response", type=int, required=False, default=None)
    parser.add_argument("--sample-chars", type=int, required=False, default=None)
    parser.add_argument(
        "--statistical-enabled", choices=("true", "false"), required=False, default=None
    )
    return parser


class StdioServer:
    """Sequential request router; one JSON object in, one JSON object out."""

    def __init__(self, config: ServerConfig) -> None:
        self._limits = config.limits
        self._audit_logger = JsonlAuditLogger(path=config.data_dir / "audit.jsonl")
        self._registry = ToolRegistry()
        register_builtin_tools(
            self._registry,
            config=config,
            detectors=build_detector_registry(
                config.classifier.settings(max_depth=config.parser.max_depth)
            ),
        )
        self._fallback_request_counter = 0

    @property
    def audit_log_path(self) -> Path:
        return self._audit_logger.path

    def tool_names(self) -> tuple[str, ...]:
        return self._registry.names()

    def serve(self, in_stream: TextIO, out_stream: TextIO) -> None:
        """Process JSON-line requests until the input stream closes."""
        for raw_line in in_stream:
            line = raw_line.strip()
            if not line:
                continue
            response = self.handle_json_line(line)
            out_stream.write(f"{json.dumps(response, sort_keys=True)}\n")
            out_stream.flush()

    def handle_json_line(self, raw_line: str) -> dict[str, object]:
        """Handle a single JSON-line request."""
        try:
            payload = json.loads(raw_line)
        except json.JSONDecodeError:
            request_id = self.next_request_id()
            response = self.error_response(
                request_id=request_id,
                code="INVALID_JSON",
                message="Request must be valid JSON.",
            )
            return self._logged(
                request_id, "invalid_json", {"raw_line_length": len(raw_line)}, response
            )
        return self.handle_payload(payload)

    def handle_payload(self, payload: object) -> dict[str, object]:
        """Validate and dispatch a parsed payload."""
        parsed = self.parse_request(payload)
        if isinstance(parsed, dict):
            request_id_value = parsed.get("request_id")
            request_id = (
                request_id_value if isinstance(request_id_value, str) else self.next_request_id()
            )
            return self._logged(request_id, "invalid_request", {}, parsed)

        request = parsed
        tool_name = request.method
        arguments = request.params
        if request.method == "tools/call":
            tool_name_value = request.params.get("name")
            arguments_value = request.params.get("arguments", {})
            if not isinstance(tool_name_value, str) or not tool_name_value:
                return self.error_response(
                    request_id=request.request_id,
                    code="INVALID_PARAMS",
                    message="tools/call params.name must be a non-empty string.",
                )
            if not isinstance(arguments_value, dict):
                return self.error_response(
                    request_id=request.request_id,
                    code="INVALID_PARAMS",
                    message="tools/call params.arguments must be an object.",
                )
            tool_name = tool_name_value
            arguments = arguments_value

        response = self._execute(request.request_id, tool_name, arguments)
        return self._logged(request.request_id, tool_name, arguments, response)

    def _execute(
        self, request_id: str, tool_name: str, arguments: dict[str, object]
    ) -> dict[str, object]:
        try:
            enforce_input_limits(arguments, self._limits)
            result = self._registry.dispatch(name=tool_name, arguments=arguments)
        except InputLimitError as error:
            return self.blocked_response(
                request_id=request_id,
                reason=error.reason,
                hint=error.hint,
                code="INPUT_BLOCKED",
            )
        except ParseError as error:
            return self.error_response(
                request_id=request_id,
                code="PARSE_ERROR",
                message=NOT_JSON_MESSAGE,
                details={"position": error.position, "detail": error.message},
            )
        except InvalidArgumentError as error:
            return self.error_response(
                request_id=request_id, code="INVALID_ARGUMENT", message=error.message
            )
        except LanguageMismatchError as error:
            return self.error_response(
                request_id=request_id, code="LANGUAGE_MISMATCH", message=str(error)
            )
        except ToolDispatchError as error:
            return self.error_response(
                request_id=request_id, code=error.code, message=error.message
            )
        except Exception:
            return self.error_response(
                request_id=request_id,
                code="INTERNAL_ERROR",
                message="Unhandled server error while executing tool.",
            )

        warnings = _extract_result_warnings(result)
        response = self.success_response(request_id=request_id, result=result, warnings=warnings)
        return self.enforce_response_size_limit(request_id=request_id, response=response)

    def parse_request(self, payload: object) -> Request | dict[str, object]:
        """Validate request payload and return normalized Request."""
        if not isinstance(payload, dict):
            return self.error_response(
                request_id=self.next_request_id(),
                code="INVALID_REQUEST",
                message="Request must be an object.",
            )

        request_id = self.extract_request_id(payload.get("id"))
        method = payload.get("method")
        params = payload.get("params", {})

        if not isinstance(method, str) or not method:
            return self.error_response(
                request_id=request_id,
                code="INVALID_REQUEST",
                message="Request method must be a non-empty string.",
            )
        if not isinstance(params, dict):
            return self.error_response(
                request_id=request_id,
                code="INVALID_PARAMS",
                message="Request params must be an object.",
            )
        return Request(request_id=request_id, method=method, params=params)

    def extract_request_id(self, request_id: object) -> str:
        """Use the caller's id, or synthesize a sequential one."""
        if isinstance(request_id, str) and request_id:
            return request_id
        if isinstance(request_id, int) and not isinstance(request_id, bool):
            return str(request_id)
        return self.next_request_id()

    def next_request_id(self) -> str:
        self._fallback_request_counter += 1
        return f"req-{self._fallback_request_counter:06d}"

    @staticmethod
    def success_response(
        request_id: str,
        result: dict[str, object],
        warnings: list[str] | None = None,
    ) -> dict[str, object]:
        return {
            "request_id": request_id,
            "ok": True,
            "result": result,
            "warnings": warnings or [],
            "blocked": False,
        }

    @staticmethod
    def error_response(
        request_id: str,
        code: str,
        message: str,
        details: dict[str, object] | None = None,
    ) -> dict[str, object]:
        return {
            "request_id": request_id,
            "ok": False,
            "result": {},
            "warnings": [],
            "blocked": False,
            "error": {"code": code, "message": message, **(details or {})},
        }

    @staticmethod
    def blocked_response(
        request_id: str, reason: str, hint: str, code: str = "RESPONSE_BLOCKED"
    ) -> dict[str, object]:
        return {
            "request_id": request_id,
            "ok": False,
            "result": {"reason": reason, "hint": hint},
            "warnings": [],
            "blocked": True,
            "error": {"code": code, "message": reason},
        }

    def enforce_response_size_limit(
        self,
        request_id: str,
        response: dict[str, object],
    ) -> dict[str, object]:
        """Block responses that exceed max_total_bytes_per_response."""
        response_bytes = len(json.dumps(response, sort_keys=True).encode("utf-8"))
        if response_bytes <= self._limits.max_total_bytes_per_response:
            return response
        return self.blocked_response(
            request_id=request_id,
            reason="Response exceeds max_total_bytes_per_response limit.",
            hint="Lower max_results or send a smaller buffer.",
        )

    def _logged(
        self,
        request_id: str,
        tool_name: str,
        arguments: dict[str, object],
        response: dict[str, object],
    ) -> dict[str, object]:
        error_payload = response.get("error")
        error_code: str | None = None
        if isinstance(error_payload, dict):
            code_value = error_payload.get("code")
            if isinstance(code_value, str):
                error_code = code_value
        self._audit_logger.append(
            AuditEvent(
                timestamp=utc_timestamp(),
                request_id=request_id,
                tool=tool_name,
                ok=bool(response.get("ok", False)),
                blocked=bool(response.get("blocked", False)),
                error_code=error_code,
                metadata=sanitize_arguments(arguments),
            )
        )
        return response


def create_server(
    workdir: str = ".",
    data_dir: str | None = None,
    cli_overrides: CliOverrides | None = None,
) -> StdioServer:
    """Create a configured stdio server for ``workdir``."""
    overrides = cli_overrides or CliOverrides()
    if data_dir is not None and overrides.data_dir is None:
        overrides = CliOverrides(
            data_dir=Path(data_dir).resolve(),
            max_results=overrides.max_results,
            max_input_chars=overrides.max_input_chars,
            max_total_bytes_per_response=overrides.max_total_bytes_per_response,
            sample_chars=overrides.sample_chars,
            statistical_enabled=overrides.statistical_enabled,
        )
    config = load_effective_config(Path(workdir).resolve(), overrides)
    return StdioServer(config=config)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the textscope server process."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    statistical_enabled: bool | None = None
    if args.statistical_enabled is not None:
        statistical_enabled = args.statistical_enabled == "true"
    overrides = CliOverrides(
        data_dir=Path(args.data_dir).resolve() if args.data_dir is not None else None,
        max_results=args.max_results,
        max_input_chars=args.max_input_chars,
        max_total_bytes_per_response=args.max_total_bytes_per_response,
        sample_chars=args.sample_chars,
        statistical_enabled=statistical_enabled,
    )
    try:
        server = create_server(workdir=args.workdir, cli_overrides=overrides)
    except ValueError as error:
        parser.error(str(error))
    server.serve(in_stream=sys.stdin, out_stream=sys.stdout)
    return 0


def _extract_result_warnings(result: dict[str, object]) -> list[str]:
    raw = result.pop("__warnings__", None)
    if not isinstance(raw, list):
        return []
    return [item for item in raw if isinstance(item, str)]
