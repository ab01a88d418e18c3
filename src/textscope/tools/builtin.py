"""Built-in engine tools."""

from __future__ import annotations

from dataclasses import asdict

from textscope.config import ServerConfig
from textscope.diff import (
    DIFF_OP_KINDS,
    DiffOp,
    DiffRangeResult,
    compare_buffers,
    line_decorations,
    map_diff_ranges,
)
from textscope.errors import InvalidArgumentError
from textscope.json_index import parse_entries, query_paths
from textscope.language import LANGUAGE_TAGS, DetectorRegistry, detect_language
from textscope.tools.registry import ToolHandler, ToolRegistry

TRUNCATED_WARNING = "Results truncated"


def register_builtin_tools(
    registry: ToolRegistry,
    config: ServerConfig,
    detectors: DetectorRegistry,
) -> None:
    """Register the engine tools in a fixed order."""
    registry.register("engine.status", _status_handler(registry, config, detectors))
    registry.register("json.parse", _json_parse_handler(config))
    registry.register("json.query", _json_query_handler(config))
    registry.register("language.classify", _classify_handler(config, detectors))
    registry.register("diff.map_ranges", _map_ranges_handler())
    registry.register("diff.compare", _compare_handler())


def _status_handler(
    registry: ToolRegistry,
    config: ServerConfig,
    detectors: DetectorRegistry,
) -> ToolHandler:
    def handler(_: dict[str, object]) -> dict[str, object]:
        return {
            "tools": list(registry.names()),
            "languages": list(LANGUAGE_TAGS),
            "detectors": list(detectors.names()),
            "diff_op_kinds": list(DIFF_OP_KINDS),
            "effective_config": config.to_public_dict(),
        }

    return handler


def _json_parse_handler(config: ServerConfig) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        text = _required_str(arguments, "text")
        entries = parse_entries(text, max_depth=config.parser.max_depth)
        return {"entries": [entry.to_dict() for entry in entries], "count": len(entries)}

    return handler


def _json_query_handler(config: ServerConfig) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        text = _required_str(arguments, "text")
        path_filter = _optional_str(arguments, "filter")
        max_results = arguments.get("max_results", config.query.max_results)
        # query_paths rejects non-positive and non-int values
        result = query_paths(
            text,
            path_filter,
            max_results,  # type: ignore[arg-type]
            max_depth=config.parser.max_depth,
        )
        payload: dict[str, object] = {
            "items": [entry.to_dict() for entry in result.items],
            "truncated": result.truncated,
            "max_results": max_results,
        }
        if result.truncated:
            payload["__warnings__"] = [TRUNCATED_WARNING]
        return payload

    return handler


def _classify_handler(config: ServerConfig, detectors: DetectorRegistry) -> ToolHandler:
    settings = config.classifier.settings(max_depth=config.parser.max_depth)

    def handler(arguments: dict[str, object]) -> dict[str, object]:
        sample = _optional_str(arguments, "sample")
        fallback = _optional_str(arguments, "fallback")
        detection = detect_language(
            sample,
            extension_hint=_optional_str(arguments, "extension_hint"),
            prior_hint=_optional_str(arguments, "prior_hint"),
            fallback=fallback if fallback is not None else config.classifier.fallback,
            settings=settings,
            registry=detectors,
        )
        return {"language": detection.language, "detector": detection.detector}

    return handler


def _map_ranges_handler() -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        ops = _parse_ops(arguments.get("ops"))
        result = map_diff_ranges(
            ops,
            _optional_str(arguments, "original_text"),
            _optional_str(arguments, "modified_text"),
        )
        return _diff_result_to_dict(result)

    return handler


def _compare_handler() -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        result = compare_buffers(
            _required_str(arguments, "original"),
            _required_str(arguments, "modified"),
            original_language=_optional_str(arguments, "original_language"),
            modified_language=_optional_str(arguments, "modified_language"),
        )
        return _diff_result_to_dict(result)

    return handler


def _parse_ops(raw: object) -> list[DiffOp]:
    if not isinstance(raw, list):
        raise InvalidArgumentError("ops must be a list of operations.")
    ops: list[DiffOp] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise InvalidArgumentError(f"ops[{index}] must be an object.")
        kind = item.get("kind")
        text = item.get("text")
        count = item.get("count")
        if not isinstance(kind, str):
            raise InvalidArgumentError(f"ops[{index}].kind must be a string.")
        if text is not None and not isinstance(text, str):
            raise InvalidArgumentError(f"ops[{index}].text must be a string.")
        if count is not None and (isinstance(count, bool) or not isinstance(count, int)):
            raise InvalidArgumentError(f"ops[{index}].count must be an integer.")
        ops.append(DiffOp(kind=kind, text=text, count=count))
    return ops


def _diff_result_to_dict(result: DiffRangeResult) -> dict[str, object]:
    return {
        "original_ranges": [asdict(item) for item in result.original_ranges],
        "modified_ranges": [asdict(item) for item in result.modified_ranges],
        "original_lines": [asdict(item) for item in line_decorations(result.original_ranges)],
        "modified_lines": [asdict(item) for item in line_decorations(result.modified_ranges)],
        "summary": asdict(result.summary),
    }


def _required_str(arguments: dict[str, object], key: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{key} must be a string.")
    return value


def _optional_str(arguments: dict[str, object], key: str) -> str | None:
    value = arguments.get(key)
    if value is not None and not isinstance(value, str):
        raise InvalidArgumentError(f"{key} must be a string when provided.")
    return value
