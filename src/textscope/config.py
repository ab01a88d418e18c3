"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from textscope.json_index import DEFAULT_MAX_DEPTH, DEFAULT_MAX_RESULTS
from textscope.language import (
    DEFAULT_MIN_CONFIDENCE,
    DEFAULT_SAMPLE_CHARS,
    LANGUAGE_TAGS,
    PLAINTEXT,
    ClassifierSettings,
    is_known_tag,
)
from textscope.security import EngineLimits

CONFIG_FILE_NAME = "textscope.toml"

MAX_RESULTS_CAP = 100_000
MAX_DEPTH_CAP = 512
SAMPLE_CHARS_CAP = 1_000_000
MAX_INPUT_CHARS_CAP = 64 * 1024 * 1024
MAX_TOTAL_BYTES_PER_RESPONSE_CAP = 32 * 1024 * 1024

_SECTION_KEYS: dict[str, frozenset[str]] = {
    "query": frozenset({"max_results"}),
    "parser": frozenset({"max_depth"}),
    "classifier": frozenset({"sample_chars", "statistical_enabled", "min_confidence", "fallback"}),
    "limits": frozenset({"max_input_chars", "max_total_bytes_per_response"}),
}


@dataclass(slots=True, frozen=True)
class QueryConfig:
    """Path query defaults."""

    max_results: int


@dataclass(slots=True, frozen=True)
class ParserConfig:
    """JSON parser settings."""

    max_depth: int


@dataclass(slots=True, frozen=True)
class ClassifierConfig:
    """Language classifier settings."""

    sample_chars: int
    statistical_enabled: bool
    min_confidence: float
    fallback: str

    def settings(self, max_depth: int) -> ClassifierSettings:
        """Return the engine-level settings for this config."""
        return ClassifierSettings(
            sample_chars=self.sample_chars,
            statistical_enabled=self.statistical_enabled,
            min_confidence=self.min_confidence,
            max_depth=max_depth,
        )


@dataclass(slots=True, frozen=True)
class ServerConfig:
    """Fully merged host configuration."""

    workdir: Path
    data_dir: Path
    limits: EngineLimits
    query: QueryConfig
    parser: ParserConfig
    classifier: ClassifierConfig

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for tool responses."""
        return {
            "workdir": str(self.workdir),
            "data_dir": str(self.data_dir),
            "limits": {
                "max_input_chars": self.limits.max_input_chars,
                "max_total_bytes_per_response": self.limits.max_total_bytes_per_response,
            },
            "query": {"max_results": self.query.max_results},
            "parser": {"max_depth": self.parser.max_depth},
            "classifier": {
                "sample_chars": self.classifier.sample_chars,
                "statistical_enabled": self.classifier.statistical_enabled,
                "min_confidence": self.classifier.min_confidence,
                "fallback": self.classifier.fallback,
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    data_dir: Path | None = None
    max_results: int | None = None
    max_input_chars: int | None = None
    max_total_bytes_per_response: int | None = None
    sample_chars: int | None = None
    statistical_enabled: bool | None = None


def default_config(workdir: Path) -> ServerConfig:
    """Build default config for a given working directory."""
    resolved = workdir.resolve()
    return ServerConfig(
        workdir=resolved,
        data_dir=resolved / ".textscope",
        limits=EngineLimits(),
        query=QueryConfig(max_results=DEFAULT_MAX_RESULTS),
        parser=ParserConfig(max_depth=DEFAULT_MAX_DEPTH),
        classifier=ClassifierConfig(
            sample_chars=DEFAULT_SAMPLE_CHARS,
            statistical_enabled=True,
            min_confidence=DEFAULT_MIN_CONFIDENCE,
            fallback=PLAINTEXT,
        ),
    )


def load_config_file(workdir: Path) -> dict[str, object]:
    """Load optional textscope.toml from the working directory."""
    config_path = workdir / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    unknown = sorted(set(value) - _SECTION_KEYS[key])
    if unknown:
        raise ValueError(f"Config section '{key}' has unknown field(s): {', '.join(unknown)}.")
    return value


def merge_config(
    base: ServerConfig, file_payload: dict[str, object], overrides: CliOverrides
) -> ServerConfig:
    """Merge defaults, config file, then CLI/startup overrides."""
    query_payload = _get_table(file_payload, "query")
    parser_payload = _get_table(file_payload, "parser")
    classifier_payload = _get_table(file_payload, "classifier")
    limits_payload = _get_table(file_payload, "limits")

    merged = ServerConfig(
        workdir=base.workdir,
        data_dir=base.data_dir,
        limits=EngineLimits(
            max_input_chars=_optional_positive_int_with_cap(
                limits_payload.get("max_input_chars"),
                "limits.max_input_chars",
                base.limits.max_input_chars,
                MAX_INPUT_CHARS_CAP,
            ),
            max_total_bytes_per_response=_optional_positive_int_with_cap(
                limits_payload.get("max_total_bytes_per_response"),
                "limits.max_total_bytes_per_response",
                base.limits.max_total_bytes_per_response,
                MAX_TOTAL_BYTES_PER_RESPONSE_CAP,
            ),
        ),
        query=QueryConfig(
            max_results=_optional_positive_int_with_cap(
                query_payload.get("max_results"),
                "query.max_results",
                base.query.max_results,
                MAX_RESULTS_CAP,
            )
        ),
        parser=ParserConfig(
            max_depth=_optional_positive_int_with_cap(
                parser_payload.get("max_depth"),
                "parser.max_depth",
                base.parser.max_depth,
                MAX_DEPTH_CAP,
            )
        ),
        classifier=ClassifierConfig(
            sample_chars=_optional_positive_int_with_cap(
                classifier_payload.get("sample_chars"),
                "classifier.sample_chars",
                base.classifier.sample_chars,
                SAMPLE_CHARS_CAP,
            ),
            statistical_enabled=_optional_bool(
                classifier_payload.get("statistical_enabled"),
                "classifier.statistical_enabled",
                base.classifier.statistical_enabled,
            ),
            min_confidence=_optional_confidence(
                classifier_payload.get("min_confidence"),
                "classifier.min_confidence",
                base.classifier.min_confidence,
            ),
            fallback=_optional_language(
                classifier_payload.get("fallback"),
                "classifier.fallback",
                base.classifier.fallback,
            ),
        ),
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: ServerConfig, overrides: CliOverrides) -> ServerConfig:
    """Apply startup overrides at highest precedence."""
    limits = EngineLimits(
        max_input_chars=_optional_positive_int_with_cap(
            overrides.max_input_chars,
            "overrides.max_input_chars",
            config.limits.max_input_chars,
            MAX_INPUT_CHARS_CAP,
        ),
        max_total_bytes_per_response=_optional_positive_int_with_cap(
            overrides.max_total_bytes_per_response,
            "overrides.max_total_bytes_per_response",
            config.limits.max_total_bytes_per_response,
            MAX_TOTAL_BYTES_PER_RESPONSE_CAP,
        ),
    )
    query = QueryConfig(
        max_results=_optional_positive_int_with_cap(
            overrides.max_results,
            "overrides.max_results",
            config.query.max_results,
            MAX_RESULTS_CAP,
        )
    )
    classifier = ClassifierConfig(
        sample_chars=_optional_positive_int_with_cap(
            overrides.sample_chars,
            "overrides.sample_chars",
            config.classifier.sample_chars,
            SAMPLE_CHARS_CAP,
        ),
        statistical_enabled=(
            overrides.statistical_enabled
            if overrides.statistical_enabled is not None
            else config.classifier.statistical_enabled
        ),
        min_confidence=config.classifier.min_confidence,
        fallback=config.classifier.fallback,
    )
    data_dir = overrides.data_dir or config.data_dir
    return ServerConfig(
        workdir=config.workdir,
        data_dir=data_dir.resolve(),
        limits=limits,
        query=query,
        parser=config.parser,
        classifier=classifier,
    )


def load_effective_config(workdir: Path, overrides: CliOverrides | None = None) -> ServerConfig:
    """Load effective config using merge order defaults -> config file -> overrides."""
    resolved = workdir.resolve()
    base = default_config(resolved)
    payload = load_config_file(resolved)
    return merge_config(base, payload, overrides or CliOverrides())


def _optional_positive_int_with_cap(
    value: object,
    name: str,
    default: int,
    cap: int | None,
) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Config field '{name}' must be a positive integer.")
    if cap is not None and value > cap:
        raise ValueError(f"Config field '{name}' must be <= {cap}.")
    return value


def _optional_bool(value: object, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Config field '{name}' must be a boolean.")
    return value


def _optional_confidence(value: object, name: str, default: float) -> float:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Config field '{name}' must be a number between 0 and 1.")
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"Config field '{name}' must be a number between 0 and 1.")
    return float(value)


def _optional_language(value: object, name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not is_known_tag(value):
        raise ValueError(
            f"Config field '{name}' must be one of: {', '.join(LANGUAGE_TAGS)}."
        )
    return value
