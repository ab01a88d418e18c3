"""Input and response size policy for host requests."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

TEXT_ARGUMENTS = ("text", "sample", "original", "modified", "original_text", "modified_text")


@dataclass(slots=True, frozen=True)
class EngineLimits:
    """Runtime limits applied by the host before calling an engine."""

    max_input_chars: int = 8 * 1024 * 1024
    max_total_bytes_per_response: int = 4 * 1024 * 1024


@dataclass(slots=True, frozen=True)
class InputLimitError(Exception):
    """Raised when a request exceeds the configured input limits."""

    reason: str
    hint: str


def enforce_input_limits(arguments: Mapping[str, object], limits: EngineLimits) -> None:
    """Raise InputLimitError when any text argument exceeds max_input_chars."""
    for key in TEXT_ARGUMENTS:
        value = arguments.get(key)
        if isinstance(value, str) and len(value) > limits.max_input_chars:
            raise InputLimitError(
                reason=f"Argument '{key}' exceeds max_input_chars limit.",
                hint="Send a smaller buffer or raise the limit via approved configuration.",
            )
    ops = arguments.get("ops")
    if isinstance(ops, list):
        total = 0
        for op in ops:
            if isinstance(op, Mapping) and isinstance(op.get("text"), str):
                total += len(op["text"])
        # ops carry both buffers
        if total > 2 * limits.max_input_chars:
            raise InputLimitError(
                reason="Diff operations exceed max_input_chars limit.",
                hint="Diff smaller buffers or raise the limit via approved configuration.",
            )
