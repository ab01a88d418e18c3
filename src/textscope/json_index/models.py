"""Typed models for JSON scalar indexing."""

from __future__ import annotations

import json
from dataclasses import dataclass

JsonScalar = str | int | float | bool | None

ROOT_PATH = "$"
NOT_JSON_MESSAGE = "Not valid JSON. Open a JSON file to use this panel."
DEFAULT_MAX_RESULTS = 1000
DEFAULT_MAX_DEPTH = 256


@dataclass(slots=True, frozen=True)
class Entry:
    """One scalar leaf with its path and ``[start, end)`` source offsets."""

    path: str
    value: JsonScalar
    start: int
    end: int

    def to_dict(self) -> dict[str, object]:
        """Return serializable entry payload."""
        return {
            "path": self.path,
            "value": self.value,
            "display": format_value(self.value),
            "start": self.start,
            "end": self.end,
        }


@dataclass(slots=True, frozen=True)
class QueryResult:
    """Bounded path query output."""

    items: tuple[Entry, ...]
    truncated: bool


def format_value(value: JsonScalar) -> str:
    """Render a decoded scalar the way it reads in JSON."""
    return json.dumps(value, ensure_ascii=False)
