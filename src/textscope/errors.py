"""Error types shared by the text engines."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ParseError(Exception):
    """Raised when text is not strictly valid JSON."""

    position: int
    message: str

    def __str__(self) -> str:
        return f"{self.message} at position {self.position}"


@dataclass(slots=True, frozen=True)
class InvalidArgumentError(Exception):
    """Raised when caller-supplied arguments are rejected before any work."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True, frozen=True)
class LanguageMismatchError(Exception):
    """Raised when two buffers are compared under different languages."""

    original: str
    modified: str

    def __str__(self) -> str:
        return (
            f"Cannot compare {self.original} with {self.modified}; "
            "set the same language on both sides."
        )
