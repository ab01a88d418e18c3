"""Detector registry with deterministic first-match selection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


class LanguageDetector(Protocol):
    """Protocol implemented by classifier stages."""

    name: str

    def detect(self, path: str | None, text: str) -> str | None:
        """Return a language tag when the stage's signal is present."""


@dataclass(slots=True, frozen=True)
class Detection:
    """Tag chosen by a classifier stage."""

    language: str
    detector: str


@dataclass(slots=True)
class DetectorRegistry:
    """Ordered detector registry; earlier stages win."""

    _detectors: list[LanguageDetector] = field(default_factory=list)

    def register(self, detector: LanguageDetector) -> None:
        """Register a detector in deterministic evaluation order."""
        self._detectors.append(detector)

    def detect(self, path: str | None, text: str) -> Detection | None:
        """Return the first stage that recognizes the sample, if any."""
        for detector in self._detectors:
            language = detector.detect(path, text)
            if language is not None:
                return Detection(language=language, detector=detector.name)
        return None

    def names(self) -> tuple[str, ...]:
        """Return registered detector names in evaluation order."""
        return tuple(detector.name for detector in self._detectors)
