"""Layered, deterministic content-type classification."""

from __future__ import annotations

from dataclasses import dataclass

from textscope.json_index import DEFAULT_MAX_DEPTH
from textscope.language.detectors import (
    ExtensionDetector,
    JavaDetector,
    JavaScriptDetector,
    JsonDetector,
    MarkdownDetector,
    MarkupDetector,
    PhpDetector,
    ShebangDetector,
    SqlDetector,
    StatisticalDetector,
    StyleSheetDetector,
    TypeScriptDetector,
    YamlDetector,
)
from textscope.language.registry import Detection, DetectorRegistry
from textscope.language.tags import PLAINTEXT, is_known_tag

DEFAULT_SAMPLE_CHARS = 20_000
DEFAULT_MIN_CONFIDENCE = 0.3
FINAL_FALLBACK_DETECTOR = "fallback"


@dataclass(slots=True, frozen=True)
class ClassifierSettings:
    """Tunables for the classifier pipeline."""

    sample_chars: int = DEFAULT_SAMPLE_CHARS
    statistical_enabled: bool = True
    min_confidence: float = DEFAULT_MIN_CONFIDENCE
    max_depth: int = DEFAULT_MAX_DEPTH


def build_detector_registry(settings: ClassifierSettings | None = None) -> DetectorRegistry:
    """Build the detector pipeline, most specific signal first."""
    active = settings or ClassifierSettings()
    registry = DetectorRegistry()
    registry.register(ExtensionDetector())
    registry.register(ShebangDetector())
    registry.register(JsonDetector(max_depth=active.max_depth))
    registry.register(MarkupDetector())
    registry.register(YamlDetector())
    registry.register(MarkdownDetector())
    registry.register(SqlDetector())
    registry.register(StyleSheetDetector())
    registry.register(JavaDetector())
    registry.register(PhpDetector())
    registry.register(TypeScriptDetector())
    registry.register(JavaScriptDetector())
    if active.statistical_enabled:
        registry.register(StatisticalDetector(min_confidence=active.min_confidence))
    return registry


def detect_language(
    sample: str | None,
    extension_hint: str | None = None,
    prior_hint: str | None = None,
    fallback: str | None = PLAINTEXT,
    *,
    settings: ClassifierSettings | None = None,
    registry: DetectorRegistry | None = None,
) -> Detection:
    """Classify a sample and report which stage decided."""
    active = settings or ClassifierSettings()
    detectors = registry or build_detector_registry(active)
    text = (sample or "")[: active.sample_chars]
    detection = detectors.detect(extension_hint, text)
    if detection is not None:
        return detection
    return Detection(
        language=resolve_fallback(prior_hint, fallback),
        detector=FINAL_FALLBACK_DETECTOR,
    )


def classify_language(
    sample: str | None,
    extension_hint: str | None = None,
    prior_hint: str | None = None,
    fallback: str | None = PLAINTEXT,
    *,
    settings: ClassifierSettings | None = None,
    registry: DetectorRegistry | None = None,
) -> str:
    """Return exactly one language tag for ``sample``; never raises."""
    return detect_language(
        sample,
        extension_hint,
        prior_hint,
        fallback,
        settings=settings,
        registry=registry,
    ).language


def resolve_fallback(prior_hint: str | None, fallback: str | None) -> str:
    """Pick the prior hint, then the caller fallback, then ``plaintext``."""
    if prior_hint is not None and prior_hint != PLAINTEXT and is_known_tag(prior_hint):
        return prior_hint
    if fallback is not None and is_known_tag(fallback):
        return fallback
    return PLAINTEXT


def looks_like_paste(inserted_text: str) -> bool:
    """Return True when an edit is large enough to warrant re-classification."""
    return len(inserted_text) > 2 or "\n" in inserted_text
