"""Deterministic content-type classification."""

from .classifier import (
    DEFAULT_MIN_CONFIDENCE,
    DEFAULT_SAMPLE_CHARS,
    ClassifierSettings,
    build_detector_registry,
    classify_language,
    detect_language,
    looks_like_paste,
    resolve_fallback,
)
from .registry import Detection, DetectorRegistry, LanguageDetector
from .statistical import (
    LexerGuess,
    guess_with_pygments,
    language_for_lexer_aliases,
    token_evidence,
)
from .tags import (
    EXTENSION_LANGUAGES,
    LANGUAGE_TAGS,
    PLAINTEXT,
    is_known_tag,
    language_for_extension,
)

__all__ = [
    "ClassifierSettings",
    "DEFAULT_MIN_CONFIDENCE",
    "DEFAULT_SAMPLE_CHARS",
    "Detection",
    "DetectorRegistry",
    "EXTENSION_LANGUAGES",
    "LANGUAGE_TAGS",
    "LanguageDetector",
    "LexerGuess",
    "PLAINTEXT",
    "build_detector_registry",
    "classify_language",
    "detect_language",
    "guess_with_pygments",
    "is_known_tag",
    "language_for_extension",
    "language_for_lexer_aliases",
    "looks_like_paste",
    "resolve_fallback",
    "token_evidence",
]
