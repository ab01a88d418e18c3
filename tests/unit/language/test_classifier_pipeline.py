from __future__ import annotations

import pytest

from textscope.language import (
    ClassifierSettings,
    build_detector_registry,
    classify_language,
    detect_language,
    looks_like_paste,
    resolve_fallback,
)

HEURISTICS_ONLY = ClassifierSettings(statistical_enabled=False)


def test_registry_order_runs_most_specific_first() -> None:
    assert build_detector_registry().names() == (
        "extension",
        "shebang",
        "json",
        "markup",
        "yaml",
        "markdown",
        "sql",
        "stylesheet",
        "java",
        "php",
        "typescript",
        "javascript",
        "statistical",
    )


def test_statistical_stage_can_be_disabled() -> None:
    assert "statistical" not in build_detector_registry(HEURISTICS_ONLY).names()


@pytest.mark.parametrize("sample", ["", None])
def test_empty_sample_uses_fallback(sample: str | None) -> None:
    assert classify_language(sample) == "plaintext"
    assert classify_language(sample, fallback="yaml") == "yaml"


@pytest.mark.parametrize(
    ("prior_hint", "fallback", "expected"),
    [
        ("python", "yaml", "python"),
        ("plaintext", "yaml", "yaml"),
        (None, "yaml", "yaml"),
        ("klingon", "yaml", "yaml"),
        (None, "klingon", "plaintext"),
        (None, None, "plaintext"),
    ],
)
def test_resolve_fallback(prior_hint: str | None, fallback: str | None, expected: str) -> None:
    assert resolve_fallback(prior_hint, fallback) == expected


def test_prior_hint_applies_only_when_nothing_matches() -> None:
    assert classify_language('{"x": 1}', prior_hint="yaml", settings=HEURISTICS_ONLY) == "json"
    detection = detect_language("plain words", prior_hint="go", settings=HEURISTICS_ONLY)

    assert detection.language == "go"
    assert detection.detector == "fallback"


def test_classification_is_deterministic() -> None:
    samples = [
        "const x = 1;",
        "SELECT 1 FROM t",
        "just a sentence.",
        "<p>hi</p>",
        "key: value\nother: 2\n",
    ]
    for sample in samples:
        first = classify_language(sample, "buffer", "python", "plaintext")
        second = classify_language(sample, "buffer", "python", "plaintext")
        assert first == second


def test_sample_is_capped_to_a_prefix() -> None:
    settings = ClassifierSettings(sample_chars=16, statistical_enabled=False)
    prefix = "plain words here"

    assert len(prefix) == 16
    assert classify_language(prefix + "\n<?php echo 1;", settings=settings) == "plaintext"
    assert classify_language(prefix + "\nconst x = 1;", settings=settings) == "plaintext"
    assert classify_language("<?php echo 1;" + " " * 40, settings=settings) == "php"


@pytest.mark.parametrize(
    ("inserted", "expected"),
    [("", False), ("a", False), ("ab", False), ("abc", True), ("\n", True), ("a\n", True)],
)
def test_looks_like_paste(inserted: str, expected: bool) -> None:
    assert looks_like_paste(inserted) is expected
