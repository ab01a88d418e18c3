from __future__ import annotations

from pathlib import Path

import pytest

from textscope.config import CliOverrides, load_effective_config
from textscope.server import create_server


@pytest.mark.parametrize(
    ("body", "match"),
    [
        ('[query]\nmax_results = "many"\n', "query.max_results"),
        ("[query]\nmax_results = 0\n", "query.max_results"),
        ("[query]\nmax_results = 100001\n", "<= 100000"),
        ("[parser]\nmax_depth = 513\n", "parser.max_depth"),
        ("[classifier]\nsample_chars = true\n", "classifier.sample_chars"),
        ('[classifier]\nstatistical_enabled = "yes"\n', "classifier.statistical_enabled"),
        ("[classifier]\nmin_confidence = 1.5\n", "classifier.min_confidence"),
        ('[classifier]\nfallback = "klingon"\n', "classifier.fallback"),
        ("[limits]\nmax_input_chars = -5\n", "limits.max_input_chars"),
        ("[query]\nmax_result = 5\n", "unknown field"),
        ('limits = "not-a-table"\n', "section 'limits'"),
    ],
)
def test_invalid_config_raises_value_error(tmp_path: Path, body: str, match: str) -> None:
    (tmp_path / "textscope.toml").write_text(body, encoding="utf-8")

    with pytest.raises(ValueError, match=match):
        create_server(workdir=str(tmp_path))


def test_min_confidence_accepts_integer_bounds(tmp_path: Path) -> None:
    (tmp_path / "textscope.toml").write_text("[classifier]\nmin_confidence = 1\n", encoding="utf-8")

    config = load_effective_config(tmp_path)

    assert config.classifier.min_confidence == 1.0


def test_invalid_cli_override_names_the_field(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="overrides.sample_chars"):
        load_effective_config(tmp_path, CliOverrides(sample_chars=0))


def test_unknown_top_level_sections_are_ignored(tmp_path: Path) -> None:
    (tmp_path / "textscope.toml").write_text("[editor]\ntheme = 'dark'\n", encoding="utf-8")

    assert load_effective_config(tmp_path).query.max_results == 1000
