from __future__ import annotations

from pathlib import Path


def test_required_package_paths_exist() -> None:
    root = Path(__file__).resolve().parents[1]
    required = [
        "src/textscope/api.py",
        "src/textscope/server.py",
        "src/textscope/config.py",
        "src/textscope/json_index/__init__.py",
        "src/textscope/language/__init__.py",
        "src/textscope/diff/__init__.py",
        "src/textscope/security/__init__.py",
        "src/textscope/logging/__init__.py",
        "src/textscope/tools/__init__.py",
    ]
    for rel in required:
        assert (root / rel).exists(), rel
