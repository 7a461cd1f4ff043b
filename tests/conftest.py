"""Pytest configuration and shared fixtures.

Ensures the repository root is importable (so tests can import packages like
`cli`, `core`, `tools` without an editable install), and provides helpers for
temporary trees and a per-test trashbox directory.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Make repo root importable for tests (avoid requiring `pip install -e .`).
_REPO_ROOT = Path(__file__).resolve().parent.parent
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from core.config import ENV_VAR  # noqa: E402


@pytest.fixture
def chdir_tmp_path(tmp_path: Path) -> Path:
    """Change CWD to a fresh tmp path for isolation.

    Returns:
        The temporary directory path now set as the process CWD.
    """
    cwd = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(cwd)


@pytest.fixture
def make_tree(tmp_path: Path):
    """Factory to create a file tree under ``tmp_path``.

    Example:
        make_tree({"a/b.txt": "hello", "empty/": None})
    """

    def _make(spec: dict[str, str | bytes | None], *, root: Path | None = None) -> Path:
        base = root or tmp_path
        for rel, content in spec.items():
            p = base / rel
            if rel.endswith("/"):
                p.mkdir(parents=True, exist_ok=True)
                continue
            p.parent.mkdir(parents=True, exist_ok=True)
            if content is None:
                p.touch()
            elif isinstance(content, bytes):
                p.write_bytes(content)
            else:
                p.write_text(content, encoding="utf-8")
        return base

    return _make


@pytest.fixture
def trash_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Return a not-yet-created trashbox base directory under ``tmp_path``.

    The environment variable is cleared so nothing leaks in from the host.
    """
    monkeypatch.delenv(ENV_VAR, raising=False)
    return tmp_path / "trashbox"


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """Return a resolved directory for files that get trashed in a test."""
    d = tmp_path / "work"
    d.mkdir()
    return d.resolve()
