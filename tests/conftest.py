"""Shared test fixtures."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

TreeWriter = Callable[[dict[str, str]], Path]


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-apply 'smoke' marker to any test not marked 'regression'."""
    smoke = pytest.mark.smoke
    for item in items:
        if not any(m.name == "regression" for m in item.iter_markers()):
            item.add_marker(smoke)


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeWriter:
    """Write {relative_path: content} into tmp_path; a trailing '/' makes a directory."""

    def _write(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            target = tmp_path / rel
            if rel.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def deny_access():
    """Return a function that makes a directory unreadable for the test's duration."""
    # chmod-based denial has no effect for root and is not enforced on Windows
    if sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0):
        pytest.skip("directory permissions are not enforced for this user/platform")

    locked: list[Path] = []

    def _deny(path: Path) -> None:
        os.chmod(path, 0)
        locked.append(path)

    yield _deny

    for path in locked:
        os.chmod(path, 0o755)
