"""Pytest configuration and fixtures for compctx tests."""

from __future__ import annotations

import os
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

# Set a fixed terminal width to prevent line wrapping issues in CI
# This must be set before any Rich imports
os.environ.setdefault("COLUMNS", "200")
os.environ.setdefault("LINES", "50")
# Disable Rich's terminal detection to ensure consistent output
os.environ.setdefault("TERM", "dumb")


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep COMPCTX_* variables from the outer environment out of tests."""
    for var in ("COMPCTX_MAX_FILE_DEPTH", "COMPCTX_ELEMENT_NAME_REGEX", "COMPCTX_IGNORE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str | bytes]], Path]:
    """Create files under tmp_path from a {relative_path: content} mapping.

    Returns the directory of the first path segment (the component root).
    """

    def _make(files: dict[str, str | bytes]) -> Path:
        root: Path | None = None
        for rel, content in files.items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
            if root is None:
                root = tmp_path / Path(rel).parts[0]
        assert root is not None
        return root

    return _make


@pytest.fixture
def make_zip(tmp_path: Path) -> Callable[..., Path]:
    """Create a zip archive from an ordered {entry_name: content} mapping.

    Entry names ending in "/" are written as directory entries.
    """

    def _make(entries: dict[str, str | bytes], name: str = "component.zip") -> Path:
        archive_path = tmp_path / name
        with zipfile.ZipFile(archive_path, "w", zipfile.ZIP_DEFLATED) as archive:
            for entry, content in entries.items():
                archive.writestr(entry, content)
        return archive_path

    return _make
