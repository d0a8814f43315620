"""Loaders building a Context from a component directory or zip archive."""

from __future__ import annotations

import zipfile
from pathlib import Path

from compctx.config import CompctxConfig
from compctx.loaders.base import BaseLoader, LoadResult
from compctx.loaders.directory_loader import DirectoryLoader
from compctx.loaders.text import is_plain_text
from compctx.loaders.walker import walk_dir
from compctx.loaders.zip_loader import ZipLoader

__all__ = [
    # Base types
    "BaseLoader",
    "LoadResult",
    # Loaders
    "DirectoryLoader",
    "ZipLoader",
    # Collaborators
    "is_plain_text",
    "walk_dir",
    # Entry points
    "get_loader",
    "is_zip_source",
    "load_component",
]


def is_zip_source(path: Path) -> bool:
    """Check whether a source path should be loaded as a zip archive.

    A path is an archive if it is not a directory and either ends in ``.zip``
    or is a readable zip file.
    """
    if path.is_dir():
        return False
    if path.suffix.lower() == ".zip":
        return True
    return path.is_file() and zipfile.is_zipfile(path)


def get_loader(source: str | Path, config: CompctxConfig | None = None) -> BaseLoader:
    """Pick the loader for a source path."""
    if is_zip_source(Path(source)):
        return ZipLoader(config)
    return DirectoryLoader(config)


async def load_component(source: str | Path, config: CompctxConfig | None = None) -> LoadResult:
    """Load a component from a directory or a zip archive.

    Args:
        source: Path of the component directory or archive.
        config: Limits to apply. Defaults to CompctxConfig().

    Returns:
        LoadResult with the Context, or with the errors found.
    """
    return await get_loader(source, config).load(source)
