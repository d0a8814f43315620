"""Loader building a Context from a component directory on disk.

Every file below the root is visited before failing, so depth and binary
content violations are reported in full rather than one at a time.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from compctx.context import Context
from compctx.errors import (
    BinaryContentError,
    ContextError,
    DeepHierarchyError,
    SourceNotFoundError,
    SourceReadError,
)
from compctx.loaders.base import BaseLoader, LoadFailed
from compctx.loaders.text import is_plain_text
from compctx.loaders.walker import walk_dir
from compctx.registry import File

logger = logging.getLogger(__name__)


class DirectoryLoader(BaseLoader):
    """Loads a component from a directory tree.

    File paths are relative to the parent of the root, so the component
    directory name is their first segment (e.g., "widget/index.js").
    """

    name = "directory-loader"

    async def _load(self, source: Path) -> Context:
        if not source.is_dir():
            raise SourceNotFoundError(str(source))
        return await asyncio.to_thread(self._build, source)

    def _build(self, source: Path) -> Context:
        root = source.resolve()
        base_dir = root.parent
        max_depth = self.config.max_file_depth
        context = Context(root.name, ignore=self.config.ignore)
        deep_files: list[str] = []
        binary_files: list[str] = []

        def visit(absolute_path: Path, depth: int) -> None:
            relative_path = absolute_path.relative_to(base_dir).as_posix()

            if depth > max_depth:
                deep_files.append(relative_path)
                return

            try:
                raw = absolute_path.read_bytes()
            except OSError as e:
                raise SourceReadError(relative_path, e.strerror or str(e)) from e

            if not is_plain_text(relative_path, raw):
                binary_files.append(relative_path)
                return

            context.add_file(File(path=relative_path, content=raw.decode("utf-8")))

        def on_error(exc: OSError) -> None:
            path = Path(exc.filename) if exc.filename else root
            try:
                relative = path.relative_to(base_dir).as_posix()
            except ValueError:
                relative = str(path)
            raise SourceReadError(relative, exc.strerror or str(exc)) from exc

        visited = walk_dir(root, visit, on_error)
        logger.debug("walked %d files below %s", visited, root)

        errors: list[ContextError] = []
        if deep_files:
            logger.debug("%d files deeper than %d levels", len(deep_files), max_depth)
            errors.append(DeepHierarchyError(deep_files, max_depth))
        if binary_files:
            logger.debug("%d non-text files", len(binary_files))
            errors.append(BinaryContentError(binary_files))
        if errors:
            raise LoadFailed(errors)

        return context
