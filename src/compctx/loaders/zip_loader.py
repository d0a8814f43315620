"""Loader building a Context from a zipped component.

Archive checks run in a fixed order and stop at the first failure:
read, extract, text filter, emptiness, component name, depth.
"""

from __future__ import annotations

import asyncio
import io
import logging
import zipfile
import zlib
from pathlib import Path

from compctx.context import Context
from compctx.errors import (
    DeepHierarchyError,
    EmptyComponentError,
    InvalidComponentNameError,
    SourceNotFoundError,
    ZipDecodeError,
    ZipReadError,
)
from compctx.loaders.base import BaseLoader
from compctx.loaders.text import is_plain_text
from compctx.registry import File

logger = logging.getLogger(__name__)

# Entries containing any of these are OS metadata, never component files
SYSTEM_MARKERS = ("__MACOSX", ".DS_Store", "Thumbs.db")

MAX_CONCURRENT_READS = 16


def is_system_entry(path: str) -> bool:
    """Check whether an archive entry is OS metadata (resource forks, desktop files)."""
    return any(marker in path for marker in SYSTEM_MARKERS)


def entry_depth(path: str) -> int:
    """Depth of an archive entry: the number of "/" separators in its path."""
    return path.count("/")


def component_name(path: str) -> str:
    """Top-level folder of an archive entry, or "" for a root-level entry."""
    head, sep, _ = path.partition("/")
    return head if sep else ""


class ZipLoader(BaseLoader):
    """Loads a component from a zip archive.

    Binary entries, judged by extension and by content, are dropped without
    being reported; every remaining entry must sit inside the component
    folder and within the depth limit.
    """

    name = "zip-loader"

    async def _load(self, source: Path) -> Context:
        if not source.exists():
            raise SourceNotFoundError(str(source))

        archive = await asyncio.to_thread(self._open_archive, source)
        with archive:
            candidates = self._select_entries(archive)
            semaphore = asyncio.Semaphore(MAX_CONCURRENT_READS)

            async def read(path: str, info: zipfile.ZipInfo) -> bytes:
                async with semaphore:
                    return await asyncio.to_thread(self._read_entry, archive, path, info)

            # All reads finish before the archive closes
            outcomes = await asyncio.gather(
                *(read(path, info) for path, info in candidates),
                return_exceptions=True,
            )

        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome

        entries: list[tuple[str, bytes]] = []
        for (path, _), data in zip(candidates, outcomes):
            if not is_plain_text(path, data):
                logger.debug("dropping binary archive entry %s", path)
                continue
            entries.append((path, data))

        if not entries:
            raise EmptyComponentError(str(source))

        name = component_name(entries[0][0])
        if not self.config.is_valid_name(name):
            raise InvalidComponentNameError(name, self.config.element_name_regex)

        max_depth = self.config.max_file_depth
        deep_files = [
            path
            for path, _ in entries
            if entry_depth(path) == 0 or entry_depth(path) > max_depth
        ]
        if deep_files:
            raise DeepHierarchyError(deep_files, max_depth)

        context = Context(name, ignore=self.config.ignore)
        for path, data in entries:
            context.add_file(File(path=path, content=data.decode("utf-8")))
        return context

    def _open_archive(self, source: Path) -> zipfile.ZipFile:
        try:
            data = source.read_bytes()
        except OSError as e:
            raise ZipReadError(str(source), e.strerror or str(e)) from e

        try:
            return zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as e:
            raise ZipReadError(str(source), str(e)) from e

    def _select_entries(self, archive: zipfile.ZipFile) -> list[tuple[str, zipfile.ZipInfo]]:
        """Keep file entries in archive order, with normalized paths.

        Entries with a known binary extension are dropped here, before
        anything is decompressed.
        """
        selected: list[tuple[str, zipfile.ZipInfo]] = []

        for info in archive.infolist():
            path = info.filename.replace("\\", "/")
            if is_system_entry(path):
                logger.debug("skipping system entry %s", path)
                continue
            if info.is_dir():
                continue
            if not is_plain_text(path):
                logger.debug("dropping binary archive entry %s", path)
                continue
            selected.append((path, info))

        return selected

    @staticmethod
    def _read_entry(archive: zipfile.ZipFile, path: str, info: zipfile.ZipInfo) -> bytes:
        try:
            return archive.read(info)
        except (
            zipfile.BadZipFile,
            zlib.error,
            NotImplementedError,
            RuntimeError,
            EOFError,
            OSError,
        ) as e:
            raise ZipDecodeError(path, str(e)) from e
