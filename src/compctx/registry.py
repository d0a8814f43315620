"""Ordered registry of component files keyed by normalized path."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Union

from compctx.errors import DuplicatePathError


@dataclass(frozen=True)
class File:
    """A single text file of a component.

    Attributes:
        path: Forward-slash path relative to the component's parent
            directory (e.g., "widget/index.js").
        content: Full decoded text of the file.
    """

    path: str
    content: str


FileRef = Union[File, str]
FileSelector = Union[Callable[[File], bool], re.Pattern[str], str]


def _path_of(file: FileRef) -> str:
    return file if isinstance(file, str) else file.path


class FileRegistry:
    """Mapping from normalized path to File that preserves insertion order.

    Example:
        >>> registry = FileRegistry()
        >>> registry.add_file(File("widget/index.js", "export {};"))
        >>> registry.exists_file("widget/index.js")
        True
    """

    def __init__(self, files: list[File] | None = None) -> None:
        """Initialize the registry.

        Args:
            files: Optional files to register, in order.

        Raises:
            DuplicatePathError: If two of the given files share a path.
        """
        self._files: dict[str, File] = {}
        for file in files or []:
            self.add_file(file)

    def add_file(self, file: File) -> None:
        """Register a file.

        Args:
            file: File to add.

        Raises:
            DuplicatePathError: If a file with the same path is registered.
        """
        if file.path in self._files:
            raise DuplicatePathError(file.path)
        self._files[file.path] = file

    def remove_file(self, file: FileRef) -> None:
        """Remove a file by path. Does nothing if it is not registered."""
        self._files.pop(_path_of(file), None)

    def exists_file(self, file: FileRef) -> bool:
        """Check whether a file with the given path is registered."""
        return _path_of(file) in self._files

    def get_file(self, file: FileRef) -> File | None:
        """Get the registered file for a path, or None."""
        return self._files.get(_path_of(file))

    def get_files(self, selector: FileSelector | None = None) -> list[File]:
        """List registered files in insertion order.

        Args:
            selector: Optional filter. A callable is used as a predicate on
                each File; a compiled regular expression (or a string, which
                is compiled) keeps files whose path it matches anywhere.

        Returns:
            The selected files, in insertion order.

        Raises:
            TypeError: If the selector is of an unsupported type.
            re.error: If a string selector is not a valid expression.
        """
        files = list(self._files.values())
        if selector is None:
            return files

        if isinstance(selector, str):
            selector = re.compile(selector)

        if isinstance(selector, re.Pattern):
            pattern = selector
            return [f for f in files if pattern.search(f.path)]

        if callable(selector):
            return [f for f in files if selector(f)]

        raise TypeError(f"Unsupported file selector: {type(selector).__name__}")

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[File]:
        return iter(list(self._files.values()))

    def __contains__(self, file: object) -> bool:
        if isinstance(file, (File, str)):
            return self.exists_file(file)
        return False
