"""Validation context handed to rule checks."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from compctx.ignore import IgnoreMatcher
from compctx.registry import File, FileRef, FileRegistry, FileSelector


class Context:
    """A validated snapshot of one component's files.

    Combines a FileRegistry with an IgnoreMatcher under the component's name.

    Attributes:
        name: Component root folder name (e.g., "widget").
        files: Registry of the component's text files.
        ignore: Matcher for paths exempt from rule checks.
    """

    def __init__(
        self,
        name: str,
        files: Iterable[File] | None = None,
        ignore: Iterable[str] | None = None,
    ) -> None:
        """Initialize a context.

        Args:
            name: Component name.
            files: Optional initial files, in order.
            ignore: Optional glob patterns of ignored paths.

        Raises:
            DuplicatePathError: If two initial files share a path.
        """
        self.name = name
        self.files = FileRegistry(list(files or []))
        self.ignore = IgnoreMatcher(ignore)

    def is_ignore(self, path: str) -> bool:
        return self.ignore.is_ignore(path)

    def add_file(self, file: File) -> None:
        self.files.add_file(file)

    def remove_file(self, file: FileRef) -> None:
        self.files.remove_file(file)

    def exists_file(self, file: FileRef) -> bool:
        return self.files.exists_file(file)

    def get_file(self, file: FileRef) -> File | None:
        return self.files.get_file(file)

    def get_files(self, selector: FileSelector | None = None) -> list[File]:
        return self.files.get_files(selector)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the context for JSON output (file contents omitted)."""
        return {
            "name": self.name,
            "ignore": list(self.ignore.patterns),
            "files": [
                {
                    "path": f.path,
                    "lines": len(f.content.splitlines()),
                    "ignored": self.is_ignore(f.path),
                }
                for f in self.files
            ],
        }

    def __repr__(self) -> str:
        return f"Context(name={self.name!r}, files={len(self.files)})"
