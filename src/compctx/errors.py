"""Error types raised while building a component context.

Every error carries a ``kind`` tag so callers can branch on the failure
without matching on message text. Errors that concern several files keep
the full list of offending paths in ``paths``.
"""

from __future__ import annotations

from typing import Literal

ErrorKind = Literal[
    "source_not_found",
    "source_read_error",
    "deep_hierarchy",
    "binary_content",
    "zip_read_error",
    "zip_decode_error",
    "invalid_component_name",
    "empty_component",
    "duplicate_path",
]


class ContextError(Exception):
    """Base class for all context building errors.

    Attributes:
        kind: Tag identifying the failure.
        paths: Offending paths, in discovery order.
    """

    kind: ErrorKind

    def __init__(self, message: str, paths: list[str] | None = None) -> None:
        self.paths = list(paths or [])
        super().__init__(message)


class SourceNotFoundError(ContextError):
    """Raised when the component directory or archive does not exist."""

    kind: ErrorKind = "source_not_found"

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Component source not found: {path}", [path])


class SourceReadError(ContextError):
    """Raised when a file or directory of the component cannot be read."""

    kind: ErrorKind = "source_read_error"

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        message = f"Cannot read component file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, [path])


class DeepHierarchyError(ContextError):
    """Raised when files are nested deeper than the configured maximum."""

    kind: ErrorKind = "deep_hierarchy"

    def __init__(self, paths: list[str], max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(
            f"Files nested deeper than {max_depth} levels:\n" + "\n".join(paths),
            paths,
        )


class BinaryContentError(ContextError):
    """Raised when a component directory contains non-text files."""

    kind: ErrorKind = "binary_content"

    def __init__(self, paths: list[str]) -> None:
        super().__init__("Files with non-text content:\n" + "\n".join(paths), paths)


class ZipReadError(ContextError):
    """Raised when an archive cannot be read or is not a zip file."""

    kind: ErrorKind = "zip_read_error"

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        message = f"Cannot read zip archive: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, [path])


class ZipDecodeError(ContextError):
    """Raised when an archive entry cannot be decompressed or decoded."""

    kind: ErrorKind = "zip_decode_error"

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        message = f"Cannot decode zip entry: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, [path])


class InvalidComponentNameError(ContextError):
    """Raised when the archive's top-level folder is not a valid component name."""

    kind: ErrorKind = "invalid_component_name"

    def __init__(self, name: str, pattern: str) -> None:
        self.name = name
        self.pattern = pattern
        super().__init__(
            f"Invalid component directory name {name!r} (expected to match {pattern!r})"
        )


class EmptyComponentError(ContextError):
    """Raised when an archive holds no usable component files."""

    kind: ErrorKind = "empty_component"

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No component directory found in archive: {path}")


class DuplicatePathError(ContextError):
    """Raised when a file is added under a path that is already registered."""

    kind: ErrorKind = "duplicate_path"

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File already exists: {path}", [path])
