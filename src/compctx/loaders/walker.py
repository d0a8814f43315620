"""Recursive directory walk reporting each file with its depth."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

Visitor = Callable[[Path, int], None]
ErrorHandler = Callable[[OSError], None]


def _raise(exc: OSError) -> None:
    raise exc


def walk_dir(root: Path, visitor: Visitor, on_error: ErrorHandler | None = None) -> int:
    """Walk every file below root in sorted order.

    Depth is the number of path segments of the file below root, so
    ``root/index.js`` has depth 1 and ``root/a/b.js`` has depth 2.

    Args:
        root: Directory to walk.
        visitor: Called with (absolute_path, depth) for every file.
        on_error: Called with the OSError when a directory cannot be listed.
            Without it the error propagates.

    Returns:
        Number of files visited.
    """
    handler = on_error or _raise
    root = root.resolve()
    visited = 0

    for dirpath, dirnames, filenames in os.walk(root, onerror=handler):
        dirnames.sort()
        current = Path(dirpath)
        depth = len(current.relative_to(root).parts) + 1
        for filename in sorted(filenames):
            visitor(current / filename, depth)
            visited += 1

    return visited
