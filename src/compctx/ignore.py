"""Glob-based matching of paths that downstream checks should skip.

Patterns are shell globs matched against the whole path with ``wcmatch``:
``*`` and ``?`` stop at ``/``, ``**`` crosses directories, and ``[...]``
classes, ``{a,b}`` braces and ``+(a|b)`` style extglobs are supported.
Wildcards do not match a leading dot in a path segment.
"""

from __future__ import annotations

from collections.abc import Iterable

from wcmatch import glob

# Unix matching rules on every platform
GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.EXTGLOB | glob.FORCEUNIX


class IgnoreMatcher:
    """Evaluates paths against an ordered list of glob patterns.

    Attributes:
        patterns: The configured patterns, in order.
    """

    def __init__(self, patterns: Iterable[str] | None = None) -> None:
        self.patterns: list[str] = list(patterns or [])

    def is_ignore(self, path: str) -> bool:
        """Check whether a path matches any configured pattern.

        Args:
            path: Path to check. Backslashes are treated as separators.

        Returns:
            True if any pattern matches the full path, False otherwise.
        """
        if not self.patterns:
            return False

        posix_path = path.replace("\\", "/")
        return any(
            glob.globmatch(posix_path, pattern, flags=GLOB_FLAGS) for pattern in self.patterns
        )

    def __len__(self) -> int:
        return len(self.patterns)

    def __repr__(self) -> str:
        return f"IgnoreMatcher({self.patterns!r})"
