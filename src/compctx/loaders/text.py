"""Plain-text detection for component files.

A file is text unless its extension is a known binary format or, when its
bytes are available, the bytes contain NUL characters or are not UTF-8.
"""

from __future__ import annotations

from pathlib import PurePosixPath

# Number of leading bytes inspected for NUL characters
SNIFF_SIZE = 8192

BINARY_EXTENSIONS = frozenset(
    {
        # Images
        ".png",
        ".jpg",
        ".jpeg",
        ".gif",
        ".bmp",
        ".ico",
        ".webp",
        ".tif",
        ".tiff",
        ".psd",
        # Fonts
        ".eot",
        ".otf",
        ".ttf",
        ".woff",
        ".woff2",
        # Archives
        ".zip",
        ".gz",
        ".tgz",
        ".bz2",
        ".xz",
        ".7z",
        ".rar",
        ".tar",
        ".jar",
        # Media
        ".mp3",
        ".mp4",
        ".wav",
        ".ogg",
        ".avi",
        ".mov",
        ".webm",
        ".flv",
        ".swf",
        # Documents
        ".pdf",
        ".doc",
        ".docx",
        ".xls",
        ".xlsx",
        ".ppt",
        ".pptx",
        # Compiled artifacts
        ".exe",
        ".dll",
        ".so",
        ".dylib",
        ".o",
        ".a",
        ".class",
        ".pyc",
        ".wasm",
        ".bin",
    }
)


def has_binary_extension(path: str) -> bool:
    """Check whether a path ends with a known binary file extension."""
    suffix = PurePosixPath(path.replace("\\", "/")).suffix.lower()
    return suffix in BINARY_EXTENSIONS


def looks_like_text(content: bytes) -> bool:
    """Check raw bytes for text: no NUL in the leading bytes and valid UTF-8."""
    if b"\x00" in content[:SNIFF_SIZE]:
        return False
    try:
        content.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def is_plain_text(path: str, content: bytes | None = None) -> bool:
    """Decide whether a file is plain text.

    Args:
        path: File path; only its extension is inspected.
        content: Optional raw bytes of the file.

    Returns:
        False for known binary extensions or non-text bytes, True otherwise.
    """
    if has_binary_extension(path):
        return False
    if content is None:
        return True
    return looks_like_text(content)
