"""Build validated in-memory snapshots of a component's source files."""

from __future__ import annotations

from compctx.config import CompctxConfig, load_config
from compctx.context import Context
from compctx.errors import ContextError
from compctx.ignore import IgnoreMatcher
from compctx.loaders import DirectoryLoader, LoadResult, ZipLoader, load_component
from compctx.registry import File, FileRegistry

__version__ = "0.1.0"

__all__ = [
    "CompctxConfig",
    "Context",
    "ContextError",
    "DirectoryLoader",
    "File",
    "FileRegistry",
    "IgnoreMatcher",
    "LoadResult",
    "ZipLoader",
    "__version__",
    "load_component",
    "load_config",
]
