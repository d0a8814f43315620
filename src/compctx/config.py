"""Configuration management for compctx.

Handles configuration loading from multiple sources with precedence:
CLI args > environment variables > .compctxrc > pyproject.toml > defaults
"""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

# tomllib is only available in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

DEFAULT_MAX_FILE_DEPTH = 3
DEFAULT_ELEMENT_NAME_REGEX = r"[a-z][a-z0-9]*(-[a-z0-9]+)*"


@dataclass
class CompctxConfig:
    """Limits applied while loading a component.

    Attributes:
        max_file_depth: Maximum number of path segments below the component
            root (default: 3).
        element_name_regex: Pattern the component folder name of an archive
            must fully match.
        ignore: Glob patterns of paths exempt from rule checks.
    """

    max_file_depth: int = DEFAULT_MAX_FILE_DEPTH
    element_name_regex: str = DEFAULT_ELEMENT_NAME_REGEX
    ignore: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid.
        """
        if (
            isinstance(self.max_file_depth, bool)
            or not isinstance(self.max_file_depth, int)
            or self.max_file_depth < 1
        ):
            raise ValueError("max_file_depth must be an integer >= 1")

        if not self.element_name_regex or not isinstance(self.element_name_regex, str):
            raise ValueError("element_name_regex must be a non-empty string")
        try:
            re.compile(self.element_name_regex)
        except re.error as e:
            raise ValueError(f"element_name_regex is not a valid expression: {e}") from e

        if not isinstance(self.ignore, list) or not all(
            isinstance(pattern, str) for pattern in self.ignore
        ):
            raise ValueError("ignore must be a list of strings")

    def is_valid_name(self, name: str) -> bool:
        """Check whether a component folder name matches element_name_regex."""
        return re.fullmatch(self.element_name_regex, name) is not None


def _get_config_field_names() -> set[str]:
    """Get the set of valid configuration field names."""
    return {f.name for f in fields(CompctxConfig)}


def find_config_file(filename: str = ".compctxrc", start_dir: Path | None = None) -> Path | None:
    """Find a configuration file by traversing up the directory tree.

    Args:
        filename: Name of the config file to find.
        start_dir: Directory to start searching from. Defaults to current directory.

    Returns:
        Path to the config file if found, None otherwise.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        config_path = current / filename
        if config_path.is_file():
            return config_path

        parent = current.parent
        if parent == current:
            return None
        current = parent


def _load_toml_file(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        result: dict[str, Any] = tomllib.load(f)
        return result


def _load_from_compctxrc(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from a .compctxrc file.

    Returns:
        Configuration from .compctxrc, or empty dict if not found or unreadable.
    """
    config_path = find_config_file(".compctxrc", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
    except (tomllib.TOMLDecodeError, OSError):
        return {}

    valid_fields = _get_config_field_names()
    return {k: v for k, v in data.items() if k in valid_fields}


def _load_from_pyproject(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from the pyproject.toml [tool.compctx] section.

    Returns:
        Configuration from pyproject.toml, or empty dict if not found.
    """
    config_path = find_config_file("pyproject.toml", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
    except (tomllib.TOMLDecodeError, OSError):
        return {}

    section = data.get("tool", {}).get("compctx", {})
    valid_fields = _get_config_field_names()
    return {k: v for k, v in section.items() if k in valid_fields}


def _load_from_env() -> dict[str, Any]:
    """Load configuration from environment variables.

    Reads COMPCTX_MAX_FILE_DEPTH, COMPCTX_ELEMENT_NAME_REGEX and
    COMPCTX_IGNORE (comma separated patterns).
    """
    result: dict[str, Any] = {}

    depth = os.environ.get("COMPCTX_MAX_FILE_DEPTH")
    if depth is not None:
        try:
            result["max_file_depth"] = int(depth)
        except ValueError:
            # Left as a string so validation reports it
            result["max_file_depth"] = depth

    name_regex = os.environ.get("COMPCTX_ELEMENT_NAME_REGEX")
    if name_regex is not None:
        result["element_name_regex"] = name_regex

    ignore = os.environ.get("COMPCTX_IGNORE")
    if ignore is not None:
        result["ignore"] = [p.strip() for p in ignore.split(",") if p.strip()]

    return result


def _merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge configuration dictionaries; later ones take precedence."""
    result: dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if value is not None:
                result[key] = value
    return result


def load_config(
    cli_overrides: dict[str, Any] | None = None,
    start_dir: Path | None = None,
) -> CompctxConfig:
    """Load configuration with full precedence chain.

    Precedence (highest to lowest):
    1. CLI arguments (cli_overrides)
    2. Environment variables (COMPCTX_*)
    3. .compctxrc file
    4. pyproject.toml [tool.compctx] section
    5. Default values

    Args:
        cli_overrides: Configuration overrides from CLI arguments.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved CompctxConfig instance.

    Raises:
        ValueError: If the resulting configuration is invalid.
    """
    pyproject_config = _load_from_pyproject(start_dir)
    rc_config = _load_from_compctxrc(start_dir)
    env_config = _load_from_env()

    valid_fields = _get_config_field_names()
    cli_config = {
        k: v for k, v in (cli_overrides or {}).items() if k in valid_fields and v is not None
    }

    merged = _merge_configs(pyproject_config, rc_config, env_config, cli_config)
    return CompctxConfig(**merged)
