"""CLI utility functions for compctx.

Provides helper functions for:
- Config wiring: Extracting Typer CLI options and passing to load_config
- Path resolution: Resolving the component source argument
- Error formatting: Consistent user-friendly error messages with exit codes
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, NoReturn

import typer

from compctx.config import CompctxConfig, load_config
from compctx.errors import ContextError

# Exit code conventions
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # User error (bad input, missing file, etc.)
EXIT_LOAD_FAILURE = 2  # Component failed to load


# -----------------------------------------------------------------------------
# Error Formatting Helpers
# -----------------------------------------------------------------------------


def error(msg: str, *, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Print an error message and exit with the given exit code.

    Args:
        msg: The error message to display.
        exit_code: Exit code to use (default: EXIT_USER_ERROR=1).

    Raises:
        typer.Exit: Always raises to exit the program.
    """
    styled_prefix = typer.style("Error:", fg=typer.colors.RED, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)
    raise typer.Exit(code=exit_code)


def success(msg: str) -> None:
    """Print a success message to stdout."""
    styled_prefix = typer.style("Success:", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"{styled_prefix} {msg}")


def format_error_details(errors: list[str]) -> str:
    """Format a list of error messages for display.

    Args:
        errors: List of error messages.

    Returns:
        Formatted string with bullet points.
    """
    if not errors:
        return ""
    return "\n".join(f"  - {e}" for e in errors)


def describe_error(err: ContextError) -> str:
    """Render a load error as a headline followed by its offending paths.

    Errors naming a single path in their message are returned unchanged.
    """
    lines = str(err).splitlines()
    if len(lines) > 1:
        return f"{lines[0]}\n{format_error_details(err.paths)}"
    return lines[0]


def error_to_dict(err: ContextError) -> dict[str, Any]:
    """Serialize a load error for JSON output."""
    return {
        "kind": err.kind,
        "message": str(err).splitlines()[0],
        "paths": list(err.paths),
    }


# -----------------------------------------------------------------------------
# Path Resolution Helpers
# -----------------------------------------------------------------------------


def resolve_path(
    path: str | Path,
    base_path: Path | None = None,
) -> Path:
    """Resolve a path relative to a base path.

    Args:
        path: The path to resolve.
        base_path: Base path to resolve relative paths from. Defaults to cwd.

    Returns:
        Resolved absolute Path.
    """
    p = Path(path)
    base = base_path or Path.cwd()
    return p.resolve() if p.is_absolute() else (base / p).resolve()


def ensure_path_exists(path: Path, path_type: str = "path") -> Path:
    """Ensure a path exists.

    Raises:
        typer.Exit: If the path doesn't exist.
    """
    if not path.exists():
        error(f"{path_type} does not exist: {path}")

    return path


# -----------------------------------------------------------------------------
# Config Wiring Helper
# -----------------------------------------------------------------------------


def wire_config(
    max_depth: int | None = None,
    name_regex: str | None = None,
    ignore: list[str] | None = None,
    start_dir: Path | None = None,
) -> CompctxConfig:
    """Wire CLI options to load_config with appropriate overrides.

    Args:
        max_depth: Override for the maximum file depth.
        name_regex: Override for the component name pattern.
        ignore: Override for the ignore patterns. An empty list keeps the
            configured patterns.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved CompctxConfig instance.

    Raises:
        typer.Exit: If configuration is invalid.
    """
    cli_overrides: dict[str, Any] = {}

    if max_depth is not None:
        cli_overrides["max_file_depth"] = max_depth
    if name_regex is not None:
        cli_overrides["element_name_regex"] = name_regex
    if ignore:
        cli_overrides["ignore"] = list(ignore)

    try:
        return load_config(cli_overrides=cli_overrides, start_dir=start_dir)
    except ValueError as e:
        error(f"Invalid configuration: {e}", exit_code=EXIT_USER_ERROR)


# -----------------------------------------------------------------------------
# Typer Option Factory Functions
# -----------------------------------------------------------------------------
# Typer consumes Option objects when decorating commands, so each command
# needs a fresh instance.


def max_depth_option() -> Any:
    """Create a Typer Option for --max-depth / -d."""
    return typer.Option(
        None,
        "--max-depth",
        "-d",
        help="Override the maximum file depth below the component root (default: 3).",
    )


def name_regex_option() -> Any:
    """Create a Typer Option for --name-regex."""
    return typer.Option(
        None,
        "--name-regex",
        help="Override the pattern a zipped component's folder name must match.",
    )


def ignore_option() -> Any:
    """Create a repeatable Typer Option for --ignore / -i."""
    return typer.Option(
        None,
        "--ignore",
        "-i",
        help="Glob pattern of paths exempt from rule checks (repeatable).",
    )
