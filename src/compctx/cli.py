"""compctx CLI - Main entry point."""

from __future__ import annotations

import asyncio
import json
import logging

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from compctx import __version__
from compctx.cli_utils import (
    EXIT_LOAD_FAILURE,
    describe_error,
    ensure_path_exists,
    error_to_dict,
    ignore_option,
    max_depth_option,
    name_regex_option,
    resolve_path,
    success,
    wire_config,
)
from compctx.context import Context
from compctx.loaders import get_loader
from compctx.loaders.base import LoadResult

app = typer.Typer(
    name="compctx",
    help="compctx - Load a component directory or zip archive into a validated context.",
    add_completion=False,
)

# Rich consoles for output
console = Console()
err_console = Console(stderr=True)


# -----------------------------------------------------------------------------
# Output Helpers
# -----------------------------------------------------------------------------


def _output_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _files_table(context: Context) -> Table:
    table = Table(title=f"Component: {context.name}")
    table.add_column("Path", style="cyan")
    table.add_column("Lines", justify="right")
    table.add_column("Ignored")

    for file in context.get_files():
        table.add_row(
            file.path,
            str(len(file.content.splitlines())),
            "yes" if context.is_ignore(file.path) else "",
        )

    return table


def _result_to_dict(result: LoadResult) -> dict[str, object]:
    data: dict[str, object] = {"status": result.status, "source": result.source}
    if result.context is not None:
        data.update(result.context.to_dict())
    data["errors"] = [error_to_dict(e) for e in result.errors]
    return data


# -----------------------------------------------------------------------------
# Version and Main Callbacks
# -----------------------------------------------------------------------------


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"compctx version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """compctx - Load a component directory or zip archive into a validated context."""
    pass


# -----------------------------------------------------------------------------
# Load Command
# -----------------------------------------------------------------------------


@app.command()
def load(
    path: str = typer.Argument(
        ...,
        help="Component directory or zip archive to load.",
    ),
    max_depth: int | None = max_depth_option(),
    name_regex: str | None = name_regex_option(),
    ignore: list[str] | None = ignore_option(),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Minimal output for CI.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log loader activity to stderr.",
    ),
) -> None:
    """Load a component and list its files.

    Exits with code 2 when the component fails to load, after reporting
    every offending path.
    """
    _configure_logging(verbose)

    source = resolve_path(path)
    ensure_path_exists(source, "Component source")
    config = wire_config(max_depth=max_depth, name_regex=name_regex, ignore=ignore)

    result = asyncio.run(get_loader(source, config).load(source))

    if json_output:
        typer.echo(json.dumps(_result_to_dict(result), indent=2))
        if not result.ok:
            raise typer.Exit(code=EXIT_LOAD_FAILURE)
        return

    if not result.ok:
        for err in result.errors:
            _output_error(describe_error(err))
        raise typer.Exit(code=EXIT_LOAD_FAILURE)

    context = result.unwrap()
    if quiet:
        return

    console.print(_files_table(context))
    success(f"Loaded component '{context.name}' with {len(context.files)} files")


if __name__ == "__main__":
    app()
