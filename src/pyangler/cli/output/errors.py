"""Error rendering for CLI output."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

import typer
from rich.console import Console
from rich.markup import escape

from pyangler.errors import CommandError, PyAnglerError


def print_command_error(error_console: Console, error: CommandError) -> None:
    """Print a failed external command: environment, command line, output."""
    for key, value in error.env.items():
        if value is not None:
            error_console.print(f"{key}={value}", markup=False, highlight=False)
    error_console.print(f"> {error.command}", markup=False, highlight=False)
    if error.output:
        error_console.print(error.output.rstrip(), markup=False, highlight=False)


def print_uncommitted(error_console: Console, files: Sequence[str]) -> None:
    error_console.print("[red]All changes must be committed.[/red]")
    for filename in files:
        error_console.print(f"  {escape(filename)}")


@asynccontextmanager
async def run_guarded(error_console: Console) -> AsyncIterator[None]:
    """Turn pyangler errors into CLI exits.

    Failed external commands exit with the command's exit code; other
    pyangler errors exit with 1. Set ``PYANGLER_DEBUG`` for a traceback.
    """
    try:
        yield
    except CommandError as e:
        print_command_error(error_console, e)
        raise typer.Exit(e.exit_code or 1) from e
    except PyAnglerError as e:
        if os.environ.get("PYANGLER_DEBUG"):
            error_console.print_exception()
        else:
            error_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(1) from e
