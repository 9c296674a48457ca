"""pyangler CLI application."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from pyangler.commands import CommandContext
from pyangler.errors import PyAnglerError
from pyangler.git import get_repo_root


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from pyangler import __version__

        print(f"pyangler {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="pyangler",
    help="Git annotated-tag release gate and publisher for Python monorepos.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def _app_callback(
    version: Annotated[  # noqa: ARG001
        bool,
        typer.Option("--version", "-V", help="Show version and exit", callback=version_callback),
    ] = False,
) -> None:
    """Git annotated-tag release gate and publisher for Python monorepos."""
    pass


console = Console()
error_console = Console(stderr=True)

BaseRefOption = Annotated[
    str | None,
    typer.Option(
        "--base-ref",
        "-b",
        help="Git base reference for detecting modified workspaces",
        envvar="PYANGLER_BASE_REF",
    ),
]
PrereleaseOption = Annotated[
    bool | None,
    typer.Option(
        "--prerelease/--no-prerelease",
        help="Require prerelease versions (default from pyangler.yaml)",
    ),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show detailed output")]


def get_context(*, dry_run: bool = False, verbose: bool = False) -> CommandContext:
    """Load configuration for the repository containing the current directory."""
    try:
        root = get_repo_root(Path.cwd())
        return CommandContext.discover(root, dry_run=dry_run, verbose=verbose)
    except PyAnglerError as e:
        error_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(1) from e


def check_cmd(
    base_ref: BaseRefOption = None,
    prerelease: PrereleaseOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Verify that a changeset is ready for release."""
    from pyangler.commands import handle_check_command

    context = get_context(verbose=verbose)
    asyncio.run(
        handle_check_command(
            context,
            console=console,
            error_console=error_console,
            base_ref=base_ref,
            require_prerelease=prerelease,
        )
    )


def release_cmd(
    base_ref: BaseRefOption = None,
    prerelease: PrereleaseOption = None,
    tag: Annotated[
        bool,
        typer.Option("--tag/--no-tag", help="Tag the released commit"),
    ] = True,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Build and check uploads without publishing or tagging"),
    ] = False,
    registry: Annotated[
        str | None,
        typer.Option("--registry", help="Upload URL overriding the configured registries"),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Publish packages for all modified or unpublished workspaces."""
    from pyangler.commands import handle_release_command

    context = get_context(dry_run=dry_run, verbose=verbose)
    asyncio.run(
        handle_release_command(
            context,
            console=console,
            error_console=error_console,
            base_ref=base_ref,
            tag=tag,
            dry_run=dry_run,
            require_prerelease=prerelease,
            registry=registry,
        )
    )


@app.command("list")
def list_cmd(
    base_ref: BaseRefOption = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """List workspaces in release order."""
    from pyangler.commands import handle_list_command

    context = get_context(verbose=verbose)
    asyncio.run(
        handle_list_command(
            context,
            console=console,
            error_console=error_console,
            base_ref=base_ref,
            json_output=json_output,
        )
    )


app.command("check")(check_cmd)
for _alias in ("verify", "validate", "test"):
    app.command(_alias, hidden=True)(check_cmd)

app.command("release")(release_cmd)
for _alias in ("publish", "deploy"):
    app.command(_alias, hidden=True)(release_cmd)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
