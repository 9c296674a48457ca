"""List command: show workspaces in release order."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pyangler.commands.base import Command, CommandContext
from pyangler.git import BaseRef
from pyangler.workspace import dependents_of

if TYPE_CHECKING:
    from rich.console import Console


@dataclass
class WorkspaceInfo:
    """Display row for one workspace."""

    name: str
    version: str
    location: str
    status: str
    dependencies: list[str]
    dependents: list[str]


@dataclass
class ListResult:
    """Result of list command."""

    base_ref: BaseRef
    uncommitted: list[str] = field(default_factory=list)
    workspaces: list[WorkspaceInfo] = field(default_factory=list)


def describe_status(is_private: bool, modified: bool, published: bool) -> str:
    if is_private:
        return "private"
    parts = ["modified" if modified else "unmodified"]
    parts.append("published" if published else "unpublished")
    return ", ".join(parts)


class ListCommand(Command[ListResult]):
    """Collect workspace state without validating it."""

    def __init__(self, context: CommandContext, base_ref: str | None = None) -> None:
        super().__init__(context)
        self.base_ref = base_ref

    async def execute(self) -> ListResult:
        snapshot = await self.snapshot(self.base_ref)
        result = ListResult(base_ref=snapshot.base_ref, uncommitted=snapshot.uncommitted)
        if snapshot.workspaces is None:
            return result

        for workspace in snapshot.workspaces.values():
            result.workspaces.append(
                WorkspaceInfo(
                    name=workspace.name,
                    version=str(workspace.version),
                    location=workspace.location,
                    status=describe_status(
                        workspace.is_private, workspace.modified, workspace.published
                    ),
                    dependencies=sorted(workspace.dependency_names),
                    dependents=dependents_of(snapshot.workspaces, workspace.name),
                )
            )
        return result


async def handle_list_command(
    context: CommandContext,
    *,
    console: Console,
    error_console: Console,
    base_ref: str | None = None,
    json_output: bool = False,
) -> None:
    """Handle the list command from the CLI."""
    import typer
    from rich.table import Table

    from pyangler.cli.output import print_uncommitted, run_guarded

    async with run_guarded(error_console):
        result = await ListCommand(context, base_ref).execute()

    if result.uncommitted:
        print_uncommitted(error_console, result.uncommitted)
        raise typer.Exit(1)

    if json_output:
        import json

        data = [
            {
                "name": w.name,
                "version": w.version,
                "location": w.location,
                "status": w.status,
                "dependencies": w.dependencies,
                "dependents": w.dependents,
            }
            for w in result.workspaces
        ]
        console.print_json(json.dumps(data))
        return

    table = Table(title=f"Workspaces in release order (base: {result.base_ref})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Version")
    table.add_column("Location")
    table.add_column("Status")
    table.add_column("Dependencies")

    for i, w in enumerate(result.workspaces, start=1):
        deps = ", ".join(w.dependencies) if w.dependencies else "-"
        table.add_row(str(i), w.name, w.version, w.location, w.status, deps)

    console.print(table)
