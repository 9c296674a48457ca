"""Check command: verify a changeset is ready for release."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pyangler.commands.base import Command, CommandContext
from pyangler.git import BaseRef
from pyangler.validation import ReleaseEvidence, Violation, validate

if TYPE_CHECKING:
    from rich.console import Console

    from pyangler.workspace import WorkspaceSet


@dataclass
class CheckOptions:
    """Options for check command."""

    base_ref: str | None = None
    require_prerelease: bool | None = None  # None: use configuration


@dataclass
class CheckResult:
    """Result of check command."""

    base_ref: BaseRef
    uncommitted: list[str] = field(default_factory=list)
    workspaces: WorkspaceSet | None = None
    violations: list[Violation] = field(default_factory=list)

    @property
    def nothing_to_check(self) -> bool:
        """No workspace is modified or unpublished."""
        return self.workspaces is not None and not self.workspaces.releasable()

    @property
    def success(self) -> bool:
        return not self.uncommitted and not self.violations


class CheckCommand(Command[CheckResult]):
    """Validate every modified or unpublished workspace."""

    def __init__(self, context: CommandContext, options: CheckOptions | None = None) -> None:
        super().__init__(context)
        self.options = options or CheckOptions()

    @property
    def require_prerelease(self) -> bool:
        if self.options.require_prerelease is None:
            return self.config.release.require_prerelease
        return self.options.require_prerelease

    async def execute(self) -> CheckResult:
        """Execute the check command."""
        snapshot = await self.snapshot(self.options.base_ref)
        result = CheckResult(
            base_ref=snapshot.base_ref,
            uncommitted=snapshot.uncommitted,
            workspaces=snapshot.workspaces,
        )
        if snapshot.workspaces is None:
            return result

        evidence = ReleaseEvidence(
            self.root, snapshot.base_ref, changelog_filename=self.config.changelog.filename
        )
        result.violations = await validate(
            snapshot.workspaces,
            snapshot.base_ref,
            evidence=evidence,
            require_prerelease=self.require_prerelease,
        )
        return result


async def check(
    context: CommandContext,
    *,
    base_ref: str | None = None,
    require_prerelease: bool | None = None,
) -> CheckResult:
    """Convenience function to check release readiness."""
    options = CheckOptions(base_ref=base_ref, require_prerelease=require_prerelease)
    return await CheckCommand(context, options).execute()


async def handle_check_command(
    context: CommandContext,
    *,
    console: Console,
    error_console: Console,
    base_ref: str | None = None,
    require_prerelease: bool | None = None,
) -> None:
    """Handle the check command from the CLI."""
    import typer

    from pyangler.cli.output import print_uncommitted, run_guarded

    async with run_guarded(error_console):
        result = await check(context, base_ref=base_ref, require_prerelease=require_prerelease)

    if context.verbose:
        console.print(f"[dim]Base reference: {result.base_ref}[/dim]")

    if result.uncommitted:
        print_uncommitted(error_console, result.uncommitted)
        raise typer.Exit(1)

    if result.nothing_to_check:
        console.print("No modified or unpublished workspaces.")
        return

    for violation in result.violations:
        error_console.print(str(violation), markup=False, highlight=False)

    if result.violations:
        raise typer.Exit(1)

    console.print("[green]All modified or unpublished workspaces are ready for release.[/green]")
