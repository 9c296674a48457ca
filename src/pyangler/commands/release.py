"""Release command: tag the release commit and publish in dependency order."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from pyangler.commands.base import Command, CommandContext
from pyangler.errors import ReleaseError
from pyangler.git import BaseRef, create_annotated_tag, push_tag
from pyangler.registry import PublishOptions

if TYPE_CHECKING:
    from rich.console import Console

    from pyangler.workspace import Workspace, WorkspaceSet


class PublishStatus(str, Enum):
    """Progress of one workspace through the release."""

    SKIPPED = "skipped"
    PUBLISHING = "publishing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ReleaseEvent:
    """A progress report for one workspace.

    Attributes:
        workspace: The workspace.
        status: What happened.
        reason: Why it was skipped ("private" or "published"), or why it was
            selected ("modified" or "unpublished").
    """

    workspace: Workspace
    status: PublishStatus
    reason: str = ""


@dataclass
class ReleaseOptions:
    """Options for release command."""

    base_ref: str | None = None
    tag: bool = True
    dry_run: bool = False
    require_prerelease: bool | None = None  # None: use configuration
    registry: str | None = None


@dataclass
class ReleaseResult:
    """Result of release command."""

    base_ref: BaseRef
    uncommitted: list[str] = field(default_factory=list)
    tag: str | None = None
    published: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    nothing_to_release: bool = False

    @property
    def success(self) -> bool:
        return not self.uncommitted


def format_tag_message(header: str, workspaces: list[Workspace]) -> str:
    """Tag annotation listing every workspace in the release."""
    lines = [f"{w.name}=={w.version}" for w in workspaces]
    return "\n".join([header, "", *lines])


class ReleaseCommand(Command[ReleaseResult]):
    """Publish every modified or unpublished workspace in dependency order.

    Publishing stops at the first failure. Workspaces published before the
    failure stay published.
    """

    def __init__(
        self,
        context: CommandContext,
        options: ReleaseOptions | None = None,
        *,
        on_event: Callable[[ReleaseEvent], None] | None = None,
    ) -> None:
        super().__init__(context)
        self.options = options or ReleaseOptions()
        self.on_event = on_event

    @property
    def is_dry_run(self) -> bool:
        return self.options.dry_run or self.context.dry_run

    @property
    def require_prerelease(self) -> bool:
        if self.options.require_prerelease is None:
            return self.config.release.require_prerelease
        return self.options.require_prerelease

    def _emit(self, workspace: Workspace, status: PublishStatus, reason: str = "") -> None:
        if self.on_event is not None:
            self.on_event(ReleaseEvent(workspace, status, reason))

    def tag_name(self) -> str:
        return self.config.release.tag_format.format(timestamp=int(time.time() * 1000))

    async def _create_tag(self, publishable: list[Workspace]) -> str | None:
        if self.is_dry_run or not self.options.tag:
            return None
        name = self.tag_name()
        message = format_tag_message(self.config.release.tag_message, publishable)
        await create_annotated_tag(self.root, name, message)
        await push_tag(self.root, name)
        return name

    async def _publish(self, workspace: Workspace) -> None:
        if self.require_prerelease and not workspace.is_prerelease:
            raise ReleaseError(f"{workspace.name}: Use a prerelease version.")

        self._emit(
            workspace,
            PublishStatus.PUBLISHING,
            "modified" if workspace.modified else "unpublished",
        )
        options = PublishOptions(
            prerelease=workspace.is_prerelease,
            dry_run=self.is_dry_run,
            channel_override=self.options.registry,
        )
        try:
            await self.registry.publish(workspace, options)
        except Exception:
            self._emit(workspace, PublishStatus.FAILED)
            raise
        self._emit(workspace, PublishStatus.SUCCEEDED)

    async def publish_all(self, workspaces: WorkspaceSet, result: ReleaseResult) -> None:
        """Publish releasable workspaces, walking the full release order."""
        for workspace in workspaces.values():
            if not workspace.is_releasable:
                self._emit(
                    workspace,
                    PublishStatus.SKIPPED,
                    "private" if workspace.is_private else "published",
                )
                result.skipped.append(workspace.name)
                continue
            await self._publish(workspace)
            result.published.append(workspace.name)

    async def execute(self) -> ReleaseResult:
        """Execute the release command."""
        snapshot = await self.snapshot(self.options.base_ref)
        result = ReleaseResult(base_ref=snapshot.base_ref, uncommitted=snapshot.uncommitted)
        if snapshot.workspaces is None:
            return result

        publishable = snapshot.workspaces.releasable()
        if not publishable:
            result.nothing_to_release = True
            return result

        result.tag = await self._create_tag(publishable)
        await self.publish_all(snapshot.workspaces, result)
        return result


async def release(
    context: CommandContext,
    *,
    base_ref: str | None = None,
    tag: bool = True,
    dry_run: bool = False,
    require_prerelease: bool | None = None,
    registry: str | None = None,
    on_event: Callable[[ReleaseEvent], None] | None = None,
) -> ReleaseResult:
    """Convenience function to release workspaces."""
    options = ReleaseOptions(
        base_ref=base_ref,
        tag=tag,
        dry_run=dry_run,
        require_prerelease=require_prerelease,
        registry=registry,
    )
    return await ReleaseCommand(context, options, on_event=on_event).execute()


def print_event(console: Console, event: ReleaseEvent) -> None:
    """Print one progress line."""
    workspace = event.workspace
    label = f"[bold]{workspace.name}[/bold]: "
    match event.status:
        case PublishStatus.SKIPPED:
            console.print(f"{label}skipped v{workspace.version} ({event.reason}).", style="dim")
        case PublishStatus.PUBLISHING:
            console.print(f"{label}publishing v{workspace.version} ({event.reason})...", end="")
        case PublishStatus.SUCCEEDED:
            console.print("[green]succeeded.[/green]")
        case PublishStatus.FAILED:
            console.print("[red]failed.[/red]")


async def handle_release_command(
    context: CommandContext,
    *,
    console: Console,
    error_console: Console,
    base_ref: str | None = None,
    tag: bool = True,
    dry_run: bool = False,
    require_prerelease: bool | None = None,
    registry: str | None = None,
) -> None:
    """Handle the release command from the CLI."""
    import typer

    from pyangler.cli.output import print_uncommitted, run_guarded

    if dry_run:
        console.print("[yellow]Dry run - nothing will be tagged or uploaded[/yellow]")

    async with run_guarded(error_console):
        result = await release(
            context,
            base_ref=base_ref,
            tag=tag,
            dry_run=dry_run,
            require_prerelease=require_prerelease,
            registry=registry,
            on_event=lambda event: print_event(console, event),
        )

    if context.verbose:
        console.print(f"[dim]Base reference: {result.base_ref}[/dim]")

    if result.uncommitted:
        print_uncommitted(error_console, result.uncommitted)
        raise typer.Exit(1)

    if result.nothing_to_release:
        console.print("No modified or unpublished workspaces.")
        return

    if result.tag:
        console.print(f"Tagged release: [blue]{result.tag}[/blue]")
    console.print(f"\n[green]Released {len(result.published)} workspaces[/green]")
