"""Base command infrastructure."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Generic, TypeVar

from pyangler.config import PyAnglerConfig, load_config
from pyangler.git import (
    AtRef,
    BaseRef,
    fetch_ref,
    fetch_unshallow,
    get_uncommitted,
    resolve_base_ref,
)
from pyangler.registry import PyPIRegistry, Registry
from pyangler.workspace import WorkspaceSet, build_workspaces

TResult = TypeVar("TResult")


@dataclass
class CommandContext:
    """Context passed to all commands.

    Attributes:
        root: Repository root.
        config: Loaded configuration.
        registry: Package index.
        dry_run: If True, show what would happen without making changes.
        verbose: If True, show detailed output.
    """

    root: Path
    config: PyAnglerConfig = field(default_factory=PyAnglerConfig)
    registry: Registry | None = None
    dry_run: bool = False
    verbose: bool = False

    @classmethod
    def discover(cls, root: Path, **kwargs: bool) -> CommandContext:
        """Create a context with configuration loaded from ``root``."""
        return cls(root=root, config=load_config(root), **kwargs)


@dataclass
class Snapshot:
    """Repository state a check or release works from.

    ``workspaces`` is None when the working tree has uncommitted changes and
    the command must stop before looking at workspaces.
    """

    base_ref: BaseRef
    uncommitted: list[str] = field(default_factory=list)
    workspaces: WorkspaceSet | None = None


class Command(ABC, Generic[TResult]):
    """Base class for all pyangler commands.

    Commands encapsulate the logic for a specific operation.
    They receive a context and return a result.
    """

    def __init__(self, context: CommandContext) -> None:
        self.context = context
        self.root = context.root
        self.config = context.config
        self.registry: Registry = context.registry or PyPIRegistry(self.root, self.config.publish)

    async def snapshot(self, base_ref: str | None = None) -> Snapshot:
        """Resolve the base reference and collect the workspace set.

        Full history is fetched first so the base reference and the
        historical manifests are available in shallow CI clones.
        """
        await fetch_unshallow(self.root)
        resolved = await resolve_base_ref(self.root, base_ref)

        if self.config.release.require_clean:
            uncommitted = await get_uncommitted(self.root, self.config.release.ignore_uncommitted)
            if uncommitted:
                return Snapshot(base_ref=resolved, uncommitted=uncommitted)

        if isinstance(resolved, AtRef):
            await fetch_ref(self.root, resolved.ref)

        workspaces = await build_workspaces(
            self.root, resolved, registry=self.registry, config=self.config
        )
        return Snapshot(base_ref=resolved, workspaces=workspaces)

    @abstractmethod
    async def execute(self) -> TResult:
        """Execute the command.

        Returns:
            Command-specific result.
        """
        ...
