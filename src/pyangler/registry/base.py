"""Package index interface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from packaging.version import Version

if TYPE_CHECKING:
    from pyangler.workspace.models import Workspace


@dataclass(frozen=True)
class PublishOptions:
    """Options for publishing one workspace.

    Attributes:
        prerelease: The version is a prerelease.
        dry_run: Build and check, but do not upload.
        channel_override: Explicit upload repository; wins over any
            prerelease routing.
    """

    prerelease: bool = False
    dry_run: bool = False
    channel_override: str | None = None


class Registry(Protocol):
    """What pyangler needs from a package index."""

    async def exists(self, name: str, version: Version) -> bool:
        """Whether ``name==version`` is already on the index."""
        ...

    async def publish(self, workspace: Workspace, options: PublishOptions) -> None:
        """Upload a workspace. Raises on failure."""
        ...
