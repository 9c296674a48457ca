"""PyPI-compatible package index."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import httpx
from packaging.version import Version

from pyangler.config.schema import PublishConfig
from pyangler.errors import PublishError, RegistryError
from pyangler.registry.base import PublishOptions
from pyangler.uv.client import is_uv_installed
from pyangler.uv.publish import build_and_publish

if TYPE_CHECKING:
    from pyangler.workspace.models import Workspace


class PyPIRegistry:
    """Looks up releases through the JSON API and uploads with uv.

    Args:
        root: Repository root; workspace locations are relative to it.
        config: Index and upload settings.
        timeout: HTTP timeout in seconds.
        transport: Optional httpx transport (used by tests).
    """

    def __init__(
        self,
        root: Path,
        config: PublishConfig | None = None,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.root = root
        self.config = config or PublishConfig()
        self.timeout = timeout
        self.transport = transport

    def release_url(self, name: str, version: Version) -> str:
        return f"{self.config.index_url}/pypi/{name}/{version}/json"

    async def exists(self, name: str, version: Version) -> bool:
        """Check whether a release exists on the index.

        Raises:
            RegistryError: If the index answers with anything but 200 or 404,
                or cannot be reached.
        """
        url = self.release_url(name, version)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, follow_redirects=True)
        except httpx.HTTPError as e:
            raise RegistryError(f"Could not query {url}: {e}") from e

        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False
        raise RegistryError(f"Unexpected response {response.status_code} from {url}")

    def repository_for(self, options: PublishOptions) -> str:
        """Pick the upload repository for a publish."""
        if options.channel_override:
            return options.channel_override
        if options.prerelease and self.config.prerelease_registry:
            return self.config.prerelease_registry
        return self.config.registry

    async def publish(self, workspace: Workspace, options: PublishOptions) -> None:
        """Build and upload a workspace.

        Raises:
            PublishError: If uv is not installed.
            CommandError: If uv fails to build or upload.
        """
        if not is_uv_installed():
            raise PublishError("uv is not installed", workspace=workspace.name)
        await build_and_publish(
            self.root / workspace.location,
            repository=self.repository_for(options),
            dry_run=options.dry_run,
            token_env=self.config.token_env,
            cwd=self.root,
        )
