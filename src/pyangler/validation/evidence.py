"""Per-run cache of version and changelog classifications."""

from __future__ import annotations

from pathlib import Path

from pyangler.git.refs import AtRef, BaseRef, NoBase
from pyangler.versioning.changelog import DEFAULT_CHANGELOG, ChangelogDiff, get_changelog_diff
from pyangler.versioning.diff import get_version_diff
from pyangler.versioning.semver import ReleaseType
from pyangler.workspace.models import Workspace


class ReleaseEvidence:
    """Looks up how each workspace changed, at most once per workspace.

    Args:
        root: Repository root.
        base_ref: Comparison point for version diffs.
        changelog_filename: Changelog file name inside each workspace.
    """

    def __init__(
        self,
        root: Path,
        base_ref: BaseRef,
        *,
        changelog_filename: str = DEFAULT_CHANGELOG,
    ) -> None:
        self.root = root
        self.base_ref = base_ref
        self.changelog_filename = changelog_filename
        self._version_diffs: dict[str, ReleaseType | None] = {}
        self._changelog_diffs: dict[str, ChangelogDiff] = {}

    async def version_diff(self, workspace: Workspace) -> ReleaseType | None:
        """Version increase since the base reference (None without one)."""
        if workspace.name not in self._version_diffs:
            match self.base_ref:
                case NoBase():
                    diff = None
                case AtRef(ref=ref):
                    diff = await get_version_diff(
                        self.root, ref, workspace.location, workspace.version
                    )
            self._version_diffs[workspace.name] = diff
        return self._version_diffs[workspace.name]

    async def changelog_diff(self, workspace: Workspace) -> ChangelogDiff:
        """Classification of the workspace changelog for its version."""
        if workspace.name not in self._changelog_diffs:
            self._changelog_diffs[workspace.name] = get_changelog_diff(
                self.root / workspace.location,
                workspace.version,
                aliases=workspace.version_labels,
                filename=self.changelog_filename,
            )
        return self._changelog_diffs[workspace.name]
