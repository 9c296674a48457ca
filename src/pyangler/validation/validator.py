"""Release-readiness rules.

Every releasable workspace (public, and modified or unpublished) is checked
against all rules. Violations are collected rather than raised so a single
run reports every problem.
"""

from __future__ import annotations

from typing import Protocol

from pyangler.git.refs import AtRef, BaseRef, NoBase
from pyangler.validation import violations
from pyangler.validation.violations import Violation
from pyangler.versioning.changelog import MISSING, ChangelogDiff
from pyangler.versioning.semver import ReleaseType, min_version
from pyangler.workspace.models import Workspace, WorkspaceSet


class Evidence(Protocol):
    async def version_diff(self, workspace: Workspace) -> ReleaseType | None: ...

    async def changelog_diff(self, workspace: Workspace) -> ChangelogDiff: ...


def check_version_increment(
    workspace: Workspace, base_ref: BaseRef, version_diff: ReleaseType | None
) -> list[Violation]:
    match base_ref:
        case NoBase():
            return []
        case AtRef():
            if version_diff is None:
                return [violations.version_not_incremented(workspace.name)]
            return []


def check_changelog(
    workspace: Workspace,
    changelog_diff: ChangelogDiff,
    version_diff: ReleaseType | None,
) -> list[Violation]:
    if changelog_diff is MISSING:
        return [violations.changelog_missing(workspace.name, workspace.version)]
    if changelog_diff is None or version_diff is None or changelog_diff == version_diff:
        return []
    if changelog_diff > version_diff:
        return [violations.version_behind_changelog(workspace.name, changelog_diff)]
    return [violations.changelog_behind_version(workspace.name, version_diff)]


def check_local_dependencies(workspace: Workspace, workspaces: WorkspaceSet) -> list[Violation]:
    found: list[Violation] = []
    for kind, name, specifier in workspace.local_dependencies:
        dependency = workspaces[name]
        if dependency.is_private:
            found.append(violations.private_dependency(workspace.name, name, kind))
            continue
        lower_bound = min_version(specifier)
        if lower_bound is None or lower_bound != dependency.version:
            found.append(
                violations.stale_dependency_range(workspace.name, name, dependency.version)
            )
    return found


def check_unpublished(workspace: Workspace) -> list[Violation]:
    if workspace.published:
        return [violations.already_published(workspace.name)]
    return []


async def validate_workspace(
    workspace: Workspace,
    workspaces: WorkspaceSet,
    base_ref: BaseRef,
    *,
    evidence: Evidence,
    require_prerelease: bool = False,
) -> list[Violation]:
    """Check one workspace against every rule."""
    found: list[Violation] = []
    version_diff = await evidence.version_diff(workspace)

    found += check_version_increment(workspace, base_ref, version_diff)

    if require_prerelease:
        # changelog rules only apply to stable releases
        if not workspace.is_prerelease:
            found.append(violations.prerelease_required(workspace.name))
    else:
        changelog_diff = await evidence.changelog_diff(workspace)
        found += check_changelog(workspace, changelog_diff, version_diff)

    found += check_local_dependencies(workspace, workspaces)
    found += check_unpublished(workspace)
    return found


async def validate(
    workspaces: WorkspaceSet,
    base_ref: BaseRef,
    *,
    evidence: Evidence,
    require_prerelease: bool = False,
) -> list[Violation]:
    """Check every releasable workspace, in release order.

    Args:
        workspaces: Workspaces in topological order.
        base_ref: Comparison point; version increments are only required
            when there is one.
        evidence: Version and changelog lookups (cached per workspace).
        require_prerelease: Only prerelease versions may be released.

    Returns:
        All violations, grouped by workspace in release order. Empty means
        the changeset is ready for release.
    """
    found: list[Violation] = []
    for workspace in workspaces.releasable():
        found += await validate_workspace(
            workspace,
            workspaces,
            base_ref,
            evidence=evidence,
            require_prerelease=require_prerelease,
        )
    return found
