"""Release-readiness violations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from packaging.version import Version

from pyangler.versioning.semver import ReleaseType
from pyangler.workspace.models import DependencyKind


class Rule(str, Enum):
    """Which release-readiness rule a violation breaks."""

    VERSION_INCREMENT = "version-increment"
    PRERELEASE = "prerelease"
    CHANGELOG_MISSING = "changelog-missing"
    CHANGELOG_MISMATCH = "changelog-mismatch"
    PRIVATE_DEPENDENCY = "private-dependency"
    DEPENDENCY_RANGE = "dependency-range"
    ALREADY_PUBLISHED = "already-published"


@dataclass(frozen=True, slots=True)
class Violation:
    """One broken rule for one workspace."""

    workspace: str
    rule: Rule
    message: str

    def __str__(self) -> str:
        return f"{self.workspace}: {self.message}"


def version_not_incremented(workspace: str) -> Violation:
    return Violation(workspace, Rule.VERSION_INCREMENT, "Increment the version.")


def prerelease_required(workspace: str) -> Violation:
    return Violation(workspace, Rule.PRERELEASE, "Use a prerelease version.")


def changelog_missing(workspace: str, version: Version) -> Violation:
    return Violation(
        workspace, Rule.CHANGELOG_MISSING, f"Add a {version} section to the changelog."
    )


def version_behind_changelog(workspace: str, documented: ReleaseType) -> Violation:
    return Violation(
        workspace,
        Rule.CHANGELOG_MISMATCH,
        f"Increment the {documented} version to match the changelog.",
    )


def changelog_behind_version(workspace: str, actual: ReleaseType) -> Violation:
    return Violation(
        workspace,
        Rule.CHANGELOG_MISMATCH,
        f"Document the {actual} changes in the changelog.",
    )


def private_dependency(workspace: str, dependency: str, kind: DependencyKind) -> Violation:
    return Violation(
        workspace,
        Rule.PRIVATE_DEPENDENCY,
        f'Move the local private "{dependency}" dependency from {kind} to dev dependencies.',
    )


def stale_dependency_range(workspace: str, dependency: str, version: Version) -> Violation:
    return Violation(
        workspace,
        Rule.DEPENDENCY_RANGE,
        f'Update the "{dependency}" dependency version range to make {version} the lower bound.',
    )


def already_published(workspace: str) -> Violation:
    return Violation(workspace, Rule.ALREADY_PUBLISHED, "Use an unpublished version.")
