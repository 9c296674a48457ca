"""Workspace data model."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum

from packaging.version import Version


class DependencyKind(str, Enum):
    """Dependency tables that take part in ordering and validation."""

    DEPENDENCIES = "dependencies"
    OPTIONAL = "optional-dependencies"
    PEER = "peer-dependencies"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Workspace:
    """One independently versioned package in the repository.

    Attributes:
        name: Canonical package name, unique in the repository.
        version: Declared version.
        location: Repository-relative directory ("." for the root).
        is_private: Never published; still ordered.
        modified: Changed since the base reference (True without one).
        published: ``name==version`` already exists on the index.
        dependencies: Local runtime dependencies (name -> specifier).
        optional_dependencies: Local dependencies from all extras.
        peer_dependencies: Local peer dependencies.
        declared_version: Version string exactly as written in the manifest.
    """

    name: str
    version: Version
    location: str
    is_private: bool = False
    modified: bool = True
    published: bool = False
    dependencies: Mapping[str, str] = field(default_factory=dict)
    optional_dependencies: Mapping[str, str] = field(default_factory=dict)
    peer_dependencies: Mapping[str, str] = field(default_factory=dict)
    declared_version: str = ""

    def dependencies_of(self, kind: DependencyKind) -> Mapping[str, str]:
        """Local dependencies of one kind."""
        if kind is DependencyKind.DEPENDENCIES:
            return self.dependencies
        if kind is DependencyKind.OPTIONAL:
            return self.optional_dependencies
        return self.peer_dependencies

    @property
    def local_dependencies(self) -> list[tuple[DependencyKind, str, str]]:
        """All local dependencies as (kind, name, specifier), in kind order."""
        return [
            (kind, name, spec)
            for kind in DependencyKind
            for name, spec in self.dependencies_of(kind).items()
        ]

    @property
    def dependency_names(self) -> set[str]:
        """Names of every workspace this one must be ordered after."""
        return {name for _, name, _ in self.local_dependencies}

    @property
    def is_prerelease(self) -> bool:
        return self.version.is_prerelease

    @property
    def is_releasable(self) -> bool:
        """Public and either modified or not yet published."""
        return not self.is_private and (self.modified or not self.published)

    @property
    def version_labels(self) -> list[str]:
        """Spellings of the version to look for in the changelog."""
        labels = [str(self.version)]
        if self.declared_version and self.declared_version not in labels:
            labels.append(self.declared_version)
        return labels


class WorkspaceSet(Mapping[str, Workspace]):
    """Read-only, name-keyed workspaces in release (topological) order."""

    def __init__(self, workspaces: list[Workspace] | None = None) -> None:
        self._workspaces: dict[str, Workspace] = {}
        for workspace in workspaces or []:
            self._workspaces[workspace.name] = workspace

    def __getitem__(self, name: str) -> Workspace:
        return self._workspaces[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._workspaces)

    def __len__(self) -> int:
        return len(self._workspaces)

    def __repr__(self) -> str:
        return f"WorkspaceSet({list(self._workspaces)})"

    @property
    def names(self) -> list[str]:
        return list(self._workspaces)

    def releasable(self) -> list[Workspace]:
        """Workspaces that are candidates for this release, in order."""
        return [w for w in self._workspaces.values() if w.is_releasable]
