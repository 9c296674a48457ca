"""Workspace set construction."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from packaging.version import InvalidVersion, Version

from pyangler.config.schema import PyAnglerConfig
from pyangler.errors import ConfigurationError, InvalidVersionError
from pyangler.git.history import is_path_modified
from pyangler.git.refs import AtRef, BaseRef, NoBase
from pyangler.registry.base import Registry
from pyangler.versioning.semver import parse_version
from pyangler.workspace.graph import topological_sort
from pyangler.workspace.manifest import WorkspaceRecord, list_workspaces
from pyangler.workspace.models import Workspace, WorkspaceSet


def _local_only(dependencies: Mapping[str, str], names: set[str]) -> dict[str, str]:
    return {name: spec for name, spec in dependencies.items() if name in names}


def _nested_locations(location: str, locations: Sequence[str]) -> list[str]:
    """Other workspace directories that live inside ``location``."""
    if location == ".":
        return [other for other in locations if other != "."]
    prefix = location.rstrip("/") + "/"
    return [other for other in locations if other.startswith(prefix)]


def parse_versions(records: Sequence[WorkspaceRecord]) -> dict[str, Version]:
    """Parse every declared version up front.

    Raises:
        ConfigurationError: If two workspaces share a name.
        InvalidVersionError: If any version is invalid.
    """
    versions: dict[str, Version] = {}
    for record in records:
        if record.name in versions:
            raise ConfigurationError(f'Workspace name "{record.name}" is declared more than once.')
        try:
            versions[record.name] = parse_version(record.version)
        except InvalidVersion as e:
            raise InvalidVersionError(record.name, record.version) from e
    return versions


async def _is_modified(
    root: Path,
    base_ref: BaseRef,
    record: WorkspaceRecord,
    locations: Sequence[str],
    ignore: Sequence[str],
) -> bool:
    match base_ref:
        case NoBase():
            return True
        case AtRef(ref=ref):
            return await is_path_modified(
                root,
                ref,
                record.location,
                ignore=ignore,
                exclude=_nested_locations(record.location, locations),
            )


async def build_workspaces(
    root: Path,
    base_ref: BaseRef,
    *,
    registry: Registry,
    config: PyAnglerConfig | None = None,
    records: Sequence[WorkspaceRecord] | None = None,
) -> WorkspaceSet:
    """Collect workspace state and order it for release.

    Every version is validated before any git or index query runs. Queries
    are made one workspace at a time.

    Args:
        root: Repository root.
        base_ref: Comparison point for modification checks.
        registry: Index used to detect already-published versions.
        config: pyangler configuration.
        records: Pre-enumerated records (enumerated from disk when omitted).

    Returns:
        Workspaces in topological order.

    Raises:
        InvalidVersionError: If a workspace version is invalid.
        CyclicDependencyError: If local dependencies form a cycle.
    """
    config = config or PyAnglerConfig()
    if records is None:
        records = list_workspaces(root, config)

    versions = parse_versions(records)
    names = set(versions)
    locations = [r.location for r in records]

    unsorted: list[Workspace] = []
    for record in records:
        version = versions[record.name]
        # a package naming itself, e.g. in an "all" extra, is not a local dependency
        others = names - {record.name}
        modified = await _is_modified(
            root, base_ref, record, locations, config.release.ignore_modified
        )
        published = False if record.private else await registry.exists(record.name, version)

        unsorted.append(
            Workspace(
                name=record.name,
                version=version,
                location=record.location,
                is_private=record.private,
                modified=modified,
                published=published,
                dependencies=_local_only(record.dependencies, others),
                optional_dependencies=_local_only(record.optional_dependencies, others),
                peer_dependencies=_local_only(record.peer_dependencies, others),
                declared_version=record.version,
            )
        )

    return topological_sort(unsorted)
