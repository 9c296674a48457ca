"""Workspace enumeration from pyproject.toml manifests.

The root ``pyproject.toml`` may itself be a package (location ``"."``) and
usually declares the members:

    [tool.uv.workspace]
    members = ["packages/*"]
    exclude = ["packages/legacy"]

Each member manifest provides the PEP 621 ``[project]`` table plus optional
pyangler settings:

    [tool.pyangler]
    private = true
    peer-dependencies = ["core>=1.0"]
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from packaging.requirements import InvalidRequirement, Requirement
from packaging.specifiers import SpecifierSet
from packaging.utils import canonicalize_name
from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyangler.compat import TOMLDecodeError, tomllib
from pyangler.config.schema import PyAnglerConfig
from pyangler.errors import ConfigurationError

MANIFEST = "pyproject.toml"
PRIVATE_CLASSIFIER = "Private :: Do Not Upload"


class WorkspaceRecord(BaseModel):
    """A workspace as declared on disk, before any git or index lookups."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    location: str
    private: bool = False
    dependencies: dict[str, str] = Field(default_factory=dict)
    optional_dependencies: dict[str, str] = Field(default_factory=dict)
    peer_dependencies: dict[str, str] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def canonical_name(cls, value: str) -> str:
        return canonicalize_name(value)


def load_manifest(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigurationError: If the file is missing or is not valid TOML.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError("No pyproject.toml found", path=path) from e
    except TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML: {e}", path=path) from e


def parse_requirements(requirements: Iterable[object], *, source: Path) -> dict[str, str]:
    """Map PEP 508 requirement strings to ``canonical name -> specifier``.

    A package listed more than once (e.g. under different markers) gets the
    intersection of its specifiers.

    Raises:
        ConfigurationError: If a requirement string is invalid.
    """
    result: dict[str, str] = {}
    for raw in requirements:
        try:
            req = Requirement(str(raw))
        except InvalidRequirement as e:
            raise ConfigurationError(f"Invalid requirement {raw!r}: {e}", path=source) from e
        name = canonicalize_name(req.name)
        if name in result:
            result[name] = str(SpecifierSet(result[name]) & req.specifier)
        else:
            result[name] = str(req.specifier)
    return result


def _tool_section(data: dict[str, Any]) -> dict[str, Any]:
    section = data.get("tool", {}).get("pyangler", {})
    return section if isinstance(section, dict) else {}


def record_from_manifest(
    data: dict[str, Any], location: str, *, source: Path
) -> WorkspaceRecord | None:
    """Build a record from parsed manifest data.

    Returns:
        None when the manifest has no static name and version (such
        manifests are not publishable units).
    """
    project = data.get("project")
    if not isinstance(project, dict):
        return None

    name = project.get("name")
    version = project.get("version")
    if not name or not version:
        return None

    tool = _tool_section(data)
    classifiers = project.get("classifiers") or []
    private = bool(tool.get("private", False)) or PRIVATE_CLASSIFIER in classifiers

    optional: dict[str, str] = {}
    for group in (project.get("optional-dependencies") or {}).values():
        for dep_name, spec in parse_requirements(group, source=source).items():
            if dep_name in optional:
                optional[dep_name] = str(SpecifierSet(optional[dep_name]) & SpecifierSet(spec))
            else:
                optional[dep_name] = spec

    return WorkspaceRecord(
        name=str(name),
        version=str(version),
        location=location,
        private=private,
        dependencies=parse_requirements(project.get("dependencies") or [], source=source),
        optional_dependencies=optional,
        peer_dependencies=parse_requirements(tool.get("peer-dependencies") or [], source=source),
    )


def member_locations(root: Path, data: dict[str, Any], config: PyAnglerConfig) -> list[str]:
    """Resolve workspace member directories, in declaration order.

    Configured ``packages`` globs take precedence over
    ``[tool.uv.workspace].members``.
    """
    uv_workspace = data.get("tool", {}).get("uv", {}).get("workspace", {})
    patterns = config.packages if config.packages is not None else uv_workspace.get("members", [])
    excluded = {
        path.resolve()
        for pattern in uv_workspace.get("exclude", [])
        for path in root.glob(pattern)
    }

    locations: list[str] = []
    for pattern in patterns:
        for path in sorted(root.glob(pattern)):
            if not (path / MANIFEST).is_file() or path.resolve() in excluded:
                continue
            location = path.relative_to(root).as_posix()
            if location not in locations and location != ".":
                locations.append(location)
    return locations


def list_workspaces(root: Path, config: PyAnglerConfig | None = None) -> list[WorkspaceRecord]:
    """Enumerate workspaces: every member, followed by the root package.

    Args:
        root: Repository root containing the workspace pyproject.toml.
        config: pyangler configuration.

    Returns:
        Records for every manifest that declares a name and a version.
    """
    config = config or PyAnglerConfig()
    root_manifest = root / MANIFEST
    root_data = load_manifest(root_manifest)

    records: list[WorkspaceRecord] = []
    for location in member_locations(root, root_data, config):
        manifest = root / location / MANIFEST
        record = record_from_manifest(load_manifest(manifest), location, source=manifest)
        if record is not None:
            records.append(record)

    root_record = record_from_manifest(root_data, ".", source=root_manifest)
    if root_record is not None:
        records.append(root_record)
    return records
