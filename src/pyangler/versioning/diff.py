"""Version difference against the base reference."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from packaging.version import Version

from pyangler.compat import TOMLDecodeError, tomllib
from pyangler.git.history import get_file_at_ref
from pyangler.versioning.semver import ZERO, ReleaseType, classify_increase, try_parse_version

MANIFEST = "pyproject.toml"


def manifest_path(location: str) -> str:
    """Repository-relative path of a workspace manifest."""
    if location in ("", "."):
        return MANIFEST
    return str(PurePosixPath(location) / MANIFEST)


def read_manifest_version(text: str | None) -> Version:
    """Extract ``[project].version`` from manifest text.

    Historical manifests are best effort: a missing file, invalid TOML, a
    missing field or an unparseable version all yield ``0.0.0``.
    """
    if text is None:
        return ZERO
    try:
        data = tomllib.loads(text)
    except TOMLDecodeError:
        return ZERO
    project = data.get("project")
    if not isinstance(project, dict):
        return ZERO
    return try_parse_version(project.get("version")) or ZERO


async def get_previous_version(root: Path, ref: str, location: str) -> Version:
    """Version a workspace declared at ``ref`` (``0.0.0`` if unknown)."""
    return read_manifest_version(await get_file_at_ref(root, ref, manifest_path(location)))


async def get_version_diff(
    root: Path,
    ref: str,
    location: str,
    current: Version,
) -> ReleaseType | None:
    """Classify how a workspace's version moved since ``ref``.

    Args:
        root: Repository root.
        ref: Base reference.
        location: Repository-relative workspace directory.
        current: Currently declared version.

    Returns:
        The release type of the increase, or None if the version did not
        increase.
    """
    previous = await get_previous_version(root, ref, location)
    return classify_increase(current, previous)
