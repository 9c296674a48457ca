"""Tests for version diffs against the base reference."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

from packaging.version import Version

from pyangler.versioning.diff import (
    get_previous_version,
    get_version_diff,
    manifest_path,
    read_manifest_version,
)
from pyangler.versioning.semver import ZERO, ReleaseType


def test_manifest_path() -> None:
    assert manifest_path(".") == "pyproject.toml"
    assert manifest_path("") == "pyproject.toml"
    assert manifest_path("packages/a") == "packages/a/pyproject.toml"


class TestReadManifestVersion:
    """Tests for best-effort version extraction."""

    def test_reads_version(self) -> None:
        assert read_manifest_version('[project]\nname = "a"\nversion = "1.2.3"\n') == Version(
            "1.2.3"
        )

    def test_missing_file(self) -> None:
        assert read_manifest_version(None) == ZERO

    def test_invalid_toml(self) -> None:
        assert read_manifest_version("[project\nversion = ") == ZERO

    def test_no_project_table(self) -> None:
        assert read_manifest_version('[tool.x]\nversion = "1.0"\n') == ZERO

    def test_dynamic_version(self) -> None:
        assert read_manifest_version('[project]\nname = "a"\ndynamic = ["version"]\n') == ZERO

    def test_invalid_version(self) -> None:
        assert read_manifest_version('[project]\nversion = "latest"\n') == ZERO


class TestGetVersionDiff:
    """Tests for classifying version movement since a reference."""

    async def test_reads_manifest_at_ref(self) -> None:
        with patch(
            "pyangler.versioning.diff.get_file_at_ref",
            new_callable=AsyncMock,
            return_value='[project]\nversion = "1.0.0"\n',
        ) as mock_show:
            previous = await get_previous_version(Path("/repo"), "main", "packages/a")

        assert previous == Version("1.0.0")
        mock_show.assert_awaited_once_with(Path("/repo"), "main", "packages/a/pyproject.toml")

    async def test_minor_increase(self) -> None:
        with patch(
            "pyangler.versioning.diff.get_file_at_ref",
            new_callable=AsyncMock,
            return_value='[project]\nversion = "1.0.0"\n',
        ):
            diff = await get_version_diff(Path("/repo"), "main", "a", Version("1.1.0"))
        assert diff is ReleaseType.MINOR

    async def test_new_workspace_is_major(self) -> None:
        with patch(
            "pyangler.versioning.diff.get_file_at_ref", new_callable=AsyncMock, return_value=None
        ):
            diff = await get_version_diff(Path("/repo"), "main", "a", Version("1.0.0"))
        assert diff is ReleaseType.MAJOR

    async def test_unchanged_version(self) -> None:
        with patch(
            "pyangler.versioning.diff.get_file_at_ref",
            new_callable=AsyncMock,
            return_value='[project]\nversion = "1.0.0"\n',
        ):
            diff = await get_version_diff(Path("/repo"), "main", "a", Version("1.0.0"))
        assert diff is None
