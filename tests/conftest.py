"""Shared test fixtures for pyangler tests."""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest
from dotenv import load_dotenv
from packaging.version import Version

from pyangler.workspace import Workspace

# Load .env from project root (doesn't override existing env vars)
load_dotenv(Path(__file__).parent.parent / ".env")


def run_git(args: list[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    """Run a git command, failing the test on error."""
    return subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )


def write_package(
    path: Path,
    name: str,
    version: str,
    *,
    dependencies: list[str] | None = None,
    private: bool = False,
    changelog: str | None = None,
) -> None:
    """Write a minimal member package."""
    path.mkdir(parents=True, exist_ok=True)
    deps = ", ".join(f'"{d}"' for d in dependencies or [])
    classifiers = '"Private :: Do Not Upload"' if private else ""
    (path / "pyproject.toml").write_text(
        f"""\
[project]
name = "{name}"
version = "{version}"
dependencies = [{deps}]
classifiers = [{classifiers}]
"""
    )
    if changelog is not None:
        (path / "CHANGELOG.md").write_text(changelog)


class FakeRegistry:
    """In-memory index: records publishes, answers lookups from a set."""

    def __init__(self, published: set[tuple[str, str]] | None = None) -> None:
        self.published = set(published or ())
        self.lookups: list[tuple[str, str]] = []
        self.uploads: list[tuple[str, object]] = []
        self.fail_on: str | None = None

    async def exists(self, name: str, version: Version) -> bool:
        self.lookups.append((name, str(version)))
        return (name, str(version)) in self.published

    async def publish(self, workspace: Workspace, options: object) -> None:
        if workspace.name == self.fail_on:
            from pyangler.errors import CommandError

            raise CommandError("uv publish", 1, "upload rejected")
        self.uploads.append((workspace.name, options))


@pytest.fixture
def package_writer() -> Callable[..., None]:
    """Helper for writing extra member packages."""
    return write_package


@pytest.fixture
def fake_registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def make_workspace() -> Callable[..., Workspace]:
    """Factory for Workspace objects with sensible defaults."""

    def factory(
        name: str,
        version: str = "1.0.0",
        *,
        location: str | None = None,
        private: bool = False,
        modified: bool = True,
        published: bool = False,
        dependencies: dict[str, str] | None = None,
        optional_dependencies: dict[str, str] | None = None,
        peer_dependencies: dict[str, str] | None = None,
    ) -> Workspace:
        return Workspace(
            name=name,
            version=Version(version),
            location=location or f"packages/{name}",
            is_private=private,
            modified=modified,
            published=published,
            dependencies=dependencies or {},
            optional_dependencies=optional_dependencies or {},
            peer_dependencies=peer_dependencies or {},
            declared_version=version,
        )

    return factory


@pytest.fixture
def workspace_dir(tmp_path: Path) -> Path:
    """Create a uv workspace with three packages: c -> b -> a."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "test-workspace"
version = "0.0.0"
classifiers = ["Private :: Do Not Upload"]

[tool.uv.workspace]
members = ["packages/*"]
"""
    )
    packages = tmp_path / "packages"
    write_package(
        packages / "pkg-a",
        "pkg-a",
        "1.0.0",
        dependencies=["requests>=2.0"],
        changelog="# Changelog\n\n## 1.0.0\n\n### Features\n\n- First release\n",
    )
    write_package(
        packages / "pkg-b",
        "pkg-b",
        "2.0.0",
        dependencies=["pkg-a>=1.0.0,<2"],
        changelog="# Changelog\n\n## 2.0.0\n\n### Breaking Changes\n\n- Rewrite\n",
    )
    write_package(
        packages / "pkg-c",
        "pkg-c",
        "0.1.0",
        dependencies=["pkg-b>=2.0.0"],
        changelog="# Changelog\n\n## 0.1.0\n\n### Fixes\n\n- Initial\n",
    )
    return tmp_path


@pytest.fixture
def git_workspace(workspace_dir: Path) -> Path:
    """Create a workspace with git initialized and everything committed."""
    run_git(["init", "-q"], workspace_dir)
    run_git(["config", "user.email", "test@test.com"], workspace_dir)
    run_git(["config", "user.name", "Test"], workspace_dir)
    run_git(["add", "-A"], workspace_dir)
    run_git(["commit", "-q", "-m", "Initial commit"], workspace_dir)
    run_git(["tag", "-a", "v0", "-m", "baseline"], workspace_dir)
    return workspace_dir
