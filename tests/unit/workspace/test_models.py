"""Tests for the workspace data model."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from pyangler.workspace import DependencyKind, Workspace, WorkspaceSet

WorkspaceFactory = Callable[..., Workspace]


class TestWorkspace:
    """Tests for Workspace."""

    @pytest.mark.parametrize(
        ("private", "modified", "published", "expected"),
        [
            (False, True, False, True),
            (False, True, True, True),
            (False, False, False, True),
            (False, False, True, False),
            (True, True, False, False),
        ],
    )
    def test_is_releasable(
        self,
        make_workspace: WorkspaceFactory,
        private: bool,
        modified: bool,
        published: bool,
        expected: bool,
    ) -> None:
        workspace = make_workspace("a", private=private, modified=modified, published=published)
        assert workspace.is_releasable is expected

    def test_local_dependencies_in_kind_order(self, make_workspace: WorkspaceFactory) -> None:
        workspace = make_workspace(
            "a",
            dependencies={"b": ">=1"},
            optional_dependencies={"c": ">=2"},
            peer_dependencies={"d": ">=3"},
        )
        assert workspace.local_dependencies == [
            (DependencyKind.DEPENDENCIES, "b", ">=1"),
            (DependencyKind.OPTIONAL, "c", ">=2"),
            (DependencyKind.PEER, "d", ">=3"),
        ]
        assert workspace.dependency_names == {"b", "c", "d"}

    def test_prerelease(self, make_workspace: WorkspaceFactory) -> None:
        assert make_workspace("a", "2.0.0b1").is_prerelease
        assert not make_workspace("a", "2.0.0").is_prerelease

    def test_version_labels(self, make_workspace: WorkspaceFactory) -> None:
        workspace = make_workspace("a", "1.0.0rc1")
        assert workspace.version_labels == ["1.0.0rc1"]

        workspace = Workspace(
            name="a",
            version=workspace.version,
            location="a",
            declared_version="1.0.0-rc.1",
        )
        assert workspace.version_labels == ["1.0.0rc1", "1.0.0-rc.1"]

    def test_kind_display(self) -> None:
        assert str(DependencyKind.OPTIONAL) == "optional-dependencies"


class TestWorkspaceSet:
    """Tests for WorkspaceSet."""

    def test_mapping_preserves_order(self, make_workspace: WorkspaceFactory) -> None:
        workspaces = WorkspaceSet([make_workspace("b"), make_workspace("a")])
        assert list(workspaces) == ["b", "a"]
        assert workspaces.names == ["b", "a"]
        assert workspaces["a"].name == "a"
        assert "c" not in workspaces
        assert len(workspaces) == 2

    def test_releasable(self, make_workspace: WorkspaceFactory) -> None:
        workspaces = WorkspaceSet(
            [
                make_workspace("a"),
                make_workspace("b", private=True),
                make_workspace("c", modified=False, published=True),
                make_workspace("d", modified=False),
            ]
        )
        assert [w.name for w in workspaces.releasable()] == ["a", "d"]
