"""Workspace discovery, modelling and ordering."""

from pyangler.workspace.builder import build_workspaces, parse_versions
from pyangler.workspace.graph import dependents_of, topological_sort
from pyangler.workspace.manifest import (
    PRIVATE_CLASSIFIER,
    WorkspaceRecord,
    list_workspaces,
    record_from_manifest,
)
from pyangler.workspace.models import DependencyKind, Workspace, WorkspaceSet

__all__ = [
    "PRIVATE_CLASSIFIER",
    "DependencyKind",
    "Workspace",
    "WorkspaceRecord",
    "WorkspaceSet",
    "build_workspaces",
    "dependents_of",
    "list_workspaces",
    "parse_versions",
    "record_from_manifest",
    "topological_sort",
]
