"""Dependency ordering for workspaces.

Workspaces are released in an order where every workspace comes after the
local workspaces it depends on.
"""

from __future__ import annotations

import heapq
from collections.abc import Sequence

from pyangler.errors import CyclicDependencyError
from pyangler.workspace.models import Workspace, WorkspaceSet


def topological_sort(workspaces: Sequence[Workspace]) -> WorkspaceSet:
    """Order workspaces so dependencies come first.

    Uses Kahn's algorithm. The ready queue is keyed by each workspace's
    position in ``workspaces``, so whenever several workspaces are ready the
    earliest one is placed first. The result is deterministic for a given
    input order.

    Dependencies on names outside ``workspaces`` are ignored.

    Args:
        workspaces: Workspaces in enumeration order.

    Returns:
        Workspaces in release order.

    Raises:
        CyclicDependencyError: If some workspaces can never be placed. The
            error names every unplaced workspace in enumeration order.
    """
    index = {w.name: i for i, w in enumerate(workspaces)}
    in_degree = [0] * len(workspaces)
    dependents: list[list[int]] = [[] for _ in workspaces]

    for i, workspace in enumerate(workspaces):
        for name in workspace.dependency_names:
            dep = index.get(name)
            if dep is None:
                continue
            in_degree[i] += 1
            dependents[dep].append(i)

    ready = [i for i, degree in enumerate(in_degree) if degree == 0]
    heapq.heapify(ready)
    order: list[Workspace] = []

    while ready:
        i = heapq.heappop(ready)
        order.append(workspaces[i])
        for dependent in dependents[i]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                heapq.heappush(ready, dependent)

    if len(order) != len(workspaces):
        placed = {w.name for w in order}
        raise CyclicDependencyError([w.name for w in workspaces if w.name not in placed])

    return WorkspaceSet(order)


def dependents_of(workspaces: WorkspaceSet, name: str) -> list[str]:
    """Names of workspaces that directly depend on ``name``, in release order."""
    return [w.name for w in workspaces.values() if name in w.dependency_names]
