"""pyangler - release gate and publisher for Python monorepos.

Checks that every modified or unpublished workspace is ready for release:
- the version increased since the base reference
- the changelog documents the version, with a matching bump size
- local dependency ranges start at each dependency's current version
- the version is not already on the index

then tags the release commit and publishes workspaces in dependency order.
"""

from pyangler.config import PyAnglerConfig, load_config
from pyangler.errors import (
    CommandError,
    ConfigurationError,
    CyclicDependencyError,
    GitError,
    InvalidVersionError,
    PublishError,
    PyAnglerError,
    RegistryError,
    ReleaseError,
)
from pyangler.git import AtRef, BaseRef, NoBase
from pyangler.validation import Violation, validate
from pyangler.versioning import ReleaseType
from pyangler.workspace import Workspace, WorkspaceSet, build_workspaces, topological_sort

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core
    "AtRef",
    "BaseRef",
    "NoBase",
    "ReleaseType",
    "Violation",
    "Workspace",
    "WorkspaceSet",
    "build_workspaces",
    "topological_sort",
    "validate",
    "PyAnglerConfig",
    "load_config",
    # Errors
    "PyAnglerError",
    "CommandError",
    "ConfigurationError",
    "CyclicDependencyError",
    "GitError",
    "InvalidVersionError",
    "PublishError",
    "RegistryError",
    "ReleaseError",
]
