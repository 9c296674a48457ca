"""Exception hierarchy for pyangler.

Fatal conditions raise one of these. Release-readiness violations are not
exceptions; they are collected as data by the validator.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path


class PyAnglerError(Exception):
    """Base class for all pyangler errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(PyAnglerError):
    """Invalid or inconsistent repository configuration."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)
        self.path = path


class InvalidVersionError(ConfigurationError):
    """A workspace declares a version that cannot be parsed."""

    def __init__(self, workspace: str, version: str) -> None:
        super().__init__(f'Workspace "{workspace}" version is invalid ({version}).')
        self.workspace = workspace
        self.version = version


class CyclicDependencyError(PyAnglerError):
    """The local dependency graph contains a cycle."""

    def __init__(self, names: Sequence[str]) -> None:
        super().__init__(f"Dependency cycle detected ({', '.join(names)}).")
        self.names = list(names)


class GitError(PyAnglerError):
    """A git command failed."""

    def __init__(self, message: str, *, command: str | None = None) -> None:
        super().__init__(message)
        self.command = command


class CommandError(PyAnglerError):
    """An external process returned a non-zero exit code where success was required.

    Attributes:
        command: Shell-quoted command line.
        exit_code: Process exit code.
        output: Combined stdout and stderr.
        env: Environment entries relevant to the failure.
    """

    def __init__(
        self,
        command: str,
        exit_code: int,
        output: str,
        env: Mapping[str, str | None] | None = None,
    ) -> None:
        super().__init__(f"Spawned process returned non-zero exit code ({exit_code}).")
        self.command = command
        self.exit_code = exit_code
        self.output = output
        self.env = dict(env or {})


class RegistryError(PyAnglerError):
    """The package index could not be queried."""


class PublishError(PyAnglerError):
    """Publishing a workspace failed."""

    def __init__(self, message: str, *, workspace: str | None = None) -> None:
        super().__init__(message)
        self.workspace = workspace


class ReleaseError(PyAnglerError):
    """The release sequence was aborted."""
