"""Git command execution."""

from __future__ import annotations

import subprocess
from pathlib import Path

from pyangler.errors import GitError
from pyangler.execution import ProcessResult, run_process


def run_git_command(
    args: list[str],
    cwd: Path | None = None,
    *,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Run a git command synchronously.

    Args:
        args: Git command arguments (without 'git').
        cwd: Working directory.
        check: Raise on non-zero exit code.

    Returns:
        Completed process result.

    Raises:
        GitError: If command fails and check is True.
    """
    cmd = ["git"] + args

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        raise GitError("Git is not installed") from e

    if check and result.returncode != 0:
        raise GitError(
            result.stderr.strip() or f"Command failed with exit code {result.returncode}",
            command=" ".join(cmd),
        )
    return result


async def run_git(args: list[str], cwd: Path | None = None) -> ProcessResult:
    """Run a git command asynchronously.

    The result is returned whatever the exit code; callers that require
    success chain ``.assert_success()``.

    Args:
        args: Git command arguments (without 'git').
        cwd: Working directory.

    Returns:
        Process result with combined output.
    """
    return await run_process(["git", *args], cwd=cwd)


def get_repo_root(path: Path) -> Path:
    """Get the root directory of the git repository.

    Args:
        path: Path inside the repository.

    Returns:
        Path to repository root.

    Raises:
        GitError: If not inside a git repository.
    """
    try:
        result = run_git_command(["rev-parse", "--show-toplevel"], cwd=path)
    except GitError as e:
        if "not a git repository" in str(e).lower():
            raise GitError(
                "Not inside a git repository",
                command="git rev-parse --show-toplevel",
            ) from e
        raise
    return Path(result.stdout.strip())
