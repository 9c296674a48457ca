"""Git history queries and release tagging."""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable, Sequence
from pathlib import Path, PurePosixPath

from pyangler.git.repo import run_git

DEFAULT_COMMITTER_NAME = "pyangler"
DEFAULT_COMMITTER_EMAIL = "pyangler@example.com"


def is_ignored(path: str, patterns: Iterable[str]) -> bool:
    """Match a repository-relative path against ignore globs.

    A pattern matches either the file's basename or the whole path.
    """
    name = PurePosixPath(path).name
    return any(fnmatch.fnmatch(name, p) or fnmatch.fnmatch(path, p) for p in patterns)


def _is_within(path: str, location: str) -> bool:
    if location in ("", "."):
        return True
    return path == location or path.startswith(location.rstrip("/") + "/")


def _split_paths(output: str) -> list[str]:
    return [path for path in output.split("\0") if path.strip()]


def _parse_porcelain(output: str) -> list[str]:
    """Paths from ``git status --porcelain -z`` output.

    Entries are ``XY path``, NUL-terminated and unquoted. A rename or copy
    is followed by one more entry holding the source path, which is skipped.
    """
    paths = []
    entries = iter(output.split("\0"))
    for entry in entries:
        if len(entry) < 4:
            continue
        paths.append(entry[3:])
        if "R" in entry[:2] or "C" in entry[:2]:
            next(entries, None)
    return paths


async def describe_latest_tag(root: Path) -> str | None:
    """Get the most recent tag reachable along first parents of HEAD.

    Returns:
        Tag name, or None when there is no tag (or no history).
    """
    result = await run_git(["describe", "--abbrev=0", "--first-parent"], cwd=root)
    if not result.success:
        return None
    return result.text or None


async def get_file_at_ref(root: Path, ref: str, path: str) -> str | None:
    """Read a file as committed at a reference.

    Args:
        root: Repository root.
        ref: Git reference.
        path: Repository-relative file path.

    Returns:
        File content, or None if the file or reference does not exist.
    """
    path = PurePosixPath(path).as_posix()
    result = await run_git(["show", f"{ref}:{path}"], cwd=root)
    if not result.success:
        return None
    return result.output


async def get_uncommitted(root: Path, ignore: Sequence[str] = ()) -> list[str]:
    """List files with uncommitted changes, including untracked files.

    Args:
        root: Repository root.
        ignore: Globs for files that never count as uncommitted.

    Returns:
        Repository-relative paths.
    """
    result = (
        await run_git(["status", "--porcelain", "-z", "--untracked-files=all"], cwd=root)
    ).assert_success()
    return [p for p in _parse_porcelain(result.output) if not is_ignored(p, ignore)]


async def is_path_modified(
    root: Path,
    ref: str,
    location: str,
    *,
    ignore: Sequence[str] = (),
    exclude: Sequence[str] = (),
) -> bool:
    """Check whether anything under a path changed since a reference.

    Committed changes in ``ref..HEAD`` count, as do staged, unstaged and
    untracked files.

    Args:
        root: Repository root.
        ref: Base reference.
        location: Repository-relative directory.
        ignore: Globs for files that never count as modifications.
        exclude: Sub-directories owned by other workspaces.

    Returns:
        True if at least one relevant file changed.
    """
    committed = (
        await run_git(["diff", "--name-only", "-z", f"{ref}..HEAD", "--", location], cwd=root)
    ).assert_success()
    status = ["status", "--porcelain", "-z", "--untracked-files=all", "--", location]
    uncommitted = (await run_git(status, cwd=root)).assert_success()

    changed = [*_split_paths(committed.output), *_parse_porcelain(uncommitted.output)]
    for path in changed:
        if is_ignored(path, ignore):
            continue
        if any(_is_within(path, other) for other in exclude):
            continue
        return True
    return False


async def fetch_unshallow(root: Path) -> None:
    """Fetch full history when the clone is shallow. Best effort."""
    await run_git(["fetch", "--unshallow"], cwd=root)


async def fetch_ref(root: Path, ref: str) -> None:
    """Make sure a reference exists locally.

    Checking out a remote branch name creates the local tracking branch;
    the previous checkout is restored immediately.
    """
    if (await run_git(["checkout", ref], cwd=root)).success:
        (await run_git(["checkout", "-"], cwd=root)).assert_success()


async def _ensure_committer(root: Path) -> None:
    if (await run_git(["config", "user.name"], cwd=root)).success:
        return
    (await run_git(["config", "user.name", DEFAULT_COMMITTER_NAME], cwd=root)).assert_success()
    (await run_git(["config", "user.email", DEFAULT_COMMITTER_EMAIL], cwd=root)).assert_success()


async def create_annotated_tag(root: Path, name: str, message: str) -> None:
    """Create an annotated tag on HEAD.

    Raises:
        CommandError: If git refuses to create the tag.
    """
    await _ensure_committer(root)
    (await run_git(["tag", "-a", name, "-m", message], cwd=root)).assert_success()


async def push_tag(root: Path, name: str, remote: str = "origin") -> None:
    """Push a single tag to the remote.

    Raises:
        CommandError: If the push fails.
    """
    (
        await run_git(["push", "--no-verify", remote, f"refs/tags/{name}"], cwd=root)
    ).assert_success()
