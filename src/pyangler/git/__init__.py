"""Git operations."""

from pyangler.git.history import (
    create_annotated_tag,
    describe_latest_tag,
    fetch_ref,
    fetch_unshallow,
    get_file_at_ref,
    get_uncommitted,
    is_ignored,
    is_path_modified,
    push_tag,
)
from pyangler.git.refs import AtRef, BaseRef, NoBase, resolve_base_ref
from pyangler.git.repo import get_repo_root, run_git, run_git_command

__all__ = [
    "AtRef",
    "BaseRef",
    "NoBase",
    "create_annotated_tag",
    "describe_latest_tag",
    "fetch_ref",
    "fetch_unshallow",
    "get_file_at_ref",
    "get_repo_root",
    "get_uncommitted",
    "is_ignored",
    "is_path_modified",
    "push_tag",
    "resolve_base_ref",
    "run_git",
    "run_git_command",
]
