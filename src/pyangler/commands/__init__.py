"""pyangler commands."""

from pyangler.commands.base import Command, CommandContext, Snapshot
from pyangler.commands.check import (
    CheckCommand,
    CheckOptions,
    CheckResult,
    check,
    handle_check_command,
)
from pyangler.commands.list import (
    ListCommand,
    ListResult,
    WorkspaceInfo,
    handle_list_command,
)
from pyangler.commands.release import (
    PublishStatus,
    ReleaseCommand,
    ReleaseEvent,
    ReleaseOptions,
    ReleaseResult,
    handle_release_command,
    release,
)

__all__ = [
    # Base
    "Command",
    "CommandContext",
    "Snapshot",
    # Check
    "CheckCommand",
    "CheckOptions",
    "CheckResult",
    "check",
    "handle_check_command",
    # List
    "ListCommand",
    "ListResult",
    "WorkspaceInfo",
    "handle_list_command",
    # Release
    "PublishStatus",
    "ReleaseCommand",
    "ReleaseEvent",
    "ReleaseOptions",
    "ReleaseResult",
    "handle_release_command",
    "release",
]
