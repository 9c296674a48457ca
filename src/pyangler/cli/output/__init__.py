"""CLI output helpers."""

from pyangler.cli.output.errors import print_command_error, print_uncommitted, run_guarded

__all__ = ["print_command_error", "print_uncommitted", "run_guarded"]
