"""Process execution."""

from pyangler.execution.runner import ProcessResult, run_process

__all__ = ["ProcessResult", "run_process"]
