"""uv command execution."""

from __future__ import annotations

import shutil
from collections.abc import Mapping
from pathlib import Path

from pyangler.execution import ProcessResult, run_process


def is_uv_installed() -> bool:
    """Check whether the uv executable is on PATH."""
    return shutil.which("uv") is not None


async def run_uv_async(
    args: list[str],
    cwd: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ProcessResult:
    """Run a uv command asynchronously.

    Args:
        args: uv arguments (without 'uv').
        cwd: Working directory.
        env: Extra environment variables.

    Returns:
        Process result; check ``success`` or call ``assert_success()``.
    """
    return await run_process(["uv", *args], cwd=cwd, env=env)
