"""Asynchronous process execution with combined output capture."""

from __future__ import annotations

import asyncio
import os
import shlex
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from pyangler.errors import CommandError

SECRET_MARKERS = ("TOKEN", "PASSWORD", "SECRET")


def redact_env(env: Mapping[str, str]) -> dict[str, str]:
    """Mask values of credential-like variables for error reports."""
    return {
        key: "***" if any(marker in key.upper() for marker in SECRET_MARKERS) else value
        for key, value in env.items()
    }


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a finished process.

    Attributes:
        command: Shell-quoted command line.
        exit_code: Process exit code.
        output: Interleaved stdout and stderr, decoded.
        env: Environment overrides the process ran with, redacted.
    """

    command: str
    exit_code: int
    output: str
    env: dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    @property
    def text(self) -> str:
        """Output with surrounding whitespace removed."""
        return self.output.strip()

    def lines(self) -> list[str]:
        """Non-empty output lines."""
        return [line for line in self.output.splitlines() if line.strip()]

    def assert_success(self) -> ProcessResult:
        """Return self, or raise if the process failed.

        Raises:
            CommandError: If the exit code is non-zero.
        """
        if not self.success:
            raise CommandError(self.command, self.exit_code or 1, self.output, self.env)
        return self


async def run_process(
    args: Sequence[str],
    cwd: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ProcessResult:
    """Run a command and capture its output.

    stdout and stderr share one pipe so the captured text keeps the order
    in which the process wrote it.

    Args:
        args: Program and arguments.
        cwd: Working directory.
        env: Extra environment variables (merged with the current env).

    Returns:
        Process result. Never raises for a non-zero exit code.

    Raises:
        CommandError: If the program cannot be started.
    """
    command = shlex.join(args)
    overrides = dict(env or {})
    run_env = os.environ.copy()
    run_env.update(overrides)

    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            cwd=str(cwd) if cwd else None,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
            env=run_env,
        )
    except OSError as e:
        raise CommandError(command, 127, str(e), redact_env(overrides)) from e

    stdout_bytes, _ = await process.communicate()
    output = stdout_bytes.decode("utf-8", errors="replace") if stdout_bytes else ""

    return ProcessResult(
        command=command,
        exit_code=process.returncode or 0,
        output=output,
        env=redact_env(overrides),
    )
