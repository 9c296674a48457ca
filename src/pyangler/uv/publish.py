"""Build and upload distributions with uv."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from pyangler.uv.client import run_uv_async

UV_TOKEN_ENV = "UV_PUBLISH_TOKEN"


def _publish_env(token_env: str) -> dict[str, str]:
    # uv reads UV_PUBLISH_TOKEN itself; forward a differently named variable
    if token_env == UV_TOKEN_ENV:
        return {}
    token = os.environ.get(token_env)
    return {UV_TOKEN_ENV: token} if token else {}


async def build_and_publish(
    package_path: Path,
    *,
    repository: str,
    dry_run: bool = False,
    token_env: str = UV_TOKEN_ENV,
    cwd: Path | None = None,
) -> None:
    """Build a package and upload its distributions.

    Distributions are built into a fresh directory so stale files from
    earlier builds are never uploaded.

    Args:
        package_path: Package directory.
        repository: Upload URL.
        dry_run: Pass ``--dry-run`` to ``uv publish``.
        token_env: Environment variable holding the upload token.
        cwd: Working directory for uv (repository root).

    Raises:
        CommandError: If building or uploading fails.
    """
    with tempfile.TemporaryDirectory(prefix="pyangler-dist-") as out_dir:
        (
            await run_uv_async(
                ["build", str(package_path), "--out-dir", out_dir, "--no-sources"],
                cwd=cwd,
            )
        ).assert_success()

        dists = sorted(str(p) for p in Path(out_dir).iterdir() if p.is_file())
        args = ["publish", "--publish-url", repository]
        if dry_run:
            args.append("--dry-run")
        (await run_uv_async([*args, *dists], cwd=cwd, env=_publish_env(token_env))).assert_success()
