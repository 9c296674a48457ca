"""Base reference used as the comparison point for a release."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from pyangler.git.history import describe_latest_tag

BASE_REF_ENV = "GITHUB_BASE_REF"


@dataclass(frozen=True, slots=True)
class NoBase:
    """No comparison point: every workspace counts as new."""

    def __str__(self) -> str:
        return "(none)"


@dataclass(frozen=True, slots=True)
class AtRef:
    """Compare against the state committed at ``ref``."""

    ref: str

    def __str__(self) -> str:
        return self.ref


BaseRef: TypeAlias = NoBase | AtRef


async def resolve_base_ref(root: Path, override: str | None = None) -> BaseRef:
    """Pick the base reference for this run.

    Precedence: explicit override, ``GITHUB_BASE_REF``, the latest tag on the
    first-parent history, and finally no base at all.
    """
    ref = override or os.environ.get(BASE_REF_ENV) or await describe_latest_tag(root)
    return AtRef(ref) if ref else NoBase()
