"""Compatibility shims for supported Python versions."""

from __future__ import annotations

import sys

# pyproject.toml files are read with tomllib (3.11+) or its tomli backport.
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

TOMLDecodeError = tomllib.TOMLDecodeError

__all__ = ["TOMLDecodeError", "tomllib"]
