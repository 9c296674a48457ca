"""Version comparison facade over ``packaging``.

pyangler does not implement version semantics itself; this module only
adapts PEP 440 versions and specifiers to the questions the release gate
asks: is this a prerelease, how big is an increase, and what is the lowest
version a range admits.
"""

from __future__ import annotations

from enum import IntEnum

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

ZERO = Version("0.0.0")

# Specifier operators that put a lower bound on the admitted versions.
LOWER_BOUND_OPERATORS = frozenset({">=", "==", "===", "~="})


class ReleaseType(IntEnum):
    """Semantic version bump category, ordered by severity."""

    PATCH = 1
    MINOR = 2
    MAJOR = 3

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


def parse_version(text: str) -> Version:
    """Parse a version string.

    Raises:
        InvalidVersion: If the string is not a valid PEP 440 version.
    """
    return Version(text.strip())


def try_parse_version(text: object) -> Version | None:
    """Parse a version, returning None for anything unparseable."""
    if not isinstance(text, str):
        return None
    try:
        return parse_version(text)
    except InvalidVersion:
        return None


def is_prerelease(version: Version) -> bool:
    """Whether the version carries prerelease (or dev) identifiers."""
    return version.is_prerelease


def _component(version: Version, index: int) -> int:
    release = version.release
    return release[index] if index < len(release) else 0


def classify_increase(current: Version, previous: Version) -> ReleaseType | None:
    """Classify the step from ``previous`` to ``current``.

    Args:
        current: Version declared now.
        previous: Version declared at the base reference.

    Returns:
        None if ``current`` is not greater than ``previous``. Otherwise MAJOR
        when the major component changed (including pre-major releases),
        MINOR when the minor component changed, and PATCH for everything
        else.
    """
    if current <= previous:
        return None
    if _component(current, 0) != _component(previous, 0):
        return ReleaseType.MAJOR
    if _component(current, 1) != _component(previous, 1):
        return ReleaseType.MINOR
    return ReleaseType.PATCH


def _lower_bound(operator: str, text: str) -> Version | None:
    if operator not in LOWER_BOUND_OPERATORS:
        return None
    if operator == "==" and text.endswith(".*"):
        text = text[:-2]
    return try_parse_version(text)


def min_version(specifier: str) -> Version | None:
    """Find the lowest version a specifier set admits.

    Only explicit lower bounds are considered (``>=``, ``==``, ``===``,
    ``~=``). The highest of them is the candidate, and it must satisfy the
    whole set.

    Args:
        specifier: PEP 440 specifier set, e.g. ``">=1.2.0,<2"``.

    Returns:
        The minimum version, or None when the range has no inclusive lower
        bound, admits nothing at that bound, or cannot be parsed.
    """
    try:
        spec_set = SpecifierSet(specifier)
    except InvalidSpecifier:
        return None

    bounds = [
        bound
        for spec in spec_set
        if (bound := _lower_bound(spec.operator, spec.version)) is not None
    ]
    if not bounds:
        return None

    candidate = max(bounds)
    if not spec_set.contains(candidate, prereleases=True):
        return None
    return candidate
