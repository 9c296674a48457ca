"""Changelog section lookup and classification.

A changelog is a Markdown file whose sections are keyed by version headings:

    ## 1.2.0
    ### Features
    - ...

A section runs from its heading up to the next heading of the same or a
shallower depth. The heading line must hold only the version (optionally
prefixed with ``v`` or ``version``); a heading with trailing text such as
``## 1.2.0 (2024-01-01)`` is not recognized, and the section counts as
missing.

Classification is a keyword heuristic over the section's sub-headings. It
reads prose, so unusual wording can be misclassified.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Literal, TypeAlias

from packaging.version import Version

from pyangler.versioning.semver import ReleaseType

DEFAULT_CHANGELOG = "CHANGELOG.md"


class Missing(Enum):
    """Marker for a changelog that exists but lacks the version's section."""

    MISSING = "missing"

    def __str__(self) -> str:
        return self.value


MISSING = Missing.MISSING

ChangelogDiff: TypeAlias = ReleaseType | Literal[Missing.MISSING] | None

# Checked in order; the first table entry with a matching sub-heading wins.
SECTION_PATTERNS: tuple[tuple[ReleaseType, re.Pattern[str]], ...] = (
    (ReleaseType.MAJOR, re.compile(r"^#+.*\b(?:breaking|major)\b", re.IGNORECASE | re.MULTILINE)),
    (
        ReleaseType.MINOR,
        re.compile(r"^#+.*\b(?:features?|enhancements?|minor)\b", re.IGNORECASE | re.MULTILINE),
    ),
)


def escape_version(text: str) -> str:
    """Escape a version for literal use inside a regular expression.

    Hyphens are written as ``\\x2d`` so a prerelease such as ``1.0.0-rc.1``
    cannot be read as a character range.
    """
    return "\\x2d".join(re.escape(part) for part in text.split("-"))


_HEADING = re.compile(r"\n(#+)(?!#)")


def _heading_pattern(versions: Iterable[str]) -> re.Pattern[str]:
    alternatives = "|".join(escape_version(v) for v in versions)
    return re.compile(
        r"(?:^|\n)(?P<depth>#+)[\t ]*(?:v(?:ersion:?[\t ]+)?)?"
        rf"(?:{alternatives})[\t ]*(?=\n|$)",
        re.IGNORECASE,
    )


def _section_end(text: str, start: int, depth: int) -> int:
    for heading in _HEADING.finditer(text, start):
        if len(heading.group(1)) <= depth:
            return heading.start()
    return len(text)


def _version_texts(version: Version | str, aliases: Iterable[str]) -> list[str]:
    texts: list[str] = []
    for text in (str(version), *aliases):
        text = text.strip()
        if text and text not in texts:
            texts.append(text)
    return texts


def find_section(text: str, version: Version | str, *, aliases: Iterable[str] = ()) -> str | None:
    """Extract the body of the first section headed by ``version``.

    Args:
        text: Changelog Markdown.
        version: Target version.
        aliases: Other spellings of the same version (e.g. as declared).

    Returns:
        Stripped section body, or None if there is no such heading.
    """
    normalized = text.replace("\r\n", "\n")
    match = _heading_pattern(_version_texts(version, aliases)).search(normalized)
    if match is None:
        return None
    end = _section_end(normalized, match.end(), len(match.group("depth")))
    return normalized[match.end() : end].strip()


def classify_section(section: str) -> ReleaseType:
    """Classify a section body by its sub-heading keywords."""
    for release_type, pattern in SECTION_PATTERNS:
        if pattern.search(section):
            return release_type
    return ReleaseType.PATCH


def classify_changelog(
    text: str,
    version: Version | str,
    *,
    aliases: Iterable[str] = (),
) -> ReleaseType | Literal[Missing.MISSING]:
    """Classify the changelog section for a version.

    Returns:
        MISSING when no non-empty section exists for the version, otherwise
        the release type its sub-headings imply.
    """
    section = find_section(text, version, aliases=aliases)
    if not section:
        return MISSING
    return classify_section(section)


def get_changelog_diff(
    directory: Path,
    version: Version | str,
    *,
    aliases: Iterable[str] = (),
    filename: str = DEFAULT_CHANGELOG,
) -> ChangelogDiff:
    """Read and classify a workspace changelog.

    Args:
        directory: Workspace directory.
        version: Target version.
        aliases: Other spellings of the version.
        filename: Changelog file name.

    Returns:
        None when the workspace has no changelog file, otherwise the
        classification from :func:`classify_changelog`.
    """
    try:
        text = (directory / filename).read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    return classify_changelog(text, version, aliases=aliases)
