"""Version and changelog classification."""

from pyangler.versioning.changelog import (
    MISSING,
    SECTION_PATTERNS,
    ChangelogDiff,
    Missing,
    classify_changelog,
    classify_section,
    escape_version,
    find_section,
    get_changelog_diff,
)
from pyangler.versioning.diff import (
    get_previous_version,
    get_version_diff,
    manifest_path,
    read_manifest_version,
)
from pyangler.versioning.semver import (
    ZERO,
    ReleaseType,
    classify_increase,
    is_prerelease,
    min_version,
    parse_version,
    try_parse_version,
)

__all__ = [
    "MISSING",
    "SECTION_PATTERNS",
    "ZERO",
    "ChangelogDiff",
    "Missing",
    "ReleaseType",
    "classify_changelog",
    "classify_increase",
    "classify_section",
    "escape_version",
    "find_section",
    "get_changelog_diff",
    "get_previous_version",
    "get_version_diff",
    "is_prerelease",
    "manifest_path",
    "min_version",
    "parse_version",
    "read_manifest_version",
    "try_parse_version",
]
