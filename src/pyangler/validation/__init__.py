"""Release-readiness validation."""

from pyangler.validation.evidence import ReleaseEvidence
from pyangler.validation.validator import (
    Evidence,
    check_changelog,
    check_local_dependencies,
    check_unpublished,
    check_version_increment,
    validate,
    validate_workspace,
)
from pyangler.validation.violations import Rule, Violation

__all__ = [
    "Evidence",
    "ReleaseEvidence",
    "Rule",
    "Violation",
    "check_changelog",
    "check_local_dependencies",
    "check_unpublished",
    "check_version_increment",
    "validate",
    "validate_workspace",
]
