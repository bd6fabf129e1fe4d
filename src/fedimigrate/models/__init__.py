"""Data models for fedimigrate."""

from fedimigrate.models.state import MigrationResult, MigrationStatus, RunOutcome
from fedimigrate.models.version import NEVER_MIGRATED, is_older, parse_version, versions_equal

__all__ = [
    "NEVER_MIGRATED",
    "MigrationResult",
    "MigrationStatus",
    "RunOutcome",
    "is_older",
    "parse_version",
    "versions_equal",
]
