"""State models for migration runs and diagnostics."""

from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel


class RunOutcome(StrEnum):
    """How a migration run ended."""

    SKIPPED = "skipped"
    LOCKED_OUT = "locked_out"
    MIGRATED = "migrated"


class MigrationStatus(BaseModel):
    """Snapshot of the stored version against the code version."""

    current_version: str
    target_version: str
    is_latest: bool
    locked: bool


@dataclass
class MigrationResult:
    """Result of a single runner invocation."""

    outcome: RunOutcome
    target_version: str
    from_version: str | None = None
    applied_steps: list[str] = field(default_factory=list)
