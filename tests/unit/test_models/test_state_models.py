"""Tests for run result and status models."""

from fedimigrate.models.state import MigrationResult, MigrationStatus, RunOutcome


def test_run_outcome_values() -> None:
    assert RunOutcome.SKIPPED == "skipped"
    assert RunOutcome.LOCKED_OUT == "locked_out"
    assert RunOutcome.MIGRATED == "migrated"


def test_result_defaults() -> None:
    result = MigrationResult(outcome=RunOutcome.SKIPPED, target_version="1.0.0")
    assert result.from_version is None
    assert result.applied_steps == []


def test_status_serializes() -> None:
    status = MigrationStatus(
        current_version="0", target_version="1.0.0", is_latest=False, locked=True
    )
    assert status.model_dump() == {
        "current_version": "0",
        "target_version": "1.0.0",
        "is_latest": False,
        "locked": True,
    }
