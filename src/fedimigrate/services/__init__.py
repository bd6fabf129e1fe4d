"""fedimigrate services layer.

Services coordinate the stored version, the migration lock and the
registered steps.
"""

from fedimigrate.services.migration_lock import MigrationLock
from fedimigrate.services.registry import MigrationStep, StepRegistry
from fedimigrate.services.runner import MigrationRunner
from fedimigrate.services.scheduler import MigrationScheduler
from fedimigrate.services.version_store import VersionStore

__all__ = [
    "MigrationLock",
    "MigrationRunner",
    "MigrationScheduler",
    "MigrationStep",
    "StepRegistry",
    "VersionStore",
]
