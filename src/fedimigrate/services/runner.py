"""Migration runner.

Brings stored data from its recorded version up to the code's
version by applying every registered step the stored version is
older than, under the migration lock.
"""

from loguru import logger

from fedimigrate.models.state import MigrationResult, MigrationStatus, RunOutcome
from fedimigrate.services.migration_lock import MigrationLock
from fedimigrate.services.registry import StepRegistry
from fedimigrate.services.version_store import VersionStore


class MigrationRunner:
    """
    Orchestrates VersionStore, MigrationLock and StepRegistry.

    ``run()`` is safe to call at any time: it does nothing when the
    data is current or another run holds the lock.
    """

    def __init__(
        self,
        versions: VersionStore,
        lock: MigrationLock,
        registry: StepRegistry,
    ) -> None:
        self.versions = versions
        self.lock = lock
        self.registry = registry

    async def get_version(self) -> str:
        """Return the stored data version."""
        return await self.versions.get_version()

    def get_target_version(self) -> str:
        """Return the version the code expects."""
        return self.versions.get_target_version()

    async def status(self) -> MigrationStatus:
        """Report stored and target versions and lock state."""
        return MigrationStatus(
            current_version=await self.versions.get_version(),
            target_version=self.versions.get_target_version(),
            is_latest=await self.versions.is_latest_version(),
            locked=await self.lock.is_locked(),
        )

    async def run(self) -> MigrationResult:
        """
        Migrate the stored data if needed.

        The stored version is read once after locking; every step whose
        threshold exceeds it runs in ascending order within this pass.

        A failing step propagates. The lock is then left to expire and
        the stored version is not advanced, so the next run after the
        TTL starts again from the same version.

        Returns:
            MigrationResult describing what happened.
        """
        target = self.versions.get_target_version()

        if await self.versions.is_latest_version():
            logger.debug("Data already at version {}", target)
            return MigrationResult(outcome=RunOutcome.SKIPPED, target_version=target)

        if await self.lock.is_locked():
            logger.info("Migration lock held by another run, skipping")
            return MigrationResult(outcome=RunOutcome.LOCKED_OUT, target_version=target)

        await self.lock.lock()

        version_from_db = await self.versions.get_version()
        steps = self.registry.pending(version_from_db)
        logger.info(
            "Migrating data from {} to {}: {} step(s)",
            version_from_db,
            target,
            len(steps),
        )

        applied: list[str] = []
        for step in steps:
            logger.info("Applying {} (before {})", step.name, step.threshold)
            try:
                await step.apply()
            except Exception:
                logger.exception(
                    "Migration step {} failed; lock held until it expires", step.name
                )
                raise
            applied.append(step.name)

        await self.versions.set_version(target)
        await self.lock.unlock()

        logger.info("Migration complete: version={} applied={}", target, applied)
        return MigrationResult(
            outcome=RunOutcome.MIGRATED,
            target_version=target,
            from_version=version_from_db,
            applied_steps=applied,
        )
