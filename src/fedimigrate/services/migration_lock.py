"""Time-boxed advisory lock serializing migration runs.

The lock is a unix timestamp stored under the ``migration_lock``
option. Acquisition is an unconditional overwrite, so two callers
that both observe the lock as free may both proceed; migration
steps are idempotent to make that safe.

A holder that crashes never unlocks. Its lock goes stale once it
is older than the TTL, and the next ``is_locked()`` check deletes it.
"""

import time
from collections.abc import Callable

from loguru import logger

from fedimigrate.ports.store import KeyValueStorePort

MIGRATION_LOCK_OPTION = "migration_lock"
DEFAULT_LOCK_TTL_SECONDS = 1800


class MigrationLock:
    """Timestamp lock with self-healing expiry."""

    def __init__(
        self,
        store: KeyValueStorePort,
        ttl_seconds: int = DEFAULT_LOCK_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    async def lock(self) -> None:
        """Record the current time as the lock holder's start time."""
        now = int(self._clock())
        await self._store.set_option(MIGRATION_LOCK_OPTION, now)
        logger.debug("Migration lock taken at {}", now)

    async def unlock(self) -> None:
        """Delete the lock. No-op if not locked."""
        await self._store.delete_option(MIGRATION_LOCK_OPTION)
        logger.debug("Migration lock released")

    async def is_locked(self) -> bool:
        """
        Check whether a live lock is held.

        A lock older than the TTL, or one whose value is not a
        timestamp, is removed as a side effect and reported as free.
        """
        value = await self._store.get_option(MIGRATION_LOCK_OPTION)
        if not value:
            return False

        held_since = self._parse_timestamp(value)
        if held_since is None:
            logger.warning("Malformed migration lock value {!r}, treating as stale", value)
            await self.unlock()
            return False

        # Whole seconds on both sides, matching the stored value
        age = int(self._clock()) - held_since
        if age > self.ttl_seconds:
            logger.info(
                "Migration lock is {}s old (threshold {}s), lock is stale",
                age,
                self.ttl_seconds,
            )
            await self.unlock()
            return False

        return True

    @staticmethod
    def _parse_timestamp(value: object) -> int | None:
        try:
            return int(value)  # type: ignore[call-overload]
        except (TypeError, ValueError):
            return None
