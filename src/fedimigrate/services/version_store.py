"""Stored data version versus the version of the running code."""

from loguru import logger

from fedimigrate import __version__
from fedimigrate.models.version import NEVER_MIGRATED, parse_version, versions_equal
from fedimigrate.ports.store import KeyValueStorePort

SCHEMA_VERSION_OPTION = "schema_version"


class VersionStore:
    """
    Reads and writes the ``schema_version`` option.

    The target version is the application's own version unless
    overridden (e.g. to pin a deployment to an older layout).
    """

    def __init__(self, store: KeyValueStorePort, target_version: str | None = None) -> None:
        self._store = store
        self._target_version = target_version or __version__
        # Fail at construction rather than mid-run
        parse_version(self._target_version)

    def get_target_version(self) -> str:
        """Return the version the stored data must be brought up to."""
        return self._target_version

    async def get_version(self) -> str:
        """Return the stored version, or ``"0"`` if never migrated."""
        value = await self._store.get_option(SCHEMA_VERSION_OPTION, NEVER_MIGRATED)
        if value is None or value == "":
            return NEVER_MIGRATED
        return str(value)

    async def set_version(self, version: str) -> None:
        """Persist version as the stored version."""
        parse_version(version)
        await self._store.set_option(SCHEMA_VERSION_OPTION, version)
        logger.debug("Stored version set to {}", version)

    async def is_latest_version(self) -> bool:
        """Whether the stored version equals the target version numerically."""
        return versions_equal(await self.get_version(), self.get_target_version())
