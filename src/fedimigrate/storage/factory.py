"""Storage backend factory.

Instantiates the key-value store and followers collection
based on config.storage.backend.
"""

from typing import Any

from fedimigrate.config.models import Config
from fedimigrate.storage.followers import SQLiteFollowersCollection
from fedimigrate.storage.kv_store import SQLiteKeyValueStore
from fedimigrate.storage.memory import MemoryFollowersCollection, MemoryKeyValueStore


class StorageBackendFactory:
    """Factory for creating storage backend instances.

    Reads config.storage.backend and returns the matching
    KeyValueStorePort and FollowersPort implementations.
    """

    def __init__(self, config: Config) -> None:
        self._config = config

    @property
    def backend(self) -> str:
        """Return the configured backend name."""
        return self._config.storage.backend

    def create_store(self) -> Any:
        """Create the key-value store (not yet initialized).

        Returns:
            An object implementing KeyValueStorePort plus
            ``initialize()`` and ``close()``.
        """
        if self.backend == "memory":
            return MemoryKeyValueStore()
        return SQLiteKeyValueStore(self._config.storage.db_path)

    def create_followers(self, store: Any) -> Any:
        """Create the followers collection.

        Args:
            store: The store returned by create_store(). The SQLite
                collection shares its connection.

        Returns:
            An object implementing FollowersPort.
        """
        if self.backend == "memory":
            return MemoryFollowersCollection()
        if not isinstance(store, SQLiteKeyValueStore):
            raise ValueError("sqlite backend requires a SQLiteKeyValueStore")
        return SQLiteFollowersCollection(store)
