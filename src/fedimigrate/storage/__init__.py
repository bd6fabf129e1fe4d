"""
Storage layer for fedimigrate.

- SQLiteKeyValueStore: options, users and user metadata in SQLite
- SQLiteFollowersCollection: normalized followers sharing that connection
- MemoryKeyValueStore / MemoryFollowersCollection: in-process equivalents
- OptionRewriteRules: routing rule cache flushed after schema changes
"""

from fedimigrate.storage.factory import StorageBackendFactory
from fedimigrate.storage.followers import SQLiteFollowersCollection
from fedimigrate.storage.kv_store import SQLiteKeyValueStore
from fedimigrate.storage.memory import MemoryFollowersCollection, MemoryKeyValueStore
from fedimigrate.storage.rewrite_rules import OptionRewriteRules

__all__ = [
    "MemoryFollowersCollection",
    "MemoryKeyValueStore",
    "OptionRewriteRules",
    "SQLiteFollowersCollection",
    "SQLiteKeyValueStore",
    "StorageBackendFactory",
]
