"""Normalized followers collection backed by the SQLite store."""

from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from fedimigrate.storage.kv_store import SQLiteKeyValueStore


class SQLiteFollowersCollection:
    """
    One row per (user, actor) pair.

    The UNIQUE constraint makes ``add_follower`` idempotent, so a
    migration that runs twice leaves the collection unchanged.
    """

    def __init__(self, store: "SQLiteKeyValueStore") -> None:
        self._store = store

    async def add_follower(self, user_id: int, actor: str) -> None:
        """Record actor as a follower of user_id."""
        await self._store.add_user(user_id)
        await self._store.write(
            "INSERT OR IGNORE INTO followers (user_id, actor) VALUES (?, ?)",
            [user_id, actor],
        )
        logger.trace("Follower recorded: user={} actor={}", user_id, actor)

    async def get_followers(self, user_id: int) -> list[str]:
        """Return the actors following user_id, in insertion order."""
        rows = await self._store.fetchall(
            "SELECT actor FROM followers WHERE user_id = ? ORDER BY id",
            [user_id],
        )
        return [row["actor"] for row in rows]

    async def count(self) -> int:
        """Return the total number of follower rows."""
        row = await self._store.fetchone("SELECT COUNT(*) AS n FROM followers")
        return row["n"] if row else 0
