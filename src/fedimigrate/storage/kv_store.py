"""SQLite key-value store for fedimigrate."""

import contextlib
import json
from pathlib import Path
from typing import Any

import aiosqlite
from loguru import logger

from fedimigrate.errors import StorageError
from fedimigrate.storage.migrations import v001_initial
from fedimigrate.utils.retry import retry_storage


def _encode(value: Any) -> str:
    return json.dumps(value)


def _decode(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        # Values written by other tools may be bare strings
        return raw


def _translate(e: aiosqlite.Error) -> StorageError:
    """Map sqlite errors onto StorageError, flagging lock contention as retryable."""
    message = str(e)
    retryable = isinstance(e, aiosqlite.OperationalError) and (
        "locked" in message or "busy" in message
    )
    return StorageError(f"SQLite error: {message}", retryable=retryable)


class SQLiteKeyValueStore:
    """
    SQLite database holding options, users and per-user metadata.

    Handles:
    - Named options (stored version, migration lock, templates)
    - User registry and user metadata
    - Session access for adapters sharing the connection (followers)

    Every write commits before returning, so a value written by one
    process is visible to the next reader in another.
    """

    def __init__(self, db_path: Path | str) -> None:
        """
        Initialize the store.

        Args:
            db_path: Path to SQLite database file.
        """
        self.db_path = Path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        """
        Open the connection and apply DDL migrations.

        Creates the database file if it doesn't exist.
        """
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._conn = await aiosqlite.connect(self.db_path)
        self._conn.row_factory = aiosqlite.Row

        # WAL lets several runner processes read while one writes
        await self._conn.execute("PRAGMA foreign_keys = ON")
        await self._conn.execute("PRAGMA journal_mode = WAL")
        await self._conn.execute("PRAGMA busy_timeout = 5000")

        await self._apply_migrations()
        logger.debug("Key-value store ready at {}", self.db_path)

    async def _apply_migrations(self) -> None:
        """Apply DDL migrations based on the recorded store schema version."""
        conn = self._get_conn()

        cursor = await conn.execute(
            """
            SELECT name FROM sqlite_master
            WHERE type='table' AND name='store_schema_version'
            """
        )
        table_exists = await cursor.fetchone()

        current_version = 0
        if table_exists:
            cursor = await conn.execute(
                "SELECT version FROM store_schema_version ORDER BY version DESC LIMIT 1"
            )
            row = await cursor.fetchone()
            current_version = row[0] if row else 0

        if current_version < 1:
            await v001_initial.apply_migration(conn)

    async def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    def _get_conn(self) -> aiosqlite.Connection:
        """Get database connection, raising if not initialized."""
        if not self._conn:
            raise StorageError("Store not initialized", retryable=False)
        return self._conn

    @retry_storage
    async def execute(self, sql: str, params: list[Any] | None = None) -> aiosqlite.Cursor:
        """Execute a SQL statement."""
        conn = self._get_conn()
        try:
            return await conn.execute(sql, params or [])
        except aiosqlite.Error as e:
            raise _translate(e) from e

    @retry_storage
    async def write(self, sql: str, params: list[Any] | None = None) -> None:
        """Execute a SQL statement and commit it."""
        conn = self._get_conn()
        try:
            await conn.execute(sql, params or [])
            await conn.commit()
        except aiosqlite.Error as e:
            with contextlib.suppress(aiosqlite.Error):
                await conn.rollback()
            raise _translate(e) from e

    async def fetchone(self, sql: str, params: list[Any] | None = None) -> aiosqlite.Row | None:
        """Execute query and fetch one row."""
        cursor = await self.execute(sql, params)
        return await cursor.fetchone()

    async def fetchall(self, sql: str, params: list[Any] | None = None) -> list[aiosqlite.Row]:
        """Execute query and fetch all rows."""
        cursor = await self.execute(sql, params)
        result = await cursor.fetchall()
        return list(result) if result else []

    # =========================================================================
    # Option Operations
    # =========================================================================

    async def get_option(self, name: str, default: Any = None) -> Any:
        """Return the stored value for name, or default if absent."""
        row = await self.fetchone("SELECT value FROM options WHERE name = ?", [name])
        if row is None:
            return default
        return _decode(row["value"])

    async def set_option(self, name: str, value: Any) -> None:
        """Store value under name, replacing any previous value."""
        await self.write(
            """
            INSERT INTO options (name, value) VALUES (?, ?)
            ON CONFLICT(name) DO UPDATE
            SET value = excluded.value, updated_at = datetime('now')
            """,
            [name, _encode(value)],
        )

    async def delete_option(self, name: str) -> None:
        """Delete name. No-op if absent."""
        await self.write("DELETE FROM options WHERE name = ?", [name])

    # =========================================================================
    # User Operations
    # =========================================================================

    async def add_user(self, user_id: int) -> None:
        """Register a user identifier. No-op if already present."""
        await self.write("INSERT OR IGNORE INTO users (id) VALUES (?)", [user_id])

    async def list_user_ids(self) -> list[int]:
        """Return all user identifiers in ascending order."""
        rows = await self.fetchall("SELECT id FROM users ORDER BY id")
        return [row["id"] for row in rows]

    async def get_user_meta(self, user_id: int, key: str, default: Any = None) -> Any:
        """Return a user's metadata value, or default if absent."""
        row = await self.fetchone(
            "SELECT value FROM user_meta WHERE user_id = ? AND meta_key = ?",
            [user_id, key],
        )
        if row is None:
            return default
        return _decode(row["value"])

    async def set_user_meta(self, user_id: int, key: str, value: Any) -> None:
        """Store a user's metadata value, registering the user if needed."""
        await self.add_user(user_id)
        await self.write(
            """
            INSERT INTO user_meta (user_id, meta_key, value) VALUES (?, ?, ?)
            ON CONFLICT(user_id, meta_key) DO UPDATE
            SET value = excluded.value, updated_at = datetime('now')
            """,
            [user_id, key, _encode(value)],
        )
