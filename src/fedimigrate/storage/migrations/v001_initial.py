"""Initial store schema."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import aiosqlite

SCHEMA = """
-- ============================================================================
-- OPTIONS (Named scalar values: schema_version, migration_lock, templates)
-- ============================================================================
CREATE TABLE IF NOT EXISTS options (
    name TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);

-- ============================================================================
-- USERS
-- ============================================================================
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY,
    created_at TEXT NOT NULL DEFAULT (datetime('now'))
);

-- ============================================================================
-- USER META (Per-user values, including legacy follower lists)
-- ============================================================================
CREATE TABLE IF NOT EXISTS user_meta (
    user_id INTEGER NOT NULL,
    meta_key TEXT NOT NULL,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now')),

    PRIMARY KEY (user_id, meta_key),
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
);

-- ============================================================================
-- FOLLOWERS (Normalized collection)
-- ============================================================================
CREATE TABLE IF NOT EXISTS followers (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL,
    actor TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT (datetime('now')),

    UNIQUE (user_id, actor),
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_followers_user ON followers(user_id);

-- ============================================================================
-- STORE SCHEMA VERSION (DDL version of this file, not the data version)
-- ============================================================================
CREATE TABLE IF NOT EXISTS store_schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);

INSERT OR IGNORE INTO store_schema_version (version) VALUES (1);
"""

EXPECTED_TABLES = {"options", "users", "user_meta", "followers", "store_schema_version"}


async def apply_migration(db: "aiosqlite.Connection") -> None:
    """Apply the initial store schema."""
    await db.executescript(SCHEMA)
    await db.commit()

    cursor = await db.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    tables = {row[0] for row in await cursor.fetchall()}

    missing = EXPECTED_TABLES - tables
    if missing:
        raise RuntimeError(
            f"Store tables not created: {', '.join(sorted(missing))}. "
            "Database schema may be corrupted."
        )
