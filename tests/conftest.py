"""Shared pytest fixtures for fedimigrate tests."""

import io
from collections.abc import AsyncIterator, Generator
from pathlib import Path

import pytest
from loguru import logger

from fedimigrate.storage.followers import SQLiteFollowersCollection
from fedimigrate.storage.kv_store import SQLiteKeyValueStore
from fedimigrate.storage.memory import MemoryFollowersCollection, MemoryKeyValueStore
from tests.helpers import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable clock."""
    return FakeClock()


@pytest.fixture
async def store(tmp_path: Path) -> AsyncIterator[SQLiteKeyValueStore]:
    """Provide an initialized SQLite store."""
    kv = SQLiteKeyValueStore(tmp_path / "store.db")
    await kv.initialize()
    yield kv
    await kv.close()


@pytest.fixture
def followers(store: SQLiteKeyValueStore) -> SQLiteFollowersCollection:
    """Provide a followers collection sharing the SQLite store."""
    return SQLiteFollowersCollection(store)


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    """Provide an empty in-memory store."""
    return MemoryKeyValueStore()


@pytest.fixture
def memory_followers() -> MemoryFollowersCollection:
    """Provide an empty in-memory followers collection."""
    return MemoryFollowersCollection()


@pytest.fixture
def log_capture() -> Generator[io.StringIO, None, None]:
    """Capture loguru output to a string buffer."""
    string_io = io.StringIO()
    handler_id = logger.add(string_io, format="{level} {message}", level="DEBUG")
    yield string_io
    logger.remove(handler_id)
