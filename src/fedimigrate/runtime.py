"""Runtime wiring.

Builds the store, collaborators and runner from configuration and
tears them down again.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from loguru import logger

from fedimigrate.config.models import Config
from fedimigrate.migrations import build_default_registry
from fedimigrate.services.migration_lock import MigrationLock
from fedimigrate.services.runner import MigrationRunner
from fedimigrate.services.version_store import VersionStore
from fedimigrate.storage.factory import StorageBackendFactory
from fedimigrate.storage.rewrite_rules import OptionRewriteRules


@dataclass
class MigrationContext:
    """Everything a CLI command needs, initialized."""

    config: Config
    store: Any
    followers: Any
    runner: MigrationRunner


async def initialize_runtime(config: Config) -> MigrationContext:
    """
    Open the store and assemble the runner.

    Args:
        config: Loaded configuration.

    Returns:
        MigrationContext with an initialized store.
    """
    factory = StorageBackendFactory(config)
    logger.debug("Storage backend: {}", factory.backend)

    store = factory.create_store()
    await store.initialize()
    followers = factory.create_followers(store)

    registry = build_default_registry(
        store,
        followers,
        OptionRewriteRules(store),
        default_template=config.templates.default_content,
    )
    runner = MigrationRunner(
        versions=VersionStore(store, target_version=config.migration.target_version),
        lock=MigrationLock(store, ttl_seconds=config.migration.lock_ttl_seconds),
        registry=registry,
    )

    return MigrationContext(config=config, store=store, followers=followers, runner=runner)


@asynccontextmanager
async def open_runtime(config: Config) -> AsyncIterator[MigrationContext]:
    """Yield an initialized MigrationContext and close its store on exit."""
    context = await initialize_runtime(config)
    try:
        yield context
    finally:
        await context.store.close()
