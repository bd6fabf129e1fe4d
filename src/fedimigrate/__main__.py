"""CLI entry point for fedimigrate.

Provides commands for initializing the store, running or scheduling
migrations, and inspecting or clearing the migration lock.
"""

import asyncio
import signal
from pathlib import Path
from typing import TYPE_CHECKING

import click

from fedimigrate import __version__

if TYPE_CHECKING:
    from fedimigrate.config.models import Config

config_option = click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Versioned data migration runner.

    Brings a store's data from its recorded version up to the version
    of the running code, one idempotent step at a time.
    """
    pass


def _load(config: Path | None) -> "Config":
    from fedimigrate.config.loader import load_config
    from fedimigrate.utils.logging import configure_logging

    cfg = load_config(config)
    configure_logging(cfg.logging)
    return cfg


@cli.command()
@config_option
def init(config: Path | None) -> None:
    """Create the store schema."""
    from fedimigrate.runtime import open_runtime

    cfg = _load(config)

    async def main() -> None:
        async with open_runtime(cfg):
            pass

    asyncio.run(main())

    if cfg.storage.backend == "sqlite":
        click.echo(f"Store initialized at {cfg.storage.db_path}")
    else:
        click.echo("Memory backend selected; nothing to initialize")


@cli.command()
@config_option
def migrate(config: Path | None) -> None:
    """Run pending migrations once."""
    from fedimigrate.models.state import RunOutcome
    from fedimigrate.runtime import open_runtime

    cfg = _load(config)

    async def main() -> None:
        async with open_runtime(cfg) as ctx:
            result = await ctx.runner.run()

        if result.outcome == RunOutcome.MIGRATED:
            click.echo(f"Migrated {result.from_version} -> {result.target_version}")
            for name in result.applied_steps:
                click.echo(f"  [OK] {name}")
        elif result.outcome == RunOutcome.LOCKED_OUT:
            click.echo("Another migration holds the lock; try again later")
        else:
            click.echo(f"Already at version {result.target_version}")

    asyncio.run(main())


@cli.command()
@config_option
def status(config: Path | None) -> None:
    """Show stored and target versions and lock state."""
    from fedimigrate.runtime import open_runtime

    cfg = _load(config)

    async def main() -> None:
        async with open_runtime(cfg) as ctx:
            report = await ctx.runner.status()

        click.echo(f"Stored version: {report.current_version}")
        click.echo(f"Target version: {report.target_version}")
        click.echo(f"Up to date: {'yes' if report.is_latest else 'no'}")
        click.echo(f"Locked: {'yes' if report.locked else 'no'}")

    asyncio.run(main())


@cli.command()
@config_option
def unlock(config: Path | None) -> None:
    """Delete the migration lock left by a crashed run."""
    from fedimigrate.runtime import open_runtime

    cfg = _load(config)

    async def main() -> None:
        async with open_runtime(cfg) as ctx:
            await ctx.runner.lock.unlock()

    asyncio.run(main())
    click.echo("Migration lock released")


@cli.command()
@config_option
@click.option(
    "--interval",
    "-i",
    type=click.IntRange(min=1),
    help="Seconds between runs (overrides migration.interval_seconds)",
)
def schedule(config: Path | None, interval: int | None) -> None:
    """Run migrations periodically until interrupted."""
    from fedimigrate.runtime import open_runtime
    from fedimigrate.services.scheduler import MigrationScheduler

    cfg = _load(config)

    async def main() -> None:
        async with open_runtime(cfg) as ctx:
            scheduler = MigrationScheduler(
                ctx.runner,
                interval_seconds=interval or cfg.migration.interval_seconds,
            )
            loop = asyncio.get_running_loop()
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.add_signal_handler(sig, lambda: asyncio.ensure_future(scheduler.stop()))
            await scheduler.run_forever()

    asyncio.run(main())


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
