"""Periodic trigger for the migration runner."""

import asyncio
import contextlib

from loguru import logger

from fedimigrate.services.runner import MigrationRunner


class MigrationScheduler:
    """
    Invokes the runner on a fixed interval until stopped.

    Run errors are logged and the loop continues; the failed run's
    lock keeps later ticks locked out until it expires.
    """

    def __init__(self, runner: MigrationRunner, interval_seconds: int = 3600) -> None:
        self.runner = runner
        self.interval = interval_seconds
        self.runs = 0
        self._shutdown_event = asyncio.Event()

    async def run_forever(self) -> None:
        """Main trigger loop."""
        logger.info("Migration scheduler started: interval={}s", self.interval)

        while not self._shutdown_event.is_set():
            try:
                result = await self.runner.run()
                logger.debug("Scheduled migration run: outcome={}", result.outcome)
            except Exception as e:
                logger.warning(
                    "Scheduled migration failed, next attempt in {}s: {}", self.interval, e
                )
            self.runs += 1

            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(self._shutdown_event.wait(), timeout=self.interval)

        logger.info("Migration scheduler stopped after {} run(s)", self.runs)

    async def stop(self) -> None:
        """Signal shutdown."""
        self._shutdown_event.set()
