"""Retry utilities with exponential backoff.

SQLite returns "database is locked" while another process holds a
write transaction; those surface as retryable StorageErrors.
"""

from collections.abc import Mapping
from typing import Any

import backoff
from loguru import logger

from fedimigrate.errors import StorageError


def on_backoff(details: Mapping[str, Any]) -> None:
    """Log retry attempts."""
    logger.warning(
        "Retrying {}: attempt={} wait={:.2f}s error={}",
        details["target"].__name__,
        details["tries"],
        details["wait"],
        details["exception"],
    )


def on_giveup(details: Mapping[str, Any]) -> None:
    """Log when retries are exhausted."""
    logger.error(
        "Gave up on {}: attempts={} error={}",
        details["target"].__name__,
        details["tries"],
        details["exception"],
    )


def _not_retryable(exc: Exception) -> bool:
    return not getattr(exc, "retryable", True)


retry_storage = backoff.on_exception(
    backoff.expo,
    StorageError,
    max_tries=5,
    max_time=10,
    giveup=_not_retryable,
    on_backoff=on_backoff,
    on_giveup=on_giveup,
)
