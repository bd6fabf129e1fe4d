"""Logging configuration using loguru.

Console output goes to stderr so that ``fedimigrate status``
output on stdout stays machine-readable.
"""

import logging
import sys

from loguru import logger

from fedimigrate.config.models import LoggingConfig

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


class _InterceptHandler(logging.Handler):
    """Route standard library logging (aiosqlite, asyncio) through loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(config: LoggingConfig) -> None:
    """
    Replace loguru's default sink according to configuration.

    Args:
        config: LoggingConfig with level, format, and file settings.
    """
    logger.remove()

    serialize = config.format == "json"
    fmt = "{message}" if serialize else CONSOLE_FORMAT

    logger.add(
        sys.stderr,
        format=fmt,
        level=config.level,
        serialize=serialize,
        colorize=not serialize,
    )

    if config.file:
        logger.add(
            config.file,
            format=fmt,
            level=config.level,
            serialize=serialize,
            rotation=config.rotation,
            retention=config.retention,
            compression="gz",
        )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    logger.debug("Logging configured: level={} format={}", config.level, config.format)
