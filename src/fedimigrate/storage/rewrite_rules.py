"""Routing rule cache stored as an option."""

from loguru import logger

from fedimigrate.ports.store import KeyValueStorePort

REWRITE_RULES_OPTION = "rewrite_rules"


class OptionRewriteRules:
    """Compiled routing rules cached under the ``rewrite_rules`` option.

    Flushing deletes the cached rules; the web layer rebuilds them on
    the next request, picking up routes for the new followers table.
    """

    def __init__(self, store: KeyValueStorePort) -> None:
        self._store = store

    async def flush(self) -> None:
        """Discard cached routing rules."""
        await self._store.delete_option(REWRITE_RULES_OPTION)
        logger.info("Routing rules flushed")
