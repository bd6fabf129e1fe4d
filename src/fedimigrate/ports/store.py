"""Port interfaces for the persisted state migrations read and write."""

from typing import Any, Protocol


class KeyValueStorePort(Protocol):
    """Protocol for named scalar options and per-user metadata.

    Values are JSON-compatible: strings, integers, lists, mappings.
    """

    async def get_option(self, name: str, default: Any = None) -> Any:
        """Return the stored value for name, or default if absent."""
        ...

    async def set_option(self, name: str, value: Any) -> None:
        """Store value under name. Durable when the call returns."""
        ...

    async def delete_option(self, name: str) -> None:
        """Delete name. No-op if absent."""
        ...

    async def get_user_meta(self, user_id: int, key: str, default: Any = None) -> Any:
        """Return a user's metadata value, or default if absent."""
        ...

    async def set_user_meta(self, user_id: int, key: str, value: Any) -> None:
        """Store a user's metadata value."""
        ...

    async def list_user_ids(self) -> list[int]:
        """Return all user identifiers in ascending order."""
        ...

    async def add_user(self, user_id: int) -> None:
        """Register a user identifier. No-op if already present."""
        ...


class FollowersPort(Protocol):
    """Protocol for the normalized followers collection."""

    async def add_follower(self, user_id: int, actor: str) -> None:
        """Record actor as a follower of user_id. Idempotent per pair."""
        ...

    async def get_followers(self, user_id: int) -> list[str]:
        """Return the actors following user_id, in insertion order."""
        ...


class RewriteRulesPort(Protocol):
    """Protocol for the routing rule cache."""

    async def flush(self) -> None:
        """Discard cached routing rules so they are rebuilt on next use."""
        ...
