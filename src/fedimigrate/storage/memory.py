"""In-process store and followers collection.

Used by the ``memory`` storage backend for dry runs and by tests.
Values are deep-copied on the way in and out so callers cannot
mutate stored state by reference.
"""

import copy
from typing import Any


class MemoryKeyValueStore:
    """Dictionary-backed implementation of KeyValueStorePort."""

    def __init__(self) -> None:
        self.options: dict[str, Any] = {}
        self.user_meta: dict[int, dict[str, Any]] = {}

    async def initialize(self) -> None:
        """Nothing to open."""

    async def close(self) -> None:
        """Nothing to close."""

    async def get_option(self, name: str, default: Any = None) -> Any:
        return copy.deepcopy(self.options.get(name, default))

    async def set_option(self, name: str, value: Any) -> None:
        self.options[name] = copy.deepcopy(value)

    async def delete_option(self, name: str) -> None:
        self.options.pop(name, None)

    async def add_user(self, user_id: int) -> None:
        self.user_meta.setdefault(user_id, {})

    async def list_user_ids(self) -> list[int]:
        return sorted(self.user_meta)

    async def get_user_meta(self, user_id: int, key: str, default: Any = None) -> Any:
        return copy.deepcopy(self.user_meta.get(user_id, {}).get(key, default))

    async def set_user_meta(self, user_id: int, key: str, value: Any) -> None:
        self.user_meta.setdefault(user_id, {})[key] = copy.deepcopy(value)


class MemoryFollowersCollection:
    """List-backed implementation of FollowersPort."""

    def __init__(self) -> None:
        self._followers: dict[int, list[str]] = {}

    async def add_follower(self, user_id: int, actor: str) -> None:
        actors = self._followers.setdefault(user_id, [])
        if actor not in actors:
            actors.append(actor)

    async def get_followers(self, user_id: int) -> list[str]:
        return list(self._followers.get(user_id, []))

    async def count(self) -> int:
        return sum(len(actors) for actors in self._followers.values())
