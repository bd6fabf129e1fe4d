"""Test doubles shared across test modules."""

from typing import Any

from fedimigrate.storage.memory import MemoryKeyValueStore


class FakeClock:
    """Settable replacement for time.time."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingStore(MemoryKeyValueStore):
    """MemoryKeyValueStore that records every write."""

    def __init__(self) -> None:
        super().__init__()
        self.writes: list[tuple[str, str]] = []

    async def set_option(self, name: str, value: Any) -> None:
        self.writes.append(("set_option", name))
        await super().set_option(name, value)

    async def delete_option(self, name: str) -> None:
        self.writes.append(("delete_option", name))
        await super().delete_option(name)

    async def set_user_meta(self, user_id: int, key: str, value: Any) -> None:
        self.writes.append(("set_user_meta", key))
        await super().set_user_meta(user_id, key, value)


class RecordingStep:
    """Step body that appends its name to a shared call log."""

    def __init__(self, name: str, calls: list[str], error: Exception | None = None) -> None:
        self.__name__ = name
        self.calls = calls
        self.error = error

    async def __call__(self) -> None:
        self.calls.append(self.__name__)
        if self.error is not None:
            raise self.error
