"""Registration – KeyedLock."""
from __future__ import annotations

import asyncio
import contextlib
from typing import AsyncIterator


class KeyedLock:
    """One ``asyncio.Lock`` per key.

    Serialises read-compare-write sequences on the same device state while
    leaving other devices independent.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    @contextlib.asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        async with self.lock_for(key):
            yield

    def locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()


__all__ = ["KeyedLock"]
