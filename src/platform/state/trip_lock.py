"""
In-process keyed lock

Single-writer point per trip instance (and per trip key while the instance is
being created). Only valid inside one process; the storage constraints remain
the final guard.
"""

from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager
from typing import Dict

import anyio

from src.platform.logging.loguru_io import Logger


class _LockEntry:
    __slots__ = ('lock', 'holders')

    def __init__(self) -> None:
        self.lock = anyio.Lock()
        self.holders = 0


class TripLockRegistry:
    """
    Hands out one lock per key and forgets the key once nobody holds or waits for it

    Usage:
        async with trip_lock_registry.hold(('trip', trip_id)):
            ...
    """

    def __init__(self) -> None:
        self._entries: Dict[Hashable, _LockEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _LockEntry()
        entry.holders += 1
        try:
            if entry.lock.locked():
                Logger.base.debug(f'⏳ [LOCK] Waiting for {key}')
            async with entry.lock:
                Logger.base.debug(f'🔒 [LOCK] Acquired {key}')
                yield
            Logger.base.debug(f'🔓 [LOCK] Released {key}')
        finally:
            entry.holders -= 1
            if entry.holders == 0 and self._entries.get(key) is entry:
                del self._entries[key]
