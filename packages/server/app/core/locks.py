"""
Per-column advisory locks.

Each read-recompute-write of a column's ordering holds the lock of every
column it touches, so two requests never reindex the same column at once.
"""

from __future__ import annotations

import asyncio
import weakref
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class ColumnLocks:
    """One ``asyncio.Lock`` per status value, created on first use.

    Locks are kept per event loop since an ``asyncio.Lock`` cannot be shared
    between loops.
    """

    def __init__(self) -> None:
        self._by_loop: weakref.WeakKeyDictionary[
            asyncio.AbstractEventLoop, dict[str, asyncio.Lock]
        ] = weakref.WeakKeyDictionary()

    def _lock_for(self, status: str) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        locks = self._by_loop.setdefault(loop, {})
        if status not in locks:
            locks[status] = asyncio.Lock()
        return locks[status]

    @asynccontextmanager
    async def hold(self, *statuses: str) -> AsyncIterator[None]:
        """Hold the locks of all given columns.

        Locks are always taken in sorted order so that two moves between the
        same pair of columns in opposite directions cannot deadlock.
        """
        acquired: list[asyncio.Lock] = []
        try:
            for status in sorted(set(statuses)):
                lock = self._lock_for(status)
                await lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()


column_locks = ColumnLocks()
