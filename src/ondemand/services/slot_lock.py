"""Per-identifier mutual exclusion for cache slots.

An asyncio.Lock serializes tasks of this process; a lock file next to the slot
serializes processes sharing the same cache root.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from filelock import AsyncFileLock

from ondemand.errors import FilesystemError
from ondemand.slots import lock_path


class SlotLocks:
    """Registry of per-identifier locks rooted at one cache directory."""

    def __init__(self, package_path: Path) -> None:
        self._package_path = package_path
        self._locks: dict[str, asyncio.Lock] = {}

    @asynccontextmanager
    async def hold(self, identifier: str) -> AsyncIterator[None]:
        """Hold the slot of identifier exclusively for the duration of the block.

        Raises:
            FilesystemError: If the cache root or the lock file cannot be created
        """
        lock = self._locks.setdefault(identifier, asyncio.Lock())
        async with lock:
            try:
                await asyncio.to_thread(self._package_path.mkdir, parents=True, exist_ok=True)
            except OSError as e:
                raise FilesystemError(self._package_path, "create directory", str(e)) from e

            path = lock_path(self._package_path, identifier)
            file_lock = AsyncFileLock(str(path))
            try:
                await file_lock.acquire()
            except OSError as e:
                raise FilesystemError(path, "acquire lock", str(e)) from e
            try:
                yield
            finally:
                await file_lock.release()
