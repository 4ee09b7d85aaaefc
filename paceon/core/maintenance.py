"""Background housekeeping for the in-process caches."""
import asyncio
import logging
from typing import Iterable, List, Optional

from paceon.core.cache import TTLCache

logger = logging.getLogger(__name__)


class CacheSweeper:
    """Periodically purges expired entries from a set of caches.

    The owner (the FastAPI lifespan) calls :meth:`start` on startup and
    awaits :meth:`stop` on shutdown.
    """

    def __init__(self, caches: Iterable[TTLCache], interval_seconds: float = 60):
        self.caches: List[TTLCache] = list(caches)
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sweep_once(self) -> int:
        removed = 0
        for cache in self.caches:
            count = cache.sweep()
            if count:
                logger.info(f"Swept {count} expired entries from {cache.name} cache")
            removed += count
        return removed

    async def _loop(self):
        logger.info("Cache sweeper started")
        try:
            while True:
                await asyncio.sleep(self.interval_seconds)
                try:
                    self.sweep_once()
                except Exception as e:
                    logger.error(f"Cache sweep error: {e}")
        finally:
            logger.info("Cache sweeper stopped")

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name="cache-sweeper")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
