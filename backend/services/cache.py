"""In-memory TTL cache for serialized responses. No Redis needed.

Note: Each uvicorn worker has its own cache instance. With --workers 2,
a response may be rendered twice (once per worker). This is acceptable for
this project's scale.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from services.sweeper import PeriodicSweeper

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    key: str
    value: bytes
    stored_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.stored_at > self.ttl


class TTLCache:
    """Key -> bytes store where every entry carries its own TTL.

    Expired entries are never returned by ``get``; they are physically
    removed by ``sweep``, which the background sweeper runs on a fixed
    interval.
    """

    def __init__(
        self,
        sweep_interval: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._store: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._sweeper = PeriodicSweeper("response-cache", sweep_interval, self.sweep)

    def get(self, key: str) -> bytes | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None or entry.is_expired(self._clock()):
                return None
            return entry.value

    def set(self, key: str, value: bytes, ttl: float) -> None:
        with self._lock:
            self._store[key] = CacheEntry(key=key, value=value, stored_at=self._clock(), ttl=ttl)

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def sweep(self) -> int:
        """Evict every expired entry. Returns the number evicted."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._store.items() if entry.is_expired(now)]
            for key in expired:
                del self._store[key]
        if expired:
            logger.debug("Evicted %d expired cache entries", len(expired))
        return len(expired)

    @property
    def sweeping(self) -> bool:
        return self._sweeper.running

    def start(self) -> None:
        self._sweeper.start()

    async def stop(self) -> None:
        await self._sweeper.stop()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
