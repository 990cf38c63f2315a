"""Per-client sliding-window rate limiter.

Each client keeps the raw timestamps of its admitted requests, which makes
admission exact at the cost of O(requests-in-window) memory per client.
Fine for a single process with low traffic; a bucketed counter or token
bucket would be needed at scale.
"""

import logging
import threading
import time
from collections import deque
from collections.abc import Callable

from services.sweeper import PeriodicSweeper

logger = logging.getLogger(__name__)


class RateLimiter:
    def __init__(
        self,
        limit: int,
        window: float,
        sweep_interval: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window = window
        self._requests: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._sweeper = PeriodicSweeper("rate-limiter", sweep_interval, self.sweep)

    def is_allowed(self, client_key: str) -> bool:
        """Admit and record the request if the client is under its limit.

        Rejected requests are not recorded, so they never count against
        later admission.
        """
        with self._lock:
            now = self._clock()
            timestamps = self._requests.setdefault(client_key, deque())
            _prune(timestamps, now - self.window)
            if len(timestamps) >= self.limit:
                return False
            timestamps.append(now)
            return True

    def sweep(self) -> int:
        """Drop timestamps older than twice the window and forget idle clients.

        Returns the number of clients removed.
        """
        with self._lock:
            cutoff = self._clock() - 2 * self.window
            idle = []
            for client_key, timestamps in self._requests.items():
                _prune(timestamps, cutoff)
                if not timestamps:
                    idle.append(client_key)
            for client_key in idle:
                del self._requests[client_key]
        if idle:
            logger.debug("Forgot %d idle rate-limit clients", len(idle))
        return len(idle)

    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._requests)

    @property
    def sweeping(self) -> bool:
        return self._sweeper.running

    def start(self) -> None:
        self._sweeper.start()

    async def stop(self) -> None:
        await self._sweeper.stop()


def _prune(timestamps: deque[float], cutoff: float) -> None:
    # Timestamps are appended in order, so stale ones sit at the left.
    while timestamps and timestamps[0] <= cutoff:
        timestamps.popleft()
