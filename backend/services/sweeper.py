"""Background task that periodically runs a sweep callable.

The owning component creates the sweeper; the application lifespan starts
it on startup and stops it on shutdown.
"""

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class PeriodicSweeper:
    def __init__(self, name: str, interval: float, sweep: Callable[[], int]):
        if interval <= 0:
            raise ValueError(f"Sweep interval must be positive, got {interval}")
        self.name = name
        self.interval = interval
        self._sweep = sweep
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop. Idempotent."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=f"sweeper:{self.name}")
        logger.info("Started %s sweeper (every %ss)", self.name, self.interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Stopped %s sweeper", self.name)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                removed = self._sweep()
            except Exception:
                # Keep the loop alive; the next tick retries.
                logger.exception("%s sweep failed", self.name)
                continue
            if removed:
                logger.debug("%s sweep removed %d entries", self.name, removed)
