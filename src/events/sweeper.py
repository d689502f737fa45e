"""Background task that runs the purge sweep on a fixed interval."""

import asyncio
import logging

from src.events.lifecycle import EventLifecycleController

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL = 60 * 60  # seconds


class PurgeSweeper:
    """
    Periodically purges soft-deleted events past the retention window.

    The first sweep runs immediately on start. A failing sweep is logged and
    the loop carries on with the next tick.
    """

    def __init__(
        self,
        controller: EventLifecycleController,
        interval: float = DEFAULT_SWEEP_INTERVAL,
    ) -> None:
        self._controller = controller
        self._interval = interval
        self._shutdown_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._shutdown_event.clear()
        self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        self._shutdown_event.set()
        if self._task is not None:
            await self._task
            self._task = None

    async def run(self) -> None:
        logger.info(f"Starting purge sweeper (interval: {self._interval}s)")
        try:
            while not self._shutdown_event.is_set():
                try:
                    await self._controller.purge_sweep()
                except Exception as e:
                    logger.error(f"Unexpected error in purge sweep: {e}", exc_info=True)
                await self._wait_for_next_tick()
        except asyncio.CancelledError:
            logger.info("Purge sweeper cancelled")
            raise
        logger.info("Purge sweeper stopped")

    async def _wait_for_next_tick(self) -> None:
        """Wait for the next interval or the shutdown signal."""
        try:
            await asyncio.wait_for(self._shutdown_event.wait(), timeout=self._interval)
        except asyncio.TimeoutError:
            pass
