"""Periodic latest-reading poll feeding the status evaluator."""

import asyncio
import logging
from collections.abc import Callable

from hive_monitor.config import POLL_INTERVAL_SECONDS
from hive_monitor.dashboard.api_client import HiveApiClient
from hive_monitor.errors import TransportError
from hive_monitor.schemas import DEFAULT_THRESHOLDS, AlertState, ReadingOut, ThresholdSet
from hive_monitor.services.status_service import evaluate

logger = logging.getLogger(__name__)

StatusCallback = Callable[[AlertState, ReadingOut | None], None]


class LatestReadingPoller:
    """Polls /latest on a fixed interval and publishes the evaluated status.

    Every poll gets a sequence number. A response is delivered only if it is
    newer than the last delivered one, so a slow request that resolves after a
    faster, later one is discarded.
    """

    def __init__(
        self,
        client: HiveApiClient,
        on_status: StatusCallback,
        thresholds: ThresholdSet = DEFAULT_THRESHOLDS,
        interval: float = POLL_INTERVAL_SECONDS,
    ):
        self.client = client
        self.on_status = on_status
        self.thresholds = thresholds
        self.interval = interval
        self._issued = 0
        self._delivered = 0
        self._tasks: set[asyncio.Task] = set()

    @property
    def last_delivered(self) -> int:
        return self._delivered

    async def poll_once(self) -> bool:
        """Run one poll. Returns False if its result was superseded."""
        self._issued += 1
        seq = self._issued

        reading: ReadingOut | None = None
        error: TransportError | None = None
        try:
            reading = await self.client.fetch_latest()
        except TransportError as e:
            logger.error(f"Error fetching latest reading: {e}")
            error = e

        if seq < self._delivered:
            logger.debug(f"Discarding stale poll #{seq} (already showing #{self._delivered})")
            return False

        self._delivered = seq
        self.on_status(evaluate(reading, error, self.thresholds), reading)
        return True

    def _spawn(self) -> None:
        task = asyncio.create_task(self.poll_once())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def run(self, iterations: int | None = None) -> None:
        """Poll forever, or `iterations` times. Ticks never wait for slow requests."""
        count = 0
        try:
            while iterations is None or count < iterations:
                self._spawn()
                count += 1
                await asyncio.sleep(self.interval)
            if self._tasks:
                await asyncio.gather(*self._tasks)
        finally:
            for task in self._tasks:
                task.cancel()
