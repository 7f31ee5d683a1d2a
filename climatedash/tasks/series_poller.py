"""Sensor series poller background task."""

import asyncio
import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from ..api.sheet_client import SheetClient
from ..core.exceptions import FetchError
from ..models import SamplePoint

logger = logging.getLogger("climatedash.poller")

SeriesListener = Callable[[Tuple[SamplePoint, ...]], None]


@dataclass(frozen=True)
class SeriesState:
    """
    Snapshot of the poller as seen by the dashboard.

    points is None until the first successful fetch. After that the last good
    series is kept through failures (stale-while-revalidate).
    """
    points: Optional[Tuple[SamplePoint, ...]] = None
    last_updated: Optional[datetime] = None
    error: Optional[str] = None
    in_flight: int = 0

    @property
    def has_data(self) -> bool:
        return self.points is not None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def is_loading(self) -> bool:
        """Initial fetch still outstanding and nothing to show yet."""
        return self.points is None and self.error is None

    @property
    def is_refetching(self) -> bool:
        return self.in_flight > 0 and self.points is not None


class SeriesPoller:
    """
    Periodically refetches the series and holds the latest good one.

    Every request is tagged with an increasing sequence number. A response is
    applied only if it is newer than the last applied one, so a slow request
    finishing after a faster, later one cannot overwrite it.
    """

    def __init__(self, client: SheetClient, interval_seconds: int = 10):
        self.client = client
        self.interval_seconds = interval_seconds
        self.state = SeriesState()
        self._issued = 0
        self._applied = 0
        self._listeners: List[SeriesListener] = []
        self._task: Optional[asyncio.Task] = None

    def add_listener(self, callback: SeriesListener) -> None:
        """Register a callback invoked with the new points whenever a series is applied."""
        self._listeners.append(callback)

    async def refresh(self) -> SeriesState:
        """
        Fetch once and apply the outcome.

        Fetch failures are recorded on the state, never raised.
        """
        self._issued += 1
        seq = self._issued
        self.state = replace(self.state, in_flight=self.state.in_flight + 1)

        loop = asyncio.get_running_loop()
        points = None
        error = None
        try:
            # Blocking HTTP call runs in the executor to keep the loop free
            points = await loop.run_in_executor(None, self.client.fetch_series)
        except FetchError as e:
            error = str(e)
        except Exception as e:
            logger.exception(f"series poller: unexpected error during fetch: {e}")
            error = str(e) or "Failed to fetch sensor data"
        finally:
            self.state = replace(self.state, in_flight=max(0, self.state.in_flight - 1))

        if seq < self._applied:
            logger.debug(f"series poller: discarding response #{seq}, #{self._applied} already applied")
            return self.state
        self._applied = seq

        if error is not None:
            logger.error(f"series poller: fetch #{seq} failed: {error}")
            self.state = replace(self.state, error=error)
            return self.state

        if self.state.is_error:
            logger.info("series poller: data source recovered")
        series = tuple(points)
        self.state = replace(self.state, points=series, last_updated=datetime.now(), error=None)
        logger.debug(f"series poller: applied #{seq} with {len(series)} points")

        for callback in self._listeners:
            callback(series)
        return self.state

    async def run(self) -> None:
        """Refresh forever on a fixed cadence."""
        logger.info(f"series poller: polling {self.client.data_url} every {self.interval_seconds}s")
        while True:
            try:
                await self.refresh()
            except Exception as e:
                logger.error(f"series poller: refresh failed: {e}")
            await asyncio.sleep(max(1, self.interval_seconds))

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
