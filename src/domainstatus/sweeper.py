"""Periodic retention sweep over a :class:`StatusStore`."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from domainstatus.store import StatusStore, utcnow


class RetentionSweeper:
    """Asyncio task that evicts old updates from *store* every *interval*."""

    def __init__(
        self,
        store: StatusStore,
        *,
        interval: timedelta,
        max_age: timedelta,
        clock: Callable[[], datetime] = utcnow,
        logger: logging.Logger | None = None,
    ) -> None:
        self._store = store
        self._interval = interval
        self._max_age = max_age
        self._clock = clock
        self._logger = logger or logging.getLogger(__name__)
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        """Whether the sweep loop is scheduled."""
        return self._task is not None and not self._task.done()

    def sweep_once(self) -> int:
        """Run one eviction pass and return the number of updates removed."""
        removed = self._store.evict(self._clock(), self._max_age)
        self._logger.info("Retention sweep complete: removed %d updates, %d domains remain", removed, len(self._store))
        return removed

    async def _run(self) -> None:
        delay = self._interval.total_seconds()
        while True:
            await asyncio.sleep(delay)
            try:
                self.sweep_once()
            except Exception:
                self._logger.exception("Retention sweep failed")

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.is_running:
            return
        self._logger.debug(
            "Retention sweeper starting interval=%s max_age=%s",
            self._interval,
            self._max_age,
        )
        self._task = asyncio.create_task(self._run(), name="domainstatus-retention-sweep")

    async def stop(self) -> None:
        """Cancel the sweep loop; a pass already running finishes first."""
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        self._logger.debug("Retention sweeper stopped")
