"""Periodic inactivity check for an open realtime connection."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from sightline.runtime.clock import Clock

logger = logging.getLogger(__name__)


class HealthMonitor:
    """Report a connection as dead once nothing has arrived for too long.

    The monitor never closes anything itself; it calls `on_inactive` at most
    once and exits. The owner decides what a dead connection means.
    """

    def __init__(
        self,
        *,
        last_activity_fn: Callable[[], float],
        is_connected_fn: Callable[[], bool],
        on_inactive: Callable[[float], None],
        check_interval_ms: int,
        inactivity_threshold_ms: int,
        clock: Clock,
    ) -> None:
        self._last_activity_fn = last_activity_fn
        self._is_connected_fn = is_connected_fn
        self._on_inactive = on_inactive
        self._tick_s = float(check_interval_ms) / 1000.0
        self._threshold_s = float(inactivity_threshold_ms) / 1000.0
        self._clock = clock
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._watchdog_loop())
        return self._task

    def cancel(self) -> None:
        task, self._task = self._task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()

    async def _watchdog_loop(self) -> None:
        while True:
            await self._clock.sleep(self._tick_s)
            if not self._is_connected_fn():
                continue
            idle_s = self._clock.now() - self._last_activity_fn()
            if idle_s >= self._threshold_s:
                logger.warning("no inbound activity for %.1fs; treating connection as dead", idle_s)
                self._on_inactive(idle_s)
                return


__all__ = ["HealthMonitor"]
