"""Injectable time source for timers, expiry checks and activity tracking."""

from __future__ import annotations

import time
import asyncio
from typing import Protocol


class Clock(Protocol):
    def now(self) -> float: ...

    async def sleep(self, delay_s: float) -> None: ...


class SystemClock:
    """Wall-clock seconds (comparable with issuer expiry timestamps)."""

    def now(self) -> float:
        return time.time()

    async def sleep(self, delay_s: float) -> None:
        await asyncio.sleep(max(0.0, delay_s))


__all__ = ["Clock", "SystemClock"]
