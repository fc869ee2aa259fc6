"""Session lifecycle states and reconnect bookkeeping."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class SessionState(enum.Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"
    CLOSED = "closed"


@dataclass(slots=True)
class ReconnectAttempt:
    count: int = 0
    next_delay_s: float = 0.0

    def reset(self) -> None:
        self.count = 0
        self.next_delay_s = 0.0


__all__ = ["ReconnectAttempt", "SessionState"]
