"""Callback bundles wired between connection, manager and caller."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Callable

from .session import SessionState
from .inbound import InboundMessage


@dataclass(frozen=True, slots=True)
class ConnectionListener:
    on_opened: Callable[[], None]
    on_message: Callable[[InboundMessage], None]
    on_error: Callable[[BaseException], None]
    on_closed: Callable[[int, str], None]


@dataclass(frozen=True, slots=True)
class SessionCallbacks:
    on_state_change: Callable[[SessionState], None] | None = None
    on_message: Callable[[InboundMessage], None] | None = None
    on_fatal: Callable[[BaseException], None] | None = None


__all__ = ["ConnectionListener", "SessionCallbacks"]
