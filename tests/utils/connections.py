"""Scripted stand-ins for the realtime connection."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from sightline.state.credential import Credential
from sightline.state.inbound import InboundMessage
from sightline.state.media import MultimodalInput
from sightline.state.callbacks import ConnectionListener


class _Hang(Exception):
    """Scripted outcome: connect() waits forever."""


HANG = _Hang()


class FakeConnection:
    def __init__(
        self,
        listener: ConnectionListener,
        outcome: BaseException | None,
        now_fn: Callable[[], float],
    ) -> None:
        self.listener = listener
        self.outcome = outcome
        self._now = now_fn
        self.last_activity = now_fn()
        self.connect_calls: list[tuple[Credential, str | None]] = []
        self.sent: list[MultimodalInput] = []
        self.send_error: BaseException | None = None
        self.close_calls = 0

    @property
    def closed(self) -> bool:
        return self.close_calls > 0

    async def connect(self, credential: Credential, resumption_handle: str | None = None) -> None:
        self.connect_calls.append((credential, resumption_handle))
        if self.outcome is HANG:
            await asyncio.Event().wait()
        if self.outcome is not None:
            raise self.outcome
        self.last_activity = self._now()
        self.listener.on_opened()

    async def send(self, unit: MultimodalInput) -> None:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(unit)

    async def close(self) -> None:
        self.close_calls += 1

    def deliver(self, message: InboundMessage) -> None:
        self.last_activity = self._now()
        self.listener.on_message(message)

    def fail(self, error: BaseException) -> None:
        self.listener.on_error(error)

    def remote_close(self, code: int, reason: str = "") -> None:
        self.listener.on_closed(code, reason)


class FakeConnectionFactory:
    """Hand out FakeConnections whose connect() follows a script.

    Each entry in `outcomes` is the exception the next connect raises, or None
    for success. Once the script runs out every connect succeeds.
    """

    def __init__(self, outcomes: list[BaseException | None] | None = None, *, now_fn: Callable[[], float]) -> None:
        self._outcomes = list(outcomes or [])
        self._now = now_fn
        self.connections: list[FakeConnection] = []

    def __call__(self, listener: ConnectionListener) -> FakeConnection:
        outcome = self._outcomes.pop(0) if self._outcomes else None
        connection = FakeConnection(listener, outcome, self._now)
        self.connections.append(connection)
        return connection

    @property
    def latest(self) -> FakeConnection:
        return self.connections[-1]

    @property
    def connect_calls(self) -> list[tuple[Credential, str | None]]:
        return [call for conn in self.connections for call in conn.connect_calls]


__all__ = ["HANG", "FakeConnection", "FakeConnectionFactory"]
