"""Session lifecycle: credential, connect, health, bounded reconnect with resumption.

State changes happen synchronously inside callbacks or task steps on the
event loop, so the state machine needs no locks. Every connection attempt
gets a generation number; callbacks from an older generation are ignored.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol
from functools import partial
from collections.abc import Callable

from sightline.state.send import SendResult
from sightline.state.media import MultimodalInput
from sightline.state.inbound import InboundMessage
from sightline.state.credential import Credential
from sightline.runtime.clock import Clock, SystemClock
from sightline.credentials.store import CredentialStore
from sightline.transport.failures import is_auth_failure
from sightline.config.reconnect import BACKOFF_EXPONENTIAL
from sightline.config.websocket import WS_CLOSE_NORMAL_CODE
from sightline.state.session import SessionState, ReconnectAttempt
from sightline.state.callbacks import SessionCallbacks, ConnectionListener
from sightline.state.settings import HealthSettings, SessionSettings, ReconnectSettings
from sightline.errors import (
    SendFailed,
    AuthRejected,
    ConnectionLost,
    ConfigurationError,
    ReconnectExhausted,
    ConnectionStateError,
    CredentialUnavailable,
)

from .health import HealthMonitor

logger = logging.getLogger(__name__)


class SessionConnection(Protocol):
    last_activity: float

    async def connect(self, credential: Credential, resumption_handle: str | None = None) -> None: ...

    async def send(self, unit: MultimodalInput) -> None: ...

    async def close(self) -> None: ...


ConnectionFactory = Callable[[ConnectionListener], SessionConnection]


class SessionLifecycleManager:
    def __init__(
        self,
        *,
        credentials: CredentialStore,
        connection_factory: ConnectionFactory,
        reconnect: ReconnectSettings,
        session: SessionSettings,
        health: HealthSettings,
        clock: Clock | None = None,
        callbacks: SessionCallbacks | None = None,
    ) -> None:
        self._credentials = credentials
        self._connection_factory = connection_factory
        self._reconnect = reconnect
        self._session = session
        self._health_settings = health
        self._clock = clock or SystemClock()
        self._callbacks = callbacks or SessionCallbacks()

        self._state = SessionState.IDLE
        self._attempt = ReconnectAttempt()
        self._generation = 0
        self._connection: SessionConnection | None = None
        self._resumption_handle: str | None = None
        self._busy = False
        self._busy_since = 0.0
        self._send_failures = 0
        self._dropped_sends = 0
        self._last_error = ""
        self._fatal_error: BaseException | None = None

        self._health: HealthMonitor | None = None
        self._connect_task: asyncio.Task | None = None
        self._go_away_task: asyncio.Task | None = None
        self._close_tasks: set[asyncio.Task] = set()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def resumption_handle(self) -> str | None:
        return self._resumption_handle

    @property
    def attempts(self) -> int:
        return self._attempt.count

    @property
    def dropped_sends(self) -> int:
        return self._dropped_sends

    async def start(self) -> None:
        """Run the first connection attempt.

        Returns once that attempt has either connected or handed over to the
        reconnect loop. A configuration problem is raised here (and reported
        through `on_fatal`) because no retry can fix it.
        """
        if self._state is not SessionState.IDLE:
            logger.debug("start() ignored in state %s", self._state.value)
            return
        self._connect_task = asyncio.create_task(self._attempt_connect())
        await asyncio.wait({self._connect_task})
        if isinstance(self._fatal_error, ConfigurationError):
            raise self._fatal_error

    async def stop(self) -> None:
        connection = self._enter_closed(None)
        if connection is not None:
            await self._close_connection(connection)

    async def send(self, unit: MultimodalInput) -> SendResult:
        connection = self._connection
        if self._state is not SessionState.CONNECTED or connection is None:
            logger.debug("send rejected in state %s", self._state.value)
            return SendResult.REJECTED

        if unit.has_audio:
            if self._busy and not self._busy_expired():
                self._dropped_sends += 1
                logger.debug("audio input dropped while a response is pending (dropped=%d)", self._dropped_sends)
                return SendResult.DROPPED
            self._busy = True
            self._busy_since = self._clock.now()

        try:
            await connection.send(unit)
        except (SendFailed, ConnectionStateError) as exc:
            if connection is not self._connection:
                return SendResult.FAILED
            if unit.has_audio:
                self._busy = False
            self._send_failures += 1
            logger.warning(
                "send failed (%d/%d): %s", self._send_failures, self._session.send_failure_limit, exc
            )
            if self._send_failures >= self._session.send_failure_limit:
                self._begin_reconnect(ConnectionLost(reason=f"{self._send_failures} consecutive send failures"))
            return SendResult.FAILED

        self._send_failures = 0
        return SendResult.SENT

    async def _attempt_connect(self) -> None:
        self._generation += 1
        generation = self._generation
        self._set_state(SessionState.CONNECTING)

        try:
            credential = await self._credentials.ensure_valid()
            if generation != self._generation:
                return
            connection = self._connection_factory(self._listener_for(generation))
            self._connection = connection
            await asyncio.wait_for(
                connection.connect(credential, self._resumption_handle),
                timeout=self._session.connect_timeout_s,
            )
        except ConfigurationError as exc:
            if generation == self._generation:
                self._close_in_background(self._enter_closed(exc))
            return
        except AuthRejected as exc:
            if generation == self._generation:
                self._credentials.invalidate()
                self._begin_reconnect(exc)
            return
        except TimeoutError:
            if generation == self._generation:
                self._begin_reconnect(ConnectionLost(reason="connect timed out"))
            return
        except (CredentialUnavailable, ConnectionLost, OSError) as exc:
            if generation == self._generation:
                self._begin_reconnect(exc)
            return
        except Exception as exc:
            logger.exception("unexpected failure while connecting")
            if generation == self._generation:
                self._begin_reconnect(ConnectionLost(reason=f"unexpected connect failure: {exc!r}"))
            return

        if generation == self._generation and self._state is SessionState.CONNECTING:
            self._enter_connected(generation)

    def _enter_connected(self, generation: int) -> None:
        connection = self._connection
        if connection is None:
            return
        self._attempt.reset()
        self._send_failures = 0
        self._busy = False
        self._health = HealthMonitor(
            last_activity_fn=lambda: connection.last_activity,
            is_connected_fn=lambda: self._state is SessionState.CONNECTED,
            on_inactive=partial(self._on_inactive, generation),
            check_interval_ms=self._health_settings.check_interval_ms,
            inactivity_threshold_ms=self._health_settings.inactivity_threshold_ms,
            clock=self._clock,
        )
        self._health.start()
        self._set_state(SessionState.CONNECTED)

    def _begin_reconnect(self, error: BaseException, *, immediate: bool = False) -> None:
        if self._state not in (SessionState.CONNECTING, SessionState.CONNECTED):
            return
        self._last_error = str(error)
        self._generation += 1
        self._cancel_timers()
        stale = self._detach_connection()
        self._busy = False

        self._attempt.count += 1
        if self._attempt.count > self._reconnect.max_attempts:
            exhausted = ReconnectExhausted(attempts=self._reconnect.max_attempts, last_error=self._last_error)
            self._enter_closed(exhausted)
            self._close_in_background(stale)
            return

        delay_s = 0.0 if immediate else self._backoff_delay_s(self._attempt.count)
        self._attempt.next_delay_s = delay_s
        logger.warning(
            "reconnecting (attempt %d/%d) in %.1fs: %s",
            self._attempt.count,
            self._reconnect.max_attempts,
            delay_s,
            error,
        )
        self._set_state(SessionState.RECONNECTING)
        self._connect_task = asyncio.create_task(self._reconnect_after(delay_s, stale))

    async def _reconnect_after(self, delay_s: float, stale: SessionConnection | None) -> None:
        if stale is not None:
            await self._close_connection(stale)
        await self._clock.sleep(delay_s)
        if self._state is SessionState.RECONNECTING:
            await self._attempt_connect()

    def _backoff_delay_s(self, attempt: int) -> float:
        base_ms = self._reconnect.base_delay_ms
        if self._reconnect.backoff == BACKOFF_EXPONENTIAL:
            delay_ms = base_ms * (2 ** (attempt - 1))
        else:
            delay_ms = base_ms * attempt
        return min(delay_ms, self._reconnect.max_delay_ms) / 1000.0

    def _enter_closed(self, error: BaseException | None) -> SessionConnection | None:
        """Move to CLOSED and return the detached connection for the caller to close."""
        if self._state is SessionState.CLOSED:
            return None
        self._generation += 1
        self._cancel_timers()
        _cancel(self._connect_task)
        self._connect_task = None
        for task in list(self._close_tasks):
            _cancel(task)
        self._credentials.clear()
        self._resumption_handle = None
        self._busy = False
        connection = self._detach_connection()
        self._set_state(SessionState.CLOSED)

        if error is not None and self._fatal_error is None:
            self._fatal_error = error
            logger.error("session closed: %s", error)
            if self._callbacks.on_fatal is not None:
                try:
                    self._callbacks.on_fatal(error)
                except Exception:
                    logger.exception("on_fatal callback failed")
        return connection

    def _detach_connection(self) -> SessionConnection | None:
        connection, self._connection = self._connection, None
        return connection

    def _close_in_background(self, connection: SessionConnection | None) -> None:
        if connection is None:
            return
        task = asyncio.create_task(self._close_connection(connection))
        self._close_tasks.add(task)
        task.add_done_callback(self._close_tasks.discard)

    async def _close_connection(self, connection: SessionConnection) -> None:
        try:
            await connection.close()
        except Exception:
            logger.debug("closing connection failed", exc_info=True)

    def _cancel_timers(self) -> None:
        if self._health is not None:
            self._health.cancel()
            self._health = None
        _cancel(self._go_away_task)
        self._go_away_task = None

    def _listener_for(self, generation: int) -> ConnectionListener:
        return ConnectionListener(
            on_opened=partial(self._on_opened, generation),
            on_message=partial(self._on_message, generation),
            on_error=partial(self._on_error, generation),
            on_closed=partial(self._on_closed, generation),
        )

    def _is_live(self, generation: int) -> bool:
        return generation == self._generation and self._state in (
            SessionState.CONNECTING,
            SessionState.CONNECTED,
        )

    def _on_opened(self, generation: int) -> None:
        logger.debug("connection opened (generation=%d)", generation)

    def _on_message(self, generation: int, message: InboundMessage) -> None:
        if not self._is_live(generation):
            return

        update = message.resumption_update
        if update is not None and update.resumable and update.new_handle:
            self._resumption_handle = update.new_handle
            logger.debug("stored new resumption handle")

        if message.termination_warning is not None:
            self._schedule_handover(generation, message.termination_warning.time_left_s)

        if message.generation_complete and self._busy:
            self._busy = False

        if self._callbacks.on_message is not None:
            try:
                self._callbacks.on_message(message)
            except Exception:
                logger.exception("on_message callback failed")

    def _on_error(self, generation: int, error: BaseException) -> None:
        if not self._is_live(generation):
            return
        if isinstance(error, AuthRejected):
            self._credentials.invalidate()
        self._begin_reconnect(error)

    def _on_closed(self, generation: int, code: int, reason: str) -> None:
        if not self._is_live(generation):
            return
        if is_auth_failure(code, reason):
            self._credentials.invalidate()
            self._begin_reconnect(AuthRejected(reason=reason or "closed by server", code=code))
            return
        if code == WS_CLOSE_NORMAL_CODE:
            logger.info("server closed the session normally")
            self._close_in_background(self._enter_closed(None))
            return
        self._begin_reconnect(ConnectionLost(reason=reason or "closed by server", code=code))

    def _on_inactive(self, generation: int, idle_s: float) -> None:
        if generation != self._generation or self._state is not SessionState.CONNECTED:
            return
        self._begin_reconnect(ConnectionLost(reason=f"no inbound activity for {idle_s:.0f}s"))

    def _schedule_handover(self, generation: int, time_left_s: float) -> None:
        margin_s = self._session.go_away_margin_ms / 1000.0
        delay_s = max(0.0, time_left_s - margin_s)
        _cancel(self._go_away_task)
        logger.info("server go-away in %.1fs; handing over in %.1fs", time_left_s, delay_s)
        self._go_away_task = asyncio.create_task(self._handover_after(generation, delay_s))

    async def _handover_after(self, generation: int, delay_s: float) -> None:
        await self._clock.sleep(delay_s)
        if generation != self._generation or self._state is not SessionState.CONNECTED:
            return
        self._go_away_task = None
        self._begin_reconnect(ConnectionLost(reason="server go-away deadline"), immediate=True)

    def _busy_expired(self) -> bool:
        timeout_ms = self._session.busy_timeout_ms
        if timeout_ms <= 0:
            return False
        if (self._clock.now() - self._busy_since) * 1000.0 < timeout_ms:
            return False
        logger.debug("busy gate expired without a completion signal")
        return True

    def _set_state(self, state: SessionState) -> None:
        if state is self._state:
            return
        logger.info("session state %s -> %s", self._state.value, state.value)
        self._state = state
        if self._callbacks.on_state_change is not None:
            try:
                self._callbacks.on_state_change(state)
            except Exception:
                logger.exception("on_state_change callback failed")


def _cancel(task: asyncio.Task | None) -> None:
    if task is not None and task is not asyncio.current_task() and not task.done():
        task.cancel()


__all__ = ["ConnectionFactory", "SessionConnection", "SessionLifecycleManager"]
