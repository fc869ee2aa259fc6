"""One logical duplex channel to the realtime endpoint."""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable

from websockets.exceptions import InvalidStatus, ConnectionClosed, WebSocketException

from sightline.state.media import MultimodalInput
from sightline.state.credential import Credential
from sightline.state.settings import SessionSettings
from sightline.state.callbacks import ConnectionListener
from sightline.config.websocket import WS_CLOSE_NORMAL_CODE, WS_CLOSE_ABNORMAL_CODE
from sightline.errors import SendFailed, AuthRejected, ConnectionLost, ConnectionStateError

from .failures import classify_close, classify_handshake_status
from .dialer import Dialer, dial_websocket, append_token_query
from .codec import encode_setup, encode_realtime_input, decode_server_message

logger = logging.getLogger(__name__)

_NEW = "new"
_OPENING = "opening"
_OPEN = "open"
_CLOSING = "closing"
_CLOSED = "closed"


class RealtimeConnection:
    """Wrap dial/setup/send/close for a single session attempt.

    A connection object is single-use: once closed, the owner creates a new
    one. Inbound frames are decoded here and handed to the listener; every
    frame refreshes `last_activity`.
    """

    def __init__(
        self,
        listener: ConnectionListener,
        *,
        session: SessionSettings,
        dial: Dialer | None = None,
        now_fn: Callable[[], float] | None = None,
    ) -> None:
        self._listener = listener
        self._session = session
        self._dial = dial or dial_websocket
        self._now = now_fn or time.time
        self._ws: Any = None
        self._state = _NEW
        self._opened: asyncio.Future[None] | None = None
        self._recv_task: asyncio.Task | None = None
        self._close_task: asyncio.Future | None = None
        self._closing = False
        self.last_activity: float = self._now()
        self.close_code: int | None = None
        self.close_reason: str = ""

    @property
    def is_open(self) -> bool:
        return self._state == _OPEN

    def touch(self) -> None:
        self.last_activity = self._now()

    async def connect(self, credential: Credential, resumption_handle: str | None = None) -> None:
        if self._state != _NEW:
            raise ConnectionStateError("connection objects are single-use")
        self._state = _OPENING

        url = append_token_query(self._session.endpoint_url, credential.token, self._session.token_query_param)
        try:
            self._ws = await self._dial(url)
        except InvalidStatus as exc:
            self._state = _CLOSED
            raise classify_handshake_status(exc.response.status_code) from exc
        except (OSError, TimeoutError, WebSocketException) as exc:
            self._state = _CLOSED
            raise ConnectionLost(reason=f"dial failed: {exc!r}") from exc

        self._opened = asyncio.get_running_loop().create_future()
        self._recv_task = asyncio.create_task(self._recv_loop(self._ws))
        try:
            try:
                await self._ws.send(encode_setup(self._session, resumption_handle))
            except WebSocketException as exc:
                raise ConnectionLost(reason=f"setup send failed: {exc!r}") from exc
            await self._opened
        except BaseException:
            # Covers handshake failures and cancellation by a connect timeout.
            await self.close()
            raise

        self.touch()
        logger.info("realtime connection open (resumed=%s)", resumption_handle is not None)

    async def send(self, unit: MultimodalInput) -> None:
        if self._state != _OPEN or self._ws is None:
            raise ConnectionStateError(f"cannot send while connection is {self._state}")
        frame = encode_realtime_input(unit)
        try:
            await self._ws.send(frame)
        except WebSocketException as exc:
            raise SendFailed(f"{exc!r}") from exc
        except OSError as exc:
            raise SendFailed(f"socket error: {exc!r}") from exc

    async def close(self) -> None:
        """Close gracefully; safe to call repeatedly or concurrently."""
        if self._close_task is None:
            self._close_task = asyncio.ensure_future(self._close_once())
        await asyncio.shield(self._close_task)

    async def _close_once(self) -> None:
        self._closing = True
        ws = self._ws
        if ws is None:
            self._state = _CLOSED
            return
        if self._state != _CLOSED:
            self._state = _CLOSING
            try:
                await asyncio.wait_for(ws.close(code=WS_CLOSE_NORMAL_CODE), timeout=self._session.close_timeout_s)
            except (TimeoutError, OSError, WebSocketException):
                logger.debug("graceful close did not complete", exc_info=True)

        recv_task = self._recv_task
        if recv_task is not None and recv_task is not asyncio.current_task():
            recv_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await recv_task
        self._state = _CLOSED

    async def _recv_loop(self, ws: Any) -> None:
        try:
            async for raw in ws:
                self.touch()
                try:
                    message = decode_server_message(raw)
                except ValueError:
                    logger.debug("dropping undecodable frame", exc_info=True)
                    continue

                if message.setup_complete:
                    self._mark_open()
                    continue
                self._listener.on_message(message)
        except ConnectionClosed:
            pass
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.exception("realtime receive loop failed")
            self._fail(ConnectionLost(reason=f"receive loop failed: {exc!r}"))
            return
        self._finish(ws.close_code, ws.close_reason or "")

    def _mark_open(self) -> None:
        if self._opened is None or self._opened.done():
            return
        self._state = _OPEN
        self._opened.set_result(None)
        self._listener.on_opened()

    def _finish(self, code: int | None, reason: str) -> None:
        already_closed = self._state == _CLOSED
        self._state = _CLOSED
        self.close_code = code if code is not None else WS_CLOSE_ABNORMAL_CODE
        self.close_reason = reason

        if self._opened is not None and not self._opened.done():
            self._opened.set_exception(classify_close(self.close_code, reason))
            return
        if self._closing or already_closed:
            return
        logger.info("realtime connection closed by server code=%s reason=%s", self.close_code, reason)
        self._listener.on_closed(self.close_code, reason)

    def _fail(self, error: AuthRejected | ConnectionLost) -> None:
        self._state = _CLOSED
        if self._opened is not None and not self._opened.done():
            self._opened.set_exception(error)
            return
        if not self._closing:
            self._listener.on_error(error)


__all__ = ["RealtimeConnection"]
