"""WebSocket dialing for the realtime endpoint."""

from __future__ import annotations

import socket as _sock
from typing import Any
from contextlib import suppress
from collections.abc import Callable, Awaitable
from urllib.parse import urlparse, parse_qsl, urlencode, urlunparse

import websockets

from sightline.config.websocket import WS_PING_TIMEOUT_S, WS_PING_INTERVAL_S, WS_MAX_MESSAGE_BYTES

Dialer = Callable[[str], Awaitable[Any]]


def append_token_query(url: str, token: str, param: str) -> str:
    """Set (or replace) the credential query parameter on the endpoint URL."""
    parsed = urlparse(url)
    query_params = dict(parse_qsl(parsed.query, keep_blank_values=True))
    query_params[param] = token
    new_query = urlencode(query_params)
    return urlunparse((parsed.scheme, parsed.netloc, parsed.path, parsed.params, new_query, parsed.fragment))


def get_ws_options() -> dict[str, Any]:
    return {
        "ping_interval": WS_PING_INTERVAL_S,
        "ping_timeout": WS_PING_TIMEOUT_S,
        "max_size": WS_MAX_MESSAGE_BYTES,
    }


def enable_tcp_nodelay(ws: Any) -> None:
    """Best-effort enable TCP_NODELAY on a websockets connection transport."""
    transport = getattr(ws, "transport", None)
    if transport is not None:
        sock = transport.get_extra_info("socket")
        if sock is not None:
            with suppress(OSError):
                sock.setsockopt(_sock.IPPROTO_TCP, _sock.TCP_NODELAY, 1)


async def dial_websocket(url: str) -> Any:
    ws = await websockets.connect(url, **get_ws_options())
    enable_tcp_nodelay(ws)
    return ws


__all__ = ["Dialer", "append_token_query", "dial_websocket", "enable_tcp_nodelay", "get_ws_options"]
