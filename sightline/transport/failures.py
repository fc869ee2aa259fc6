"""Map transport-level close/handshake outcomes onto the session error taxonomy."""

from __future__ import annotations

from sightline.errors import AuthRejected, ConnectionLost
from sightline.config.websocket import (
    WS_AUTH_CLOSE_CODES,
    WS_AUTH_HTTP_STATUSES,
    WS_AUTH_REASON_MARKERS,
)


def is_auth_failure(code: int | None, reason: str = "") -> bool:
    if code in WS_AUTH_CLOSE_CODES:
        return True
    lowered = (reason or "").lower()
    return any(marker in lowered for marker in WS_AUTH_REASON_MARKERS)


def classify_close(code: int | None, reason: str = "") -> AuthRejected | ConnectionLost:
    if is_auth_failure(code, reason):
        return AuthRejected(reason=reason or "closed by server", code=code)
    return ConnectionLost(reason=reason or "closed by server", code=code)


def classify_handshake_status(status: int, reason: str = "") -> AuthRejected | ConnectionLost:
    if status in WS_AUTH_HTTP_STATUSES:
        return AuthRejected(reason=reason or f"handshake rejected with HTTP {status}", code=status)
    return ConnectionLost(reason=reason or f"handshake failed with HTTP {status}", code=status)


__all__ = ["classify_close", "classify_handshake_status", "is_auth_failure"]
