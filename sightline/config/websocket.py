"""WebSocket protocol constants for the realtime endpoint."""

from __future__ import annotations

# Outbound message keys
WS_KEY_SETUP = "setup"
WS_KEY_REALTIME_INPUT = "realtimeInput"

# Inbound message keys
WS_KEY_SETUP_COMPLETE = "setupComplete"
WS_KEY_RESUMPTION_UPDATE = "sessionResumptionUpdate"
WS_KEY_GO_AWAY = "goAway"
WS_KEY_SERVER_CONTENT = "serverContent"

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_ABNORMAL_CODE = 1006
WS_CLOSE_POLICY_VIOLATION_CODE = 1008
WS_CLOSE_UNAUTHORIZED_CODE = 4001
WS_CLOSE_FORBIDDEN_CODE = 4003

WS_AUTH_CLOSE_CODES = frozenset({
    WS_CLOSE_POLICY_VIOLATION_CODE,
    WS_CLOSE_UNAUTHORIZED_CODE,
    WS_CLOSE_FORBIDDEN_CODE,
})
WS_AUTH_HTTP_STATUSES = frozenset({401, 403})

# Close reasons mentioning these are auth failures even under a generic code.
WS_AUTH_REASON_MARKERS = ("unauthorized", "unauthenticated", "api key", "permission denied")

WS_PING_INTERVAL_S: float = 20.0
WS_PING_TIMEOUT_S: float = 20.0
WS_MAX_MESSAGE_BYTES: int = 16 * 1024 * 1024

__all__ = [
    "WS_AUTH_CLOSE_CODES",
    "WS_AUTH_HTTP_STATUSES",
    "WS_AUTH_REASON_MARKERS",
    "WS_CLOSE_ABNORMAL_CODE",
    "WS_CLOSE_FORBIDDEN_CODE",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_POLICY_VIOLATION_CODE",
    "WS_CLOSE_UNAUTHORIZED_CODE",
    "WS_KEY_GO_AWAY",
    "WS_KEY_REALTIME_INPUT",
    "WS_KEY_RESUMPTION_UPDATE",
    "WS_KEY_SERVER_CONTENT",
    "WS_KEY_SETUP",
    "WS_KEY_SETUP_COMPLETE",
    "WS_MAX_MESSAGE_BYTES",
    "WS_PING_INTERVAL_S",
    "WS_PING_TIMEOUT_S",
]
