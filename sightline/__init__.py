"""Realtime audio/video session client."""

from sightline.errors import (
    SendFailed,
    AuthRejected,
    ConnectionLost,
    ConfigurationError,
    ReconnectExhausted,
    CredentialUnavailable,
)
from sightline.state import SendResult, SessionState, MultimodalInput

__all__ = [
    "AuthRejected",
    "ConfigurationError",
    "ConnectionLost",
    "CredentialUnavailable",
    "MultimodalInput",
    "ReconnectExhausted",
    "SendFailed",
    "SendResult",
    "SessionState",
]
